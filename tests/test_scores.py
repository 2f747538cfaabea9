# tests/test_scores.py
import pytest

from study_tracker.errors import InvalidScoreError
from study_tracker.scores import best, mean, score_band, trend, validate_score


def test_mean_empty_is_none():
    assert mean([]) is None


def test_mean_rounds():
    assert mean([80, 60, 70]) == 70
    assert mean([70, 71]) == 71  # 70.5 rounds up
    assert mean([33, 33, 34]) == 33


def test_best():
    assert best([]) is None
    assert best([55, 90, 72]) == 90


def test_trend():
    assert trend([]) is None
    assert trend([60]) is None
    assert trend([60, 50, 85]) == 25
    assert trend([90, 70]) == -20


def test_score_band():
    assert score_band(None) is None
    assert score_band(80) == "strong"
    assert score_band(79) == "middling"
    assert score_band(65) == "middling"
    assert score_band(60) == "middling"
    assert score_band(59) == "weak"


def test_validate_score_accepts_numbers_and_strings():
    assert validate_score(0) == 0
    assert validate_score(100) == 100
    assert validate_score(72.5) == 72.5
    assert validate_score("85") == 85
    assert validate_score(" 90% ") == 90


@pytest.mark.parametrize("bad", [-1, 101, "abc", None, True, float("nan"), [50]])
def test_validate_score_rejects(bad):
    with pytest.raises(InvalidScoreError):
        validate_score(bad)
