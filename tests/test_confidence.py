# tests/test_confidence.py
from study_tracker.confidence import (
    CONFIDENCE_SCALE, get_confidence, is_valid_confidence, review_interval_days,
)


def test_scale_intervals_match_table():
    assert [c.review_interval_days for c in CONFIDENCE_SCALE] == [1, 2, 3, 5, 7, 14]
    assert [c.level for c in CONFIDENCE_SCALE] == [1, 2, 3, 4, 5, 6]


def test_intervals_non_decreasing():
    intervals = [review_interval_days(level) for level in range(1, 7)]
    assert intervals == sorted(intervals)


def test_labels():
    assert get_confidence(1).label == "No Clue"
    assert get_confidence(6).label == "Mastered"


def test_unknown_level_falls_back_to_weakest():
    assert get_confidence(9) is CONFIDENCE_SCALE[0]
    assert get_confidence(None) is CONFIDENCE_SCALE[0]
    assert get_confidence("3") is CONFIDENCE_SCALE[0]
    assert review_interval_days(0) == 1


def test_is_valid_confidence():
    assert is_valid_confidence(4)
    assert not is_valid_confidence(7)
    assert not is_valid_confidence(0)
    assert not is_valid_confidence(True)
    assert not is_valid_confidence(2.0)
