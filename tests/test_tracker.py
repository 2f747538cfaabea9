# tests/test_tracker.py
import pytest

from study_tracker.errors import InvalidConfidenceError, InvalidScoreError, RecordNotFoundError
from study_tracker.models import TopicRecord
from study_tracker.tracker import (
    add_record, add_score, clear_scores, delete_record, find_record, log_practice_session,
    mark_studied, set_confidence, set_step, toggle_step, update_record,
)


@pytest.fixture
def records():
    return [
        TopicRecord(id="r1", block="FTM 2", subject="Physiology", topic="Cardiac Cycle",
                    last_studied="2025-02-10", scores=[72]),
        TopicRecord(id="r2", block="MSK", subject="Anatomy", topic="Upper Limb"),
    ]


def test_add_record_returns_new_list(records):
    new = TopicRecord(id="r3", topic="Renal")
    updated = add_record(records, new)
    assert len(updated) == 3
    assert len(records) == 2


def test_add_record_rejects_invalid_confidence(records):
    with pytest.raises(InvalidConfidenceError):
        add_record(records, TopicRecord(topic="Renal", confidence=7))


def test_add_record_stores_converted_scores():
    updated = add_record([], TopicRecord(topic="Renal", scores=["80", "90%"]))
    assert updated[0].scores == [80, 90]


def test_add_record_rejects_invalid_scores():
    with pytest.raises(InvalidScoreError):
        add_record([], TopicRecord(topic="Renal", scores=[120]))


def test_update_record(records):
    updated = update_record(records, "r2", notes="brachial plexus")
    assert find_record(updated, "r2").notes == "brachial plexus"
    assert find_record(records, "r2").notes == ""


def test_update_record_rejects_id_and_unknown_fields(records):
    with pytest.raises(ValueError):
        update_record(records, "r1", id="other")
    with pytest.raises(ValueError):
        update_record(records, "r1", colour="red")


def test_unknown_record(records):
    with pytest.raises(RecordNotFoundError):
        update_record(records, "missing", notes="x")
    with pytest.raises(RecordNotFoundError):
        delete_record(records, "missing")


def test_delete_record(records):
    assert [r.id for r in delete_record(records, "r1")] == ["r2"]


def test_checking_step_marks_studied(records, today):
    updated = set_step(records, "r2", "pre_read", True, today)
    r = find_record(updated, "r2")
    assert r.pre_read is True
    assert r.last_studied == "2025-03-01"


def test_unchecking_step_keeps_last_studied(records, today):
    updated = set_step(records, "r1", "lecture", False, today)
    assert find_record(updated, "r1").last_studied == "2025-02-10"


def test_toggle_step(records, today):
    updated = toggle_step(records, "r1", "anki", today)
    assert find_record(updated, "r1").anki is True
    updated = toggle_step(updated, "r1", "anki", today)
    assert find_record(updated, "r1").anki is False


def test_unknown_step(records):
    with pytest.raises(ValueError):
        set_step(records, "r1", "nap", True)


def test_set_confidence(records):
    updated = set_confidence(records, "r1", 5)
    assert find_record(updated, "r1").confidence == 5
    cleared = set_confidence(updated, "r1", None)
    assert find_record(cleared, "r1").confidence is None


@pytest.mark.parametrize("bad", [0, 7, 2.5, True])
def test_set_confidence_rejects_invalid(records, bad):
    with pytest.raises(InvalidConfidenceError):
        set_confidence(records, "r1", bad)


def test_add_score_appends_and_marks_studied(records, today):
    updated = add_score(records, "r1", "85", today)
    r = find_record(updated, "r1")
    assert r.scores == [72, 85]
    assert r.last_studied == "2025-03-01"


def test_add_score_rejects_invalid(records):
    with pytest.raises(InvalidScoreError):
        add_score(records, "r1", 120)
    with pytest.raises(InvalidScoreError):
        update_record(records, "r1", scores=[50, -5])


def test_clear_scores(records):
    assert find_record(clear_scores(records, "r1"), "r1").scores == []


def test_mark_studied(records, today):
    assert find_record(mark_studied(records, "r2", today), "r2").last_studied == "2025-03-01"


def test_log_practice_session_updates_matching_record(records, today):
    updated = log_practice_session(records, "FTM 2", "Physiology", "Cardiac Cycle", 7, 8, today)
    assert len(updated) == 2
    r = find_record(updated, "r1")
    assert r.scores == [72, 88]  # 87.5 rounds up
    assert r.reps == 1
    assert r.lecture is True
    assert r.last_studied == "2025-03-01"


def test_log_practice_session_creates_record(records, today):
    updated = log_practice_session(records, "CPR 1", "", "", 0, 0, today)
    assert len(updated) == 3
    r = updated[-1]
    assert r.subject == "Unknown"
    assert r.topic == "Practice Session"
    assert r.scores == [0]
    assert r.reps == 1
