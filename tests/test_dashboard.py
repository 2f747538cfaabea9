# tests/test_dashboard.py
from study_tracker.dashboard import (
    get_score_color, get_score_label, get_tracker_stats, most_improved, most_practiced_subject,
    needing_attention,
)
from study_tracker.models import TopicRecord


def test_score_label_and_color():
    assert get_score_label(85) == "Strong"
    assert get_score_label(72) == "Moderate"
    assert get_score_label(61) == "Moderate"
    assert get_score_label(40) == "Weak"
    assert get_score_label(None) == "Untested"
    assert get_score_color(85) == "green"
    assert get_score_color(40) == "red"


def test_stats_with_no_records(today):
    stats = get_tracker_stats([], today)
    assert stats["topics_tracked"] == 0
    assert stats["overall_score"] is None
    assert stats["needs_review"] == 0
    assert stats["most_practiced_subject"] is None


def test_stats_with_records(today):
    records = [
        TopicRecord(subject="Physiology", scores=[80, 60], reps=2, confidence=1),
        TopicRecord(subject="Anatomy", scores=[70], reps=5,
                    pre_read=True, lecture=True, post_review=True, anki=True,
                    confidence=6, last_studied=today.isoformat()),
        TopicRecord(subject="Physiology", reps=1),
    ]
    stats = get_tracker_stats(records, today)
    assert stats["topics_tracked"] == 3
    assert stats["overall_score"] == 70
    assert stats["needs_review"] == 1
    assert stats["critical"] == 1
    assert stats["overdue"] == 0
    assert stats["fully_complete"] == 1
    assert stats["total_sessions"] == 8
    assert stats["most_practiced_subject"] == "Anatomy"


def test_most_practiced_subject_blank_is_unknown():
    assert most_practiced_subject([TopicRecord(subject="", reps=2)]) == "Unknown"


def test_most_improved():
    records = [
        TopicRecord(id="flat", scores=[70, 70]),
        TopicRecord(id="up", scores=[50, 60, 85]),
        TopicRecord(id="single", scores=[99]),
    ]
    result = most_improved(records)
    assert result["record"].id == "up"
    assert result["diff"] == 35


def test_most_improved_needs_two_scores():
    assert most_improved([TopicRecord(scores=[40])]) is None


def test_most_improved_ignores_flat_and_falling_scores():
    records = [TopicRecord(scores=[70, 70]), TopicRecord(scores=[90, 60])]
    assert most_improved(records) is None


def test_needing_attention():
    records = [
        TopicRecord(id="struggling", scores=[80, 60, 55]),
        TopicRecord(id="recovered", scores=[50, 60, 70]),
        TopicRecord(id="one-bad", scores=[50]),
    ]
    assert [r.id for r in needing_attention(records)] == ["struggling"]
