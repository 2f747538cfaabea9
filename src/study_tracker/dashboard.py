"""Tracker summary statistics and score display helpers."""
from study_tracker.review import counts_by_urgency, needs_review
from study_tracker.scores import SCORE_COLORS, SCORE_LABELS, mean, score_band, trend
from study_tracker.urgency import CRITICAL, OVERDUE

STRUGGLING_THRESHOLD = 65


def get_score_label(score) -> str:
    return SCORE_LABELS[score_band(score)]


def get_score_color(score) -> str:
    return SCORE_COLORS[score_band(score)]


def most_practiced_subject(records) -> str | None:
    reps_by_subject: dict[str, int] = {}
    for r in records:
        subject = r.subject or "Unknown"
        reps_by_subject[subject] = reps_by_subject.get(subject, 0) + (r.reps or 0)
    if not reps_by_subject:
        return None
    return max(reps_by_subject, key=reps_by_subject.get)


def most_improved(records) -> dict | None:
    """Record whose scores rose the most from first to last, or None if none rose."""
    candidates = [(trend(r.scores), r) for r in records if len(r.scores) >= 2]
    candidates = [c for c in candidates if c[0] > 0]
    if not candidates:
        return None
    diff, record = max(candidates, key=lambda c: c[0])
    return {"record": record, "diff": diff}


def needing_attention(records, threshold: float = STRUGGLING_THRESHOLD) -> list:
    """Records whose two most recent scores are both below threshold."""
    return [
        r for r in records
        if len(r.scores) >= 2 and r.scores[-1] < threshold and r.scores[-2] < threshold
    ]


def get_tracker_stats(records, now=None) -> dict:
    records = list(records)
    counts = counts_by_urgency(records, now)
    return {
        "topics_tracked": len(records),
        "overall_score": mean(s for r in records for s in r.scores),
        "needs_review": len(needs_review(records, now)),
        "critical": counts[CRITICAL],
        "overdue": counts[OVERDUE],
        "fully_complete": sum(1 for r in records if r.is_complete),
        "total_sessions": sum(r.reps or 0 for r in records),
        "most_practiced_subject": most_practiced_subject(records),
    }
