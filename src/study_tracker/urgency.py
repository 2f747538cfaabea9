"""Review urgency classification.

Urgency is derived from how far the time since a topic was last studied has
drifted past the review interval of its confidence level.
"""
from study_tracker.confidence import get_confidence
from study_tracker.dates import parse_date, resolve_today

NONE = "none"
OK = "ok"
SOON = "soon"
OVERDUE = "overdue"
CRITICAL = "critical"

URGENCY_LEVELS = (CRITICAL, OVERDUE, SOON, OK, NONE)
URGENCY_ORDER = {u: i for i, u in enumerate(URGENCY_LEVELS)}

URGENCY_LABELS = {
    CRITICAL: "REVIEW NOW",
    OVERDUE: "OVERDUE",
    SOON: "SOON",
    OK: "OK",
    NONE: "",
}

URGENCY_COLORS = {
    CRITICAL: "bold red",
    OVERDUE: "dark_orange",
    SOON: "yellow",
    OK: "green",
    NONE: "dim",
}

# (minimum ratio of elapsed days to review interval, urgency), first match wins
THRESHOLDS = (
    (2.0, CRITICAL),
    (1.2, OVERDUE),
    (0.8, SOON),
)


def days_since(last_studied, now=None) -> int | None:
    """Whole days from last_studied to now, never negative. None if never studied."""
    studied = parse_date(last_studied)
    if studied is None:
        return None
    return max(0, (resolve_today(now) - studied).days)


def classify(confidence, last_studied, now=None) -> str:
    """Classify how urgently a topic needs review.

    Args:
        confidence: Confidence level 1-6, or None when unrated.
        last_studied: ISO date string, date, or None when never studied.
        now: Reference date; defaults to today.

    Returns:
        One of "none", "ok", "soon", "overdue", "critical".
    """
    if not confidence:
        return NONE
    level = get_confidence(confidence)
    days = days_since(last_studied, now)
    if days is None:
        # Weak topics that were never reviewed are flagged straight away
        return CRITICAL if level.level <= 2 else NONE
    ratio = days / level.review_interval_days
    for minimum, urgency in THRESHOLDS:
        if ratio >= minimum:
            return urgency
    return OK
