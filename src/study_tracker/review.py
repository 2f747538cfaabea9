"""Review queue and aggregate queries over a set of topic records.

Every query classifies the records it is given at call time. Nothing is
cached between calls.
"""
from study_tracker.confidence import CONFIDENCE_SCALE, is_valid_confidence
from study_tracker.scores import mean
from study_tracker.urgency import (
    CRITICAL, OVERDUE, URGENCY_LEVELS, URGENCY_ORDER, classify,
)

REVIEW_NOW = (CRITICAL, OVERDUE)
SORT_OPTIONS = ("block", "urgency", "confidence", "score")


def classify_record(record, now=None) -> str:
    return classify(record.confidence, record.last_studied, now)


def needs_review(records, now=None) -> list:
    """Records that are critical or overdue, critical first, otherwise in input order."""
    flagged = [(classify_record(r, now), r) for r in records]
    flagged = [(u, r) for u, r in flagged if u in REVIEW_NOW]
    return [r for u, r in sorted(flagged, key=lambda item: URGENCY_ORDER[item[0]])]


def counts_by_urgency(records, now=None) -> dict:
    counts = {u: 0 for u in URGENCY_LEVELS}
    for r in records:
        counts[classify_record(r, now)] += 1
    return counts


def rollup_by_subject(records) -> list[dict]:
    """Per-subject score and confidence means, weakest subject first.

    Subjects without any scores sort last.
    """
    groups: dict[str, dict] = {}
    for r in records:
        group = groups.setdefault(r.subject, {"scores": [], "confidence": [], "count": 0})
        group["scores"].extend(r.scores)
        group["count"] += 1
        if is_valid_confidence(r.confidence):
            group["confidence"].append(r.confidence)
    results = [
        {
            "subject": subject,
            "count": g["count"],
            "mean_score": mean(g["scores"]),
            "mean_confidence": mean(g["confidence"]),
            "scores": g["scores"],
        }
        for subject, g in groups.items()
    ]
    return sorted(results, key=lambda s: (s["mean_score"] is None, s["mean_score"] or 0))


def breakdown_by_confidence(records) -> list[dict]:
    """Record count and mean score for each confidence level."""
    buckets = {c.level: {"count": 0, "scores": []} for c in CONFIDENCE_SCALE}
    for r in records:
        if r.confidence in buckets:
            buckets[r.confidence]["count"] += 1
            buckets[r.confidence]["scores"].extend(r.scores)
    return [
        {
            "level": c.level,
            "label": c.label,
            "count": buckets[c.level]["count"],
            "mean_score": mean(buckets[c.level]["scores"]),
        }
        for c in CONFIDENCE_SCALE
    ]


def filter_records(records, block=None, urgency=None, search=None, now=None) -> list:
    """Filter by block, urgency class and a case-insensitive subject/topic search."""
    query = search.lower() if search else None
    results = []
    for r in records:
        if block and r.block != block:
            continue
        if urgency and classify_record(r, now) != urgency:
            continue
        if query and query not in r.subject.lower() and query not in r.topic.lower():
            continue
        results.append(r)
    return results


def sort_records(records, by: str = "block", now=None) -> list:
    """Stable sort for display. "block" keeps input order for grouping."""
    if by == "urgency":
        return sorted(records, key=lambda r: URGENCY_ORDER[classify_record(r, now)])
    if by == "confidence":
        return sorted(records, key=lambda r: r.confidence or 99)
    if by == "score":
        return sorted(records, key=lambda r: _score_key(r.scores))
    if by == "block":
        return list(records)
    raise ValueError(f"Unknown sort option: {by}")


def _score_key(scores) -> int:
    avg = mean(scores)
    return 101 if avg is None else avg


def group_by_block(records) -> dict[str, dict[str, list]]:
    """Nest records as block -> subject -> records, preserving order."""
    grouped: dict[str, dict[str, list]] = {}
    for r in records:
        grouped.setdefault(r.block, {}).setdefault(r.subject, []).append(r)
    return grouped
