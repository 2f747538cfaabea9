"""Deduplicate topic records that describe the same real-world topic.

Records are folded in input order: the first record seen for an identity key
is the base, and every later record with the same key merges into it. Later
records win conflicts on confidence and dates, so input must run from oldest
to newest. Pass ``sort_key`` to impose that order explicitly.
"""
import logging
from dataclasses import replace

from study_tracker.models import STEP_FLAGS, TopicRecord

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("block", "subject", "notes")


def by_last_studied(record: TopicRecord) -> str:
    """Sort key ordering records oldest-studied first; never-studied records first of all."""
    return record.last_studied or ""


def _later_date(existing: str | None, incoming: str | None) -> str | None:
    if not existing:
        return incoming or None
    if not incoming:
        return existing
    return max(existing, incoming)


def merge_pair(existing: TopicRecord, incoming: TopicRecord) -> TopicRecord:
    """Fold incoming into existing, returning a new record that keeps existing's id and key."""
    patch = {
        "last_studied": _later_date(existing.last_studied, incoming.last_studied),
        "reps": (existing.reps or 0) + (incoming.reps or 0),
        "scores": [s for s in list(existing.scores) + list(incoming.scores) if s is not None and s != ""],
        "confidence": incoming.confidence if incoming.confidence else existing.confidence,
        "anki_date": incoming.anki_date or existing.anki_date,
        "lecture_date": incoming.lecture_date or existing.lecture_date,
    }
    for step in STEP_FLAGS:
        patch[step] = bool(getattr(existing, step) or getattr(incoming, step))
    for name in TEXT_FIELDS:
        patch[name] = getattr(existing, name) or getattr(incoming, name)
    return replace(existing, **patch)


def merge_records(records, sort_key=None) -> list[TopicRecord]:
    """Collapse records to one canonical record per identity key.

    Args:
        records: Records in chronological order (oldest first).
        sort_key: Optional key used to stably sort records before merging,
            e.g. ``by_last_studied``.

    Returns:
        New list with one record per identity key, in order of first appearance.
    """
    ordered = sorted(records, key=sort_key) if sort_key else list(records)
    canonical: dict[str, TopicRecord] = {}
    for record in ordered:
        key = record.identity_key
        if key not in canonical:
            canonical[key] = record
            continue
        logger.debug("Merging record %s into %s (key %s)", record.id, canonical[key].id, key)
        canonical[key] = merge_pair(canonical[key], record)
    merged = list(canonical.values())
    if len(merged) < len(ordered):
        logger.info("Merged %d records into %d", len(ordered), len(merged))
    return merged
