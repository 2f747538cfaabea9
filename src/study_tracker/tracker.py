"""Record edits: add, patch, delete, steps, scores and practice sessions.

Each function takes the current record list and returns a new list with the
edit applied. Validation happens here, before values reach the engine.
"""
import logging
from dataclasses import replace

from study_tracker.confidence import is_valid_confidence
from study_tracker.dates import today_str
from study_tracker.errors import InvalidConfidenceError, RecordNotFoundError
from study_tracker.models import STEP_FLAGS, TopicRecord
from study_tracker.scores import round_half_up, validate_score

logger = logging.getLogger(__name__)


def find_record(records, record_id: str) -> TopicRecord:
    for r in records:
        if r.id == record_id:
            return r
    raise RecordNotFoundError(record_id)


def _validate_patch(patch: dict) -> dict:
    if "id" in patch:
        raise ValueError("Record id cannot be changed")
    unknown = set(patch) - set(TopicRecord.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown record fields: {', '.join(sorted(unknown))}")
    if patch.get("confidence") is not None and not is_valid_confidence(patch["confidence"]):
        raise InvalidConfidenceError(patch["confidence"])
    if "scores" in patch:
        patch["scores"] = [validate_score(s) for s in patch["scores"]]
    return patch


def add_record(records, record: TopicRecord) -> list:
    patch = _validate_patch({"confidence": record.confidence, "scores": record.scores})
    record = replace(record, scores=patch["scores"])
    logger.info("Added record %s (%s)", record.id, record.topic)
    return [*records, record]


def update_record(records, record_id: str, **patch) -> list:
    """Replace fields of one record."""
    patch = _validate_patch(patch)
    find_record(records, record_id)
    return [replace(r, **patch) if r.id == record_id else r for r in records]


def delete_record(records, record_id: str) -> list:
    find_record(records, record_id)
    logger.info("Deleted record %s", record_id)
    return [r for r in records if r.id != record_id]


def set_step(records, record_id: str, step: str, value: bool, today=None) -> list:
    """Set a study step flag. Checking a step also marks the topic studied today."""
    if step not in STEP_FLAGS:
        raise ValueError(f"Unknown step: {step}")
    patch = {step: bool(value)}
    if value:
        patch["last_studied"] = today_str(today)
    return update_record(records, record_id, **patch)


def toggle_step(records, record_id: str, step: str, today=None) -> list:
    current = getattr(find_record(records, record_id), step, None)
    return set_step(records, record_id, step, not current, today)


def set_confidence(records, record_id: str, level) -> list:
    return update_record(records, record_id, confidence=level)


def add_score(records, record_id: str, score, today=None) -> list:
    """Append a validated score and mark the topic studied today."""
    score = validate_score(score)
    record = find_record(records, record_id)
    return update_record(
        records, record_id, scores=[*record.scores, score], last_studied=today_str(today),
    )


def clear_scores(records, record_id: str) -> list:
    return update_record(records, record_id, scores=[])


def mark_studied(records, record_id: str, today=None) -> list:
    return update_record(records, record_id, last_studied=today_str(today))


def log_practice_session(
    records, block: str, subject: str, topic: str, correct: int, total: int, today=None,
) -> list:
    """Fold a finished practice quiz into the matching record, creating one if needed."""
    percent = round_half_up(correct / total * 100) if total > 0 else 0
    percent = validate_score(percent)
    day = today_str(today)
    for r in records:
        if r.block == block and r.subject == subject and r.topic == topic:
            logger.info("Logged practice session for %s: %d%%", topic, percent)
            return update_record(
                records, r.id,
                last_studied=day,
                scores=[*r.scores, percent],
                reps=(r.reps or 0) + 1,
                lecture=True,
            )
    new = TopicRecord(
        block=block,
        subject=subject or "Unknown",
        topic=topic or "Practice Session",
        last_studied=day,
        lecture=True,
        scores=[percent],
        reps=1,
    )
    return add_record(records, new)
