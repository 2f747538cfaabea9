"""Data classes for tracked study topics."""
import logging
import random
import string
import time
from dataclasses import dataclass, field, fields
from typing import Optional

from study_tracker.dates import parse_date
from study_tracker.errors import InvalidScoreError
from study_tracker.scores import validate_score

logger = logging.getLogger(__name__)

STEP_FLAGS = ("pre_read", "lecture", "post_review", "anki")
DATE_FIELDS = ("lecture_date", "last_studied", "anki_date")

STEP_LABELS = {
    "pre_read": "Pre-Read",
    "lecture": "Lecture",
    "post_review": "Post-Review",
    "anki": "Anki Cards",
}

# Keys used by older saved documents
LEGACY_KEYS = {
    "lectureId": "lecture_id",
    "lectureDate": "lecture_date",
    "lastStudied": "last_studied",
    "ankiDate": "anki_date",
    "preRead": "pre_read",
    "postReview": "post_review",
}

_ID_CHARS = string.ascii_lowercase + string.digits


def new_id() -> str:
    """Short unique id: base-36 millisecond timestamp plus a random suffix."""
    millis = int(time.time() * 1000)
    stamp = ""
    while millis:
        millis, digit = divmod(millis, 36)
        stamp = _ID_CHARS[digit] + stamp
    return stamp + "".join(random.choices(_ID_CHARS, k=4))


@dataclass
class TopicRecord:
    id: str = field(default_factory=new_id)
    block: str = ""
    subject: str = ""
    topic: str = ""
    lecture_id: Optional[str] = None
    lecture_date: Optional[str] = None
    last_studied: Optional[str] = None
    anki_date: Optional[str] = None
    pre_read: bool = False
    lecture: bool = False
    post_review: bool = False
    anki: bool = False
    confidence: Optional[int] = None
    scores: list = field(default_factory=list)
    notes: str = ""
    reps: int = 0

    @property
    def identity_key(self) -> str:
        """Key that recognizes two records as the same real-world topic."""
        if self.lecture_id not in (None, ""):
            return f"lecture:{self.lecture_id}"
        title = (self.topic or "").strip().lower()
        if title:
            return f"topic:{title}"
        return f"id:{self.id}"

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, step) for step in STEP_FLAGS)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)} | {"scores": list(self.scores)}

    @classmethod
    def from_dict(cls, data: dict) -> "TopicRecord":
        """Rebuild a record from a stored document, tolerating missing and legacy keys."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            key = LEGACY_KEYS.get(key, key)
            if key in known:
                values[key] = value
        if not values.get("id"):
            values.pop("id", None)
        for key in DATE_FIELDS:
            values[key] = _as_iso_date(values.get(key))
        if values.get("lecture_id") in ("", None):
            values["lecture_id"] = None
        else:
            values["lecture_id"] = str(values["lecture_id"])
        for step in STEP_FLAGS:
            values[step] = bool(values.get(step, False))
        values["reps"] = _as_int(values.get("reps")) or 0
        values["scores"] = _clean_scores(values.get("scores") or [])
        values["confidence"] = _as_int(values.get("confidence")) or None
        for key in ("block", "subject", "topic", "notes"):
            value = values.get(key)
            values[key] = "" if value is None else str(value)
        return cls(**values)


def _as_iso_date(value) -> str | None:
    """Normalize a stored date to an ISO string; strings are kept as written."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    parsed = parse_date(value)
    return parsed.isoformat() if parsed else None


def _as_int(value) -> int | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer stored value %r", value)
        return None


def _clean_scores(raw) -> list:
    if not isinstance(raw, (list, tuple)):
        raw = [raw]
    scores = []
    for value in raw:
        if value is None or value == "":
            continue
        try:
            scores.append(validate_score(value))
        except InvalidScoreError:
            logger.warning("Dropping invalid stored score %r", value)
    return scores
