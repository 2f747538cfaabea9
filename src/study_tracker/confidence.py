"""Confidence scale: self-rated mastery mapped to a review cadence."""
from dataclasses import dataclass


@dataclass(frozen=True)
class ConfidenceLevel:
    level: int
    label: str
    review_interval_days: int
    color: str


# Lower confidence means a shorter gap between reviews.
CONFIDENCE_SCALE = (
    ConfidenceLevel(1, "No Clue", 1, "red"),
    ConfidenceLevel(2, "Struggling", 2, "dark_orange"),
    ConfidenceLevel(3, "Shaky", 3, "yellow"),
    ConfidenceLevel(4, "Getting It", 5, "chartreuse3"),
    ConfidenceLevel(5, "Solid", 7, "green"),
    ConfidenceLevel(6, "Mastered", 14, "cyan"),
)

_BY_LEVEL = {c.level: c for c in CONFIDENCE_SCALE}


def is_valid_confidence(level) -> bool:
    return isinstance(level, int) and not isinstance(level, bool) and level in _BY_LEVEL


def get_confidence(level) -> ConfidenceLevel:
    """Look up a confidence entry; unknown levels fall back to the weakest one."""
    if not is_valid_confidence(level):
        return CONFIDENCE_SCALE[0]
    return _BY_LEVEL[level]


def review_interval_days(level) -> int:
    return get_confidence(level).review_interval_days
