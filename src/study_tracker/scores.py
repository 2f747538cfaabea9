"""Quiz and exam score aggregation."""
import math

from study_tracker.errors import InvalidScoreError

MIN_SCORE = 0
MAX_SCORE = 100

STRONG = "strong"
MIDDLING = "middling"
WEAK = "weak"

SCORE_LABELS = {STRONG: "Strong", MIDDLING: "Moderate", WEAK: "Weak", None: "Untested"}
SCORE_COLORS = {STRONG: "green", MIDDLING: "yellow", WEAK: "red", None: "dim"}


def validate_score(value) -> int | float:
    """Return value as a number in [0, 100] or raise InvalidScoreError."""
    if isinstance(value, bool) or value is None:
        raise InvalidScoreError(value)
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            raise InvalidScoreError(value) from None
    if not isinstance(value, (int, float)) or math.isnan(value):
        raise InvalidScoreError(value)
    if not MIN_SCORE <= value <= MAX_SCORE:
        raise InvalidScoreError(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def mean(scores) -> int | None:
    """Mean rounded to the nearest integer, or None for no scores."""
    scores = list(scores)
    if not scores:
        return None
    return round_half_up(sum(scores) / len(scores))


def best(scores) -> int | float | None:
    scores = list(scores)
    if not scores:
        return None
    return max(scores)


def trend(scores) -> int | float | None:
    """Last score minus first score; None with fewer than two scores."""
    scores = list(scores)
    if len(scores) < 2:
        return None
    return scores[-1] - scores[0]


def score_band(score) -> str | None:
    if score is None:
        return None
    if score >= 80:
        return STRONG
    elif score >= 70:
        return MIDDLING
    elif score >= 60:
        return MIDDLING
    return WEAK
