"""Exceptions raised at the record-editing boundary."""


class TrackerError(Exception):
    """Base class for tracker errors."""


class InvalidScoreError(TrackerError, ValueError):
    def __init__(self, value):
        super().__init__(f"Score must be a number between 0 and 100, got {value!r}")
        self.value = value


class InvalidConfidenceError(TrackerError, ValueError):
    def __init__(self, value):
        super().__init__(f"Confidence must be an integer from 1 to 6, got {value!r}")
        self.value = value


class RecordNotFoundError(TrackerError, KeyError):
    def __init__(self, record_id: str):
        super().__init__(record_id)
        self.record_id = record_id

    def __str__(self) -> str:
        return f"No record with id {self.record_id!r}"
