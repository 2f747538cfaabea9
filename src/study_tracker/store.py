"""Load/save boundary for the record list, with debounced writes.

The whole record list is stored as one JSON document under a single key.
"""
import json
import logging
import threading

from study_tracker import config
from study_tracker.db import get_value, init_db, set_value
from study_tracker.merge import merge_records
from study_tracker.models import TopicRecord

logger = logging.getLogger(__name__)


def dump_records(records) -> str:
    return json.dumps([r.to_dict() for r in records])


def parse_records(document: str | None) -> list[TopicRecord] | None:
    """Decode a stored document. Returns None when there is nothing usable."""
    if not document:
        return None
    try:
        data = json.loads(document)
    except json.JSONDecodeError:
        logger.warning("Stored record document is not valid JSON; ignoring it")
        return None
    if not isinstance(data, list):
        logger.warning("Stored record document is not a list; ignoring it")
        return None
    return [TopicRecord.from_dict(item) for item in data if isinstance(item, dict)]


class RecordStore:
    """Port for whatever holds the persisted record list."""

    def load(self) -> list[TopicRecord] | None:
        raise NotImplementedError

    def save(self, records) -> None:
        raise NotImplementedError


class MemoryRecordStore(RecordStore):
    def __init__(self, records=None):
        self.document = dump_records(records) if records is not None else None
        self.writes = 0

    def load(self):
        return parse_records(self.document)

    def save(self, records):
        self.document = dump_records(records)
        self.writes += 1


class SqliteRecordStore(RecordStore):
    def __init__(self, db_path: str = config.DEFAULT_DB_PATH, key: str = config.STORAGE_KEY):
        self.db_path = db_path
        self.key = key
        init_db(db_path)

    def load(self):
        return parse_records(get_value(self.db_path, self.key))

    def save(self, records):
        records = list(records)
        set_value(self.db_path, self.key, dump_records(records))
        logger.debug("Saved %d records to %s", len(records), self.db_path)


def load_working_set(store: RecordStore, default=None) -> list[TopicRecord]:
    """Load persisted records and deduplicate them once.

    Falls back to ``default`` (or an empty list) when the store holds nothing.
    """
    records = store.load()
    if records is None:
        return list(default or [])
    return merge_records(records)


class DebouncedSaver:
    """Coalesce rapid saves into one write after a quiet period.

    Each ``schedule`` call replaces the pending state and restarts the timer,
    so only the latest state is written.
    """

    def __init__(self, store: RecordStore, delay: float = config.SAVE_DELAY):
        self.store = store
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, records) -> None:
        with self._lock:
            self._pending = list(records)
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self.flush)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> None:
        """Write the pending state now, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            if self._pending is not None:
                self.store.save(self._pending)
                self._pending = None

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None
