# tests/test_seed.py
from study_tracker.models import TopicRecord
from study_tracker.seed import is_seeded, sample_records, seed_all
from study_tracker.store import MemoryRecordStore, SqliteRecordStore


def test_sample_records_are_unique_topics():
    records = sample_records()
    assert len(records) == 4
    assert len({r.identity_key for r in records}) == 4


def test_seed_all_populates_empty_store(tmp_db):
    store = SqliteRecordStore(tmp_db)
    assert not is_seeded(store)
    seed_all(store)
    assert is_seeded(store)
    assert [r.id for r in store.load()] == ["s1", "s2", "s3", "s4"]


def test_seed_all_is_idempotent():
    store = MemoryRecordStore([TopicRecord(id="mine", topic="Renal")])
    seed_all(store)
    assert [r.id for r in store.load()] == ["mine"]
    assert store.writes == 0


def test_empty_list_counts_as_seeded():
    store = MemoryRecordStore([])
    seed_all(store)
    assert store.load() == []
