"""Sample records for a first run."""
from study_tracker.models import TopicRecord
from study_tracker.store import RecordStore


def sample_records() -> list[TopicRecord]:
    return [
        TopicRecord(id="s1", block="FTM 2", subject="Physiology", topic="Cardiac Cycle",
                    lecture_date="2025-02-03", last_studied="2025-02-10",
                    pre_read=True, lecture=True, confidence=3),
        TopicRecord(id="s2", block="FTM 2", subject="Physiology", topic="Renal Filtration",
                    lecture_date="2025-02-05", last_studied="2025-02-08",
                    lecture=True, confidence=2),
        TopicRecord(id="s3", block="FTM 2", subject="Pharmacology", topic="Autonomic Pharmacology",
                    lecture_date="2025-02-07", last_studied="2025-02-12",
                    lecture=True, post_review=True, confidence=4),
        TopicRecord(id="s4", block="MSK", subject="Anatomy", topic="Upper Limb",
                    lecture_date="2025-02-10", last_studied="2025-02-20",
                    pre_read=True, lecture=True, post_review=True, confidence=5),
    ]


def is_seeded(store: RecordStore) -> bool:
    return store.load() is not None


def seed_all(store: RecordStore) -> None:
    """Save the sample records if the store is empty."""
    if is_seeded(store):
        return
    store.save(sample_records())
