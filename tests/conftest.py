from datetime import date

import pytest


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tracker.db")
    return db_path


@pytest.fixture
def today():
    """Fixed reference date so urgency results don't depend on the wall clock."""
    return date(2025, 3, 1)
