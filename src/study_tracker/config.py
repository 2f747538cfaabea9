"""Environment-aware settings for the tracker.

All settings can be overridden with environment variables.
"""
import os
from pathlib import Path

DEFAULT_DB_PATH = os.environ.get(
    "STUDY_TRACKER_DB", str(Path.home() / ".study_tracker" / "tracker.db")
)

# The whole record list lives under this one key as a JSON document
STORAGE_KEY = os.environ.get("STUDY_TRACKER_STORAGE_KEY", "tracker-records-v2")

# Seconds of quiet before pending edits are written back
SAVE_DELAY = float(os.environ.get("STUDY_TRACKER_SAVE_DELAY", "0.5"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "text")  # "json" or "text"
