"""Import topic records from JSON, YAML or CSV exports."""
import csv
import json
import logging
from pathlib import Path

import yaml

from study_tracker.merge import merge_records
from study_tracker.models import STEP_FLAGS, TopicRecord

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "y", "x"}


def _rows_from_csv(text: str) -> list[dict]:
    rows = []
    for row in csv.DictReader(text.splitlines()):
        row = {k.strip(): (v or "").strip() for k, v in row.items() if k}
        if "scores" in row:
            row["scores"] = [s for s in row["scores"].replace(";", ",").split(",") if s.strip()]
        for step in STEP_FLAGS + ("preRead", "postReview"):
            if step in row:
                row[step] = row[step].lower() in TRUE_VALUES
        rows.append(row)
    return rows


def read_record_rows(file_path: str) -> list[dict]:
    path = Path(file_path)
    suffix = path.suffix.lower()
    text = path.read_text()

    if suffix == ".json":
        data = json.loads(text)
    elif suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path.name}: {e}") from e
    elif suffix == ".csv":
        return _rows_from_csv(text)
    else:
        raise ValueError(f"Unsupported file type: {suffix or path.name}")

    # Accept either a bare list or {"records": [...]}
    if isinstance(data, dict):
        data = data.get("records", [])
    if not isinstance(data, list):
        raise ValueError(f"{path.name} does not contain a list of records")
    return [row for row in data if isinstance(row, dict)]


def load_records_file(file_path: str) -> list[TopicRecord]:
    return [TopicRecord.from_dict(row) for row in read_record_rows(file_path)]


def import_file(records, file_path: str) -> dict:
    """Append records from a file after the existing ones and re-merge.

    Imported records come later in order, so they win conflicts.
    """
    imported = load_records_file(file_path)
    merged = merge_records([*records, *imported])
    added = len(merged) - len(records)
    logger.info("Imported %d records from %s (%d new)", len(imported), file_path, added)
    return {
        "filename": Path(file_path).name,
        "imported": len(imported),
        "added": added,
        "records": merged,
    }
