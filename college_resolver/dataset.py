"""Reference dataset loading."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from .models import NO_LOCATION_STATE, InstitutionRecord

logger = logging.getLogger(__name__)

# Non-dataset entries merged in before indexing. Bump the version when the
# list changes so index rebuilds can be traced in logs.
CUSTOM_ENTRIES_VERSION = "1"
CUSTOM_ENTRIES: tuple[InstitutionRecord, ...] = (
    InstitutionRecord(
        id=999998,
        name="Army National Guard",
        alias="",
        city="",
        state=NO_LOCATION_STATE,
    ),
    InstitutionRecord(
        id=999999,
        name="Marine Corps",
        alias="Marines | US Marine Corps | USMC",
        city="",
        state=NO_LOCATION_STATE,
    ),
)


class DatasetLoadError(RuntimeError):
    """Reference dataset is missing, unreadable or malformed."""


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise DatasetLoadError(f"Institution data not found: {path}") from e
    except json.JSONDecodeError as e:
        raise DatasetLoadError(f"Institution data is not valid JSON: {path}: {e}") from e
    except OSError as e:
        raise DatasetLoadError(f"Institution data could not be read: {path}: {e}") from e


def parse_records(rows: Any, source: str) -> list[InstitutionRecord]:
    """Validate raw JSON rows into institution records."""
    if not isinstance(rows, list) or not rows:
        raise DatasetLoadError(f"Institution data is empty or invalid: {source}")

    records = []
    for position, row in enumerate(rows):
        try:
            records.append(InstitutionRecord.model_validate(row))
        except ValidationError as e:
            raise DatasetLoadError(
                f"Invalid institution record at position {position} in {source}: {e}"
            ) from e
    return records


def load_institutions(path: Path) -> list[InstitutionRecord]:
    """Load the reference dataset (a JSON array of institution records)."""
    logger.info(f"Loading institution data from {path}")
    records = parse_records(_read_json(path), str(path))
    logger.info(f"Read {len(records)} institution records")
    return records


def load_custom_entries(path: Optional[Path] = None) -> list[InstitutionRecord]:
    """Load custom entries from a file, or fall back to the built-in list."""
    if path is None:
        logger.debug(f"Using built-in custom entries v{CUSTOM_ENTRIES_VERSION}")
        return list(CUSTOM_ENTRIES)

    records = parse_records(_read_json(path), str(path))
    logger.info(f"Loaded {len(records)} custom entries from {path}")
    return records
