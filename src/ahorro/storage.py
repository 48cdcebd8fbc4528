"""
Persistence of the savings calendar as a single key/value blob.

The whole year is stored as one JSON array of twelve entries, each holding
the raw text of the month's editable fields:

    [
      {"monthlyGoal": "400", "weeks": ["100", "", "50.5", ""],
       "goalLabel": "Vacaciones", "goalTarget": "1500", "goalTargetMonth": "junio"},
      ...
    ]

Stores only need get(key) -> text and set(key, text). Failures at the store
boundary are logged and never interrupt the caller.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from .records import (
    AnnualState,
    MONTHS_PER_YEAR,
    WEEK_FIELDS,
    get_field,
    set_field,
)

logger = logging.getLogger(__name__)

STORAGE_KEY = 'ahorro_calendar_v1'

# Wire key -> editable field name
WIRE_FIELDS = {
    'monthlyGoal': 'monthly_goal',
    'goalLabel': 'goal_label',
    'goalTarget': 'goal_target',
    'goalTargetMonth': 'goal_target_month',
}


class StorageError(Exception):
    """Error reading or writing the backing store."""


class MemoryStore:
    """Dict-backed store, used for tests and throwaway sessions."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Store backed by a JSON object file mapping keys to blobs."""

    def __init__(self, path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except ValueError as e:
            raise StorageError(f"Corrupt store file {self.path}: {e}")
        if not isinstance(data, dict):
            raise StorageError(f"Corrupt store file {self.path}: expected a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Entry '{key}' in {self.path} is not text")
        return value

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling file first so a failed write keeps the old data
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
            os.replace(tmp_path, self.path)
        except OSError:
            if tmp_path.exists():
                tmp_path.unlink()
            raise


def snapshot(state: AnnualState) -> List[Dict[str, Any]]:
    """Raw field values of all twelve months in wire format."""
    entries = []
    for record in state:
        entry = {wire: get_field(record, name) for wire, name in WIRE_FIELDS.items()}
        entry['weeks'] = list(record.weeks)
        entries.append(entry)
    return entries


def serialize(state: AnnualState) -> str:
    return json.dumps(snapshot(state), ensure_ascii=False)


def deserialize(text) -> Optional[List[Dict[str, Any]]]:
    """Parse a stored blob into twelve wire entries.

    Returns None if the blob is not valid JSON or is not a list of twelve
    objects. Never raises.
    """
    if not text:
        return None
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        logger.warning(f"Ignoring stored state, not valid JSON: {e}")
        return None

    if not isinstance(data, list) or len(data) != MONTHS_PER_YEAR:
        logger.warning(f"Ignoring stored state, expected a list of {MONTHS_PER_YEAR} months")
        return None
    if not all(isinstance(entry, dict) for entry in data):
        logger.warning("Ignoring stored state, month entries must be objects")
        return None
    return data


def restore(entries: List[Dict[str, Any]], state: AnnualState) -> AnnualState:
    """Apply deserialized entries onto state, in place.

    Only keys present in an entry are overwritten; anything missing keeps its
    current value. A present 'weeks' list replaces all four weeks, with
    missing positions left blank.
    """
    for record, entry in zip(state.months, entries):
        for wire, name in WIRE_FIELDS.items():
            if wire in entry:
                set_field(record, name, entry[wire])

        weeks = entry.get('weeks')
        if isinstance(weeks, list):
            for i, name in enumerate(WEEK_FIELDS):
                # Falsy values such as 0 or false are blanked
                value = weeks[i] if i < len(weeks) else None
                set_field(record, name, value or None)
    return state


def save_state(store, state: AnnualState, key: str = STORAGE_KEY) -> bool:
    """Write the full state to the store. Returns False if the write failed."""
    try:
        store.set(key, serialize(state))
    except (OSError, StorageError) as e:
        logger.warning(f"Could not save state: {e}")
        return False
    logger.debug(f"Saved state under '{key}'")
    return True


def load_state(store, state: AnnualState, key: str = STORAGE_KEY) -> bool:
    """Restore state from the store if a valid blob exists.

    Returns True when state was restored. On any failure state is untouched.
    """
    try:
        raw = store.get(key)
    except (OSError, StorageError) as e:
        logger.warning(f"Could not read stored state: {e}")
        return False

    if not raw:
        logger.debug(f"No stored state under '{key}'")
        return False

    entries = deserialize(raw)
    if entries is None:
        return False

    restore(entries, state)
    logger.info(f"Restored {len(entries)} months from '{key}'")
    return True
