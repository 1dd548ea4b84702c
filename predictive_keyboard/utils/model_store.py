# model_store.py - persistence backends for the user overlay

# handles saving and loading the user store:
# - JsonFileStore keeps both records in a single JSON object on disk
# - MemoryStore keeps them in a dict (tests, throwaway sessions)
# writes go to a temp file first and are swapped in with os.replace,
# so a crash mid-write never leaves a half-written store behind

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from predictive_keyboard.core.errors import PersistenceError

logger = logging.getLogger(__name__)


def atomic_write_text(path: Union[str, Path], text: str) -> None:
    """
    Write `text` to `path` via a sibling temp file + os.replace.
    Raises OSError on failure; the previous file (if any) is left untouched.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


class JsonFileStore:
    """
    User store backed by one JSON file:
        {"user_dictionary": "...", "user_bigrams": "..."}
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self) -> Dict[str, str]:
        """
        Load stored records from disk.
        Returns:
            dict: the records, or an empty dict if missing/unreadable.
        """
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("user store %s unreadable, starting empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("user store %s has unexpected layout, starting empty", self.path)
            return {}
        records = {str(k): v for k, v in data.items() if isinstance(v, str)}
        logger.debug("loaded user store %s (%d records)", self.path, len(records))
        return records

    def write(self, records: Dict[str, str]) -> None:
        try:
            atomic_write_text(self.path, json.dumps(dict(records), indent=2))
        except OSError as e:
            raise PersistenceError(f"writing {self.path} failed: {e}") from e
        logger.debug("saved user store %s", self.path)


class MemoryStore:
    """In-process store. `fail_writes` makes write() raise, for testing retry paths."""

    def __init__(self, records: Optional[Dict[str, str]] = None):
        self.records: Dict[str, str] = dict(records or {})
        self.writes = 0
        self.fail_writes = False

    def read(self) -> Dict[str, str]:
        return dict(self.records)

    def write(self, records: Dict[str, str]) -> None:
        if self.fail_writes:
            raise PersistenceError("memory store is read-only")
        self.records = dict(records)
        self.writes += 1
