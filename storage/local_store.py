"""Local persistent store: one JSON document per collection key.

The store never raises. A missing directory, an unreadable or corrupt file,
or a failed write is logged and treated as an empty collection / dropped
write, so the rest of the app keeps working on whatever it has.
"""

import json
import logging
import os
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

# Stable collection keys
INVENTORY = "inventory"
JOBS = "jobs"
WARRANTIES = "warranties"
SALES = "sales"


class LocalStore:
    """Key-value JSON persistence scoped to a single data directory."""

    def __init__(self, directory: str | os.PathLike | None, prefix: str = ""):
        self.directory = Path(directory) if directory else None
        self.prefix = prefix
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

        if self.directory is not None:
            try:
                self.directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.error(f"Local store directory {self.directory} unusable: {str(e)}")
                self.directory = None

    @property
    def available(self) -> bool:
        return self.directory is not None

    def path_for(self, key: str) -> Path | None:
        if self.directory is None:
            return None
        return self.directory / f"{self.prefix}{key}.json"

    def lock(self, key: str) -> threading.RLock:
        """Per-collection lock; hold it across a read-modify-write cycle."""
        with self._locks_guard:
            if key not in self._locks:
                self._locks[key] = threading.RLock()
            return self._locks[key]

    def read(self, key: str) -> list[dict]:
        path = self.path_for(key)
        if path is None or not path.exists():
            return []

        with self.lock(key):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error reading local collection '{key}': {str(e)}")
                return []

        if not isinstance(data, list):
            logger.error(f"Local collection '{key}' is not a list; ignoring it")
            return []
        return data

    def write(self, key: str, records: list[dict]) -> None:
        path = self.path_for(key)
        if path is None:
            logger.debug(f"No local store configured; dropping write to '{key}'")
            return

        with self.lock(key):
            # Write to a temp file first so a failed write never truncates the collection
            temp_path = path.with_suffix(".json.tmp")
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(records, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, path)
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Error saving local collection '{key}': {str(e)}")
                try:
                    temp_path.unlink(missing_ok=True)
                except OSError as cleanup_error:
                    logger.warning(f"Could not remove {temp_path}: {str(cleanup_error)}")
