"""
Flat-file cache for fare records fetched from the remote ticket API.

The store is a JSON array of fare records using the remote API's field names.
Entries are appended and never updated in place; lookups scan in file order.
"""

import json
import logging
import os
import stat
import tempfile
import threading
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from metrofare.config import settings
from metrofare.exceptions import CacheReadError, CacheWriteError
from metrofare.models import FareRecord

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


class FareCache:
    """
    Fare records persisted in a single JSON file.

    Every read goes to disk, so the cache survives restarts and can be
    shared by several processes. Writes rewrite the whole file through a
    temporary file and ``os.replace``.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the cache.

        Args:
            path: Location of the JSON cache file. It does not need to exist.
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> List[FareRecord]:
        """Load all entries; a missing or empty file holds no entries."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"Cache file {self.path} not found")
            return []
        except OSError as e:
            raise CacheReadError(f"cannot read cache file {self.path}: {e}") from e

        if not content.strip():
            logger.debug(f"Cache file {self.path} is empty")
            return []

        try:
            raw = json.loads(content)
        except ValueError as e:
            logger.error(f"Error unmarshaling cache {self.path}: {e}")
            raise CacheReadError(f"malformed cache file {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise CacheReadError(f"cache file {self.path} must hold a JSON array")

        try:
            return [FareRecord.model_validate(entry) for entry in raw]
        except ValidationError as e:
            raise CacheReadError(f"invalid entry in cache file {self.path}: {e}") from e

    def _file_mode(self) -> int:
        """Mode of the existing store, or 0644 for a new one."""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def _write(self, entries: List[FareRecord]):
        payload = [entry.model_dump(by_alias=True) for entry in entries]
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, ensure_ascii=False)
                os.chmod(tmp_name, self._file_mode())
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing cache file {self.path}: {e}")
            raise CacheWriteError(f"cannot write cache file {self.path}: {e}") from e

    def get(self, origin_id: str, destination_id: str) -> Optional[FareRecord]:
        """
        Return the first cached record for the pair, or None.

        Raises:
            CacheReadError: If the cache file is malformed.
        """
        entries = self._read()
        logger.debug(
            f"Searching cache with {len(entries)} entries for {origin_id} -> {destination_id}"
        )
        key = (origin_id, destination_id)
        for entry in entries:
            if entry.key == key:
                return entry
        return None

    def put(self, record: FareRecord):
        """
        Append a record and rewrite the cache file.

        Raises:
            CacheReadError: If the existing cache file is malformed.
            CacheWriteError: If the cache file cannot be written.
        """
        with self._lock:
            entries = self._read()
            entries.append(record)
            self._write(entries)
        logger.info(f"Added new entry to cache, total entries: {len(entries)}")

    def entries(self) -> List[FareRecord]:
        """Return every cached record in file order."""
        return self._read()

    def clear(self):
        """Replace the cache contents with an empty array."""
        with self._lock:
            self._write([])
        logger.info(f"Cleared cache file {self.path}")


# Singleton instance
_fare_cache: Optional[FareCache] = None


def get_fare_cache() -> FareCache:
    """Get singleton fare cache instance."""
    global _fare_cache
    if _fare_cache is None:
        _fare_cache = FareCache(settings.CACHE_PATH)
    return _fare_cache
