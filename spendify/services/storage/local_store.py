"""
Local Key-Value Storage Implementations

DESIGN DECISION: Each key is one JSON file in the data directory.
The tracker writes the whole collection on every mutation, so a file
per key maps directly onto "replace the snapshot":
1. Writes go to a temp file first and are renamed into place
2. A crash mid-write leaves the previous snapshot intact
3. Transient OS errors are retried before giving up

InMemoryKeyValueStore has the same contract and is used by tests
and when no data directory is configured.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from spendify.services.storage.interface import KeyValueStoreInterface, StorageError


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_key(key: str) -> str:
    if not _KEY_PATTERN.match(key) or key in (".", ".."):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class JsonFileKeyValueStore(KeyValueStoreInterface):
    """
    File-backed key-value store.

    Blobs are stored as <data_dir>/<key>.json, UTF-8 encoded.
    """

    SUFFIX = ".json"

    def __init__(self, data_dir: Path, write_attempts: int = 3):
        self._data_dir = Path(data_dir)
        self._write_attempts = write_attempts
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data directory {self._data_dir}: {e}") from e

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path(self, key: str) -> Path:
        return self._data_dir / f"{_check_key(key)}{self.SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        """Read a blob, None if the key was never written."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e

    def _write_atomic(self, path: Path, value: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._data_dir,
            prefix=f".{path.stem}-",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def set(self, key: str, value: str) -> None:
        """Replace a blob, retrying transient OS errors."""
        path = self._path(key)
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._write_attempts),
                wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    self._write_atomic(path, value)
        except OSError as e:
            raise StorageError(f"Failed to write '{key}': {e}") from e

    def delete(self, key: str) -> bool:
        path = self._path(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete '{key}': {e}") from e

    def keys(self) -> list[str]:
        return sorted(
            path.stem
            for path in self._data_dir.glob(f"*{self.SUFFIX}")
            if path.is_file()
        )


class InMemoryKeyValueStore(KeyValueStoreInterface):
    """Dict-backed store with the same contract as the file store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(_check_key(key))

    def set(self, key: str, value: str) -> None:
        self._data[_check_key(key)] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(_check_key(key), None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)
