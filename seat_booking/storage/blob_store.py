"""
Key-value blob stores holding the serialized booking table.

The booking service only ever touches one key. Two stores ship here:
an in-process dict (tests, embedding) and a directory of text files
(the command-line front end). Any object with the same get/set
signatures can be passed to BookingService instead.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class BlobStoreError(RuntimeError):
    """Raised when the underlying storage cannot be read or written."""


class BlobStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, text: str) -> None:
        ...


class InMemoryBlobStore:
    """Dict-backed store. Lives as long as the object does."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._blobs: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def set(self, key: str, text: str) -> None:
        self._blobs[key] = text

    def reset(self) -> None:
        """Clear all blobs. Used by test fixtures for isolation."""
        self._blobs.clear()


class FileBlobStore:
    """Stores each key as ``<directory>/<key>.csv``."""

    def __init__(self, directory: Union[Path, str]) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise BlobStoreError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.csv"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            with path.open(encoding="utf-8", newline="") as fh:
                return fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise BlobStoreError(f"Failed to read {path}: {exc}") from exc

    def set(self, key: str, text: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".csv.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8", newline="")
            tmp_path.replace(path)
        except OSError as exc:
            raise BlobStoreError(f"Failed to write {path}: {exc}") from exc
        logger.debug("Wrote %d chars to %s", len(text), path)
