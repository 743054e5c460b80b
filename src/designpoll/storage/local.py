"""Filesystem blob store.

Objects live under a root directory that the API mounts at /blobs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from designpoll.storage.base import BlobStore

logger = logging.getLogger(__name__)

LOCATOR_PREFIX = "/blobs"


class LocalBlobStore(BlobStore):
    """Blob store backed by a local directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        # Keys must stay inside the root
        if not path.is_relative_to(self.root.resolve()):
            raise ValueError(f"Invalid blob key: {key}")
        return path

    def store(self, key: str, data: bytes) -> str:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug(f"Stored blob {key} ({len(data)} bytes)")
        return f"{LOCATOR_PREFIX}/{key}"

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        path.unlink()
        logger.debug(f"Deleted blob {key}")

    def exists(self, key: str) -> bool:
        return self._path_for(key).is_file()
