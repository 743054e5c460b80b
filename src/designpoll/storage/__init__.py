"""Blob storage for design images.

Structure:
- storage/base.py  - BlobStore interface
- storage/local.py - filesystem implementation served at /blobs
"""

from designpoll.storage.base import BlobStore
from designpoll.storage.local import LocalBlobStore

__all__ = [
    "BlobStore",
    "LocalBlobStore",
]
