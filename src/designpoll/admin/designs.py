"""Design management: upload, edit, delete.

Keeps each design pointing at exactly one live blob. Record and blob
writes are ordered so that a failure leaves the record consistent with
what is stored; database operations go through repo.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from designpoll.core.errors import NotFoundError, StoreError, SurveyValidationError
from designpoll.db import repo
from designpoll.db.repo import DbSession
from designpoll.models.domain import DesignEntity
from designpoll.storage.base import BlobStore

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class ImageUpload:
    """An uploaded image file."""

    filename: str
    content_type: str | None
    data: bytes


@dataclass
class DeletionResult:
    """Result of design deletion."""

    design_id: str
    blob_released: bool


def make_storage_key(filename: str, now_ms: int | None = None) -> str:
    """Build a blob key like designs/1700000000000_logo.png."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    safe = _UNSAFE_FILENAME_CHARS.sub("_", filename).strip("._") or "image"
    return f"designs/{now_ms}_{safe}"


def _require_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise SurveyValidationError("Please provide a design name")
    return name


def _require_image(image: ImageUpload) -> None:
    if not image.content_type or not image.content_type.startswith("image/"):
        raise SurveyValidationError("Please select an image file")
    if not image.data:
        raise SurveyValidationError("Image file is empty")


def _store_blob(blobs: BlobStore, image: ImageUpload) -> tuple[str, str]:
    """Store an image. Returns (storage_key, image_ref)."""
    key = make_storage_key(image.filename)
    try:
        locator = blobs.store(key, image.data)
    except (OSError, ValueError) as e:
        logger.exception(f"Failed to store blob {key}")
        raise StoreError(f"Failed to store image: {e}") from e
    return key, locator


def _release_blob(blobs: BlobStore, key: str) -> bool:
    """Release a blob. A missing blob counts as released."""
    if not key:
        return True
    try:
        blobs.delete(key)
    except FileNotFoundError:
        logger.warning(f"Blob {key} not found or already deleted")
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to release blob {key}: {e}")
        return False
    return True


def upload_design(
    session: DbSession,
    blobs: BlobStore,
    name: str,
    image: ImageUpload,
) -> DesignEntity:
    """Store an image and create its design record.

    Raises:
        SurveyValidationError: If the name or image is missing or invalid.
        StoreError: If the blob or record write fails. A stored blob is
            released again when the record write fails.
    """
    name = _require_name(name)
    _require_image(image)

    key, locator = _store_blob(blobs, image)
    design = DesignEntity(
        design_id=str(uuid.uuid4()),
        name=name,
        image_ref=locator,
        storage_key=key,
        uploaded_at=datetime.now(timezone.utc),
    )

    try:
        with repo.store_call(session, "create design"):
            repo.create_design(session, design)
            repo.commit(session)
    except StoreError:
        _release_blob(blobs, key)
        raise

    logger.info(f"Uploaded design {design.design_id} ({name!r}) as {key}")
    return design


def update_design(
    session: DbSession,
    blobs: BlobStore,
    design_id: str,
    name: str,
    image: ImageUpload | None = None,
) -> DesignEntity:
    """Rename a design and optionally replace its image.

    A replacement image is stored and attached first; the old blob is
    released only after the record points at the new one.

    Raises:
        NotFoundError: If the design does not exist.
        SurveyValidationError: If the name or image is invalid.
        StoreError: If a write fails. The record keeps its old image.
    """
    name = _require_name(name)
    if image is not None:
        _require_image(image)

    with repo.store_call(session, "load design"):
        existing = repo.get_design(session, design_id)
    if existing is None:
        raise NotFoundError(f"Design not found: {design_id}")

    new_key = new_ref = None
    if image is not None:
        new_key, new_ref = _store_blob(blobs, image)

    try:
        with repo.store_call(session, "update design"):
            updated = repo.update_design(
                session, design_id, name=name, image_ref=new_ref, storage_key=new_key
            )
            repo.commit(session)
    except StoreError:
        if new_key:
            _release_blob(blobs, new_key)
        raise

    if updated is None:
        # Deleted between load and update
        if new_key:
            _release_blob(blobs, new_key)
        raise NotFoundError(f"Design not found: {design_id}")

    if new_key and existing.storage_key != new_key:
        _release_blob(blobs, existing.storage_key)

    logger.info(f"Updated design {design_id} ({name!r})")
    return updated


def delete_design(session: DbSession, blobs: BlobStore, design_id: str) -> DeletionResult:
    """Delete a design record, then release its blob.

    Ratings referencing the design stay in historical responses.

    Raises:
        NotFoundError: If the design does not exist.
        StoreError: If the record delete fails; the blob is left in place.
    """
    with repo.store_call(session, "load design"):
        existing = repo.get_design(session, design_id)
    if existing is None:
        raise NotFoundError(f"Design not found: {design_id}")

    with repo.store_call(session, "delete design"):
        repo.delete_design(session, design_id)
        repo.commit(session)

    released = _release_blob(blobs, existing.storage_key)
    logger.info(f"Deleted design {design_id} ({existing.name!r})")
    return DeletionResult(design_id=design_id, blob_released=released)
