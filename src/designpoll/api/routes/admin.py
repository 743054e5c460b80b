"""Admin API endpoints.

POST   /api/admin/login                - Check the dashboard password
POST   /api/admin/designs              - Upload a design image
PUT    /api/admin/designs/{design_id}  - Rename and/or replace a design image
DELETE /api/admin/designs/{design_id}  - Delete a design and its image
POST   /api/admin/reset                - Delete all survey responses

The password checks here are placeholders for a real access control.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from designpoll.admin import designs as design_admin
from designpoll.admin.auth import check_password
from designpoll.admin.guard import OperationGuard
from designpoll.admin.reset import reset_responses
from designpoll.api.app import (
    get_blob_store,
    get_db_session,
    get_guard,
    get_settings,
    require_admin,
)
from designpoll.api.errors import to_http_exception
from designpoll.api.routes.designs import design_detail
from designpoll.config import Settings
from designpoll.core.errors import AuthorizationError, DesignPollError
from designpoll.db.repo import DbSession
from designpoll.models.types import DesignDetail, LoginRequest, ResetRequest, ResetResult
from designpoll.storage import BlobStore

router = APIRouter(prefix="/admin")


class LoginResponse(BaseModel):
    """Response for a successful login."""

    authenticated: bool


class DesignDeletedResponse(BaseModel):
    """Response for design deletion."""

    design_id: str
    blob_released: bool


def _read_upload(file: UploadFile) -> design_admin.ImageUpload:
    return design_admin.ImageUpload(
        filename=file.filename or "image",
        content_type=file.content_type,
        data=file.file.read(),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Check the dashboard password.

    Raises:
        HTTPException: 401 if the password is wrong.
    """
    try:
        check_password(body.password, settings.admin_password)
    except AuthorizationError as e:
        raise HTTPException(status_code=401, detail="Invalid password") from e
    return LoginResponse(authenticated=True)


@router.post(
    "/designs",
    response_model=DesignDetail,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def upload_design(
    name: str = Form(...),
    file: UploadFile = File(...),
    session: DbSession = Depends(get_db_session),
    blobs: BlobStore = Depends(get_blob_store),
    guard: OperationGuard = Depends(get_guard),
) -> DesignDetail:
    """Upload a design image with its name.

    Raises:
        HTTPException: 400 for a missing name or non-image file,
            409 while another upload is in flight.
    """
    image = _read_upload(file)
    try:
        with guard.hold("upload-design"):
            design = design_admin.upload_design(session, blobs, name, image)
    except DesignPollError as e:
        raise to_http_exception(e) from e
    return design_detail(design)


@router.put(
    "/designs/{design_id}",
    response_model=DesignDetail,
    dependencies=[Depends(require_admin)],
)
def update_design(
    design_id: str,
    name: str = Form(...),
    file: UploadFile | None = File(default=None),
    session: DbSession = Depends(get_db_session),
    blobs: BlobStore = Depends(get_blob_store),
    guard: OperationGuard = Depends(get_guard),
) -> DesignDetail:
    """Rename a design and optionally replace its image.

    Raises:
        HTTPException: 404 if the design does not exist, 409 while another
            edit is in flight.
    """
    image = _read_upload(file) if file is not None and file.filename else None
    try:
        with guard.hold("update-design"):
            design = design_admin.update_design(session, blobs, design_id, name, image)
    except DesignPollError as e:
        raise to_http_exception(e) from e
    return design_detail(design)


@router.delete(
    "/designs/{design_id}",
    response_model=DesignDeletedResponse,
    dependencies=[Depends(require_admin)],
)
def delete_design(
    design_id: str,
    session: DbSession = Depends(get_db_session),
    blobs: BlobStore = Depends(get_blob_store),
    guard: OperationGuard = Depends(get_guard),
) -> DesignDeletedResponse:
    """Delete a design record and release its image.

    Raises:
        HTTPException: 404 if the design does not exist.
    """
    try:
        with guard.hold("delete-design"):
            result = design_admin.delete_design(session, blobs, design_id)
    except DesignPollError as e:
        raise to_http_exception(e) from e
    return DesignDeletedResponse(design_id=result.design_id, blob_released=result.blob_released)


@router.post("/reset", response_model=ResetResult, dependencies=[Depends(require_admin)])
def reset(
    body: ResetRequest,
    session: DbSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
    guard: OperationGuard = Depends(get_guard),
) -> ResetResult:
    """Delete every survey response.

    Raises:
        HTTPException: 403 for a wrong reset password, 400 without
            confirmation, 500 if the batch was rolled back.
    """
    try:
        with guard.hold("reset-responses"):
            outcome = reset_responses(
                session,
                password=body.password,
                expected_password=settings.reset_password,
                confirm=body.confirm,
            )
    except AuthorizationError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    except DesignPollError as e:
        raise to_http_exception(e) from e
    return ResetResult(requested=outcome.requested, deleted=outcome.deleted)
