"""Designs API endpoint.

GET /api/designs - List designs to rate, ordered by name
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from designpoll.api.app import get_db_session
from designpoll.api.errors import to_http_exception
from designpoll.core.errors import DesignPollError
from designpoll.db import repo
from designpoll.db.repo import DbSession
from designpoll.models.domain import DesignEntity
from designpoll.models.types import DesignDetail

router = APIRouter()


def design_detail(design: DesignEntity) -> DesignDetail:
    """Build DesignDetail from DesignEntity."""
    return DesignDetail(
        design_id=design.design_id,
        name=design.name,
        image_ref=design.image_ref,
        storage_key=design.storage_key,
        uploaded_at=design.uploaded_at,
    )


@router.get("/designs", response_model=list[DesignDetail])
def list_designs(session: DbSession = Depends(get_db_session)) -> list[DesignDetail]:
    """List all designs in rating order.

    Raises:
        HTTPException: 503/500 if the record store fails.
    """
    try:
        with repo.store_call(session, "list designs"):
            designs = repo.list_designs(session)
    except DesignPollError as e:
        raise to_http_exception(e) from e

    return [design_detail(d) for d in designs]
