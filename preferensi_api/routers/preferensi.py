# preferensi_api/routers/preferensi.py
import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from preferensi_api.core.auth import TokenIdentity, require_auth
from preferensi_api.core.body import body_as, optional_body_as
from preferensi_api.core.errors import BACKEND_ERRORS, server_error
from preferensi_api.database import get_session
from preferensi_api.dependencies import get_preferensi_service
from preferensi_api.schemas.preferensi import (
    PreferensiCreate,
    PreferensiQuery,
    PreferensiResponse,
)
from preferensi_api.services.preferensi_service import PreferensiService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preferensi", tags=["Preferensi"])


@router.post("", response_model=PreferensiResponse, response_model_exclude_none=True)
def create_preferensi(
    identity: TokenIdentity = Depends(require_auth),
    payload: PreferensiCreate = Depends(body_as(PreferensiCreate)),
    session: Session = Depends(get_session),
    service: PreferensiService = Depends(get_preferensi_service),
):
    """
    Add a preference for the authenticated user.

    Auth:
      - Requires a valid access token.
      - A body userId other than the token's user is rejected with 403.
    """
    try:
        return service.create(session, identity, payload)
    except BACKEND_ERRORS as e:
        logger.error("Error adding preferensi for %s: %s", identity.user_id, e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Gagal menambahkan preferensi"},
        )


@router.get("")
def list_preferensi(
    identity: TokenIdentity = Depends(require_auth),
    query: PreferensiQuery | None = Depends(optional_body_as(PreferensiQuery)),
    session: Session = Depends(get_session),
    service: PreferensiService = Depends(get_preferensi_service),
) -> list[dict[str, Any]]:
    """
    List the authenticated user's preferences, each with its id.

    Auth:
      - Requires a valid access token.
    """
    requested = query.userId if query is not None else None
    try:
        return service.list_for_user(session, identity, requested)
    except BACKEND_ERRORS as e:
        return server_error("Error getting preferensi", e)
