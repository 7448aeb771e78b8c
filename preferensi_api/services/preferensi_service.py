# preferensi_api/services/preferensi_service.py
from typing import Any

from fastapi import HTTPException, status
from sqlmodel import Session

from preferensi_api.core.auth import TokenIdentity
from preferensi_api.repositories.preferensi_repo import PreferensiRepository
from preferensi_api.schemas.preferensi import (
    PreferensiCreate,
    PreferensiResponse,
    PreferensiResult,
)


class PreferensiService:
    """
    Business logic for a user's preferences.

    The acting user is always the one carried by the access token; a
    client-supplied userId is only checked against it.
    """

    def __init__(self, repo: PreferensiRepository):
        self.repo = repo

    @staticmethod
    def _resolve_user_id(identity: TokenIdentity, requested: str | None) -> str:
        """
        Raises:
            HTTPException(403): if `requested` names another user.
        """
        if requested is not None and requested != identity.user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="userId does not match token",
            )
        return identity.user_id

    def create(
        self,
        session: Session,
        identity: TokenIdentity,
        payload: PreferensiCreate,
    ) -> PreferensiResponse:
        user_id = self._resolve_user_id(identity, payload.userId)

        data = payload.model_dump(exclude={"userId"}, exclude_none=True)
        data["userId"] = user_id

        doc = self.repo.create_for_user(session, user_id, data)

        return PreferensiResponse(
            success=True,
            message="Berhasil menambahkan preferensi",
            preferensiResult=PreferensiResult(preferensiId=doc.id, **data),
        )

    def list_for_user(
        self,
        session: Session,
        identity: TokenIdentity,
        requested_user_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """All preferences of the acting user, each with its id."""
        user_id = self._resolve_user_id(identity, requested_user_id)
        return [doc.to_dict() for doc in self.repo.list_for_user(session, user_id)]
