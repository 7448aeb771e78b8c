# preferensi_api/repositories/preferensi_repo.py
from typing import Any

from sqlmodel import Session

from preferensi_api.models.document import Document
from preferensi_api.repositories.document_repo import DocumentRepository, subcollection
from preferensi_api.repositories.user_repo import USERS

PREFERENSI = "preferensi"


class PreferensiRepository(DocumentRepository):
    """Data access for users/{userId}/preferensi."""

    @staticmethod
    def collection_for(user_id: str) -> str:
        return subcollection(USERS, user_id, PREFERENSI)

    def list_for_user(self, session: Session, user_id: str) -> list[Document]:
        return self.list_collection(session, self.collection_for(user_id))

    def create_for_user(
        self, session: Session, user_id: str, data: dict[str, Any]
    ) -> Document:
        return self.add(session, self.collection_for(user_id), data)
