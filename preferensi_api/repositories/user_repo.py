# preferensi_api/repositories/user_repo.py
from typing import Any

from sqlmodel import Session

from preferensi_api.models.document import Document
from preferensi_api.repositories.document_repo import DocumentRepository

USERS = "users"


class UserRepository(DocumentRepository):
    """
    Data access for user documents in the "users" collection.

    Document shape: {id, email, name, password (hash), token}
    """

    def get_by_id(self, session: Session, user_id: str) -> Document | None:
        """Return a user document, or None if not found."""
        return self.get(session, USERS, user_id)

    def get_by_email(self, session: Session, email: str) -> Document | None:
        """Return the first user document with this email, or None."""
        matches = self.where(session, USERS, "email", email, limit=1)
        return matches[0] if matches else None

    def create(self, session: Session, user_id: str, data: dict[str, Any]) -> Document:
        return self.set(session, USERS, user_id, data)

    def update_fields(
        self, session: Session, user_id: str, fields: dict[str, Any]
    ) -> Document:
        return self.update(session, USERS, user_id, fields)

    def remove(self, session: Session, user_id: str) -> None:
        """Delete a user along with its nested collections."""
        self.delete(session, USERS, user_id, recursive=True)
