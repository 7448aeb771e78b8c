# preferensi_api/repositories/document_repo.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session, select

from preferensi_api.core.errors import DocumentNotFoundError
from preferensi_api.models.document import Document


def subcollection(parent_collection: str, parent_id: str, name: str) -> str:
    """Path of a collection nested under a parent document."""
    return f"{parent_collection}/{parent_id}/{name}"


class DocumentRepository:
    """
    Data access layer for JSON documents.

    Responsibilities:
      - CRUD by collection path + id
      - equality-filtered queries on a top-level field
      - no FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get(self, session: Session, collection: str, doc_id: str) -> Document | None:
        """Return a document by key, or None if not found."""
        return session.get(Document, (collection, doc_id))

    def set(
        self,
        session: Session,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
    ) -> Document:
        """Create or fully overwrite a document."""
        doc = self.get(session, collection, doc_id)
        if doc is None:
            doc = Document(collection=collection, id=doc_id, data=dict(data))
        else:
            doc.data = dict(data)
            doc.updated_at = datetime.now(timezone.utc)
        session.add(doc)
        session.commit()
        session.refresh(doc)
        return doc

    def add(self, session: Session, collection: str, data: dict[str, Any]) -> Document:
        """Insert a document under a store-assigned id."""
        doc = Document(collection=collection, id=uuid.uuid4().hex, data=dict(data))
        session.add(doc)
        session.commit()
        session.refresh(doc)
        return doc

    def update(
        self,
        session: Session,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
    ) -> Document:
        """
        Merge `fields` onto an existing document.

        Raises:
            DocumentNotFoundError: if the document does not exist.
        """
        doc = self.get(session, collection, doc_id)
        if doc is None:
            raise DocumentNotFoundError(collection, doc_id)

        # Reassign so the JSON column is flagged dirty.
        doc.data = {**doc.data, **fields}
        doc.updated_at = datetime.now(timezone.utc)
        session.add(doc)
        session.commit()
        session.refresh(doc)
        return doc

    def delete(
        self,
        session: Session,
        collection: str,
        doc_id: str,
        recursive: bool = False,
    ) -> None:
        """
        Delete a document. Deleting a missing document is a no-op.

        With recursive=True, every collection nested under the document is
        deleted too.
        """
        doc = self.get(session, collection, doc_id)
        if doc is not None:
            session.delete(doc)

        if recursive:
            prefix = f"{collection}/{doc_id}/"
            stmt = select(Document).where(Document.collection.startswith(prefix, autoescape=True))
            for child in session.exec(stmt).all():
                session.delete(child)

        session.commit()

    # ----- Queries -----

    def list_collection(self, session: Session, collection: str) -> list[Document]:
        """All documents of a collection, oldest first."""
        stmt = (
            select(Document)
            .where(Document.collection == collection)
            .order_by(Document.created_at, Document.id)
        )
        return session.exec(stmt).all()

    def where(
        self,
        session: Session,
        collection: str,
        field: str,
        value: Any,
        limit: int | None = None,
    ) -> list[Document]:
        """
        Documents of a collection whose top-level `field` equals `value`.

        String values are matched in SQL; other values are compared after
        loading the collection.
        """
        if isinstance(value, str):
            stmt = (
                select(Document)
                .where(
                    Document.collection == collection,
                    Document.data[field].as_string() == value,
                )
                .order_by(Document.created_at, Document.id)
            )
            if limit is not None:
                stmt = stmt.limit(limit)
            return session.exec(stmt).all()

        matches = [doc for doc in self.list_collection(session, collection) if doc.data.get(field) == value]
        return matches if limit is None else matches[:limit]
