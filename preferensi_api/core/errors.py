# preferensi_api/core/errors.py
import logging

from fastapi import status
from fastapi.responses import PlainTextResponse
from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class DocumentNotFoundError(LookupError):
    """Raised when an update targets a document that does not exist."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"No document to update: {collection}/{doc_id}")
        self.collection = collection
        self.doc_id = doc_id


# Failures of the store, hasher or token codec. Routers turn these into a
# 500 carrying the raw message.
BACKEND_ERRORS = (SQLAlchemyError, JWTError, LookupError, ValueError)


def server_error(prefix: str, exc: Exception) -> PlainTextResponse:
    """Log and build the plain-text 500 used by the CRUD routes."""
    logger.error("%s: %s", prefix, exc)
    return PlainTextResponse(
        f"{prefix}: {exc}",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
