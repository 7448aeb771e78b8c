# preferensi_api/schemas/preferensi.py
from typing import Any

from pydantic import ConfigDict
from sqlmodel import SQLModel


class PreferensiCreate(SQLModel):
    """
    Payload for POST /preferensi.

    Attributes are free-form. `userId` is optional; when sent it must match
    the user id carried by the access token.
    """

    model_config = ConfigDict(extra="ignore")

    userId: str | None = None
    name: Any = None
    ambience: Any = None
    utils: Any = None
    view: Any = None


class PreferensiQuery(SQLModel):
    """Optional body for GET /preferensi."""

    model_config = ConfigDict(extra="ignore")

    userId: str | None = None


class PreferensiResult(SQLModel):
    preferensiId: str
    userId: str
    name: Any = None
    ambience: Any = None
    utils: Any = None
    view: Any = None


class PreferensiResponse(SQLModel):
    success: bool
    message: str
    preferensiResult: PreferensiResult
