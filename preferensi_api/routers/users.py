# preferensi_api/routers/users.py
import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlmodel import Session

from preferensi_api.core.body import body_as, fields_body
from preferensi_api.core.errors import BACKEND_ERRORS, server_error
from preferensi_api.database import get_session
from preferensi_api.dependencies import get_user_service
from preferensi_api.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from preferensi_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


# -------- Registration / login --------


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest = Depends(body_as(RegisterRequest)),
    session: Session = Depends(get_session),
    service: UserService = Depends(get_user_service),
):
    """
    Register a new user.

    The user gets a fresh id, a bcrypt password hash and a 30-day token
    stored on the record. Emails must be unique (409 otherwise).
    """
    try:
        return service.register(session, payload)
    except BACKEND_ERRORS as e:
        return server_error("Error adding user", e)


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
)
def login(
    payload: LoginRequest = Depends(body_as(LoginRequest)),
    session: Session = Depends(get_session),
    service: UserService = Depends(get_user_service),
):
    """
    Login with email + password.

    Unknown email and wrong password both return 401 with the same body.
    On success the freshly issued token is returned and stored.
    """
    try:
        result = service.login(session, payload)
    except BACKEND_ERRORS as e:
        logger.exception("Error during login: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    if result is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "message": "Invalid Credentials"},
        )
    return result


# -------- User CRUD by id --------


@router.get("/users/{user_id}")
def get_user(
    user_id: str,
    session: Session = Depends(get_session),
    service: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    """Get a user document by id (404 if missing)."""
    try:
        return service.get_user(session, user_id)
    except BACKEND_ERRORS as e:
        return server_error("Error getting user", e)


@router.put("/users/{user_id}", response_class=PlainTextResponse)
def update_user(
    user_id: str,
    fields: dict[str, Any] = Depends(fields_body),
    session: Session = Depends(get_session),
    service: UserService = Depends(get_user_service),
):
    """
    Merge the supplied fields onto the user document.

    Field names are not validated; unspecified fields are left unchanged.
    """
    try:
        service.update_user(session, user_id, fields)
    except BACKEND_ERRORS as e:
        return server_error("Error updating user", e)
    return "User updated successfully"


@router.delete("/users/{user_id}", response_class=PlainTextResponse)
def delete_user(
    user_id: str,
    session: Session = Depends(get_session),
    service: UserService = Depends(get_user_service),
):
    """Delete a user. Deleting an unknown id succeeds as well."""
    try:
        service.delete_user(session, user_id)
    except BACKEND_ERRORS as e:
        return server_error("Error deleting user", e)
    return "User deleted successfully"
