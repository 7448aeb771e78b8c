# preferensi_api/services/user_service.py
import logging
import uuid
from typing import Any

from fastapi import HTTPException, status
from sqlmodel import Session

from preferensi_api.core.auth import create_access_token
from preferensi_api.core.config import Settings
from preferensi_api.core.passwords import hash_password, verify_password
from preferensi_api.repositories.user_repo import UserRepository
from preferensi_api.schemas.user import (
    LoginRequest,
    LoginResponse,
    LoginResult,
    RegisterRequest,
    RegisterResponse,
)

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - registration (one user per email, hashed password, issued token)
      - login (credential check, token rotation)
      - fetch / partial update / delete by id
    """

    def __init__(self, repo: UserRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    # ----- Auth flows -----

    def register(self, session: Session, payload: RegisterRequest) -> RegisterResponse:
        """
        Create a user under a freshly generated id.

        Raises:
            HTTPException(409): if the email is already registered.
        """
        if self.repo.get_by_email(session, payload.email) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already registered",
            )

        user_id = str(uuid.uuid4())
        token = create_access_token(self.settings, user_id, payload.email)

        self.repo.create(
            session,
            user_id,
            {
                "id": user_id,
                "email": payload.email,
                "name": payload.name,
                "password": hash_password(payload.password, self.settings.BCRYPT_ROUNDS),
                "token": token,
            },
        )
        logger.info("Registered user %s", user_id)

        return RegisterResponse(success=True, message="User Created")

    def login(self, session: Session, payload: LoginRequest) -> LoginResponse | None:
        """
        Check credentials and rotate the stored token.

        Returns:
            LoginResponse on success, None on unknown email or wrong password.
            Both failures look the same to the caller.
        """
        doc = self.repo.get_by_email(session, payload.email)
        if doc is None:
            logger.info("Login failed: no user with email %s", payload.email)
            return None

        if not verify_password(payload.password, doc.data.get("password", "")):
            logger.info("Login failed: wrong password for user %s", doc.id)
            return None

        token = create_access_token(self.settings, doc.id, payload.email)
        self.repo.update_fields(session, doc.id, {"token": token})
        logger.info("Login: %s", doc.id)

        return LoginResponse(
            success=True,
            message="Login Successful",
            loginResult=LoginResult(id=doc.id, name=doc.data.get("name"), token=token),
        )

    # ----- CRUD by id -----

    def get_user(self, session: Session, user_id: str) -> dict[str, Any]:
        """
        Raises:
            HTTPException(404): if not found.
        """
        doc = self.repo.get_by_id(session, user_id)
        if doc is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return doc.to_dict()

    def update_user(
        self, session: Session, user_id: str, fields: dict[str, Any]
    ) -> None:
        """
        Partial merge onto an existing user document.

        Field names are not validated. The id is never overwritten and a
        plaintext password is hashed before it is stored.

        Raises:
            HTTPException(409): if the new email belongs to another user.
            DocumentNotFoundError: if the user does not exist.
        """
        fields = dict(fields)
        fields.pop("id", None)

        if "email" in fields:
            holder = self.repo.get_by_email(session, fields["email"])
            if holder is not None and holder.id != user_id:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Email already registered",
                )


        if isinstance(fields.get("password"), str):
            fields["password"] = hash_password(fields["password"], self.settings.BCRYPT_ROUNDS)

        self.repo.update_fields(session, user_id, fields)

    def delete_user(self, session: Session, user_id: str) -> None:
        """Delete a user and its preferences; missing ids are ignored."""
        self.repo.remove(session, user_id)
