# preferensi_api/schemas/user.py
from email_validator import EmailNotValidError, validate_email
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class RegisterRequest(SQLModel):
    """
    Payload for POST /register.

    Validation rules:
      - email must be a well-formed address; it is stored as submitted
        so login can match it exactly
      - name cannot be empty or whitespace; it is stored as submitted
      - password cannot be empty
    """

    model_config = ConfigDict(extra="ignore")

    email: str
    name: str = Field(max_length=200)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}")
        return v

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be empty")
        return v


class RegisterResponse(SQLModel):
    success: bool
    message: str


class LoginRequest(SQLModel):
    """Payload for POST /login."""

    model_config = ConfigDict(extra="ignore")

    email: str
    password: str


class LoginResult(SQLModel):
    id: str
    name: str | None = None
    token: str


class LoginResponse(SQLModel):
    """
    Login outcome returned to clients.

    `loginResult` is present only on success; the failure body carries
    just {success: false, message}.
    """

    success: bool
    message: str
    loginResult: LoginResult | None = None
