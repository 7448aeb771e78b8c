# preferensi_api/dependencies.py
from fastapi import Request

from preferensi_api.services.preferensi_service import PreferensiService
from preferensi_api.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    """UserService built once by `create_app()`."""
    return request.app.state.user_service


def get_preferensi_service(request: Request) -> PreferensiService:
    """PreferensiService built once by `create_app()`."""
    return request.app.state.preferensi_service
