# preferensi_api/core/body.py
from typing import Any, Callable, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _body_error(msg: str, error_type: str = "value_error") -> RequestValidationError:
    return RequestValidationError([{"type": error_type, "loc": ("body",), "msg": msg, "input": None}])


async def read_body(request: Request) -> dict[str, Any] | None:
    """
    Read a request body sent as JSON, multipart form or urlencoded form.

    Returns None for an empty body. Repeated form keys become lists.
    File parts are rejected, forms carry plain fields only.

    Raises:
        RequestValidationError: on malformed JSON, file parts, or a body
            that is not an object.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        body: dict[str, Any] = {}
        for key in form.keys():
            values = form.getlist(key)
            if not all(isinstance(v, str) for v in values):
                raise _body_error(f"Unexpected file field: {key}")
            body[key] = values[0] if len(values) == 1 else values
        return body

    raw = await request.body()
    if not raw.strip():
        return None

    try:
        body = await request.json()
    except ValueError:
        raise _body_error("JSON decode error", "json_invalid")

    if not isinstance(body, dict):
        raise _body_error("Input should be a valid dictionary", "dict_type")
    return body


def _validate(model: type[ModelT], body: dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(body)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        for error in errors:
            error["loc"] = ("body", *error["loc"])
        raise RequestValidationError(errors)


def body_as(model: type[ModelT]) -> Callable:
    """
    Dependency factory validating a JSON or form body into `model`.

    Usage:

        @router.post("/register")
        def register(payload: RegisterRequest = Depends(body_as(RegisterRequest))):
            ...
    """

    async def dependency(request: Request) -> ModelT:
        body = await read_body(request)
        if body is None:
            raise _body_error("Field required", "missing")
        return _validate(model, body)

    return dependency


def optional_body_as(model: type[ModelT]) -> Callable:
    """Like `body_as`, but an empty body yields None."""

    async def dependency(request: Request) -> ModelT | None:
        body = await read_body(request)
        if body is None:
            return None
        return _validate(model, body)

    return dependency


async def fields_body(request: Request) -> dict[str, Any]:
    """Free-form object body (JSON or form), used for partial updates."""
    body = await read_body(request)
    if body is None:
        raise _body_error("Field required", "missing")
    return body
