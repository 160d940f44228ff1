from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from .results import Err, ErrorKind, Ok, Result

logger = logging.getLogger("gallery.errors")


class ErrorEnvelope(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__({"error": message, "code": code}, status_code=status_code, headers=headers)


def respond(result: Result, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Map a handler outcome onto the HTTP response sent to the client."""

    if isinstance(result, Ok):
        return JSONResponse(jsonable_encoder(result.value), status_code=status_code)
    return ErrorEnvelope(status_code=result.kind.status_code, code=result.kind.value, message=result.message)


def guarded(message: str) -> Callable[[Callable[..., JSONResponse]], Callable[..., JSONResponse]]:
    """Wrap a route so unexpected failures become a generic 500 with ``message``."""

    def decorator(func: Callable[..., JSONResponse]) -> Callable[..., JSONResponse]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> JSONResponse:
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("handler.failed", extra={"extra_data": {"handler": func.__name__}})
                return respond(Err(ErrorKind.INTERNAL, message))

        return wrapper

    return decorator


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    message = detail if isinstance(detail, str) else "Error"
    return ErrorEnvelope(
        status_code=exc.status_code,
        code="http_error",
        message=message,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # The offending values are not echoed back to the caller.
    logger.info("request.invalid", extra={"extra_data": {"path": request.url.path, "errors": len(exc.errors())}})
    return ErrorEnvelope(
        status_code=status.HTTP_400_BAD_REQUEST,
        code=ErrorKind.INVALID_INPUT.value,
        message="Invalid request body",
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("request.failed", extra={"extra_data": {"path": request.url.path}})
    return ErrorEnvelope(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=ErrorKind.INTERNAL.value,
        message="Internal server error",
    )
