"""Resolve the signed-in identity behind the session cookie.

The admission gate only checks that the cookie is present. Handlers that
need the user ask for a ``RequestContext``; building one validates the token
against the ``sessions`` table and checks its expiry.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..core.config import AppSettings, get_settings
from ..crud.sessions import validate_session
from ..db.session import get_db
from ..middlewares import principal_ctx_var
from ..schemas.auth import Identity


@dataclass(frozen=True)
class RequestContext:
    identity: Identity | None
    session_token: str | None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


def resolve_identity(db: Session, token: str | None) -> Identity | None:
    """Return the identity for a live session token, or ``None``.

    Absent, unknown and expired tokens all resolve to ``None``. Database
    errors propagate to the caller's recovery point.
    """

    if not token:
        return None
    found = validate_session(db, token)
    if found is None:
        return None
    _, user = found
    return Identity.model_validate(user)


def _set_principal(request: Request, principal: str) -> None:
    principal_ctx_var.set(principal)
    request.state.principal = principal


def get_request_context(
    request: Request,
    db: Session = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
) -> RequestContext:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME) or None
    identity = resolve_identity(db, token)
    _set_principal(request, f"user:{identity.id}" if identity else "anonymous")
    return RequestContext(identity=identity, session_token=token)


__all__ = ["Identity", "RequestContext", "get_request_context", "resolve_identity"]
