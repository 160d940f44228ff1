from datetime import timedelta

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..core.config import AppSettings, get_settings
from ..core.errors import guarded, respond
from ..core.results import Err, ErrorKind, Ok
from ..core.security import verify_admin_credentials
from ..crud.sessions import create_session, delete_session
from ..crud.users import login_user
from ..db.session import get_db
from ..deps.auth import RequestContext, get_request_context
from ..schemas.auth import AdminLoginRequest, Identity, LoginRequest

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", summary="Sign in by name and start a session")
@guarded("Internal server error")
def api_login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
) -> JSONResponse:
    result = login_user(db, payload.model_dump())
    if not result.ok:
        return respond(result)
    user = result.value
    token = create_session(db, user.id, ttl=timedelta(days=settings.SESSION_TTL_DAYS))
    response = respond(Ok({"success": True, "user": Identity.model_validate(user)}))
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.session_max_age,
        path="/",
        secure=settings.SESSION_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )
    return response


@router.get("/me", summary="Return the signed-in user")
@guarded("Internal server error")
def api_me(ctx: RequestContext = Depends(get_request_context)) -> JSONResponse:
    if ctx.identity is None:
        return respond(Err(ErrorKind.UNAUTHENTICATED, "Not authenticated"))
    return respond(Ok({"user": ctx.identity}))


@router.post("/logout", summary="End the current session")
@guarded("Internal server error")
def api_logout(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    settings: AppSettings = Depends(get_settings),
) -> JSONResponse:
    if ctx.session_token:
        delete_session(db, ctx.session_token)
    response = respond(Ok({"success": True}))
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return response


@router.post("/admin-login", summary="Check the configured admin credentials")
@guarded("Internal server error")
def api_admin_login(payload: AdminLoginRequest, settings: AppSettings = Depends(get_settings)) -> JSONResponse:
    if not verify_admin_credentials(settings, payload.email, payload.password):
        return respond(Err(ErrorKind.UNAUTHENTICATED, "Invalid admin credentials"))
    return respond(Ok({"success": True}))
