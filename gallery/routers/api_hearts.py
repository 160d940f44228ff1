import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..core.config import AppSettings, get_settings
from ..core.errors import guarded, respond
from ..core.results import Err, ErrorKind, Ok
from ..crud.hearts import (
    add_guest_heart,
    add_user_heart,
    has_guest_heart,
    has_user_heart,
    remove_guest_heart,
    remove_user_heart,
)
from ..db.session import get_db
from ..deps.auth import RequestContext, get_request_context, resolve_identity
from ..schemas.project import GuestHeartRequest

router = APIRouter(prefix="/api/projects/{project_id}", tags=["hearts"])
logger = logging.getLogger(__name__)


@router.post("/hearts")
@guarded("Failed to add heart")
def api_add_heart(
    project_id: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> JSONResponse:
    if ctx.identity is None:
        return respond(Err(ErrorKind.UNAUTHENTICATED, "Authentication required"))
    return respond(add_user_heart(db, project_id, ctx.identity.id))


@router.delete("/hearts")
@guarded("Failed to remove heart")
def api_remove_heart(
    project_id: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> JSONResponse:
    if ctx.identity is None:
        return respond(Err(ErrorKind.UNAUTHENTICATED, "Authentication required"))
    return respond(remove_user_heart(db, project_id, ctx.identity.id))


@router.get("/hearts/check")
def api_check_heart(
    project_id: str,
    request: Request,
    db: Session = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
) -> JSONResponse:
    # Status probe for the heart button: any failure reads as "not hearted".
    try:
        identity = resolve_identity(db, request.cookies.get(settings.SESSION_COOKIE_NAME))
        hearted = identity is not None and has_user_heart(db, project_id, identity.id)
    except Exception:
        logger.exception("heart.check_failed", extra={"extra_data": {"project_id": project_id}})
        hearted = False
    return respond(Ok({"hearted": hearted}))


@router.post("/guest-heart")
@guarded("Internal server error")
def api_add_guest_heart(
    project_id: str,
    payload: GuestHeartRequest,
    db: Session = Depends(get_db),
) -> JSONResponse:
    return respond(add_guest_heart(db, project_id, payload.guest_id))


@router.delete("/guest-heart")
@guarded("Internal server error")
def api_remove_guest_heart(
    project_id: str,
    payload: GuestHeartRequest,
    db: Session = Depends(get_db),
) -> JSONResponse:
    return respond(remove_guest_heart(db, project_id, payload.guest_id))


@router.post("/guest-heart-status")
@guarded("Internal server error")
def api_guest_heart_status(
    project_id: str,
    payload: GuestHeartRequest,
    db: Session = Depends(get_db),
) -> JSONResponse:
    return respond(has_guest_heart(db, project_id, payload.guest_id))
