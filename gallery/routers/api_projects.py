from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..core.errors import guarded, respond
from ..core.results import Err, ErrorKind, Ok
from ..crud.hearts import count_hearts
from ..crud.projects import (
    create_project,
    delete_project,
    get_project,
    list_projects,
    update_project,
    update_project_status,
)
from ..db.session import get_db
from ..deps.auth import RequestContext, get_request_context
from ..models import Project
from ..schemas.project import ProjectCreate, ProjectOut, ProjectStatus, ProjectUpdate

router = APIRouter(prefix="/api/projects", tags=["projects"])

AUTH_REQUIRED = Err(ErrorKind.UNAUTHENTICATED, "Authentication required")


def _project_to_schema(project: Project, hearts_count: int) -> ProjectOut:
    return ProjectOut.model_validate(project, from_attributes=True).model_copy(update={"hearts_count": hearts_count})


def _single(db: Session, result, status_code: int = 200) -> JSONResponse:
    if not result.ok:
        return respond(result)
    project = get_project(db, result.value.id) or result.value
    payload = _project_to_schema(project, count_hearts(db, project.id))
    return respond(Ok({"project": payload}), status_code=status_code)


@router.get("")
@guarded("Failed to fetch projects")
def api_list_projects(
    status: Optional[ProjectStatus] = None,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    offset: Optional[int] = Query(default=None, ge=0),
    order_by: Literal["created_at", "hearts_count", "title"] = Query(default="created_at", alias="orderBy"),
    order_direction: Literal["asc", "desc"] = Query(default="desc", alias="orderDirection"),
    db: Session = Depends(get_db),
) -> JSONResponse:
    rows = list_projects(
        db,
        status=status,
        user_id=user_id,
        limit=limit,
        offset=offset,
        order_by=order_by,
        order_direction=order_direction,
    )
    return respond(Ok({"projects": [_project_to_schema(project, count) for project, count in rows]}))


@router.post("")
@guarded("Failed to create project")
def api_create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> JSONResponse:
    if ctx.identity is None:
        return respond(AUTH_REQUIRED)
    result = create_project(db, ctx.identity.id, payload.model_dump(exclude_unset=True))
    return _single(db, result, status_code=201)


@router.get("/{project_id}")
@guarded("Project not found")
def api_get_project(project_id: str, db: Session = Depends(get_db)) -> JSONResponse:
    project = get_project(db, project_id)
    if project is None:
        return respond(Err(ErrorKind.NOT_FOUND, "Project not found"))
    return _single(db, Ok(project))


@router.put("/{project_id}")
@guarded("Failed to update project")
def api_update_project(
    project_id: str,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> JSONResponse:
    if ctx.identity is None:
        return respond(AUTH_REQUIRED)
    data = payload.model_dump(exclude_unset=True)
    if "status" in data:
        if not ctx.identity.is_admin:
            return respond(Err(ErrorKind.FORBIDDEN, "Admin access required"))
        return _single(db, update_project_status(db, project_id, data["status"]))
    return _single(db, update_project(db, project_id, ctx.identity.id, data))


@router.delete("/{project_id}")
@guarded("Failed to delete project")
def api_delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> JSONResponse:
    if ctx.identity is None:
        return respond(AUTH_REQUIRED)
    # Admins may delete any project, everyone else only their own.
    owner = None if ctx.identity.is_admin else ctx.identity.id
    result = delete_project(db, project_id, owner)
    if not result.ok:
        return respond(result)
    return respond(Ok({"success": True}))
