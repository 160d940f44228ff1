"""CRUD helpers for gallery projects."""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError
from sqlalchemy import asc, desc, func, select
from sqlalchemy.orm import Session, selectinload

from ..core.results import Err, ErrorKind, Ok, Result
from ..models import PROJECT_STATUSES, Heart, Project
from ..models.common import utcnow

ORDERABLE = ("created_at", "hearts_count", "title")
DEFAULT_PAGE_SIZE = 10
URL_FIELDS = ("website_url", "github_url", "icon_url")

_http_url = TypeAdapter(AnyHttpUrl)


def _is_url(value: str) -> bool:
    try:
        _http_url.validate_python(value)
    except ValidationError:
        return False
    return True


def _clean(value: str | None) -> str | None:
    return (value or "").strip() or None


def validate_project(data: dict) -> list[str]:
    errors: list[str] = []
    if not (data.get("title") or "").strip():
        errors.append("Title is required")
    if not (data.get("description") or "").strip():
        errors.append("Description is required")

    website_url = _clean(data.get("website_url"))
    github_url = _clean(data.get("github_url"))
    icon_url = _clean(data.get("icon_url"))
    if not website_url and not github_url:
        errors.append("Either website URL or GitHub URL is required")
    if website_url and not _is_url(website_url):
        errors.append("Invalid website URL")
    if github_url:
        if not _is_url(github_url):
            errors.append("Invalid GitHub URL")
        elif "github.com" not in (urlparse(github_url).hostname or ""):
            errors.append("GitHub URL must be from github.com")
    if icon_url and not _is_url(icon_url):
        errors.append("Invalid icon URL")
    return errors


def _hearts_count_column():
    return (
        select(func.count(Heart.id))
        .where(Heart.project_id == Project.id)
        .correlate(Project)
        .scalar_subquery()
        .label("hearts_count")
    )


def list_projects(
    db: Session,
    *,
    status: str | None = None,
    user_id: str | None = None,
    limit: int | None = None,
    offset: int | None = None,
    order_by: str = "created_at",
    order_direction: str = "desc",
) -> list[tuple[Project, int]]:
    hearts_count = _hearts_count_column()
    stmt = select(Project, hearts_count).options(selectinload(Project.user))
    if status:
        stmt = stmt.where(Project.status == status)
    if user_id:
        stmt = stmt.where(Project.user_id == user_id)

    if order_by == "hearts_count":
        column = hearts_count
    else:
        column = getattr(Project, order_by if order_by in ORDERABLE else "created_at")
    direction = asc if order_direction == "asc" else desc
    stmt = stmt.order_by(direction(column))

    if offset:
        stmt = stmt.offset(offset).limit(limit or DEFAULT_PAGE_SIZE)
    elif limit:
        stmt = stmt.limit(limit)
    return [(project, count) for project, count in db.execute(stmt).all()]


def get_project(db: Session, project_id: str) -> Project | None:
    stmt = select(Project).options(selectinload(Project.user)).where(Project.id == project_id)
    return db.execute(stmt).scalars().first()


def get_approved_project(db: Session, project_id: str) -> Project | None:
    stmt = select(Project).where(Project.id == project_id, Project.status == "approved")
    return db.execute(stmt).scalars().first()


def create_project(db: Session, user_id: str, payload: dict) -> Result:
    errors = validate_project(payload)
    if errors:
        return Err(ErrorKind.INVALID_INPUT, ", ".join(errors))
    now = utcnow()
    project = Project(
        user_id=user_id,
        title=payload["title"].strip(),
        description=payload["description"].strip(),
        website_url=_clean(payload.get("website_url")),
        github_url=_clean(payload.get("github_url")),
        icon_url=_clean(payload.get("icon_url")),
        status="pending",
        created_at=now,
        updated_at=now,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return Ok(project)


def update_project(db: Session, project_id: str, user_id: str, payload: dict) -> Result:
    """Apply an owner's edit; fields missing from ``payload`` keep their value."""

    project = get_project(db, project_id)
    if project is None or project.user_id != user_id:
        return Err(ErrorKind.NOT_FOUND, "Project not found")
    fields = ("title", "description", *URL_FIELDS)
    merged = {field: payload.get(field, getattr(project, field)) for field in fields}
    errors = validate_project(merged)
    if errors:
        return Err(ErrorKind.INVALID_INPUT, ", ".join(errors))
    for field in fields:
        if field in payload:
            value = payload[field]
            setattr(project, field, value.strip() if field in ("title", "description") else _clean(value))
    project.updated_at = utcnow()
    db.commit()
    db.refresh(project)
    return Ok(project)


def update_project_status(db: Session, project_id: str, status: str) -> Result:
    if status not in PROJECT_STATUSES:
        return Err(ErrorKind.INVALID_INPUT, "Invalid status")
    project = get_project(db, project_id)
    if project is None:
        return Err(ErrorKind.NOT_FOUND, "Project not found")
    project.status = status
    project.updated_at = utcnow()
    db.commit()
    db.refresh(project)
    return Ok(project)


def delete_project(db: Session, project_id: str, user_id: str | None = None) -> Result:
    """Delete a project; with ``user_id`` only that user's project qualifies."""

    project = get_project(db, project_id)
    if project is None or (user_id is not None and project.user_id != user_id):
        return Err(ErrorKind.NOT_FOUND, "Project not found")
    db.delete(project)
    db.commit()
    return Ok(None)
