"""Hearts (likes) from signed-in users and from anonymous guests."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.results import Err, ErrorKind, Ok, Result
from ..models import Heart
from .projects import get_approved_project, get_project


def count_hearts(db: Session, project_id: str) -> int:
    stmt = select(func.count(Heart.id)).where(Heart.project_id == project_id)
    return db.execute(stmt).scalar_one()


def _find_heart(db: Session, project_id: str, *, user_id: str | None = None, guest_id: str | None = None) -> Heart | None:
    stmt = select(Heart).where(Heart.project_id == project_id)
    if user_id is not None:
        stmt = stmt.where(Heart.user_id == user_id)
    else:
        stmt = stmt.where(Heart.guest_id == guest_id)
    return db.execute(stmt).scalars().first()


def _insert_heart(db: Session, heart: Heart) -> bool:
    """Insert ``heart``; False when the unique constraint already holds one."""

    db.add(heart)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return False
    return True


def has_user_heart(db: Session, project_id: str, user_id: str) -> bool:
    return _find_heart(db, project_id, user_id=user_id) is not None


def add_user_heart(db: Session, project_id: str, user_id: str) -> Result:
    if get_approved_project(db, project_id) is None:
        return Err(ErrorKind.NOT_FOUND, "Project not found")
    if not _insert_heart(db, Heart(project_id=project_id, user_id=user_id)):
        return Err(ErrorKind.CONFLICT, "Already hearted")
    return Ok({"success": True})


def remove_user_heart(db: Session, project_id: str, user_id: str) -> Result:
    db.execute(delete(Heart).where(Heart.project_id == project_id, Heart.user_id == user_id))
    db.commit()
    return Ok({"success": True})


def _require_guest(guest_id: str | None) -> Err | None:
    if not (guest_id or "").strip():
        return Err(ErrorKind.INVALID_INPUT, "Guest ID is required")
    return None


def has_guest_heart(db: Session, project_id: str, guest_id: str | None) -> Result:
    missing = _require_guest(guest_id)
    if missing:
        return missing
    return Ok({"hearted": _find_heart(db, project_id, guest_id=guest_id) is not None})


def add_guest_heart(db: Session, project_id: str, guest_id: str | None) -> Result:
    missing = _require_guest(guest_id)
    if missing:
        return missing
    if get_project(db, project_id) is None:
        return Err(ErrorKind.NOT_FOUND, "Project not found")
    if _find_heart(db, project_id, guest_id=guest_id) is not None:
        return Err(ErrorKind.CONFLICT, "You have already liked this project")
    if not _insert_heart(db, Heart(project_id=project_id, guest_id=guest_id)):
        return Err(ErrorKind.CONFLICT, "You have already liked this project")
    return Ok({"success": True, "heartsCount": count_hearts(db, project_id)})


def remove_guest_heart(db: Session, project_id: str, guest_id: str | None) -> Result:
    missing = _require_guest(guest_id)
    if missing:
        return missing
    db.execute(delete(Heart).where(Heart.project_id == project_id, Heart.guest_id == guest_id))
    db.commit()
    return Ok({"success": True, "heartsCount": count_hearts(db, project_id)})
