from __future__ import annotations

from sqlalchemy import asc, select
from sqlalchemy.orm import Session, selectinload

from ..core.results import Err, ErrorKind, Ok, Result
from ..models import Comment
from .projects import get_approved_project


def list_comments(db: Session, project_id: str) -> Result:
    if get_approved_project(db, project_id) is None:
        return Err(ErrorKind.NOT_FOUND, "Project not found")
    stmt = (
        select(Comment)
        .options(selectinload(Comment.user))
        .where(Comment.project_id == project_id)
        .order_by(asc(Comment.created_at), asc(Comment.id))
    )
    return Ok(db.execute(stmt).scalars().all())


def create_comment(db: Session, project_id: str, user_id: str, content: str | None) -> Result:
    content = (content or "").strip()
    if not content:
        return Err(ErrorKind.INVALID_INPUT, "Comment content is required")
    if get_approved_project(db, project_id) is None:
        return Err(ErrorKind.NOT_FOUND, "Project not found")
    comment = Comment(project_id=project_id, user_id=user_id, content=content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return Ok(comment)
