"""Login sessions: issue, validate, revoke and purge bearer tokens."""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from ..core.security import generate_session_token
from ..models import User, UserSession
from ..models.common import utcnow

DEFAULT_SESSION_TTL = timedelta(days=30)


def create_session(db: Session, user_id: str, ttl: timedelta = DEFAULT_SESSION_TTL) -> str:
    token = generate_session_token()
    db.add(UserSession(user_id=user_id, token=token, expires_at=utcnow() + ttl))
    db.commit()
    return token


def validate_session(db: Session, token: str) -> tuple[UserSession, User] | None:
    if not token:
        return None
    stmt = (
        select(UserSession)
        .options(joinedload(UserSession.user))
        .where(UserSession.token == token, UserSession.expires_at > utcnow())
    )
    session = db.execute(stmt).scalars().first()
    if session is None or session.user is None:
        return None
    return session, session.user


def delete_session(db: Session, token: str) -> None:
    db.execute(delete(UserSession).where(UserSession.token == token))
    db.commit()


def clean_expired_sessions(db: Session) -> int:
    result = db.execute(delete(UserSession).where(UserSession.expires_at <= utcnow()))
    db.commit()
    return result.rowcount or 0
