from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.results import Err, ErrorKind, Ok, Result
from ..models import User


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalars().first()


def login_user(db: Session, payload: dict) -> Result:
    """Find or create the user behind a login form.

    With an email the existing account is reused; without one every login
    creates a fresh user.
    """

    name = (payload.get("name") or "").strip()
    if not name:
        return Err(ErrorKind.INVALID_INPUT, "Name is required")
    email = (payload.get("email") or "").strip() or None
    if email:
        existing = get_user_by_email(db, email)
        if existing is not None:
            return Ok(existing)
    user = User(
        name=name,
        x_profile=(payload.get("x_profile") or "").strip() or None,
        email=email,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return Ok(user)
