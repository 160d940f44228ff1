from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4


def utcnow() -> datetime:
    # SQLite drops tzinfo, so timestamps are stored as naive UTC.
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid4())
