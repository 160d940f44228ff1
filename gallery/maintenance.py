#!/usr/bin/env python3
"""
Housekeeping commands for the gallery database.

Examples:
  python -m gallery.maintenance clean-sessions
  DATABASE_URL=sqlite:///data/gallery.db python -m gallery.maintenance clean-sessions

Exit codes:
  0 = success
  1 = database error
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from . import models  # noqa: F401  (registers tables)
from .core.config import settings
from .core.logging import configure_logging
from .crud.sessions import clean_expired_sessions
from .db.session import Base, SessionLocal, engine

logger = logging.getLogger("gallery.maintenance")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Gallery database maintenance.")
    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("clean-sessions", help="Delete login sessions whose expiry has passed.")
    return p.parse_args(argv)


def cmd_clean_sessions() -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        removed = clean_expired_sessions(db)
    except SQLAlchemyError:
        logger.exception("sessions.cleanup_failed")
        return 1
    finally:
        db.close()
    logger.info("sessions.cleaned", extra={"extra_data": {"removed": removed}})
    print(removed)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(settings.LOG_LEVEL)
    if args.command == "clean-sessions":
        return cmd_clean_sessions()
    return 2


if __name__ == "__main__":
    sys.exit(main())
