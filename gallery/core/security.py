from __future__ import annotations

import hmac
import logging
import secrets

import bcrypt

from .config import AppSettings

logger = logging.getLogger(__name__)

SESSION_TOKEN_BYTES = 32


def generate_session_token() -> str:
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def verify_admin_credentials(settings: AppSettings, email: str, password: str) -> bool:
    """Check the single admin account configured through the environment.

    ``ADMIN_PASSWORD_HASH`` (bcrypt) takes precedence over the plain
    ``ADMIN_PASSWORD``. With neither configured, admin login is disabled.
    """

    if not email or not password:
        return False
    if not hmac.compare_digest(email.strip().lower(), settings.ADMIN_EMAIL.strip().lower()):
        return False
    hashed = (settings.ADMIN_PASSWORD_HASH or "").strip()
    if hashed:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            logger.warning("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
            return False
    plain = settings.ADMIN_PASSWORD or ""
    if not plain:
        return False
    return hmac.compare_digest(password.encode("utf-8"), plain.encode("utf-8"))
