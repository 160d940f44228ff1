from __future__ import annotations

from .context import principal_ctx_var, request_id_ctx_var
from .request_id import RequestIdMiddleware
from .security_headers import SecurityHeadersMiddleware
from .session_gate import SessionGateMiddleware

__all__ = [
    "RequestIdMiddleware",
    "SecurityHeadersMiddleware",
    "SessionGateMiddleware",
    "request_id_ctx_var",
    "principal_ctx_var",
]
