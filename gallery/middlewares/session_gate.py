from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.status import HTTP_302_FOUND

from ..core.admission import AdmissionGate, Redirect
from ..core.routing import GateConfig

logger = logging.getLogger("gallery.gate")


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Send browsers without a session cookie to the login page."""

    def __init__(self, app, config: GateConfig) -> None:  # type: ignore[override]
        super().__init__(app)
        self.gate = AdmissionGate(config)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        decision = self.gate.admit(request.url.path, request.cookies)
        if isinstance(decision, Redirect):
            logger.debug("gate.redirect", extra={"extra_data": {"path": request.url.path}})
            return RedirectResponse(url=decision.target, status_code=HTTP_302_FOUND)
        return await call_next(request)
