"""Application factory and top-level wiring for the gallery service.

Middlewares run outermost first: request ids, security headers, then the
session admission gate, so redirects issued by the gate are still tagged and
logged.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import AppSettings, get_settings
from .core.errors import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from .middlewares import RequestIdMiddleware, SecurityHeadersMiddleware, SessionGateMiddleware
from .routers import api_auth, api_comments, api_hearts, api_projects


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build a gallery app; ``settings`` replaces the environment-driven defaults."""

    settings = settings or get_settings()
    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    if settings.ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(SessionGateMiddleware, config=settings.gate_config())
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.SESSION_COOKIE_SECURE)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_auth.router)
    app.include_router(api_projects.router)
    app.include_router(api_hearts.router)
    app.include_router(api_comments.router)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Under the API namespace so the admission gate lets probes through.
    @app.get("/api/health", tags=["ops"])
    async def health() -> dict[str, bool]:
        return {"ok": True}

    return app


__all__ = ["create_app"]
