"""Classify request paths as public or protected.

The classifier is a pure function of the path string. It never touches the
request, cookies or the database, so it is safe to call from any middleware
and to reuse across concurrent requests.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class RouteClass(str, enum.Enum):
    PUBLIC = "public"
    PROTECTED = "protected"


@dataclass(frozen=True)
class GateConfig:
    """Everything the classifier and the admission gate need to know."""

    api_prefix: str = "/api/"
    asset_prefix: str = "/static/"
    favicon_prefix: str = "/favicon"
    public_pages: frozenset[str] = field(default_factory=lambda: frozenset({"/projects"}))
    login_path: str = "/login"
    special_access_path: str = "/a-access"
    cookie_name: str = "augment_session"


class RouteClassifier:
    def __init__(self, config: GateConfig) -> None:
        self.config = config

    def _is_public_page(self, path: str) -> bool:
        if path == "/":
            return True
        for page in self.config.public_pages:
            if path == page or path.startswith(page + "/"):
                return True
        return False

    def classify(self, path: str) -> RouteClass:
        """Return the route class for ``path``; rules are checked in priority order."""

        cfg = self.config
        # API handlers authorize themselves.
        if path.startswith(cfg.api_prefix):
            return RouteClass.PUBLIC
        if path.startswith(cfg.asset_prefix) or path.startswith(cfg.favicon_prefix):
            return RouteClass.PUBLIC
        if self._is_public_page(path):
            return RouteClass.PUBLIC
        if path in (cfg.login_path, cfg.special_access_path):
            return RouteClass.PUBLIC
        return RouteClass.PROTECTED


__all__ = ["GateConfig", "RouteClass", "RouteClassifier"]
