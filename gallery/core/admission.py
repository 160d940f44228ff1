from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Union

from .routing import GateConfig, RouteClass, RouteClassifier


@dataclass(frozen=True)
class Proceed:
    pass


@dataclass(frozen=True)
class Redirect:
    target: str


Decision = Union[Proceed, Redirect]

_PROCEED = Proceed()


class AdmissionGate:
    """Decide whether a request may reach its handler.

    Only the presence of the session cookie is checked. The token is not
    decoded or looked up here; handlers resolve the identity themselves
    through ``gallery.deps.auth``.
    """

    def __init__(self, config: GateConfig) -> None:
        self.config = config
        self.classifier = RouteClassifier(config)

    def admit(self, path: str, cookies: Mapping[str, str]) -> Decision:
        if self.classifier.classify(path) is RouteClass.PUBLIC:
            return _PROCEED
        if not cookies.get(self.config.cookie_name):
            return Redirect(target=self.config.login_path)
        return _PROCEED


__all__ = ["AdmissionGate", "Decision", "Proceed", "Redirect"]
