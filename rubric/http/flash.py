"""Request-scoped flash message store.

Collects user-facing notices raised while handling a single request so the
route can return them in its response body.
"""

from __future__ import annotations

from typing import Dict, Optional


class Flash:
    def __init__(self) -> None:
        self._messages: Dict[str, str] = {}

    def set_error(self, message: str) -> None:
        self._messages["error"] = message

    def set_notice(self, message: str) -> None:
        self._messages["notice"] = message

    @property
    def error(self) -> Optional[str]:
        return self._messages.get("error")

    def as_dict(self) -> Dict[str, str]:
        return dict(self._messages)


def flash_dependency() -> Flash:
    """FastAPI dependency returning a fresh flash store per request."""
    return Flash()


__all__ = ["Flash", "flash_dependency"]
