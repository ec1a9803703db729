"""Construction of questionnaire subtypes from their type names."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Protocol

from rubric.errors import UNDEFINED_QUESTIONNAIRE_MESSAGE

logger = logging.getLogger(__name__)


class ErrorChannel(Protocol):
    def set_error(self, message: str) -> None: ...


class QuestionnaireFactory:
    """Build a questionnaire instance for a type key from an injected table.

    A miss (no key, unknown key, key mapped to None, empty table) reports
    "Error: Undefined Questionnaire" on the error channel and yields None.
    """

    def __init__(self, type_map: Mapping[str, Optional[Callable[[], Any]]], flash: ErrorChannel):
        self.type_map = type_map
        self.flash = flash

    def create(self, type_key: Optional[str]) -> Any:
        constructor = self.type_map.get(type_key) if isinstance(type_key, str) else None
        if constructor is None:
            logger.warning("questionnaire_factory.undefined type=%r", type_key)
            self.flash.set_error(UNDEFINED_QUESTIONNAIRE_MESSAGE)
            return None
        return constructor()


__all__ = ["ErrorChannel", "QuestionnaireFactory"]
