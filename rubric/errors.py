"""Domain exceptions and their central problem+json mapping.

Single source of truth for mapping domain failures to problem codes and
HTTP statuses. Route modules and the problem handlers import from here
instead of hardcoding strings or numbers.
"""

from __future__ import annotations

from typing import Dict

UNDEFINED_QUESTIONNAIRE_MESSAGE = "Error: Undefined Questionnaire"


class RubricError(Exception):
    """Base class for domain failures surfaced as problem+json."""


class QuestionnaireNotFoundError(RubricError, LookupError):
    def __init__(self, questionnaire_id: object) -> None:
        super().__init__(f"questionnaire {questionnaire_id} not found")
        self.questionnaire_id = questionnaire_id


class QuestionNotFoundError(RubricError, LookupError):
    def __init__(self, question_id: object) -> None:
        super().__init__(f"question {question_id} not found")
        self.question_id = question_id


class UnknownQuestionFieldError(RubricError, AttributeError):
    """Raised when a form names a field that is not updatable on a question."""

    def __init__(self, field_name: str, question_type: str) -> None:
        super().__init__(f"{question_type} has no updatable field '{field_name}'")
        self.field_name = field_name
        self.question_type = question_type


class InvalidFieldValueError(RubricError, ValueError):
    def __init__(self, field_name: str, raw_value: object) -> None:
        super().__init__(f"invalid value {raw_value!r} for field '{field_name}'")
        self.field_name = field_name
        self.raw_value = raw_value


class UndefinedQuestionTypeError(RubricError, LookupError):
    def __init__(self, type_key: object) -> None:
        super().__init__(f"undefined question type {type_key!r}")
        self.type_key = type_key


ERROR_MAP: Dict[type, Dict[str, object]] = {
    QuestionnaireNotFoundError: {"code": "QUESTIONNAIRE_NOT_FOUND", "status": 404, "title": "Questionnaire not found"},
    QuestionNotFoundError: {"code": "QUESTION_NOT_FOUND", "status": 404, "title": "Question not found"},
    UnknownQuestionFieldError: {"code": "QUESTION_FIELD_UNKNOWN", "status": 422, "title": "Unknown question field"},
    InvalidFieldValueError: {"code": "QUESTION_FIELD_INVALID", "status": 422, "title": "Invalid question field value"},
    UndefinedQuestionTypeError: {"code": "QUESTION_TYPE_UNDEFINED", "status": 422, "title": "Undefined question type"},
}

# Returned by the create route when the factory reports a miss through flash
UNDEFINED_QUESTIONNAIRE = {"code": "QUESTIONNAIRE_TYPE_UNDEFINED", "status": 422, "title": "Undefined Questionnaire"}


def lookup_error(exc: BaseException) -> Dict[str, object]:
    """Return the mapping entry for `exc`, walking its MRO."""
    for klass in type(exc).__mro__:
        if klass in ERROR_MAP:
            return ERROR_MAP[klass]
    return {"code": "INTERNAL_ERROR", "status": 500, "title": "Internal Server Error"}


__all__ = [
    "UNDEFINED_QUESTIONNAIRE_MESSAGE",
    "UNDEFINED_QUESTIONNAIRE",
    "RubricError",
    "QuestionnaireNotFoundError",
    "QuestionNotFoundError",
    "UnknownQuestionFieldError",
    "InvalidFieldValueError",
    "UndefinedQuestionTypeError",
    "ERROR_MAP",
    "lookup_error",
]
