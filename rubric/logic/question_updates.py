"""Batch application of edited question fields from a submitted form.

The form maps question ids to `{field_name: raw_value}`. Only fields whose
coerced value differs from the stored one are assigned; every listed
question is saved whether or not anything changed.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)


class QuestionStore(Protocol):
    def get(self, question_id: Any) -> Any: ...

    def save(self, question: Any) -> Any: ...


def update_questionnaire_questions(
    form: Optional[Mapping[str, Mapping[str, str]]],
    store: QuestionStore,
) -> List[Any]:
    """Apply per-question field edits and save each listed question.

    Unknown field names raise UnknownQuestionFieldError and values that do
    not coerce raise InvalidFieldValueError; neither is swallowed.
    Returns the questions in form order.
    """
    if not form:
        return []

    updated: List[Any] = []
    for question_id, fields in form.items():
        question = store.get(question_id)
        changed: List[str] = []
        for name, raw in (fields or {}).items():
            value = question.coerce_field(name, raw)
            if getattr(question, name) != value:
                setattr(question, name, value)
                changed.append(name)
        store.save(question)
        logger.info("question.updated qid=%s changed=%s", question_id, changed)
        updated.append(question)
    return updated


__all__ = ["QuestionStore", "update_questionnaire_questions"]
