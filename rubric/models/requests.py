"""Pydantic models for questionnaire, question and advice request payloads.

Kept apart from the route modules so payload structure is declared without
coupling it to the route implementation files.
"""

from __future__ import annotations

from typing import Dict, Optional, Union

from pydantic import BaseModel, Field

FormValue = Union[str, int, float, bool]


class QuestionnaireCreateModel(BaseModel):
    type: Optional[str] = None
    name: str = Field(min_length=1, max_length=64)
    min_question_score: Optional[int] = Field(default=None, ge=0)
    max_question_score: Optional[int] = None
    private: bool = False
    instruction_loc: Optional[str] = None


class QuestionCreateModel(BaseModel):
    type: str
    txt: str = ""
    weight: int = 1
    seq: Optional[float] = None
    size: Optional[str] = None
    alternatives: Optional[str] = None
    break_before: bool = True


class QuestionsUpdateModel(BaseModel):
    # question id -> {field name -> raw form value}
    question: Optional[Dict[str, Dict[str, FormValue]]] = None


class AdviceUpdateModel(BaseModel):
    # advice id -> advice text
    advice: Dict[int, str] = Field(default_factory=dict)


__all__ = [
    "QuestionnaireCreateModel",
    "QuestionCreateModel",
    "QuestionsUpdateModel",
    "AdviceUpdateModel",
]
