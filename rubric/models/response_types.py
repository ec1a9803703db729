"""Pydantic models for questionnaire, question and advice response bodies."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class AdviceView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: int
    score: Optional[int] = None
    advice: str = ""


class QuestionView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    questionnaire_id: int
    type: str
    txt: Optional[str] = None
    weight: int
    seq: Optional[float] = None
    size: Optional[str] = None
    alternatives: Optional[str] = None
    break_before: bool
    min_label: Optional[str] = None
    max_label: Optional[str] = None
    is_scored: bool


class QuestionnaireView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    name: str
    min_question_score: int
    max_question_score: int
    private: bool
    instruction_loc: Optional[str] = None
    questions: List[QuestionView] = []


class AdviceList(BaseModel):
    question_id: int
    min_score: int
    max_score: int
    advice: List[AdviceView]


class QuestionsUpdated(BaseModel):
    updated: List[int]
    questions: List[QuestionView]
    flash: Dict[str, str] = {}


__all__ = [
    "AdviceView",
    "QuestionView",
    "QuestionnaireView",
    "AdviceList",
    "QuestionsUpdated",
]
