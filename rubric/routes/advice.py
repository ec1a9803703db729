"""Per-score question advice endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rubric.db.base import session_dependency
from rubric.logic.advice_reconciler import reconcile_question_advice
from rubric.logic.repository_advice import AdviceRepository
from rubric.logic.repository_questions import QuestionRepository
from rubric.models.requests import AdviceUpdateModel
from rubric.models.response_types import AdviceList, AdviceView


router = APIRouter()
logger = logging.getLogger(__name__)


def _advice_list(session: Session, question_id: int) -> dict:
    question = QuestionRepository(session).get(question_id)
    rows = reconcile_question_advice(session, question.id)
    score_range = question.questionnaire.score_range
    return AdviceList(
        question_id=question.id,
        min_score=score_range.min_score,
        max_score=score_range.max_score,
        advice=[AdviceView.model_validate(r) for r in rows],
    ).model_dump()


@router.get(
    "/questions/{question_id}/advice",
    summary="Resize and list the per-score advice of a question",
    operation_id="getQuestionAdvice",
)
def get_advice(question_id: int, session: Session = Depends(session_dependency)):
    return _advice_list(session, question_id)


@router.put(
    "/questions/{question_id}/advice",
    summary="Update advice texts for a question",
    operation_id="updateQuestionAdvice",
)
def update_advice(
    question_id: int,
    payload: AdviceUpdateModel,
    session: Session = Depends(session_dependency),
):
    question = QuestionRepository(session).get(question_id)
    changed = AdviceRepository(session).update_texts(question.id, payload.advice)
    logger.info("advice.updated qid=%s changed=%s", question.id, changed)
    return _advice_list(session, question.id)


__all__ = ["router"]
