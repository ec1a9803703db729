"""Questionnaire creation, lookup and question editing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from rubric.db.base import session_dependency
from rubric.errors import UNDEFINED_QUESTIONNAIRE, UndefinedQuestionTypeError
from rubric.http.flash import Flash, flash_dependency
from rubric.http.problem import problem_response
from rubric.logic.advice_reconciler import reconcile_question_advice, reconcile_questionnaire_advice
from rubric.logic.question_updates import update_questionnaire_questions
from rubric.logic.questionnaire_factory import QuestionnaireFactory
from rubric.logic.repository_questions import QuestionRepository, QuestionnaireRepository
from rubric.models.requests import QuestionCreateModel, QuestionnaireCreateModel, QuestionsUpdateModel
from rubric.models.response_types import AdviceView, QuestionnaireView, QuestionsUpdated, QuestionView
from rubric.questionnaire_registry import QUESTION_TYPE_MAP, QUESTIONNAIRE_MAP


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/questionnaires",
    summary="Create a questionnaire of the given type",
    operation_id="createQuestionnaire",
    status_code=201,
)
def create_questionnaire(
    payload: QuestionnaireCreateModel,
    request: Request,
    session: Session = Depends(session_dependency),
    flash: Flash = Depends(flash_dependency),
):
    factory = QuestionnaireFactory(QUESTIONNAIRE_MAP, flash)
    questionnaire = factory.create(payload.type)
    if questionnaire is None:
        return problem_response(
            int(UNDEFINED_QUESTIONNAIRE["status"]),  # type: ignore[arg-type]
            str(UNDEFINED_QUESTIONNAIRE["title"]),
            flash.error or "",
            code=str(UNDEFINED_QUESTIONNAIRE["code"]),
            extra={"flash": flash.as_dict()},
        )

    scores = request.app.state.config.scores
    questionnaire.name = payload.name
    questionnaire.private = payload.private
    questionnaire.instruction_loc = payload.instruction_loc
    questionnaire.min_question_score = (
        payload.min_question_score if payload.min_question_score is not None else scores.default_min
    )
    questionnaire.max_question_score = (
        payload.max_question_score if payload.max_question_score is not None else scores.default_max
    )
    QuestionnaireRepository(session).add(questionnaire)
    logger.info(
        "questionnaire.created id=%s type=%s range=%s..%s",
        questionnaire.id,
        questionnaire.type,
        questionnaire.min_question_score,
        questionnaire.max_question_score,
    )
    return QuestionnaireView.model_validate(questionnaire).model_dump()


@router.get(
    "/questionnaires/{questionnaire_id}",
    summary="Get a questionnaire and its questions",
    operation_id="getQuestionnaire",
)
def get_questionnaire(questionnaire_id: int, session: Session = Depends(session_dependency)):
    questionnaire = QuestionnaireRepository(session).get(questionnaire_id)
    return QuestionnaireView.model_validate(questionnaire).model_dump()


@router.post(
    "/questionnaires/{questionnaire_id}/questions",
    summary="Add a question to a questionnaire",
    operation_id="addQuestion",
    status_code=201,
)
def add_question(
    questionnaire_id: int,
    payload: QuestionCreateModel,
    session: Session = Depends(session_dependency),
):
    questionnaire = QuestionnaireRepository(session).get(questionnaire_id)
    constructor = QUESTION_TYPE_MAP.get(payload.type)
    if constructor is None:
        raise UndefinedQuestionTypeError(payload.type)

    questions = QuestionRepository(session, questionnaire_id)
    question = constructor()
    question.txt = payload.txt
    question.weight = payload.weight
    question.seq = payload.seq if payload.seq is not None else questions.next_seq(questionnaire_id)
    question.size = payload.size
    question.alternatives = payload.alternatives
    question.break_before = payload.break_before
    question.questionnaire = questionnaire
    questions.save(question)

    advice = reconcile_question_advice(session, question.id)
    body = QuestionView.model_validate(question).model_dump()
    body["advice"] = [AdviceView.model_validate(a).model_dump() for a in advice]
    return body


@router.put(
    "/questionnaires/{questionnaire_id}/questions",
    summary="Save edited question fields and resize advice",
    operation_id="updateQuestionnaireQuestions",
)
def update_questions(
    questionnaire_id: int,
    payload: QuestionsUpdateModel,
    session: Session = Depends(session_dependency),
    flash: Flash = Depends(flash_dependency),
):
    questionnaire = QuestionnaireRepository(session).get(questionnaire_id)
    store = QuestionRepository(session, questionnaire_id)
    updated = update_questionnaire_questions(payload.question, store)

    questions = store.list_for_questionnaire(questionnaire_id)
    reconcile_questionnaire_advice(session, questions, questionnaire.score_range)
    if updated:
        flash.set_notice("All questions have been successfully saved!")
    return QuestionsUpdated(
        updated=[q.id for q in updated],
        questions=[QuestionView.model_validate(q) for q in questions],
        flash=flash.as_dict(),
    ).model_dump()


__all__ = ["router"]
