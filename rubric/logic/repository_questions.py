"""Question and questionnaire repository helpers.

Encapsulates ORM reads/writes used by the questionnaire routes, keeping the
HTTP layer free of direct queries. Write failures are logged at ERROR with
exc_info and re-raised so callers decide the recovery path.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from rubric.errors import QuestionNotFoundError, QuestionnaireNotFoundError
from rubric.models.orm import Question, Questionnaire

logger = logging.getLogger(__name__)


class QuestionRepository:
    """Question lookups, optionally scoped to a single questionnaire."""

    def __init__(self, session: Session, questionnaire_id: Optional[int] = None):
        self.session = session
        self.questionnaire_id = questionnaire_id

    def get(self, question_id: object) -> Question:
        """Return the question for an id given as int or numeric string."""
        try:
            pk = int(str(question_id).strip())
        except (TypeError, ValueError):
            raise QuestionNotFoundError(question_id) from None
        question = self.session.get(Question, pk)
        if question is None:
            raise QuestionNotFoundError(question_id)
        if self.questionnaire_id is not None and question.questionnaire_id != self.questionnaire_id:
            raise QuestionNotFoundError(question_id)
        return question

    def save(self, question: Question) -> Question:
        try:
            self.session.add(question)
            self.session.flush()
        except Exception:
            logger.error("question save failed qid=%s", getattr(question, "id", None), exc_info=True)
            raise
        return question

    def next_seq(self, questionnaire_id: int) -> float:
        """Return the next sequence value for a questionnaire (MAX(seq) + 1)."""
        current = self.session.scalar(
            select(func.coalesce(func.max(Question.seq), 0)).where(Question.questionnaire_id == questionnaire_id)
        )
        return float(current or 0) + 1

    def list_for_questionnaire(self, questionnaire_id: int) -> List[Question]:
        stmt = (
            select(Question)
            .where(Question.questionnaire_id == questionnaire_id)
            .order_by(Question.seq.asc(), Question.id.asc())
        )
        return list(self.session.scalars(stmt).all())


class QuestionnaireRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, questionnaire_id: int) -> Questionnaire:
        questionnaire: Optional[Questionnaire] = self.session.get(Questionnaire, questionnaire_id)
        if questionnaire is None:
            raise QuestionnaireNotFoundError(questionnaire_id)
        return questionnaire

    def add(self, questionnaire: Questionnaire) -> Questionnaire:
        try:
            self.session.add(questionnaire)
            self.session.flush()
        except Exception:
            logger.error(
                "questionnaire insert failed type=%s name=%s",
                getattr(questionnaire, "type", None),
                getattr(questionnaire, "name", None),
                exc_info=True,
            )
            raise
        return questionnaire


__all__ = ["QuestionRepository", "QuestionnaireRepository"]
