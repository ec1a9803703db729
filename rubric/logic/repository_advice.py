"""Question advice data access helpers.

Encapsulates the advice queries used by reconciliation and the advice routes,
keeping the HTTP layer free of direct SQL. Failures are logged at ERROR with
exc_info and re-raised; callers own the transaction.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from rubric.models.orm import QuestionAdvice

logger = logging.getLogger(__name__)


class AdviceRepository:
    def __init__(self, session: Session):
        self.session = session

    def delete_outside_range(self, question_id: int, min_score: int, max_score: int) -> int:
        """Delete advice rows for `question_id` scored above `max_score` or below `min_score`."""
        stmt = (
            delete(QuestionAdvice)
            .where(
                QuestionAdvice.question_id == question_id,
                or_(QuestionAdvice.score > max_score, QuestionAdvice.score < min_score),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.session.execute(stmt)
        except Exception:
            logger.error(
                "delete_outside_range failed qid=%s min=%s max=%s",
                question_id,
                min_score,
                max_score,
                exc_info=True,
            )
            raise
        return int(result.rowcount or 0)

    def find_for_score(self, question_id: int, score: int) -> Sequence[QuestionAdvice]:
        stmt = select(QuestionAdvice).where(
            QuestionAdvice.question_id == question_id,
            QuestionAdvice.score == score,
        )
        try:
            return self.session.scalars(stmt).all()
        except Exception:
            logger.error("find_for_score failed qid=%s score=%s", question_id, score, exc_info=True)
            raise

    def delete_for_score(self, question_id: int, score: int) -> int:
        """Delete every advice row for (`question_id`, `score`)."""
        stmt = (
            delete(QuestionAdvice)
            .where(
                QuestionAdvice.question_id == question_id,
                QuestionAdvice.score == score,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.session.execute(stmt)
        except Exception:
            logger.error("delete_for_score failed qid=%s score=%s", question_id, score, exc_info=True)
            raise
        return int(result.rowcount or 0)

    def list_for_question(self, question_id: int) -> List[QuestionAdvice]:
        stmt = (
            select(QuestionAdvice)
            .where(QuestionAdvice.question_id == question_id)
            .order_by(QuestionAdvice.score.asc(), QuestionAdvice.id.asc())
        )
        return list(self.session.scalars(stmt).all())

    def update_texts(self, question_id: int, texts: Dict[int, str]) -> int:
        """Set advice text by advice id, restricted to rows owned by `question_id`.

        Returns the number of rows whose text changed. Ids that do not belong
        to the question are skipped with a warning.
        """
        changed = 0
        for advice_id, text in texts.items():
            row = self.session.scalars(
                select(QuestionAdvice).where(QuestionAdvice.id == advice_id)
            ).first()
            if row is None or row.question_id != question_id:
                logger.warning(
                    "advice_update_skipped advice_id=%s qid=%s", advice_id, question_id
                )
                continue
            if row.advice != text:
                row.advice = text
                changed += 1
        return changed


__all__ = ["AdviceRepository"]
