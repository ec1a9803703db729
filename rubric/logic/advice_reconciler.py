"""Per-score advice reconciliation for scored questions.

A scored question carries one advice entry for every integer score in its
questionnaire's inclusive range. `adjust_advice_size` removes advice outside
the range, collapses duplicated scores and adds entries for missing scores.

A score with duplicate rows loses all of them in one pass; the following pass
sees the score as missing and recreates a single entry.
"""

from __future__ import annotations

import logging
from typing import Any, List, Protocol, Sequence

from sqlalchemy.orm import Session

from rubric.errors import QuestionNotFoundError
from rubric.logic.repository_advice import AdviceRepository
from rubric.models.orm import Question, QuestionAdvice
from rubric.models.score_range import ScoreRange

logger = logging.getLogger(__name__)


class AdviceStore(Protocol):
    def delete_outside_range(self, question_id: Any, min_score: int, max_score: int) -> Any: ...

    def find_for_score(self, question_id: Any, score: int) -> Sequence[Any]: ...

    def delete_for_score(self, question_id: Any, score: int) -> Any: ...


def adjust_advice_size(score_range: ScoreRange, question: Any, store: AdviceStore) -> None:
    """Make `question` hold exactly one advice entry per score in `score_range`.

    Questions without the scored capability are left untouched and `store`
    is never called. For scored questions the out-of-range delete is issued
    exactly once, even for an empty range. New entries are appended to
    `question.question_advices` and persisted with the question's session.
    """
    if not getattr(question, "is_scored", False):
        return

    store.delete_outside_range(question.id, score_range.min_score, score_range.max_score)
    if score_range.is_empty:
        logger.info("advice.cleared qid=%s range=%s..%s", question.id, score_range.min_score, score_range.max_score)
        return

    created: List[int] = []
    collapsed: List[int] = []
    for score in score_range:
        rows = store.find_for_score(question.id, score)
        if len(rows) == 0:
            question.question_advices.append(QuestionAdvice(question_id=question.id, score=score))
            created.append(score)
        elif len(rows) > 1:
            store.delete_for_score(question.id, score)
            collapsed.append(score)

    logger.info(
        "advice.reconciled qid=%s range=%s..%s created=%s collapsed=%s",
        question.id,
        score_range.min_score,
        score_range.max_score,
        created,
        collapsed,
    )


def reconcile_question_advice(session: Session, question_id: int) -> List[QuestionAdvice]:
    """Reconcile one stored question against its questionnaire's range.

    Returns the question's advice rows ordered by score after reconciliation.
    Raises QuestionNotFoundError when the question does not exist.
    """
    question = session.get(Question, question_id)
    if question is None:
        raise QuestionNotFoundError(question_id)
    repo = AdviceRepository(session)
    adjust_advice_size(question.questionnaire.score_range, question, repo)
    rows = repo.list_for_question(question.id)
    # Bulk deletes bypass the identity map; reload the collection on next access
    session.expire(question, ["question_advices"])
    return rows


def reconcile_questionnaire_advice(session: Session, questions: Sequence[Question], score_range: ScoreRange) -> None:
    """Reconcile every question of a questionnaire against `score_range` and flush."""
    repo = AdviceRepository(session)
    for question in questions:
        adjust_advice_size(score_range, question, repo)
    session.flush()
    for question in questions:
        session.expire(question, ["question_advices"])


__all__ = [
    "AdviceStore",
    "adjust_advice_size",
    "reconcile_question_advice",
    "reconcile_questionnaire_advice",
]
