"""ORM models for questionnaires, questions and per-score question advice.

Questionnaires and questions use single-table inheritance keyed by a `type`
discriminator column. Whether a question takes part in advice reconciliation
is declared by the class-level `is_scored` flag rather than by type checks.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from rubric.db.base import Base
from rubric.errors import InvalidFieldValueError, UnknownQuestionFieldError
from rubric.models.score_range import ScoreRange


def _to_text(raw: str) -> str:
    return str(raw)


def _to_int(raw: str) -> int:
    return int(str(raw).strip())


def _to_float(raw: str) -> float:
    return float(str(raw).strip())


def _to_bool(raw: str) -> bool:
    token = str(raw).strip().lower()
    if token in {"1", "true", "yes", "on"}:
        return True
    if token in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(token)


class Questionnaire(Base):  # type: ignore[valid-type,misc]
    __tablename__ = "questionnaires"

    id = Column(Integer, primary_key=True)
    name = Column(String(64), nullable=False)
    type = Column(String(64), nullable=False)
    min_question_score = Column(Integer, nullable=False, default=0)
    max_question_score = Column(Integer, nullable=False, default=5)
    private = Column(Boolean, nullable=False, default=False)
    instruction_loc = Column(Text, nullable=True)

    questions = relationship(
        "Question",
        back_populates="questionnaire",
        cascade="all, delete-orphan",
        order_by="Question.seq",
    )

    __mapper_args__ = {"polymorphic_on": type, "polymorphic_identity": "Questionnaire"}

    @property
    def score_range(self) -> ScoreRange:
        low = self.min_question_score if self.min_question_score is not None else 0
        high = self.max_question_score if self.max_question_score is not None else 5
        return ScoreRange(int(low), int(high))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id} {self.name!r}>"


class ReviewQuestionnaire(Questionnaire):
    __mapper_args__ = {"polymorphic_identity": "ReviewQuestionnaire"}


class MetareviewQuestionnaire(Questionnaire):
    __mapper_args__ = {"polymorphic_identity": "MetareviewQuestionnaire"}


class AuthorFeedbackQuestionnaire(Questionnaire):
    __mapper_args__ = {"polymorphic_identity": "AuthorFeedbackQuestionnaire"}


class TeammateReviewQuestionnaire(Questionnaire):
    __mapper_args__ = {"polymorphic_identity": "TeammateReviewQuestionnaire"}


class AssignmentSurveyQuestionnaire(Questionnaire):
    __mapper_args__ = {"polymorphic_identity": "AssignmentSurveyQuestionnaire"}


class GlobalSurveyQuestionnaire(Questionnaire):
    __mapper_args__ = {"polymorphic_identity": "GlobalSurveyQuestionnaire"}


class CourseSurveyQuestionnaire(Questionnaire):
    __mapper_args__ = {"polymorphic_identity": "CourseSurveyQuestionnaire"}


class BookmarkRatingQuestionnaire(Questionnaire):
    __mapper_args__ = {"polymorphic_identity": "BookmarkRatingQuestionnaire"}


class QuizQuestionnaire(Questionnaire):
    __mapper_args__ = {"polymorphic_identity": "QuizQuestionnaire"}


class Question(Base):  # type: ignore[valid-type,misc]
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True)
    questionnaire_id = Column(Integer, ForeignKey("questionnaires.id", ondelete="CASCADE"), nullable=False)
    txt = Column(Text, nullable=True)
    weight = Column(Integer, nullable=False, default=1)
    seq = Column(Float, nullable=True)
    size = Column(String(64), nullable=True)
    alternatives = Column(String(255), nullable=True)
    break_before = Column(Boolean, nullable=False, default=True)
    min_label = Column(String(64), nullable=True)
    max_label = Column(String(64), nullable=True)
    type = Column(String(64), nullable=False)

    questionnaire = relationship("Questionnaire", back_populates="questions")
    question_advices = relationship(
        "QuestionAdvice",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="QuestionAdvice.score",
    )

    __mapper_args__ = {"polymorphic_on": type, "polymorphic_identity": "Question"}

    is_scored = False

    # Field name -> coercion from the raw form string
    UPDATABLE_FIELDS = {
        "txt": _to_text,
        "weight": _to_int,
        "seq": _to_float,
        "size": _to_text,
        "alternatives": _to_text,
        "break_before": _to_bool,
    }

    def coerce_field(self, name: str, raw: str) -> Any:
        """Return `raw` converted to the native type of updatable field `name`."""
        try:
            setter = self.UPDATABLE_FIELDS[name]
        except KeyError:
            raise UnknownQuestionFieldError(name, type(self).__name__) from None
        try:
            return setter(raw)
        except (TypeError, ValueError):
            raise InvalidFieldValueError(name, raw) from None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id} seq={self.seq}>"


class ScoredQuestion(Question):
    __mapper_args__ = {"polymorphic_identity": "ScoredQuestion"}

    is_scored = True


class Criterion(ScoredQuestion):
    __mapper_args__ = {"polymorphic_identity": "Criterion"}


class Scale(ScoredQuestion):
    __mapper_args__ = {"polymorphic_identity": "Scale"}

    UPDATABLE_FIELDS = {
        **Question.UPDATABLE_FIELDS,
        "min_label": _to_text,
        "max_label": _to_text,
    }


class UnscoredQuestion(Question):
    __mapper_args__ = {"polymorphic_identity": "UnscoredQuestion"}


class Checkbox(UnscoredQuestion):
    __mapper_args__ = {"polymorphic_identity": "Checkbox"}


class TextArea(UnscoredQuestion):
    __mapper_args__ = {"polymorphic_identity": "TextArea"}


class TextField(UnscoredQuestion):
    __mapper_args__ = {"polymorphic_identity": "TextField"}


class SectionHeader(UnscoredQuestion):
    __mapper_args__ = {"polymorphic_identity": "SectionHeader"}


class QuestionAdvice(Base):  # type: ignore[valid-type,misc]
    __tablename__ = "question_advices"

    id = Column(Integer, primary_key=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    score = Column(Integer, nullable=True)
    advice = Column(Text, nullable=False, default="")

    question = relationship("Question", back_populates="question_advices")

    def __repr__(self) -> str:
        return f"<QuestionAdvice {self.id} question={self.question_id} score={self.score}>"


__all__ = [
    "Questionnaire",
    "ReviewQuestionnaire",
    "MetareviewQuestionnaire",
    "AuthorFeedbackQuestionnaire",
    "TeammateReviewQuestionnaire",
    "AssignmentSurveyQuestionnaire",
    "GlobalSurveyQuestionnaire",
    "CourseSurveyQuestionnaire",
    "BookmarkRatingQuestionnaire",
    "QuizQuestionnaire",
    "Question",
    "ScoredQuestion",
    "Criterion",
    "Scale",
    "UnscoredQuestion",
    "Checkbox",
    "TextArea",
    "TextField",
    "SectionHeader",
    "QuestionAdvice",
]
