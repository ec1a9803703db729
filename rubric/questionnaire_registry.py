"""Static type tables for questionnaire and question construction."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping, Optional

from rubric.models import orm


QUESTIONNAIRE_MAP: Mapping[str, Optional[Callable[[], orm.Questionnaire]]] = MappingProxyType({
    "AssignmentSurveyQuestionnaire": orm.AssignmentSurveyQuestionnaire,
    "AuthorFeedbackQuestionnaire": orm.AuthorFeedbackQuestionnaire,
    "BookmarkRatingQuestionnaire": orm.BookmarkRatingQuestionnaire,
    "CourseSurveyQuestionnaire": orm.CourseSurveyQuestionnaire,
    "GlobalSurveyQuestionnaire": orm.GlobalSurveyQuestionnaire,
    "MetareviewQuestionnaire": orm.MetareviewQuestionnaire,
    "QuizQuestionnaire": orm.QuizQuestionnaire,
    "ReviewQuestionnaire": orm.ReviewQuestionnaire,
    "TeammateReviewQuestionnaire": orm.TeammateReviewQuestionnaire,
})

QUESTION_TYPE_MAP: Mapping[str, Callable[[], orm.Question]] = MappingProxyType({
    "Criterion": orm.Criterion,
    "Scale": orm.Scale,
    "Checkbox": orm.Checkbox,
    "TextArea": orm.TextArea,
    "TextField": orm.TextField,
    "SectionHeader": orm.SectionHeader,
})

__all__ = ["QUESTIONNAIRE_MAP", "QUESTION_TYPE_MAP"]
