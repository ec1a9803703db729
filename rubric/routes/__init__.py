"""APIRouter registration for the Rubric Questionnaire Service."""

from __future__ import annotations

from fastapi import APIRouter

from rubric.routes.advice import router as advice_router
from rubric.routes.questionnaires import router as questionnaires_router

api_router = APIRouter()
api_router.include_router(questionnaires_router, tags=["Questionnaires"])
api_router.include_router(advice_router, tags=["Advice"])

__all__ = ["api_router"]
