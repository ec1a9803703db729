"""FastAPI application package for the Rubric Questionnaire Service.

This package exposes a small FastAPI application factory. It wires the
problem+json exception handlers and mounts the API routers. Business logic
lives in `rubric/logic/` and route handlers in `rubric/routes/`.
"""

from __future__ import annotations

from rubric.main import create_app

__all__ = ["create_app"]
