from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text

from rubric.config import load_config
from rubric.db.base import create_schema, get_engine
from rubric.errors import RubricError
from rubric.http.problem import (
    handle_http_exception,
    handle_request_validation_error,
    handle_rubric_error,
    handle_unexpected_error,
)
from rubric.logging_setup import configure_logging
from rubric.routes import api_router

logger = logging.getLogger(__name__)


def _health_check() -> dict:
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ok", "db": True}
    except Exception as e:
        logger.error("Health DB check failed", exc_info=True)
        return {"status": "degraded", "db": False, "reason": str(e)}


def create_app() -> FastAPI:
    config = load_config()
    try:
        configure_logging(config.logging.level)
    except Exception:
        logging.getLogger(__name__).error("global_logging_configuration_failed", exc_info=True)

    app = FastAPI(title="Rubric Questionnaire Service")
    app.state.config = config
    # Bind the shared engine to the configured DSN before any session is opened
    get_engine(config.database.dsn)

    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(RubricError, handle_rubric_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Create tables on startup (guarded) to avoid import-time side effects
    @app.on_event("startup")
    def _create_schema() -> None:
        if not config.auto_create_schema:
            logger.info("AUTO_CREATE_SCHEMA disabled; skipping schema creation at startup")
            return
        try:
            create_schema(get_engine())
        except Exception:
            logger.error("Failed to create schema at startup", exc_info=True)
            raise

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health")
    def health():  # pragma: no cover - trivial
        return _health_check()

    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
