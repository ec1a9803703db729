"""Functional test bootstrap for the Rubric Questionnaire Service.

Functional tests share a file-backed SQLite database. The schema is created
once at session start, and every test starts from empty tables.
"""

from __future__ import annotations

import os
import pathlib

import pytest

# Point the app at the shared SQLite file before any rubric module builds an engine
_ROOT = pathlib.Path(__file__).resolve().parents[2]
_DB_FILE = _ROOT / "tmp" / "functional_tests.db"
_DB_FILE.parent.mkdir(parents=True, exist_ok=True)
if _DB_FILE.exists():
    _DB_FILE.unlink()

os.environ["TEST_DATABASE_URL"] = f"sqlite:///{_DB_FILE}"
os.environ["DATABASE_URL"] = os.environ["TEST_DATABASE_URL"]
os.environ["AUTO_CREATE_SCHEMA"] = "0"
for _key in ("DEFAULT_MIN_QUESTION_SCORE", "DEFAULT_MAX_QUESTION_SCORE", "LOG_LEVEL"):
    os.environ.pop(_key, None)


@pytest.fixture(scope="session", autouse=True)
def functional_sqlite_bootstrap():
    """Session-level bootstrap: create tables once for the shared DB."""
    from rubric.db.base import create_schema, get_engine

    create_schema(get_engine(os.environ["TEST_DATABASE_URL"]))
    yield


@pytest.fixture(autouse=True)
def clean_tables(functional_sqlite_bootstrap):
    yield
    from sqlalchemy import delete

    from rubric.db.base import get_engine
    from rubric.models.orm import Question, QuestionAdvice, Questionnaire

    with get_engine().begin() as conn:
        conn.execute(delete(QuestionAdvice))
        conn.execute(delete(Question))
        conn.execute(delete(Questionnaire))


@pytest.fixture
def db_session():
    from rubric.db.base import get_sessionmaker

    session = get_sessionmaker()()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from rubric.main import create_app

    return TestClient(create_app())
