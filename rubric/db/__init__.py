"""Database bootstrap utilities for the Rubric Questionnaire Service.

This module exposes convenience imports for engine/session construction and
schema creation. ORM models live in `rubric/models/` and are not leaked into
route handlers beyond the repositories that load them.
"""

from rubric.db.base import Base, create_schema, get_engine, get_sessionmaker, session_dependency

__all__ = [
    "Base",
    "get_engine",
    "get_sessionmaker",
    "session_dependency",
    "create_schema",
]
