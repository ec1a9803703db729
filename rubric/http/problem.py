"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and handler callables that produce
application/problem+json responses for HTTP, validation, domain and
unexpected errors.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from rubric.errors import RubricError, lookup_error

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def problem_response(
    status: int,
    title: str,
    detail: str = "",
    *,
    code: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {"type": "about:blank", "title": title, "status": status, "detail": detail}
    if code:
        body["code"] = code
    if extra:
        body.update(extra)
    return JSONResponse(jsonable_encoder(body), status_code=status, media_type=PROBLEM_MEDIA_TYPE)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status = int(getattr(exc, "status_code", 500) or 500)
    if isinstance(exc.detail, dict):
        response = JSONResponse(exc.detail, status_code=status, media_type=PROBLEM_MEDIA_TYPE)
    else:
        response = problem_response(status, "Error", str(exc.detail or ""))
    if isinstance(getattr(exc, "headers", None), dict):
        response.headers.update({str(k): str(v) for k, v in exc.headers.items()})
    return response


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    logger.info(
        "validation_422 route=%s method=%s errors_cnt=%s",
        request.url.path,
        request.method,
        len(exc.errors()),
    )
    return problem_response(
        422,
        "Invalid Request",
        "Request validation failed",
        extra={"errors": list(exc.errors())},
    )


async def handle_rubric_error(request: Request, exc: RubricError) -> JSONResponse:  # noqa: D401
    mapping = lookup_error(exc)
    logger.info("error_handler.handle code=%s path=%s", mapping["code"], request.url.path)
    return problem_response(
        int(mapping["status"]),  # type: ignore[arg-type]
        str(mapping["title"]),
        str(exc),
        code=str(mapping["code"]),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=True)
    return problem_response(500, "Internal Server Error")


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "problem_response",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_rubric_error",
    "handle_unexpected_error",
]
