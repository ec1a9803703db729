"""Behave environment hooks for Rubric Questionnaire Service integration tests.

Scenarios talk HTTP to a live API at `TEST_BASE_URL` and seed rows directly
through `TEST_DATABASE_URL`. When the base URL points at localhost and no API
is answering, a uvicorn server is booted on a free port for the run. Without
any configuration, a file-backed SQLite database under tmp/ is used.
"""

from __future__ import annotations

import os
import socket
import subprocess
import sys
import time
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx

_ROOT = Path(__file__).resolve().parents[3]


def _default_database_url() -> str:
    db_file = _ROOT / "tmp" / "integration.db"
    db_file.parent.mkdir(parents=True, exist_ok=True)
    if db_file.exists():
        db_file.unlink()
    return f"sqlite:///{db_file}"


def _is_api_listening(base_url: str) -> bool:
    try:
        with httpx.Client(timeout=2.0) as client:
            return client.get(base_url + "/health").status_code == 200
    except httpx.HTTPError:
        return False


def _choose_free_port(host: str) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def before_all(context: Any) -> None:
    """Resolve the API and database under test, booting a local API if needed."""
    os.environ.setdefault("TEST_DATABASE_URL", _default_database_url())
    os.environ.setdefault("DATABASE_URL", os.environ["TEST_DATABASE_URL"])
    os.environ.setdefault("AUTO_CREATE_SCHEMA", "1")

    context.test_database_url = os.environ["TEST_DATABASE_URL"]
    context.test_base_url = os.getenv("TEST_BASE_URL", "http://127.0.0.1:0").rstrip("/")
    context.api_prefix = os.getenv("TEST_API_PREFIX", "/api/v1")
    context._api_proc = None

    parsed = urlparse(context.test_base_url)
    host_is_local = parsed.hostname in {"localhost", "127.0.0.1", "::1"}
    if host_is_local and not _is_api_listening(context.test_base_url):
        host = parsed.hostname or "127.0.0.1"
        port = _choose_free_port(host)
        context.test_base_url = f"{parsed.scheme}://{host}:{port}"
        context._api_proc = subprocess.Popen(
            [
                sys.executable,
                "-m",
                "uvicorn",
                "rubric.main:create_app",
                "--factory",
                "--host",
                host,
                "--port",
                str(port),
                "--log-level",
                "warning",
            ],
            cwd=str(_ROOT),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            env=os.environ.copy(),
        )
        deadline = time.time() + 15.0
        while time.time() < deadline:
            if _is_api_listening(context.test_base_url):
                break
            time.sleep(0.2)

    assert _is_api_listening(context.test_base_url), (
        f"API under test is not reachable at {context.test_base_url}"
    )
    context.http = httpx.Client(base_url=context.test_base_url + context.api_prefix, timeout=10.0)


def after_all(context: Any) -> None:
    http = getattr(context, "http", None)
    if http is not None:
        http.close()
    proc = getattr(context, "_api_proc", None)
    if proc is not None:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
