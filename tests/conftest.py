"""Shared fixtures for respond tests."""

from typing import Dict, Optional

import pytest
from starlette.requests import Request

from respond.config import set_config
from respond.writer import ResponseBuffer


@pytest.fixture(autouse=True)
def reset_config():
    """Make every test start from the environment-derived configuration."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def buffer():
    """Fresh in-memory response writer."""
    return ResponseBuffer()


def build_request(
    path: str = "/ok",
    *,
    scheme: str = "http",
    host: str = "localhost",
    method: str = "GET",
    headers: Optional[Dict[str, str]] = None,
) -> Request:
    """Build a Starlette request without a running server."""
    raw_headers = [(b"host", host.encode("latin-1"))]
    for name, value in (headers or {}).items():
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": scheme,
        "server": (host, 443 if scheme == "https" else 80),
        "path": path,
        "root_path": "",
        "query_string": b"",
        "headers": raw_headers,
    }
    return Request(scope)


@pytest.fixture
def request_factory():
    """Factory building requests for Location URL tests."""
    return build_request
