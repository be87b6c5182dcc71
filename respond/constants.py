"""Constants for the respond package.

This module provides centralized constants for content types, header names
and the status codes that never carry a response body.
"""

from http import HTTPStatus


class ContentTypes:
    """Content types emitted by the response functions."""

    JSON = "application/json"
    PDF = "application/pdf"
    PLAIN = "application/plain"
    OCTET_STREAM = "application/octet-stream"


class Headers:
    """Header names set by the response functions."""

    CONTENT_TYPE = "Content-Type"
    CONTENT_DISPOSITION = "Content-Disposition"
    CONTENT_DESCRIPTION = "Content-Description"
    LOCATION = "Location"
    FORWARDED_PROTO = "X-Forwarded-Proto"


# Statuses that forbid or discourage a body
EMPTY_STATUS = frozenset(
    {
        HTTPStatus.CREATED,
        HTTPStatus.NO_CONTENT,
        HTTPStatus.RESET_CONTENT,
    }
)


def does_not_require_content(status_code: int) -> bool:
    """Return True when a response with ``status_code`` must not have a body."""
    return status_code in EMPTY_STATUS


__all__ = [
    "ContentTypes",
    "Headers",
    "EMPTY_STATUS",
    "does_not_require_content",
    "HTTPStatus",
]
