"""respond: map handler outcomes onto HTTP responses.

This package provides one short call per HTTP outcome (ok, created,
not found, ...), structured rendering for errors that declare their own
status, and file downloads with fixed content types.
"""

from .config import RespondConfig, get_config, load_config, set_config
from .constants import EMPTY_STATUS, ContentTypes, Headers
from .errors import (
    APIError,
    BadRequestError,
    ConflictError,
    ErrorDescriptor,
    ErrorFormatter,
    ForbiddenError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from .responses import (
    UriComponentsBuilder,
    bad_request,
    build_location_url,
    compose_custom_error,
    conflict,
    created,
    error,
    excel,
    forbidden,
    internal_server_error,
    no_content,
    not_found,
    ok,
    pdf,
    plain,
    unauthorized,
    unprocessable_entity,
)
from .integration import get_responder, register_exception_handlers
from .logging_config import configure_logging
from .responder import Responder
from .writer import ResponseBuffer, ResponseWriter

__version__ = "0.1.0"

__all__ = [
    # Responder
    "Responder",
    "ResponseWriter",
    "ResponseBuffer",
    # Errors
    "ErrorFormatter",
    "ErrorDescriptor",
    "APIError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "UnprocessableEntityError",
    "ServerError",
    # Response functions
    "ok",
    "no_content",
    "created",
    "not_found",
    "unauthorized",
    "forbidden",
    "bad_request",
    "unprocessable_entity",
    "conflict",
    "internal_server_error",
    "error",
    "compose_custom_error",
    "plain",
    "pdf",
    "excel",
    "build_location_url",
    "UriComponentsBuilder",
    # Integration
    "get_responder",
    "register_exception_handlers",
    # Configuration
    "RespondConfig",
    "get_config",
    "load_config",
    "set_config",
    "configure_logging",
    "ContentTypes",
    "Headers",
    "EMPTY_STATUS",
]
