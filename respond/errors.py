"""Error classification for respond.

Any exception can opt into structured rendering by exposing the members of
:class:`ErrorFormatter`. The dispatch in :mod:`respond.responses` routes such
errors to the status they declare and renders them as a JSON error envelope.
Exceptions that do not implement the capability are rendered as plain text.
"""

from http import HTTPStatus
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class ErrorFormatter(Protocol):
    """Capability implemented by errors that know how to be rendered.

    Attributes:
        status: HTTP status code the error maps to
        code: Integer identifying the error type
        message: Short localized string describing the error
        description: Optional long description, e.g. which parameter is
            missing or what the acceptable values are
        info_url: Optional URL to documentation about the error
    """

    status: int
    code: int
    message: str
    description: Optional[str]
    info_url: Optional[str]


class ErrorDescriptor:
    """Mixin supplying defaults for the optional ErrorFormatter members.

    Subclasses provide ``code`` and usually override ``status``::

        class OutOfStock(ErrorDescriptor, Exception):
            status = 409
            code = 12
    """

    status: int = HTTPStatus.INTERNAL_SERVER_ERROR
    description: Optional[str] = None
    info_url: Optional[str] = None

    @property
    def message(self) -> str:
        return str(self)


class APIError(ErrorDescriptor, Exception):
    """Base exception carrying its own status, code and message.

    Class attributes give the defaults; every member can be overridden per
    instance through the constructor.
    """

    status: int = HTTPStatus.INTERNAL_SERVER_ERROR
    code: int = 0
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[int] = None,
        status: Optional[int] = None,
        description: Optional[str] = None,
        info_url: Optional[str] = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Short message; falls back to ``default_message``
            code: Internal error code override
            status: HTTP status override
            description: Optional long description
            info_url: Optional documentation URL
        """
        super().__init__(message if message is not None else self.default_message)
        if code is not None:
            self.code = code
        if status is not None:
            self.status = status
        if description is not None:
            self.description = description
        if info_url is not None:
            self.info_url = info_url

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON error envelope for this error."""
        return error_envelope(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={int(self.status)}, code={self.code}, "
            f"message={self.message!r})"
        )


class BadRequestError(APIError):
    status = HTTPStatus.BAD_REQUEST
    default_message = "Invalid input"


class UnauthorizedError(APIError):
    status = HTTPStatus.UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(APIError):
    status = HTTPStatus.FORBIDDEN
    default_message = "Permission denied"


class NotFoundError(APIError):
    status = HTTPStatus.NOT_FOUND
    default_message = "Resource not found"


class ConflictError(APIError):
    status = HTTPStatus.CONFLICT
    default_message = "Resource conflict"


class UnprocessableEntityError(APIError):
    status = HTTPStatus.UNPROCESSABLE_ENTITY
    default_message = "Validation failed"


class ServerError(APIError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def is_error_formatter(err: Any) -> bool:
    """Return True when ``err`` implements the ErrorFormatter capability."""
    return isinstance(err, BaseException) and isinstance(err, ErrorFormatter)


def error_envelope(err: ErrorFormatter) -> Dict[str, Any]:
    """Build the error envelope for an ErrorFormatter.

    ``description`` and ``info_url`` are only included when set.
    """
    data: Dict[str, Any] = {"code": err.code, "message": err.message}
    if err.description is not None:
        data["description"] = err.description
    if err.info_url is not None:
        data["info_url"] = err.info_url
    return data


__all__ = [
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
    "is_error_formatter",
    "error_envelope",
]
