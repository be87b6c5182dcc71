"""FastAPI integration for respond.

Provides a dependency that hands endpoints a :class:`Responder` bound to the
current request, and an exception handler that renders raised errors through
the same status dispatch.

Example:
    >>> app = FastAPI()
    >>> register_exception_handlers(app)
    >>> @app.get("/users/{user_id}")
    ... def read_user(user_id: int, respond: Responder = Depends(get_responder)):
    ...     respond.ok({"id": user_id})
    ...     return respond.to_response()
"""

import logging
from typing import Iterable, Optional, Type

from fastapi import FastAPI, Request
from starlette.responses import Response

from .errors import APIError
from .responder import Responder
from .writer import ResponseBuffer

logger = logging.getLogger(__name__)


def get_responder(request: Request) -> Responder:
    """FastAPI dependency returning a responder for the current request."""
    return Responder(ResponseBuffer(), request=request)


class ErrorResponseHandler:
    """Render exceptions raised by endpoints as respond error responses.

    ErrorFormatter errors keep their declared status and JSON envelope;
    any other registered exception becomes a 500.
    """

    @staticmethod
    async def handle_exception(request: Request, exc: Exception) -> Response:
        """Render ``exc`` for ``request``.

        Args:
            request: FastAPI request object
            exc: Exception raised by the endpoint

        Returns:
            Response with the error status, headers and body
        """
        responder = get_responder(request)
        responder.error(exc)
        return responder.to_response()


def register_exception_handlers(
    app: FastAPI,
    exception_classes: Optional[Iterable[Type[Exception]]] = None,
) -> None:
    """Install :class:`ErrorResponseHandler` on ``app``.

    Args:
        app: FastAPI application
        exception_classes: Exception classes to handle; defaults to APIError.
            Classes implementing ErrorFormatter without deriving from
            APIError must be listed here.
    """
    classes = list(exception_classes or [APIError])
    for exc_class in classes:
        app.add_exception_handler(exc_class, ErrorResponseHandler.handle_exception)
        logger.debug(f"Registered error response handler for {exc_class.__name__}")


__all__ = ["get_responder", "ErrorResponseHandler", "register_exception_handlers"]
