"""Per-request responder.

A :class:`Responder` binds the response functions of :mod:`respond.responses` to
one output sink, keeps the flash data shown next to success payloads and,
when given, the request used to build ``Location`` URLs.
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from starlette.requests import Request
from starlette.responses import Response

from . import responses
from .writer import ResponseBuffer, ResponseWriter

logger = logging.getLogger(__name__)


class Responder:
    """Respond to a single request with one terminal call.

    Exactly one of the terminal methods (``ok``, ``created``, ``not_found``,
    ``error``, ``pdf``, ...) is expected per request. Nothing prevents a
    second call; the sink decides what happens to it.

    Example:
        >>> responder = Responder(ResponseBuffer())
        >>> responder.with_flash("notice", "Saved").ok({"id": 1})
        >>> responder.writer.body
        b'{"data":{"id":1},"flash":{"notice":"Saved"}}'
    """

    def __init__(
        self,
        writer: ResponseWriter,
        *,
        request: Optional[Request] = None,
        flash: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the responder.

        Args:
            writer: Output sink for this request
            request: Optional request, used to build Location URLs
            flash: Optional initial flash data
        """
        self.writer = writer
        self.request = request
        self.flash: Dict[str, Any] = dict(flash or {})

    def with_flash(self, name: str, value: Any) -> "Responder":
        """Attach a flash entry shown alongside the next success payload.

        Returns:
            The responder, for chaining
        """
        self.flash[name] = value
        return self

    def _log_extra(self) -> Dict[str, Any]:
        if self.request is None:
            return {}
        return {"path": self.request.url.path, "method": self.request.method}

    # ------------------------------------------------------------------
    # Success
    # ------------------------------------------------------------------

    def ok(self, payload: Any) -> None:
        """Respond 200 with ``{"data": payload, "flash": {...}}``."""
        responses.ok(self.writer, {"data": payload, "flash": self.flash})

    def no_content(self) -> None:
        responses.no_content(self.writer)

    def created(self, resource: Any, request: Optional[Request] = None) -> None:
        """Respond 201 with a Location header for ``resource``.

        The URL is built from the request scheme, host and path followed by
        the resource identifier.

        Args:
            resource: Identifier of the created resource
            request: Request to build the URL from; defaults to the bound one

        Raises:
            ValueError: If no request is available
        """
        request = request or self.request
        if request is None:
            raise ValueError("created() needs a request to build the Location URL")
        responses.created(self.writer, responses.build_location_url(request, resource))

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def not_found(self, err: Optional[BaseException] = None) -> None:
        responses.not_found(self.writer, err)

    def unauthorized(self, err: Optional[BaseException] = None) -> None:
        responses.unauthorized(self.writer, err)

    def forbidden(self, err: Optional[BaseException] = None) -> None:
        responses.forbidden(self.writer, err)

    def bad_request(self, err: Optional[BaseException] = None) -> None:
        responses.bad_request(self.writer, err)

    def unprocessable_entity(self, err: Optional[BaseException] = None) -> None:
        responses.unprocessable_entity(self.writer, err)

    def conflict(self, err: Optional[BaseException] = None) -> None:
        responses.conflict(self.writer, err)

    def internal_server_error(self, err: Optional[BaseException] = None) -> None:
        responses.internal_server_error(self.writer, err)

    def error(self, err: Optional[BaseException]) -> None:
        """Respond with the status ``err`` declares, 500 for plain errors."""
        responses.error(self.writer, err, extra=self._log_extra())

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def plain(self, stream: responses.Stream, file_name: str) -> None:
        responses.plain(self.writer, stream, file_name)

    def pdf(self, stream: responses.Stream) -> None:
        responses.pdf(self.writer, stream)

    def excel(self, stream: responses.Stream) -> None:
        responses.excel(self.writer, stream)

    # ------------------------------------------------------------------
    # Framework bridge
    # ------------------------------------------------------------------

    def to_response(self) -> Response:
        """Return the Starlette response for a buffered writer.

        Raises:
            TypeError: If the writer is not a ResponseBuffer
        """
        if not isinstance(self.writer, ResponseBuffer):
            raise TypeError(
                f"to_response() requires a ResponseBuffer, got {type(self.writer).__name__}"
            )
        if not self.writer.committed:
            logger.warning("Responder converted before any terminal call")
            self.writer.write_header(HTTPStatus.OK)
        return self.writer.to_response()


__all__ = ["Responder"]
