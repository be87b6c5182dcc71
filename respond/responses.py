"""Response functions for respond.

Each function takes the output sink as first argument and writes exactly one
response: headers, a status code and, when the status allows it, a body.

Example:
    >>> from respond import NotFoundError, ResponseBuffer
    >>> buffer = ResponseBuffer()
    >>> not_found(buffer, NotFoundError("user 42 not found", code=5))
    >>> buffer.status_code
    404
"""

import json
import logging
from http import HTTPStatus
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from fastapi.encoders import jsonable_encoder

from .config import get_config
from .constants import ContentTypes, Headers, does_not_require_content
from .errors import ErrorFormatter, error_envelope, is_error_formatter
from .writer import BytesLike, ResponseWriter

logger = logging.getLogger(__name__)

Stream = Union[BytesLike, Iterable[bytes], None]


# ============================================================================
# Encoding
# ============================================================================


def encode_json(value: Any) -> bytes:
    """Encode ``value`` as compact JSON.

    Pydantic models, datetimes, enums and other types understood by FastAPI's
    ``jsonable_encoder`` are converted first.

    Raises:
        ValueError: If the value cannot be encoded (e.g. NaN floats or a
            circular reference)
        TypeError: If the value contains unsupported types
    """
    try:
        encodable = jsonable_encoder(value)
    except RecursionError as exc:
        raise ValueError("Circular reference detected") from exc

    return json.dumps(
        encodable,
        ensure_ascii=get_config().ensure_ascii,
        allow_nan=False,
        separators=(",", ":"),
    ).encode("utf-8")


def error_body(err: Optional[BaseException]) -> Optional[bytes]:
    """Build the response body for an error.

    Args:
        err: Error to render, or None

    Returns:
        None for no error, the JSON error envelope for an ErrorFormatter,
        and the raw error text for any other exception
    """
    if err is None:
        return None

    if is_error_formatter(err):
        try:
            return encode_json(error_envelope(err))
        except (TypeError, ValueError) as exc:
            logger.warning(f"Could not encode error envelope: {exc}")
            return str(exc).encode("utf-8")

    return str(err).encode("utf-8")


def as_json(
    writer: ResponseWriter, status_code: int, stream: Optional[bytes]
) -> None:
    """Write a JSON response.

    The body is dropped for statuses that must not carry one.
    """
    writer.set_header(Headers.CONTENT_TYPE, ContentTypes.JSON)
    writer.write_header(status_code)

    if does_not_require_content(status_code):
        return

    if stream is None:
        return

    writer.write(stream)


# ============================================================================
# Success responses
# ============================================================================


def ok(writer: ResponseWriter, payload: Any) -> None:
    """Respond 200 with ``payload`` encoded as JSON.

    An encoding failure is reported as 500 with the encoder's message as body.
    """
    try:
        body = encode_json(payload)
    except (TypeError, ValueError) as exc:
        logger.error(f"Failed to encode response payload: {exc}")
        writer.write_header(HTTPStatus.INTERNAL_SERVER_ERROR)
        writer.write(str(exc).encode("utf-8"))
        return

    as_json(writer, HTTPStatus.OK, body)


def no_content(writer: ResponseWriter) -> None:
    as_json(writer, HTTPStatus.NO_CONTENT, None)


def created(writer: ResponseWriter, location: str) -> None:
    """Respond 201 with a ``Location`` header pointing at the new resource."""
    writer.set_header(Headers.LOCATION, location)
    as_json(writer, HTTPStatus.CREATED, None)


# ============================================================================
# Error responses
# ============================================================================


def not_found(writer: ResponseWriter, err: Optional[BaseException]) -> None:
    """Respond 404: the requested resource does not exist."""
    as_json(writer, HTTPStatus.NOT_FOUND, error_body(err))


def unauthorized(writer: ResponseWriter, err: Optional[BaseException]) -> None:
    """Respond 401: the credentials are missing or wrong.

    The client tried to operate on a protected resource without providing
    proper authorization.
    """
    as_json(writer, HTTPStatus.UNAUTHORIZED, error_body(err))


def forbidden(writer: ResponseWriter, err: Optional[BaseException]) -> None:
    """Respond 403: the client may not access the resource or is rate limited."""
    as_json(writer, HTTPStatus.FORBIDDEN, error_body(err))


def bad_request(writer: ResponseWriter, err: Optional[BaseException]) -> None:
    """Respond 400: the request could not be understood (malformed syntax,
    invalid payload, data type mismatch)."""
    as_json(writer, HTTPStatus.BAD_REQUEST, error_body(err))


def unprocessable_entity(
    writer: ResponseWriter, err: Optional[BaseException]
) -> None:
    as_json(writer, HTTPStatus.UNPROCESSABLE_ENTITY, error_body(err))


def conflict(writer: ResponseWriter, err: Optional[BaseException]) -> None:
    """Respond 409: the request conflicts with the current resource state."""
    as_json(writer, HTTPStatus.CONFLICT, error_body(err))


def internal_server_error(
    writer: ResponseWriter, err: Optional[BaseException]
) -> None:
    """Respond 500: the server hit an unexpected condition.

    Plain exceptions are written as raw text, ErrorFormatter errors as the
    JSON error envelope. No body is written for None.
    """
    as_json(writer, HTTPStatus.INTERNAL_SERVER_ERROR, error_body(err))


ErrorResponder = Callable[[ResponseWriter, Optional[BaseException]], None]

_STATUS_DISPATCH: Dict[int, ErrorResponder] = {
    HTTPStatus.UNAUTHORIZED: unauthorized,
    HTTPStatus.FORBIDDEN: forbidden,
    HTTPStatus.CONFLICT: conflict,
    HTTPStatus.UNPROCESSABLE_ENTITY: unprocessable_entity,
    HTTPStatus.NOT_FOUND: not_found,
    HTTPStatus.BAD_REQUEST: bad_request,
}


def compose_custom_error(writer: ResponseWriter, err: ErrorFormatter) -> None:
    """Route an ErrorFormatter to the response function for its status.

    500 and any status without a dedicated function fall back to
    ``internal_server_error``.
    """
    handler = _STATUS_DISPATCH.get(int(err.status), internal_server_error)
    handler(writer, err)


def error(
    writer: ResponseWriter,
    err: Optional[BaseException],
    *,
    extra: Optional[Mapping[str, Any]] = None,
) -> None:
    """Respond with the status an error declares.

    ErrorFormatter errors are routed by their ``status``; anything else is
    an internal server error.

    Args:
        writer: Output sink
        err: Error to render; None produces an empty 500
        extra: Optional context attached to the log record
    """
    log_extra = dict(extra or {})

    if not is_error_formatter(err):
        if err is not None:
            logger.error(
                f"Unexpected error: {type(err).__name__}: {err}",
                exc_info=err,
                extra={"error_type": type(err).__name__, **log_extra},
            )
        internal_server_error(writer, err)
        return

    status_code = int(err.status)
    log_extra.update({"error_code": err.code, "status_code": status_code})
    if status_code >= 500:
        logger.error(
            f"API Error [{err.code}]: {err.message}", exc_info=err, extra=log_extra
        )
    else:
        # 4xx errors stay at DEBUG
        logger.debug(f"API Error [{err.code}]: {err.message}", extra=log_extra)

    compose_custom_error(writer, err)


# ============================================================================
# File delivery
# ============================================================================


def _chunks(stream: Stream) -> Iterable[BytesLike]:
    if stream is None:
        return ()
    if isinstance(stream, (bytes, bytearray, memoryview)):
        return (stream,)
    if isinstance(stream, str):
        raise TypeError("File streams must be bytes, not str; encode the text first")
    return stream


def stream_file(
    writer: ResponseWriter,
    stream: Stream,
    content_type: str,
    headers: Optional[Mapping[str, str]] = None,
) -> None:
    """Stream ``stream`` straight to the client with status 200.

    A sink failure is logged and reported as 500 with the failure text.

    Args:
        writer: Output sink
        stream: Bytes-like body, iterable of byte chunks, or None
        content_type: Value of the ``Content-Type`` header
        headers: Extra headers set before the status is written

    Raises:
        TypeError: If ``stream`` is a ``str``; nothing is written then
    """
    chunks = _chunks(stream)
    for name, value in (headers or {}).items():
        writer.set_header(name, value)
    writer.set_header(Headers.CONTENT_TYPE, content_type)
    writer.write_header(HTTPStatus.OK)

    try:
        for chunk in chunks:
            writer.write(chunk)
    except OSError as exc:
        logger.error(f"Failed to stream {content_type} file: {exc}", exc_info=True)
        writer.write_header(HTTPStatus.INTERNAL_SERVER_ERROR)
        writer.write(str(exc).encode("utf-8"))


def plain(writer: ResponseWriter, stream: Stream, file_name: str) -> None:
    """Deliver a plain text file as an attachment named ``file_name``."""
    stream_file(
        writer,
        stream,
        ContentTypes.PLAIN,
        {Headers.CONTENT_DISPOSITION: f'attachment; filename="{file_name}"'},
    )


def pdf(writer: ResponseWriter, stream: Stream) -> None:
    stream_file(writer, stream, ContentTypes.PDF)


def excel(writer: ResponseWriter, stream: Stream) -> None:
    """Deliver a spreadsheet as a generic binary download."""
    stream_file(
        writer,
        stream,
        ContentTypes.OCTET_STREAM,
        {
            Headers.CONTENT_DESCRIPTION: "File Transfer",
            Headers.CONTENT_DISPOSITION: "attachment;",
        },
    )


# ============================================================================
# Location helpers
# ============================================================================


def _request_scheme(request: Any) -> str:
    if get_config().trust_forwarded_proto:
        forwarded = request.headers.get(Headers.FORWARDED_PROTO)
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.url.scheme or "http"


def build_host(request: Any) -> str:
    """Return ``scheme://host`` for a Starlette request."""
    return f"{_request_scheme(request)}://{request.url.netloc}"


def build_location_url(request: Any, resource: Any) -> str:
    """Build the absolute URL of a resource created under the request path.

    Args:
        request: Starlette/FastAPI request the resource was created from
        resource: Identifier of the new resource

    Returns:
        ``scheme://host/path/resource``
    """
    path = request.url.path.rstrip("/")
    return f"{build_host(request)}{path}/{resource}"


class UriComponentsBuilder:
    """Build absolute URIs on the host of a request.

    Example:
        >>> UriComponentsBuilder(request).path("users/42").to_uri()
        'http://localhost/users/42'
    """

    def __init__(self, request: Any) -> None:
        self.request = request
        self._path = ""

    def path(self, path: str) -> "UriComponentsBuilder":
        self._path = path
        return self

    def to_uri(self) -> str:
        path = self._path
        if not path.startswith("/"):
            path = "/" + path
        return f"{build_host(self.request)}{path}"


__all__ = [
    "encode_json",
    "error_body",
    "as_json",
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
    "compose_custom_error",
    "error",
    "stream_file",
    "plain",
    "pdf",
    "excel",
    "build_host",
    "build_location_url",
    "UriComponentsBuilder",
]
