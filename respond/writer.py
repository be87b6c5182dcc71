"""Output sinks for respond.

The response functions only need three operations from the serving
framework: set a header, write a status code and write body bytes.
:class:`ResponseWriter` names that contract; :class:`ResponseBuffer` is an
in-memory implementation that can be turned into a Starlette response and
doubles as a recorder in tests.
"""

import logging
from http import HTTPStatus
from typing import Optional, Protocol, Union, runtime_checkable

from starlette.datastructures import MutableHeaders
from starlette.responses import Response

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


@runtime_checkable
class ResponseWriter(Protocol):
    """Protocol for the output sink of a single request."""

    def set_header(self, name: str, value: str) -> None:
        """Set a response header, replacing any previous value.

        Args:
            name: Header name (case-insensitive)
            value: Header value
        """
        ...

    def write_header(self, status_code: int) -> None:
        """Write the response status code.

        Args:
            status_code: HTTP status code
        """
        ...

    def write(self, data: BytesLike) -> int:
        """Append bytes to the response body.

        Args:
            data: Body bytes

        Returns:
            Number of bytes written
        """
        ...


class ResponseBuffer:
    """In-memory response writer.

    The first status written is kept; later ``write_header`` calls are
    ignored. Writing body bytes before any status commits 200.
    """

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self.status_code: Optional[int] = None
        self._body = bytearray()

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    @property
    def text(self) -> str:
        return self._body.decode("utf-8", errors="replace")

    @property
    def committed(self) -> bool:
        """Whether a status code has been written."""
        return self.status_code is not None

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def write_header(self, status_code: int) -> None:
        if self.status_code is not None:
            logger.warning(
                f"Superfluous write_header({status_code}) call, "
                f"status already {self.status_code}"
            )
            return
        self.status_code = int(status_code)

    def write(self, data: BytesLike) -> int:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"response body must be bytes-like, not {type(data).__name__}"
            )
        if self.status_code is None:
            self.write_header(HTTPStatus.OK)
        self._body.extend(data)
        return len(data)

    def to_response(self) -> Response:
        """Convert the buffered status, headers and body to a Starlette response.

        Returns:
            Response ready to be returned from a FastAPI endpoint
        """
        return Response(
            content=self.body,
            status_code=self.status_code or HTTPStatus.OK,
            headers=dict(self.headers),
        )

    def __repr__(self) -> str:
        return (
            f"ResponseBuffer(status_code={self.status_code}, "
            f"headers={dict(self.headers)!r}, body={self.body!r})"
        )


__all__ = ["ResponseWriter", "ResponseBuffer", "BytesLike"]
