"""Tests for the in-memory response writer."""

import logging

import pytest

from respond.writer import ResponseBuffer, ResponseWriter


class TestResponseBuffer:
    """Test ResponseBuffer sink semantics."""

    def test_implements_writer_protocol(self):
        """Test that ResponseBuffer satisfies ResponseWriter."""
        assert isinstance(ResponseBuffer(), ResponseWriter)

    def test_initial_state(self, buffer):
        """Test that a new buffer has no status, headers or body."""
        assert buffer.status_code is None
        assert not buffer.committed
        assert buffer.body == b""
        assert len(buffer.headers) == 0

    def test_headers_are_case_insensitive(self, buffer):
        """Test header lookups ignore case and set replaces."""
        buffer.set_header("Content-Type", "application/json")
        buffer.set_header("content-type", "application/pdf")

        assert buffer.headers["CONTENT-TYPE"] == "application/pdf"
        assert len(buffer.headers) == 1

    def test_first_status_wins(self, buffer, caplog):
        """Test that later status writes are ignored and logged."""
        buffer.write_header(404)
        with caplog.at_level(logging.WARNING, logger="respond.writer"):
            buffer.write_header(500)

        assert buffer.status_code == 404
        assert "Superfluous write_header(500)" in caplog.text

    def test_write_commits_ok(self, buffer):
        """Test that writing a body without a status commits 200."""
        written = buffer.write(b"hello")

        assert written == 5
        assert buffer.status_code == 200
        assert buffer.body == b"hello"
        assert buffer.text == "hello"

    def test_write_appends(self, buffer):
        """Test that successive writes accumulate."""
        buffer.write(b"a")
        buffer.write(bytearray(b"b"))
        buffer.write(memoryview(b"c"))

        assert buffer.body == b"abc"

    def test_write_rejects_text(self, buffer):
        """Test that str bodies are refused."""
        with pytest.raises(TypeError, match="bytes-like"):
            buffer.write("text")

    def test_to_response(self, buffer):
        """Test conversion to a Starlette response."""
        buffer.set_header("Content-Type", "application/json")
        buffer.set_header("X-Request-Id", "abc")
        buffer.write_header(409)
        buffer.write(b'{"code":1,"message":"conflict"}')

        response = buffer.to_response()

        assert response.status_code == 409
        assert response.body == b'{"code":1,"message":"conflict"}'
        assert response.headers["content-type"] == "application/json"
        assert response.headers["x-request-id"] == "abc"

    def test_to_response_defaults_to_ok(self, buffer):
        """Test that an uncommitted buffer converts with status 200."""
        assert buffer.to_response().status_code == 200
