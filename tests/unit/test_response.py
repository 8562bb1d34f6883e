"""
Unit tests for HTTP response building.
"""

import pytest

from minihttp.http.response import (
    HTTPResponse,
    build_response,
    not_found_page,
    server_error_page,
)
from minihttp.http.status_codes import HTTPStatus


class TestBuildResponse:
    """Tests for the build_response() serializer."""

    def test_exact_bytes(self):
        """The full response, byte for byte."""
        result = build_response(200, "OK", "hello")

        assert result == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/html\r\n"
            b"Content-Length: 5\r\n"
            b"Connection: close\r\n"
            b"\r\n"
            b"hello"
        )

    def test_custom_content_type(self):
        result = build_response(200, "OK", "{}", "application/json")

        assert b"Content-Type: application/json\r\n" in result

    def test_content_length_counts_bytes(self):
        """Non-ASCII text: Content-Length is the UTF-8 byte count."""
        body = "héllo ✓"
        result = build_response(200, "OK", body)

        encoded = body.encode("utf-8")
        assert f"Content-Length: {len(encoded)}\r\n".encode() in result
        assert result.endswith(encoded)

    def test_empty_body(self):
        result = build_response(404, "Not Found", "")

        assert b"Content-Length: 0\r\n" in result
        assert result.endswith(b"\r\n\r\n")

    def test_bytes_body_passed_through(self):
        result = build_response(200, "OK", b"\x00\xff")

        assert b"Content-Length: 2\r\n" in result
        assert result.endswith(b"\r\n\r\n\x00\xff")

    def test_deterministic(self):
        assert build_response(200, "OK", "same") == build_response(200, "OK", "same")

    @pytest.mark.parametrize("body", ["", "x", "a" * 5000, "ünïcödé", "line\r\nbreak"])
    def test_content_length_matches_body(self, body):
        result = build_response(200, "OK", body)
        head, _, payload = result.partition(b"\r\n\r\n")

        length_line = [line for line in head.split(b"\r\n") if line.startswith(b"Content-Length:")][0]
        assert int(length_line.split(b":")[1]) == len(payload)


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        """Test status line generation."""
        response = HTTPResponse.from_status(HTTPStatus.OK, "")
        assert response.status_line == "HTTP/1.1 200 OK"

        response = HTTPResponse.from_status(HTTPStatus.NOT_FOUND, "")
        assert response.status_line == "HTTP/1.1 404 Not Found"

    def test_from_status_encodes_text(self):
        response = HTTPResponse.from_status(HTTPStatus.INTERNAL_SERVER_ERROR, "oops")

        assert response.status == 500
        assert response.message == "Internal Server Error"
        assert response.body == b"oops"
        assert response.content_type == "text/html"

    def test_to_bytes_has_exactly_three_headers(self):
        result = HTTPResponse(body=b"test").to_bytes()
        head = result.split(b"\r\n\r\n")[0]

        assert head.split(b"\r\n")[1:] == [
            b"Content-Type: text/html",
            b"Content-Length: 4",
            b"Connection: close",
        ]

    def test_matches_build_response(self):
        response = HTTPResponse(status=404, message="Not Found", body=b"gone")
        assert response.to_bytes() == build_response(404, "Not Found", "gone")


class TestErrorPages:

    def test_not_found_page_contains_path(self):
        assert "/missing" in not_found_page("/missing")

    def test_not_found_page_escapes_path(self):
        page = not_found_page("/<script>alert(1)</script>")

        assert "<script>" not in page
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in page

    def test_server_error_page(self):
        assert "500 Internal Server Error" in server_error_page()


class TestHTTPStatus:

    def test_phrases(self):
        assert HTTPStatus.OK.phrase == "OK"
        assert HTTPStatus.NOT_FOUND.phrase == "Not Found"
        assert HTTPStatus.INTERNAL_SERVER_ERROR.phrase == "Internal Server Error"

    def test_int_comparison(self):
        assert HTTPStatus.NOT_FOUND == 404
        assert HTTPStatus.INTERNAL_SERVER_ERROR.is_server_error
        assert not HTTPStatus.OK.is_server_error
