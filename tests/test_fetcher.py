"""Tests for network/fetcher.py.

Tests bounded GET with mocked requests.get.
"""

import itertools
from unittest.mock import MagicMock, patch

import pytest
import requests
from urllib3.exceptions import ReadTimeoutError

from enums import ErrorKind
from network.fetcher import fetch


def make_response(chunks: list[bytes], encoding: str | None = "utf-8") -> MagicMock:
    """Mock response usable as a context manager."""
    response = MagicMock()
    response.encoding = encoding
    response.iter_content.return_value = iter(chunks)
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


class TestFetchSuccess:
    """Tests for successful fetches."""

    @patch("network.fetcher.requests.get")
    def test_returns_body(self, mock_get: MagicMock) -> None:
        """Test body text is returned untouched."""
        mock_get.return_value = make_response([b"203.0.113.7\n"])

        result = fetch("https://api.ipify.org", 5)

        assert result.ok
        assert result.value == "203.0.113.7\n"

    @patch("network.fetcher.requests.get")
    def test_joins_chunks(self, mock_get: MagicMock) -> None:
        """Test multi-chunk bodies are concatenated."""
        mock_get.return_value = make_response([b'{"country":', b'"Brazil"}'])

        result = fetch("http://ip-api.com/json/203.0.113.7", 10)

        assert result.value == '{"country":"Brazil"}'

    @patch("network.fetcher.requests.get")
    def test_timeout_applied_to_connect_and_read(self, mock_get: MagicMock) -> None:
        """Test both connect and read deadlines are set."""
        mock_get.return_value = make_response([b"1.2.3.4"])

        fetch("https://icanhazip.com", 5)

        _, kwargs = mock_get.call_args
        assert kwargs["timeout"] == (5, 5)
        assert kwargs["stream"] is True

    @patch("network.fetcher.requests.get")
    def test_missing_encoding_defaults_to_utf8(self, mock_get: MagicMock) -> None:
        """Test bodies without declared encoding decode as UTF-8."""
        mock_get.return_value = make_response(["São Paulo".encode()], encoding=None)

        result = fetch("http://example.com", 5)

        assert result.value == "São Paulo"

    @patch("network.fetcher.requests.get")
    def test_response_released(self, mock_get: MagicMock) -> None:
        """Test the response context is exited after reading."""
        response = make_response([b"1.2.3.4"])
        mock_get.return_value = response

        fetch("http://example.com", 5)

        response.__exit__.assert_called_once()


class TestFetchFailures:
    """Tests for error mapping."""

    @pytest.mark.parametrize("exception,expected", [
        (requests.ConnectTimeout("slow"), ErrorKind.TIMEOUT),
        (requests.ReadTimeout("slow"), ErrorKind.TIMEOUT),
        (requests.ConnectionError("dns"), ErrorKind.UNREACHABLE),
        (requests.exceptions.ChunkedEncodingError("cut"), ErrorKind.IO),
        (PermissionError("denied"), ErrorKind.PERMISSION_DENIED),
        (OSError("socket"), ErrorKind.IO),
    ])
    @patch("network.fetcher.requests.get")
    def test_exception_mapping(self, mock_get: MagicMock, exception, expected) -> None:
        """Test each transport exception maps to its error kind."""
        mock_get.side_effect = exception

        result = fetch("https://api.ipify.org", 5)

        assert not result.ok
        assert result.error == expected

    @patch("network.fetcher.requests.get")
    def test_http_error_is_invalid_response(self, mock_get: MagicMock) -> None:
        """Test non-2xx status maps to INVALID_RESPONSE."""
        response = make_response([])
        response.raise_for_status.side_effect = requests.HTTPError("503")
        mock_get.return_value = response

        result = fetch("https://ifconfig.me/ip", 5)

        assert result.error == ErrorKind.INVALID_RESPONSE
        response.__exit__.assert_called_once()

    @patch("network.fetcher.requests.get")
    def test_empty_body_is_invalid_response(self, mock_get: MagicMock) -> None:
        """Test whitespace-only body maps to INVALID_RESPONSE."""
        mock_get.return_value = make_response([b"  \n"])

        result = fetch("https://checkip.amazonaws.com", 5)

        assert result.error == ErrorKind.INVALID_RESPONSE

    @patch("network.fetcher.time.monotonic")
    @patch("network.fetcher.requests.get")
    def test_slow_body_times_out(self, mock_get: MagicMock, mock_clock: MagicMock) -> None:
        """Test whole-body deadline stops a trickling response."""
        mock_get.return_value = make_response([b"1", b"2", b"3"])
        # Start at 0, first chunk in time, second after the 5s deadline
        mock_clock.side_effect = itertools.chain([0.0, 1.0], itertools.repeat(6.0))

        result = fetch("https://api.ipify.org", 5)

        assert result.error == ErrorKind.TIMEOUT

    @patch("network.fetcher.requests.get")
    def test_single_attempt(self, mock_get: MagicMock) -> None:
        """Test failures are not retried."""
        mock_get.side_effect = requests.ConnectionError("down")

        fetch("https://api.ipify.org", 5)

        assert mock_get.call_count == 1

    @patch("network.fetcher.requests.get")
    def test_body_read_timeout_is_timeout(self, mock_get: MagicMock) -> None:
        """Test a stalled body read after headers maps to TIMEOUT."""
        response = make_response([])
        response.iter_content.side_effect = requests.ConnectionError(
            ReadTimeoutError(None, "http://127.0.0.1", "Read timed out.")
        )
        mock_get.return_value = response

        result = fetch("http://127.0.0.1:8080", 1.0)

        assert result.error == ErrorKind.TIMEOUT
        response.__exit__.assert_called_once()

    @patch("network.fetcher.requests.get")
    def test_body_connection_reset_is_unreachable(self, mock_get: MagicMock) -> None:
        """Test other connection errors during the body stay UNREACHABLE."""
        response = make_response([])
        response.iter_content.side_effect = requests.ConnectionError("reset by peer")
        mock_get.return_value = response

        result = fetch("http://127.0.0.1:8080", 1.0)

        assert result.error == ErrorKind.UNREACHABLE
