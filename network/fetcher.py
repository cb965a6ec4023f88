"""Bounded-time HTTP GET.

Single attempt per call, no retry. Every failure comes back as a typed
Result instead of an exception.
"""

import time
from typing import Callable

import requests
from urllib3.exceptions import ReadTimeoutError

from enums import ErrorKind
from logging_config import get_logger
from models import Result
from utils import sanitize_for_log

logger = get_logger(__name__)

CHUNK_SIZE: int = 1024

# Anything with this shape can stand in for fetch() (tests, other transports)
Fetcher = Callable[[str, float], Result[str]]


def fetch(url: str, timeout: float) -> Result[str]:
    """GET url and return its body text.

    Deadlines:
        - Connect: timeout
        - Each socket read: timeout
        - Whole body: timeout, measured from the start of the call

    The response is used as a context manager so the pooled connection
    is released on every exit path, including the deadline check.

    Args:
        url: URL to request
        timeout: Deadline in seconds

    Returns:
        Result with the decoded body, or one of TIMEOUT, UNREACHABLE, IO,
        INVALID_RESPONSE, PERMISSION_DENIED.
    """
    deadline = time.monotonic() + timeout
    logger.debug("GET %s (timeout %.1fs)", sanitize_for_log(url), timeout)

    try:
        with requests.get(url, timeout=(timeout, timeout), stream=True) as response:
            response.raise_for_status()

            chunks: list[bytes] = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    logger.debug("Body deadline expired for %s", sanitize_for_log(url))
                    return Result.failure(ErrorKind.TIMEOUT, "response body too slow")
                chunks.append(chunk)

            body = b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")

    # Timeout before ConnectionError: ConnectTimeout is both
    except requests.Timeout as e:
        return _failed(url, ErrorKind.TIMEOUT, e)
    except requests.ConnectionError as e:
        # Read timeouts inside iter_content surface as ConnectionError
        if e.args and isinstance(e.args[0], ReadTimeoutError):
            return _failed(url, ErrorKind.TIMEOUT, e)
        return _failed(url, ErrorKind.UNREACHABLE, e)
    except requests.HTTPError as e:
        return _failed(url, ErrorKind.INVALID_RESPONSE, e)
    except requests.RequestException as e:
        return _failed(url, ErrorKind.IO, e)
    except PermissionError as e:
        return _failed(url, ErrorKind.PERMISSION_DENIED, e)
    except OSError as e:
        return _failed(url, ErrorKind.IO, e)

    if not body.strip():
        logger.debug("Empty body from %s", sanitize_for_log(url))
        return Result.failure(ErrorKind.INVALID_RESPONSE, "empty response")

    return Result.success(body)


def _failed(url: str, kind: ErrorKind, error: Exception) -> Result[str]:
    """Log and wrap a transport exception."""
    logger.debug(
        "GET %s failed (%s): %s",
        sanitize_for_log(url),
        kind.value,
        sanitize_for_log(str(error)),
    )
    return Result.failure(kind, str(error))
