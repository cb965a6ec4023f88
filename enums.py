"""Type-safe enumerations for vpncheck.

All categorical values use enum types for type safety and consistency.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Typed failure reasons carried by every network-touching result.

    TIMEOUT: Deadline expired (connect, read or whole-body)
    UNREACHABLE: DNS resolution or connection failure
    IO: Stream failure after the connection was established
    INVALID_RESPONSE: Body empty, malformed, or HTTP error status
    INVALID_INPUT: Caller passed something unusable (e.g. bad IP literal)
    PERMISSION_DENIED: OS refused the operation
    UNKNOWN: Anything else
    """

    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    IO = "io"
    INVALID_RESPONSE = "invalid_response"
    INVALID_INPUT = "invalid_input"
    PERMISSION_DENIED = "permission_denied"
    UNKNOWN = "unknown"


class Classification(str, Enum):
    """Agreement among the IP-echo services of one consistency run."""

    ALL_FAILED = "all_failed"
    CONSISTENT = "consistent"
    MINOR_INCONSISTENCY = "minor_inconsistency"
    INCONSISTENT = "inconsistent"


class CheckStatus(str, Enum):
    """Severity of one section in a report."""

    OK = "OK"
    WARN = "WARN"
    ERROR = "ERROR"


class NetworkType(str, Enum):
    """Transport behind the default route."""

    WIFI = "wifi"
    CELLULAR = "cellular"
    ETHERNET = "ethernet"
    VPN = "vpn"
    LOOPBACK = "loopback"
    UNKNOWN = "unknown"
