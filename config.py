"""Configuration constants for vpncheck.

All configurable values stored here for easy customization.
Single source of truth for all constants and configuration.
"""

from enum import IntEnum

from models import ProbeTarget

# Timeouts (seconds)
CANONICAL_TIMEOUT_SECONDS: float = 10.0
CONSISTENCY_TIMEOUT_SECONDS: float = 5.0
GEO_TIMEOUT_SECONDS: float = 10.0
COMMAND_TIMEOUT_SECONDS: int = 10

# Canonical "what is my IP" service (Single-IP Resolver)
CANONICAL_TARGET: ProbeTarget = ProbeTarget(
    service_name="IPify",
    url="https://api.ipify.org",
    timeout=CANONICAL_TIMEOUT_SECONDS,
)

# Independent IP-echo services queried concurrently for consistency.
# Each answers with a bare dotted-quad body.
CONSISTENCY_TARGETS: tuple[ProbeTarget, ...] = (
    ProbeTarget("IPify", "https://api.ipify.org", CONSISTENCY_TIMEOUT_SECONDS),
    ProbeTarget("ICanHazIP", "https://icanhazip.com", CONSISTENCY_TIMEOUT_SECONDS),
    ProbeTarget("AWS", "https://checkip.amazonaws.com", CONSISTENCY_TIMEOUT_SECONDS),
    ProbeTarget("IfConfig", "https://ifconfig.me/ip", CONSISTENCY_TIMEOUT_SECONDS),
)

# Geo-IP JSON endpoint (ip-api.com free tier is plain HTTP only)
GEO_URL_TEMPLATE: str = "http://ip-api.com/json/{ip}"

# DNS exposure: more distinct local addresses than this is flagged
DNS_LEAK_ADDRESS_THRESHOLD: int = 4

# Per-address reverse DNS lookup in the exposure check
REVERSE_LOOKUP_TIMEOUT_SECONDS: float = 2.0

# Addresses listed per section in console output
MAX_LISTED_ADDRESSES: int = 5
MAX_LISTED_RESPONDERS: int = 3

# Private and CGNAT prefixes. This is NOT a VPN exit-node database: it only
# says the address is private/CGNAT, which VPN tunnels often hand out.
COMMON_VPN_PREFIXES: tuple[str, ...] = (
    "10.",
    *(f"172.{octet}." for octet in range(16, 32)),
    "192.168.",
    "100.",
)

# Python WebRTC stacks checked by the static capability probe
WEBRTC_MODULES: tuple[str, ...] = ("aiortc",)

# Required System Commands
REQUIRED_COMMANDS: list[str] = [
    "ip",
]

# Interface name prefixes (checked longest first)
INTERFACE_TYPE_PATTERNS: dict[str, str] = {
    "lo": "loopback",
    "eth": "ethernet",
    "en": "ethernet",
    "wl": "wifi",
    "wlan": "wifi",
    "ww": "cellular",
    "rmnet": "cellular",
    "usb": "cellular",
    "vpn": "vpn",
    "tun": "vpn",
    "tap": "vpn",
    "ppp": "vpn",
    "wg": "vpn",
    "ipsec": "vpn",
    "utun": "vpn",
}

# Corporate suffixes stripped from ISP names for display
CORPORATE_SUFFIXES: list[str] = [
    "co.",
    "company",
    "corp",
    "corp.",
    "corporation",
    "inc",
    "inc.",
    "llc",
    "ltd",
    "ltd.",
    "limited",
    "s.a.",
    "gmbh",
]

# Unknown-error messages are cut to this many characters
ERROR_DETAIL_MAX_LENGTH: int = 50


class ExitCode(IntEnum):
    """Standard exit codes for vpncheck tool."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    MISSING_DEPENDENCIES = 2
    INVALID_ARGUMENTS = 4


# Tool Metadata
VERSION: str = "1.0.0"
TOOL_NAME: str = "vpncheck"
