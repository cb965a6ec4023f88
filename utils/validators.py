"""Input validation utilities.

Provides validation for IP literals returned by echo services and
for addresses read from local interfaces.
"""

import ipaddress
import re

# Dotted quad: four runs of digits separated by dots, nothing else
DOTTED_QUAD_PATTERN = re.compile(r"^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$")


def is_valid_ipv4(address: str | None) -> bool:
    """Validate a well-formed IPv4 dotted-quad literal.

    Rejects surrounding whitespace, octets above 255, and shorthand
    forms such as "127.1" that ipaddress or inet_aton would accept.

    Args:
        address: Candidate literal or None

    Returns:
        True if address is a dotted quad with every octet in 0-255.
    """
    if not address:
        return False

    if not DOTTED_QUAD_PATTERN.match(address):
        return False

    try:
        ipaddress.IPv4Address(address)
        return True
    except ValueError:
        return False


def is_ipv4_shaped(address: str) -> bool:
    """True if the address looks like IPv4 (contains a dot)."""
    return "." in address


def is_loopback_address(address: str) -> bool:
    """Check loopback membership for IPv4/IPv6 literals.

    Strips zone identifier (e.g., %eth0) before parsing.

    Args:
        address: IP literal from interface enumeration

    Returns:
        True for 127.0.0.0/8 and ::1, False otherwise or if unparsable.
    """
    try:
        return ipaddress.ip_address(address.split("%")[0]).is_loopback
    except ValueError:
        return False
