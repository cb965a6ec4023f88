"""Tests for utils/validators.py.

Tests validation of IP literals from echo services and interfaces.
"""

import pytest

from utils.validators import is_ipv4_shaped, is_loopback_address, is_valid_ipv4


class TestIsValidIpv4:
    """Tests for is_valid_ipv4 function."""

    @pytest.mark.parametrize("address", [
        "0.0.0.0",
        "1.2.3.4",
        "203.0.113.7",
        "255.255.255.255",
    ])
    def test_valid(self, address: str) -> None:
        """Test well-formed dotted quads."""
        assert is_valid_ipv4(address) is True

    @pytest.mark.parametrize("address", [
        "",
        None,
        "256.1.1.1",
        "1.2.3",
        "1.2.3.4.5",
        "127.1",
        " 1.2.3.4",
        "1.2.3.4\n",
        "a.b.c.d",
        "2001:db8::1",
        "1.2.3.-4",
        "<html>",
    ])
    def test_invalid(self, address) -> None:
        """Test malformed and out-of-range literals."""
        assert is_valid_ipv4(address) is False

    def test_security_injection_attempts(self) -> None:
        """Test bodies with trailing payloads are rejected."""
        assert is_valid_ipv4("1.2.3.4; rm -rf /") is False
        assert is_valid_ipv4("1.2.3.4\x1b[31m") is False


class TestIsIpv4Shaped:
    """Tests for is_ipv4_shaped function."""

    def test_dotted(self) -> None:
        """Test dotted addresses count as IPv4."""
        assert is_ipv4_shaped("10.0.0.1")

    def test_ipv6(self) -> None:
        """Test colon-only addresses do not."""
        assert not is_ipv4_shaped("fe80::1")


class TestIsLoopbackAddress:
    """Tests for is_loopback_address function."""

    @pytest.mark.parametrize("address,expected", [
        ("127.0.0.1", True),
        ("127.8.8.8", True),
        ("::1", True),
        ("192.168.1.1", False),
        ("fe80::1%eth0", False),
        ("not-an-ip", False),
    ])
    def test_addresses(self, address: str, expected: bool) -> None:
        """Test loopback membership."""
        assert is_loopback_address(address) is expected
