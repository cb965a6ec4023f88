"""Pytest configuration and shared fixtures.

Provides common test fixtures and configuration for the test suite.
"""

import sys
from pathlib import Path
from typing import Callable, Generator

import pytest

# Add parent directory to path so imports work
# This allows: from enums import ... to find /project/enums.py
sys.path.insert(0, str(Path(__file__).parent.parent))

from enums import ErrorKind
from logging_config import setup_logging
from models import InterfaceAddress, ProbeTarget, Result


# Configure logging once for entire test session
@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> Generator[None, None, None]:
    """Configure logging for all tests.

    Runs once before any tests (scope="session", autouse=True).
    """
    setup_logging(verbose=False)
    yield


def make_fetcher(responses: dict[str, Result[str]]) -> Callable[[str, float], Result[str]]:
    """Build a fake fetcher answering from a URL -> Result map.

    Unknown URLs fail with UNREACHABLE.
    """

    def fetcher(url: str, timeout: float) -> Result[str]:
        return responses.get(url, Result.failure(ErrorKind.UNREACHABLE, "no route"))

    return fetcher


def make_address(
    address: str,
    name: str = "eth0",
    is_loopback: bool = False,
    is_up: bool = True,
) -> InterfaceAddress:
    return InterfaceAddress(
        interface_name=name,
        address=address,
        is_loopback=is_loopback,
        is_up=is_up,
    )


@pytest.fixture
def four_targets() -> tuple[ProbeTarget, ...]:
    """Four fast targets on distinct URLs."""
    return tuple(
        ProbeTarget(f"svc{index}", f"https://svc{index}.example/ip", 1.0)
        for index in range(4)
    )


@pytest.fixture
def sample_addresses() -> tuple[InterfaceAddress, ...]:
    """Snapshot with loopback, a down interface, IPv6 and two usable IPv4."""
    return (
        make_address("127.0.0.1", name="lo", is_loopback=True),
        make_address("::1", name="lo", is_loopback=True),
        make_address("192.168.1.100", name="wlan0"),
        make_address("fe80::1", name="wlan0"),
        make_address("10.8.0.2", name="tun0"),
        make_address("172.17.0.1", name="docker0", is_up=False),
    )


@pytest.fixture
def identity_lookup() -> Callable[[str], str]:
    """Hostname lookup that returns the address unchanged."""
    return lambda address: address
