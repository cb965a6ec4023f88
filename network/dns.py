"""DNS exposure heuristic.

Counts distinct local IPv4 endpoints that could each carry resolver
traffic outside the tunnel. More than
config.DNS_LEAK_ADDRESS_THRESHOLD deduplicated addresses is flagged.
"""

import socket
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable

import config
from logging_config import get_logger
from models import DnsExposure, InterfaceAddress, Result
from network.interfaces import enumerate_interfaces, local_ipv4_addresses
from utils import sanitize_for_log

logger = get_logger(__name__)

HostnameLookup = Callable[[str], str]


def reverse_lookup(address: str, timeout: float | None = None) -> str:
    """Reverse-resolve an address, falling back to the literal itself.

    The resolver call runs on a helper thread bounded by timeout
    (default config.REVERSE_LOOKUP_TIMEOUT_SECONDS); a lookup that
    outlives it is abandoned.
    """
    if timeout is None:
        timeout = config.REVERSE_LOOKUP_TIMEOUT_SECONDS

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="rdns")
    future = executor.submit(socket.gethostbyaddr, address)
    try:
        return future.result(timeout=timeout)[0]
    except FutureTimeoutError:
        logger.debug("Reverse lookup of %s timed out", sanitize_for_log(address))
        return address
    except (OSError, UnicodeError):
        return address
    finally:
        executor.shutdown(wait=False)


def check_dns_exposure(
    addresses: tuple[InterfaceAddress, ...] | None = None,
    hostname_lookup: HostnameLookup = reverse_lookup,
) -> Result[DnsExposure]:
    """Flag likely DNS leakage from the local address count.

    Algorithm:
        1. Enumerate interfaces (unless a snapshot is given)
        2. Keep up, non-loopback, IPv4-shaped addresses
        3. Attach hostname, deduplicate by (address, hostname)
        4. likely_leak = count > threshold

    Pure for a given snapshot and a deterministic hostname_lookup.

    Args:
        addresses: Interface snapshot, or None to enumerate now
        hostname_lookup: Address -> hostname resolver

    Returns:
        Result with DnsExposure, or the enumeration failure.
    """
    if addresses is None:
        snapshot = enumerate_interfaces()
        if not snapshot.ok:
            return Result.failure(snapshot.error, snapshot.detail)
        addresses = snapshot.value or ()

    exposed = dedupe_addresses(local_ipv4_addresses(addresses), hostname_lookup)
    likely_leak = len(exposed) > config.DNS_LEAK_ADDRESS_THRESHOLD

    if likely_leak:
        logger.warning(
            "Possible DNS leak: %d local addresses (threshold %d)",
            len(exposed),
            config.DNS_LEAK_ADDRESS_THRESHOLD,
        )
    else:
        logger.debug("DNS exposure: %d local addresses", len(exposed))

    return Result.success(DnsExposure(addresses=exposed, likely_leak=likely_leak))


def dedupe_addresses(
    addresses: tuple[InterfaceAddress, ...],
    hostname_lookup: HostnameLookup = reverse_lookup,
) -> tuple[InterfaceAddress, ...]:
    """Resolve hostnames and drop repeated (address, hostname) pairs.

    First occurrence wins, order preserved. Each address is looked up once.

    Args:
        addresses: Filtered addresses
        hostname_lookup: Address -> hostname resolver

    Returns:
        Deduplicated addresses with hostname set.
    """
    hostnames: dict[str, str] = {}
    seen: set[tuple[str, str]] = set()
    unique = []

    for entry in addresses:
        if entry.address not in hostnames:
            hostnames[entry.address] = hostname_lookup(entry.address)
            logger.debug(
                "%s -> %s",
                sanitize_for_log(entry.address),
                sanitize_for_log(hostnames[entry.address]),
            )

        key = (entry.address, hostnames[entry.address])
        if key in seen:
            continue
        seen.add(key)

        unique.append(
            InterfaceAddress(
                interface_name=entry.interface_name,
                address=entry.address,
                is_loopback=entry.is_loopback,
                is_up=entry.is_up,
                hostname=hostnames[entry.address],
            )
        )

    return tuple(unique)
