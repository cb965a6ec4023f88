"""Local interface enumeration and active network status.

Reads iproute2 one-line output (ip -o ...) and turns it into
InterfaceAddress snapshots. Nothing is cached: every call re-reads.
"""

import re

import config
from enums import ErrorKind, NetworkType
from logging_config import get_logger
from models import InterfaceAddress, NetworkStatus, Result
from utils import is_ipv4_shaped, is_loopback_address, run_command, sanitize_for_log

logger = get_logger(__name__)

# "2: eth0: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 ..."
LINK_PATTERN = re.compile(r"^\d+:\s+([^:@\s]+)(?:@\S+)?:\s+<([^>]*)>")

# "2: eth0    inet 192.168.1.10/24 brd ... scope global eth0\ ..."
ADDR_PATTERN = re.compile(r"^\d+:\s+([^:@\s]+)(?:@\S+)?\s+inet6?\s+([0-9a-fA-F:.%]+)(?:/\d+)?")


def enumerate_interfaces() -> Result[tuple[InterfaceAddress, ...]]:
    """List every address on every local interface.

    Commands:
        ip -o link show   (UP / LOOPBACK flags)
        ip -o addr show   (one address per line)

    Loopback and down interfaces are included; callers filter.

    Returns:
        Result with the addresses in kernel order, or IO failure if
        either command produced no output.
    """
    link_output = run_command(["ip", "-o", "link", "show"])
    addr_output = run_command(["ip", "-o", "addr", "show"])
    if not link_output or not addr_output:
        logger.warning("Interface enumeration failed (ip command returned nothing)")
        return Result.failure(ErrorKind.IO, "could not read network interfaces")

    flags = parse_link_flags(link_output)
    addresses = parse_addresses(addr_output, flags)
    logger.debug("Enumerated %d addresses on %d interfaces", len(addresses), len(flags))
    return Result.success(addresses)


def parse_link_flags(output: str) -> dict[str, set[str]]:
    """Map interface name to its flag set from ip -o link show.

    Args:
        output: Raw command output

    Returns:
        Dict like {"lo": {"LOOPBACK", "UP", "LOWER_UP"}}.
    """
    flags: dict[str, set[str]] = {}
    for line in output.split("\n"):
        match = LINK_PATTERN.match(line.strip())
        if match:
            flags[match.group(1)] = set(match.group(2).split(","))
    return flags


def parse_addresses(
    output: str, flags: dict[str, set[str]]
) -> tuple[InterfaceAddress, ...]:
    """Build InterfaceAddress entries from ip -o addr show.

    Args:
        output: Raw command output
        flags: Result of parse_link_flags()

    Returns:
        Tuple of addresses (loopback/down included, zone ids stripped).
    """
    addresses = []
    for line in output.split("\n"):
        match = ADDR_PATTERN.match(line.strip())
        if not match:
            continue

        name = match.group(1)
        address = match.group(2).split("%")[0]
        iface_flags = flags.get(name, set())

        addresses.append(
            InterfaceAddress(
                interface_name=name,
                address=address,
                is_loopback="LOOPBACK" in iface_flags or is_loopback_address(address),
                is_up="UP" in iface_flags,
            )
        )
    return tuple(addresses)


def local_ipv4_addresses(
    addresses: tuple[InterfaceAddress, ...],
) -> tuple[InterfaceAddress, ...]:
    """Keep addresses that are up, non-loopback and IPv4-shaped."""
    return tuple(
        entry
        for entry in addresses
        if entry.is_up and not entry.is_loopback and is_ipv4_shaped(entry.address)
    )


def classify_interface_name(name: str) -> NetworkType:
    """Classify an interface by name prefix (longest prefix wins).

    Args:
        name: Interface name (eth0, wlan0, tun0, ...)

    Returns:
        NetworkType enum value
    """
    name_lower = name.lower()
    if "vpn" in name_lower:
        return NetworkType.VPN

    for prefix in sorted(config.INTERFACE_TYPE_PATTERNS, key=len, reverse=True):
        if name_lower.startswith(prefix):
            return NetworkType(config.INTERFACE_TYPE_PATTERNS[prefix])

    return NetworkType.UNKNOWN


def get_active_interface() -> str | None:
    """Get interface with default route.

    Command: ip route show default

    If multiple routes:
        - Return interface with lowest numeric metric
        - Routes without explicit metric sort after numeric ones

    Returns:
        Interface name or None if no default route.
    """
    output = run_command(["ip", "route", "show", "default"])
    if not output:
        return None

    routes: list[tuple[str, int | None]] = []
    for line in output.split("\n"):
        if not line.strip().startswith("default"):
            continue

        iface_match = re.search(r"dev\s+(\S+)", line)
        if not iface_match:
            continue

        metric_match = re.search(r"metric\s+(\d+)", line)
        metric = int(metric_match.group(1)) if metric_match else None
        routes.append((iface_match.group(1), metric))

    if not routes:
        return None

    # Stable sort: explicit metrics ascending, then kernel defaults in order
    routes.sort(key=lambda route: (route[1] is None, route[1] or 0))
    return routes[0][0]


def get_network_status(addresses: tuple[InterfaceAddress, ...]) -> NetworkStatus:
    """Derive transport flags for the active network.

    VPN is reported active when any up interface carries a VPN-style
    name, even if the default route goes elsewhere (split tunnels).

    Args:
        addresses: Snapshot from enumerate_interfaces()

    Returns:
        NetworkStatus for the default-route interface.
    """
    active = get_active_interface()

    vpn_interfaces = sorted(
        {
            entry.interface_name
            for entry in addresses
            if entry.is_up and classify_interface_name(entry.interface_name) == NetworkType.VPN
        }
    )

    network_type = classify_interface_name(active) if active else NetworkType.UNKNOWN

    logger.debug(
        "Active interface: %s (%s), VPN interfaces: %s",
        sanitize_for_log(active or "NONE"),
        network_type.value,
        sanitize_for_log(vpn_interfaces),
    )

    return NetworkStatus(
        vpn_active=bool(vpn_interfaces) or network_type == NetworkType.VPN,
        network_type=network_type,
        active_interface=active,
        vpn_interfaces=tuple(vpn_interfaces),
    )
