"""Network probing modules for vpncheck.

Provides the HTTP fetcher, interface enumeration, public IP resolution,
multi-service consistency, DNS exposure, geolocation, VPN range
classification and local environment probes.
"""

from .consistency import check_consistency, classify
from .dns import check_dns_exposure
from .external_ip import resolve_public_ip
from .fetcher import Fetcher, fetch
from .geolocation import lookup_geo
from .interfaces import enumerate_interfaces, get_network_status, local_ipv4_addresses
from .local_info import check_webrtc_support, snapshot_timezone
from .vpn_range import classify_vpn_range, vpn_range_verdict

__all__ = [
    # Transport
    "Fetcher",
    "fetch",
    # Interfaces
    "enumerate_interfaces",
    "get_network_status",
    "local_ipv4_addresses",
    # Public IP
    "resolve_public_ip",
    "check_consistency",
    "classify",
    # Heuristics
    "check_dns_exposure",
    "classify_vpn_range",
    "vpn_range_verdict",
    # Lookups
    "lookup_geo",
    # Local environment
    "check_webrtc_support",
    "snapshot_timezone",
]
