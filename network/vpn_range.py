"""Common VPN/NAT range classifier.

LIMITATION: this is NOT a VPN exit-node lookup. It only reports whether
an address starts with a private (10/8, 172.16/12, 192.168/16) or
CGNAT-style (100.*) prefix. Tunnels often hand out such addresses, so a
match is a hint, and a public VPN exit address never matches.

The 100. prefix is wider than the real CGNAT block
100.64.0.0/10; the rule is kept as a plain prefix test.
"""

import config
from models import VpnRangeVerdict


def classify_vpn_range(ip: str) -> bool:
    """True iff ip starts with one of config.COMMON_VPN_PREFIXES.

    Pure string test: no parsing, no network access.

    Examples:
        "10.0.0.1"    -> True
        "172.31.0.9"  -> True
        "172.32.0.1"  -> False
        "8.8.8.8"     -> False
    """
    return ip.startswith(config.COMMON_VPN_PREFIXES)


def vpn_range_verdict(ip: str) -> VpnRangeVerdict:
    return VpnRangeVerdict(ip=ip, is_common_vpn_or_nat_range=classify_vpn_range(ip))
