"""Console presentation of check reports.

ConsoleSink is the presentation sink the orchestrator talks to. Each
report section is rendered by its own function and colored by status.
"""

import sys
from typing import TextIO

import config
from colors import Color
from enums import CheckStatus, Classification
from models import (
    AdvancedReport,
    BasicReport,
    ConsistencyVerdict,
    DnsExposure,
    GeoRecord,
    InterfaceAddress,
    NetworkStatus,
    Result,
    TimeZoneInfo,
    VpnRangeVerdict,
    WebRtcStatus,
)
from orchestrator import Report, describe_error
from utils import cleanup_isp_name

RULE_WIDTH: int = 60

Section = tuple[CheckStatus, str, list[str]]

STATUS_COLORS: dict[CheckStatus, str] = {
    CheckStatus.OK: Color.GREEN,
    CheckStatus.WARN: Color.YELLOW,
    CheckStatus.ERROR: Color.RED,
}

CLASSIFICATION_TEXT: dict[Classification, tuple[CheckStatus, str]] = {
    Classification.ALL_FAILED: (CheckStatus.ERROR, "All services failed"),
    Classification.CONSISTENT: (CheckStatus.OK, "Consistent"),
    Classification.MINOR_INCONSISTENCY: (CheckStatus.WARN, "Minor inconsistency"),
    Classification.INCONSISTENT: (CheckStatus.ERROR, "Inconsistent"),
}


class ConsoleSink:
    """Writes reports and notifications to a text stream."""

    def __init__(self, file: TextIO | None = None) -> None:
        self._file = file if file is not None else sys.stdout

    def set_busy(self, busy: bool) -> None:
        if busy:
            print(f"{Color.DIM}Checking...{Color.RESET}", file=self._file)

    def publish(self, report: Report) -> None:
        if isinstance(report, BasicReport):
            format_basic_report(report, file=self._file)
        else:
            format_advanced_report(report, file=self._file)

    def notify(self, message: str) -> None:
        print(f"{Color.CYAN}>> {message}{Color.RESET}", file=self._file)


def format_basic_report(report: BasicReport, file: TextIO | None = None) -> None:
    """Print the basic check report.

    Args:
        report: Report from CheckOrchestrator.run_basic_check()
        file: Optional file handle (default: sys.stdout)
    """
    _print_report(
        "Basic VPN Check",
        [
            ("VPN Status", _render(report.network, render_network)),
            ("Public IP", _render(report.public_ip, render_public_ip)),
            ("IP Consistency", _render(report.consistency, render_consistency)),
            ("DNS Exposure", _render(report.dns_exposure, render_dns_exposure)),
            ("Local IPs", _render(report.local_addresses, render_local_addresses)),
        ],
        report.timestamp,
        file,
    )


def format_advanced_report(report: AdvancedReport, file: TextIO | None = None) -> None:
    """Print the advanced check report.

    Args:
        report: Report from CheckOrchestrator.run_advanced_check()
        file: Optional file handle (default: sys.stdout)
    """
    _print_report(
        "Advanced Privacy Checks",
        [
            ("WebRTC", _render(report.webrtc, render_webrtc)),
            ("Geolocation", _render(report.geolocation, render_geolocation)),
            ("Time Zone", _render(report.timezone, render_timezone)),
            ("VPN Detection", _render(report.vpn_range, render_vpn_range)),
        ],
        report.timestamp,
        file,
    )


def render_network(status: NetworkStatus) -> Section:
    lines = [
        f"Network type: {status.network_type.value}",
        f"Default route: {status.active_interface or 'NONE'}",
    ]
    if status.vpn_interfaces:
        lines.append(f"Tunnel interfaces: {', '.join(status.vpn_interfaces)}")
    if status.vpn_active:
        return (CheckStatus.OK, "Connected", lines)
    return (CheckStatus.WARN, "Disconnected", lines)


def render_public_ip(ip: str) -> Section:
    return (CheckStatus.OK, ip, [])


def render_consistency(verdict: ConsistencyVerdict) -> Section:
    status, text = CLASSIFICATION_TEXT[verdict.classification]
    lines = [f"Services responded: {verdict.responded_count}/{verdict.total_count}"]
    responders = [outcome for outcome in verdict.outcomes if outcome.succeeded]
    for outcome in responders[: config.MAX_LISTED_RESPONDERS]:
        lines.append(f"{outcome.target.service_name}: {outcome.value}")
    return (status, f"{text} ({verdict.distinct_value_count} different IPs)", lines)


def render_dns_exposure(exposure: DnsExposure) -> Section:
    lines = [f"Local addresses found: {exposure.count}"]
    for entry in exposure.addresses[: config.MAX_LISTED_ADDRESSES]:
        lines.append(f"{entry.address} ({entry.hostname})")
    if exposure.likely_leak:
        return (CheckStatus.WARN, "Possible leak", lines)
    return (CheckStatus.OK, "Probably safe", lines)


def render_local_addresses(addresses: tuple[InterfaceAddress, ...]) -> Section:
    if not addresses:
        return (CheckStatus.WARN, "No local IP found", [])
    lines = [f"{entry.interface_name}: {entry.address}" for entry in addresses]
    return (CheckStatus.OK, f"{len(addresses)} address(es)", lines)


def render_webrtc(status: WebRtcStatus) -> Section:
    note = "Note: static check only; WebRTC leaks are most common in browsers."
    if status.available:
        return (CheckStatus.WARN, f"Available via {status.library} (may leak)", [note])
    return (CheckStatus.OK, "Not detected", [note])


def render_geolocation(record: GeoRecord) -> Section:
    country = record.country or "?"
    if record.country_code:
        country = f"{country} ({record.country_code})"
    lines = [
        f"Country: {country}",
        f"City: {record.city or '?'}",
        f"ISP: {cleanup_isp_name(record.isp) or '?'}",
        f"IP: {record.ip}",
    ]
    return (CheckStatus.OK, country, lines)


def render_timezone(info: TimeZoneInfo) -> Section:
    lines = [
        f"Time: {info.local_time}",
        f"Date: {info.local_date}",
        f"Language: {info.language or '?'}",
        f"Country: {info.country or '?'}",
        f"UTC offset: {info.utc_offset_hours:+d}h",
    ]
    return (CheckStatus.OK, info.zone, lines)


def render_vpn_range(verdict: VpnRangeVerdict) -> Section:
    lines = [
        f"IP: {verdict.ip}",
        f"Range: {'Private/VPN' if verdict.is_common_vpn_or_nat_range else 'Public'}",
        "Note: prefix heuristic (private/CGNAT), not a VPN exit-node database.",
    ]
    if verdict.is_common_vpn_or_nat_range:
        return (CheckStatus.WARN, "IP in common VPN range", lines)
    return (CheckStatus.OK, "IP not identified as VPN", lines)


def _render(result: Result, renderer) -> Section:
    """Render a successful section or its error message."""
    if not result.ok:
        return (CheckStatus.ERROR, describe_error(result.error, result.detail), [])
    return renderer(result.value)


def _print_report(
    title: str,
    sections: list[tuple[str, Section]],
    timestamp: str,
    file: TextIO | None,
) -> None:
    if file is None:
        file = sys.stdout

    print("=" * RULE_WIDTH, file=file)
    print(f"{title}  {Color.DIM}{timestamp}{Color.RESET}", file=file)
    print("=" * RULE_WIDTH, file=file)

    for name, (status, summary, lines) in sections:
        color = STATUS_COLORS[status]
        print(f"{color}[{status.value:<5}]{Color.RESET} {name}: {summary}", file=file)
        for line in lines:
            print(f"        {line}", file=file)

    print("=" * RULE_WIDTH, file=file)
