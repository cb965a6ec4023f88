"""Data models for probe results and check reports.

All models are frozen dataclasses: produced once by a probe or heuristic,
never mutated afterwards, folded into a report by the orchestrator.

Architecture: Leaf results are wrapped in Result so every section of a
report can carry either a value or a typed error:
- Result: value-or-error wrapper for all network-touching operations
- ProbeTarget / ProbeOutcome: one IP-echo service and what it answered
- ConsistencyVerdict: agreement among the IP-echo services
- InterfaceAddress / DnsExposure: local interface snapshot and leak heuristic
- GeoRecord / VpnRangeVerdict: lookups on the resolved public IP
- NetworkStatus / WebRtcStatus / TimeZoneInfo: local environment snapshots
- BasicReport / AdvancedReport: what the orchestrator hands to the sink
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from enums import Classification, ErrorKind, NetworkType

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Value or typed error returned instead of raising.

    Exactly one of value/error is meaningful: ok is True iff error is None.
    """

    value: T | None = None
    error: ErrorKind | None = None
    detail: str = ""  # Human-readable context for the error

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, detail: str = "") -> "Result[T]":
        return cls(error=error, detail=detail)


@dataclass(frozen=True)
class ProbeTarget:
    """One external IP-echo service."""

    service_name: str
    url: str
    timeout: float  # Seconds


@dataclass(frozen=True)
class ProbeOutcome:
    """What a single ProbeTarget answered (or why it did not)."""

    target: ProbeTarget
    value: str | None  # IPv4 literal on success
    succeeded: bool
    error: ErrorKind | None = None

    @classmethod
    def from_result(cls, target: ProbeTarget, result: Result[str]) -> "ProbeOutcome":
        """Build outcome from a resolver-style result."""
        if result.ok:
            return cls(target=target, value=result.value, succeeded=True)
        return cls(target=target, value=None, succeeded=False, error=result.error)


@dataclass(frozen=True)
class ConsistencyVerdict:
    """Agreement among IP-echo services for one run.

    Recomputed every run, never persisted.
    """

    distinct_value_count: int
    responded_count: int
    total_count: int
    classification: Classification
    outcomes: tuple[ProbeOutcome, ...] = ()

    @property
    def distinct_values(self) -> list[str]:
        """Distinct successful values in first-seen order."""
        values: list[str] = []
        for outcome in self.outcomes:
            if outcome.succeeded and outcome.value and outcome.value not in values:
                values.append(outcome.value)
        return values


@dataclass(frozen=True)
class InterfaceAddress:
    """One address bound to a local interface.

    Enumerated fresh each call; no identity across calls.
    """

    interface_name: str
    address: str
    is_loopback: bool
    is_up: bool
    hostname: str = ""  # Filled by reverse lookup in DNS exposure check


@dataclass(frozen=True)
class DnsExposure:
    """Deduplicated non-loopback IPv4 addresses and the leak flag."""

    addresses: tuple[InterfaceAddress, ...]
    likely_leak: bool

    @property
    def count(self) -> int:
        return len(self.addresses)


@dataclass(frozen=True)
class GeoRecord:
    """Geo-IP fields; any of them may be empty if the payload lacked it."""

    ip: str
    country: str = ""
    country_code: str = ""
    city: str = ""
    isp: str = ""


@dataclass(frozen=True)
class VpnRangeVerdict:
    """Private/CGNAT prefix test on a public IP (not a VPN database lookup)."""

    ip: str
    is_common_vpn_or_nat_range: bool


@dataclass(frozen=True)
class NetworkStatus:
    """Transport flags of the active network."""

    vpn_active: bool
    network_type: NetworkType
    active_interface: str | None  # Interface holding the default route
    vpn_interfaces: tuple[str, ...] = ()


@dataclass(frozen=True)
class WebRtcStatus:
    """Static WebRTC capability check (no signalling inspection)."""

    available: bool
    library: str | None = None


@dataclass(frozen=True)
class TimeZoneInfo:
    """Local clock, timezone and locale snapshot."""

    zone: str
    utc_offset_hours: int
    local_time: str  # HH:MM:SS
    local_date: str  # DD/MM/YYYY
    language: str = ""
    country: str = ""


@dataclass(frozen=True)
class BasicReport:
    """Outcome of the basic check; each section succeeds or fails alone."""

    network: Result[NetworkStatus]
    public_ip: Result[str]
    consistency: Result[ConsistencyVerdict]
    dns_exposure: Result[DnsExposure]
    local_addresses: Result[tuple[InterfaceAddress, ...]]
    timestamp: str = ""

    def sections(self) -> dict[str, Result]:
        return {
            "network": self.network,
            "public_ip": self.public_ip,
            "consistency": self.consistency,
            "dns_exposure": self.dns_exposure,
            "local_addresses": self.local_addresses,
        }

    @property
    def failed_sections(self) -> list[str]:
        return [name for name, result in self.sections().items() if not result.ok]


@dataclass(frozen=True)
class AdvancedReport:
    """Outcome of the advanced privacy checks."""

    webrtc: Result[WebRtcStatus]
    geolocation: Result[GeoRecord]
    timezone: Result[TimeZoneInfo]
    vpn_range: Result[VpnRangeVerdict]
    timestamp: str = ""

    def sections(self) -> dict[str, Result]:
        return {
            "webrtc": self.webrtc,
            "geolocation": self.geolocation,
            "timezone": self.timezone,
            "vpn_range": self.vpn_range,
        }

    @property
    def failed_sections(self) -> list[str]:
        return [name for name, result in self.sections().items() if not result.ok]

