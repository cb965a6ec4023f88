"""JSON export functionality.

Renders check reports as JSON with metadata. Output goes to stdout
only; results are never written to disk.
"""

import json
from typing import Any

import config
from logging_config import get_logger
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

logger = get_logger(__name__)


class JsonSink:
    """Collects published reports for export; notifications go to the log."""

    def __init__(self) -> None:
        self.reports: list[BasicReport | AdvancedReport] = []

    def set_busy(self, busy: bool) -> None:
        logger.debug("Busy: %s", busy)

    def publish(self, report: BasicReport | AdvancedReport) -> None:
        self.reports.append(report)

    def notify(self, message: str) -> None:
        logger.info("%s", message)


def export_to_json(
    reports: list[BasicReport | AdvancedReport],
    indent: int = 2,
) -> str:
    """Export reports to JSON format with metadata.

    Args:
        reports: Reports in the order they were run
        indent: JSON indentation (default 2)

    Returns:
        JSON string with metadata and one object per report.
    """
    output = {
        "metadata": {
            "tool": config.TOOL_NAME,
            "version": config.VERSION,
            "report_count": len(reports),
        },
        "reports": [_report_to_dict(report) for report in reports],
    }
    return json.dumps(output, indent=indent)


def _report_to_dict(report: BasicReport | AdvancedReport) -> dict[str, Any]:
    """Convert a report to a dictionary, one entry per section."""
    kind = "basic" if isinstance(report, BasicReport) else "advanced"
    return {
        "check": kind,
        "timestamp": report.timestamp,
        "failed_sections": report.failed_sections,
        "sections": {
            name: _result_to_dict(result) for name, result in report.sections().items()
        },
    }


def _result_to_dict(result: Result) -> dict[str, Any]:
    if not result.ok:
        return {
            "ok": False,
            "error": result.error.value if result.error else None,
            "detail": result.detail,
        }
    return {"ok": True, "value": _value_to_dict(result.value)}


def _value_to_dict(value: Any) -> Any:
    """Flatten section values into JSON-compatible structures."""
    if isinstance(value, ConsistencyVerdict):
        return {
            "classification": value.classification.value,
            "distinct_value_count": value.distinct_value_count,
            "responded_count": value.responded_count,
            "total_count": value.total_count,
            "services": [
                {
                    "service": outcome.target.service_name,
                    "url": outcome.target.url,
                    "succeeded": outcome.succeeded,
                    "ip": outcome.value,
                    "error": outcome.error.value if outcome.error else None,
                }
                for outcome in value.outcomes
            ],
        }
    if isinstance(value, DnsExposure):
        return {
            "likely_leak": value.likely_leak,
            "count": value.count,
            "addresses": [_address_to_dict(entry) for entry in value.addresses],
        }
    if isinstance(value, tuple):
        return [_address_to_dict(entry) for entry in value if isinstance(entry, InterfaceAddress)]
    if isinstance(value, NetworkStatus):
        return {
            "vpn_active": value.vpn_active,
            "network_type": value.network_type.value,
            "active_interface": value.active_interface,
            "vpn_interfaces": list(value.vpn_interfaces),
        }
    if isinstance(value, GeoRecord):
        return {
            "ip": value.ip,
            "country": value.country,
            "country_code": value.country_code,
            "city": value.city,
            "isp": value.isp,
        }
    if isinstance(value, VpnRangeVerdict):
        return {
            "ip": value.ip,
            "is_common_vpn_or_nat_range": value.is_common_vpn_or_nat_range,
        }
    if isinstance(value, WebRtcStatus):
        return {"available": value.available, "library": value.library}
    if isinstance(value, TimeZoneInfo):
        return {
            "zone": value.zone,
            "utc_offset_hours": value.utc_offset_hours,
            "local_time": value.local_time,
            "local_date": value.local_date,
            "language": value.language,
            "country": value.country,
        }
    return value


def _address_to_dict(entry: InterfaceAddress) -> dict[str, Any]:
    return {
        "interface": entry.interface_name,
        "address": entry.address,
        "hostname": entry.hostname,
    }
