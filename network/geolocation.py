"""Geo-IP lookup for the resolved public address.

Queries ip-api.com and keeps only country, country code, city and ISP.
Parsing is tolerant: missing or non-string fields become "".
"""

import json
from typing import Any

import config
from enums import ErrorKind
from logging_config import get_logger
from models import GeoRecord, Result
from network.fetcher import Fetcher, fetch
from utils import is_valid_ipv4, sanitize_for_log

logger = get_logger(__name__)


def lookup_geo(ip: str, fetcher: Fetcher = fetch) -> Result[GeoRecord]:
    """Look up location and ISP for a public IPv4 address.

    Args:
        ip: Address from resolve_public_ip()
        fetcher: Transport (default: network.fetcher.fetch)

    Returns:
        Result with GeoRecord, INVALID_INPUT for a bad literal (no request
        made), the fetcher's error, or INVALID_RESPONSE for a non-object
        body or a "status": "fail" payload.
    """
    if not is_valid_ipv4(ip):
        logger.warning("Invalid IP for geolocation: %s", sanitize_for_log(ip))
        return Result.failure(ErrorKind.INVALID_INPUT, "not an IPv4 address")

    response = fetcher(config.GEO_URL_TEMPLATE.format(ip=ip), config.GEO_TIMEOUT_SECONDS)
    if not response.ok:
        return Result.failure(response.error, response.detail)

    try:
        data = json.loads(response.value or "")
    except json.JSONDecodeError:
        logger.error("Invalid JSON from geo-IP service")
        return Result.failure(ErrorKind.INVALID_RESPONSE, "geo-IP body is not JSON")

    if not isinstance(data, dict):
        logger.error("Geo-IP payload is not an object")
        return Result.failure(ErrorKind.INVALID_RESPONSE, "geo-IP body is not an object")

    if data.get("status") == "fail":
        message = _text_field(data, "message")
        logger.warning("Geo-IP lookup refused: %s", sanitize_for_log(message))
        return Result.failure(ErrorKind.INVALID_RESPONSE, message or "lookup failed")

    record = parse_geo_payload(ip, data)
    logger.debug(
        "Geolocation: %s, %s, %s",
        sanitize_for_log(record.country),
        sanitize_for_log(record.city),
        sanitize_for_log(record.isp),
    )
    return Result.success(record)


def parse_geo_payload(ip: str, data: dict[str, Any]) -> GeoRecord:
    """Extract the GeoRecord fields from a decoded payload.

    Args:
        ip: Address the lookup was made for
        data: Decoded JSON object (other keys ignored)

    Returns:
        GeoRecord with "" for anything absent.
    """
    return GeoRecord(
        ip=ip,
        country=_text_field(data, "country"),
        country_code=_text_field(data, "countryCode"),
        city=_text_field(data, "city"),
        isp=_text_field(data, "isp"),
    )


def _text_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""
