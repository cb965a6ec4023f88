"""Tests for network/geolocation.py.

Tests tolerant parsing of ip-api.com payloads with stubbed fetchers.
"""

import json
from unittest.mock import MagicMock

from conftest import make_fetcher
from enums import ErrorKind
from models import Result
from network.geolocation import lookup_geo, parse_geo_payload

IP = "203.0.113.7"
GEO_URL = f"http://ip-api.com/json/{IP}"

FULL_PAYLOAD = {
    "status": "success",
    "country": "Brazil",
    "countryCode": "BR",
    "region": "SP",
    "city": "São Paulo",
    "isp": "Claro S.A.",
    "query": IP,
}


def geo_fetcher(body: str):
    return make_fetcher({GEO_URL: Result.success(body)})


class TestLookupGeo:
    """Tests for lookup_geo function."""

    def test_full_payload(self) -> None:
        """Test all four fields are extracted."""
        result = lookup_geo(IP, geo_fetcher(json.dumps(FULL_PAYLOAD)))

        assert result.ok
        assert result.value.ip == IP
        assert result.value.country == "Brazil"
        assert result.value.country_code == "BR"
        assert result.value.city == "São Paulo"
        assert result.value.isp == "Claro S.A."

    def test_reordered_and_extra_whitespace(self) -> None:
        """Test key order and formatting do not matter."""
        body = '{\n  "isp" : "Proton AG",\n  "city":"Geneva", "countryCode": "CH",\n  "country": "Switzerland"\n}'

        result = lookup_geo(IP, geo_fetcher(body))

        assert result.value.country == "Switzerland"
        assert result.value.city == "Geneva"
        assert result.value.isp == "Proton AG"

    def test_missing_fields_are_empty(self) -> None:
        """Test absent fields become empty strings."""
        result = lookup_geo(IP, geo_fetcher('{"country": "Germany"}'))

        assert result.ok
        assert result.value.country == "Germany"
        assert result.value.city == ""
        assert result.value.isp == ""
        assert result.value.country_code == ""

    def test_escaped_quotes_in_values(self) -> None:
        """Test quotes inside string values survive."""
        body = json.dumps({"isp": 'The "Best" ISP', "city": "Rio"})

        result = lookup_geo(IP, geo_fetcher(body))

        assert result.value.isp == 'The "Best" ISP'

    def test_invalid_ip_makes_no_request(self) -> None:
        """Test invalid literal fails before any request."""
        fetcher = MagicMock()

        result = lookup_geo("not-an-ip", fetcher)

        assert result.error == ErrorKind.INVALID_INPUT
        fetcher.assert_not_called()

    def test_status_fail(self) -> None:
        """Test a refused lookup is INVALID_RESPONSE with the message."""
        body = json.dumps({"status": "fail", "message": "reserved range", "query": IP})

        result = lookup_geo(IP, geo_fetcher(body))

        assert result.error == ErrorKind.INVALID_RESPONSE
        assert result.detail == "reserved range"

    def test_not_json(self) -> None:
        """Test a non-JSON body is INVALID_RESPONSE."""
        result = lookup_geo(IP, geo_fetcher("<html>Too many requests</html>"))

        assert result.error == ErrorKind.INVALID_RESPONSE

    def test_json_array(self) -> None:
        """Test a JSON non-object is INVALID_RESPONSE."""
        result = lookup_geo(IP, geo_fetcher("[1, 2, 3]"))

        assert result.error == ErrorKind.INVALID_RESPONSE

    def test_fetch_error_passes_through(self) -> None:
        """Test transport errors keep their kind."""
        fetcher = make_fetcher({GEO_URL: Result.failure(ErrorKind.TIMEOUT, "slow")})

        result = lookup_geo(IP, fetcher)

        assert result.error == ErrorKind.TIMEOUT

    def test_uses_geo_deadline(self) -> None:
        """Test the request uses the 10 second geo deadline."""
        fetcher = MagicMock(return_value=Result.success(json.dumps(FULL_PAYLOAD)))

        lookup_geo(IP, fetcher)

        fetcher.assert_called_once_with(GEO_URL, 10.0)


class TestParseGeoPayload:
    """Tests for parse_geo_payload function."""

    def test_non_string_values_ignored(self) -> None:
        """Test numbers and nulls become empty strings."""
        record = parse_geo_payload(IP, {"country": None, "city": 42, "isp": " Vivo "})

        assert record.country == ""
        assert record.city == ""
        assert record.isp == "Vivo"
