"""Public IP resolution.

Asks one canonical IP-echo service for the address traffic leaves from.
"""

import config
from enums import ErrorKind
from logging_config import get_logger
from models import ProbeTarget, Result
from network.fetcher import Fetcher, fetch
from utils import is_valid_ipv4, sanitize_for_log

logger = get_logger(__name__)


def resolve_public_ip(fetcher: Fetcher = fetch) -> Result[str]:
    """Resolve the public IPv4 address via the canonical service.

    Single attempt, config.CANONICAL_TIMEOUT_SECONDS deadline.

    Args:
        fetcher: Transport (default: network.fetcher.fetch)

    Returns:
        Result with the trimmed IPv4 literal, the fetcher's error, or
        INVALID_RESPONSE when the body is not a dotted quad.
    """
    return query_ip_service(config.CANONICAL_TARGET, fetcher)


def query_ip_service(target: ProbeTarget, fetcher: Fetcher = fetch) -> Result[str]:
    """Fetch one IP-echo target and validate its body.

    Args:
        target: Service to query
        fetcher: Transport

    Returns:
        Result with the IPv4 literal or a typed error.
    """
    logger.debug("Querying %s (%s)", target.service_name, target.url)
    response = fetcher(target.url, target.timeout)
    if not response.ok:
        logger.debug(
            "%s failed: %s",
            target.service_name,
            response.error.value if response.error else "unknown",
        )
        return response

    ip = (response.value or "").strip()
    if not is_valid_ipv4(ip):
        logger.warning(
            "%s returned invalid response: %s",
            target.service_name,
            sanitize_for_log(ip[:40]),
        )
        return Result.failure(ErrorKind.INVALID_RESPONSE, "not an IPv4 address")

    logger.debug("%s returned %s", target.service_name, ip)
    return Result.success(ip)
