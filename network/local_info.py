"""Local environment probes for the advanced check.

Neither probe touches the network: the WebRTC check only looks for an
installed WebRTC stack, the timezone check reads the clock and locale.
"""

import importlib.util
import locale
import os
from datetime import datetime
from pathlib import Path

import config
from logging_config import get_logger
from models import TimeZoneInfo, WebRtcStatus

logger = get_logger(__name__)

LOCALTIME_PATH = Path("/etc/localtime")


def check_webrtc_support() -> WebRtcStatus:
    """Report whether a WebRTC stack is importable.

    Static capability check: looks up config.WEBRTC_MODULES without
    importing them. Browsers are where WebRTC leaks usually happen;
    this only says whether local code could open peer connections.

    Returns:
        WebRtcStatus naming the first module found.
    """
    for module in config.WEBRTC_MODULES:
        try:
            found = importlib.util.find_spec(module) is not None
        except (ImportError, ValueError):
            found = False
        if found:
            logger.debug("WebRTC stack available: %s", module)
            return WebRtcStatus(available=True, library=module)

    logger.debug("No WebRTC stack found")
    return WebRtcStatus(available=False)


def snapshot_timezone(now: datetime | None = None) -> TimeZoneInfo:
    """Capture local timezone, clock and locale.

    Zone is the IANA name (Europe/Berlin) when /etc/localtime links into
    zoneinfo, else the abbreviation (CET). Language and country stay
    locale codes (pt, BR).

    Args:
        now: Aware or naive local time (default: current time)

    Returns:
        TimeZoneInfo; language/country empty when the locale is unset.
    """
    local_now = (now or datetime.now()).astimezone()
    offset = local_now.utcoffset()
    offset_hours = int(offset.total_seconds() / 3600) if offset else 0

    try:
        locale_name = locale.getlocale()[0]
    except ValueError:
        locale_name = None
    language, country = _split_locale(locale_name)

    info = TimeZoneInfo(
        zone=_system_zone_name() or local_now.tzname() or "UTC",
        utc_offset_hours=offset_hours,
        local_time=local_now.strftime("%H:%M:%S"),
        local_date=local_now.strftime("%d/%m/%Y"),
        language=language,
        country=country,
    )
    logger.debug("Timezone: %s (UTC%+d), locale %s_%s", info.zone, offset_hours, language, country)
    return info


def _split_locale(name: str | None) -> tuple[str, str]:
    """Split "pt_BR" into ("pt", "BR"); "" for missing parts."""
    if not name or name in ("C", "POSIX"):
        return ("", "")
    language, _, country = name.partition("_")
    return (language, country)


def _system_zone_name() -> str:
    """IANA zone name from the /etc/localtime link, "" if unavailable."""
    try:
        target = os.readlink(LOCALTIME_PATH)
    except OSError:
        return ""
    if "zoneinfo/" in target:
        return target.split("zoneinfo/", 1)[1]
    return ""
