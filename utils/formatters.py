"""Text formatting utilities for DISPLAY ONLY.

All cleanup functions work on DISPLAY DATA, never on raw data.
Raw values in report models remain unchanged.
"""

import re

import config


def cleanup_isp_name(isp: str) -> str:
    """Clean ISP name for DISPLAY (raw data unchanged).

    Process:
        1. Skip empty values
        2. Remove AS number prefix (AS12345)
        3. Remove corporate suffixes (CASE-INSENSITIVE)

    Examples:
        "AS12345 Comcast Corporation" → "Comcast"
        "Proton AG" → "Proton AG"
        "Google LLC" → "Google"

    Args:
        isp: ISP name from the geo-IP service

    Returns:
        Cleaned ISP name for display.
    """
    if not isp:
        return isp

    cleaned = re.sub(r"^AS\d+\s+", "", isp)

    terms = sorted(config.CORPORATE_SUFFIXES, key=len, reverse=True)
    for term in terms:
        pattern = r"\b" + re.escape(term) + r"(?=\s|[.,\-]|$)"
        cleaned = re.sub(pattern, "", cleaned, flags=re.IGNORECASE)

    cleaned = " ".join(cleaned.split())
    cleaned = cleaned.strip(" ,:.-")

    # Return original if cleaning produces empty
    if not cleaned:
        return isp

    return cleaned


def shorten_text(text: str, max_length: int) -> str:
    """Truncate text to max_length, adding "..." if truncated.

    Tries to break at word boundary.

    Args:
        text: Text to truncate
        max_length: Maximum length (including "..." if truncated)

    Returns:
        Truncated text with "..." if needed.
    """
    if len(text) <= max_length:
        return text

    truncated = text[: max_length - 3]

    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.7:  # Good break point
        return truncated[:last_space] + "..."

    return truncated + "..."
