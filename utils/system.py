"""System command execution utilities.

Runs iproute2 queries with timeout protection.
Never uses shell=True to prevent command injection.
"""

import re
import shutil
import subprocess
from typing import Any

import config
from logging_config import get_logger

logger = get_logger(__name__)


def run_command(cmd: list[str]) -> str | None:
    """Execute system command safely.

    Security:
        - NEVER shell=True
        - Timeout: config.COMMAND_TIMEOUT_SECONDS
        - No root privileges required

    Args:
        cmd: Command as list (e.g., ["ip", "-o", "addr", "show"])

    Returns:
        Command output (stripped) or None on error.
    """
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=config.COMMAND_TIMEOUT_SECONDS,
            check=False,
            shell=False,
        )
    except subprocess.TimeoutExpired:
        logger.debug("Command timed out: %s", sanitize_for_log(" ".join(cmd)))
        return None
    except FileNotFoundError:
        logger.debug("Command not found: %s", sanitize_for_log(cmd[0]))
        return None
    except (OSError, ValueError) as e:
        logger.debug("Command failed to start: %s", sanitize_for_log(str(e)))
        return None

    if result.returncode != 0:
        logger.debug(
            "Command exited %d: %s",
            result.returncode,
            sanitize_for_log(" ".join(cmd)),
        )
        return None

    return result.stdout.strip()


def command_exists(cmd: str) -> bool:
    """Check if command exists in PATH.

    Args:
        cmd: Command name (e.g., "ip")

    Returns:
        True if command is available, False otherwise.
    """
    return shutil.which(cmd) is not None


def sanitize_for_log(value: Any) -> str:
    """Sanitize values before logging to prevent log injection.

    Service bodies and interface names are untrusted input.

    Removes:
        - Newlines
        - ANSI escape codes
        - Control characters

    Max length: 200 characters

    Args:
        value: Value to sanitize (any type, will be converted to string)

    Returns:
        Sanitized string safe for logging.
    """
    text = str(value)

    text = text.replace("\n", " ").replace("\r", " ")

    text = re.sub(r"\x1b\[[0-9;]*m", "", text)

    text = "".join(c for c in text if c.isprintable() or c.isspace())

    if len(text) > 200:
        text = text[:197] + "..."

    return text
