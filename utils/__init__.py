"""Utilities package for vpncheck.

Provides system command execution, input validation, and text formatting.
"""

from .formatters import cleanup_isp_name, shorten_text
from .system import command_exists, run_command, sanitize_for_log
from .validators import is_ipv4_shaped, is_loopback_address, is_valid_ipv4

__all__ = [
    # System
    "run_command",
    "command_exists",
    "sanitize_for_log",
    # Validators
    "is_valid_ipv4",
    "is_ipv4_shaped",
    "is_loopback_address",
    # Formatters
    "cleanup_isp_name",
    "shorten_text",
]
