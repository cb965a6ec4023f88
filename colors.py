"""ANSI color codes for terminal output.

Palette shared by report output and log level coloring.
All colors optimized for dark terminal backgrounds.
"""

from enum import StrEnum


class AllColors(StrEnum):
    """ANSI palette for dark terminal backgrounds.

    Use these values to customize the Color enum below.
    """

    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_MAGENTA = "\033[95m"
    BRIGHT_CYAN = "\033[96m"

    DIM = "\033[2m"

    RESET = "\033[0m"


# CUSTOMIZE HERE: Change these to any color from AllColors above
class Color(StrEnum):
    """Active colors used for report display.

    Example: GREEN = AllColors.BRIGHT_BLUE  # Use blue for OK sections
    """

    GREEN = AllColors.BRIGHT_GREEN      # Section OK
    YELLOW = AllColors.BRIGHT_YELLOW    # Section warning
    RED = AllColors.BRIGHT_RED          # Section error
    CYAN = AllColors.BRIGHT_CYAN        # Headings
    DIM = AllColors.DIM                 # Notes
    RESET = AllColors.RESET             # Reset (don't change)
