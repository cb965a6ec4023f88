"""Logging configuration for vpncheck.

Console output is colored by level; an optional log file receives
everything at DEBUG, tagged with the thread each probe ran on.
Modules log with % arguments (PEP 391), never f-strings.
"""

import logging
from pathlib import Path

from colors import AllColors

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s"

# Chatty HTTP libraries kept at WARNING unless -v is given
THIRD_PARTY_LOGGERS: tuple[str, ...] = ("urllib3", "requests")


class ColoredFormatter(logging.Formatter):
    """Color the level name of console records."""

    COLORS = {
        "DEBUG": AllColors.BRIGHT_CYAN,
        "INFO": AllColors.BRIGHT_GREEN,
        "WARNING": AllColors.BRIGHT_YELLOW,
        "ERROR": AllColors.BRIGHT_RED,
        "CRITICAL": AllColors.BRIGHT_MAGENTA,
    }

    def format(self, record: logging.LogRecord) -> str:
        # Same record goes on to the file handler: restore the plain name
        levelname = record.levelname
        color = self.COLORS.get(levelname)
        if color:
            record.levelname = f"{color}{levelname}{AllColors.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    use_colors: bool = True,
) -> None:
    """Configure the root logger.

    Args:
        verbose: Console at DEBUG instead of WARNING
        log_file: Also write DEBUG records to this file
        use_colors: Color console level names
    """
    console_level = logging.DEBUG if verbose else logging.WARNING

    root_logger = logging.getLogger()
    # The file handler needs DEBUG records even when the console is quiet
    root_logger.setLevel(logging.DEBUG if (verbose or log_file) else logging.WARNING)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    formatter_class = ColoredFormatter if use_colors else logging.Formatter
    console_handler.setFormatter(formatter_class(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    if not verbose:
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger for module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance for the module.
    """
    return logging.getLogger(name)
