#!/usr/bin/env python3
"""vpncheck - VPN and leak check tool.

Main entry point for the vpncheck command-line tool.
"""

import argparse
import sys
import traceback
from pathlib import Path

from config import ExitCode
from display import ConsoleSink
from export import JsonSink, export_to_json
from logging_config import get_logger, setup_logging
from orchestrator import CheckOrchestrator, check_dependencies
from utils import sanitize_for_log


def parse_arguments() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace.

    Exits:
        Code 4 if --log-file points into a missing directory.
    """
    parser = argparse.ArgumentParser(
        description="Check whether traffic is tunneled and whether the tunnel leaks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vpncheck                    # Basic check
  vpncheck advanced           # WebRTC, geolocation, timezone, VPN range
  vpncheck all -v             # Both checks, verbose
  vpncheck --export json      # Basic check as JSON (stdout)
  vpncheck -v --log-file debug.log  # Log to file

Exit codes:
  0 - Success
  1 - General error or a check failed
  2 - Missing dependencies
  4 - Invalid arguments
        """,
    )

    parser.add_argument(
        "mode",
        nargs="?",
        choices=["basic", "advanced", "all"],
        default="basic",
        help="Which check to run (default: basic)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--export",
        choices=["json"],
        metavar="FORMAT",
        help="Print reports as JSON instead of text (json only)",
    )

    args = parser.parse_args()

    # Validation: log file directory must exist
    if args.log_file and not args.log_file.resolve().parent.is_dir():
        print("Error: --log-file directory does not exist", file=sys.stderr)
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    return args


def run_checks(orchestrator: CheckOrchestrator, mode: str) -> list:
    """Run the requested checks in order.

    Args:
        orchestrator: Session orchestrator
        mode: "basic", "advanced" or "all"

    Returns:
        Reports that completed (cancelled runs are skipped).
    """
    reports = []
    if mode in ("basic", "all"):
        reports.append(orchestrator.run_basic_check())
    if mode in ("advanced", "all"):
        reports.append(orchestrator.run_advanced_check())
    return [report for report in reports if report is not None]


def main() -> None:
    """Main execution flow.

    Exit codes:
        0: Success
        1: General error, or any section of any report failed
        2: Missing dependencies
        4: Invalid arguments
    """
    args = parse_arguments()

    # Setup logging (must be called before any logger usage)
    setup_logging(
        verbose=args.verbose,
        log_file=args.log_file,
        use_colors=True,
    )

    logger = get_logger(__name__)

    if not check_dependencies():
        logger.error("Missing required dependencies - cannot continue")
        sys.exit(ExitCode.MISSING_DEPENDENCIES)

    json_sink = JsonSink() if args.export else None
    sink = json_sink or ConsoleSink()
    orchestrator = CheckOrchestrator(sink)

    try:
        reports = run_checks(orchestrator, args.mode)

        if json_sink is not None:
            print(export_to_json(json_sink.reports))

        if not reports or any(report.failed_sections for report in reports):
            sys.exit(ExitCode.GENERAL_ERROR)

        sys.exit(ExitCode.SUCCESS)

    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        sys.exit(ExitCode.GENERAL_ERROR)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("Error during execution: %s", sanitize_for_log(str(e)))
        if args.verbose:
            traceback.print_exc()
        sys.exit(ExitCode.GENERAL_ERROR)
    finally:
        orchestrator.close()


if __name__ == "__main__":
    main()
