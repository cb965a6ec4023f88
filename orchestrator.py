"""Orchestrator for the basic and advanced checks.

Coordinates all probe modules, runs independent sub-checks in parallel
and hands one report per run to the presentation sink.

Concurrency:
    Sub-checks run on a session-owned thread pool and are joined with
    wait-for-all semantics. Every sub-check returns an immutable Result
    (exceptions are converted by run_guarded), so a failing sub-check
    never cancels its siblings. The report is assembled on the calling
    thread after the join; tasks never touch shared state or the sink.
"""

import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, Protocol

import config
from enums import ErrorKind
from logging_config import get_logger
from models import (
    AdvancedReport,
    BasicReport,
    GeoRecord,
    InterfaceAddress,
    NetworkStatus,
    Result,
    VpnRangeVerdict,
)
from network import (
    Fetcher,
    check_consistency,
    check_dns_exposure,
    check_webrtc_support,
    enumerate_interfaces,
    fetch,
    get_network_status,
    local_ipv4_addresses,
    lookup_geo,
    resolve_public_ip,
    snapshot_timezone,
    vpn_range_verdict,
)
from utils import command_exists, sanitize_for_log, shorten_text

logger = get_logger(__name__)

Report = BasicReport | AdvancedReport


class ReportSink(Protocol):
    """Presentation boundary. Only the orchestrator calls it."""

    def set_busy(self, busy: bool) -> None: ...

    def publish(self, report: Report) -> None: ...

    def notify(self, message: str) -> None: ...


def check_dependencies() -> bool:
    """Check all required system commands exist.

    Returns:
        True if all dependencies present, False otherwise.

    Logs:
        ERROR for each missing command with install hint.
    """
    missing = []

    for cmd in config.REQUIRED_COMMANDS:
        if not command_exists(cmd):
            missing.append(cmd)
            logger.error("Error: Missing required command: %s", cmd)
            if cmd == "ip":
                logger.error("  Install: sudo apt install iproute2")

    return len(missing) == 0


def describe_error(kind: ErrorKind | None, detail: str = "") -> str:
    """Short user-facing message for an error kind.

    Args:
        kind: Error kind from a Result
        detail: Optional context (shown for IO and UNKNOWN only)

    Returns:
        Message suitable for a toast/status line.
    """
    if kind == ErrorKind.TIMEOUT:
        return "Timeout - check your internet connection"
    if kind == ErrorKind.UNREACHABLE:
        return "No internet connection"
    if kind == ErrorKind.IO:
        return f"Connection error: {detail or 'unknown error'}"
    if kind == ErrorKind.PERMISSION_DENIED:
        return "Permission error - check app permissions"
    if kind == ErrorKind.INVALID_RESPONSE:
        return "Invalid response from service"
    if kind == ErrorKind.INVALID_INPUT:
        return "Invalid IP address"
    if not detail:
        return "Error: unknown error"
    return f"Error: {shorten_text(detail, config.ERROR_DETAIL_MAX_LENGTH)}"


def run_guarded(name: str, func: Callable[..., Any], *args: Any) -> Result:
    """Run one sub-check and always return a Result.

    Functions that already return a Result pass it through; plain
    return values are wrapped with Result.success. Exceptions become
    failures so they cannot abort the surrounding run.

    Args:
        name: Sub-check name for logging
        func: Sub-check callable
        *args: Positional arguments for func

    Returns:
        Result of the sub-check.
    """
    try:
        value = func(*args)
    except PermissionError as e:
        kind, error = ErrorKind.PERMISSION_DENIED, e
    except TimeoutError as e:
        kind, error = ErrorKind.TIMEOUT, e
    except OSError as e:
        kind, error = ErrorKind.IO, e
    except Exception as e:
        kind, error = ErrorKind.UNKNOWN, e
    else:
        if isinstance(value, Result):
            if not value.ok:
                logger.warning(
                    "%s failed: %s %s",
                    name,
                    value.error.value if value.error else "",
                    sanitize_for_log(value.detail),
                )
            return value
        return Result.success(value)

    logger.error("%s raised %s: %s", name, type(error).__name__, sanitize_for_log(str(error)))
    return Result.failure(kind, str(error) or type(error).__name__)


class CheckOrchestrator:
    """Runs the basic and advanced checks for one session.

    The session ends with close(), which cancels queued sub-checks and
    refuses further runs. There is no per-sub-check cancellation.
    """

    def __init__(
        self,
        sink: ReportSink,
        fetcher: Fetcher = fetch,
        max_workers: int = 8,
    ) -> None:
        self._sink = sink
        self._fetcher = fetcher
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="check"
        )
        self._cancelled = threading.Event()

    @property
    def closed(self) -> bool:
        return self._cancelled.is_set()

    def close(self) -> None:
        """Cancel the session: drop queued sub-checks, reject new runs."""
        if self._cancelled.is_set():
            return
        logger.debug("Closing check session")
        self._cancelled.set()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "CheckOrchestrator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def run_basic_check(self) -> BasicReport | None:
        """Network status and public IP, then consistency/DNS/local IPs in parallel.

        Returns:
            BasicReport, or None if the session was cancelled.
        """
        return self._run("Basic check", self._basic_check)

    def run_advanced_check(self) -> AdvancedReport | None:
        """WebRTC, geolocation, timezone and VPN range checks in parallel.

        Returns:
            AdvancedReport, or None if the session was cancelled.
        """
        return self._run("Advanced check", self._advanced_check)

    def _run(self, label: str, workflow: Callable[[], Report]) -> Any:
        """Wrap a workflow with busy state, publishing and notifications."""
        if self.closed:
            logger.warning("%s skipped: session closed", label)
            self._sink.notify(f"{label} cancelled")
            return None

        logger.info("Starting %s...", label.lower())
        self._sink.set_busy(True)
        report = None
        try:
            report = workflow()
        except (CancelledError, RuntimeError) as e:
            # RuntimeError: pool shut down between the closed check and submit
            logger.warning("%s cancelled: %s", label, sanitize_for_log(str(e)))
        finally:
            self._sink.set_busy(False)

        # Busy is cleared before any notification, cancelled or not
        if report is None:
            self._sink.notify(f"{label} cancelled")
            return None

        self._sink.publish(report)

        failed = report.failed_sections
        if failed:
            logger.info("%s finished with failures: %s", label, ", ".join(failed))
            self._sink.notify(f"{label} finished ({len(failed)} check(s) failed)")
        else:
            logger.info("%s completed successfully", label)
            self._sink.notify(f"{label} complete!")
        return report

    def _basic_check(self) -> BasicReport:
        # Sequential: network status, then the canonical public IP
        network = run_guarded("network status", self._network_status)
        public_ip = run_guarded("public IP", resolve_public_ip, self._fetcher)

        # Parallel: one task per sub-check, wait for all
        results = self._join(
            {
                "consistency": self._submit(
                    "IP consistency",
                    check_consistency,
                    config.CONSISTENCY_TARGETS,
                    self._fetcher,
                ),
                "dns_exposure": self._submit("DNS exposure", check_dns_exposure),
                "local_addresses": self._submit("local addresses", self._local_addresses),
            }
        )

        return BasicReport(
            network=network,
            public_ip=public_ip,
            consistency=results["consistency"],
            dns_exposure=results["dns_exposure"],
            local_addresses=results["local_addresses"],
            timestamp=_now(),
        )

    def _advanced_check(self) -> AdvancedReport:
        results = self._join(
            {
                "webrtc": self._submit("WebRTC", check_webrtc_support),
                "geolocation": self._submit("geolocation", self._geolocate),
                "timezone": self._submit("timezone", snapshot_timezone),
                "vpn_range": self._submit("VPN range", self._classify_public_ip),
            }
        )

        return AdvancedReport(
            webrtc=results["webrtc"],
            geolocation=results["geolocation"],
            timezone=results["timezone"],
            vpn_range=results["vpn_range"],
            timestamp=_now(),
        )

    def _submit(self, name: str, func: Callable[..., Any], *args: Any) -> Future:
        return self._executor.submit(run_guarded, name, func, *args)

    def _join(self, futures: dict[str, Future]) -> dict[str, Result]:
        """Wait for every future; raise CancelledError if the session closed."""
        results = {name: future.result() for name, future in futures.items()}
        if self.closed:
            raise CancelledError()
        return results

    def _network_status(self) -> Result[NetworkStatus]:
        snapshot = enumerate_interfaces()
        if not snapshot.ok:
            return Result.failure(snapshot.error, snapshot.detail)
        return Result.success(get_network_status(snapshot.value or ()))

    @staticmethod
    def _local_addresses() -> Result[tuple[InterfaceAddress, ...]]:
        snapshot = enumerate_interfaces()
        if not snapshot.ok:
            return snapshot
        return Result.success(local_ipv4_addresses(snapshot.value or ()))

    def _geolocate(self) -> Result[GeoRecord]:
        ip = resolve_public_ip(self._fetcher)
        if not ip.ok:
            return Result.failure(ip.error, ip.detail)
        return lookup_geo(ip.value, self._fetcher)

    def _classify_public_ip(self) -> Result[VpnRangeVerdict]:
        ip = resolve_public_ip(self._fetcher)
        if not ip.ok:
            return Result.failure(ip.error, ip.detail)
        return Result.success(vpn_range_verdict(ip.value))


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
