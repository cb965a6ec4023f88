"""Multi-service public IP consistency check.

Fans out to several independent IP-echo services at once and reports
how many distinct addresses came back. Different answers from different
services point at split routing or a leaking tunnel.

Concurrency:
    One worker thread per target. Each future is awaited against its own
    deadline, measured from dispatch, so a hung service costs at most its
    own timeout and never delays or cancels its siblings. The pool is shut
    down without waiting; a stuck worker is abandoned, its outcome already
    recorded as TIMEOUT.
"""

import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import config
from enums import Classification, ErrorKind
from logging_config import get_logger
from models import ConsistencyVerdict, ProbeOutcome, ProbeTarget
from network.external_ip import query_ip_service
from network.fetcher import Fetcher, fetch
from utils import sanitize_for_log

logger = get_logger(__name__)


def classify(distinct_value_count: int) -> Classification:
    """Map the number of distinct IPs to a classification.

    Evaluated in this order:
        0  -> ALL_FAILED
        1  -> CONSISTENT
        2  -> MINOR_INCONSISTENCY
        >2 -> INCONSISTENT
    """
    if distinct_value_count == 0:
        return Classification.ALL_FAILED
    if distinct_value_count == 1:
        return Classification.CONSISTENT
    if distinct_value_count == 2:
        return Classification.MINOR_INCONSISTENCY
    return Classification.INCONSISTENT


def check_consistency(
    targets: tuple[ProbeTarget, ...] = config.CONSISTENCY_TARGETS,
    fetcher: Fetcher = fetch,
) -> ConsistencyVerdict:
    """Query all targets concurrently and classify their agreement.

    Waits for every target to finish or hit its deadline (no
    short-circuit on first answer or first failure).

    Args:
        targets: IP-echo services to query
        fetcher: Transport shared by all targets

    Returns:
        ConsistencyVerdict; ALL_FAILED when nothing valid came back.
    """
    outcomes = collect_outcomes(targets, fetcher)
    return build_verdict(outcomes, len(targets))


def collect_outcomes(
    targets: tuple[ProbeTarget, ...], fetcher: Fetcher = fetch
) -> tuple[ProbeOutcome, ...]:
    """Run one probe per target in parallel, in target order.

    Args:
        targets: IP-echo services to query
        fetcher: Transport

    Returns:
        One ProbeOutcome per target.
    """
    if not targets:
        return ()

    executor = ThreadPoolExecutor(
        max_workers=len(targets), thread_name_prefix="ip-probe"
    )
    try:
        started = time.monotonic()
        futures = [
            executor.submit(query_ip_service, target, fetcher) for target in targets
        ]
        return tuple(
            _await_outcome(target, future, started)
            for target, future in zip(targets, futures)
        )
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def _await_outcome(target: ProbeTarget, future: Future, started: float) -> ProbeOutcome:
    """Wait for one probe until its own deadline expires."""
    remaining = max(0.0, target.timeout - (time.monotonic() - started))
    try:
        result = future.result(timeout=remaining)
    except FutureTimeoutError:
        logger.warning("%s did not answer within %.1fs", target.service_name, target.timeout)
        future.cancel()
        return ProbeOutcome(target=target, value=None, succeeded=False, error=ErrorKind.TIMEOUT)
    except Exception as e:
        logger.warning(
            "%s probe crashed: %s", target.service_name, sanitize_for_log(str(e))
        )
        return ProbeOutcome(target=target, value=None, succeeded=False, error=ErrorKind.UNKNOWN)

    return ProbeOutcome.from_result(target, result)


def build_verdict(outcomes: tuple[ProbeOutcome, ...], total_count: int) -> ConsistencyVerdict:
    """Fold probe outcomes into a verdict.

    Args:
        outcomes: Outcomes in any order
        total_count: Number of targets attempted

    Returns:
        ConsistencyVerdict with distinct/responded/total counts.
    """
    succeeded = [outcome for outcome in outcomes if outcome.succeeded and outcome.value]
    distinct = {outcome.value for outcome in succeeded}
    classification = classify(len(distinct))

    logger.info(
        "IP consistency: %s (%d distinct, %d/%d responded)",
        classification.value,
        len(distinct),
        len(succeeded),
        total_count,
    )

    return ConsistencyVerdict(
        distinct_value_count=len(distinct),
        responded_count=len(succeeded),
        total_count=total_count,
        classification=classification,
        outcomes=outcomes,
    )
