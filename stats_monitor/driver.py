"""
Poll Driver

Runs the fetch -> parse -> evaluate -> print cycle on a fixed interval.

Cycle rules:
- A fetch failure increments the consecutive-failure counter. When the
  counter reaches the failure threshold the diagnostic line is written once;
  it is not repeated for later failures in the same streak.
- A successful fetch resets the counter, even if the report then fails to
  parse.
- Parse failures are logged and returned in the CycleResult but never
  written to the alert output.
"""
import logging
import time
from typing import Callable, Optional

from stats_monitor.config import MonitorConfig
from stats_monitor.errors import FetchError
from stats_monitor.evaluator import evaluate_raw
from stats_monitor.fetcher import ReportFetcher
from stats_monitor.models import CycleResult, CycleStatus

logger = logging.getLogger(__name__)

FETCH_DIAGNOSTIC = "Unable to fetch server statistic."


class PollDriver:
    """Polls the statistics endpoint and writes alert lines."""

    def __init__(
        self,
        config: MonitorConfig,
        fetcher: Optional[ReportFetcher] = None,
        output: Callable[[str], None] = print,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the poll driver.

        Args:
            config: Monitor configuration
            fetcher: Report fetcher (built from config if omitted)
            output: Receives every alert line and the fetch diagnostic
            sleep: Called with the poll interval between cycles
        """
        self.config = config
        self.fetcher = fetcher or ReportFetcher(config.url, timeout=config.timeout_seconds)
        self.output = output
        self.sleep = sleep
        self.consecutive_failures = 0

    def run_cycle(self) -> CycleResult:
        """
        Run one fetch/parse/evaluate cycle.

        Returns:
            CycleResult describing what happened
        """
        try:
            raw = self.fetcher.fetch()
        except FetchError as e:
            return self._handle_fetch_failure(e)

        self.consecutive_failures = 0

        alerts, error = evaluate_raw(raw)
        for alert in alerts:
            self.output(alert.message)

        if error is not None:
            logger.warning(f"Discarding report from {self.config.url}: {error}")
            return CycleResult(
                status=CycleStatus.PARSE_FAILED,
                alerts=alerts,
                error=error,
                consecutive_failures=self.consecutive_failures
            )

        return CycleResult(
            status=CycleStatus.OK,
            alerts=alerts,
            consecutive_failures=self.consecutive_failures
        )

    def _handle_fetch_failure(self, error: FetchError) -> CycleResult:
        self.consecutive_failures += 1
        logger.warning(
            f"Fetch from {self.config.url} failed "
            f"({self.consecutive_failures} in a row): {error}"
        )

        emitted = self.consecutive_failures == self.config.failure_threshold
        if emitted:
            self.output(FETCH_DIAGNOSTIC)

        return CycleResult(
            status=CycleStatus.FETCH_FAILED,
            error=error,
            consecutive_failures=self.consecutive_failures,
            diagnostic_emitted=emitted
        )

    def run(self, max_cycles: Optional[int] = None) -> Optional[CycleResult]:
        """
        Poll until interrupted, or for max_cycles cycles.

        Args:
            max_cycles: Stop after this many cycles (None runs forever)

        Returns:
            Result of the last completed cycle
        """
        logger.info(
            f"Polling {self.config.url} every {self.config.interval_seconds}s "
            f"(timeout {self.config.timeout_seconds}s)"
        )

        last_result = None
        completed = 0
        while max_cycles is None or completed < max_cycles:
            try:
                last_result = self.run_cycle()
            except Exception as e:
                logger.error(f"Unexpected error in poll cycle: {e}", exc_info=True)

            completed += 1
            if max_cycles is not None and completed >= max_cycles:
                break
            self.sleep(self.config.interval_seconds)

        return last_result

    def close(self) -> None:
        """Release the fetcher's HTTP session."""
        self.fetcher.close()
