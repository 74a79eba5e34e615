"""
Refresh pipeline - orchestrates data flow from AviationStack to the view.

Pipeline stages, one cycle:
1. Fetch: GET active flights from AviationStack
2. Format: keep flights with a live position, derive display fields
3. Render: replace map markers and detail cards
4. Report: hide the message box, or show it if any stage failed

Cycles run once at startup and then on a fixed interval. A cycle that is
triggered while another one is still in flight is skipped, so the view
is only ever written by one cycle at a time.
"""

import logging
import threading
import time
from enum import Enum
from typing import Optional

from flightmap.config import config
from flightmap.formatting import format_flights
from flightmap.ingestion.aviationstack_client import AviationStackClient
from flightmap.view import FlightView

logger = logging.getLogger(__name__)


class CycleResult(str, Enum):
    """Outcome of a single refresh cycle."""
    SUCCESS = 'success'
    FAILED = 'failed'
    SKIPPED = 'skipped'


class RefreshPipeline:
    """
    Manages the refresh lifecycle.

    Coordinates fetching, formatting and rendering into a FlightView.
    Can run as a background thread for continuous polling.
    """

    def __init__(
        self,
        view: FlightView,
        client: Optional[AviationStackClient] = None,
        interval: Optional[float] = None,
    ):
        """
        Initialize the refresh pipeline.

        Args:
            view: View that receives the formatted flights
            client: AviationStack API client (created from config if None)
            interval: Seconds between cycles (config value if None)
        """
        self.view = view
        self.client = client or AviationStackClient.from_config()
        self.interval = interval or config.scheduler.interval_seconds

        # Single-flight guard
        self._cycle_lock = threading.Lock()

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        # State tracking, guarded by _stats_lock
        self._stats_lock = threading.Lock()
        self._cycle_count: int = 0
        self._error_count: int = 0
        self._skipped_count: int = 0
        self._last_success_time: float = 0
        self._last_error_time: float = 0
        self._last_error: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self._cycle_lock.locked()

    def run_cycle(self) -> CycleResult:
        """
        Execute one fetch-format-render cycle.

        Returns SKIPPED without doing anything if a cycle is already
        running. Never raises: failures are logged and shown in the
        view's message box, and the previous markers stay in place.
        """
        if not self._cycle_lock.acquire(blocking=False):
            with self._stats_lock:
                self._skipped_count += 1
            logger.warning('Refresh already in progress, skipping this trigger')
            return CycleResult.SKIPPED

        try:
            with self._stats_lock:
                self._cycle_count += 1

            try:
                # Stage 1: Fetch
                records = self.client.get_flights()

                # Stage 2: Format
                flights = format_flights(records)

                # Stage 3: Render
                self.view.render(flights)

            except Exception as e:
                with self._stats_lock:
                    self._error_count += 1
                    self._last_error_time = time.time()
                    self._last_error = str(e)
                logger.error(f'Refresh cycle failed: {e}')

                # Stage 4: Report failure
                self.view.show_error()
                return CycleResult.FAILED

            # Stage 4: Report success
            self.view.hide_error()
            with self._stats_lock:
                self._last_success_time = time.time()
            logger.info(f'Rendered {len(flights)} flights')
            return CycleResult.SUCCESS

        finally:
            self._cycle_lock.release()

    def run_continuous(self, interval: Optional[float] = None) -> None:
        """
        Run a cycle now and then every interval seconds until stopped.

        This method blocks - use start_background() for non-blocking.
        """
        interval = interval or self.interval

        logger.info(f'Starting continuous refresh (interval={interval}s)')

        while not self._stop_event.is_set():
            self.run_cycle()
            self._stop_event.wait(interval)

        logger.info('Refresh loop stopped')

    def start_background(self, interval: Optional[float] = None) -> None:
        """Start refreshing in a background thread."""
        if self._thread and self._thread.is_alive():
            logger.warning('Refresh loop already running')
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.run_continuous,
            args=(interval,),
            daemon=True,
        )
        self._thread.start()
        logger.info('Background refresh started')

    def stop(self) -> None:
        """Stop background refreshing."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5)
        logger.info('Refresh stopped')

    @property
    def running(self) -> bool:
        return bool(self._thread and self._thread.is_alive() and not self._stop_event.is_set())

    @property
    def stats(self) -> dict:
        """Get refresh statistics."""
        with self._stats_lock:
            counters = {
                'cycle_count': self._cycle_count,
                'error_count': self._error_count,
                'skipped_count': self._skipped_count,
                'last_success_time': self._last_success_time,
                'last_error_time': self._last_error_time,
                'last_error': self._last_error,
            }
        return {
            **counters,
            'in_flight': self.in_flight,
            'running': self.running,
            'interval_seconds': self.interval,
        }
