import logging
import threading
import time
from collections.abc import Callable

from hivewatch.core.exceptions import TransientStoreError
from hivewatch.services.alert_manager import AlertManager
from hivewatch.services.stores import AlertingStore

logger = logging.getLogger(__name__)

DEFAULT_CHECK_INTERVAL = 30 * 60
MIN_CHECK_INTERVAL = 10 * 60


class MetricsChecker:
    """Runs ``AlertManager.run_check`` for every alerting user on a timer.

    On ``start()`` an initial check runs straight away unless the previous one
    finished less than ``min_interval_seconds`` ago.
    """

    def __init__(
        self,
        manager: AlertManager,
        store: AlertingStore,
        interval_seconds: float = DEFAULT_CHECK_INTERVAL,
        min_interval_seconds: float = MIN_CHECK_INTERVAL,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.manager = manager
        self.store = store
        self.interval_seconds = interval_seconds
        self.min_interval_seconds = min_interval_seconds
        self._monotonic = monotonic
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.last_check_at: float | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def should_run_initial_check(self) -> bool:
        if self.last_check_at is None:
            return True
        return self._monotonic() - self.last_check_at > self.min_interval_seconds

    def start(self) -> None:
        if self.running:
            logger.debug("Replacing running metrics check loop")
            self.stop()

        run_initial = self.should_run_initial_check()
        if not run_initial:
            logger.info(
                "Skipping initial metrics check, last check was %.0f minutes ago",
                (self._monotonic() - self.last_check_at) / 60,
            )

        self._stop_event = threading.Event()
        thread = threading.Thread(
            target=self._run,
            args=(self._stop_event, run_initial),
            name="hivewatch-metrics-check",
            daemon=True,
        )
        thread.start()
        self._thread = thread

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)
        self._thread = None
        logger.info("Metrics checker stopped")

    def _run(self, stop_event: threading.Event, run_initial: bool) -> None:
        if run_initial:
            self._tick()
        while not stop_event.wait(self.interval_seconds):
            self._tick()

    def _tick(self) -> None:
        try:
            created = self.check_all()
        except Exception:
            # the loop outlives a failed tick; the next one retries
            logger.exception("Periodic metrics check failed")
            return
        logger.info("Periodic metrics check complete: %d alert(s) created", created)

    def check_all(self) -> int:
        with self._lock:
            self.last_check_at = self._monotonic()

        total = 0
        for user_id in self.store.list_alerting_users():
            try:
                total += self.manager.run_check(user_id)
            except TransientStoreError as exc:
                logger.warning("Metrics check for user %s could not start: %s", user_id, exc)
            except Exception:
                logger.exception("Metrics check for user %s failed", user_id)
        return total

    def force_check(self, user_id: str) -> int:
        with self._lock:
            self.last_check_at = self._monotonic()

        try:
            return self.manager.run_check(user_id)
        except TransientStoreError as exc:
            logger.error("Forced metrics check for user %s failed: %s", user_id, exc)
            return 0
