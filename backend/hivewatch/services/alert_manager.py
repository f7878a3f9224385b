"""Alert lifecycle: threshold checks for a user's hives, resolution and read state.

``run_check`` is safe to call repeatedly: conditions that already have a
similar open alert, or one resolved within the last hour, are not re-created.
Two concurrent runs for the same user are not serialized, so a condition
evaluated by both before either writes can still produce two open alerts.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from hivewatch.core.exceptions import AlertNotFoundError, AlertWriteError, TransientStoreError
from hivewatch.schemas import DEFAULT_THRESHOLDS, HiveRef, Thresholds
from hivewatch.services.dedup import RESOLVED_WINDOW, should_create
from hivewatch.services.evaluator import AlertCondition, evaluate_reading
from hivewatch.services.stores import AlertingStore
from hivewatch.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class AlertManager:
    def __init__(self, store: AlertingStore, clock: Callable[[], datetime] = utc_now) -> None:
        self.store = store
        self.clock = clock

    def load_thresholds(self, user_id: str) -> Thresholds:
        thresholds = self.store.get_thresholds(user_id)
        if thresholds is None:
            logger.debug("No thresholds stored for user %s, using defaults", user_id)
            return DEFAULT_THRESHOLDS
        return thresholds

    def run_check(self, user_id: str) -> int:
        """Create alerts for every threshold violation on the user's monitored hives.

        Raises ``TransientStoreError`` only when the thresholds or the hive list
        cannot be loaded. Per-hive read failures and failed alert writes are
        logged and skipped.
        """
        thresholds = self.load_thresholds(user_id)
        hives = self.store.get_alerting_enabled_hives(user_id)
        if not hives:
            logger.info("No hives with alerting enabled for user %s", user_id)
            return 0

        created = sum(self._check_hive(user_id, hive, thresholds) for hive in hives)

        logger.info("Metrics check for user %s: %d hive(s), %d alert(s) created", user_id, len(hives), created)
        return created

    def _check_hive(self, user_id: str, hive: HiveRef, thresholds: Thresholds) -> int:
        """Return the number of alerts created for one hive.

        A store read failure skips the rest of the hive; alerts already
        written for it are still counted.
        """
        try:
            reading = self.store.get_latest_reading(hive.hive_id)
        except TransientStoreError as exc:
            logger.warning("Skipping hive %s for user %s: %s", hive.hive_id, user_id, exc)
            return 0
        if reading is None:
            logger.debug("No readings for hive %s", hive.hive_id)
            return 0

        created = 0
        for condition in evaluate_reading(reading, thresholds):
            try:
                if self._create_if_new(user_id, condition):
                    created += 1
            except TransientStoreError as exc:
                logger.warning(
                    "Skipping remaining checks on hive %s for user %s: %s", hive.hive_id, user_id, exc
                )
                break
        return created

    def _create_if_new(self, user_id: str, condition: AlertCondition) -> bool:
        metric_type = condition.metric.value
        now = self.clock()

        open_alerts = self.store.get_open_alerts(user_id, condition.hive_id, metric_type)
        resolved_alerts = self.store.get_recently_resolved_alerts(
            user_id, condition.hive_id, metric_type, now - RESOLVED_WINDOW
        )
        if not should_create(condition, open_alerts, resolved_alerts, now):
            return False

        payload = {
            "user_id": user_id,
            "hive_id": condition.hive_id,
            "metric_type": metric_type,
            "message": condition.message,
            "severity": condition.severity.value,
            "created_at": now,
            "resolved_at": None,
            "is_read": False,
        }
        try:
            alert = self.store.insert_alert(payload)
        except AlertWriteError as exc:
            logger.error("Failed to create %s alert for hive %s: %s", metric_type, condition.hive_id, exc)
            return False

        logger.info("Created alert %s for hive %s: %s", alert.id, condition.hive_id, condition.message)
        return True

    def resolve_alert(self, alert_id: int) -> None:
        alert = self.store.get_alert(alert_id)
        if alert is None:
            raise AlertNotFoundError(alert_id)
        if alert.resolved_at is not None:
            return

        self.store.update_alert(alert_id, {"resolved_at": self.clock(), "is_read": True})

    def mark_read(self, alert_id: int) -> None:
        alert = self.store.get_alert(alert_id)
        if alert is None:
            raise AlertNotFoundError(alert_id)
        if alert.is_read:
            return

        self.store.update_alert(alert_id, {"is_read": True})

    def resolve_alerts(self, alert_ids: list[int]) -> tuple[int, list[int]]:
        resolved = 0
        missing: list[int] = []
        for alert_id in alert_ids:
            try:
                self.resolve_alert(alert_id)
            except AlertNotFoundError:
                missing.append(alert_id)
                continue
            resolved += 1
        return resolved, missing
