"""Error taxonomy for the alerting core.

Missing thresholds and missing readings are not errors: stores return ``None``
and the caller substitutes defaults or skips the hive.
"""


class HiveWatchError(Exception):
    """Base class for application errors."""


class TransientStoreError(HiveWatchError):
    """A read or write against an external store failed (network, timeout, backend error)."""


class AlertWriteError(TransientStoreError):
    """Persisting an approved alert failed."""


class AlertNotFoundError(HiveWatchError):
    def __init__(self, alert_id: int) -> None:
        super().__init__(f"Alert {alert_id} not found")
        self.alert_id = alert_id
