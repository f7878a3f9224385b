from hivewatch.core.config import Settings
from hivewatch.services.alert_manager import AlertManager
from hivewatch.services.dedup import message_similarity, should_create
from hivewatch.services.evaluator import AlertCondition, MetricType, Severity, evaluate_reading
from hivewatch.services.metrics_checker import MetricsChecker
from hivewatch.services.postgrest_store import PostgrestAlertingStore
from hivewatch.services.stores import AlertingStore, SqlAlertingStore


def build_store(settings: Settings) -> AlertingStore:
    backend = settings.store_backend.strip().lower()
    if backend == "postgrest":
        return PostgrestAlertingStore(settings.postgrest_url, settings.postgrest_api_key, settings.store_timeout)
    if backend == "sql":
        return SqlAlertingStore()
    raise ValueError(f"STORE_BACKEND must be either 'sql' or 'postgrest', got {settings.store_backend!r}")


__all__ = [
    "AlertCondition",
    "AlertManager",
    "AlertingStore",
    "MetricType",
    "MetricsChecker",
    "PostgrestAlertingStore",
    "Severity",
    "SqlAlertingStore",
    "build_store",
    "evaluate_reading",
    "message_similarity",
    "should_create",
]
