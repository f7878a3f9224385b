from functools import lru_cache

from fastapi import Depends

from hivewatch.core.config import settings
from hivewatch.services import AlertingStore, AlertManager, MetricsChecker, build_store


@lru_cache
def get_store() -> AlertingStore:
    return build_store(settings)


def get_alert_manager(store: AlertingStore = Depends(get_store)) -> AlertManager:
    return AlertManager(store)


@lru_cache
def get_metrics_checker() -> MetricsChecker:
    store = get_store()
    return MetricsChecker(
        AlertManager(store),
        store,
        interval_seconds=settings.alert_check_interval_seconds,
        min_interval_seconds=settings.alert_check_min_interval_seconds,
    )
