from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from hivewatch.api.deps import get_alert_manager, get_store
from hivewatch.core.exceptions import AlertNotFoundError, TransientStoreError
from hivewatch.schemas import (
    AlertCheckResponse,
    AlertCountResponse,
    AlertListResponse,
    BulkResolveRequest,
    BulkResolveResponse,
    MetricReadingIn,
    MetricReadingOut,
    Thresholds,
    ThresholdsUpdate,
)
from hivewatch.services import AlertingStore, AlertManager, MetricType

router = APIRouter()


def _store_unavailable(exc: TransientStoreError) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Data store unavailable: {exc}")


def _validate_thresholds(values: dict[str, Any]) -> None:
    for metric in MetricType:
        low = values[f"{metric.value}_min"]
        high = values[f"{metric.value}_max"]
        if float(low) >= float(high):
            raise HTTPException(
                status_code=400,
                detail=f"{metric.value}_min must be lower than {metric.value}_max",
            )


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/users/{user_id}/alerts/check", response_model=AlertCheckResponse)
def check_alerts(user_id: str, manager: AlertManager = Depends(get_alert_manager)) -> AlertCheckResponse:
    try:
        created = manager.run_check(user_id)
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc
    return AlertCheckResponse(user_id=user_id, alerts_created=created)


@router.get("/users/{user_id}/alerts", response_model=AlertListResponse)
def get_alerts(
    user_id: str,
    hive_id: str | None = Query(default=None),
    apiary_id: int | None = Query(default=None),
    store: AlertingStore = Depends(get_store),
) -> AlertListResponse:
    try:
        alerts = store.list_open_alerts(user_id, hive_id=hive_id, apiary_id=apiary_id)
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc
    return AlertListResponse(items=alerts, count=len(alerts))


@router.get("/users/{user_id}/alerts/count", response_model=AlertCountResponse)
def get_alert_count(user_id: str, store: AlertingStore = Depends(get_store)) -> AlertCountResponse:
    try:
        return AlertCountResponse(count=store.count_open_alerts(user_id))
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc


@router.post("/alerts/resolve", response_model=BulkResolveResponse)
def resolve_alerts(
    payload: BulkResolveRequest,
    manager: AlertManager = Depends(get_alert_manager),
) -> BulkResolveResponse:
    try:
        resolved, missing = manager.resolve_alerts(payload.alert_ids)
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc
    return BulkResolveResponse(resolved=resolved, missing=missing)


@router.post("/alerts/{alert_id}/resolve")
def resolve_alert(alert_id: int, manager: AlertManager = Depends(get_alert_manager)) -> dict[str, bool]:
    try:
        manager.resolve_alert(alert_id)
    except AlertNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Alert not found") from exc
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc
    return {"success": True}


@router.post("/alerts/{alert_id}/read")
def mark_alert_read(alert_id: int, manager: AlertManager = Depends(get_alert_manager)) -> dict[str, bool]:
    try:
        manager.mark_read(alert_id)
    except AlertNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Alert not found") from exc
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc
    return {"success": True}


@router.get("/users/{user_id}/thresholds", response_model=Thresholds)
def get_thresholds(user_id: str, manager: AlertManager = Depends(get_alert_manager)) -> Thresholds:
    try:
        return manager.load_thresholds(user_id)
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc


@router.put("/users/{user_id}/thresholds", response_model=Thresholds)
def update_thresholds(
    user_id: str,
    payload: ThresholdsUpdate,
    manager: AlertManager = Depends(get_alert_manager),
) -> Thresholds:
    try:
        current = manager.load_thresholds(user_id)
        updates = current.model_dump()
        updates.update(payload.model_dump(exclude_none=True))
        _validate_thresholds(updates)
        return manager.store.upsert_thresholds(user_id, Thresholds(**updates))
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc


@router.post("/hives/{hive_id}/readings", response_model=MetricReadingOut)
def ingest_reading(
    hive_id: str,
    payload: MetricReadingIn,
    store: AlertingStore = Depends(get_store),
) -> MetricReadingOut:
    try:
        return store.insert_reading(hive_id, payload)
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc


@router.get("/hives/{hive_id}/readings/latest", response_model=MetricReadingOut)
def get_latest_reading(hive_id: str, store: AlertingStore = Depends(get_store)) -> MetricReadingOut:
    try:
        reading = store.get_latest_reading(hive_id)
    except TransientStoreError as exc:
        raise _store_unavailable(exc) from exc
    if reading is None:
        raise HTTPException(status_code=404, detail="No readings available for this hive")
    return reading
