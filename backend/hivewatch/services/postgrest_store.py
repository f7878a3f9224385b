from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

import requests

from hivewatch.core.exceptions import AlertWriteError, TransientStoreError
from hivewatch.schemas import AlertOut, HiveRef, MetricReadingIn, MetricReadingOut, Thresholds
from hivewatch.utils.timestamps import utc_now

T = TypeVar("T")

ALERT_SELECT = "*,hives(name,apiary_id,apiaries(name))"

# metrics_time_series_data column -> reading field
READING_COLUMNS = {
    "temp_value": "temperature",
    "hum_value": "humidity",
    "sound_value": "sound",
    "weight_value": "weight",
}


def _jsonable(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: value.isoformat() if isinstance(value, datetime) else value for key, value in fields.items()}


def _alert_from_row(row: dict[str, Any]) -> AlertOut:
    hive = row.get("hives") or {}
    apiary = hive.get("apiaries") or {}
    return AlertOut(
        id=row["id"],
        user_id=row.get("user_id") or "",
        hive_id=row["hive_id"],
        metric_type=row["type"],
        message=row["message"],
        severity=row["severity"],
        created_at=row["created_at"],
        resolved_at=row.get("resolved_at"),
        is_read=bool(row.get("is_read")),
        hive_name=hive.get("name") or "Unknown",
        apiary_id=hive.get("apiary_id"),
        apiary_name=apiary.get("name") or "Unknown",
    )


def _reading_from_row(row: dict[str, Any]) -> MetricReadingOut:
    values = {field: row.get(column) for column, field in READING_COLUMNS.items()}
    return MetricReadingOut(hive_id=row["hive_id"], timestamp=row["timestamp"], **values)


def _map_rows(
    rows: list[dict[str, Any]],
    mapper: Callable[[dict[str, Any]], T],
    table: str,
    error_cls: type[TransientStoreError] = TransientStoreError,
) -> list[T]:
    try:
        return [mapper(row) for row in rows]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        # pydantic's ValidationError is a ValueError
        raise error_cls(f"Unexpected {table} row: {exc}") from exc


class PostgrestAlertingStore:
    """``AlertingStore`` over the hosted database's REST interface (PostgREST)."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: int = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if api_key:
            self.session.headers.update({"apikey": api_key, "Authorization": f"Bearer {api_key}"})

    def _request(
        self,
        method: str,
        table: str,
        params: dict[str, Any] | None = None,
        payload: Any = None,
        prefer: str | None = None,
        error_cls: type[TransientStoreError] = TransientStoreError,
    ) -> list[dict[str, Any]]:
        headers = {"Prefer": prefer} if prefer else {}
        try:
            response = self.session.request(
                method,
                f"{self.base_url}/rest/v1/{table}",
                params=params,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            rows = response.json() if response.content else []
        except requests.RequestException as exc:
            raise error_cls(f"{method} {table} failed: {exc}") from exc
        except ValueError as exc:
            raise error_cls(f"{method} {table} returned an unreadable body: {exc}") from exc

        if not isinstance(rows, list):
            raise error_cls(f"{method} {table} returned {type(rows).__name__}, expected a list of rows")
        return rows

    def get_thresholds(self, user_id: str) -> Thresholds | None:
        rows = self._request("GET", "alert_thresholds", params={"select": "*", "user_id": f"eq.{user_id}", "limit": 1})
        thresholds = _map_rows(rows[:1], Thresholds.model_validate, "alert_thresholds")
        return thresholds[0] if thresholds else None

    def upsert_thresholds(self, user_id: str, thresholds: Thresholds) -> Thresholds:
        rows = self._request(
            "POST",
            "alert_thresholds",
            params={"on_conflict": "user_id"},
            payload=[{"user_id": user_id, **thresholds.model_dump(), "updated_at": utc_now().isoformat()}],
            prefer="resolution=merge-duplicates,return=representation",
        )
        stored = _map_rows(rows[:1], Thresholds.model_validate, "alert_thresholds")
        return stored[0] if stored else thresholds

    def get_alerting_enabled_hives(self, user_id: str) -> list[HiveRef]:
        rows = self._request(
            "GET",
            "hives",
            params={
                "select": "hive_id,user_id,name",
                "user_id": f"eq.{user_id}",
                "alerts_enabled": "not.is.false",
                "order": "hive_id.asc",
            },
        )
        return _map_rows(rows, HiveRef.model_validate, "hives")

    def list_alerting_users(self) -> list[str]:
        rows = self._request("GET", "hives", params={"select": "user_id", "alerts_enabled": "not.is.false"})
        users = _map_rows(rows, lambda row: row.get("user_id"), "hives")
        return sorted({user_id for user_id in users if user_id})

    def get_latest_reading(self, hive_id: str) -> MetricReadingOut | None:
        rows = self._request(
            "GET",
            "metrics_time_series_data",
            params={"select": "*", "hive_id": f"eq.{hive_id}", "order": "timestamp.desc", "limit": 1},
        )
        readings = _map_rows(rows[:1], _reading_from_row, "metrics_time_series_data")
        return readings[0] if readings else None

    def insert_reading(self, hive_id: str, reading: MetricReadingIn) -> MetricReadingOut:
        row = {column: getattr(reading, field) for column, field in READING_COLUMNS.items()}
        row["hive_id"] = hive_id
        row["timestamp"] = (reading.timestamp or utc_now()).isoformat()
        rows = self._request("POST", "metrics_time_series_data", payload=[row], prefer="return=representation")
        return _map_rows(rows[:1] or [row], _reading_from_row, "metrics_time_series_data")[0]

    def get_open_alerts(self, user_id: str, hive_id: str, metric_type: str) -> list[AlertOut]:
        rows = self._request(
            "GET",
            "alerts",
            params={
                "select": ALERT_SELECT,
                "user_id": f"eq.{user_id}",
                "hive_id": f"eq.{hive_id}",
                "type": f"eq.{metric_type}",
                "resolved_at": "is.null",
            },
        )
        return _map_rows(rows, _alert_from_row, "alerts")

    def get_recently_resolved_alerts(
        self, user_id: str, hive_id: str, metric_type: str, since: datetime
    ) -> list[AlertOut]:
        rows = self._request(
            "GET",
            "alerts",
            params={
                "select": ALERT_SELECT,
                "user_id": f"eq.{user_id}",
                "hive_id": f"eq.{hive_id}",
                "type": f"eq.{metric_type}",
                "resolved_at": f"gt.{since.isoformat()}",
            },
        )
        return _map_rows(rows, _alert_from_row, "alerts")

    def list_open_alerts(
        self, user_id: str, hive_id: str | None = None, apiary_id: int | None = None
    ) -> list[AlertOut]:
        params = {
            "select": ALERT_SELECT,
            "user_id": f"eq.{user_id}",
            "resolved_at": "is.null",
            "order": "created_at.desc",
        }
        if hive_id:
            params["hive_id"] = f"eq.{hive_id}"
        alerts = _map_rows(self._request("GET", "alerts", params=params), _alert_from_row, "alerts")
        if apiary_id is not None:
            alerts = [alert for alert in alerts if alert.apiary_id == apiary_id]
        return alerts

    def count_open_alerts(self, user_id: str) -> int:
        rows = self._request("GET", "alerts", params={"select": "id", "user_id": f"eq.{user_id}", "resolved_at": "is.null"})
        return len(rows)

    def get_alert(self, alert_id: int) -> AlertOut | None:
        rows = self._request("GET", "alerts", params={"select": ALERT_SELECT, "id": f"eq.{alert_id}", "limit": 1})
        alerts = _map_rows(rows[:1], _alert_from_row, "alerts")
        return alerts[0] if alerts else None

    def insert_alert(self, payload: dict[str, Any]) -> AlertOut:
        row = dict(payload)
        row["type"] = row.pop("metric_type")
        rows = self._request(
            "POST",
            "alerts",
            params={"select": ALERT_SELECT},
            payload=[_jsonable(row)],
            prefer="return=representation",
            error_cls=AlertWriteError,
        )
        if not rows:
            raise AlertWriteError("Alert insert returned no row")
        return _map_rows(rows[:1], _alert_from_row, "alerts", error_cls=AlertWriteError)[0]

    def update_alert(self, alert_id: int, fields: dict[str, Any]) -> None:
        self._request("PATCH", "alerts", params={"id": f"eq.{alert_id}"}, payload=_jsonable(fields))
