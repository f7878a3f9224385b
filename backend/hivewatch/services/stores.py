from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hivewatch.core.database import SessionLocal
from hivewatch.core.exceptions import AlertWriteError, TransientStoreError
from hivewatch.crud import alert_crud, hive_crud, metric_crud, threshold_crud
from hivewatch.schemas import AlertOut, HiveRef, MetricReadingIn, MetricReadingOut, Thresholds
from hivewatch.utils.timestamps import utc_now


class AlertingStore(Protocol):
    """Everything the alerting core reads and writes.

    Implementations raise ``TransientStoreError`` for any backend failure and
    return ``None`` for a missing threshold row, reading or alert.
    """

    def get_thresholds(self, user_id: str) -> Thresholds | None: ...

    def upsert_thresholds(self, user_id: str, thresholds: Thresholds) -> Thresholds: ...

    def get_alerting_enabled_hives(self, user_id: str) -> list[HiveRef]: ...

    def list_alerting_users(self) -> list[str]: ...

    def get_latest_reading(self, hive_id: str) -> MetricReadingOut | None: ...

    def insert_reading(self, hive_id: str, reading: MetricReadingIn) -> MetricReadingOut: ...

    def get_open_alerts(self, user_id: str, hive_id: str, metric_type: str) -> list[AlertOut]: ...

    def get_recently_resolved_alerts(
        self, user_id: str, hive_id: str, metric_type: str, since: datetime
    ) -> list[AlertOut]: ...

    def list_open_alerts(
        self, user_id: str, hive_id: str | None = None, apiary_id: int | None = None
    ) -> list[AlertOut]: ...

    def count_open_alerts(self, user_id: str) -> int: ...

    def get_alert(self, alert_id: int) -> AlertOut | None: ...

    def insert_alert(self, payload: dict[str, Any]) -> AlertOut: ...

    def update_alert(self, alert_id: int, fields: dict[str, Any]) -> None: ...


class SqlAlertingStore:
    """``AlertingStore`` over the local SQLAlchemy models, one session per call."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self, action: str, error_cls: type[TransientStoreError] = TransientStoreError) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            raise error_cls(f"Failed to {action}: {exc}") from exc
        finally:
            db.close()

    def get_thresholds(self, user_id: str) -> Thresholds | None:
        with self._session("load thresholds") as db:
            row = threshold_crud.get_by_user(db, user_id)
            return Thresholds.model_validate(row) if row else None

    def upsert_thresholds(self, user_id: str, thresholds: Thresholds) -> Thresholds:
        with self._session("save thresholds") as db:
            row = threshold_crud.upsert(db, user_id, thresholds.model_dump())
            return Thresholds.model_validate(row)

    def get_alerting_enabled_hives(self, user_id: str) -> list[HiveRef]:
        with self._session("load hives") as db:
            return [HiveRef.model_validate(hive) for hive in hive_crud.get_alerting_enabled(db, user_id)]

    def list_alerting_users(self) -> list[str]:
        with self._session("load users") as db:
            return hive_crud.get_alerting_users(db)

    def get_latest_reading(self, hive_id: str) -> MetricReadingOut | None:
        with self._session("load latest reading") as db:
            row = metric_crud.get_latest(db, hive_id)
            return MetricReadingOut.model_validate(row) if row else None

    def insert_reading(self, hive_id: str, reading: MetricReadingIn) -> MetricReadingOut:
        payload = reading.model_dump()
        payload["hive_id"] = hive_id
        payload["timestamp"] = payload.get("timestamp") or utc_now()
        with self._session("save reading") as db:
            return MetricReadingOut.model_validate(metric_crud.create(db, payload))

    def get_open_alerts(self, user_id: str, hive_id: str, metric_type: str) -> list[AlertOut]:
        with self._session("load open alerts") as db:
            rows = alert_crud.get_open_alerts(db, user_id, hive_id, metric_type)
            return [AlertOut.model_validate(row) for row in rows]

    def get_recently_resolved_alerts(
        self, user_id: str, hive_id: str, metric_type: str, since: datetime
    ) -> list[AlertOut]:
        with self._session("load resolved alerts") as db:
            rows = alert_crud.get_resolved_since(db, user_id, hive_id, metric_type, since)
            return [AlertOut.model_validate(row) for row in rows]

    def list_open_alerts(
        self, user_id: str, hive_id: str | None = None, apiary_id: int | None = None
    ) -> list[AlertOut]:
        with self._session("list alerts") as db:
            rows = alert_crud.get_unresolved_alerts(db, user_id, hive_id=hive_id, apiary_id=apiary_id)
            items = []
            for alert, hive_name, hive_apiary_id, apiary_name in rows:
                item = AlertOut.model_validate(alert)
                item.hive_name = hive_name or "Unknown"
                item.apiary_id = hive_apiary_id
                item.apiary_name = apiary_name or "Unknown"
                items.append(item)
            return items

    def count_open_alerts(self, user_id: str) -> int:
        with self._session("count alerts") as db:
            return alert_crud.count_unresolved(db, user_id)

    def get_alert(self, alert_id: int) -> AlertOut | None:
        with self._session("load alert") as db:
            row = alert_crud.get(db, alert_id)
            return AlertOut.model_validate(row) if row else None

    def insert_alert(self, payload: dict[str, Any]) -> AlertOut:
        with self._session("create alert", AlertWriteError) as db:
            return AlertOut.model_validate(alert_crud.create(db, payload))

    def update_alert(self, alert_id: int, fields: dict[str, Any]) -> None:
        with self._session("update alert") as db:
            alert_crud.update(db, alert_id, fields)
