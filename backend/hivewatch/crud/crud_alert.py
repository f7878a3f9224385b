from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from hivewatch.models.alert import Alert
from hivewatch.models.hive import Apiary, Hive


class CRUDAlert:
    def create(self, db: Session, obj_in: Dict[str, Any]) -> Alert:
        db_obj = Alert(**obj_in)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, alert_id: int) -> Optional[Alert]:
        return db.get(Alert, alert_id)

    def get_open_alerts(self, db: Session, user_id: str, hive_id: str, metric_type: str) -> List[Alert]:
        query = (
            select(Alert)
            .where(
                Alert.user_id == user_id,
                Alert.hive_id == hive_id,
                Alert.metric_type == metric_type,
                Alert.resolved_at.is_(None),
            )
            .order_by(desc(Alert.created_at))
        )
        return list(db.execute(query).scalars().all())

    def get_resolved_since(
        self,
        db: Session,
        user_id: str,
        hive_id: str,
        metric_type: str,
        since: datetime,
    ) -> List[Alert]:
        query = (
            select(Alert)
            .where(
                Alert.user_id == user_id,
                Alert.hive_id == hive_id,
                Alert.metric_type == metric_type,
                Alert.resolved_at.is_not(None),
                Alert.resolved_at > since,
            )
            .order_by(desc(Alert.resolved_at))
        )
        return list(db.execute(query).scalars().all())

    def get_unresolved_alerts(
        self,
        db: Session,
        user_id: str,
        hive_id: Optional[str] = None,
        apiary_id: Optional[int] = None,
    ) -> List[Tuple[Alert, Optional[str], Optional[int], Optional[str]]]:
        query = (
            select(Alert, Hive.name, Hive.apiary_id, Apiary.name)
            .outerjoin(Hive, Hive.hive_id == Alert.hive_id)
            .outerjoin(Apiary, Apiary.id == Hive.apiary_id)
            .where(Alert.user_id == user_id, Alert.resolved_at.is_(None))
        )

        if hive_id:
            query = query.where(Alert.hive_id == hive_id)
        if apiary_id is not None:
            query = query.where(Hive.apiary_id == apiary_id)

        query = query.order_by(desc(Alert.created_at))
        return [tuple(row) for row in db.execute(query).all()]

    def count_unresolved(self, db: Session, user_id: str) -> int:
        query = select(func.count(Alert.id)).where(Alert.user_id == user_id, Alert.resolved_at.is_(None))
        return db.execute(query).scalar_one() or 0

    def update(self, db: Session, alert_id: int, fields: Dict[str, Any]) -> Optional[Alert]:
        alert = db.get(Alert, alert_id)

        if alert:
            for key, value in fields.items():
                setattr(alert, key, value)
            db.commit()
            db.refresh(alert)

        return alert


alert_crud = CRUDAlert()
