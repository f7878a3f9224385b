from typing import Any, Dict, Optional

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from hivewatch.models.metric_reading import MetricReading


class CRUDMetric:
    def create(self, db: Session, obj_in: Dict[str, Any]) -> MetricReading:
        db_obj = MetricReading(**obj_in)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_latest(self, db: Session, hive_id: str) -> Optional[MetricReading]:
        query = (
            select(MetricReading)
            .where(MetricReading.hive_id == hive_id)
            .order_by(desc(MetricReading.timestamp), desc(MetricReading.id))
            .limit(1)
        )
        return db.execute(query).scalar_one_or_none()


metric_crud = CRUDMetric()
