from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hivewatch.models.alert_threshold import AlertThreshold


class CRUDThreshold:
    def get_by_user(self, db: Session, user_id: str) -> Optional[AlertThreshold]:
        result = db.execute(select(AlertThreshold).where(AlertThreshold.user_id == user_id))
        return result.scalar_one_or_none()

    def upsert(self, db: Session, user_id: str, values: Dict[str, Any]) -> AlertThreshold:
        row = self.get_by_user(db, user_id)
        if row is None:
            row = AlertThreshold(user_id=user_id)
            db.add(row)

        for key, value in values.items():
            setattr(row, key, value)

        db.commit()
        db.refresh(row)
        return row


threshold_crud = CRUDThreshold()
