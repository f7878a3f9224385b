from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from hivewatch.models.hive import Hive


class CRUDHive:
    def get_alerting_enabled(self, db: Session, user_id: str) -> List[Hive]:
        query = (
            select(Hive)
            .where(Hive.user_id == user_id, Hive.alerts_enabled.is_not(False))
            .order_by(Hive.hive_id)
        )
        return list(db.execute(query).scalars().all())

    def get_alerting_users(self, db: Session) -> List[str]:
        query = select(Hive.user_id).where(Hive.alerts_enabled.is_not(False)).distinct().order_by(Hive.user_id)
        return list(db.execute(query).scalars().all())


hive_crud = CRUDHive()
