from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String

from hivewatch.core.database import Base


class Alert(Base):
    __tablename__ = "alerts"
    __table_args__ = (Index("ix_alerts_user_hive_metric", "user_id", "hive_id", "metric_type"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    hive_id = Column(String, nullable=False)
    metric_type = Column(String, nullable=False)  # temperature, humidity, sound, weight
    message = Column(String, nullable=False)
    severity = Column(String, nullable=False)  # low, medium, high
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    is_read = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<Alert(hive={self.hive_id}, metric={self.metric_type}, severity={self.severity})>"
