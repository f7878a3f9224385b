from sqlalchemy import Column, DateTime, Float, Index, Integer, String
from sqlalchemy.sql import func

from hivewatch.core.database import Base


class MetricReading(Base):
    __tablename__ = "metric_readings"
    __table_args__ = (Index("ix_metric_readings_hive_timestamp", "hive_id", "timestamp"),)

    id = Column(Integer, primary_key=True, index=True)
    hive_id = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    temperature = Column(Float, nullable=True)
    humidity = Column(Float, nullable=True)
    sound = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)

    def __repr__(self):
        return f"<MetricReading(hive={self.hive_id}, temp={self.temperature}, humidity={self.humidity})>"
