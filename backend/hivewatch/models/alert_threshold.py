from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from hivewatch.core.database import Base


class AlertThreshold(Base):
    __tablename__ = "alert_thresholds"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    temperature_min = Column(Float, default=32.0, nullable=False)
    temperature_max = Column(Float, default=36.0, nullable=False)
    humidity_min = Column(Float, default=40.0, nullable=False)
    humidity_max = Column(Float, default=65.0, nullable=False)
    sound_min = Column(Float, default=30.0, nullable=False)
    sound_max = Column(Float, default=60.0, nullable=False)
    weight_min = Column(Float, default=10.0, nullable=False)
    weight_max = Column(Float, default=25.0, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<AlertThreshold(user={self.user_id}, "
            f"temperature={self.temperature_min}-{self.temperature_max}, "
            f"humidity={self.humidity_min}-{self.humidity_max}, "
            f"sound={self.sound_min}-{self.sound_max}, "
            f"weight={self.weight_min}-{self.weight_max})>"
        )
