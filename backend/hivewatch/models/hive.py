from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hivewatch.core.database import Base


class Apiary(Base):
    __tablename__ = "apiaries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    hives = relationship("Hive", back_populates="apiary")

    def __repr__(self) -> str:
        return f"<Apiary(id={self.id}, name={self.name})>"


class Hive(Base):
    __tablename__ = "hives"

    hive_id = Column(String, primary_key=True)
    apiary_id = Column(Integer, ForeignKey("apiaries.id"), nullable=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    alerts_enabled = Column(Boolean, default=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    apiary = relationship("Apiary", back_populates="hives")

    def __repr__(self) -> str:
        return f"<Hive(hive_id={self.hive_id}, alerts_enabled={self.alerts_enabled})>"
