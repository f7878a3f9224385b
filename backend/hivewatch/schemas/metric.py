from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MetricReadingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    hive_id: str
    timestamp: datetime
    temperature: float | None = None
    humidity: float | None = None
    sound: float | None = None
    weight: float | None = None


class MetricReadingIn(BaseModel):
    temperature: float | None = Field(default=None, description="Brood temperature in Celsius")
    humidity: float | None = Field(default=None, ge=0.0, le=100.0, description="Relative humidity percentage")
    sound: float | None = Field(default=None, ge=0.0, description="Sound level in dB")
    weight: float | None = Field(default=None, ge=0.0, description="Hive weight in kg")
    timestamp: datetime | None = None


class HiveRef(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    hive_id: str
    user_id: str | None = None
    name: str | None = None
