from pydantic import BaseModel, ConfigDict


class Thresholds(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    temperature_min: float = 32.0
    temperature_max: float = 36.0
    humidity_min: float = 40.0
    humidity_max: float = 65.0
    sound_min: float = 30.0
    sound_max: float = 60.0
    weight_min: float = 10.0
    weight_max: float = 25.0


class ThresholdsUpdate(BaseModel):
    temperature_min: float | None = None
    temperature_max: float | None = None
    humidity_min: float | None = None
    humidity_max: float | None = None
    sound_min: float | None = None
    sound_max: float | None = None
    weight_min: float | None = None
    weight_max: float | None = None


DEFAULT_THRESHOLDS = Thresholds()
