from dataclasses import dataclass
from enum import Enum

from hivewatch.schemas.metric import MetricReadingOut
from hivewatch.schemas.threshold import Thresholds


class MetricType(str, Enum):
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    SOUND = "sound"
    WEIGHT = "weight"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Direction(str, Enum):
    ABOVE_MAX = "above_max"
    BELOW_MIN = "below_min"


@dataclass(frozen=True)
class MetricSpec:
    metric: MetricType
    label: str
    unit: str
    above_max: Severity
    below_min: Severity

    @property
    def min_field(self) -> str:
        return f"{self.metric.value}_min"

    @property
    def max_field(self) -> str:
        return f"{self.metric.value}_max"

    def severity_for(self, direction: Direction) -> Severity:
        if direction is Direction.ABOVE_MAX:
            return self.above_max
        return self.below_min


METRIC_SPECS: tuple[MetricSpec, ...] = (
    MetricSpec(MetricType.TEMPERATURE, "Temperature", "°C", above_max=Severity.HIGH, below_min=Severity.MEDIUM),
    MetricSpec(MetricType.HUMIDITY, "Humidity", "%", above_max=Severity.MEDIUM, below_min=Severity.MEDIUM),
    MetricSpec(MetricType.SOUND, "Sound", "dB", above_max=Severity.MEDIUM, below_min=Severity.LOW),
    MetricSpec(MetricType.WEIGHT, "Weight", "kg", above_max=Severity.MEDIUM, below_min=Severity.HIGH),
)


@dataclass(frozen=True)
class AlertCondition:
    hive_id: str
    metric: MetricType
    message: str
    severity: Severity
    direction: Direction


def _threshold_message(spec: MetricSpec, value: float, direction: Direction) -> str:
    word = "high" if direction is Direction.ABOVE_MAX else "low"
    return f"{spec.label} is too {word} ({value:.1f}{spec.unit})"


def evaluate_reading(reading: MetricReadingOut, thresholds: Thresholds) -> list[AlertCondition]:
    """Compare one reading against a user's bounds.

    Values equal to a bound are in range. Metrics missing from the reading are
    skipped. The result is ordered as ``METRIC_SPECS``.
    """
    conditions: list[AlertCondition] = []

    for spec in METRIC_SPECS:
        value = getattr(reading, spec.metric.value)
        if value is None:
            continue

        value = float(value)
        if value > getattr(thresholds, spec.max_field):
            direction = Direction.ABOVE_MAX
        elif value < getattr(thresholds, spec.min_field):
            direction = Direction.BELOW_MIN
        else:
            continue

        conditions.append(
            AlertCondition(
                hive_id=reading.hive_id,
                metric=spec.metric,
                message=_threshold_message(spec, value, direction),
                severity=spec.severity_for(direction),
                direction=direction,
            )
        )

    return conditions
