from hivewatch.models.alert import Alert
from hivewatch.models.alert_threshold import AlertThreshold
from hivewatch.models.hive import Apiary, Hive
from hivewatch.models.metric_reading import MetricReading

__all__ = ["Alert", "AlertThreshold", "Apiary", "Hive", "MetricReading"]
