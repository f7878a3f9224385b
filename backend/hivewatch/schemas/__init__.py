from hivewatch.schemas.alert import (
    AlertCheckResponse,
    AlertCountResponse,
    AlertListResponse,
    AlertOut,
    BulkResolveRequest,
    BulkResolveResponse,
)
from hivewatch.schemas.metric import HiveRef, MetricReadingIn, MetricReadingOut
from hivewatch.schemas.threshold import DEFAULT_THRESHOLDS, Thresholds, ThresholdsUpdate

__all__ = [
    "AlertCheckResponse",
    "AlertCountResponse",
    "AlertListResponse",
    "AlertOut",
    "BulkResolveRequest",
    "BulkResolveResponse",
    "DEFAULT_THRESHOLDS",
    "HiveRef",
    "MetricReadingIn",
    "MetricReadingOut",
    "Thresholds",
    "ThresholdsUpdate",
]
