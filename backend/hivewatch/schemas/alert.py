from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AlertOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    hive_id: str
    metric_type: str
    message: str
    severity: str
    created_at: datetime
    resolved_at: datetime | None = None
    is_read: bool = False
    hive_name: str | None = None
    apiary_id: int | None = None
    apiary_name: str | None = None


class AlertListResponse(BaseModel):
    items: list[AlertOut]
    count: int


class AlertCountResponse(BaseModel):
    count: int


class AlertCheckResponse(BaseModel):
    user_id: str
    alerts_created: int


class BulkResolveRequest(BaseModel):
    alert_ids: list[int]


class BulkResolveResponse(BaseModel):
    resolved: int
    missing: list[int]
