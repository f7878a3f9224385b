from hivewatch.crud.crud_alert import alert_crud
from hivewatch.crud.crud_hive import hive_crud
from hivewatch.crud.crud_metric import metric_crud
from hivewatch.crud.crud_threshold import threshold_crud

__all__ = ["alert_crud", "hive_crud", "metric_crud", "threshold_crud"]
