from hivewatch.utils.logger import setup_logging
from hivewatch.utils.timestamps import as_utc, utc_now

__all__ = ["as_utc", "setup_logging", "utc_now"]
