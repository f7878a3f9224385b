from hivewatch.core.config import Settings, settings
from hivewatch.core.database import Base, SessionLocal, engine
from hivewatch.core.exceptions import (
    AlertNotFoundError,
    AlertWriteError,
    HiveWatchError,
    TransientStoreError,
)

__all__ = [
    "AlertNotFoundError",
    "AlertWriteError",
    "Base",
    "HiveWatchError",
    "SessionLocal",
    "Settings",
    "TransientStoreError",
    "engine",
    "settings",
]
