import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hivewatch.api import router
from hivewatch.api.deps import get_metrics_checker
from hivewatch.core import Base, engine, settings
from hivewatch.models import Alert, AlertThreshold, Apiary, Hive, MetricReading  # noqa: F401
from hivewatch.utils import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="HiveWatch API",
    version="0.1.0",
    description="Threshold alerting for monitored beehives.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.on_event("startup")
def on_startup() -> None:
    if settings.store_backend.strip().lower() == "sql":
        Base.metadata.create_all(bind=engine)
    if settings.alert_check_enabled:
        logger.info("Starting metrics checker every %ss", settings.alert_check_interval_seconds)
        get_metrics_checker().start()


@app.on_event("shutdown")
def on_shutdown() -> None:
    if settings.alert_check_enabled:
        get_metrics_checker().stop()


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "HiveWatch backend is running", "docs": "/docs"}
