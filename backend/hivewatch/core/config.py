import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "true").lower() == "true"
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))
    cors_origins_raw: str = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./hivewatch.db")
    store_backend: str = os.getenv("STORE_BACKEND", "sql")
    postgrest_url: str = os.getenv("POSTGREST_URL", "http://localhost:54321")
    postgrest_api_key: str = os.getenv("POSTGREST_API_KEY", "")
    store_timeout: int = int(os.getenv("STORE_TIMEOUT", "10"))
    alert_check_enabled: bool = os.getenv("ALERT_CHECK_ENABLED", "false").lower() == "true"
    alert_check_interval_seconds: int = int(os.getenv("ALERT_CHECK_INTERVAL_SECONDS", "1800"))
    alert_check_min_interval_seconds: int = int(os.getenv("ALERT_CHECK_MIN_INTERVAL_SECONDS", "600"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "logs/application.log")

    @property
    def cors_origins(self) -> list[str]:
        return [item.strip() for item in self.cors_origins_raw.split(",") if item.strip()]


settings = Settings()
