from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from hivewatch.core.config import settings


def _connect_args(database_url: str) -> dict:
    # SQLite connections are shared between the request threads and the checker thread
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(settings.database_url, connect_args=_connect_args(settings.database_url))
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()
