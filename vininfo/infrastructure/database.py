"""Database engine, session factory and schema bootstrap."""

import threading

import structlog
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from vininfo.config import get_settings

settings = get_settings()
logger = structlog.get_logger(__name__)

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

_schema_ready = False
_schema_lock = threading.Lock()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_schema(bind: Engine = engine) -> None:
    """Create missing tables and indexes once per process.

    Every statement is issued with ``checkfirst`` so several processes may run
    this concurrently against the same database.
    """
    global _schema_ready
    if _schema_ready:
        return

    with _schema_lock:
        if _schema_ready:
            return
        # Register every model on Base.metadata
        from vininfo.domain.models.user import User  # noqa: F401
        from vininfo.domain.models.vehicle import Vehicle  # noqa: F401
        from vininfo.domain.models.reminder import Reminder  # noqa: F401

        Base.metadata.create_all(bind=bind, checkfirst=True)
        _schema_ready = True
        logger.info("Database schema verified", dialect=bind.dialect.name)
