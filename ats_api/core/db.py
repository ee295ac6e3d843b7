from collections.abc import Generator
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from ats_api.core.logging import get_logger
from ats_api.core.settings import get_settings

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by every entity."""


# Global engine instance
_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def init_db() -> None:
    """Initialize database engine, session factory and tables."""
    global _engine, _SessionLocal

    if _engine is not None:
        return

    settings = get_settings()
    url = str(settings.database_url)

    if url.startswith("sqlite"):
        _engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=settings.database_echo,
        )
    else:
        _engine = create_engine(
            url,
            pool_size=20,
            max_overflow=40,
            pool_pre_ping=True,
            echo=settings.database_echo,
        )

    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)

    # Entities must be registered on the metadata before create_all
    from ats_api.models import candidate, client, offer, user  # noqa: F401

    Base.metadata.create_all(bind=_engine)
    logger.info("Database initialized successfully")


def get_session_factory() -> sessionmaker:
    """Get the session factory, initializing if necessary."""
    if _SessionLocal is None:
        init_db()
    return _SessionLocal


def get_db_session() -> Generator[Session, None, None]:
    """One session per request (FastAPI dependency)."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    """Creation and last-update timestamps maintained on the Python side."""

    created_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_date = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
