"""
Database session management.
"""
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from vibecheck.core.config import settings
from vibecheck.db.base import Base

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    options = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        # Single shared connection so in-memory databases survive across sessions
        options["connect_args"] = {"check_same_thread": False}
        options["poolclass"] = StaticPool
    else:
        options["pool_recycle"] = 3600
    return options


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    # Import models so SQLAlchemy registers every table on Base.metadata
    import vibecheck.models  # noqa: F401

    logger.info("Creating tables on %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)
