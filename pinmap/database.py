"""
Database connection and session management for PinMap Backend
"""
import logging
import time

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker
from pinmap.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,   # Test connections before using
        "pool_size": 10,         # Connection pool size
        "max_overflow": 20,      # Overflow connections allowed
    }


# Create database engine with connection pooling
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG and settings.LOG_LEVEL.upper() == "DEBUG",
    **_engine_options(settings.DATABASE_URL),
)

# Session factory for creating database sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


def get_db():
    """
    Dependency for getting database session in endpoints

    Usage in FastAPI endpoints:
        def my_endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(retry_seconds: float = None):
    """
    Initialize database tables.

    A failed first connection is retried exactly once after ``retry_seconds``;
    a second failure propagates to the caller.
    """
    # Register every model on Base.metadata
    import pinmap.models  # noqa: F401

    if retry_seconds is None:
        retry_seconds = settings.DATABASE_CONNECT_RETRY_SECONDS

    try:
        Base.metadata.create_all(bind=engine)
    except OperationalError as e:
        logger.warning(f"Database connection failed, retrying in {retry_seconds}s: {e}")
        time.sleep(retry_seconds)
        Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
