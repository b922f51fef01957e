# skillmatch/database.py - Database Configuration
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from skillmatch.config import settings

# Database URL loaded from .env via skillmatch/config.py
DATABASE_URL = settings.DATABASE_URL


def _create_engine(url: str):
    if str(url).startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url)


engine = _create_engine(DATABASE_URL)

# Session maker
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def init_db() -> None:
    """Create tables for every registered model. Called at process start."""
    from skillmatch import models  # noqa: F401 - register mappers on Base

    Base.metadata.create_all(bind=engine)


def shutdown_db() -> None:
    """Release pooled connections. Called at process shutdown."""
    engine.dispose()


# Dependency to get database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
