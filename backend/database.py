"""
Database session management for EventLens
SQLAlchemy engine, session factory and transaction scope
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from backend.config import settings

# Create database engine
# pool_pre_ping: Verify connections before using them
# echo: Log all SQL statements when DEBUG=True
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


def get_db():
    """
    Dependency for FastAPI endpoints to get database session
    Automatically closes session after request

    Rolls back any pending transaction on error so a failed request
    never leaves a dirty session behind.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Run a group of statements as one atomic unit on a single session

    The session holds one connection for the whole block, so every
    statement issued through the yielded handle belongs to the same
    database transaction. Commits on success, rolls back on any
    exception and re-raises it.

    Usage:
        with transaction(db) as tx:
            tx.add(application)
            tx.flush()
            tx.add(api_key)
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def create_tables():
    """
    Create all tables in the database
    Called during application startup

    Note: Import models here to ensure they're registered with Base.metadata
    """
    from backend.models import Owner, Application, APIKey, Event  # noqa: F401

    Base.metadata.create_all(bind=engine)
