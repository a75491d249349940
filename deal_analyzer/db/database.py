"""
Deal store connection and session management.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool

from deal_analyzer.config import get_settings
from deal_analyzer.db.models import Base


def build_engine(database_url: str) -> Engine:
    """Create an engine for the deal store."""
    if database_url.startswith("sqlite"):
        # Sessions are handed across FastAPI's threadpool
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, poolclass=NullPool)


engine = build_engine(get_settings().database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create the deals table if it does not exist."""
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Transactional session for scripts; commits on success, rolls back on error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
