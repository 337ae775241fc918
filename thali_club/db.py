"""
Database connection management.

The only table is the wizard snapshot store. Tables are created on module load;
a local SQLite file is used unless DATABASE_URL points elsewhere.

Environment variables:
    - DATABASE_URL: SQLAlchemy connection URL (default: sqlite:///./thali_club.db)
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from .config import DATABASE_URL
from .models import Base

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Create tables on module load
Base.metadata.create_all(bind=engine)


def session_factory() -> Session:
    """
    Open a new session from the current SessionLocal.

    Looked up at call time so tests can swap SessionLocal for an in-memory
    database after import.
    """
    return SessionLocal()
