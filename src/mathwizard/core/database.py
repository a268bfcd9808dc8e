"""Database connection and session management.

This module handles the database connection using SQLAlchemy. Each account
row is stored as one document-like record; list attributes live in JSON
columns.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from mathwizard.config import DATA_DIR, DATABASE_URL
from mathwizard.models.base import Base
# Import models to ensure they are registered with Base.metadata
import mathwizard.models  # noqa: F401

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}
    if DATABASE_URL.startswith(f"sqlite:///{DATA_DIR}"):
        # Ensure data directory exists
        DATA_DIR.mkdir(parents=True, exist_ok=True)

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=engine) -> None:
    """Create tables if they do not exist."""
    Base.metadata.create_all(bind=bind)


def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
