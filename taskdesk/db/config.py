"""Database configuration for the taskdesk API."""
from typing import Generator
import logging

from fastapi import Depends
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import create_engine, Session

from taskdesk.config import DATABASE_URL

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create a SQLModel engine, enabling foreign keys and WAL for SQLite."""
    is_sqlite = database_url.startswith("sqlite")
    # SQLite connections are handed to FastAPI's worker threads
    connect_args = {"check_same_thread": False} if is_sqlite else {}

    engine = create_engine(database_url, echo=False, connect_args=connect_args)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            # ON DELETE CASCADE on task.owner_id relies on this
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

        logger.info("Using SQLite database: %s", database_url)
    else:
        logger.info("Using database backend: %s", engine.dialect.name)

    return engine


engine = build_engine(DATABASE_URL)


def get_engine() -> Engine:
    """Dependency returning the application engine."""
    return engine


def get_session(db_engine: Engine = Depends(get_engine)) -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with Session(db_engine) as session:
        yield session
