"""Initialize database tables."""
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

# Registers the tables on SQLModel.metadata
from taskdesk.models.user import User  # noqa: F401
from taskdesk.models.task import Task  # noqa: F401
from taskdesk.db.config import engine as default_engine


def init_db(engine: Optional[Engine] = None):
    """Create all tables in the database."""
    SQLModel.metadata.create_all(engine or default_engine)


if __name__ == "__main__":
    init_db()
    print("Database tables created successfully.")
