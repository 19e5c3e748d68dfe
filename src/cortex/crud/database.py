"""Engine creation and schema initialization"""

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

# Registers the entry/block tables on SQLModel.metadata
from cortex.crud import models  # noqa: F401


def make_engine(db_url: str) -> Engine:
    """Create an engine; SQLite URLs allow use across threads."""
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    return create_engine(db_url, echo=False, connect_args=connect_args)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    SQLModel.metadata.create_all(engine)


def reset_db(engine: Engine) -> None:
    """Drop and recreate all tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
