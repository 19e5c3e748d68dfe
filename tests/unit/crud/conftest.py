"""Shared fixtures for crud unit tests"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from cortex.crud.models import KnowledgeEntry


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="make_entries")
def make_entries_fixture(session):
    """Factory: persist n legacy entries with strictly increasing created_at and commit."""
    def _make(n: int, content: str = "# Title\n\nbody\n\n- item") -> list[KnowledgeEntry]:
        base = datetime(2024, 1, 1)
        entries = [
            KnowledgeEntry(title=f"entry {i}", content=content, created_at=base + timedelta(minutes=i))
            for i in range(n)
        ]
        session.add_all(entries)
        session.commit()
        return entries
    return _make
