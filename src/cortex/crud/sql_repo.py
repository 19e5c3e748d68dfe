"""SQLModel-backed entry store"""

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from cortex.crud.models import ContentBlock, KnowledgeEntry
from cortex.crud.repo import EntryStore
from cortex.exceptions import StoreError


class SQLEntryStore(EntryStore):
    def __init__(self, session: Session):
        self.session = session

    def fetch_unconverted(self) -> list[KnowledgeEntry]:
        query = (
            select(KnowledgeEntry)
            .where(KnowledgeEntry.is_converted == False)  # noqa: E712
            .order_by(KnowledgeEntry.created_at, KnowledgeEntry.id)
        )
        try:
            return list(self.session.exec(query).all())
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch unconverted entries: {e}") from e

    def fetch_unconverted_by_id(self, entry_id: str) -> KnowledgeEntry | None:
        query = (
            select(KnowledgeEntry)
            .where(KnowledgeEntry.id == entry_id)
            .where(KnowledgeEntry.is_converted == False)  # noqa: E712
        )
        try:
            return self.session.exec(query).first()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch entry {entry_id}: {e}") from e

    def insert_owned(self, block: ContentBlock, entry: KnowledgeEntry) -> None:
        block.entry_id = entry.id
        entry.blocks.append(block)
        self.session.add(block)

    def delete_owned(self, block: ContentBlock) -> None:
        state = inspect(block)
        if state.persistent:
            self.session.delete(block)
        elif state.pending:
            self.session.expunge(block)

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Commit failed: {e}") from e
