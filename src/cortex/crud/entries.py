"""Entry persistence helpers: creation, lookup, and conversion status counts"""

from sqlalchemy import func
from sqlmodel import Session, select

from cortex.crud.models import ContentBlock, KnowledgeEntry


def create_entry(session: Session, title: str, content: str, tags: list[str] | None = None) -> KnowledgeEntry:
    """Add a new legacy (unconverted) entry. Flushes but does not commit."""
    entry = KnowledgeEntry(title=title, content=content, tags=list(tags or []))
    session.add(entry)
    session.flush()
    return entry


def get_entry(session: Session, entry_id: str) -> KnowledgeEntry | None:
    """Return the entry with the given id, or None if not found."""
    return session.get(KnowledgeEntry, entry_id)


def get_all_entries(session: Session) -> list[KnowledgeEntry]:
    """Return all entries, oldest first."""
    return list(session.exec(select(KnowledgeEntry).order_by(KnowledgeEntry.created_at)).all())


def count_by_status(session: Session) -> dict[str, int]:
    """Return {'converted': n, 'unconverted': m}."""
    rows = session.exec(
        select(KnowledgeEntry.is_converted, func.count()).group_by(KnowledgeEntry.is_converted)
    ).all()
    counts = {"converted": 0, "unconverted": 0}
    for is_converted, n in rows:
        counts["converted" if is_converted else "unconverted"] = n
    return counts


def get_blocks(session: Session, entry_id: str) -> list[ContentBlock]:
    """Return an entry's blocks ordered by position."""
    return list(session.exec(
        select(ContentBlock).where(ContentBlock.entry_id == entry_id).order_by(ContentBlock.order)
    ).all())
