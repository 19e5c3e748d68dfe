"""Unit tests for crud/entries.py"""

from cortex.core.migration import BlockMigrationService
from cortex.crud.entries import count_by_status, create_entry, get_all_entries, get_blocks, get_entry
from cortex.crud.sql_repo import SQLEntryStore


def test_create_entry_is_legacy(session):
    """create_entry stores an unconverted entry with tags."""
    entry = create_entry(session, "Title", "body", ["a", "b"])
    assert entry.is_converted is False
    assert get_entry(session, entry.id).tags == ["a", "b"]


def test_get_entry_missing(session):
    """get_entry returns None for unknown ids."""
    assert get_entry(session, "missing") is None


def test_get_all_entries_oldest_first(session, make_entries):
    """get_all_entries orders by created_at."""
    entries = make_entries(3)
    assert [e.id for e in get_all_entries(session)] == [e.id for e in entries]


def test_count_by_status(session, make_entries):
    """count_by_status splits converted and unconverted entries."""
    entries = make_entries(3)
    BlockMigrationService(SQLEntryStore(session)).migrate_by_id(entries[0].id)
    assert count_by_status(session) == {"converted": 1, "unconverted": 2}


def test_count_by_status_empty(session):
    """count_by_status reports zeros for an empty store."""
    assert count_by_status(session) == {"converted": 0, "unconverted": 0}


def test_get_blocks_ordered(session, make_entries):
    """get_blocks returns an entry's blocks by order."""
    entry = make_entries(1, "a\nb\nc")[0]
    BlockMigrationService(SQLEntryStore(session)).migrate_by_id(entry.id)
    assert [b.content for b in get_blocks(session, entry.id)] == ["a", "b", "c"]
    assert [b.order for b in get_blocks(session, entry.id)] == [0, 1, 2]
