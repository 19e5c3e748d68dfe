"""Resumable conversion of legacy text entries into block form"""

import structlog

from cortex.core.parse import parse_blocks
from cortex.crud.models import ContentBlock, KnowledgeEntry
from cortex.crud.repo import EntryStore
from cortex.exceptions import EntryNotFoundError, StoreError

logger = structlog.get_logger()


class BlockMigrationService:
    """Converts unconverted entries exactly once, with periodic checkpoint commits.

    Run state (is_migrating, migrated_entries, total_entries, progress,
    current_entry_title) is observable while migrate_all runs. A second
    migrate_all call during a run is a no-op.
    """

    def __init__(self, store: EntryStore, checkpoint_interval: int = 10):
        if checkpoint_interval < 1:
            raise ValueError("checkpoint_interval must be >= 1")
        self.store = store
        self.checkpoint_interval = checkpoint_interval
        self.logger = logger.bind(component="block_migration")

        self.is_migrating = False
        self.cancel_requested = False
        self.progress = 0.0
        self.current_entry_title = ""
        self.total_entries = 0
        self.migrated_entries = 0

    def needs_migration(self) -> bool:
        """True if any entry is still unconverted. Store failures read as False."""
        try:
            return bool(self.store.fetch_unconverted())
        except StoreError as e:
            self.logger.error("Could not check migration status", error=str(e))
            return False

    def cancel(self) -> None:
        """Stop the running batch before its next entry; completed work is still committed."""
        if self.is_migrating:
            self.cancel_requested = True

    def migrate_all(self) -> None:
        """Convert every entry that is unconverted at the start of the run.

        Per-entry failures are logged and skipped. Store errors from the
        initial fetch or from a commit propagate.
        """
        if self.is_migrating:
            self.logger.warning("Migration already in progress")
            return

        self.is_migrating = True
        self.cancel_requested = False
        self.progress = 0.0
        self.migrated_entries = 0
        self.current_entry_title = ""
        try:
            self._run()
        finally:
            self.is_migrating = False
            self.current_entry_title = ""

    def _run(self) -> None:
        entries = self.store.fetch_unconverted()
        self.total_entries = len(entries)
        self.logger.info("Starting block migration", total=self.total_entries)

        if not entries:
            self.progress = 1.0
            self.logger.info("No entries need migration")
            return

        failed = 0
        for entry in entries:
            if self.cancel_requested:
                self.logger.warning(
                    "Migration cancelled", processed=self.migrated_entries, total=self.total_entries
                )
                break

            self.current_entry_title = entry.title
            try:
                self.migrate_entry(entry)
            except Exception as e:
                failed += 1
                self.logger.error(
                    "Failed to migrate entry", entry_id=entry.id, title=entry.title, error=str(e)
                )

            self.migrated_entries += 1
            self.progress = self.migrated_entries / self.total_entries

            if self.migrated_entries % self.checkpoint_interval == 0:
                self.store.commit()
                self.logger.info(
                    "Saved migration checkpoint", processed=self.migrated_entries, total=self.total_entries
                )

        self.store.commit()
        if not self.cancel_requested:
            self.progress = 1.0
        self.logger.info(
            "Block migration finished",
            processed=self.migrated_entries,
            failed=failed,
            total=self.total_entries,
        )

    def migrate_entry(self, entry: KnowledgeEntry) -> list[ContentBlock]:
        """Parse entry.content and attach the resulting blocks. Does not commit.

        No-op for entries that are already converted. If attaching fails part
        way, the attached blocks are removed again and the error re-raised.
        """
        if entry.is_converted:
            return []

        rows = [ContentBlock.from_parsed(b) for b in parse_blocks(entry.content, entry.id)]
        attached: list[ContentBlock] = []
        try:
            for row in rows:
                self.store.insert_owned(row, entry)
                attached.append(row)
        except Exception:
            for row in attached:
                self.store.delete_owned(row)
            entry.blocks = []
            raise

        entry.is_converted = True
        entry.touch()
        self.logger.debug("Migrated entry", entry_id=entry.id, title=entry.title, blocks=len(rows))
        return rows

    def migrate_by_id(self, entry_id: str) -> KnowledgeEntry:
        """Convert one unconverted entry and commit immediately."""
        entry = self.store.fetch_unconverted_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        self.migrate_entry(entry)
        self.store.commit()
        return entry

    def rollback(self, entry: KnowledgeEntry) -> None:
        """Drop an entry's blocks and mark it unconverted; raw content is untouched."""
        if not entry.is_converted:
            return

        for block in list(entry.blocks):
            self.store.delete_owned(block)
        entry.blocks = []
        entry.is_converted = False
        entry.touch()
        self.store.commit()
        self.logger.info("Rolled back entry", entry_id=entry.id, title=entry.title)
