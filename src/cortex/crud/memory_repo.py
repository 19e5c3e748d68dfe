from dataclasses import dataclass, field

from cortex.crud.models import ContentBlock, KnowledgeEntry
from cortex.crud.repo import EntryStore


@dataclass
class MemoryEntryStore(EntryStore):
    _entries: dict[str, KnowledgeEntry] = field(default_factory=dict)
    commits: int = 0

    def add(self, entry: KnowledgeEntry) -> KnowledgeEntry:
        self._entries[entry.id] = entry
        return entry

    def get(self, entry_id: str) -> KnowledgeEntry | None:
        return self._entries.get(entry_id)

    def all(self) -> list[KnowledgeEntry]:
        return list(self._entries.values())

    def fetch_unconverted(self) -> list[KnowledgeEntry]:
        return [e for e in self._entries.values() if not e.is_converted]

    def fetch_unconverted_by_id(self, entry_id: str) -> KnowledgeEntry | None:
        entry = self._entries.get(entry_id)
        return entry if entry is not None and not entry.is_converted else None

    def insert_owned(self, block: ContentBlock, entry: KnowledgeEntry) -> None:
        entry.blocks.append(block)

    def delete_owned(self, block: ContentBlock) -> None:
        entry = self._entries.get(block.entry_id)
        if entry is not None and block in entry.blocks:
            entry.blocks.remove(block)

    def commit(self) -> None:
        self.commits += 1
