"""Record-store interface consumed by the migration engine"""

from abc import ABC, abstractmethod

from cortex.crud.models import ContentBlock, KnowledgeEntry


class EntryStore(ABC):
    @abstractmethod
    def fetch_unconverted(self) -> list[KnowledgeEntry]:
        """All entries with is_converted == False, in store order."""
        raise NotImplementedError

    @abstractmethod
    def fetch_unconverted_by_id(self, entry_id: str) -> KnowledgeEntry | None:
        raise NotImplementedError

    @abstractmethod
    def insert_owned(self, block: ContentBlock, entry: KnowledgeEntry) -> None:
        """Attach a newly created block to entry."""
        raise NotImplementedError

    @abstractmethod
    def delete_owned(self, block: ContentBlock) -> None:
        """Remove a previously attached block."""
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """Durably persist all pending changes. Raises StoreError on failure."""
        raise NotImplementedError
