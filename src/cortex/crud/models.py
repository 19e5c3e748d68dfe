"""Database table definitions for knowledge entries and their content blocks"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlmodel import Field, Relationship, SQLModel

from cortex.core.export import block_to_markdown
from cortex.core.models import BlockMetadata, BlockType, ParsedBlock


class KnowledgeEntry(SQLModel, table=True):
    """A knowledge entry; raw content stays the source of truth after conversion"""
    __tablename__ = "entries"
    id: str = Field(default_factory=lambda: str(uuid4()), sa_column=Column(String(64), primary_key=True))
    title: str = Field(..., nullable=False)
    content: str = Field(..., sa_column=Column(Text, nullable=False))
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_converted: bool = Field(default=False, index=True, nullable=False)
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    modified_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    blocks: List["ContentBlock"] = Relationship(
        back_populates="entry",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ContentBlock.order"},
    )

    def touch(self) -> None:
        self.modified_at = datetime.now()

    def sorted_blocks(self) -> list["ContentBlock"]:
        return sorted(self.blocks, key=lambda b: b.order)

    def content_text(self) -> str:
        """Markdown rendered from blocks when converted, else the raw content."""
        if self.is_converted and self.blocks:
            return "\n".join(b.to_markdown() for b in self.sorted_blocks())
        return self.content


class ContentBlock(SQLModel, table=True):
    """A persisted block, owned exclusively by one entry"""
    __tablename__ = "content_blocks"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    entry_id: str = Field(..., foreign_key="entries.id", index=True, nullable=False)
    type: BlockType = Field(..., nullable=False, description="Block type (heading1, code, checkList, etc.)")
    content: str = Field(default="", sa_column=Column(Text, nullable=False))
    order: int = Field(..., nullable=False, description="Zero-based position within the entry")
    language: Optional[str] = Field(default=None, description="Fence language; code blocks only")
    is_checked: Optional[bool] = Field(default=None, description="Checked state; check-list blocks only")
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    modified_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    entry: Optional[KnowledgeEntry] = Relationship(back_populates="blocks")

    @classmethod
    def from_parsed(cls, block: ParsedBlock) -> "ContentBlock":
        """Build a row from a parsed block, keeping its id and order."""
        return cls(
            id=block.id,
            entry_id=block.entry_id,
            type=block.type,
            content=block.content,
            order=block.order,
            language=block.metadata.language,
            is_checked=block.metadata.is_checked,
        )

    @property
    def block_metadata(self) -> BlockMetadata:
        return BlockMetadata(language=self.language, is_checked=self.is_checked)

    def to_parsed(self) -> ParsedBlock:
        return ParsedBlock(
            id=self.id,
            type=self.type,
            content=self.content,
            metadata=self.block_metadata,
            order=self.order,
            entry_id=self.entry_id,
        )

    def to_markdown(self) -> str:
        return block_to_markdown(self.type, self.content, self.block_metadata)
