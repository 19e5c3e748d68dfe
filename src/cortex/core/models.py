"""Block model: typed, ordered units of a parsed document"""

from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BlockType(str, Enum):
    """Closed set of block types the line parser can produce"""
    text = "text"
    heading1 = "heading1"
    heading2 = "heading2"
    heading3 = "heading3"
    heading4 = "heading4"
    heading5 = "heading5"
    heading6 = "heading6"
    bullet_list = "bulletList"
    numbered_list = "numberedList"
    check_list = "checkList"
    code = "code"
    quote = "quote"
    divider = "divider"

    @classmethod
    def heading(cls, level: int) -> Optional["BlockType"]:
        """Return the heading type for level 1-6, else None."""
        if 1 <= level <= 6:
            return cls(f"heading{level}")
        return None

    @property
    def heading_level(self) -> Optional[int]:
        """Heading level (1-6) for heading types, None otherwise."""
        if self.value.startswith("heading"):
            return int(self.value[-1])
        return None


class BlockMetadata(BaseModel):
    """Auxiliary per-type fields: language for code, is_checked for check-list items."""
    model_config = ConfigDict(frozen=True)

    language:   Optional[str]  = None
    is_checked: Optional[bool] = None


class ParsedBlock(BaseModel):
    """One unit of parsed content, as produced by the line parser.

    order is assigned by the parser and never recomputed. entry_id is a
    back-reference to the owning entry only; blocks have no lifecycle of
    their own.
    """
    model_config = ConfigDict(frozen=True)

    id:       UUID = Field(default_factory=uuid4)
    type:     BlockType
    content:  str = ""
    metadata: BlockMetadata = Field(default_factory=BlockMetadata)
    order:    int = Field(..., ge=0)
    entry_id: str

    @model_validator(mode="after")
    def _check_metadata(self) -> "ParsedBlock":
        if self.metadata.language is not None and self.type != BlockType.code:
            raise ValueError(f"language is only valid on code blocks, not {self.type.value}")
        if (self.metadata.is_checked is not None) != (self.type == BlockType.check_list):
            raise ValueError("is_checked must be set on check-list blocks and only there")
        if self.type == BlockType.divider and self.content:
            raise ValueError("divider blocks carry no content")
        return self
