"""Render blocks back into the line-oriented markdown grammar"""

from typing import Iterable

from cortex.core.models import BlockMetadata, BlockType, ParsedBlock


_PREFIXES: dict[BlockType, str] = {
    BlockType.bullet_list:   "- ",
    BlockType.numbered_list: "1. ",
    BlockType.quote:         "> ",
}


def block_to_markdown(block_type: BlockType, content: str, metadata: BlockMetadata) -> str:
    """Return the markdown line(s) for a single block."""
    level = block_type.heading_level
    if level:
        return f"{'#' * level} {content}"
    if block_type == BlockType.check_list:
        mark = "x" if metadata.is_checked else " "
        return f"- [{mark}] {content}"
    if block_type == BlockType.code:
        return f"```{metadata.language or ''}\n{content}\n```"
    if block_type == BlockType.divider:
        return "---"
    return _PREFIXES.get(block_type, "") + content


def render_markdown(blocks: Iterable[ParsedBlock]) -> str:
    """Join blocks in order into a markdown document, one block per line."""
    return "\n".join(
        block_to_markdown(b.type, b.content, b.metadata)
        for b in sorted(blocks, key=lambda b: b.order)
    )
