"""Line-oriented parsing of flat text entries into ordered blocks, plus file import helpers"""

import re
from pathlib import Path
from typing import Any, Optional

import yaml

from cortex.core.models import BlockMetadata, BlockType, ParsedBlock


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
CHECKLIST_RE   = re.compile(r'^-\s\[([xX\s])\]\s')
NUMBERED_RE    = re.compile(r'^\d+\.\s')

FENCE          = "```"
BULLET_MARKERS = ("- ", "* ")
QUOTE_MARKER   = "> "
DIVIDERS       = {"---", "***", "___"}
ENTRY_EXTENSIONS = {'.md', '.mdx', '.txt'}


def _heading(line: str) -> tuple[BlockType, str]:
    """Classify a '#'-prefixed line; more than six '#' falls back to text."""
    level = len(line) - len(line.lstrip('#'))
    block_type = BlockType.heading(level)
    if block_type is None:
        return BlockType.text, line
    return block_type, line[level:].strip()


def _code_block(lines: list[str], start: int) -> tuple[str, Optional[str], int]:
    """Consume a fenced code run starting at lines[start].

    Returns (body, language, index of the closing fence). The closing index
    is len(lines) when the fence is never closed.
    """
    language = lines[start].strip()[len(FENCE):].strip() or None
    body: list[str] = []
    i = start + 1
    while i < len(lines) and lines[i].strip() != FENCE:
        body.append(lines[i])
        i += 1
    return "\n".join(body), language, i


def _classify(line: str) -> tuple[BlockType, str, BlockMetadata]:
    """Classify a single trimmed, non-fence line. First match wins."""
    if line.startswith('#'):
        block_type, content = _heading(line)
        return block_type, content, BlockMetadata()

    if m := CHECKLIST_RE.match(line):
        return BlockType.check_list, line[m.end():], BlockMetadata(is_checked=m.group(1) in "xX")

    if line.startswith(BULLET_MARKERS):
        return BlockType.bullet_list, line[2:], BlockMetadata()

    if m := NUMBERED_RE.match(line):
        return BlockType.numbered_list, line[m.end():], BlockMetadata()

    if line.startswith(QUOTE_MARKER):
        return BlockType.quote, line[2:], BlockMetadata()

    if line in DIVIDERS:
        return BlockType.divider, "", BlockMetadata()

    return BlockType.text, line, BlockMetadata()


def parse_blocks(text: str, entry_id: str) -> list[ParsedBlock]:
    """Parse flat text into ordered blocks owned by entry_id.

    Blank lines are skipped and take no order slot. Never fails: input that
    yields no blocks becomes a single text block holding the original text.
    """
    lines = text.splitlines()
    blocks: list[ParsedBlock] = []

    i = 0
    while i < len(lines):
        line = lines[i].strip()
        if not line:
            i += 1
            continue

        if line.startswith(FENCE):
            content, language, i = _code_block(lines, i)
            metadata = BlockMetadata(language=language)
            block_type = BlockType.code
        else:
            block_type, content, metadata = _classify(line)

        blocks.append(ParsedBlock(
            type=block_type,
            content=content,
            metadata=metadata,
            order=len(blocks),
            entry_id=entry_id,
        ))
        i += 1

    if not blocks:
        blocks.append(ParsedBlock(type=BlockType.text, content=text, order=0, entry_id=entry_id))
    return blocks


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def _title_from(body: str, fallback: str) -> str:
    """First heading's text, else the fallback."""
    for line in body.splitlines():
        line = line.strip()
        if line.startswith('#'):
            block_type, content = _heading(line)
            if block_type != BlockType.text and content:
                return content
    return fallback


def discover_files(path: Path) -> list[Path]:
    """Return sorted importable files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in ENTRY_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in ENTRY_EXTENSIONS)


def read_entry_file(path: Path) -> tuple[str, str, list[str]]:
    """Read a text file as a legacy entry. Returns (title, content, tags).

    Title comes from frontmatter 'title', then the first heading, then the
    file stem. Frontmatter 'tags' are returned when present.
    """
    raw = path.read_text(encoding='utf-8')
    frontmatter, body = _strip_frontmatter(raw)
    title = frontmatter.get('title') or _title_from(body, path.stem)
    tags = frontmatter.get('tags') or []
    if isinstance(tags, str):
        tags = [tags]
    return str(title), body, [str(t) for t in tags]
