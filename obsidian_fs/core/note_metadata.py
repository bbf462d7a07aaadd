"""Metadata extraction for markdown notes: frontmatter, tags, titles and links."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional

import frontmatter
import yaml

from obsidian_fs.constants import MOC_TAG
from obsidian_fs.core.query_evaluator import DocumentMetadata

logger = logging.getLogger(__name__)

H1_PATTERN = re.compile(r"^#\s+(.+)$")
WIKILINK_PATTERN = re.compile(r"\[\[([^\]|]+)(?:\|[^\]]+)?\]\]")
CODE_BLOCK_PATTERN = re.compile(r"```.*?```", re.DOTALL)
# Tag names allow letters, digits, underscore, hyphen, plus, dot and slash.
INLINE_TAG_PATTERN = re.compile(
    r"(?:^|[^#\w])#([A-Za-z0-9_\-+./]+?)(?=[^A-Za-z0-9_\-+/]|$)",
    re.MULTILINE,
)
FRONTMATTER_DELIMITER = "---"
PREVIEW_LENGTH = 200


# ==============================================================================
# FRONTMATTER
# ==============================================================================


def _to_serializable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _to_serializable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_serializable(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter metadata and note body from raw text.

    Args:
        text: Raw markdown text, possibly containing a frontmatter block.

    Returns:
        A tuple of ``(metadata, content)`` where ``metadata`` is the parsed YAML
        dictionary (empty when no frontmatter is present, dates converted to ISO
        strings) and ``content`` is the markdown body without the frontmatter block.

    Raises:
        ValueError: If the frontmatter block exists but cannot be parsed as YAML.
    """
    if not text:
        return {}, ""

    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Frontmatter contains invalid YAML: {exc}") from exc

    metadata = {str(key): _to_serializable(value) for key, value in (post.metadata or {}).items()}
    content = post.content if post.content is not None else ""
    return metadata, content


def _load_frontmatter_leniently(text: str) -> tuple[dict[str, Any], str]:
    try:
        return parse_frontmatter(text)
    except ValueError as exc:
        logger.debug("Ignoring unparsable frontmatter: %s", exc)
        return {}, text


def frontmatter_line_count(lines: list[str]) -> int:
    """Number of leading lines occupied by a ``---`` delimited frontmatter block."""
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return 0
    for index in range(1, len(lines)):
        if lines[index].strip() == FRONTMATTER_DELIMITER:
            return index + 1
    return 0


# ==============================================================================
# TITLES, TAGS AND LINKS
# ==============================================================================


def find_h1_line(lines: list[str]) -> Optional[int]:
    """Index of the first H1 heading after any frontmatter block."""
    for index in range(frontmatter_line_count(lines), len(lines)):
        if H1_PATTERN.match(lines[index].strip()):
            return index
    return None


def extract_h1_title(content: str) -> Optional[tuple[str, int]]:
    """Return ``(title, line_number)`` of the first H1 heading, or ``None``.

    ``line_number`` is 1-based and counts lines of the raw file.
    """
    if not content:
        return None

    lines = content.split("\n")
    index = find_h1_line(lines)
    if index is None:
        return None

    match = H1_PATTERN.match(lines[index].strip())
    return match.group(1).strip(), index + 1


def remove_code_blocks(content: str) -> str:
    return CODE_BLOCK_PATTERN.sub("", content)


def extract_frontmatter_tags(metadata: Mapping[str, Any]) -> list[str]:
    """Read the ``tags`` frontmatter key in either string or list form."""
    raw_tags = metadata.get("tags")
    if isinstance(raw_tags, str):
        candidates = [raw_tags]
    elif isinstance(raw_tags, list):
        candidates = [str(tag) for tag in raw_tags if tag is not None]
    else:
        return []
    return [tag.strip().lstrip("#") for tag in candidates if tag.strip()]


def extract_inline_tags(body: str) -> list[str]:
    """Collect ``#tag`` occurrences outside fenced code blocks, in order."""
    tags: list[str] = []
    for match in INLINE_TAG_PATTERN.finditer(remove_code_blocks(body or "")):
        tag = match.group(1).rstrip(".")
        if tag:
            tags.append(tag)
    return tags


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def extract_tags(content: str) -> list[str]:
    """Unique frontmatter and inline tags of a note, frontmatter first."""
    if not content:
        return []
    metadata, body = _load_frontmatter_leniently(content)
    return _unique(extract_frontmatter_tags(metadata) + extract_inline_tags(body))


def has_all_tags(note_tags: list[str], search_tags: list[str], case_sensitive: bool = False) -> bool:
    """Return ``True`` when every search tag is present on the note."""
    if not search_tags:
        return True

    if case_sensitive:
        available = set(note_tags)
        wanted = search_tags
    else:
        available = {tag.lower() for tag in note_tags}
        wanted = [tag.lower() for tag in search_tags]
    return all(tag in available for tag in wanted)


def extract_wikilinks(content: str) -> list[str]:
    """Unique ``[[target]]`` / ``[[target|alias]]`` link targets in order."""
    if not content:
        return []
    return _unique([match.group(1).strip() for match in WIKILINK_PATTERN.finditer(content)])


def is_moc(tags: list[str]) -> bool:
    """A note is a Map of Content when it carries the ``moc`` tag."""
    return any(tag.lower() == MOC_TAG for tag in tags)


def extract_content_preview(body: str, max_length: int = PREVIEW_LENGTH) -> str:
    """Join non-heading text lines and cut the result to ``max_length``."""
    text_lines = [
        line.strip() for line in (body or "").split("\n")
        if line.strip() and not line.strip().startswith("#")
    ]
    preview = " ".join(text_lines).strip()
    if len(preview) <= max_length:
        return preview
    return preview[:max_length - 3] + "..."


# ==============================================================================
# AGGREGATES
# ==============================================================================


def document_metadata(content: str) -> DocumentMetadata:
    """Title and tags used when evaluating operator queries."""
    title = extract_h1_title(content)
    return DocumentMetadata(
        title=title[0] if title else "",
        tags=tuple(extract_tags(content)),
    )


def extract_note_metadata(content: str, path: str) -> dict[str, Any]:
    """Collect the metadata payload returned by ``get_note_metadata``."""
    metadata, body = _load_frontmatter_leniently(content)
    inline_tags = _unique(extract_inline_tags(body))
    title = extract_h1_title(content)

    return {
        "path": path,
        "frontmatter": metadata,
        "title": title[0] if title else None,
        "title_line": title[1] if title else None,
        "tags": _unique(extract_frontmatter_tags(metadata) + inline_tags),
        "inline_tags": inline_tags,
        "has_content": bool(body.strip()),
        "content_length": len(content),
        "content_preview": extract_content_preview(body),
    }
