"""Evaluate parsed query expressions against a note."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from obsidian_fs.core.query_parser import (
    AndNode,
    ExpressionNode,
    FieldNode,
    NotNode,
    OrNode,
    TermNode,
)


@dataclass(frozen=True)
class DocumentMetadata:
    """Attributes a query can address besides the raw content."""

    title: str = ""
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class _Haystack:
    content: str
    title: str
    tags: tuple[str, ...]

    @classmethod
    def build(cls, content: str, metadata: Optional[DocumentMetadata]) -> "_Haystack":
        metadata = metadata or DocumentMetadata()
        return cls(
            content=(content or "").lower(),
            title=(metadata.title or "").lower(),
            tags=tuple(tag.lower() for tag in metadata.tags),
        )

    def in_tags(self, needle: str) -> bool:
        return any(needle in tag for tag in self.tags)


def _evaluate(node: ExpressionNode, haystack: _Haystack) -> bool:
    if isinstance(node, TermNode):
        needle = node.value.lower()
        return needle in haystack.content or needle in haystack.title or haystack.in_tags(needle)

    if isinstance(node, FieldNode):
        needle = node.value.lower()
        if node.field == "title":
            return needle in haystack.title
        if node.field == "content":
            return needle in haystack.content
        if node.field == "tag":
            return haystack.in_tags(needle)
        return False

    if isinstance(node, AndNode):
        left = _evaluate(node.left, haystack)
        right = _evaluate(node.right, haystack)
        return left and right

    if isinstance(node, OrNode):
        left = _evaluate(node.left, haystack)
        right = _evaluate(node.right, haystack)
        return left or right

    if isinstance(node, NotNode):
        return not _evaluate(node.operand, haystack)

    raise TypeError(f"Unsupported expression node: {node!r}")


def evaluate_expression(
    expression: Optional[ExpressionNode],
    content: str,
    metadata: Optional[DocumentMetadata] = None,
) -> bool:
    """Decide whether a whole note satisfies ``expression``.

    Matching is case-insensitive substring containment. Bare terms match the
    content, the title or any tag; ``title:``, ``content:`` and ``tag:`` restrict
    the match to that attribute and unknown fields never match.

    Args:
        expression: Root node from :func:`parse_search_query`, or ``None``.
        content: Raw note text.
        metadata: Title and tags of the note.

    Returns:
        ``True`` if the note matches. ``None`` expressions match every note.
    """
    if expression is None:
        return True
    return _evaluate(expression, _Haystack.build(content, metadata))


def extract_positive_terms(expression: Optional[ExpressionNode]) -> list[str]:
    """Collect the values of term and field leaves not under a ``NOT``.

    Negated values describe content that must be absent, so they are never
    used to pick or highlight lines.
    """
    if expression is None:
        return []
    if isinstance(expression, (TermNode, FieldNode)):
        return [expression.value]
    if isinstance(expression, (AndNode, OrNode)):
        return extract_positive_terms(expression.left) + extract_positive_terms(expression.right)
    return []
