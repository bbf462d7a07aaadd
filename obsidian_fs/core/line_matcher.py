"""Locate matching lines inside a note for plain and operator queries."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from obsidian_fs.core.note_metadata import find_h1_line
from obsidian_fs.core.query_evaluator import (
    DocumentMetadata,
    evaluate_expression,
    extract_positive_terms,
)
from obsidian_fs.core.query_parser import ExpressionNode, FieldNode, parse_search_query
from obsidian_fs.core.search_context import ContextOptions, annotate_matches
from obsidian_fs.core.search_results import FileMatches, SearchMatch

# Boolean keywords, field separators, negation, grouping or quotes switch a
# query from plain substring matching to the operator engine.
_OPERATOR_PATTERN = re.compile(r'\b(?:AND|OR|NOT)\b|&&|\|\||[:\-()"]')


@dataclass(frozen=True)
class Document:
    """A note loaded into memory: vault-relative path, raw text and metadata."""

    path: str
    content: str
    metadata: DocumentMetadata = DocumentMetadata()


def has_query_operators(query: str) -> bool:
    """Return ``True`` when ``query`` uses any operator syntax."""
    return bool(_OPERATOR_PATTERN.search(query or ""))


def _all_lines(lines: list[str]) -> list[SearchMatch]:
    return [SearchMatch(line=index + 1, content=line.strip()) for index, line in enumerate(lines)]


def find_matches_in_content(
    content: str,
    query: str,
    case_sensitive: bool = False,
    context: Optional[ContextOptions] = None,
) -> list[SearchMatch]:
    """Return every line of ``content`` containing ``query`` as a substring.

    An empty query matches every line; empty content matches nothing.
    """
    if not content:
        return []

    lines = content.split("\n")
    if not query:
        return _all_lines(lines)

    needle = query if case_sensitive else query.lower()
    matches = [
        SearchMatch(line=index + 1, content=line.strip())
        for index, line in enumerate(lines)
        if needle in (line if case_sensitive else line.lower())
    ]

    if context is not None:
        matches = annotate_matches(matches, lines, query, context, case_sensitive)
    return matches


def find_matches_with_expression(
    content: str,
    expression: Optional[ExpressionNode],
    metadata: Optional[DocumentMetadata] = None,
    case_sensitive: bool = False,
    context: Optional[ContextOptions] = None,
) -> list[SearchMatch]:
    """Return the lines of a note that satisfy a parsed query.

    The whole note is classified first. A note that does not match yields no
    lines. A bare ``title:`` query yields the first H1 heading, a bare ``tag:``
    query yields one summary line, and any other query yields every line
    containing at least one non-negated term.
    """
    if not content:
        return []

    lines = content.split("\n")
    if expression is None:
        return _all_lines(lines)

    if not evaluate_expression(expression, content, metadata):
        return []

    if isinstance(expression, FieldNode) and expression.field == "tag":
        # Tags have no single source line.
        return [SearchMatch(line=1, content=f"[Document matches tag: {expression.value}]")]

    if isinstance(expression, FieldNode) and expression.field == "title":
        heading_index = find_h1_line(lines)
        matches = []
        if heading_index is not None:
            matches.append(SearchMatch(line=heading_index + 1, content=lines[heading_index].strip()))
        terms = [expression.value]
    else:
        terms = extract_positive_terms(expression)
        needles = terms if case_sensitive else [term.lower() for term in terms]
        matches = []
        for index, line in enumerate(lines):
            haystack = line if case_sensitive else line.lower()
            if any(needle in haystack for needle in needles):
                matches.append(SearchMatch(line=index + 1, content=line.strip()))

    if context is not None:
        matches = annotate_matches(matches, lines, terms, context, case_sensitive)
    return matches


def find_matches_with_operators(
    content: str,
    query: str,
    metadata: Optional[DocumentMetadata] = None,
    case_sensitive: bool = False,
    context: Optional[ContextOptions] = None,
) -> list[SearchMatch]:
    """Parse ``query`` and delegate to :func:`find_matches_with_expression`.

    Raises:
        QuerySyntaxError: If ``query`` is malformed.
    """
    expression = parse_search_query(query)
    return find_matches_with_expression(content, expression, metadata, case_sensitive, context)


def search_plain(
    corpus: Iterable[Document],
    query: str,
    case_sensitive: bool = False,
    context: Optional[ContextOptions] = None,
) -> list[FileMatches]:
    """Plain substring search over in-memory documents, in corpus order."""
    results: list[FileMatches] = []
    for document in corpus:
        matches = find_matches_in_content(document.content, query, case_sensitive, context)
        if matches:
            results.append(FileMatches(path=document.path, matches=tuple(matches)))
    return results


def search_expression(
    corpus: Iterable[Document],
    query: str,
    case_sensitive: bool = False,
    context: Optional[ContextOptions] = None,
) -> list[FileMatches]:
    """Operator search over in-memory documents, parsing ``query`` once.

    Raises:
        QuerySyntaxError: If ``query`` is malformed.
    """
    expression = parse_search_query(query)
    results: list[FileMatches] = []
    for document in corpus:
        matches = find_matches_with_expression(
            document.content, expression, document.metadata, case_sensitive, context
        )
        if matches:
            results.append(FileMatches(path=document.path, matches=tuple(matches)))
    return results
