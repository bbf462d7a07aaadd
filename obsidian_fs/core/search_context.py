"""Context windows and highlighting for search matches."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Sequence, Union

from obsidian_fs.constants import DEFAULT_CONTEXT_LINES, MAX_CONTEXT_LINE_LENGTH
from obsidian_fs.core.search_results import ContextLine, MatchContext, SearchMatch

HIGHLIGHT_MARKER = "**"
ELLIPSIS = "..."


@dataclass(frozen=True)
class ContextWindow:
    """Lines around a match.

    ``start_index`` is the 0-based index of the first line in the file and
    ``match_index`` the position of the match inside ``lines``.
    """

    lines: tuple[str, ...]
    start_index: int
    match_index: int


@dataclass(frozen=True)
class ContextOptions:
    include_context: bool = True
    context_lines: int = DEFAULT_CONTEXT_LINES
    max_line_length: int = MAX_CONTEXT_LINE_LENGTH


def extract_context_lines(
    lines: Sequence[str],
    match_index: int,
    radius: int = DEFAULT_CONTEXT_LINES,
) -> ContextWindow:
    """Return up to ``radius`` lines on each side of ``lines[match_index]``.

    Examples:
        >>> extract_context_lines(["a", "b", "c", "d", "e"], 2, 1)
        ContextWindow(lines=('b', 'c', 'd'), start_index=1, match_index=1)
    """
    if not lines:
        return ContextWindow(lines=(), start_index=0, match_index=0)

    start = max(0, match_index - radius)
    end = min(len(lines) - 1, match_index + radius)
    return ContextWindow(
        lines=tuple(lines[start:end + 1]),
        start_index=start,
        match_index=match_index - start,
    )


def _highlight_pattern(terms: Sequence[str], case_sensitive: bool) -> "re.Pattern[str] | None":
    needles = sorted({term for term in terms if term}, key=len, reverse=True)
    if not needles:
        return None
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile("|".join(re.escape(needle) for needle in needles), flags)


def highlight_terms(line: str, terms: Sequence[str], case_sensitive: bool = False) -> str:
    """Wrap every occurrence of any of ``terms`` in ``**`` markers.

    Terms are matched literally, longest first, in a single left-to-right pass
    so occurrences never overlap or nest.
    """
    if not line:
        return line or ""

    pattern = _highlight_pattern(terms, case_sensitive)
    if pattern is None:
        return line
    return pattern.sub(lambda match: f"{HIGHLIGHT_MARKER}{match.group(0)}{HIGHLIGHT_MARKER}", line)


def highlight_match(line: str, query: str, case_sensitive: bool = False) -> str:
    """Wrap every occurrence of ``query`` in ``line`` with ``**`` markers.

    Examples:
        >>> highlight_match("Price is $10.99", "$10.99")
        'Price is **$10.99**'
    """
    return highlight_terms(line, [query] if query else [], case_sensitive)


def _truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


def format_context_result(
    match: SearchMatch,
    window: ContextWindow,
    query: Union[str, Sequence[str]],
    max_line_length: int = MAX_CONTEXT_LINE_LENGTH,
    case_sensitive: bool = False,
) -> SearchMatch:
    """Attach a context block to ``match``.

    Args:
        match: The match to annotate.
        window: Window produced by :func:`extract_context_lines`.
        query: Plain query or list of terms to highlight.
        max_line_length: Context lines longer than this are cut and end in ``...``.
        case_sensitive: Whether highlighting respects case.

    Returns:
        A copy of ``match`` with ``context`` set.
    """
    terms = [query] if isinstance(query, str) else list(query)

    context_lines = tuple(
        ContextLine(
            number=window.start_index + index + 1,
            text=_truncate(text, max_line_length),
            is_match=index == window.match_index,
        )
        for index, text in enumerate(window.lines)
    )

    matched_line = window.lines[window.match_index] if window.lines else ""
    highlighted = highlight_terms(matched_line, terms, case_sensitive)

    return replace(match, context=MatchContext(lines=context_lines, highlighted=highlighted))


def annotate_matches(
    matches: Sequence[SearchMatch],
    lines: Sequence[str],
    query: Union[str, Sequence[str]],
    options: ContextOptions,
    case_sensitive: bool = False,
) -> list[SearchMatch]:
    """Apply :func:`format_context_result` to every match when context is enabled."""
    if not options.include_context:
        return list(matches)

    return [
        format_context_result(
            match,
            extract_context_lines(lines, match.line - 1, options.context_lines),
            query,
            max_line_length=options.max_line_length,
            case_sensitive=case_sensitive,
        )
        for match in matches
    ]

