"""Search result types plus aggregation, pagination and truncation."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence, TypeVar

T = TypeVar("T")


# ==============================================================================
# RESULT TYPES
# ==============================================================================


@dataclass(frozen=True)
class ContextLine:
    number: int
    text: str
    is_match: bool

    def as_payload(self) -> dict[str, Any]:
        return {"number": self.number, "text": self.text, "is_match": self.is_match}


@dataclass(frozen=True)
class MatchContext:
    """Surrounding lines of a match plus the highlighted matched line."""

    lines: tuple[ContextLine, ...]
    highlighted: str

    def as_payload(self) -> dict[str, Any]:
        return {
            "lines": [line.as_payload() for line in self.lines],
            "highlighted": self.highlighted,
        }


@dataclass(frozen=True)
class SearchMatch:
    """A matching line: 1-based line number and trimmed text."""

    line: int
    content: str
    context: Optional[MatchContext] = None

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"line": self.line, "content": self.content}
        if self.context is not None:
            payload["context"] = self.context.as_payload()
        return payload


@dataclass(frozen=True)
class FileMatches:
    path: str
    matches: tuple[SearchMatch, ...]
    partial_file: bool = False

    @property
    def match_count(self) -> int:
        return len(self.matches)

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "path": self.path,
            "match_count": self.match_count,
            "matches": [match.as_payload() for match in self.matches],
        }
        if self.partial_file:
            payload["partial_file"] = True
        return payload


@dataclass(frozen=True)
class Pagination:
    total: int
    returned: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + self.returned < self.total

    def as_payload(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "returned": self.returned,
            "limit": self.limit,
            "offset": self.offset,
            "has_more": self.has_more,
        }


@dataclass(frozen=True)
class SearchResults:
    """Per-file matches of one search call.

    ``files``, ``total_matches`` and ``file_count`` describe what is returned;
    ``pagination.total`` (when paginated) counts every match found.
    """

    files: tuple[FileMatches, ...]
    files_searched: int
    pagination: Optional[Pagination] = None
    truncated: bool = False
    message: Optional[str] = None
    total_matches: int = field(init=False)
    file_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_matches", sum(item.match_count for item in self.files))
        object.__setattr__(self, "file_count", len(self.files))

    def iter_matches(self) -> Iterator[tuple[str, SearchMatch]]:
        """Yield ``(path, match)`` pairs in file order, then line order."""
        for file_matches in self.files:
            for match in file_matches.matches:
                yield file_matches.path, match

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "files": [item.as_payload() for item in self.files],
            "total_matches": self.total_matches,
            "file_count": self.file_count,
            "files_searched": self.files_searched,
        }
        if self.pagination is not None:
            payload["pagination"] = self.pagination.as_payload()
        if self.truncated:
            payload["truncated"] = True
            payload["message"] = self.message
        return payload


# ==============================================================================
# AGGREGATION
# ==============================================================================


def build_search_results(file_matches: Sequence[FileMatches], files_searched: int) -> SearchResults:
    """Combine per-file matches, dropping files without matches."""
    return SearchResults(
        files=tuple(item for item in file_matches if item.matches),
        files_searched=files_searched,
    )


def paginate_array(items: Sequence[T], limit: int, offset: int = 0) -> tuple[list[T], Pagination]:
    """Slice ``items`` to one page.

    Raises:
        ValueError: If ``limit`` is not positive or ``offset`` is negative.
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if offset < 0:
        raise ValueError("offset cannot be negative")

    page = list(items[offset:offset + limit])
    return page, Pagination(total=len(items), returned=len(page), limit=limit, offset=offset)


def paginate_search_results(results: SearchResults, limit: int, offset: int = 0) -> SearchResults:
    """Return one page of matches, regrouped by file.

    All matches are flattened in file order then line order, sliced to
    ``[offset, offset + limit)`` and regrouped into their files so that
    consecutive pages are disjoint and together cover every match once.
    """
    flattened = list(results.iter_matches())
    page, pagination = paginate_array(flattened, limit, offset)

    grouped: dict[str, list[SearchMatch]] = {}
    for path, match in page:
        grouped.setdefault(path, []).append(match)

    return SearchResults(
        files=tuple(FileMatches(path=path, matches=tuple(matches)) for path, matches in grouped.items()),
        files_searched=results.files_searched,
        pagination=pagination,
    )


def limit_search_results(results: SearchResults, max_results: int) -> SearchResults:
    """Cap the number of matches, splitting the file that crosses the limit.

    Whole files are kept while they fit. The first file that does not fit is
    cut to the remaining quota and flagged ``partial_file``. Results at or under
    the limit are returned unchanged.

    Raises:
        ValueError: If ``max_results`` is not positive.
    """
    if max_results < 1:
        raise ValueError("max_results must be at least 1")

    if results.total_matches <= max_results:
        return results

    kept: list[FileMatches] = []
    match_count = 0
    for file_matches in results.files:
        if match_count >= max_results:
            break

        remaining = max_results - match_count
        if file_matches.match_count <= remaining:
            kept.append(file_matches)
            match_count += file_matches.match_count
        else:
            kept.append(
                replace(file_matches, matches=file_matches.matches[:remaining], partial_file=True)
            )
            match_count += remaining

    return SearchResults(
        files=tuple(kept),
        files_searched=results.files_searched,
        truncated=True,
        message=f"Results limited to {max_results} matches",
    )
