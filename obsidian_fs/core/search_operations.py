"""Search and discovery operations for notes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Optional

from obsidian_fs.core.line_matcher import (
    Document,
    has_query_operators,
    search_expression,
    search_plain,
)
from obsidian_fs.core.note_metadata import (
    document_metadata,
    extract_h1_title,
    extract_note_metadata,
    extract_tags,
    extract_wikilinks,
    has_all_tags,
    is_moc,
)
from obsidian_fs.core.query_evaluator import DocumentMetadata
from obsidian_fs.core.search_context import ContextOptions
from obsidian_fs.core.search_results import (
    build_search_results,
    limit_search_results,
    paginate_array,
    paginate_search_results,
)
from obsidian_fs.core.vault_operations import (
    ensure_vault_ready,
    list_markdown_files,
    note_display_name,
    read_markdown,
    resolve_note_path,
)
from obsidian_fs.data_models import SearchLimits, VaultMetadata

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _read_for_scan(vault: VaultMetadata, path: Path, limits: SearchLimits) -> Optional[str]:
    """Read a note during a vault scan, returning ``None`` when it must be skipped."""
    try:
        return read_markdown(path, limits.max_file_size)
    except ValueError as exc:
        logger.debug("Skipping '%s' in vault '%s': %s", path, vault.name, exc)
    except OSError as exc:
        logger.warning(
            "Skipping file '%s' in vault '%s' due to read error: %s",
            path,
            vault.name,
            exc,
        )
    return None


def _iter_documents(
    vault: VaultMetadata,
    files: list[Path],
    limits: SearchLimits,
    with_metadata: bool,
) -> Iterator[Document]:
    for path in files:
        content = _read_for_scan(vault, path, limits)
        if content is None:
            continue
        yield Document(
            path=note_display_name(vault, path),
            content=content,
            metadata=document_metadata(content) if with_metadata else DocumentMetadata(),
        )


def _clean_query(query: str) -> str:
    trimmed = (query or "").strip()
    if not trimmed:
        raise ValueError("Search query cannot be empty.")
    return trimmed


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def search_vault(
    vault: VaultMetadata,
    query: str,
    directory: Optional[str] = None,
    case_sensitive: bool = False,
    include_context: bool = True,
    context_lines: Optional[int] = None,
    limit: Optional[int] = None,
    offset: int = 0,
    max_results: Optional[int] = None,
    limits: Optional[SearchLimits] = None,
) -> dict[str, Any]:
    """Search note contents with plain text or boolean operator queries.

    Queries using operator syntax (``AND``, ``OR``, ``NOT``, ``-``, ``field:``,
    quotes or parentheses) are parsed once and evaluated per note; other
    queries are matched as plain substrings line by line.

    Args:
        vault: Vault metadata.
        query: Search query.
        directory: Optional folder to restrict the search.
        case_sensitive: Match case exactly.
        include_context: Attach surrounding lines and highlighting to each match.
        context_lines: Lines of context on each side (defaults to the configured limit).
        limit: Page size (defaults to ``max_search_results``).
        offset: Number of matches to skip.
        max_results: When set, cap the results instead of paginating.
        limits: Size and result limits.

    Returns:
        The serialized :class:`SearchResults` plus ``vault`` and ``query``.

    Raises:
        ValueError: If the query is empty or ``directory`` escapes the vault.
        QuerySyntaxError: If an operator query is malformed.
        FileNotFoundError: If the vault or ``directory`` does not exist.
    """
    limits = limits or SearchLimits()
    trimmed_query = _clean_query(query)

    files = list_markdown_files(vault, directory)
    context = ContextOptions(
        include_context=include_context,
        context_lines=limits.context_lines if context_lines is None else context_lines,
        max_line_length=limits.max_line_length,
    )

    if has_query_operators(trimmed_query):
        file_matches = search_expression(
            _iter_documents(vault, files, limits, with_metadata=True),
            trimmed_query,
            case_sensitive,
            context,
        )
    else:
        file_matches = search_plain(
            _iter_documents(vault, files, limits, with_metadata=False),
            trimmed_query,
            case_sensitive,
            context,
        )

    results = build_search_results(file_matches, files_searched=len(files))
    if max_results is not None:
        results = limit_search_results(results, max_results)
    else:
        results = paginate_search_results(results, limit or limits.max_search_results, offset)

    logger.info(
        "Search '%s' in vault '%s': %d match(es) in %d of %d file(s)",
        trimmed_query,
        vault.name,
        results.total_matches,
        results.file_count,
        results.files_searched,
    )

    payload = results.as_payload()
    payload["vault"] = vault.name
    payload["query"] = trimmed_query
    return payload


def search_by_title(
    vault: VaultMetadata,
    query: str,
    directory: Optional[str] = None,
    case_sensitive: bool = False,
    limit: Optional[int] = None,
    offset: int = 0,
    limits: Optional[SearchLimits] = None,
) -> dict[str, Any]:
    """Find notes whose first H1 heading contains ``query``.

    Returns:
        A dictionary with one ``{"path", "title", "line"}`` entry per matching
        note, the number of files searched and pagination details.
    """
    limits = limits or SearchLimits()
    trimmed_query = _clean_query(query)
    needle = trimmed_query if case_sensitive else trimmed_query.lower()

    files = list_markdown_files(vault, directory)
    matches: list[dict[str, Any]] = []
    for document in _iter_documents(vault, files, limits, with_metadata=False):
        heading = extract_h1_title(document.content)
        if heading is None:
            continue

        title, line = heading
        if needle in (title if case_sensitive else title.lower()):
            matches.append({"path": document.path, "title": title, "line": line})

    page, pagination = paginate_array(matches, limit or limits.max_search_results, offset)
    return {
        "vault": vault.name,
        "query": trimmed_query,
        "results": page,
        "count": len(page),
        "files_searched": len(files),
        "pagination": pagination.as_payload(),
    }


def search_by_tags(
    vault: VaultMetadata,
    tags: list[str],
    directory: Optional[str] = None,
    case_sensitive: bool = False,
    limits: Optional[SearchLimits] = None,
) -> dict[str, Any]:
    """Find notes carrying every tag in ``tags``.

    Both frontmatter ``tags`` and inline ``#tags`` outside code blocks count.

    Raises:
        ValueError: If the tags list is empty or contains only whitespace.
    """
    limits = limits or SearchLimits()
    search_tags = [tag.strip().lstrip("#") for tag in tags if tag.strip().lstrip("#")]
    if not search_tags:
        raise ValueError("Must specify at least one non-empty tag.")

    files = list_markdown_files(vault, directory)
    notes: list[dict[str, Any]] = []
    for document in _iter_documents(vault, files, limits, with_metadata=False):
        note_tags = extract_tags(document.content)
        if has_all_tags(note_tags, search_tags, case_sensitive):
            notes.append({"path": document.path, "tags": note_tags})

    return {
        "vault": vault.name,
        "tags": search_tags,
        "notes": notes,
        "count": len(notes),
    }


# ==============================================================================
# METADATA AND DISCOVERY
# ==============================================================================


def get_note_metadata(
    vault: VaultMetadata,
    title: Optional[str] = None,
    batch: bool = False,
    directory: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
    limits: Optional[SearchLimits] = None,
) -> dict[str, Any]:
    """Extract metadata for one note or for a page of notes.

    In single mode the note named by ``title`` is read; any failure is raised.
    In batch mode the sorted note list under ``directory`` is paginated first
    and only that page is read; per-file failures are collected in ``errors``.

    Raises:
        ValueError: If neither ``title`` nor ``batch`` is given, or the single
            note exceeds the size limit.
        FileNotFoundError: If the single note does not exist.
    """
    limits = limits or SearchLimits()

    if not batch:
        if not title:
            raise ValueError("Either a note title or batch mode must be specified.")

        ensure_vault_ready(vault)
        target_path = resolve_note_path(vault, title)
        if not target_path.is_file():
            raise FileNotFoundError(
                f"Note '{note_display_name(vault, target_path)}' not found in vault '{vault.name}'."
            )
        content = read_markdown(target_path, limits.max_file_size)
        return extract_note_metadata(content, note_display_name(vault, target_path))

    files = list_markdown_files(vault, directory)
    page, pagination = paginate_array(files, limit or limits.metadata_batch_limit, offset)

    notes: list[dict[str, Any]] = []
    errors: list[dict[str, str]] = []
    for path in page:
        display = note_display_name(vault, path)
        try:
            content = read_markdown(path, limits.max_file_size)
        except (OSError, ValueError) as exc:
            errors.append({"path": display, "error": str(exc)})
            continue
        notes.append(extract_note_metadata(content, display))

    return {
        "vault": vault.name,
        "notes": notes,
        "count": len(notes),
        "errors": errors,
        "pagination": pagination.as_payload(),
    }


def discover_mocs(
    vault: VaultMetadata,
    moc_name: Optional[str] = None,
    directory: Optional[str] = None,
    limits: Optional[SearchLimits] = None,
) -> dict[str, Any]:
    """Find Maps of Content (notes tagged ``moc``) and the notes they link to.

    Args:
        vault: Vault metadata.
        moc_name: Only consider notes whose file name or vault-relative path
            (without ``.md``) equals this, e.g. ``Languages MOC`` or
            ``Maps/Languages MOC``.
        directory: Optional folder to restrict discovery.
        limits: Size limits; oversized notes are skipped.

    Returns:
        A dictionary with one entry per MOC: ``path``, ``title`` (first H1 or
        file name), ``tags``, ``linked_notes``, ``link_count`` and
        ``linked_mocs`` (linked notes that are MOCs themselves, matched by
        file name).
    """
    limits = limits or SearchLimits()
    files = list_markdown_files(vault, directory)
    if moc_name:
        files = [
            path
            for path in files
            if moc_name in (path.stem, note_display_name(vault, path).removesuffix(".md"))
        ]

    mocs: list[dict[str, Any]] = []
    for document in _iter_documents(vault, files, limits, with_metadata=False):
        tags = extract_tags(document.content)
        if not is_moc(tags):
            continue

        heading = extract_h1_title(document.content)
        linked_notes = extract_wikilinks(document.content)
        mocs.append(
            {
                "path": document.path,
                "title": heading[0] if heading else Path(document.path).stem,
                "tags": tags,
                "linked_notes": linked_notes,
                "link_count": len(linked_notes),
            }
        )

    moc_names = {Path(moc["path"]).stem for moc in mocs}
    for moc in mocs:
        moc["linked_mocs"] = [
            link for link in moc["linked_notes"]
            if Path(link).name.removesuffix(".md") in moc_names
        ]

    return {
        "vault": vault.name,
        "mocs": mocs,
        "count": len(mocs),
    }
