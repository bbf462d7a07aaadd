"""Core vault operations: sandboxed paths, note discovery and size-checked reads."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from obsidian_fs.constants import NOTE_EXTENSION
from obsidian_fs.data_models import VaultMetadata

logger = logging.getLogger(__name__)

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def construct_note_path(identifier: str) -> Path:
    """Construct a relative Path from a pre-validated note identifier.

    The identifier has already been validated by a Pydantic input model
    (stripped, no ``.md`` suffix, no traversal segments, relative).

    Examples:
        >>> construct_note_path("My Note")
        PosixPath('My Note.md')
        >>> construct_note_path("Folder/My Note")
        PosixPath('Folder/My Note.md')
    """
    parts = identifier.split("/")
    leaf_with_extension = f"{parts[-1]}{NOTE_EXTENSION}"

    if len(parts) == 1:
        return Path(leaf_with_extension)
    return Path(*parts[:-1]) / leaf_with_extension


def _within(candidate: Path, root: Path) -> bool:
    return candidate == root or candidate.is_relative_to(root)


def resolve_note_path(vault: VaultMetadata, title: str) -> Path:
    """Resolve a pre-validated note identifier to an absolute vault path.

    Raises:
        ValueError: If the resolved path escapes the vault root (filesystem check).
    """
    relative = construct_note_path(title)

    candidate = (vault.path / relative).resolve(strict=False)
    vault_root = vault.path.resolve(strict=False)

    # Symlinks can still point outside the vault after input validation.
    if not _within(candidate, vault_root):
        raise ValueError("Note path escapes the configured vault.")

    return candidate


def resolve_folder_path(vault: VaultMetadata, folder_path: Optional[str]) -> Path:
    """Resolve a folder path within the vault, enforcing sandbox constraints.

    An empty or missing ``folder_path`` resolves to the vault root.

    Raises:
        ValueError: If the folder escapes the vault boundaries.
        FileNotFoundError: If the folder does not exist.
    """
    vault_root = vault.path.resolve(strict=False)
    if not folder_path:
        return vault_root

    candidate = (vault.path / Path(folder_path)).resolve(strict=False)
    if not _within(candidate, vault_root):
        raise ValueError(f"Folder '{folder_path}' escapes vault '{vault.name}'.")
    if not candidate.is_dir():
        raise FileNotFoundError(f"Folder '{folder_path}' not found in vault '{vault.name}'.")
    return candidate


def note_display_name(vault: VaultMetadata, path: Path) -> str:
    """Vault-relative, forward-slash path of a note, including ``.md``."""
    relative = path.relative_to(vault.path.resolve(strict=False))
    return relative.as_posix()


def list_markdown_files(vault: VaultMetadata, folder_path: Optional[str] = None) -> list[Path]:
    """Every markdown file under ``folder_path``, sorted by vault-relative path.

    The stable order keeps paginated results consistent across calls.
    """
    ensure_vault_ready(vault)
    root = resolve_folder_path(vault, folder_path)
    files = [path for path in root.rglob(f"*{NOTE_EXTENSION}") if path.is_file()]
    files.sort(key=lambda path: note_display_name(vault, path))
    return files


def format_file_size(size: int) -> str:
    """Human readable byte count, e.g. ``1.50 MB``."""
    if size < 0:
        return "Invalid size"

    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.2f} {_SIZE_UNITS[unit_index]}"


def ensure_file_size(path: Path, max_size: int) -> None:
    """Raise ``ValueError`` when ``path`` is larger than ``max_size`` bytes."""
    size = path.stat().st_size
    if size > max_size:
        raise ValueError(
            f"File too large: {format_file_size(size)} exceeds maximum allowed size "
            f"of {format_file_size(max_size)}"
        )


def read_markdown(path: Path, max_size: int) -> str:
    """Read a note after checking it against the size limit.

    Raises:
        ValueError: If the file exceeds ``max_size``.
        OSError: If the file cannot be read.
    """
    ensure_file_size(path, max_size)
    return path.read_text(encoding="utf-8", errors="replace")


def sanitize_content(content: str) -> str:
    """Remove null bytes before writing note content."""
    return content.replace("\0", "")
