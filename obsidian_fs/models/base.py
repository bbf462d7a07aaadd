"""Base Pydantic models for MCP tool input validation.

This module defines base models that provide common validation patterns
for vault-scoped and note-scoped operations. Other input models inherit
from these bases.

Base Models:
- VaultScopedInput: Optional vault name, shared by every vault operation
- DirectoryScopedInput: Adds an optional folder restriction
- BaseNoteInput: Adds note identifier validation
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator


def _check_relative_segments(cleaned: str, label: str) -> None:
    parts = cleaned.split("/")
    if any(part in {".", ".."} for part in parts):
        raise ValueError(
            f"{label} cannot contain '.' or '..' path segments. "
            "These are not allowed for security reasons. "
            f"Invalid value: '{cleaned}'"
        )


def normalize_note_title(v: str) -> str:
    """Validate a note identifier and strip an optional ``.md`` suffix.

    Enforces:
    - Non-empty title
    - No path traversal attempts (.., .)
    - Relative path only (no absolute paths)
    - Strips .md extension if present (normalized internally)

    Raises:
        ValueError: If title contains invalid characters or patterns
    """
    cleaned = v.strip()

    if not cleaned:
        raise ValueError(
            "Note title cannot be empty. "
            "Provide a valid note identifier like 'Daily Notes/2025-10-27'."
        )

    if cleaned.startswith("/"):
        raise ValueError(
            "Note title must be a relative path within the vault. "
            "Do not start with '/'. "
            f"Invalid title: '{cleaned}'"
        )

    _check_relative_segments(cleaned, "Note title")

    # Accept the .md extension on input; core operations add it back.
    if cleaned.lower().endswith(".md"):
        cleaned = cleaned[:-3]

    if not cleaned or cleaned.endswith("/"):
        raise ValueError(
            "Note title must name a note, not just '.md' or a folder. "
            "Provide a valid note name."
        )

    return cleaned


class VaultScopedInput(BaseModel):
    """Base model carrying the optional vault name."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list_vaults() to discover available vaults."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Validate vault name format.

        Raises:
            ValueError: If vault name is empty string
        """
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the active vault, "
                "or provide a valid vault name from list_vaults()."
            )

        return v.strip() if v else None


class DirectoryScopedInput(VaultScopedInput):
    """Vault-scoped input that can be restricted to a folder."""

    directory: Optional[str] = Field(
        None,
        description=(
            "Folder relative to the vault root (omit to cover the whole vault). "
            "Examples: 'Projects', 'Daily Notes/2025'."
        )
    )

    @field_validator('directory')
    @classmethod
    def validate_directory(cls, v: Optional[str]) -> Optional[str]:
        """Normalize the folder path and reject traversal or absolute paths."""
        if v is None:
            return None

        cleaned = v.strip()
        if cleaned.startswith("/"):
            raise ValueError(
                "Directory must be a relative path within the vault. "
                f"Invalid directory: '{cleaned}'"
            )

        cleaned = cleaned.strip("/")
        if not cleaned:
            return None

        _check_relative_segments(cleaned, "Directory")
        return cleaned


class BaseNoteInput(VaultScopedInput):
    """Base model for note operations with common validation.

    Provides standard validation for note identifiers and vault names.
    All note-related input models should inherit from this class.
    """

    title: str = Field(
        min_length=1,
        description=(
            "Note path relative to the vault root; the .md extension is optional. "
            "Examples: 'Daily Notes/2025-10-27', 'Projects/New Project.md'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["Daily Notes/2025-10-27", "Projects/Roadmap.md", "README"]
    )

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate note title for safety and format."""
        return normalize_note_title(v)
