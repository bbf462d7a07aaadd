"""Pydantic input models for MCP tool validation.

Each model represents the input schema of one MCP tool, with field-level
validation, type checking, and descriptive error messages. FastMCP derives
the JSON schema advertised to clients from these models.

Architecture:
- base: Shared validation (vault name, directory, note identifier)
- note_models: Note read/write/delete/list
- search_models: Content, title and tag search
- metadata_models: Note metadata and MOC discovery
- vault_models: Vault listing and session selection

Usage:
    from obsidian_fs.models import SearchVaultInput, ReadNoteInput
"""

from .base import BaseNoteInput, DirectoryScopedInput, VaultScopedInput, normalize_note_title
from .note_models import (
    ReadNoteInput,
    WriteNoteInput,
    DeleteNoteInput,
    ListNotesInput,
)
from .search_models import (
    SearchVaultInput,
    SearchByTitleInput,
    SearchByTagsInput,
)
from .metadata_models import (
    GetNoteMetadataInput,
    DiscoverMocsInput,
)
from .vault_models import (
    ListVaultsInput,
    SetActiveVaultInput,
)

__all__ = [
    # Base models
    "BaseNoteInput",
    "DirectoryScopedInput",
    "VaultScopedInput",
    "normalize_note_title",
    # Note models
    "ReadNoteInput",
    "WriteNoteInput",
    "DeleteNoteInput",
    "ListNotesInput",
    # Search models
    "SearchVaultInput",
    "SearchByTitleInput",
    "SearchByTagsInput",
    # Metadata models
    "GetNoteMetadataInput",
    "DiscoverMocsInput",
    # Vault models
    "ListVaultsInput",
    "SetActiveVaultInput",
]
