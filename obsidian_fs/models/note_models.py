"""Pydantic input models for note CRUD operations.

This module defines input models for basic note management operations:
- Read note content
- Create or overwrite notes
- Delete notes
- List note paths
"""

from __future__ import annotations

from pydantic import Field

from .base import BaseNoteInput, DirectoryScopedInput


class ReadNoteInput(BaseNoteInput):
    """Input model for read_note tool.

    Retrieves complete note content (full markdown). Notes larger than the
    configured size limit are refused.

    Examples:
        >>> ReadNoteInput(title="Daily Notes/2025-10-27")
        >>> ReadNoteInput(title="Projects/My Project.md", vault="work")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"title": "Daily Notes/2025-10-27", "vault": None},
                {"title": "Projects/My Project.md", "vault": "work"}
            ]
        }


class WriteNoteInput(BaseNoteInput):
    """Input model for write_note tool.

    Creates the note or overwrites it when it already exists. Parent folders
    are created automatically.

    Examples:
        >>> WriteNoteInput(title="Projects/New Project", content="# New Project\\n\\nGoals...")
        >>> WriteNoteInput(title="Inbox/blank", content="", vault="personal")
    """

    # Empty content is allowed so that blank notes can be created.
    content: str = Field(
        description=(
            "Full markdown content for the note. "
            "Replaces the existing content if the note already exists."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "title": "Projects/New Project",
                    "content": "# New Project\n\nGoals:\n- Goal 1\n- Goal 2",
                    "vault": None
                }
            ]
        }


class DeleteNoteInput(BaseNoteInput):
    """Input model for delete_note tool.

    Examples:
        >>> DeleteNoteInput(title="Archive/Old Note")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"title": "Archive/Old Note", "vault": None}
            ]
        }


class ListNotesInput(DirectoryScopedInput):
    """Input model for list_notes tool.

    Lists note paths (with .md) in alphabetical order, one page at a time.

    Examples:
        >>> ListNotesInput()
        >>> ListNotesInput(directory="Projects", limit=20, offset=20)
    """

    limit: int = Field(
        100,
        ge=1,
        le=1000,
        description="Maximum number of note paths to return."
    )

    offset: int = Field(
        0,
        ge=0,
        description="Number of note paths to skip (for paging through large vaults)."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"vault": None, "directory": None, "limit": 100, "offset": 0},
                {"vault": "work", "directory": "Projects", "limit": 20, "offset": 20}
            ]
        }
