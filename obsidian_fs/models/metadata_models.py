"""Pydantic input models for metadata and MOC discovery operations."""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator, model_validator

from .base import DirectoryScopedInput, normalize_note_title


class GetNoteMetadataInput(DirectoryScopedInput):
    """Input model for get_note_metadata tool.

    Single mode reads one note (``title``). Batch mode (``batch=True``) reads
    one page of the notes under ``directory`` and reports per-file errors
    instead of failing.

    Examples:
        >>> GetNoteMetadataInput(title="Projects/Roadmap")
        >>> GetNoteMetadataInput(batch=True, directory="Projects", limit=25)
    """

    title: Optional[str] = Field(
        None,
        description="Note path for single mode (.md optional)."
    )

    batch: bool = Field(
        False,
        description="Return metadata for many notes at once."
    )

    limit: Optional[int] = Field(
        None,
        ge=1,
        le=500,
        description="Notes per batch page (default from configuration)."
    )

    offset: int = Field(
        0,
        ge=0,
        description="Number of notes to skip in batch mode."
    )

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        """Apply the same rules as every other note identifier."""
        if v is None:
            return None
        return normalize_note_title(v)

    @model_validator(mode='after')
    def validate_mode(self) -> "GetNoteMetadataInput":
        """Require either a title or batch mode."""
        if not self.batch and not self.title:
            raise ValueError(
                "Either provide a note title or set batch=True. "
                "Use batch mode with an optional directory to scan many notes."
            )
        return self

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"title": "Projects/Roadmap", "vault": None},
                {"batch": True, "directory": "Projects", "limit": 25, "offset": 0}
            ]
        }


class DiscoverMocsInput(DirectoryScopedInput):
    """Input model for discover_mocs tool.

    Finds Maps of Content: notes tagged ``moc`` in frontmatter or inline.

    Examples:
        >>> DiscoverMocsInput()
        >>> DiscoverMocsInput(moc_name="Programming MOC")
    """

    moc_name: Optional[str] = Field(
        None,
        description=(
            "Only return the MOC with this file name or vault-relative path "
            "(without .md), e.g. 'Programming MOC' or 'Maps/Programming MOC'."
        )
    )

    @field_validator('moc_name')
    @classmethod
    def validate_moc_name(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace and an optional .md suffix."""
        if v is None:
            return None
        cleaned = v.strip()
        if cleaned.lower().endswith(".md"):
            cleaned = cleaned[:-3]
        return cleaned or None

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"vault": None},
                {"moc_name": "Programming MOC", "directory": "Maps"}
            ]
        }
