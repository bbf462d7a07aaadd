"""Pydantic input models for search operations.

This module defines input models for search tools:
- Search note contents with the boolean query language
- Search notes by H1 title
- Search notes by tags
"""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator, model_validator

from .base import DirectoryScopedInput


def _validate_query(v: str) -> str:
    if not v.strip():
        raise ValueError(
            "Search query cannot be empty. "
            "Provide a search term to find notes."
        )
    return v.strip()


class SearchVaultInput(DirectoryScopedInput):
    """Input model for search_vault tool.

    Searches inside note files. Plain queries match substrings line by line;
    queries using operators are evaluated per note.

    Query syntax:
        - ``git OR backup``, ``git || backup``
        - ``mcp AND server``, ``mcp && server``, ``mcp server`` (implicit AND)
        - ``mcp NOT draft``, ``mcp -draft``
        - ``"exact phrase"``
        - ``title:Roadmap``, ``tag:project``, ``content:"release notes"``
        - ``(git OR svn) AND backup``

    Results are paginated with ``limit``/``offset``. Passing ``max_results``
    instead caps the result set and flags partially included files.

    Examples:
        >>> SearchVaultInput(query="git OR backup")
        >>> SearchVaultInput(query='title:"Getting Started"', directory="Guides")
        >>> SearchVaultInput(query="todo", max_results=20)
    """

    query: str = Field(
        min_length=1,
        description=(
            "Search query. Supports AND/OR/NOT, &&/||, -term, \"phrases\", "
            "parentheses and field filters title:, content:, tag:."
        ),
        examples=["git OR backup", "mcp -draft", "tag:project AND roadmap"]
    )

    case_sensitive: bool = Field(
        False,
        description="Match case exactly."
    )

    include_context: bool = Field(
        True,
        description="Include surrounding lines and a highlighted copy of each matching line."
    )

    context_lines: Optional[int] = Field(
        None,
        ge=0,
        le=10,
        description="Lines of context before and after each match (default from configuration)."
    )

    limit: Optional[int] = Field(
        None,
        ge=1,
        le=1000,
        description="Matches per page (default from configuration)."
    )

    offset: int = Field(
        0,
        ge=0,
        description="Number of matches to skip."
    )

    max_results: Optional[int] = Field(
        None,
        ge=1,
        description=(
            "Cap the number of matches instead of paginating. "
            "Cannot be combined with limit or offset."
        )
    )

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Validate search query is not empty."""
        return _validate_query(v)

    @model_validator(mode='after')
    def validate_result_policy(self) -> "SearchVaultInput":
        """Reject mixing truncation with pagination."""
        if self.max_results is not None and (self.limit is not None or self.offset):
            raise ValueError(
                "max_results cannot be combined with limit or offset. "
                "Use limit/offset to page through results, or max_results to cap them."
            )
        return self

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "git OR backup", "vault": None},
                {"query": "title:\"Getting Started\"", "directory": "Guides", "limit": 20},
                {"query": "todo", "max_results": 20, "include_context": False}
            ]
        }


class SearchByTitleInput(DirectoryScopedInput):
    """Input model for search_by_title tool.

    Matches the query against the first H1 heading of each note.

    Examples:
        >>> SearchByTitleInput(query="Getting Started")
    """

    query: str = Field(
        min_length=1,
        description="Substring to look for in note H1 titles."
    )

    case_sensitive: bool = Field(
        False,
        description="Match case exactly."
    )

    limit: Optional[int] = Field(
        None,
        ge=1,
        le=1000,
        description="Results per page (default from configuration)."
    )

    offset: int = Field(
        0,
        ge=0,
        description="Number of results to skip."
    )

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Validate search query is not empty."""
        return _validate_query(v)

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "Getting Started", "vault": None}
            ]
        }


class SearchByTagsInput(DirectoryScopedInput):
    """Input model for search_by_tags tool.

    Returns notes carrying ALL of the given tags, whether in frontmatter
    ``tags`` or written inline as ``#tag``.

    Examples:
        >>> SearchByTagsInput(tags=["project", "active"])
        >>> SearchByTagsInput(tags=["#moc"], case_sensitive=True)
    """

    tags: list[str] = Field(
        min_length=1,
        description="Tags to require (leading '#' optional).",
        examples=[["project", "active"], ["moc"]]
    )

    case_sensitive: bool = Field(
        False,
        description="Compare tags case-sensitively."
    )

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """Strip whitespace and '#' prefixes; require at least one tag."""
        cleaned = [tag.strip().lstrip("#") for tag in v]
        cleaned = [tag for tag in cleaned if tag]
        if not cleaned:
            raise ValueError(
                "Must specify at least one non-empty tag. "
                "Examples: ['project'], ['moc', 'active']"
            )
        return cleaned

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"tags": ["project", "active"], "vault": None},
                {"tags": ["moc"], "directory": "Maps", "case_sensitive": False}
            ]
        }
