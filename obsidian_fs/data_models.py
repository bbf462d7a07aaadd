"""Data models for vault metadata, search limits and configuration."""

from __future__ import annotations
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from obsidian_fs.constants import (
    DEFAULT_CONTEXT_LINES,
    MAX_CONTEXT_LINE_LENGTH,
    MAX_FILE_SIZE,
    MAX_SEARCH_RESULTS,
    METADATA_BATCH_LIMIT,
)


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str
    exists: bool

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
        }


@dataclass(frozen=True)
class SearchLimits:
    """Size and result limits applied to vault scans.

    Passed explicitly to search and aggregation functions so a single
    configuration value drives every call.
    """

    max_file_size: int = MAX_FILE_SIZE
    max_search_results: int = MAX_SEARCH_RESULTS
    context_lines: int = DEFAULT_CONTEXT_LINES
    max_line_length: int = MAX_CONTEXT_LINE_LENGTH
    metadata_batch_limit: int = METADATA_BATCH_LIMIT

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> "SearchLimits":
        """Build limits from a ``limits`` configuration section.

        Raises:
            ValueError: If a key is unknown or a value is not a positive integer
                (``context_lines`` may be zero).
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"Unknown limit setting(s): {', '.join(sorted(unknown))}")

        values: dict[str, int] = {}
        for key, value in raw.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Limit '{key}' must be an integer")
            minimum = 0 if key == "context_lines" else 1
            if value < minimum:
                raise ValueError(f"Limit '{key}' must be >= {minimum}")
            values[key] = value
        return cls(**values)

    def as_payload(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class VaultConfiguration:
    """Holds vault metadata, search limits and default resolution helpers.

    Loaded once from vaults.yaml (or the environment fallback).
    Provides vault lookup by name and payload serialization for MCP responses.
    """

    default_vault: str
    vaults: dict[str, VaultMetadata]
    limits: SearchLimits = field(default_factory=SearchLimits)
    # Where the vaults came from: the YAML file path, or the fallback variable name.
    source: str = ""
    from_environment: bool = False

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Args:
            name: The name of the vault to retrieve.

        Returns:
            VaultMetadata for the requested vault.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.vaults))
            raise ValueError(f"Unknown vault '{name}'. Available vaults: {available}") from exc

    def as_payload(self) -> dict[str, Any]:
        """Default vault, configuration source, effective limits and every vault."""
        return {
            "default": self.default_vault,
            "source": self.source,
            "from_environment": self.from_environment,
            "limits": self.limits.as_payload(),
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
        }
