"""Pydantic input models for vault discovery and session selection."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from obsidian_fs.config import get_vault_configuration


class ListVaultsInput(BaseModel):
    """Input model for list_vaults tool.

    Examples:
        >>> ListVaultsInput()
        >>> ListVaultsInput(include_note_counts=True)
    """

    include_note_counts: bool = Field(
        False,
        description=(
            "Also count the markdown notes in each accessible vault. "
            "Walks every vault, so leave off for large vaults."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [{}, {"include_note_counts": True}]
        }


class SetActiveVaultInput(BaseModel):
    """Input model for set_active_vault tool.

    The name is checked against the loaded vault configuration, so a typo is
    reported with the list of valid names before any session state changes.

    Examples:
        >>> SetActiveVaultInput(vault="work")
    """

    vault: str = Field(
        min_length=1,
        description="Vault name as listed by list_vaults().",
        examples=["default", "work"]
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: str) -> str:
        """Strip the name and require it to be a configured vault."""
        cleaned = v.strip()
        configured = get_vault_configuration().vaults
        if cleaned not in configured:
            raise ValueError(
                f"Unknown vault '{cleaned}'. "
                f"Available vaults: {', '.join(sorted(configured))}"
            )
        return cleaned

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"vault": "work"}
            ]
        }
