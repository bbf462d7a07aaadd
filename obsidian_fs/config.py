"""Configuration loading and vault registry."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from obsidian_fs.constants import (
    CONFIG_PATH,
    CONFIG_PATH_ENV,
    FALLBACK_VAULT_NAME,
    VAULT_PATH_ENV,
)
from obsidian_fs.data_models import SearchLimits, VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)


def _resolve_vault_path(raw_path: str) -> Path:
    resolved_path = Path(raw_path).expanduser()
    try:
        return resolved_path.resolve(strict=False)
    except RuntimeError:
        # resolve can raise if underlying filesystem is inaccessible; fall back to expanded path
        return resolved_path


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to ``vaults.yaml``
        at the repository root.

    Returns:
        A fully populated :class:`VaultConfiguration` containing normalized vault
        metadata, search limits and the configured default vault name.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, bad limits, etc.).
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    try:
        raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Vault configuration contains invalid YAML: {exc}") from exc

    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a YAML mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        resolved_path = _resolve_vault_path(raw_path)
        description = (entry.get("description") or "").strip()

        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=description,
            exists=resolved_path.is_dir(),
        )

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    limits_section = raw_config.get("limits") or {}
    if not isinstance(limits_section, dict):
        raise ValueError("Vault configuration 'limits' must be a mapping")

    return VaultConfiguration(
        default_vault=default_vault,
        vaults=processed,
        limits=SearchLimits.from_mapping(limits_section),
        source=str(config_path),
    )


def configuration_from_environment(vault_path: str) -> VaultConfiguration:
    """Build a single-vault configuration from a bare directory path."""
    resolved_path = _resolve_vault_path(vault_path)
    metadata = VaultMetadata(
        name=FALLBACK_VAULT_NAME,
        path=resolved_path,
        description=f"Vault from ${VAULT_PATH_ENV}",
        exists=resolved_path.is_dir(),
    )
    return VaultConfiguration(
        default_vault=FALLBACK_VAULT_NAME,
        vaults={FALLBACK_VAULT_NAME: metadata},
        source=f"${VAULT_PATH_ENV}",
        from_environment=True,
    )


def _configured_path() -> Path:
    override: Optional[str] = os.environ.get(CONFIG_PATH_ENV)
    return Path(override).expanduser() if override else CONFIG_PATH


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Return the process-wide vault configuration, loading it on first use.

    The YAML file named by ``$OBSIDIAN_VAULTS_CONFIG`` (or ``vaults.yaml``) wins.
    When it does not exist and ``$OBSIDIAN_VAULT_PATH`` is set, a single vault
    named ``default`` is configured from that directory.

    Raises:
        FileNotFoundError: If neither source is available.
        ValueError: If the configuration file is malformed.
    """
    config_path = _configured_path()
    if config_path.exists():
        configuration = load_vault_configuration(config_path)
        logger.info(
            "Loaded %d vault(s) from %s (default: '%s')",
            len(configuration.vaults),
            config_path,
            configuration.default_vault,
        )
        return configuration

    vault_path = os.environ.get(VAULT_PATH_ENV)
    if vault_path:
        logger.info("No configuration file at %s; using $%s", config_path, VAULT_PATH_ENV)
        return configuration_from_environment(vault_path)

    raise FileNotFoundError(
        f"Vault configuration file not found at {config_path} "
        f"and ${VAULT_PATH_ENV} is not set"
    )
