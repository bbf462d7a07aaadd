"""Shared fixtures: a small sample vault and a configuration pointing at it."""

import pytest

from obsidian_fs.config import get_vault_configuration
from obsidian_fs.data_models import VaultMetadata

SAMPLE_NOTES = {
    "Getting Started.md": """---
tags: [guide, onboarding]
---
# Getting Started Guide

Welcome to the vault.
We use git daily for backups.
""",
    "projects/mcp.md": """# MCP Server

This note is about mcp and caas.
Tracking the #project roadmap.
""",
    "projects/backup.md": """# Backup Strategy

Nightly backup to the NAS.
""",
    "notes.md": """Plain note without a heading.
It mentions git once.
""",
    "Maps/Programming MOC.md": """---
tags: moc
---
# Programming MOC

- [[projects/mcp|MCP]]
- [[Languages MOC]]
- [[Getting Started]]
""",
    "Maps/Languages MOC.md": """# Languages MOC

Index of languages. #moc

- [[Python]]
""",
}

# Sorted vault-relative paths, the order every scan reports.
SAMPLE_PATHS = sorted(SAMPLE_NOTES)


@pytest.fixture
def vault_path(tmp_path):
    """Write the sample notes to a fresh vault directory."""
    root = tmp_path / "vault"
    root.mkdir()
    for relative, content in SAMPLE_NOTES.items():
        note_path = root / relative
        note_path.parent.mkdir(parents=True, exist_ok=True)
        note_path.write_text(content, encoding="utf-8")
    (root / "attachments").mkdir()
    (root / "attachments" / "image.png").write_bytes(b"\x89PNG")
    return root.resolve()


@pytest.fixture
def vault(vault_path):
    return VaultMetadata(
        name="test",
        path=vault_path,
        description="Test vault",
        exists=True,
    )


@pytest.fixture
def clear_configuration_cache():
    get_vault_configuration.cache_clear()
    yield
    get_vault_configuration.cache_clear()


@pytest.fixture
def configured_vault(tmp_path, vault_path, monkeypatch, clear_configuration_cache):
    """Point the server configuration at the sample vault (plus an empty second vault)."""
    other = tmp_path / "other"
    other.mkdir()
    (other / "lonely.md").write_text("# Lonely\n\ngit is here too.\n", encoding="utf-8")

    config_path = tmp_path / "vaults.yaml"
    config_path.write_text(
        f"""default: test
vaults:
  test:
    path: {vault_path}
    description: Test vault
  other:
    path: {other}
    description: Second vault
limits:
  max_search_results: 50
""",
        encoding="utf-8",
    )
    monkeypatch.setenv("OBSIDIAN_VAULTS_CONFIG", str(config_path))
    monkeypatch.delenv("OBSIDIAN_VAULT_PATH", raising=False)
    return get_vault_configuration()
