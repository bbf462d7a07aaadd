"""Tests for vault configuration loading."""

import pytest

from obsidian_fs.config import (
    configuration_from_environment,
    get_vault_configuration,
    load_vault_configuration,
)
from obsidian_fs.data_models import SearchLimits


def _write(tmp_path, text):
    config_path = tmp_path / "vaults.yaml"
    config_path.write_text(text, encoding="utf-8")
    return config_path


class TestLoadVaultConfiguration:

    def test_valid_configuration(self, tmp_path):
        vault_dir = tmp_path / "notes"
        vault_dir.mkdir()
        config_path = _write(
            tmp_path,
            f"""default: main
vaults:
  main:
    path: {vault_dir}
    description: "  Main vault  "
  missing:
    path: {tmp_path / "nowhere"}
""",
        )

        configuration = load_vault_configuration(config_path)

        assert configuration.default_vault == "main"
        assert configuration.get("main").path == vault_dir.resolve()
        assert configuration.get("main").description == "Main vault"
        assert configuration.get("main").exists
        assert not configuration.get("missing").exists
        assert configuration.limits == SearchLimits()
        assert configuration.source == str(config_path)
        assert configuration.from_environment is False

    def test_limits_section(self, tmp_path):
        config_path = _write(
            tmp_path,
            f"""default: main
vaults:
  main:
    path: {tmp_path}
limits:
  max_search_results: 25
  context_lines: 0
""",
        )
        limits = load_vault_configuration(config_path).limits
        assert limits.max_search_results == 25
        assert limits.context_lines == 0
        assert limits.max_file_size == 10 * 1024 * 1024

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_vault_configuration(tmp_path / "absent.yaml")

    @pytest.mark.parametrize(
        "text,message",
        [
            ("default: [unclosed", "invalid YAML"),
            ("- just\n- a list\n", "YAML mapping"),
            ("default: main\n", "non-empty 'vaults'"),
            ("default: main\nvaults:\n  main: /path\n", "dictionary of settings"),
            ("default: main\nvaults:\n  main:\n    description: x\n", "valid 'path'"),
            ("default: other\nvaults:\n  main:\n    path: /tmp\n", "'default' vault"),
            ("default: main\nvaults:\n  main:\n    path: /tmp\nlimits: 5\n", "'limits' must be a mapping"),
            ("default: main\nvaults:\n  main:\n    path: /tmp\nlimits:\n  speed: 1\n", "Unknown limit"),
            ("default: main\nvaults:\n  main:\n    path: /tmp\nlimits:\n  max_search_results: 0\n", ">= 1"),
            ("default: main\nvaults:\n  main:\n    path: /tmp\nlimits:\n  max_file_size: big\n", "integer"),
        ],
    )
    def test_invalid_configuration(self, tmp_path, text, message):
        with pytest.raises(ValueError, match=message):
            load_vault_configuration(_write(tmp_path, text))

    def test_unknown_vault_lists_available(self, tmp_path):
        configuration = configuration_from_environment(str(tmp_path))
        with pytest.raises(ValueError, match="Available vaults: default"):
            configuration.get("work")


class TestGetVaultConfiguration:

    def test_reads_file_named_by_environment(self, tmp_path, monkeypatch, clear_configuration_cache):
        config_path = _write(tmp_path, f"default: main\nvaults:\n  main:\n    path: {tmp_path}\n")
        monkeypatch.setenv("OBSIDIAN_VAULTS_CONFIG", str(config_path))

        configuration = get_vault_configuration()

        assert configuration.default_vault == "main"
        assert get_vault_configuration() is configuration

    def test_falls_back_to_vault_path(self, tmp_path, monkeypatch, clear_configuration_cache):
        monkeypatch.setenv("OBSIDIAN_VAULTS_CONFIG", str(tmp_path / "absent.yaml"))
        monkeypatch.setenv("OBSIDIAN_VAULT_PATH", str(tmp_path))

        configuration = get_vault_configuration()

        assert configuration.default_vault == "default"
        assert configuration.get("default").path == tmp_path.resolve()
        assert configuration.as_payload()["default"] == "default"
        assert configuration.from_environment is True
        assert configuration.as_payload()["source"] == "$OBSIDIAN_VAULT_PATH"

    def test_no_source_raises(self, tmp_path, monkeypatch, clear_configuration_cache):
        monkeypatch.setenv("OBSIDIAN_VAULTS_CONFIG", str(tmp_path / "absent.yaml"))
        monkeypatch.delenv("OBSIDIAN_VAULT_PATH", raising=False)

        with pytest.raises(FileNotFoundError, match="OBSIDIAN_VAULT_PATH"):
            get_vault_configuration()
