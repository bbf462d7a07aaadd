"""Module-level constants for the Obsidian MCP server."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"
CONFIG_PATH_ENV = "OBSIDIAN_VAULTS_CONFIG"
VAULT_PATH_ENV = "OBSIDIAN_VAULT_PATH"
FALLBACK_VAULT_NAME = "default"

# Limits
MAX_FILE_SIZE = 10 * 1024 * 1024
MAX_SEARCH_RESULTS = 100
DEFAULT_CONTEXT_LINES = 2
MAX_CONTEXT_LINE_LENGTH = 150
METADATA_BATCH_LIMIT = 50

# Notes
NOTE_EXTENSION = ".md"
MOC_TAG = "moc"

# Logging
LOG_LEVEL = "INFO"
