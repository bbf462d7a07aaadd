"""FastMCP server initialization and tool registration."""

import logging
from mcp.server.fastmcp import FastMCP

from obsidian_fs.constants import LOG_LEVEL

# basicConfig logs to stderr, leaving stdout to the stdio transport
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

mcp = FastMCP("obsidian_fs")

# Tool modules are imported in __init__.py to register all @mcp.tool() decorators


def run_server():
    """Start the MCP server with stdio transport."""
    logger.info("Starting Obsidian filesystem MCP server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
