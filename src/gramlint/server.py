"""gramlint MCP Server - Main entry point."""
import logging
import sys

from mcp.server.fastmcp import FastMCP

from gramlint import __version__
from gramlint.config import Config
from gramlint.tools import lint

# Load configuration
config = Config.load()

# Configure logging to stderr (CRITICAL: stdout is reserved for JSON-RPC)
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)]
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("gramlint")

logger.info(f"gramlint v{__version__} starting...")
logger.info(f"Dialect: {config.dialect} (parallel: {config.parallel})")


def main():
    """Main entry point for the MCP server."""
    try:
        logger.info("Registering tools...")
        lint.register(mcp, config)
        logger.info("Tools registered: lint_text, lint_document_file, get_lint_rules")

        logger.info("Starting MCP server on stdio...")
        mcp.run(transport="stdio")

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
