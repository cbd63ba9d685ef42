# =============================================================================
# main.py  —  Entry Point for the Unomi Profile MCP Server
# =============================================================================
#
# HOW TO RUN:
#   unomi-mcp-server            (console script installed by pyproject.toml)
#   python main.py              (from a checkout)
#
# WHAT HAPPENS:
#   1. Loads a .env file, if present, into the environment
#   2. Builds the immutable UnomiConfig; missing credentials abort here,
#      before any component exists
#   3. Builds the FastMCP server (tools/mcp_server.py)
#   4. Serves MCP over stdio until the host disconnects or Ctrl-C
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

# Must run before UnomiConfig.from_env() reads the environment.
load_dotenv()

from core.config import UnomiConfig
from core.errors import ConfigurationError
from tools.mcp_server import configure_logging, create_server

logger = logging.getLogger("unomi_mcp")


def main() -> int:
    try:
        config = UnomiConfig.from_env()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("Configuration error: %s", exc)
        return 1

    configure_logging(config.log_level)
    server = create_server(config)
    logger.info("Unomi MCP server running on stdio (%s)", config.base_url)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
