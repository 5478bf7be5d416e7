"""Entry point that serves the Go tools over MCP stdio."""

import logging
import sys

from golang_mcp.adapters.fastmcp_adapter import create_fastmcp_server
from golang_mcp.discover import discover_tools_in_package
from golang_mcp.registry import REGISTRY
from golang_mcp.tools.config import Config
from golang_mcp.tools.context import ToolContext

logger = logging.getLogger(__name__)


def main():
    # stdout carries the MCP stream, so logs go to stderr.
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname).1s %(asctime)s %(filename)s:%(lineno)d - %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        config = Config()
        logging.getLogger().setLevel(config.log_level)
        logger.info(f"Starting {config.server_name} v{config.server_version}...")

        discover_tools_in_package("golang_mcp.tools")
        logger.info(f"Available tools: {[desc.name for desc in REGISTRY.functions]}")
        server = create_fastmcp_server(ToolContext(config=config))
    except Exception:
        logger.exception("Failed to start server")
        sys.exit(1)

    logger.info(f"{config.server_name} server started, serving on stdio")
    server.run()


if __name__ == "__main__":
    main()
