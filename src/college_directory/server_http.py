# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""HTTP server for the College Directory API and MCP endpoint."""

import argparse

from .core.logging import get_logger
from .server import get_config, mcp

logger = get_logger(__name__)


def main():
    """Run the directory API over HTTP."""
    parser = argparse.ArgumentParser(description="College Directory HTTP Server")
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to")
    parser.add_argument("--path", default=None, help="URL path of the MCP endpoint")

    args = parser.parse_args()

    try:
        config = get_config()
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise

    host = args.host or config.server.host
    port = args.port or config.server.port
    path = args.path or config.server.path

    logger.info(f"Starting HTTP server on {host}:{port} (MCP endpoint {path})")
    mcp.run(transport="http", host=host, port=port, path=path)


if __name__ == "__main__":
    main()
