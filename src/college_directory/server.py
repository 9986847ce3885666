# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""College Directory server: HTTP API routes and MCP tools using FastMCP."""

import os
from pathlib import Path
from typing import Any

from fastmcp import FastMCP
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import FileResponse, JSONResponse, PlainTextResponse, Response

from . import service
from .config.loader import CONFIG_ENV_VAR, load_config, load_config_from_env
from .config.models import Config
from .core.exceptions import DirectoryError
from .core.ldap_connector import LDAPConnector
from .core.logging import get_logger, setup_logging
from .core.models import AggregateResult, ContainerSearchResult, MembershipResult, to_json

logger = get_logger(__name__)

# Initialize MCP server
mcp = FastMCP("College Directory")

_config: Config | None = None

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_config() -> Config:
    """
    Get the server configuration, loading it on first use.

    Uses the JSON file named by COLLEGE_DIRECTORY_CONFIG when set, otherwise the
    HOST/PORT/BASE_DN environment variables (read from a .env file if present).
    """
    global _config

    if _config is None:
        config_path = os.getenv(CONFIG_ENV_VAR)
        _config = load_config(config_path) if config_path else load_config_from_env()
        setup_logging(_config.logging)
        logger.info("Configuration initialized")

    return _config


def set_config(config: Config | None) -> None:
    """Replace the server configuration (None forces a reload on next use)."""
    global _config
    _config = config


def _json_response(result: BaseModel) -> JSONResponse:
    return JSONResponse(to_json(result), headers=CORS_HEADERS)


def _preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@mcp.custom_route("/api/search", methods=["GET", "OPTIONS"])
async def api_search(request: Request) -> Response:
    """List everyone, grouped by container."""
    if request.method == "OPTIONS":
        return _preflight()

    try:
        directory = get_config().directory
    except DirectoryError as e:
        logger.error(f"Configuration error: {e}")
        return _json_response(AggregateResult(error=str(e)))

    result = await run_in_threadpool(service.search_all, directory)
    return _json_response(result)


@mcp.custom_route("/api/containers/{name}", methods=["GET", "OPTIONS"])
async def api_container(request: Request) -> Response:
    """List the entries of one container."""
    if request.method == "OPTIONS":
        return _preflight()

    name = request.path_params["name"]
    try:
        directory = get_config().directory
    except DirectoryError as e:
        logger.error(f"Configuration error: {e}")
        return _json_response(ContainerSearchResult(name=name, total=0, error=str(e)))

    result = await run_in_threadpool(service.search_container, directory, name)
    return _json_response(result)


@mcp.custom_route("/api/user-groups", methods=["GET", "OPTIONS"])
async def api_user_groups(request: Request) -> Response:
    """List the groups of the identity given in the ``uid`` query parameter."""
    if request.method == "OPTIONS":
        return _preflight()

    uid = request.query_params.get("uid", "")
    if not uid:
        return _json_response(MembershipResult(identity="", error="uid parameter is required"))

    try:
        directory = get_config().directory
    except DirectoryError as e:
        logger.error(f"Configuration error: {e}")
        return _json_response(MembershipResult(identity=uid, error=str(e)))

    result = await run_in_threadpool(service.find_user_groups, directory, uid)
    return _json_response(result)


@mcp.custom_route("/", methods=["GET"])
async def index(request: Request) -> Response:
    """Serve the front-end page."""
    try:
        static_dir = get_config().server.static_dir
    except DirectoryError as e:
        logger.error(f"Configuration error: {e}")
        return PlainTextResponse(f"Configuration error: {e}", status_code=500)

    index_file = Path(static_dir) / "index.html"
    if not index_file.is_file():
        return PlainTextResponse("Not Found", status_code=404)
    return FileResponse(index_file)


@mcp.tool()
def search_directory() -> dict[str, Any]:
    """
    List everyone in the directory, grouped by container.

    Containers whose search fails are left out of the result.
    """
    return to_json(service.search_all(get_config().directory))


@mcp.tool()
def search_container(
    container: str = Field(description="Container name: people, teachers or groups"),
) -> dict[str, Any]:
    """
    List the entries of a single container.
    """
    return to_json(service.search_container(get_config().directory, container))


@mcp.tool()
def get_user_groups(
    uid: str = Field(description="Identity (uid or common name) to resolve"),
) -> dict[str, Any]:
    """
    Get all groups that list an identity as a member.

    Matches full member DNs (uid= or cn=) and bare memberUid values.
    """
    return to_json(service.find_user_groups(get_config().directory, uid))


@mcp.tool()
def test_connection() -> dict[str, Any]:
    """
    Test the LDAP connection and return connection status.
    """
    directory = get_config().directory

    try:
        connector = LDAPConnector(directory.host, directory.port)
    except DirectoryError as e:
        logger.error(f"Connection test failed: {e}")
        return {"connected": False, "error": str(e)}

    try:
        return connector.test_connection()
    finally:
        connector.disconnect()


def main() -> None:
    """Run the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
