# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Anonymous LDAP session used by every directory operation."""

from typing import Any

import ldap3
from ldap3 import ALL_ATTRIBUTES, DEREF_NEVER, NONE, SUBTREE, Connection, Server
from ldap3.core.exceptions import LDAPException

from .entries import DirectoryEntry
from .exceptions import (
    DirectoryBindError,
    DirectoryConfigError,
    DirectoryConnectionError,
    DirectorySearchError,
)
from .logging import get_logger, log_ldap_operation

logger = get_logger(__name__)

LDAP_SCHEME = "ldap"

# Applied to connect and to every response wait
SESSION_TIMEOUT = 5


def parse_port(port: int | str) -> int:
    """
    Parse a port value into a positive integer.

    Raises:
        DirectoryConfigError: If the port is not a positive integer
    """
    if isinstance(port, bool) or not isinstance(port, (int, str)):
        raise DirectoryConfigError(f"Invalid port format: {port!r}")

    try:
        value = int(port)
    except ValueError as e:
        raise DirectoryConfigError(f"Invalid port format: {port!r}") from e

    if value <= 0:
        raise DirectoryConfigError(f"Port must be a positive integer, got {value}")
    return value


def build_url(host: str, port: int) -> str:
    return f"{LDAP_SCHEME}://{host}:{port}"


def _describe_result(result: Any) -> str:
    if isinstance(result, dict):
        return result.get("description") or result.get("message") or str(result)
    return str(result)


class LDAPConnector:
    """
    Anonymous LDAP session for one directory endpoint.

    The connector is a scoped resource: entering it opens the connection and
    performs the anonymous bind, leaving it always unbinds. Sessions are never
    shared between operations.
    """

    def __init__(self, host: str, port: int | str):
        """
        Initialize LDAP connector.

        Args:
            host: Directory server host name
            port: Directory server port

        Raises:
            DirectoryConfigError: If the port or host is malformed
        """
        self.host = host
        self.port = parse_port(port)
        self.url = build_url(host, self.port)

        self._connection: Connection | None = None
        self._server: Server | None = None

        self._setup_server()

    def _setup_server(self) -> None:
        """Setup LDAP server configuration."""
        try:
            self._server = Server(self.url, get_info=NONE, connect_timeout=SESSION_TIMEOUT)
        except LDAPException as e:
            raise DirectoryConfigError(f"Invalid directory endpoint {self.url}: {e}") from e

        logger.debug(f"Configured LDAP server: {self.url}")

    @property
    def connection(self) -> Connection | None:
        return self._connection

    def connect(self) -> Connection:
        """
        Open the connection and perform the anonymous bind.

        Returns:
            Connection: Bound LDAP connection

        Raises:
            DirectoryConnectionError: If the server cannot be reached
            DirectoryBindError: If the anonymous bind fails
        """
        if self._connection is not None and self._connection.bound:
            return self._connection

        connection = Connection(
            self._server,
            authentication=ldap3.ANONYMOUS,
            receive_timeout=SESSION_TIMEOUT,
            raise_exceptions=False,
        )

        try:
            connection.open()
        except LDAPException as e:
            logger.error(f"Connection to {self.url} failed: {e}")
            raise DirectoryConnectionError(f"Connection error: {e}", url=self.url) from e

        try:
            bound = connection.bind()
        except LDAPException as e:
            self._release(connection)
            log_ldap_operation("bind", self.url, False, details=str(e))
            raise DirectoryBindError(f"Bind error: {e}", url=self.url) from e

        if not bound:
            description = _describe_result(connection.result)
            self._release(connection)
            log_ldap_operation("bind", self.url, False, details=description)
            raise DirectoryBindError(f"Bind error: {description}", url=self.url)

        log_ldap_operation("bind", self.url, True)
        self._connection = connection
        return connection

    def disconnect(self) -> None:
        """Disconnect from LDAP server."""
        if self._connection is not None:
            self._release(self._connection)
            self._connection = None

    @staticmethod
    def _release(connection: Connection) -> None:
        try:
            connection.unbind()
            logger.debug("Disconnected from LDAP server")
        except LDAPException as e:
            logger.warning(f"Error during disconnect: {e}")

    def search(
        self, search_base: str, search_filter: str, container: str | None = None
    ) -> list[DirectoryEntry]:
        """
        Perform a subtree search returning every attribute.

        Args:
            search_base: Base DN for search
            search_filter: LDAP filter string
            container: Container name the search is issued for, recorded in the
                audit trail and on errors

        Returns:
            Raw entries in server response order

        Raises:
            DirectorySearchError: If search fails
        """
        connection = self.connect()

        logger.debug(f"Searching: base={search_base}, filter={search_filter}")

        try:
            success = connection.search(
                search_base=search_base,
                search_filter=search_filter,
                search_scope=SUBTREE,
                dereference_aliases=DEREF_NEVER,
                attributes=ALL_ATTRIBUTES,
                size_limit=0,
                time_limit=0,
            )
        except LDAPException as e:
            self._audit_search(search_base, container, False, details=str(e))
            raise DirectorySearchError(
                f"Search failed: {e}", container=container, search_base=search_base
            ) from e

        if not success:
            description = _describe_result(connection.result)
            self._audit_search(search_base, container, False, details=description)
            raise DirectorySearchError(
                f"Search failed: {description}", container=container, search_base=search_base
            )

        entries = [DirectoryEntry.from_ldap3(entry) for entry in connection.entries]
        self._audit_search(search_base, container, True, entry_count=len(entries))
        return entries

    def _audit_search(
        self,
        search_base: str,
        container: str | None,
        success: bool,
        entry_count: int | None = None,
        details: str | None = None,
    ) -> None:
        log_ldap_operation(
            "search",
            self.url,
            success,
            search_base=search_base,
            container=container,
            entry_count=entry_count,
            details=details,
        )

    def test_connection(self) -> dict[str, Any]:
        """
        Test LDAP connection and return server information.

        Returns:
            Dictionary with connection test results
        """
        try:
            connection = self.connect()
            return {
                "connected": True,
                "server": connection.server.host,
                "port": connection.server.port,
                "bound": connection.bound,
                "auth_method": "anonymous",
            }
        except (DirectoryConnectionError, DirectoryBindError) as e:
            logger.error(f"Connection test failed: {e}")
            return {"connected": False, "error": str(e), "auth_method": "anonymous"}

    def __enter__(self) -> "LDAPConnector":
        """Context manager entry: connect and bind."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()
