# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Container search and the aggregate search over all known containers."""

from collections.abc import Callable

from ..config.models import DirectoryConfig
from ..core.containers import KNOWN_CONTAINERS, ContainerKind, container_search_base
from ..core.entries import normalize_entry
from ..core.exceptions import DirectoryError, DirectorySearchError
from ..core.ldap_connector import LDAPConnector, parse_port
from ..core.logging import get_logger
from ..core.models import AggregateResult, ContainerResult, Person

logger = get_logger(__name__)

ConnectorFactory = Callable[[str, int], LDAPConnector]


def search_container(
    connector: LDAPConnector, base_dn: str, container_name: str
) -> list[Person]:
    """
    Search one container and normalize every entry found.

    Args:
        connector: Bound LDAP session
        base_dn: Base DN holding the containers
        container_name: Container to search (``ou=<name>`` under the base DN)

    Returns:
        Normalized entries in server response order (may be empty)

    Raises:
        DirectorySearchError: If the search fails
    """
    kind = ContainerKind.for_container(container_name)
    search_base = container_search_base(container_name, base_dn)

    try:
        entries = connector.search(
            search_base=search_base,
            search_filter=kind.search_filter,
            container=container_name,
        )
    except DirectorySearchError as e:
        raise DirectorySearchError(
            f"Search error in container {container_name}: {e.message}",
            container=container_name,
            search_base=search_base,
        ) from e

    logger.debug(
        f"Container {container_name} found {len(entries)} entries with filter {kind.search_filter}"
    )
    return [normalize_entry(entry, container_name) for entry in entries]


class SearchTool:
    """Searches the known containers, one fresh session per container."""

    def __init__(self, config: DirectoryConfig, connector_factory: ConnectorFactory = LDAPConnector):
        """Initialize the search tool.

        Args:
            config: Directory endpoint configuration
            connector_factory: Builds a session for ``(host, port)``
        """
        self.config = config
        self.connector_factory = connector_factory

    def search_container(self, container_name: str) -> ContainerResult:
        """
        Search a single container in its own session.

        Raises:
            DirectoryError: If connecting, binding or searching fails
        """
        logger.info(f"Searching container: {container_name}")

        with self.connector_factory(self.config.host, self.config.port) as connector:
            people = search_container(connector, self.config.base_dn, container_name)

        return ContainerResult.from_people(container_name, people)

    def search_all(self) -> AggregateResult:
        """
        Search every known container.

        A container whose search fails is left out of the result and logged;
        the aggregate itself only fails when the port is malformed.

        Returns:
            AggregateResult over the containers that could be searched

        Raises:
            DirectoryConfigError: If the configured port is malformed
        """
        parse_port(self.config.port)

        result = AggregateResult()

        for container_name in KNOWN_CONTAINERS:
            try:
                container = self.search_container(container_name)
            except DirectoryError as e:
                logger.warning(f"Could not search container {container_name}: {e}")
                continue

            result.add(container)

        logger.info(
            f"Found {result.total} entries in {len(result.containers)} of "
            f"{len(KNOWN_CONTAINERS)} containers"
        )
        return result
