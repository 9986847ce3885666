# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Directory operations returning results that carry errors instead of raising them."""

from .config.models import DirectoryConfig
from .core.containers import KNOWN_CONTAINERS, is_known_container
from .core.exceptions import DirectoryError
from .core.ldap_connector import LDAPConnector
from .core.logging import get_logger
from .core.models import AggregateResult, ContainerSearchResult, MembershipResult
from .tools.groups import GroupsTool
from .tools.search import ConnectorFactory, SearchTool

logger = get_logger(__name__)


def search_all(
    config: DirectoryConfig, connector_factory: ConnectorFactory = LDAPConnector
) -> AggregateResult:
    """List every entry of the known containers, grouped by container."""
    try:
        return SearchTool(config, connector_factory).search_all()
    except DirectoryError as e:
        logger.error(f"Directory search failed: {e}")
        return AggregateResult(error=str(e))


def search_container(
    config: DirectoryConfig,
    container_name: str,
    connector_factory: ConnectorFactory = LDAPConnector,
) -> ContainerSearchResult:
    """List the entries of a single known container."""
    if not is_known_container(container_name):
        return ContainerSearchResult(
            name=container_name,
            total=0,
            error=f"unknown container {container_name!r}, expected one of: "
            f"{', '.join(KNOWN_CONTAINERS)}",
        )

    try:
        container = SearchTool(config, connector_factory).search_container(container_name)
    except DirectoryError as e:
        logger.error(f"Container search failed: {e}")
        return ContainerSearchResult(name=container_name, total=0, error=str(e))

    return ContainerSearchResult(
        name=container.name, total=container.total, people=container.people
    )


def find_user_groups(
    config: DirectoryConfig, identity: str, connector_factory: ConnectorFactory = LDAPConnector
) -> MembershipResult:
    """List the groups an identity belongs to."""
    if not identity:
        return MembershipResult(identity="", error="uid parameter is required")

    try:
        return GroupsTool(config, connector_factory).find_groups_for_identity(identity)
    except DirectoryError as e:
        logger.error(f"Group membership lookup failed: {e}")
        return MembershipResult(identity=identity, error=str(e))
