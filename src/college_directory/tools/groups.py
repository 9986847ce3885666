# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Group membership resolution for an identity."""

from ..config.models import DirectoryConfig
from ..core.containers import GROUPS_CONTAINER, ContainerKind, container_search_base
from ..core.entries import DirectoryEntry, normalize_entry
from ..core.exceptions import DirectorySearchError
from ..core.ldap_connector import LDAPConnector
from ..core.logging import get_logger
from ..core.models import MembershipResult
from .search import ConnectorFactory

logger = get_logger(__name__)


def member_dn_matches(member_dn: str, identity: str) -> bool:
    """
    Check whether a ``member`` DN refers to the identity.

    Matches case-insensitively on ``uid=<identity>,`` or ``cn=<identity>,``
    appearing anywhere in the DN.
    """
    # TODO: substring matching can produce false positives when the fragment
    # appears in a later RDN; decide whether to match only the leading RDN.
    dn = member_dn.lower()
    identity = identity.lower()
    return f"uid={identity}," in dn or f"cn={identity}," in dn


def member_uid_matches(member_uid: str, identity: str) -> bool:
    """Check whether a ``memberUid`` value is exactly the identity (case-sensitive)."""
    return member_uid == identity


def is_group_member(entry: DirectoryEntry, identity: str) -> bool:
    """
    Check whether a raw group entry lists the identity as a member.

    Both membership conventions are tested: full member DNs in ``member``
    and bare identifiers in ``memberUid``.
    """
    if any(member_dn_matches(value, identity) for value in entry.values("member")):
        return True
    return any(member_uid_matches(value, identity) for value in entry.values("memberUid"))


class GroupsTool:
    """Tool for resolving group memberships in the groups container."""

    def __init__(self, config: DirectoryConfig, connector_factory: ConnectorFactory = LDAPConnector):
        """Initialize the groups tool.

        Args:
            config: Directory endpoint configuration
            connector_factory: Builds a session for ``(host, port)``
        """
        self.config = config
        self.connector_factory = connector_factory

    def find_groups_for_identity(self, identity: str) -> MembershipResult:
        """
        Get all groups that list an identity as a member.

        Args:
            identity: Bare identifier (uid or common name)

        Returns:
            MembershipResult with matching groups in server response order

        Raises:
            DirectoryError: If connecting, binding or searching fails
        """
        logger.info(f"Finding groups for identity: {identity}")

        search_base = container_search_base(GROUPS_CONTAINER, self.config.base_dn)

        with self.connector_factory(self.config.host, self.config.port) as connector:
            try:
                entries = connector.search(
                    search_base=search_base,
                    search_filter=ContainerKind.GROUP.search_filter,
                    container=GROUPS_CONTAINER,
                )
            except DirectorySearchError as e:
                raise DirectorySearchError(
                    f"Search error in container {GROUPS_CONTAINER}: {e.message}",
                    container=GROUPS_CONTAINER,
                    search_base=search_base,
                ) from e

        groups = [
            normalize_entry(entry, GROUPS_CONTAINER)
            for entry in entries
            if is_group_member(entry, identity)
        ]

        logger.info(f"Found {len(groups)} groups for identity {identity}")
        return MembershipResult(identity=identity, groups=groups, total=len(groups))
