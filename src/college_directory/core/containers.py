# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Organizational containers and the search filter each kind uses."""

from enum import Enum

GROUPS_CONTAINER = "groups"

# Searched in this order by the aggregate search
KNOWN_CONTAINERS: tuple[str, ...] = ("people", "teachers", GROUPS_CONTAINER)

MEMBERSHIP_ATTRIBUTES: frozenset[str] = frozenset({"member", "memberUid"})


class ContainerKind(Enum):
    """Kind of entries held by a container, carrying the object classes to match."""

    PERSON = ("person",)
    GROUP = ("group", "groupOfNames", "posixGroup")

    @property
    def object_classes(self) -> tuple[str, ...]:
        return self.value

    @property
    def search_filter(self) -> str:
        """LDAP filter matching any of the kind's object classes."""
        clauses = [f"(objectClass={object_class})" for object_class in self.object_classes]
        if len(clauses) == 1:
            return clauses[0]
        return "(|" + "".join(clauses) + ")"

    @classmethod
    def for_container(cls, container_name: str) -> "ContainerKind":
        if container_name == GROUPS_CONTAINER:
            return cls.GROUP
        return cls.PERSON


def container_search_base(container_name: str, base_dn: str) -> str:
    return f"ou={container_name},{base_dn}"


def is_known_container(container_name: str) -> bool:
    return container_name in KNOWN_CONTAINERS
