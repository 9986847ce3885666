# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Raw directory entries and their normalization into Person records."""

from dataclasses import dataclass, field
from typing import Any

from .containers import GROUPS_CONTAINER, MEMBERSHIP_ATTRIBUTES
from .models import Person


@dataclass(frozen=True)
class DirectoryEntry:
    """Raw entry as returned by the server: a DN plus ordered attribute value lists."""

    dn: str
    attributes: tuple[tuple[str, tuple[str, ...]], ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, dn: str, attributes: dict[str, Any]) -> "DirectoryEntry":
        """
        Build an entry from an attribute mapping.

        Args:
            dn: Distinguished name of the entry
            attributes: Attribute names mapped to a value or a list of values

        Returns:
            DirectoryEntry with every value converted to a string
        """
        pairs = []
        for name, values in attributes.items():
            if not isinstance(values, (list, tuple)):
                values = [values]
            pairs.append((name, tuple(_as_text(value) for value in values)))
        return cls(dn=dn, attributes=tuple(pairs))

    @classmethod
    def from_ldap3(cls, entry) -> "DirectoryEntry":
        """Build an entry from an ldap3 ``Entry``."""
        return cls.from_mapping(entry.entry_dn, entry.entry_attributes_as_dict)

    def values(self, name: str) -> tuple[str, ...]:
        """All values of an attribute (the last occurrence if repeated)."""
        found: tuple[str, ...] = ()
        for attr_name, attr_values in self.attributes:
            if attr_name == name:
                found = attr_values
        return found


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def normalize_entry(entry: DirectoryEntry, container_name: str) -> Person:
    """
    Convert a raw entry into a Person.

    Scalar attributes keep their first value only. In the groups container,
    ``member`` and ``memberUid`` keep their whole value list in ``members``;
    when both are present the later one wins.

    Args:
        entry: Raw directory entry
        container_name: Container the entry was found in

    Returns:
        Normalized Person
    """
    attributes: dict[str, str] = {}
    members: tuple[str, ...] | None = None
    is_group_container = container_name == GROUPS_CONTAINER

    for name, values in entry.attributes:
        if not values or name == "dn":
            continue
        if is_group_container and name in MEMBERSHIP_ATTRIBUTES:
            members = values
        else:
            attributes[name] = values[0]

    return Person(dn=entry.dn, ou=container_name, attributes=attributes, members=members)
