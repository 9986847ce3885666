# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Result models returned by directory searches."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Person(BaseModel):
    """
    Normalized directory entry (a person, or a group in the groups container).

    Instances are frozen and ``members`` is a tuple. ``attributes`` is a plain
    dict so it serializes as a JSON object; treat it as read-only.
    """

    model_config = ConfigDict(frozen=True)

    dn: str = Field(description="Distinguished name")
    ou: str = Field(description="Container the entry was found in")
    attributes: dict[str, str] = Field(
        default_factory=dict, description="First value of each scalar attribute"
    )
    members: tuple[str, ...] | None = Field(None, description="Full membership list for groups")


class ContainerResult(BaseModel):
    """All entries found in one container."""

    name: str = Field(description="Container name")
    total: int = Field(description="Number of entries")
    people: list[Person] = Field(default_factory=list, description="Normalized entries")

    @classmethod
    def from_people(cls, name: str, people: list[Person]) -> "ContainerResult":
        return cls(name=name, total=len(people), people=people)


class ContainerSearchResult(ContainerResult):
    """Single-container search result, carrying an error when the search failed."""

    error: str | None = Field(None, description="Error message")


class AggregateResult(BaseModel):
    """Entries of every known container, keyed by container name."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(default=0, description="Entries across all included containers")
    containers: dict[str, ContainerResult] = Field(
        default_factory=dict,
        serialization_alias="ous",
        description="Successfully searched containers",
    )
    error: str | None = Field(None, description="Error message")

    def add(self, container: ContainerResult) -> None:
        self.containers[container.name] = container
        self.total += container.total


class MembershipResult(BaseModel):
    """Groups that list an identity as a member."""

    model_config = ConfigDict(populate_by_name=True)

    identity: str = Field(serialization_alias="uid", description="Identity that was resolved")
    groups: list[Person] = Field(default_factory=list, description="Matching groups")
    total: int = Field(default=0, description="Number of matching groups")
    error: str | None = Field(None, description="Error message")


def to_json(result: BaseModel) -> dict[str, Any]:
    """Serialize a result the way the HTTP API returns it."""
    return result.model_dump(mode="json", by_alias=True, exclude_none=True)
