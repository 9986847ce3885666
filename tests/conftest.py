# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Shared fixtures: an in-memory directory standing in for the LDAP server."""

import pytest

from college_directory.config.models import DirectoryConfig
from college_directory.core.entries import DirectoryEntry
from college_directory.core.exceptions import DirectoryConnectionError, DirectorySearchError

BASE_DN = "dc=it-college,dc=ru"


class FakeConnector:
    """Connector double recording the searches issued in one session."""

    def __init__(self, directory: "FakeDirectory", host: str, port: int):
        self.directory = directory
        self.host = host
        self.port = port
        self.searches: list[tuple[str, str]] = []
        self.containers: list[str | None] = []
        self.entered = False
        self.exited = False

    def __enter__(self):
        self.directory.sessions.append(self)
        if self.directory.fail_connect:
            raise DirectoryConnectionError("Connection error: refused", url="ldap://fake:389")
        self.entered = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.exited = True

    def search(
        self, search_base: str, search_filter: str, container: str | None = None
    ) -> list[DirectoryEntry]:
        self.searches.append((search_base, search_filter))
        self.containers.append(container)
        if search_base in self.directory.failing_bases:
            raise DirectorySearchError("Search failed: noSuchObject", search_base=search_base)
        return list(self.directory.entries.get(search_base, []))


class FakeDirectory:
    """Entries keyed by search base; bases listed in ``failing_bases`` fail to search."""

    def __init__(self, entries=None, failing_bases=(), fail_connect=False):
        self.entries: dict[str, list[DirectoryEntry]] = entries or {}
        self.failing_bases = set(failing_bases)
        self.fail_connect = fail_connect
        self.sessions: list[FakeConnector] = []

    def connector(self, host: str, port: int) -> FakeConnector:
        return FakeConnector(self, host, port)

    @property
    def searches(self) -> list[tuple[str, str]]:
        return [search for session in self.sessions for search in session.searches]


def person_entry(uid: str, container: str, **attributes) -> DirectoryEntry:
    attrs = {"uid": [uid], "cn": [uid.title()], "objectClass": ["top", "person"]}
    attrs.update(attributes)
    return DirectoryEntry.from_mapping(f"uid={uid},ou={container},{BASE_DN}", attrs)


def group_entry(cn: str, **attributes) -> DirectoryEntry:
    attrs = {"cn": [cn], "objectClass": ["top", "groupOfNames"]}
    attrs.update(attributes)
    return DirectoryEntry.from_mapping(f"cn={cn},ou=groups,{BASE_DN}", attrs)


@pytest.fixture
def directory_config():
    """Directory configuration for the fake server."""
    return DirectoryConfig(host="ldap.test", port=389, base_dn=BASE_DN)


@pytest.fixture
def college_directory():
    """Fixture directory with 2 people, 1 teacher and an empty groups container."""
    return FakeDirectory(
        entries={
            f"ou=people,{BASE_DN}": [
                person_entry("student1", "people", mail=["student1@it-college.ru"]),
                person_entry("student2", "people"),
            ],
            f"ou=teachers,{BASE_DN}": [person_entry("teacher1", "teachers")],
            f"ou=groups,{BASE_DN}": [],
        }
    )


@pytest.fixture
def groups_directory():
    """Fixture directory whose groups use both membership conventions."""
    return FakeDirectory(
        entries={
            f"ou=groups,{BASE_DN}": [
                group_entry(
                    "students",
                    member=[
                        f"uid=student1,ou=people,{BASE_DN}",
                        f"uid=student2,ou=people,{BASE_DN}",
                    ],
                ),
                group_entry(
                    "posix-students",
                    objectClass=["top", "posixGroup"],
                    gidNumber=["5000"],
                    memberUid=["student1", "student3"],
                ),
                group_entry("staff", member=[f"cn=Teacher One,ou=teachers,{BASE_DN}"]),
                group_entry("posix-tens", memberUid=["student10"]),
                group_entry("empty"),
            ]
        }
    )
