# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Exceptions raised by the directory search engine."""


class DirectoryError(Exception):
    """Base exception for directory operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class DirectoryConfigError(DirectoryError):
    """Raised when configuration values (such as the port) are malformed."""


class DirectoryConnectionError(DirectoryError):
    """Raised when the directory server cannot be reached."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class DirectoryBindError(DirectoryError):
    """
    Raised when the anonymous bind fails.

    The bind carries no credentials, so this means the server refused
    anonymous access rather than rejecting a password.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class DirectorySearchError(DirectoryError):
    """Raised when a subtree search fails."""

    def __init__(
        self, message: str, container: str | None = None, search_base: str | None = None
    ):
        super().__init__(message)
        self.container = container
        self.search_base = search_base
