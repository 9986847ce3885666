# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Tools for directory search and group membership."""

from .groups import GroupsTool
from .search import SearchTool

__all__ = ["SearchTool", "GroupsTool"]
