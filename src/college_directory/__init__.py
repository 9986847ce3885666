# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""College Directory - anonymous LDAP people and group lookups over HTTP."""

__version__ = "0.1.0"
__author__ = "College Directory Developers"
__description__ = "Directory search and group membership resolution for LDAP containers"
