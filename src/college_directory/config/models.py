# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Configuration models for College Directory."""

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_DN = "dc=it-college,dc=ru"


class DirectoryConfig(BaseModel):
    """Directory server endpoint. Only anonymous access is used."""

    host: str = Field(..., description="Directory server host name")
    port: int = Field(default=389, description="Directory server port")
    base_dn: str = Field(default=DEFAULT_BASE_DN, description="Base DN containing the containers")

    @field_validator("host")
    @classmethod
    def validate_host(cls, v):
        """Validate host is not empty."""
        v = v.strip()
        if not v:
            raise ValueError("Host must not be empty")
        return v

    @field_validator("port", mode="before")
    @classmethod
    def validate_port(cls, v):
        """Validate port is a positive integer (numeric strings accepted)."""
        if isinstance(v, bool):
            raise ValueError("Port must be a positive integer")
        if isinstance(v, str):
            if not v.strip().isdigit():
                raise ValueError(f"Port must be a positive integer, got {v!r}")
            v = int(v)
        if not isinstance(v, int) or v <= 0:
            raise ValueError(f"Port must be a positive integer, got {v!r}")
        return v

    @field_validator("base_dn")
    @classmethod
    def validate_base_dn(cls, v):
        """Validate base DN looks like a DN."""
        if "=" not in v:
            raise ValueError("Base DN must be a distinguished name (e.g. dc=example,dc=com)")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file: str | None = Field(default=None, description="Log file path")
    audit_file: str | None = Field(default=None, description="LDAP audit trail file path")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v):
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Level must be one of: {valid_levels}")
        return v.upper()


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="localhost", description="Host to bind to")
    port: int = Field(default=8080, description="Port to bind to")
    path: str = Field(default="/mcp", description="MCP endpoint path")
    static_dir: str = Field(default=".", description="Directory holding index.html")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Validate port range."""
        if not 0 < v < 65536:
            raise ValueError("Port must be between 1 and 65535")
        return v


class Config(BaseModel):
    """Main configuration class for College Directory."""

    directory: DirectoryConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
