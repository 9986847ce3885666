# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Configuration loader for College Directory."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from ..core.exceptions import DirectoryConfigError
from .models import DEFAULT_BASE_DN, Config

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "COLLEGE_DIRECTORY_CONFIG"


def load_config(config_path: str | None = None) -> Config:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to configuration file. If None, uses COLLEGE_DIRECTORY_CONFIG
                    environment variable.

    Returns:
        Config: Loaded and validated configuration

    Raises:
        DirectoryConfigError: If no path is given, the file is missing or not
            valid JSON, or the config is invalid
    """
    if config_path is None:
        config_path = os.getenv(CONFIG_ENV_VAR)
        if not config_path:
            raise DirectoryConfigError(
                "No configuration file specified. Either provide config_path or "
                f"set {CONFIG_ENV_VAR} environment variable."
            )

    config_file = Path(config_path)
    if not config_file.is_file():
        logger.error(f"Configuration file not found: {config_path}")
        raise DirectoryConfigError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from: {config_path}")

    try:
        with open(config_file, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in configuration file: {e}")
        raise DirectoryConfigError(f"Invalid JSON in configuration file {config_path}: {e}") from e

    config = _build_config(config_data)
    logger.info("Configuration loaded successfully")
    _log_config_summary(config)
    return config


def load_config_from_env(env_file: str | None = None) -> Config:
    """
    Build configuration from HOST, PORT, BASE_DN and LOG_LEVEL environment variables.

    Variables are first read from a ``.env`` file (``env_file``, or the nearest
    one found from the working directory). Variables already set in the process
    environment take precedence over the file.

    Args:
        env_file: Optional path to a dotenv file

    Returns:
        Config: Validated configuration

    Raises:
        DirectoryConfigError: If HOST is missing or PORT is malformed
    """
    dotenv_path = env_file or find_dotenv(usecwd=True)
    if dotenv_path:
        if load_dotenv(dotenv_path, override=False):
            logger.info(f"Loaded environment from: {dotenv_path}")
        else:
            logger.warning(f"No variables loaded from env file: {dotenv_path}")

    config_data: dict[str, Any] = {
        "directory": {
            "host": os.getenv("HOST", ""),
            "port": os.getenv("PORT", "389"),
            "base_dn": os.getenv("BASE_DN", DEFAULT_BASE_DN),
        }
    }
    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        config_data["logging"] = {"level": log_level}

    config = _build_config(config_data)
    _log_config_summary(config)
    return config


def _build_config(config_data: dict[str, Any]) -> Config:
    try:
        return Config(**config_data)
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        raise DirectoryConfigError(f"Invalid configuration: {e}") from e


def _log_config_summary(config: Config) -> None:
    """
    Log configuration summary.

    Args:
        config: Configuration object to summarize
    """
    logger.debug(f"Directory Host: {config.directory.host}")
    logger.debug(f"Directory Port: {config.directory.port}")
    logger.debug(f"Base DN: {config.directory.base_dn}")
    logger.debug(f"Logging Level: {config.logging.level}")


def create_sample_config(output_path: str) -> None:
    """
    Create a sample configuration file.

    Args:
        output_path: Path where to create the sample config
    """
    sample_config = {
        "directory": {
            "host": "ldap.it-college.ru",
            "port": 389,
            "base_dn": DEFAULT_BASE_DN,
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
        "server": {"host": "localhost", "port": 8080, "path": "/mcp", "static_dir": "."},
    }

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(sample_config, f, indent=2, ensure_ascii=False)

    logger.info(f"Sample configuration created at: {output_path}")
