# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Application logging and the LDAP audit trail."""

import logging
import sys

from ..config.models import LoggingConfig

ROOT_LOGGER_NAME = "college-directory"
AUDIT_LOGGER_NAME = "audit"

# Audit records always carry these fields (see log_ldap_operation)
AUDIT_FORMAT = (
    "%(asctime)s %(ldap_operation)s %(ldap_status)s url=%(ldap_url)s "
    "base=%(search_base)s container=%(container)s entries=%(entry_count)s"
)


def setup_logging(config: LoggingConfig) -> None:
    """
    Configure the application logger and, optionally, a dedicated audit file.

    Args:
        config: Logging configuration
    """
    level = getattr(logging, config.level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(config.format)
    logger.addHandler(_configure(logging.StreamHandler(sys.stderr), level, formatter))

    if config.file and _add_file_handler(logger, config.file, level, formatter):
        logger.info(f"Logging to file: {config.file}")

    audit_logger = get_logger(AUDIT_LOGGER_NAME)
    audit_logger.handlers.clear()
    if config.audit_file and _add_file_handler(
        audit_logger, config.audit_file, logging.INFO, logging.Formatter(AUDIT_FORMAT)
    ):
        logger.info(f"Writing LDAP audit trail to: {config.audit_file}")

    logger.info(f"Logging initialized at level: {config.level}")


def _configure(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _add_file_handler(
    logger: logging.Logger, path: str, level: int, formatter: logging.Formatter
) -> bool:
    try:
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        logging.getLogger(ROOT_LOGGER_NAME).warning(f"Failed to setup file logging for {path}: {e}")
        return False
    logger.addHandler(_configure(handler, level, formatter))
    return True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the application logger."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_ldap_operation(
    operation: str,
    url: str,
    success: bool,
    search_base: str | None = None,
    container: str | None = None,
    entry_count: int | None = None,
    details: str | None = None,
) -> None:
    """
    Record a bind or search against the directory in the audit trail.

    The message is human readable; the same values are attached to the record
    as ``ldap_operation``, ``ldap_status``, ``ldap_url``, ``search_base``,
    ``container`` and ``entry_count`` for structured handlers.

    Args:
        operation: Operation name ('bind' or 'search')
        url: Directory endpoint the session is bound to
        success: Whether operation succeeded
        search_base: Search base of a search
        container: Container the search was issued for
        entry_count: Number of entries a successful search returned
        details: Error message or additional details
    """
    status = "SUCCESS" if success else "FAILURE"
    fields = {
        "ldap_operation": operation.upper(),
        "ldap_status": status,
        "ldap_url": url,
        "search_base": search_base or "-",
        "container": container or "-",
        "entry_count": "-" if entry_count is None else entry_count,
    }

    log_msg = f"LDAP {operation.upper()}: {status} - {url}"
    if search_base:
        log_msg += f" base={search_base}"
    if container:
        log_msg += f" container={container}"
    if entry_count is not None:
        log_msg += f" entries={entry_count}"
    if details:
        log_msg += f" - Details: {details}"

    get_logger(AUDIT_LOGGER_NAME).log(
        logging.INFO if success else logging.WARNING, log_msg, extra=fields
    )
