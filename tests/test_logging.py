# # Copyright (c) 2024 College Directory
# # SPDX-License-Identifier: MIT
# #
# # College Directory Service
# # Provides anonymous LDAP directory search over HTTP and MCP

"""Tests for logging functionality."""

import logging
from unittest.mock import patch

from college_directory.config.models import LoggingConfig
from college_directory.core.logging import get_logger, log_ldap_operation, setup_logging


class TestLoggingSetup:
    """Test logging setup functionality."""

    def test_setup_logging_console_only(self, caplog):
        """Test logging setup with console handler only."""
        config = LoggingConfig(level="INFO")

        with caplog.at_level(logging.INFO):
            setup_logging(config)

        assert "Logging initialized at level: INFO" in caplog.text

        logger = logging.getLogger("college-directory")
        logger.info("Test message")
        assert "Test message" in caplog.text

    def test_setup_logging_with_file(self, tmp_path):
        """Test logging setup with file handler."""
        log_file = tmp_path / "directory.log"

        config = LoggingConfig(level="DEBUG", file=str(log_file))
        setup_logging(config)

        logger = logging.getLogger("college-directory")
        logger.debug("Debug message")
        logger.info("Info message")

        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "Debug message" in content
        assert "Info message" in content
        assert "Logging to file:" in content

        setup_logging(LoggingConfig(level="INFO"))

    def test_setup_logging_file_error(self, caplog):
        """Test logging setup with file error."""
        config = LoggingConfig(level="INFO", file="/invalid/path/test.log")

        with caplog.at_level(logging.WARNING):
            setup_logging(config)

        assert "Failed to setup file logging" in caplog.text

    def test_setup_logging_custom_format(self):
        """Test logging setup with custom format."""
        custom_format = "%(levelname)s: %(message)s"
        config = LoggingConfig(level="INFO", format=custom_format)

        with patch("college_directory.core.logging.logging.Formatter") as mock_formatter:
            setup_logging(config)
            mock_formatter.assert_called_with(custom_format)

    def test_setup_logging_clears_existing_handlers(self):
        """Test that setup_logging clears existing handlers."""
        logger = logging.getLogger("college-directory")

        dummy_handler = logging.StreamHandler()
        logger.addHandler(dummy_handler)

        setup_logging(LoggingConfig(level="INFO"))

        assert len(logger.handlers) == 1
        assert dummy_handler not in logger.handlers


class TestGetLogger:
    """Test get_logger functionality."""

    def test_get_logger_basic(self):
        """Test basic logger retrieval."""
        logger = get_logger("test_module")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "college-directory.test_module"

    def test_get_logger_same_name_returns_same_logger(self):
        """Test that same name returns same logger instance."""
        assert get_logger("same_module") is get_logger("same_module")


class TestLDAPOperationLogging:
    """Test LDAP operation audit logging."""

    def test_log_ldap_operation_success(self, caplog):
        """Test logging successful LDAP operation."""
        with caplog.at_level(logging.INFO):
            log_ldap_operation(
                operation="search",
                url="ldap://ldap.test:389",
                success=True,
                search_base="ou=people,dc=it-college,dc=ru",
                container="people",
                entry_count=2,
            )

        assert "LDAP SEARCH: SUCCESS" in caplog.text
        assert "ou=people,dc=it-college,dc=ru" in caplog.text
        assert "container=people" in caplog.text
        assert "entries=2" in caplog.text

    def test_log_ldap_operation_failure(self, caplog):
        """Test logging failed LDAP operation."""
        with caplog.at_level(logging.WARNING):
            log_ldap_operation(
                operation="bind",
                url="ldap://ldap.test:389",
                success=False,
                details="anonymous access denied",
            )

        assert "LDAP BIND: FAILURE" in caplog.text
        assert "anonymous access denied" in caplog.text

    def test_log_ldap_operation_without_details(self, caplog):
        """Test logging LDAP operation without details."""
        with caplog.at_level(logging.INFO):
            log_ldap_operation(operation="bind", url="ldap://ldap.test:389", success=True)

        assert "LDAP BIND: SUCCESS" in caplog.text
        assert "Details:" not in caplog.text

    def test_log_ldap_operation_audit_logger(self):
        """Test that LDAP operations use audit logger."""
        with patch("college_directory.core.logging.get_logger") as mock_get_logger:
            mock_get_logger.return_value = logging.getLogger("test-audit")

            log_ldap_operation("search", "ldap://ldap.test:389", True)

            mock_get_logger.assert_called_once_with("audit")

    def test_log_ldap_operation_structured_fields(self, caplog):
        """Test audit records carry the directory fields as record attributes."""
        with caplog.at_level(logging.INFO):
            log_ldap_operation(
                "search",
                "ldap://ldap.test:389",
                True,
                search_base="ou=groups,dc=it-college,dc=ru",
                container="groups",
                entry_count=0,
            )

        record = caplog.records[-1]
        assert record.ldap_operation == "SEARCH"
        assert record.ldap_status == "SUCCESS"
        assert record.ldap_url == "ldap://ldap.test:389"
        assert record.search_base == "ou=groups,dc=it-college,dc=ru"
        assert record.container == "groups"
        assert record.entry_count == 0

    def test_audit_file(self, tmp_path):
        """Test the audit trail is written to its own file in the audit format."""
        audit_file = tmp_path / "audit.log"
        setup_logging(LoggingConfig(level="INFO", audit_file=str(audit_file)))

        log_ldap_operation(
            "search",
            "ldap://ldap.test:389",
            True,
            search_base="ou=people,dc=it-college,dc=ru",
            container="people",
            entry_count=3,
        )
        get_logger("other").info("Not audited")

        audit_logger = get_logger("audit")
        for handler in audit_logger.handlers:
            handler.flush()

        content = audit_file.read_text(encoding="utf-8")
        assert "SEARCH SUCCESS url=ldap://ldap.test:389" in content
        assert "base=ou=people,dc=it-college,dc=ru container=people entries=3" in content
        assert "Not audited" not in content

        setup_logging(LoggingConfig(level="INFO"))
        assert audit_logger.handlers == []


class TestLoggingLevels:
    """Test different logging levels."""

    def test_info_level_logging(self, caplog):
        """Test info level logging."""
        setup_logging(LoggingConfig(level="INFO"))

        logger = get_logger("test")

        with caplog.at_level(logging.DEBUG):
            logger.debug("Debug message")
            logger.info("Info message")
            logger.warning("Warning message")

        assert "Debug message" not in caplog.text
        assert "Info message" in caplog.text
        assert "Warning message" in caplog.text

    def test_warning_level_logging(self, caplog):
        """Test warning level logging."""
        setup_logging(LoggingConfig(level="WARNING"))

        logger = get_logger("test")

        with caplog.at_level(logging.DEBUG):
            logger.info("Info message")
            logger.warning("Warning message")

        assert "Info message" not in caplog.text
        assert "Warning message" in caplog.text

        setup_logging(LoggingConfig(level="INFO"))
