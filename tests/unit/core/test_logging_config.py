"""
Unit Tests for Logging Configuration
"""
import json
import logging

from nexus.core.logging_config import (
    JSONFormatter,
    NexusLogger,
    generate_request_id,
    logger,
    project_id_var,
)


def make_record(msg="hello", **extra):
    record = logging.LogRecord("nexus", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogger:
    """Test the package logger"""

    def test_logger_class(self):
        """Test the package logger exposes the structured helpers"""
        assert isinstance(logger, NexusLogger)
        assert logger.name == "nexus"

    def test_admission_levels(self, caplog):
        """Test granted admissions log at INFO and denials at DEBUG"""
        with caplog.at_level(logging.DEBUG, logger="nexus"):
            logger.log_admission("t1", True)
            logger.log_admission("t2", False, reason="capacity_full")

        granted, denied = caplog.records[-2:]
        assert granted.levelno == logging.INFO
        assert denied.levelno == logging.DEBUG
        assert denied.denial_reason == "capacity_full"

    def test_failed_dispatch_warns(self, caplog):
        """Test failed dispatch events log at WARNING"""
        with caplog.at_level(logging.DEBUG, logger="nexus"):
            logger.log_dispatch_event("t1", "rolled_back", success=False, error_type="ConnectionError")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.dispatch_event == "rolled_back"
        assert record.error_type == "ConnectionError"

    def test_feed_event(self, caplog):
        """Test feed events carry the record count"""
        with caplog.at_level(logging.INFO, logger="nexus"):
            logger.log_feed_event("supervisor_directory", "loaded", count=3)

        record = caplog.records[-1]
        assert record.getMessage() == "Feed supervisor_directory: loaded (3 records)"
        assert record.record_count == 3


class TestJSONFormatter:
    """Test structured output"""

    def test_includes_context_and_extras(self):
        """Test context vars and extra fields land in the JSON line"""
        token = project_id_var.set("p1")
        try:
            line = JSONFormatter().format(make_record(supervisor_id="t1"))
        finally:
            project_id_var.reset(token)

        data = json.loads(line)
        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["project_id"] == "p1"
        assert data["supervisor_id"] == "t1"

    def test_request_id_format(self):
        """Test generated request ids are short"""
        assert len(generate_request_id()) == 8
