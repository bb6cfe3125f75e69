"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from clippydiag.config.models import LoggingConfig, LogOutputConfig
from clippydiag.core.logging import (
    configure_logging,
    get_logger,
    get_run_id,
    run_scope,
)


class TestRunIdCorrelation:
    """Run ID context variable tests."""

    def test_given_run_id_when_scoped_then_can_retrieve(self) -> None:
        """Run ID is visible inside the scope."""
        # When
        with run_scope("run-123") as result:
            # Then
            assert result == "run-123"
            assert get_run_id() == "run-123"

    def test_given_no_id_when_scoped_then_generates_uuid(self) -> None:
        """Scope generates UUID-based ID when none provided."""
        # When
        with run_scope() as rid:
            # Then
            assert len(rid) == 12  # uuid4().hex[:12]

    def test_given_scope_when_exited_then_removes_id(self) -> None:
        """Leaving the scope removes the run ID."""
        # When
        with run_scope("to-clear"):
            pass

        # Then
        assert get_run_id() is None

    def test_given_outer_id_when_nested_scope_exits_then_restored(self) -> None:
        """A nested scope restores the enclosing run ID."""
        # Given
        with run_scope("outer"):
            # When
            with run_scope("inner"):
                assert get_run_id() == "inner"

            # Then
            assert get_run_id() == "outer"

    def test_given_error_in_scope_when_exited_then_restored(self) -> None:
        """The previous ID is restored even when the block raises."""
        with pytest.raises(RuntimeError), run_scope("failing"):
            raise RuntimeError("boom")

        assert get_run_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def teardown_method(self) -> None:
        for handler in logging.getLogger().handlers:
            handler.close()
        logging.getLogger().handlers.clear()

    def test_given_json_format_when_log_then_valid_json_output(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """JSON format produces valid JSON with required fields."""
        # Given
        configure_logging(json_format=True, level="INFO")
        logger = get_logger("test")

        # When
        logger.info("test message", key="value")

        # Then
        captured = capsys.readouterr()
        lines = [line for line in captured.err.strip().split("\n") if line]
        if lines:
            data = json.loads(lines[-1])
            assert data["event"] == "test message"
            assert data["key"] == "value"
            assert "timestamp" in data
            assert data["level"] == "info"

    def test_given_run_id_when_log_then_attached(self, tmp_path: Path) -> None:
        """Events emitted during a run carry its run id."""
        # Given
        log_file = tmp_path / "run.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        logger = get_logger("clippydiag.lint.ops")

        # When
        with run_scope("abc123"):
            logger.info("clippy_run_started")
        logger.info("idle")

        # Then
        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert records[0]["run_id"] == "abc123"
        assert records[0]["logger"] == "clippydiag.lint.ops"
        assert "run_id" not in records[1]

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When - config's DEBUG should override the level="ERROR" param
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()

    def test_given_multi_output_config_when_configure_then_logs_to_all(
        self, tmp_path: Path
    ) -> None:
        """Multiple outputs receive logs according to their levels."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content

        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_logger_created_before_configure_when_log_then_follows_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Module-level loggers pick up configuration made after they were created."""
        # Given
        logger = get_logger("early")
        log_file = tmp_path / "early.log"
        configure_logging(
            config=LoggingConfig(
                level="WARNING",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        # When
        logger.info("too quiet")
        logger.warning("loud enough")

        # Then
        content = log_file.read_text()
        assert "too quiet" not in content
        assert "loud enough" in content
        assert capsys.readouterr().out == ""
