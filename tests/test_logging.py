"""Tests for logging configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from loguru import logger

from reviewmate.logging import (
    LogContext,
    bind_batch,
    bind_review,
    get_logger,
    is_configured,
    reset_logging,
    setup_logging,
)

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _reset_logging_state() -> Generator[None, None, None]:
    """Reset loguru state before and after each test."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def captured() -> Generator[list[str], None, None]:
    """Capture formatted messages including bound extras."""
    messages: list[str] = []
    setup_logging(level="DEBUG")
    handler_id = logger.add(
        lambda msg: messages.append(str(msg)),
        format="{extra} | {message}",
    )
    yield messages
    logger.remove(handler_id)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_sets_configured_flag(self) -> None:
        assert not is_configured()
        setup_logging(level="INFO")
        assert is_configured()

    def test_verbose_enables_debug(self) -> None:
        messages: list[str] = []
        setup_logging(level="WARNING", verbose=True)

        handler_id = logger.add(lambda msg: messages.append(str(msg)))
        try:
            logger.bind(name="test").debug("debug message")
            assert any("debug message" in msg for msg in messages)
        finally:
            logger.remove(handler_id)

    def test_quiet_raises_stdlib_threshold(self) -> None:
        setup_logging(level="DEBUG", quiet=True)

        # Quiet mode keeps SQLAlchemy at WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_setup_logging_with_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "reviewmate.log"
        setup_logging(level="INFO", log_file=log_file)

        logger.bind(name="test").info("Test file message")
        logger.complete()

        assert log_file.exists()
        assert "Test file message" in log_file.read_text()

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR"])
    def test_log_level_accepted(self, level: str) -> None:
        setup_logging(level=level)  # type: ignore[arg-type]
        assert is_configured()


class TestInterceptHandler:
    """Tests for stdlib logging interception."""

    def test_intercept_stdlib_logging(self) -> None:
        messages: list[str] = []
        setup_logging(level="DEBUG")

        handler_id = logger.add(lambda msg: messages.append(str(msg)))
        try:
            logging.getLogger("test_stdlib_intercept").warning("Hello from stdlib")
            assert any("Hello from stdlib" in msg for msg in messages)
        finally:
            logger.remove(handler_id)

    def test_uvicorn_loggers_routed_through_loguru(self) -> None:
        setup_logging(level="INFO")

        uvicorn_logger = logging.getLogger("uvicorn.error")
        assert uvicorn_logger.propagate is False
        assert len(uvicorn_logger.handlers) == 1


class TestContextBinding:
    """Tests for context binding helpers."""

    def test_get_logger_binds_name(self, captured: list[str]) -> None:
        get_logger("my_test_module").info("Test message")
        assert any("my_test_module" in msg for msg in captured)

    def test_bind_review(self, captured: list[str]) -> None:
        bind_review(7, "octocat/Hello-World#1347").info("Review message")

        output = "".join(captured)
        assert "octocat/Hello-World#1347" in output
        assert "'user_id': 7" in output

    def test_bind_batch(self, captured: list[str]) -> None:
        bind_batch("abc123", 7).info("Batch message")

        output = "".join(captured)
        assert "abc123" in output
        assert "'name': 'batch'" in output

    def test_log_context_manager(self, captured: list[str]) -> None:
        with LogContext(batch_id="4f1c"):
            logger.info("Inside context")
        logger.info("Outside context")

        inside = next(msg for msg in captured if "Inside context" in msg)
        outside = next(msg for msg in captured if "Outside context" in msg)
        assert "4f1c" in inside
        assert "4f1c" not in outside


class TestResetLogging:
    """Tests for reset_logging function."""

    def test_reset_logging_clears_configured(self) -> None:
        setup_logging(level="INFO")
        reset_logging()
        assert not is_configured()
