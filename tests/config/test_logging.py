"""Tests for structlog configuration."""

import logging

import pytest
import structlog

from unictl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_root_handlers():  # type: ignore[no-untyped-def]
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])


class TestConfigureLogging:
    def test_default_level_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("unictl").level == logging.WARNING
        assert logging.getLogger().level == logging.WARNING

    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("unictl").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy").level == logging.WARNING

    def test_single_stderr_handler(self) -> None:
        configure_logging()
        configure_logging()
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_json_mode_renders_json(self, capsys) -> None:  # type: ignore[no-untyped-def]
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("unictl.test").info("ledger.applied", op="mint")
        err = capsys.readouterr().err
        assert '"event": "ledger.applied"' in err
        assert '"op": "mint"' in err
