"""Tests for logger module."""

import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

from sleepcord.util import logger as logger_module
from sleepcord.util.logger import (
    DATE_FORMAT,
    LOG_COLORS,
    LOG_FORMAT,
    RESET_COLOR,
    ColorFormatter,
    PromptToolkitHandler,
    get_logger,
    handle_exception,
    should_use_color,
)


def _record(level: int, msg: str = "message") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
        func="test_func",
    )


class TestShouldUseColor:
    """Tests for should_use_color function."""

    @patch('sys.stderr.isatty')
    def test_should_use_color_tty(self, mock_isatty):
        mock_isatty.return_value = True
        assert should_use_color() is True

    @patch('sys.stderr.isatty')
    def test_should_use_color_no_tty(self, mock_isatty):
        mock_isatty.return_value = False
        assert should_use_color() is False

    @patch('sys.stderr.isatty')
    def test_should_use_color_exception(self, mock_isatty):
        mock_isatty.side_effect = Exception("Error")
        assert should_use_color() is False


class TestColorFormatter:
    """Tests for ColorFormatter class."""

    def test_wraps_message_in_level_color(self):
        formatter = ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        formatted = formatter.format(_record(logging.ERROR, "Disk on fire"))

        assert formatted.startswith(LOG_COLORS["ERROR"])
        assert formatted.endswith(RESET_COLOR)
        assert "Disk on fire" in formatted

    def test_unknown_level_is_left_plain(self):
        formatter = ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        formatted = formatter.format(_record(25, "custom"))

        assert RESET_COLOR not in formatted


class TestGetLogger:
    """Tests for logger construction."""

    def test_get_logger_configures_handlers_once(self):
        first = get_logger("sleepcord-test-logger")
        second = get_logger("sleepcord-test-logger")

        assert first is second
        assert first.propagate is False
        assert len(first.handlers) == 2
        assert any(isinstance(h, PromptToolkitHandler) for h in first.handlers)
        assert any(isinstance(h, RotatingFileHandler) for h in first.handlers)

    def test_log_file_lives_in_logs_dir(self):
        path = logger_module.get_log_filepath()

        assert path.parent == logger_module.LOGS_DIR
        assert path.suffix == ".log"
        assert logger_module.get_log_filepath() == path


class TestHandleException:
    """Tests for the global exception hook."""

    def test_keyboard_interrupt_goes_to_default_hook(self):
        with patch("sys.__excepthook__") as default_hook:
            handle_exception(KeyboardInterrupt, KeyboardInterrupt(), None)

        default_hook.assert_called_once()

    def test_other_exceptions_are_logged(self):
        error = ValueError("bad")
        with patch.object(logger_module, "get_logger") as mock_get_logger:
            handle_exception(ValueError, error, None)

        mock_get_logger.return_value.error.assert_called_once()
        assert mock_get_logger.return_value.error.call_args.args[0] == "Uncaught exception"
