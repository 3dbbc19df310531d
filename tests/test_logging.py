"""Tests for logging setup."""

import logging

import pytest

from pve_api_client.config.models import LoggingConfig
from pve_api_client.logging.setup import ColoredFormatter, StructuredFormatter, setup_logging


def make_record(msg="GET /nodes -> 200", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="pve_api_client.api.client",
        level=level,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestFormatters:
    """Test log formatters."""

    def test_colored_formatter_restores_level_name(self):
        """Colors are applied to the output only."""
        formatter = ColoredFormatter(fmt='[%(levelname)s] %(message)s')
        record = make_record(level=logging.WARNING)

        output = formatter.format(record)

        assert '\033[33mWARNING\033[0m' in output
        assert record.levelname == 'WARNING'

    def test_structured_formatter(self):
        """Records are rendered as key=value pairs including extras."""
        formatter = StructuredFormatter()
        output = formatter.format(make_record(status_code=200))

        assert 'level=INFO' in output
        assert 'logger=pve_api_client.api.client' in output
        assert 'message="GET /nodes -> 200"' in output
        assert 'status_code=200' in output


class TestSetupLogging:
    """Test setup_logging."""

    def test_console_only(self, restore_root_logger):
        """Without a file only the console handler is installed."""
        setup_logging(LoggingConfig(level="DEBUG"))

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert logging.getLogger('urllib3').level == logging.WARNING

    def test_file_handler(self, restore_root_logger, tmp_path):
        """A log file gets a structured rotating handler."""
        log_file = tmp_path / 'logs' / 'pve-api.log'
        setup_logging(LoggingConfig(level="INFO", file=str(log_file)))

        logging.getLogger('pve_api_client.test').info("written to file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert len(restore_root_logger.handlers) == 2
        assert 'message="written to file"' in log_file.read_text(encoding='utf-8')


if __name__ == '__main__':
    pytest.main([__file__])
