"""Logging configuration for pve-api-client applications."""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

from ..config.models import LoggingConfig


_STANDARD_RECORD_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'message', 'asctime', 'taskName',
])


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors.

        Args:
            record: Log record to format.

        Returns:
            Formatted log message with colors.
        """
        level_name = record.levelname
        if level_name in self.COLORS:
            record.levelname = f"{self.COLORS[level_name]}{level_name}{self.RESET}"

        formatted = super().format(record)

        # Restore for the other handlers
        record.levelname = level_name

        return formatted


class StructuredFormatter(logging.Formatter):
    """Key=value formatter for log files."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record in structured format.

        Args:
            record: Log record to format.

        Returns:
            Structured log message.
        """
        log_data = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and key not in log_data:
                log_data[key] = value

        parts = []
        for key, value in log_data.items():
            if isinstance(value, str) and (' ' in value or '=' in value):
                parts.append(f'{key}="{value}"')
            else:
                parts.append(f'{key}={value}')

        return ' '.join(parts)


def _is_running_in_container() -> bool:
    """Detect if running inside a container.

    Returns:
        True if running in a container environment.
    """
    container_indicators = [
        os.path.exists('/.dockerenv'),
        bool(os.getenv('KUBERNETES_SERVICE_HOST')),
        bool(os.getenv('CONTAINER')),
    ]

    return any(container_indicators)


def setup_logging(config: Optional[LoggingConfig] = None, service_name: str = "pve-api") -> None:
    """Setup logging configuration.

    Args:
        config: Logging configuration, defaults used when omitted.
        service_name: Name of the service for logging context.
    """
    config = config or LoggingConfig()
    log_level = getattr(logging, config.level.upper(), logging.WARNING)

    is_container = _is_running_in_container()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    # Console output goes to stderr so command results on stdout stay clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)

    fmt = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    datefmt = '%Y-%m-%d %H:%M:%S'
    if is_container:
        console_formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)
    else:
        console_formatter = ColoredFormatter(fmt=fmt, datefmt=datefmt)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if config.file:
        try:
            log_path = Path(config.file).expanduser()
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(StructuredFormatter(datefmt=datefmt))
            root_logger.addHandler(file_handler)

        except OSError as e:
            logging.warning(f"Failed to setup file logging: {e}")

    # Quiet noisy libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)

    logging.debug(f"{service_name} logging initialized (level={config.level}, file={config.file})")


def log_exception(logger: logging.Logger, message: str, exc_info: Optional[BaseException] = None) -> None:
    """Log exception with full traceback.

    Args:
        logger: Logger instance.
        message: Log message.
        exc_info: Exception info, uses sys.exc_info() if None.
    """
    logger.error(message, exc_info=exc_info or True)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name, typically __name__.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
