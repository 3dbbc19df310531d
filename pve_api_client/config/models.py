"""Configuration data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.validators import (
    check_bool,
    check_choice,
    check_host,
    check_int_range,
    check_port,
    require_text,
)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ProxmoxConfig:
    """Proxmox VE connection configuration."""

    token_id: str
    token_secret: str
    host: str
    port: int = 8006
    response_format: str = "array"
    verify_ssl: bool = True
    timeout: int = 30

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        require_text('token_id', self.token_id)
        require_text('token_secret', self.token_secret)
        self.host = check_host(self.host)
        check_port(self.port)
        check_bool('verify_ssl', self.verify_ssl)
        check_int_range('timeout', self.timeout, 1)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        self.level = check_choice('level', str(self.level).upper(), LOG_LEVELS)


@dataclass
class ClientSettings:
    """Top-level settings loaded from a configuration file."""

    proxmox: ProxmoxConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)
