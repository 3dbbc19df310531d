"""
pve-api-client

A thin synchronous client for the Proxmox VE REST API using API token
authentication.
"""

__version__ = "1.0.0"

from .api.client import ProxmoxClient, RequestOptions, STORAGE_TYPES
from .api.exceptions import InvalidArgumentError, ProxmoxAPIError
from .api.formats import ResponseFormat, resolve_response_format
from .api.transport import create_default_transport
from .config.manager import ConfigManager, ConfigurationError
from .config.models import ClientSettings, LoggingConfig, ProxmoxConfig

__all__ = [
    "ProxmoxClient",
    "RequestOptions",
    "STORAGE_TYPES",
    "InvalidArgumentError",
    "ProxmoxAPIError",
    "ResponseFormat",
    "resolve_response_format",
    "create_default_transport",
    "ConfigManager",
    "ConfigurationError",
    "ClientSettings",
    "LoggingConfig",
    "ProxmoxConfig",
]
