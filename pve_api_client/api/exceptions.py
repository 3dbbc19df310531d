"""Custom exceptions for Proxmox API interactions."""

from ..core.exceptions import PVEClientError


class ProxmoxAPIError(PVEClientError):
    """Base exception for Proxmox API client errors.

    Server error statuses never raise this; they are returned decoded.
    """
    pass


class InvalidArgumentError(ProxmoxAPIError, ValueError):
    """A call was made with an argument the client refuses to send."""
    pass
