"""Core exception classes for the Proxmox VE API client."""


class PVEClientError(Exception):
    """Base exception for all pve-api-client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PVEClientError):
    """A configuration field holds an unusable value."""
    pass
