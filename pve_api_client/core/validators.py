"""Field checks for the client configuration.

Each check returns the value to store, raising :class:`ValidationError`
with a message starting with the field name.
"""

import ipaddress
import re
from typing import Any, Iterable, Optional

from .exceptions import ValidationError


_HOST_LABEL = r'[A-Za-z0-9_]([A-Za-z0-9_\-]{0,61}[A-Za-z0-9_])?'
_HOSTNAME_PATTERN = re.compile(rf'^{_HOST_LABEL}(\.{_HOST_LABEL})*$')


def require_text(field: str, value: Any) -> str:
    """Check a mandatory string such as a token id or secret."""
    if value is None:
        raise ValidationError(f"{field} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string, got {type(value).__name__}")
    if not value:
        raise ValidationError(f"{field} must not be empty")
    return value


def check_host(value: Any, field: str = "host") -> str:
    """Check the Proxmox host and return it in URL-ready form.

    Host names (underscores allowed) and IPv4 addresses are returned as is.
    IPv6 literals may be given bare or in brackets and are always returned
    bracketed, e.g. ``fd00::10`` becomes ``[fd00::10]``.
    """
    host = require_text(field, value)

    literal = host[1:-1] if host.startswith('[') and host.endswith(']') else host
    if ':' in literal:
        try:
            return f"[{ipaddress.IPv6Address(literal).compressed}]"
        except ValueError:
            raise ValidationError(f"{field} {host!r} is not a valid IPv6 address")

    if not _HOSTNAME_PATTERN.match(host):
        raise ValidationError(f"{field} {host!r} is not a host name or address")
    return host


def check_port(value: Any, field: str = "port") -> int:
    """Check a TCP port number."""
    return check_int_range(field, value, 1, 65535)


def check_int_range(field: str, value: Any, minimum: int, maximum: Optional[int] = None) -> int:
    """Check an integer within inclusive bounds."""
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer")
    if value < minimum:
        raise ValidationError(f"{field} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field} must be <= {maximum}")
    return value


def check_bool(field: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field} must be true or false, got {value!r}")
    return value


def check_choice(field: str, value: Any, choices: Iterable[str]) -> str:
    """Check that ``value`` is one of ``choices``."""
    choices = list(choices)
    if value not in choices:
        raise ValidationError(f"{field} must be one of {choices}")
    return value
