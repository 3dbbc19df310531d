"""HTTP transport used by the Proxmox client.

Any object offering ``get(url, **options)`` and ``request(method, url, **options)``
and returning a response with ``status_code``, ``headers``, ``content`` and
``text`` can be injected. ``requests.Session`` satisfies this natively, so the
default factory simply builds one.
"""

import logging
from typing import Any, Mapping, Optional, Protocol

import requests


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class Response(Protocol):
    """Subset of ``requests.Response`` the client reads."""

    status_code: int
    headers: Mapping[str, str]
    content: bytes
    text: str


class Transport(Protocol):
    """Pluggable HTTP requester."""

    def get(self, url: str, **options: Any) -> Response:
        ...

    def request(self, method: str, url: str, **options: Any) -> Response:
        ...


class TimeoutSession(requests.Session):
    """``requests.Session`` applying a default timeout to every request."""

    def __init__(self, timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        super().__init__()
        self.timeout = timeout

    def request(self, method, url, **kwargs):
        kwargs.setdefault('timeout', self.timeout)
        return super().request(method, url, **kwargs)


def create_default_transport(verify_ssl: bool = True, timeout: Optional[float] = DEFAULT_TIMEOUT) -> TimeoutSession:
    """Build the transport used when none is injected.

    Args:
        verify_ssl: Verify the server TLS certificate.
        timeout: Per-request timeout in seconds, ``None`` to wait forever.

    Returns:
        A ready-to-use session.
    """
    session = TimeoutSession(timeout=timeout)
    session.verify = verify_ssl
    if not verify_ssl:
        logger.warning("TLS certificate verification is disabled")
    logger.debug(f"Created default HTTP transport (verify_ssl={verify_ssl}, timeout={timeout})")
    return session
