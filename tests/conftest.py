"""Shared fixtures."""

from unittest.mock import MagicMock

import pytest

from pve_api_client.api.client import ProxmoxClient


TOKEN_ID = "root@pam!automation"
TOKEN_SECRET = "5f2c1e7a-0d4b-4c39-9a6e-1b2c3d4e5f60"


def make_response(content: bytes = b'{"data": null}', status_code: int = 200) -> MagicMock:
    """Build a stand-in for ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = {}
    response.content = content
    response.text = content.decode('latin-1')
    return response


@pytest.fixture
def transport():
    """Transport double returning an empty JSON envelope."""
    fake = MagicMock(spec=['get', 'request'])
    fake.get.return_value = make_response()
    fake.request.return_value = make_response()
    return fake


@pytest.fixture
def client(transport):
    """Client bound to the transport double."""
    return ProxmoxClient(
        token_id=TOKEN_ID,
        token_secret=TOKEN_SECRET,
        host="pve.local",
        port=8006,
        transport=transport,
    )
