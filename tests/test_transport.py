"""Tests for the default HTTP transport."""

from unittest.mock import patch

import pytest
import requests

from pve_api_client.api.transport import DEFAULT_TIMEOUT, TimeoutSession, create_default_transport


class TestDefaultTransport:
    """Test the requests-based default transport."""

    def test_factory_builds_session(self):
        """The default transport is a requests session."""
        session = create_default_transport()
        try:
            assert isinstance(session, requests.Session)
            assert session.verify is True
            assert session.timeout == DEFAULT_TIMEOUT
        finally:
            session.close()

    def test_factory_applies_tls_and_timeout(self):
        """verify_ssl and timeout are applied to the session."""
        session = create_default_transport(verify_ssl=False, timeout=5)
        try:
            assert session.verify is False
            assert session.timeout == 5
        finally:
            session.close()

    def test_default_timeout_applied(self):
        """Requests without a timeout get the session default."""
        session = TimeoutSession(timeout=7)
        with patch.object(requests.Session, 'request') as parent_request:
            session.get('https://pve.local:8006/api2/json/version')
        assert parent_request.call_args.kwargs['timeout'] == 7
        session.close()

    def test_explicit_timeout_wins(self):
        """A per-call timeout overrides the default."""
        session = TimeoutSession(timeout=7)
        with patch.object(requests.Session, 'request') as parent_request:
            session.request('POST', 'https://pve.local:8006/api2/json/pools', data={}, timeout=1)
        assert parent_request.call_args.kwargs['timeout'] == 1
        session.close()


if __name__ == '__main__':
    pytest.main([__file__])
