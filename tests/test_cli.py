"""Tests for the pve-api command line."""

import json
from unittest.mock import MagicMock, patch

import pytest
import yaml

from pve_api_client.core.cli import format_result, main, parse_params

from conftest import TOKEN_ID, TOKEN_SECRET, make_response


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text(yaml.safe_dump({
        'proxmox': {
            'host': 'pve.local',
            'token_id': TOKEN_ID,
            'token_secret': TOKEN_SECRET,
        },
        'logging': {'level': 'WARNING'},
    }))
    return str(path)


@pytest.fixture
def fake_transport():
    fake = MagicMock(spec=['get', 'request'])
    fake.get.return_value = make_response(b'{"data": {"version": "8.2.4"}}')
    fake.request.return_value = make_response(b'{"data": "UPID:pve1:0001"}')
    with patch('pve_api_client.api.client.create_default_transport', return_value=fake), \
            patch('pve_api_client.core.cli.setup_logging') as setup_logging:
        fake.setup_logging = setup_logging
        yield fake


class TestHelpers:
    """Test argument helpers."""

    def test_parse_params(self):
        """key=value pairs become a mapping, values may contain '='."""
        assert parse_params(['poolid=lab', 'comment=a=b']) == {'poolid': 'lab', 'comment': 'a=b'}
        assert parse_params(None) == {}

    @pytest.mark.parametrize("pair", ['poolid', '=lab'])
    def test_parse_params_rejects_malformed(self, pair):
        """Items without a key or '=' are rejected."""
        with pytest.raises(ValueError, match="expected key=value"):
            parse_params([pair])

    def test_format_result(self):
        """Structured results are printed as JSON, strings as is."""
        assert format_result(None) == ''
        assert format_result('data:image/png;base64,AA==') == 'data:image/png;base64,AA=='
        assert json.loads(format_result({'data': [1, 2]})) == {'data': [1, 2]}


class TestMain:
    """Test the main entry point."""

    def test_get(self, config_file, fake_transport, capsys):
        """A GET prints the decoded JSON."""
        assert main(['-c', config_file, 'get', 'version']) == 0

        url = fake_transport.get.call_args[0][0]
        assert url == 'https://pve.local:8006/api2/json/version'
        assert json.loads(capsys.readouterr().out) == {'data': {'version': '8.2.4'}}
        fake_transport.setup_logging.assert_called_once()

    def test_create_with_params(self, config_file, fake_transport):
        """Parameters are form-encoded unless --json is given."""
        assert main(['-c', config_file, 'create', '/pools', '-p', 'poolid=lab']) == 0
        fake_transport.request.assert_called_once()
        assert fake_transport.request.call_args[0][0] == 'POST'
        assert fake_transport.request.call_args.kwargs['data'] == {'poolid': 'lab'}

    def test_delete_with_json(self, config_file, fake_transport):
        """--json switches to a JSON body."""
        assert main(['-c', config_file, 'delete', '/pools/lab', '-p', 'force=1', '--json']) == 0
        assert fake_transport.request.call_args[0][0] == 'DELETE'
        assert fake_transport.request.call_args.kwargs['json'] == {'force': '1'}

    def test_format_override(self, config_file, fake_transport, capsys):
        """--format changes the wire format and decoding."""
        assert main(['-c', config_file, '-f', 'text', 'get', '/version']) == 0
        assert fake_transport.get.call_args[0][0] == 'https://pve.local:8006/api2/text/version'
        assert capsys.readouterr().out.strip() == '{"data": {"version": "8.2.4"}}'

    def test_validate_config(self, config_file, fake_transport, capsys):
        """--validate-config reports the host and sends nothing."""
        assert main(['-c', config_file, '--validate-config']) == 0
        assert 'pve.local:8006' in capsys.readouterr().out
        fake_transport.get.assert_not_called()

    def test_missing_config(self, tmp_path, capsys):
        """A missing configuration file exits with 1."""
        assert main(['-c', str(tmp_path / 'absent.yaml'), 'get', '/version']) == 1
        assert 'Configuration error' in capsys.readouterr().err

    def test_missing_path(self, config_file, fake_transport):
        """A command without a path is a usage error."""
        assert main(['-c', config_file, 'get']) == 2
        fake_transport.get.assert_not_called()

    def test_bad_param(self, config_file, fake_transport, capsys):
        """Malformed parameters exit with 1."""
        assert main(['-c', config_file, 'get', '/storage', '-p', 'type']) == 1
        assert 'expected key=value' in capsys.readouterr().err

    def test_bad_log_level(self, config_file, fake_transport, capsys):
        """An unknown --log-level exits with 1."""
        assert main(['-c', config_file, '--log-level', 'LOUD', 'get', '/version']) == 1
        assert 'Invalid log level' in capsys.readouterr().err

    def test_transport_failure(self, config_file, fake_transport):
        """Unexpected transport errors exit with 1."""
        fake_transport.get.side_effect = ConnectionError("refused")
        assert main(['-c', config_file, 'get', '/version']) == 1


if __name__ == '__main__':
    pytest.main([__file__])
