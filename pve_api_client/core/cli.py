"""Command line entry point: ``pve-api``."""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from ..api.client import ProxmoxClient
from ..api.exceptions import ProxmoxAPIError
from ..config.manager import ConfigManager, ConfigurationError
from ..config.models import LoggingConfig
from ..logging.setup import get_logger, log_exception, setup_logging
from .exceptions import ValidationError


logger = get_logger(__name__)

COMMANDS = ('get', 'set', 'create', 'delete')


def parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Turn ``key=value`` arguments into a parameter mapping.

    Args:
        pairs: Raw ``key=value`` strings, later keys win.

    Returns:
        Parameter mapping in the order given.

    Raises:
        ValueError: If an item has no ``=`` or an empty key.
    """
    params: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise ValueError(f"Invalid parameter {pair!r}, expected key=value")
        params[key] = value
    return params


def format_result(result: Any) -> str:
    """Render a decoded response for the terminal."""
    if result is None:
        return ''
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, sort_keys=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pve-api',
        description='Call the Proxmox VE API with an API token',
    )
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file',
        default=None
    )
    parser.add_argument(
        '--format', '-f',
        dest='response_format',
        help='Response format (json, html, extjs, text, png, array, object, pngb64)',
        default=None
    )
    parser.add_argument(
        '--log-level',
        help='Override the configured log level',
        default=None
    )
    parser.add_argument(
        '--validate-config',
        action='store_true',
        help='Validate configuration and exit'
    )
    parser.add_argument('command', nargs='?', choices=COMMANDS, help='API verb')
    parser.add_argument('path', nargs='?', help='Resource path, e.g. /nodes')
    parser.add_argument(
        '--param', '-p',
        action='append',
        metavar='KEY=VALUE',
        help='Request parameter, may be repeated'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Send body parameters as JSON instead of form fields'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments, ``sys.argv[1:]`` when omitted.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ConfigManager(args.config).load_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.validate_config:
        print("Configuration validation successful")
        print(f"Proxmox host: {settings.proxmox.host}:{settings.proxmox.port}")
        return 0

    logging_config = settings.logging
    if args.log_level:
        try:
            logging_config = LoggingConfig(level=args.log_level, file=settings.logging.file)
        except ValidationError as e:
            print(f"Invalid log level: {e}", file=sys.stderr)
            return 1
    setup_logging(logging_config)

    if not args.command or not args.path:
        parser.print_usage(sys.stderr)
        print("pve-api: error: a command and a resource path are required", file=sys.stderr)
        return 2

    try:
        params = parse_params(args.param)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1

    with ProxmoxClient.from_config(settings.proxmox) as client:
        if args.response_format:
            client.set_response_type(args.response_format)

        try:
            if args.command == 'get':
                result = client.get(args.path, params)
            else:
                result = getattr(client, args.command)(args.path, params, json=args.json)
        except ProxmoxAPIError as e:
            logger.error(f"Request failed: {e}")
            return 1
        except Exception as e:
            log_exception(logger, f"Unexpected error calling {args.command} {args.path}", e)
            return 1

    output = format_result(result)
    if output:
        print(output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
