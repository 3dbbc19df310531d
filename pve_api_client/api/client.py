"""Proxmox VE API client using API token authentication."""

import base64
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config.models import ProxmoxConfig
from .exceptions import InvalidArgumentError
from .formats import DEFAULT_RESPONSE_FORMAT, ALIAS_PNG_BASE64, ResponseFormat, resolve_response_format
from .transport import DEFAULT_TIMEOUT, Response, Transport, create_default_transport


logger = logging.getLogger(__name__)

DEFAULT_PORT = 8006

ALLOWED_METHODS = ('GET', 'POST', 'PUT', 'DELETE')

STORAGE_TYPES = (
    'lvm',
    'nfs',
    'dir',
    'zfs',
    'rbd',
    'iscsi',
    'sheepdog',
    'glusterfs',
    'iscsidirect',
)

PNG_DATA_URI_PREFIX = 'data:image/png;base64,'


@dataclass(frozen=True)
class RequestOptions:
    """Per-call request options.

    Attributes:
        json: Send the parameters of a POST/PUT/DELETE as a JSON body
            instead of form fields.
    """

    json: bool = False


def normalize_path(path: str) -> str:
    """Return ``path`` with exactly the leading ``/`` the API expects."""
    if not path.startswith('/'):
        return '/' + path
    return path


class ProxmoxClient:
    """Synchronous client for the Proxmox VE REST API.

    Every public call funnels through :meth:`_request_resource` and
    :meth:`_process_http_response`. Error statuses are not raised: the decoded
    body is handed back and callers inspect it themselves.
    """

    def __init__(
        self,
        token_id: str = "",
        token_secret: str = "",
        host: str = "",
        port: int = DEFAULT_PORT,
        response_format: Optional[str] = DEFAULT_RESPONSE_FORMAT,
        transport: Optional[Transport] = None,
    ) -> None:
        """Initialize Proxmox client.

        Credentials are not checked here; a rejected token only shows up in
        the server's answer to the first request.

        Args:
            token_id: API token identifier, e.g. ``root@pam!automation``.
            token_secret: API token secret (UUID).
            host: Proxmox VE hostname or address.
            port: API port.
            response_format: Wire format or presentation alias.
            transport: HTTP requester. A default one is created when omitted.
        """
        self._token_id = token_id
        self._token_secret = token_secret
        self._host = host
        self._port = port
        self._owns_transport = False
        self._transport: Optional[Transport] = None
        self.set_transport(transport)
        self._format: ResponseFormat
        self.set_response_type(response_format)

    @classmethod
    def from_config(cls, config: ProxmoxConfig, transport: Optional[Transport] = None) -> 'ProxmoxClient':
        """Create a client from a loaded configuration.

        Args:
            config: Proxmox connection configuration.
            transport: HTTP requester overriding the configured default.

        Returns:
            Configured client.
        """
        owns_transport = transport is None
        if transport is None:
            transport = create_default_transport(verify_ssl=config.verify_ssl, timeout=config.timeout)

        client = cls(
            token_id=config.token_id,
            token_secret=config.token_secret,
            host=config.host,
            port=config.port,
            response_format=config.response_format,
            transport=transport,
        )
        client._owns_transport = owns_transport
        return client

    def __enter__(self) -> 'ProxmoxClient':
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and hasattr(self._transport, 'close'):
            self._transport.close()
            logger.debug("Default HTTP transport closed")

    @property
    def token_id(self) -> str:
        return self._token_id

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def transport(self) -> Transport:
        return self._transport

    def set_transport(self, transport: Optional[Transport] = None) -> None:
        """Set the HTTP requester used for subsequent calls.

        A transport the client created itself is closed before it is replaced.

        Args:
            transport: HTTP requester. ``None`` installs a fresh default one.
        """
        if transport is not None and transport is self._transport:
            return
        self.close()

        if transport is None:
            self._transport = create_default_transport(timeout=DEFAULT_TIMEOUT)
            self._owns_transport = True
        else:
            self._transport = transport
            self._owns_transport = False

    @property
    def response_type(self) -> str:
        return self.get_response_type()

    def get_response_type(self) -> str:
        """Return the active presentation alias, or the wire format if none."""
        return self._format.name

    def set_response_type(self, response_format: Optional[str] = DEFAULT_RESPONSE_FORMAT) -> None:
        """Set the response format used for subsequent calls.

        Args:
            response_format: One of ``json``, ``html``, ``extjs``, ``text``,
                ``png`` or the aliases ``array``, ``object``, ``pngb64``.
                Anything else falls back to ``array``.
        """
        self._format = resolve_response_format(response_format)
        if self._format.name != response_format:
            logger.debug(f"Unsupported response format {response_format!r}, using {self._format.name!r}")

    @property
    def api_url(self) -> str:
        return self.get_api_url()

    def get_api_url(self) -> str:
        """Return the base URL including the wire format segment."""
        return f"https://{self._host}:{self._port}/api2/{self._format.wire}"

    def _auth_headers(self) -> Dict[str, str]:
        return {'Authorization': f"PVEAPIToken={self._token_id}={self._token_secret}"}

    def _request_resource(
        self,
        path: str,
        params: Optional[Mapping] = None,
        method: str = 'GET',
        options: RequestOptions = RequestOptions(),
    ) -> Response:
        """Send a request to a Proxmox API resource.

        Args:
            path: Normalized resource path, e.g. ``/nodes``.
            params: Query parameters for GET, body fields otherwise.
            method: One of GET, POST, PUT, DELETE.
            options: Body encoding options for non-GET requests.

        Returns:
            The transport's response, whatever its status code.

        Raises:
            InvalidArgumentError: If the HTTP method is not allowed.
        """
        url = self.get_api_url() + path
        params = dict(params or {})
        headers = self._auth_headers()

        if method == 'GET':
            response = self._transport.get(url, headers=headers, params=params)
        elif method in ALLOWED_METHODS:
            if options.json:
                response = self._transport.request(method, url, headers=headers, json=params)
            else:
                response = self._transport.request(method, url, headers=headers, data=params)
        else:
            raise InvalidArgumentError(f"HTTP Request method {method} not allowed.")

        status = getattr(response, 'status_code', None)
        logger.debug(f"{method} {url} -> {status}")
        return response

    def _process_http_response(self, response: Optional[Response]) -> Any:
        """Decode a response according to the active response format.

        Args:
            response: Response returned by the transport.

        Returns:
            Parsed JSON data for ``array``/``object``, a data URI for
            ``pngb64``, the body text otherwise. ``None`` without a response.
            A plain ``png`` body is decoded as latin-1, one character per
            byte, so ``result.encode('latin-1')`` gives back the image.
        """
        if response is None:
            return None

        if self._format.alias == ALIAS_PNG_BASE64:
            return PNG_DATA_URI_PREFIX + base64.b64encode(response.content).decode('ascii')

        if self._format.is_structured:
            return self._decode_json(response)

        if self._format.wire == 'png':
            return response.content.decode('latin-1')

        return response.text

    @staticmethod
    def _decode_json(response: Response) -> Any:
        """Parse a JSON body, yielding ``None`` when it is empty or not JSON."""
        body = response.content
        if not body:
            return None
        try:
            return json.loads(body)
        except ValueError:
            logger.warning(
                f"Response with status {getattr(response, 'status_code', None)} is not valid JSON"
            )
            return None

    def _call(self, method: str, path: str, params: Any, json: bool = False) -> Any:
        """Validate arguments, send the request and decode the response."""
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise InvalidArgumentError(f"{method} params should be an associative array.")

        response = self._request_resource(normalize_path(path), params, method, RequestOptions(json=json))
        return self._process_http_response(response)

    def get(self, path: str, params: Optional[Mapping] = None) -> Any:
        """GET a resource.

        Args:
            path: Resource tree path, e.g. ``/nodes/pve1/qemu``.
            params: Query parameters.

        Returns:
            The decoded response.

        Raises:
            InvalidArgumentError: If params is not a mapping.
        """
        return self._call('GET', path, params)

    def set(self, path: str, params: Optional[Mapping] = None, *, json: bool = False) -> Any:
        """PUT (update) a resource.

        Args:
            path: Resource tree path.
            params: Body parameters.
            json: Send a JSON body instead of form fields.

        Returns:
            The decoded response.

        Raises:
            InvalidArgumentError: If params is not a mapping.
        """
        return self._call('PUT', path, params, json=json)

    def create(self, path: str, params: Optional[Mapping] = None, *, json: bool = False) -> Any:
        """POST (create) a resource.

        Args:
            path: Resource tree path.
            params: Body parameters.
            json: Send a JSON body instead of form fields.

        Returns:
            The decoded response.

        Raises:
            InvalidArgumentError: If params is not a mapping.
        """
        return self._call('POST', path, params, json=json)

    def delete(self, path: str, params: Optional[Mapping] = None, *, json: bool = False) -> Any:
        """DELETE a resource.

        Args:
            path: Resource tree path.
            params: Body parameters.
            json: Send a JSON body instead of form fields.

        Returns:
            The decoded response.

        Raises:
            InvalidArgumentError: If params is not a mapping.
        """
        return self._call('DELETE', path, params, json=json)

    def get_access(self) -> Any:
        """Retrieve the ``/access`` resource."""
        return self.get('/access')

    def get_cluster(self) -> Any:
        """Retrieve the ``/cluster`` resource."""
        return self.get('/cluster')

    def get_nodes(self) -> Any:
        """Retrieve the ``/nodes`` resource."""
        return self.get('/nodes')

    def get_pools(self) -> Any:
        """Retrieve the ``/pools`` resource."""
        return self.get('/pools')

    def get_version(self) -> Any:
        """Retrieve the ``/version`` resource."""
        return self.get('/version')

    def create_pool(self, pool_data: Mapping) -> Any:
        """Create a pool under ``/pools``.

        Args:
            pool_data: Pool parameters, at least ``poolid``.

        Raises:
            InvalidArgumentError: If pool_data is not a mapping.
        """
        if not isinstance(pool_data, Mapping):
            raise InvalidArgumentError("Pool data needs to be a mapping")
        return self.create('/pools', pool_data)

    def get_storages(self, storage_type: Optional[str] = None) -> Any:
        """Retrieve storages, optionally only those of one backend type.

        Args:
            storage_type: One of :data:`STORAGE_TYPES`.

        Returns:
            The decoded response, or ``None`` without sending a request when
            the storage type is not recognised.
        """
        if storage_type is None:
            return self.get('/storage')

        if storage_type not in STORAGE_TYPES:
            logger.debug(f"Unknown storage type {storage_type!r}, no request sent")
            return None

        return self.get('/storage', {'type': storage_type})

    def create_storage(self, storage_data: Mapping) -> Any:
        """Create a storage under ``/storage``.

        Args:
            storage_data: Storage parameters, at least ``storage`` and ``type``.

        Raises:
            InvalidArgumentError: If storage_data is not a mapping.
        """
        if not isinstance(storage_data, Mapping):
            raise InvalidArgumentError("Storage data needs to be a mapping")
        return self.create('/storage', storage_data)
