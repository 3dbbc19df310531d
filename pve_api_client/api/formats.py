"""Response format resolution.

The Proxmox API renders a response according to the format segment embedded
in the URL (``/api2/<format>/...``). On top of those wire formats the client
offers a few presentation aliases that only change how a body is decoded:

* ``array`` / ``object``: request ``json`` and parse it into Python data.
* ``pngb64``: request ``png`` and return a base64 ``data:`` URI.
"""

from typing import NamedTuple, Optional


WIRE_FORMATS = ('json', 'html', 'extjs', 'text', 'png')

ALIAS_ARRAY = 'array'
ALIAS_OBJECT = 'object'
ALIAS_PNG_BASE64 = 'pngb64'

STRUCTURED_ALIASES = (ALIAS_ARRAY, ALIAS_OBJECT)

DEFAULT_RESPONSE_FORMAT = ALIAS_ARRAY


class ResponseFormat(NamedTuple):
    """Active wire format and optional presentation alias."""

    wire: str
    alias: Optional[str] = None

    @property
    def name(self) -> str:
        """Name reported back to callers: the alias if any, else the wire format."""
        return self.alias or self.wire

    @property
    def is_structured(self) -> bool:
        """Whether bodies are parsed as JSON into Python data."""
        return self.alias in STRUCTURED_ALIASES


def resolve_response_format(requested: Optional[str] = DEFAULT_RESPONSE_FORMAT) -> ResponseFormat:
    """Map a requested format name onto a wire format and alias.

    Unknown names fall back to the ``array`` alias over ``json``.

    Args:
        requested: One of the wire formats or presentation aliases.

    Returns:
        The resolved response format.
    """
    if requested in WIRE_FORMATS:
        return ResponseFormat(wire=requested)
    if requested == ALIAS_PNG_BASE64:
        return ResponseFormat(wire='png', alias=ALIAS_PNG_BASE64)
    if requested in STRUCTURED_ALIASES:
        return ResponseFormat(wire='json', alias=requested)
    return ResponseFormat(wire='json', alias=ALIAS_ARRAY)
