"""Rendering requests as ``scheme://command?key=value`` locators."""

from urllib.parse import quote

from pydantic import ValidationError

from mk.errors import LocatorError
from mk.models import Request

DEFAULT_SCHEME = 'x-marked-3'

# Reserved characters left readable in query values. '&', '=', '+', '#', '?'
# and ';' are always escaped so values decode back unchanged.
QUERY_SAFE = "/:@!$'()*,"


def encode_query_value(value: str) -> str:
    """Percent-encode a value for use inside a URL query component."""
    return quote(value, safe=QUERY_SAFE)


def build_request(command: str, params: dict[str, str] | None = None) -> Request:
    """Build a validated Request, raising LocatorError when it is invalid."""
    try:
        return Request(command=command, params=params or {})
    except ValidationError as exc:
        msg = f'Could not build URL scheme for command {command!r}'
        raise LocatorError(msg) from exc


def build_locator(request: Request, scheme: str = DEFAULT_SCHEME) -> str:
    """Render a request as a locator string."""
    if not scheme:
        msg = 'Could not build URL scheme: empty scheme'
        raise LocatorError(msg)

    locator = f'{scheme}://{request.command}'
    if request.params:
        query = '&'.join(
            f'{encode_query_value(key)}={encode_query_value(value)}' for key, value in request.params.items()
        )
        locator = f'{locator}?{query}'
    return locator
