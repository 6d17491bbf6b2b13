"""
Canonicalization helpers for the AWS3 string to sign.

These functions turn the parts of a request (endpoint, path, query
parameters, payload) into the exact text the receiving service re-derives
when it verifies a signature.
"""

from typing import Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import SplitResult, parse_qsl, quote, urlsplit

from .constants import DEFAULT_PORTS, UNRESERVED_CHARACTERS
from .exceptions import EncodingError, EndpointParseError


def parse_endpoint(endpoint: str) -> SplitResult:
    """
    Split an endpoint URL and validate it.

    Raises:
        EndpointParseError: If the URL is malformed, has no host, carries an
            invalid port, or uses a scheme other than http/https
    """
    if not endpoint:
        raise EndpointParseError("Unable to parse request endpoint during signing: empty endpoint")
    try:
        parts = urlsplit(endpoint)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise EndpointParseError(
            f"Unable to parse request endpoint during signing: {e}"
        ) from e

    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise EndpointParseError(
            "Unknown request endpoint protocol encountered while signing "
            f"request: {scheme or '<none>'}"
        )
    if not parts.hostname:
        raise EndpointParseError(
            f"Unable to parse request endpoint during signing: no host in {endpoint!r}"
        )
    return parts


def is_using_non_default_port(endpoint: str) -> bool:
    parts = parse_endpoint(endpoint)
    if parts.port is None or parts.port <= 0:
        return False
    return parts.port != DEFAULT_PORTS[parts.scheme.lower()]


def host_header(endpoint: str) -> str:
    """Value of the Host header for an endpoint, with the port only when non-default."""
    parts = parse_endpoint(endpoint)
    host = parts.hostname
    if ':' in host:
        host = f'[{host}]'
    if is_using_non_default_port(endpoint):
        host = '%s:%d' % (host, parts.port)
    return host


def should_use_https_scheme(endpoint: str) -> bool:
    """Map an endpoint's scheme to the nonce-mode flag (https -> True)."""
    return parse_endpoint(endpoint).scheme.lower() == 'https'


def append_uri(base: Optional[str], path: Optional[str]) -> str:
    """Join an endpoint path and a resource path with exactly one '/' between them."""
    result = base or ""
    if path:
        if path.startswith('/'):
            if result.endswith('/'):
                result = result[:-1]
        elif not result.endswith('/'):
            result += '/'
        result += path
    elif not result.endswith('/'):
        result += '/'
    return result


def url_encode(value: Optional[str], path: bool = False) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters (and '/' for paths)."""
    if value is None:
        return ""
    safe = UNRESERVED_CHARACTERS + ('/' if path else '')
    return quote(str(value), safe=safe)


def canonicalized_resource_path(path: Optional[str]) -> str:
    if not path:
        return '/'
    value = url_encode(path, path=True)
    if not value.startswith('/'):
        value = '/' + value
    return value


def canonicalized_query_string(
    parameters: Union[Mapping, Iterable[Tuple[str, Optional[str]]], None]
) -> str:
    """
    Build the canonical query string.

    Names and values are percent-encoded first, then the encoded pairs are
    sorted by name and, for repeated names, by value. Sorting the encoded
    form is what the receiving service re-derives; it differs from sorting
    raw names when they contain reserved characters (``a/`` sorts after
    ``a-`` raw, but ``a%2F`` sorts before ``a-`` encoded).
    """
    if not parameters:
        return ""
    if isinstance(parameters, Mapping):
        parameters = parameters.items()
    key_val_pairs = [
        (url_encode(name), url_encode(value)) for name, value in parameters
    ]
    return '&'.join(f'{key}={value}' for key, value in sorted(key_val_pairs))


def payload_without_query_params(request) -> str:
    """
    Request content as text for the last line of the string to sign.

    Content that merely form-encodes the request parameters is left out:
    those parameters are already covered by the query string line.

    Raises:
        EncodingError: If the content is not valid UTF-8
    """
    content = request.content
    if not content:
        return ""
    try:
        payload = content.decode('utf-8')
    except UnicodeDecodeError as e:
        raise EncodingError(f"Unable to read request payload as UTF-8: {e}") from e

    if request.parameters and _is_form_encoded(payload, request.parameters):
        return ""
    return payload


def _is_form_encoded(payload: str, parameters) -> bool:
    try:
        decoded = parse_qsl(payload, keep_blank_values=True, strict_parsing=True)
    except ValueError:
        return False
    expected = [
        (name, "" if value is None else str(value)) for name, value in parameters
    ]
    return sorted(decoded) == sorted(expected)
