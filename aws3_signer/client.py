"""
HTTP client that sends AWS3-signed requests.

This module wraps :class:`~aws3_signer.signer.AWS3Signer` around a
``requests`` session: requests are built, signed and then sent.
"""

import json
from typing import Dict, Optional, Union
from urllib.parse import urlencode

import requests
import structlog

from .canonical import append_uri, parse_endpoint
from .constants import DEFAULT_CONFIG, FORM_CONTENT_TYPE
from .credentials import Credentials
from .exceptions import ConfigurationError, HTTPError
from .request import SignableRequest, as_parameter_pairs
from .signer import AWS3Signer

logger = structlog.get_logger(__name__)


class AWS3Client:
    """
    Client for making AWS3-signed requests to a service endpoint.

    Supports both signing variants: the canonical request (``AWS3``) and the
    date+nonce scheme used over HTTPS (``AWS3-HTTPS``).
    """

    def __init__(self, endpoint: str, credentials: Credentials, **config):
        """
        Initialize AWS3 client.

        Args:
            endpoint: Service endpoint, e.g. ``https://rds.amazonaws.com``
            credentials: Credentials to sign with
            **config: Configuration options (timeout, use_https_nonce, time_offset)
        """
        self.endpoint = endpoint.rstrip('/')
        self.credentials = credentials

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        # Validate configuration
        self._validate_config()

        self.signer = AWS3Signer(use_https_nonce=self.config['use_https_nonce'])

        # Create HTTP session
        self.session = requests.Session()

    def _validate_config(self):
        """Validate client configuration."""
        if self.credentials is None:
            raise ConfigurationError("credentials cannot be empty")

        if not isinstance(self.config['time_offset'], int):
            raise ConfigurationError("time_offset must be an integer number of seconds")

        if self.config['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

        unknown = set(self.config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"unknown configuration options: {', '.join(sorted(unknown))}")

    def build_request(
        self,
        method: str,
        resource_path: str = "",
        parameters=None,
        data: Union[str, bytes, None] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> SignableRequest:
        """Create an unsigned request against the client's endpoint."""
        return SignableRequest(
            endpoint=self.endpoint,
            http_method=method.upper(),
            resource_path=resource_path,
            headers=dict(headers or {}),
            parameters=parameters,
            content=data,
            time_offset=self.config['time_offset'],
        )

    def sign(self, request: SignableRequest) -> SignableRequest:
        """Sign a request with the client's credentials and return it."""
        self.signer.sign(request, self.credentials)
        return request

    def request(
        self,
        method: str,
        resource_path: str = "",
        parameters=None,
        json_data=None,
        data: Union[str, bytes, None] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> requests.Response:
        """
        Make a signed HTTP request.

        Args:
            method: HTTP method
            resource_path: Path relative to the endpoint
            parameters: Query parameters, a mapping or ``(name, value)`` pairs
            json_data: JSON data to send
            data: Raw data to send
            headers: Extra headers
            **kwargs: Additional requests arguments

        Returns:
            requests.Response object

        Raises:
            SigningError: If the request cannot be signed
            HTTPError: If request fails
        """
        headers = dict(headers or {})
        if json_data is not None:
            data = json.dumps(json_data, separators=(',', ':'))
            headers['Content-Type'] = 'application/json'

        signable = self.sign(self.build_request(method, resource_path, parameters, data, headers))

        # Query protocol: a POST without a body carries its parameters form-encoded.
        # They are already covered by the signature through the query string line.
        body = signable.content
        params = signable.parameters
        if signable.http_method == 'POST' and not body and params:
            body = urlencode([(k, '' if v is None else v) for k, v in params]).encode('utf-8')
            signable.headers['Content-Type'] = FORM_CONTENT_TYPE
            params = None

        parts = parse_endpoint(signable.endpoint)
        url = parts._replace(path=append_uri(parts.path, resource_path)).geturl()
        kwargs.setdefault('timeout', self.config['timeout'])

        try:
            return self.session.request(
                signable.http_method,
                url,
                params=params or None,
                data=body or None,
                headers=signable.headers,
                **kwargs
            )
        except requests.RequestException as e:
            logger.warning("HTTP request failed", method=signable.http_method, url=url, error=str(e))
            raise HTTPError(f"HTTP request failed: {e}") from e

    def query(self, action: str, version: str, parameters=None, **kwargs) -> requests.Response:
        """Call a query-protocol action (``Action``/``Version`` POST parameters)."""
        pairs = [('Action', action), ('Version', version)]
        pairs.extend(as_parameter_pairs(parameters))
        return self.request('POST', '/', parameters=pairs, **kwargs)

    def get(self, resource_path: str, **kwargs) -> requests.Response:
        """Make signed GET request."""
        return self.request('GET', resource_path, **kwargs)

    def post(self, resource_path: str, json=None, data=None, **kwargs) -> requests.Response:
        """Make signed POST request."""
        return self.request('POST', resource_path, json_data=json, data=data, **kwargs)

    def put(self, resource_path: str, json=None, data=None, **kwargs) -> requests.Response:
        """Make signed PUT request."""
        return self.request('PUT', resource_path, json_data=json, data=data, **kwargs)

    def delete(self, resource_path: str, **kwargs) -> requests.Response:
        """Make signed DELETE request."""
        return self.request('DELETE', resource_path, **kwargs)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
