"""
AWS3 Request Signer

Signs outbound API requests with the AWS3 HMAC-SHA256 protocol, either over
a canonical form of the request or over a date and nonce for HTTPS.

Example usage:
    from aws3_signer import AWS3Signer, Credentials, SignableRequest

    request = SignableRequest("https://rds.amazonaws.com", "POST", "/")
    AWS3Signer().sign(request, Credentials("AKID", "secret"))
    request.headers["X-Amzn-Authorization"]
"""

from .client import AWS3Client
from .credentials import AnonymousCredentials, Credentials, SessionCredentials
from .exceptions import (
    AWS3ClientError,
    SigningError,
    InvalidInputError,
    EndpointParseError,
    EncodingError,
    CryptoError,
    ConfigurationError,
    HTTPError
)
from .constants import (
    HEADER_AUTHORIZATION,
    HEADER_NONCE,
    HEADER_SECURITY_TOKEN,
    HTTP_SCHEME,
    HTTPS_SCHEME,
    DEFAULT_CONFIG,
    SigningAlgorithm
)
from .request import SignableRequest
from .signer import AWS3Signer

__version__ = "1.0.0"
__all__ = [
    "AWS3Client",
    "AWS3Signer",
    "SignableRequest",
    "Credentials",
    "SessionCredentials",
    "AnonymousCredentials",
    "AWS3ClientError",
    "SigningError",
    "InvalidInputError",
    "EndpointParseError",
    "EncodingError",
    "CryptoError",
    "ConfigurationError",
    "HTTPError",
    "HEADER_AUTHORIZATION",
    "HEADER_NONCE",
    "HEADER_SECURITY_TOKEN",
    "HTTP_SCHEME",
    "HTTPS_SCHEME",
    "DEFAULT_CONFIG",
    "SigningAlgorithm"
]
