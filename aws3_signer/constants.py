"""
Constants for the AWS3 signer.
"""

import enum
import hashlib

# HTTP headers written by the signer
HEADER_DATE = "Date"
HEADER_AMZ_DATE = "X-Amz-Date"
HEADER_HOST = "Host"
HEADER_SECURITY_TOKEN = "x-amz-security-token"
HEADER_NONCE = "x-amz-nonce"
HEADER_AUTHORIZATION = "X-Amzn-Authorization"

# Authorization scheme tokens
HTTP_SCHEME = "AWS3"
HTTPS_SCHEME = "AWS3-HTTPS"

# Headers participating in the canonical request
SIGNED_HEADER_PREFIX = "x-amz"
SIGNED_HEADER_HOST = "host"

DEFAULT_PORTS = {
    'http': 80,
    'https': 443,
}

# RFC 3986 unreserved characters, besides alphanumerics
UNRESERVED_CHARACTERS = "-_.~"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"


class SigningAlgorithm(enum.Enum):
    """HMAC variants understood by the signer."""

    HmacSHA256 = "HmacSHA256"

    @property
    def digestmod(self):
        return hashlib.sha256


# Default client configuration
DEFAULT_CONFIG = {
    'timeout': 30,              # HTTP timeout in seconds
    'use_https_nonce': False,   # sign date+nonce instead of the canonical request
    'time_offset': 0,           # clock skew compensation in seconds
}
