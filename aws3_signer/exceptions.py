"""
Custom exceptions for the AWS3 signer.
"""


class AWS3ClientError(Exception):
    """Base exception for AWS3 signer and client errors."""
    pass


class SigningError(AWS3ClientError):
    """Raised when a request cannot be signed on the client side."""
    pass


class InvalidInputError(SigningError):
    """Raised when no request is given to sign."""
    pass


class EndpointParseError(SigningError):
    """Raised when the request endpoint is not a valid http(s) URL."""
    pass


class EncodingError(SigningError):
    """Raised when signing material cannot be converted to UTF-8 bytes."""
    pass


class CryptoError(SigningError):
    """Raised when the HMAC key or algorithm is rejected."""
    pass


class ConfigurationError(AWS3ClientError):
    """Raised when client configuration is invalid."""
    pass


class HTTPError(AWS3ClientError):
    """Raised when HTTP request fails."""
    pass
