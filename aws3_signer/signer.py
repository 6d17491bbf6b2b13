"""
AWS3 request signer.

Signs requests with the AWS3 protocol: an HMAC-SHA256 signature computed
either over a canonical form of the request (``AWS3`` scheme) or over a
date and random nonce (``AWS3-HTTPS`` scheme, for encrypted transports).
The signature and the headers it depends on are written onto the request.
"""

import base64
import hashlib
import hmac
import time
import uuid
from urllib.parse import unquote
from email.utils import formatdate
from typing import List, Optional

import structlog

from .canonical import (
    append_uri,
    canonicalized_query_string,
    canonicalized_resource_path,
    host_header,
    parse_endpoint,
    payload_without_query_params,
)
from .constants import (
    HEADER_AMZ_DATE,
    HEADER_AUTHORIZATION,
    HEADER_DATE,
    HEADER_HOST,
    HEADER_NONCE,
    HEADER_SECURITY_TOKEN,
    HTTP_SCHEME,
    HTTPS_SCHEME,
    SIGNED_HEADER_HOST,
    SIGNED_HEADER_PREFIX,
    SigningAlgorithm,
)
from .credentials import AnonymousCredentials, Credentials, SessionCredentials
from .exceptions import CryptoError, EncodingError, InvalidInputError
from .request import SignableRequest

logger = structlog.get_logger(__name__)


class AWS3Signer:
    """
    Signer for the AWS3 protocol.

    One instance may sign requests from several threads; the only state it
    keeps is the optional date override set through :meth:`override_date`.
    Pass ``date=`` to :meth:`sign` instead when concurrent callers each need
    a fixed date.
    """

    def __init__(self, use_https_nonce: bool = False):
        """
        Initialize signer.

        Args:
            use_https_nonce: Sign date+nonce (AWS3-HTTPS) instead of the
                canonical request (AWS3)
        """
        self.use_https_nonce = use_https_nonce
        self._overridden_date: Optional[str] = None

    def override_date(self, date: Optional[str]) -> None:
        """
        For testing only: sign every following request with this RFC 822
        date string instead of the current time. ``None`` clears it.
        """
        self._overridden_date = date

    def sign(
        self,
        request: SignableRequest,
        credentials: Credentials,
        *,
        use_https_nonce: Optional[bool] = None,
        date: Optional[str] = None,
    ) -> None:
        """
        Sign a request in place.

        Args:
            request: Request to sign; its headers are updated
            credentials: Credentials to sign with
            use_https_nonce: Overrides the instance mode for this call
            date: RFC 822 date to use for this call instead of the current time

        Raises:
            InvalidInputError: If request is None
            EndpointParseError: If the request endpoint is not a valid http(s) URL
            EncodingError: If the string to sign cannot be encoded as UTF-8
            CryptoError: If the HMAC key is rejected
        """
        if request is None:
            raise InvalidInputError("Unable to sign request: no request given")
        if credentials is None:
            raise InvalidInputError("Unable to sign request: no credentials given")

        if isinstance(credentials, AnonymousCredentials):
            logger.debug("Anonymous credentials, request left unsigned")
            return

        # Left over from an earlier signing; x-amzn-authorization would otherwise be signed
        request.remove_header(HEADER_AUTHORIZATION)
        request.remove_header(HEADER_NONCE)

        credentials = credentials.sanitized()
        algorithm = SigningAlgorithm.HmacSHA256
        if use_https_nonce is None:
            use_https_nonce = self.use_https_nonce

        date = date or self._overridden_date or self._signature_date(request.time_offset)
        request.add_header(HEADER_DATE, date)
        request.add_header(HEADER_AMZ_DATE, date)

        # The Host header is signed, so it has to be present before signing
        request.add_header(HEADER_HOST, host_header(request.endpoint))

        if isinstance(credentials, SessionCredentials) and credentials.session_token:
            request.add_header(HEADER_SECURITY_TOKEN, credentials.session_token)

        if use_https_nonce:
            nonce = str(uuid.uuid4())
            request.add_header(HEADER_NONCE, nonce)
            string_to_sign = date + nonce
            bytes_to_sign = _utf8(string_to_sign)
        else:
            string_to_sign = self.string_to_sign(request)
            bytes_to_sign = hashlib.sha256(_utf8(string_to_sign)).digest()
        scheme = HTTPS_SCHEME if use_https_nonce else HTTP_SCHEME
        logger.debug(
            "Calculated string to sign",
            scheme=scheme,
            string_to_sign=string_to_sign,
        )

        signature = sign_and_base64_encode(bytes_to_sign, credentials.secret_key, algorithm)

        parts = [
            f"AWSAccessKeyId={credentials.access_key_id}",
            f"Algorithm={algorithm.value}",
        ]
        if not use_https_nonce:
            parts.append("SignedHeaders=" + ";".join(self.headers_to_sign(request)))
        parts.append(f"Signature={signature}")

        request.add_header(HEADER_AUTHORIZATION, f"{scheme} " + ",".join(parts))

    def string_to_sign(self, request: SignableRequest) -> str:
        """
        Canonical request string for the AWS3 scheme.

        Query parameters always go on the third line, even when they will
        be sent in a form-encoded body, and are then left out of the payload
        line.
        """
        endpoint_path = unquote(parse_endpoint(request.endpoint).path)
        path = append_uri(endpoint_path, request.resource_path)
        return "\n".join([
            request.http_method.upper(),
            canonicalized_resource_path(path),
            canonicalized_query_string(request.parameters),
            self.canonical_headers(request),
            payload_without_query_params(request),
        ])

    def headers_to_sign(self, request: SignableRequest) -> List[str]:
        """Lower-cased, sorted names of the headers covered by the signature."""
        return sorted(self._signed_header_map(request))

    def canonical_headers(self, request: SignableRequest) -> str:
        header_map = self._signed_header_map(request)
        return "".join(f"{name}:{header_map[name]}\n" for name in sorted(header_map))

    def _signed_header_map(self, request: SignableRequest) -> dict:
        header_map = {}
        for name, value in request.headers.items():
            lname = name.lower()
            if lname.startswith(SIGNED_HEADER_PREFIX) or lname == SIGNED_HEADER_HOST:
                header_map[lname] = value
        return header_map

    @staticmethod
    def _signature_date(time_offset: int) -> str:
        return formatdate(time.time() + (time_offset or 0), usegmt=True)


def sign_and_base64_encode(
    data: bytes,
    key: str,
    algorithm: SigningAlgorithm = SigningAlgorithm.HmacSHA256,
) -> str:
    """
    HMAC ``data`` with ``key`` and return the base64 encoded digest.

    Raises:
        EncodingError: If the key cannot be encoded as UTF-8
        CryptoError: If the key or algorithm is rejected
    """
    key_bytes = _utf8(key)
    try:
        mac = hmac.new(key_bytes, data, algorithm.digestmod)
    except (TypeError, ValueError) as e:
        raise CryptoError(f"Unable to calculate a request signature: {e}") from e
    return base64.b64encode(mac.digest()).decode('ascii')


def _utf8(value: str) -> bytes:
    try:
        return value.encode('utf-8')
    except (AttributeError, UnicodeEncodeError) as e:
        raise EncodingError(f"Unable to serialize string to bytes: {e}") from e
