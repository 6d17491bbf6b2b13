"""
Credential variants accepted by the signer.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Credentials:
    """Access key id and secret key used to sign requests."""
    access_key_id: str
    secret_key: str

    def sanitized(self) -> "Credentials":
        """Return a copy with surrounding whitespace removed from each field."""
        return replace(
            self,
            access_key_id=_strip(self.access_key_id),
            secret_key=_strip(self.secret_key),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(access_key_id={self.access_key_id!r})"


@dataclass(frozen=True, repr=False)
class SessionCredentials(Credentials):
    """Temporary credentials carrying a session token."""
    session_token: Optional[str] = None

    def sanitized(self) -> "SessionCredentials":
        creds = super().sanitized()
        return replace(creds, session_token=_strip(self.session_token))


@dataclass(frozen=True, repr=False)
class AnonymousCredentials(Credentials):
    """No identity. Requests signed with these are left untouched."""
    access_key_id: Optional[str] = None
    secret_key: Optional[str] = None


def _strip(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()
