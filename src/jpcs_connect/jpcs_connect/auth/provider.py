from __future__ import annotations

from typing import Mapping, Optional, Protocol

from ..core.exceptions import AuthenticationError
from .model import Identity


class IdentityProvider(Protocol):
    def verify(self, credential: str) -> Identity:
        """Exchange a sign-in credential for a verified identity.

        Raises AuthenticationError when the credential is rejected.
        """

        raise NotImplementedError


class StaticIdentityProvider(IdentityProvider):
    """Pre-shared credentials mapped to identities (development and tests)."""

    def __init__(self, identities: Optional[Mapping[str, Identity]] = None):
        self._identities = dict(identities or {})

    @classmethod
    def from_config(cls, raw: Optional[Mapping[str, Mapping[str, str]]]) -> "StaticIdentityProvider":
        identities = {}
        for credential, info in (raw or {}).items():
            identities[credential] = Identity(
                uid=str(info["uid"]),
                display_name=str(info.get("displayName", "")),
                email=str(info.get("email", "")),
                photo_url=str(info.get("photoURL", "")),
            )
        return cls(identities)

    def verify(self, credential: str) -> Identity:
        identity = self._identities.get((credential or "").strip())
        if not identity:
            raise AuthenticationError("Sign-in was cancelled or the credential is invalid")
        return identity
