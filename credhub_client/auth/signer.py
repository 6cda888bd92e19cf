"""Request-signing credentials.

A ``SigningCredential`` is produced once by negotiation and never mutated,
so a client can share it across calls (and threads) without locking.
"""

import base64
from collections.abc import Generator
from dataclasses import dataclass, field

import httpx

from credhub_client.enums import AuthScheme


@dataclass(frozen=True)
class SigningCredential:
    """Bearer token or basic-auth pair attached to outgoing requests."""

    scheme: AuthScheme
    token: str = field(repr=False)
    expires_in: int | None = None

    @classmethod
    def bearer(cls, access_token: str, expires_in: int | None = None) -> "SigningCredential":
        return cls(scheme=AuthScheme.BEARER, token=access_token, expires_in=expires_in)

    @classmethod
    def basic(cls, username: str, password: str) -> "SigningCredential":
        encoded = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        return cls(scheme=AuthScheme.BASIC, token=encoded)

    @property
    def authorization_header(self) -> str:
        """Value of the ``Authorization`` header."""
        return f"{self.scheme.value} {self.token}"


class CredentialAuth(httpx.Auth):
    """httpx auth hook that signs every request with a ``SigningCredential``."""

    def __init__(self, credential: SigningCredential) -> None:
        self.credential = credential

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self.credential.authorization_header
        yield request
