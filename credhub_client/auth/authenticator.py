"""Authentication negotiation against CredHub and its UAA server.

The flow:
    1. ``GET /info`` on the CredHub server to discover the UAA URL
    2. ``POST {uaa}/oauth/token`` with a password (or client credentials) grant
    3. Validate the token response and wrap it in a bearer ``SigningCredential``

When ``/info`` advertises no authorization server the service is assumed to
accept basic auth and the identity is wrapped as a basic-auth pair instead.
No refresh is ever attempted: an expired token surfaces as ``AuthError`` on
the next call and the caller constructs a new client.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from credhub_client.auth.signer import SigningCredential
from credhub_client.enums import GrantType
from credhub_client.exceptions import AuthError, NotFoundError, RequestError
from credhub_client.transport import HTTPTransport, json_body

log = structlog.get_logger(__name__)

# Public client registered in every UAA deployed alongside CredHub
DEFAULT_CLIENT_ID = "credhub_cli"


@dataclass(frozen=True)
class Identity:
    """Who is authenticating.

    For the password grant ``principal``/``secret`` are a username and
    password. For the client-credentials grant they are a client id and
    client secret.
    """

    principal: str
    secret: str = field(repr=False)
    grant_type: GrantType = GrantType.PASSWORD


class Authenticator:
    """Negotiates a ``SigningCredential`` for one CredHub server."""

    def __init__(self, transport: HTTPTransport, server_url: str) -> None:
        """Initialize authenticator.

        Args:
            transport: Transport shared with the client (TLS settings included)
            server_url: CredHub base URL
        """
        self.transport = transport
        self.server_url = server_url.rstrip("/")

    def discover_auth_server(self) -> str | None:
        """Look up the authorization server advertised by ``/info``.

        Returns:
            UAA base URL, or None if the service advertises none

        Raises:
            AuthError: TLS verification failed or ``/info`` was refused
            RequestError: ``/info`` is unreachable or malformed
        """
        try:
            response = self.transport.get(f"{self.server_url}/info")
        except NotFoundError as e:
            raise RequestError(f"{self.server_url} does not expose /info", status_code=404) from e

        info = json_body(response)
        if not isinstance(info, dict):
            raise RequestError("Unexpected /info response", status_code=response.status_code, response_text=response.text)

        auth_server = info.get("auth-server") or {}
        url = auth_server.get("url") if isinstance(auth_server, dict) else None
        log.debug("auth_server_discovered", auth_server=url)
        return url.rstrip("/") if url else None

    def negotiate(self, identity: Identity) -> SigningCredential:
        """Produce a signing credential for ``identity``.

        Raises:
            AuthError: Credentials rejected, unusable token, or TLS failure
            RequestError: Discovery or token endpoint failed for another reason
        """
        auth_server = self.discover_auth_server()

        if auth_server is None:
            log.info("credhub_basic_auth", server=self.server_url)
            return SigningCredential.basic(identity.principal, identity.secret)

        credential = self.exchange_token(auth_server, identity)
        log.info(
            "credhub_authenticated",
            server=self.server_url,
            grant_type=identity.grant_type.value,
            expires_in=credential.expires_in,
        )
        return credential

    def exchange_token(self, auth_server: str, identity: Identity) -> SigningCredential:
        """Run the OAuth2 token exchange against ``auth_server``."""
        form = self._grant_form(identity)

        try:
            response = self.transport.post(f"{auth_server}/oauth/token", data=form)
        except AuthError as e:
            if e.status_code is None:
                raise
            raise AuthError(
                f"Authorization server rejected credentials for {identity.principal}",
                status_code=e.status_code,
            ) from e
        except NotFoundError as e:
            raise RequestError(f"{auth_server} has no token endpoint", status_code=404) from e
        except RequestError as e:
            # UAA answers bad passwords with 400 invalid_grant
            if e.status_code == 400:
                raise AuthError(
                    f"Authorization server rejected credentials for {identity.principal}",
                    status_code=400,
                ) from e
            raise

        try:
            payload = json_body(response)
        except RequestError as e:
            raise AuthError("Token response is not valid JSON", status_code=response.status_code) from e

        return self._validate_token(payload)

    @staticmethod
    def _grant_form(identity: Identity) -> dict[str, str]:
        if identity.grant_type == GrantType.CLIENT_CREDENTIALS:
            return {
                "grant_type": GrantType.CLIENT_CREDENTIALS.value,
                "client_id": identity.principal,
                "client_secret": identity.secret,
                "response_type": "token",
            }
        return {
            "grant_type": GrantType.PASSWORD.value,
            "username": identity.principal,
            "password": identity.secret,
            "client_id": DEFAULT_CLIENT_ID,
            "client_secret": "",
            "response_type": "token",
        }

    @staticmethod
    def _validate_token(payload: Any) -> SigningCredential:
        """Check that a token response carries a usable bearer token.

        Raises:
            AuthError: If the access token is missing or not a bearer token
        """
        if not isinstance(payload, dict):
            raise AuthError("Token response is not a JSON object")

        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token.strip():
            raise AuthError("Token response has no access_token")

        token_type = payload.get("token_type")
        if token_type is not None and str(token_type).lower() != "bearer":
            raise AuthError(f"Unsupported token type: {token_type}")

        expires_in = payload.get("expires_in")
        if not isinstance(expires_in, int) or isinstance(expires_in, bool):
            expires_in = None

        return SigningCredential.bearer(access_token.strip(), expires_in=expires_in)
