"""CredHub retrieval client.

Example:
    Fetching a password::

        from credhub_client import new, password_value

        with new("https://credhub.example.com:8844", "admin", "secret") as client:
            credential = client.get_latest_by_name("/concourse/main/db-password")
            print(password_value(credential))
"""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
import structlog

from credhub_client.auth import Authenticator, CredentialAuth, Identity, SigningCredential
from credhub_client.enums import GrantType
from credhub_client.exceptions import NotFoundError, RequestError
from credhub_client.models.credential import Credential, CredentialSummary, newest_first
from credhub_client.transport import HTTPTransport, json_body

if TYPE_CHECKING:
    from credhub_client.config.settings import ClientSettings

log = structlog.get_logger(__name__)

DATA_PATH = "/api/v1/data"


class CredHubClient:
    """Authenticated, read-only client for one CredHub server.

    Negotiation happens once, in the constructor. The resulting signing
    credential is immutable and reused for every call until the client is
    closed; a rejected or expired credential is never refreshed.
    """

    def __init__(
        self,
        server_url: str,
        username: str,
        password: str,
        allow_insecure_tls: bool = False,
        *,
        client_credentials: bool = False,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize client and authenticate.

        Args:
            server_url: CredHub base URL (e.g., https://credhub.example.com:8844)
            username: Username, or client id when ``client_credentials`` is set
            password: Password, or client secret when ``client_credentials`` is set
            allow_insecure_tls: Skip TLS certificate verification for every call
            client_credentials: Use the OAuth2 client-credentials grant
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used to substitute a fake server)

        Raises:
            AuthError: Credentials rejected or TLS verification failed
            RequestError: The server could not be reached or answered unexpectedly
        """
        self.server_url = server_url.rstrip("/")
        self._http = HTTPTransport(
            self.server_url,
            allow_insecure_tls=allow_insecure_tls,
            timeout=timeout,
            transport=transport,
        )

        grant = GrantType.CLIENT_CREDENTIALS if client_credentials else GrantType.PASSWORD
        try:
            self._credential = Authenticator(self._http, self.server_url).negotiate(
                Identity(principal=username, secret=password, grant_type=grant)
            )
        except Exception:
            self._http.close()
            raise

        self._auth = CredentialAuth(self._credential)

    @classmethod
    def from_settings(
        cls,
        settings: "ClientSettings",
        transport: httpx.BaseTransport | None = None,
    ) -> "CredHubClient":
        """Create a client from loaded settings."""
        return cls(
            str(settings.server_url),
            settings.username,
            settings.password.get_secret_value(),
            settings.allow_insecure_tls,
            client_credentials=settings.client_credentials,
            timeout=settings.timeout,
            transport=transport,
        )

    @property
    def credential(self) -> SigningCredential:
        """The signing credential negotiated at construction."""
        return self._credential

    @property
    def allow_insecure_tls(self) -> bool:
        return self._http.allow_insecure_tls

    def close(self) -> None:
        """Release the HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> "CredHubClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        response = self._http.get(path, params=params, auth=self._auth)
        return json_body(response)

    def _get_data(self, name: str, params: dict[str, str]) -> list[Credential]:
        """Run a name query and return its envelopes newest-first."""
        try:
            body = self._get(DATA_PATH, params={"name": name, **params})
        except NotFoundError as e:
            raise NotFoundError("Credential not found", resource=name) from e

        records = body.get("data") if isinstance(body, dict) else None
        if not isinstance(records, list):
            raise RequestError(f"Unexpected response for credential {name}", status_code=200)
        if not records:
            raise NotFoundError("Credential not found", resource=name)

        return newest_first([self._parse_credential(record) for record in records])

    @staticmethod
    def _parse_credential(data: Any) -> Credential:
        try:
            return Credential.from_api(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RequestError(f"Malformed credential record: {e}", status_code=200) from e

    def find_by_path(self, path: str) -> list[CredentialSummary]:
        """List the credentials stored under a path prefix.

        Raises:
            NotFoundError: If nothing is stored under ``path``
        """
        log.info("credential_lookup", operation="find_by_path", path=path)

        try:
            body = self._get(DATA_PATH, params={"path": path})
        except NotFoundError as e:
            raise NotFoundError("No credentials under path", resource=path) from e

        records = body.get("credentials") if isinstance(body, dict) else None
        if not isinstance(records, list):
            raise RequestError(f"Unexpected response for path {path}", status_code=200)
        if not records:
            raise NotFoundError("No credentials under path", resource=path)

        try:
            return [CredentialSummary.from_api(record) for record in records]
        except (KeyError, TypeError, ValueError) as e:
            raise RequestError(f"Malformed credential summary: {e}", status_code=200) from e

    def list_all_paths(self) -> list[str]:
        """List every path known to the service."""
        log.info("credential_lookup", operation="list_all_paths")

        body = self._get(DATA_PATH, params={"paths": "true"})
        records = body.get("paths") if isinstance(body, dict) else None
        if not isinstance(records, list):
            raise RequestError("Unexpected response for path listing", status_code=200)

        try:
            return [record["path"] for record in records]
        except (KeyError, TypeError) as e:
            raise RequestError(f"Malformed path record: {e}", status_code=200) from e

    def get_all_by_name(self, name: str) -> list[Credential]:
        """Return every version of a credential, newest first."""
        log.info("credential_lookup", operation="get_all_by_name", name=name)
        return self._get_data(name, {})

    def get_latest_by_name(self, name: str) -> Credential:
        """Return the newest version of a credential."""
        log.info("credential_lookup", operation="get_latest_by_name", name=name)
        return self._get_data(name, {"current": "true"})[0]

    def get_versions_by_name(self, name: str, num_versions: int) -> list[Credential]:
        """Return the ``num_versions`` newest versions of a credential.

        A ``num_versions`` of zero or less means no limit, so the call is the
        same as ``get_all_by_name``. Existing callers rely on this.
        """
        if num_versions <= 0:
            return self.get_all_by_name(name)

        log.info("credential_lookup", operation="get_versions_by_name", name=name, versions=num_versions)
        return self._get_data(name, {"versions": str(num_versions)})[:num_versions]

    def get_by_id(self, credential_id: str) -> Credential:
        """Return the single version with ``credential_id``."""
        log.info("credential_lookup", operation="get_by_id", id=credential_id)

        try:
            body = self._get(f"{DATA_PATH}/{quote(credential_id, safe='')}")
        except NotFoundError as e:
            raise NotFoundError("Credential not found", resource=credential_id) from e

        return self._parse_credential(body)


def new(
    server_url: str,
    username: str,
    password: str,
    allow_insecure_tls: bool = False,
    *,
    client_credentials: bool = False,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> CredHubClient:
    """Create an authenticated client. See ``CredHubClient``."""
    return CredHubClient(
        server_url,
        username,
        password,
        allow_insecure_tls,
        client_credentials=client_credentials,
        timeout=timeout,
        transport=transport,
    )
