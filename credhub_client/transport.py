"""
HTTP transport for CredHub and UAA requests.

Wraps a synchronous ``httpx.Client`` configured for the target service and
translates HTTP outcomes into the client's exception hierarchy. One call is
one round trip: nothing is retried.
"""

import ssl
from typing import Any

import httpx
import structlog

from credhub_client.exceptions import AuthError, NotFoundError, RequestError, TransportError

log = structlog.get_logger(__name__)


def _is_certificate_failure(error: httpx.TransportError) -> bool:
    """Check whether a transport error was caused by TLS verification."""
    cause: BaseException | None = error
    while cause is not None:
        if isinstance(cause, ssl.SSLCertVerificationError):
            return True
        cause = cause.__cause__ or cause.__context__
    return "CERTIFICATE_VERIFY_FAILED" in str(error)


class HTTPTransport:
    """Blocking HTTP transport with optional TLS verification bypass.

    The same underlying ``httpx.Client`` is used for discovery, token
    exchange and every retrieval call, so ``allow_insecure_tls`` applies to
    all of them for the lifetime of the transport.
    """

    def __init__(
        self,
        base_url: str,
        allow_insecure_tls: bool = False,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            base_url: Service base URL (e.g., https://credhub.example.com:8844)
            allow_insecure_tls: Accept self-signed or otherwise unverifiable certificates
            timeout: Per-request timeout in seconds
            headers: Headers sent with every request
            transport: Optional httpx transport (used to substitute a fake server)
        """
        self.base_url = base_url.rstrip("/")
        self.allow_insecure_tls = allow_insecure_tls
        self.timeout = timeout
        self.headers = {"Accept": "application/json", **(headers or {})}

        self._client = httpx.Client(
            base_url=self.base_url,
            verify=not allow_insecure_tls,
            timeout=timeout,
            headers=self.headers,
            transport=transport,
        )

        if allow_insecure_tls:
            log.warning("tls_verification_disabled", base_url=self.base_url)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        url: str,
        auth: httpx.Auth | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue one request and return the successful response.

        Args:
            method: HTTP method
            url: Path relative to ``base_url`` or an absolute URL
            auth: Signer attached to this request
            **kwargs: Passed to ``httpx.Client.request`` (params, data, json)

        Returns:
            The 2xx response

        Raises:
            AuthError: TLS verification failed, or the service answered 401/403
            NotFoundError: The service answered 404
            RequestError: Any other non-2xx response
            TransportError: No response was received
        """
        if auth is not None:
            kwargs["auth"] = auth

        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            if _is_certificate_failure(e):
                log.error("tls_verification_failed", url=url)
                raise AuthError(f"TLS certificate verification failed for {url}") from e
            log.error("credhub_request_failed", method=method, url=url, error=str(e))
            raise TransportError(f"Request to {url} failed: {e}") from e

        raise_for_status(response)
        return response

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make GET request."""
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make POST request."""
        return self.request("POST", url, **kwargs)


def raise_for_status(response: httpx.Response) -> None:
    """Map a non-2xx response onto the exception hierarchy."""
    if response.is_success:
        return

    status = response.status_code
    try:
        url = str(response.request.url.copy_with(query=None))
    except RuntimeError:
        url = "<unknown>"
    log.debug("credhub_error_response", status_code=status, url=url)

    if status in (401, 403):
        raise AuthError(f"Request to {url} was not authorized", status_code=status)
    if status == 404:
        raise NotFoundError("Resource not found", resource=url)
    raise RequestError(f"Request to {url} failed", status_code=status, response_text=response.text)


def json_body(response: httpx.Response) -> Any:
    """Decode a successful response's JSON body.

    Raises:
        RequestError: If the body is not JSON
    """
    try:
        return response.json()
    except ValueError as e:
        raise RequestError(
            "Response body is not valid JSON",
            status_code=response.status_code,
            response_text=response.text,
        ) from e
