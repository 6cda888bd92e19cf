"""Custom exception hierarchy for the CredHub client.

Every public operation either returns its result or raises exactly one of
these exceptions. Callers branch on the class to tell an absent credential
from a service or network failure, and both from a payload that does not
match the requested typed value.

Exception Hierarchy:
    CredHubError (base)
    ├── ConfigurationError
    ├── AuthError
    ├── NotFoundError
    ├── RequestError
    │   └── TransportError
    └── DecodeError

Example Usage:
    >>> from credhub_client.exceptions import NotFoundError
    >>> try:
    ...     client.get_latest_by_name("/concourse/main/db-password")
    ... except NotFoundError:
    ...     use_default_password()
"""

from credhub_client.enums import DecodeReason


class CredHubError(Exception):
    """Base exception for all CredHub client errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(CredHubError):
    """Client configuration is missing, unreadable, or invalid.

    Examples:
        - Configuration file not found
        - Invalid YAML syntax
        - Unset environment variable referenced from the file
    """

    pass


class AuthError(CredHubError):
    """Authentication against the service failed.

    Raised when negotiation is rejected (bad credentials, unusable token
    response), when the TLS certificate cannot be verified, or when the
    service answers a signed request with 401/403.

    Attributes:
        status_code: HTTP status code (if the failure came from a response)
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        super().__init__(full_message)
        self.message = message


class NotFoundError(CredHubError):
    """The requested path, name, or id is unknown to the service.

    Attributes:
        resource: The path, name, or id that was looked up
    """

    def __init__(self, message: str, resource: str | None = None) -> None:
        self.resource = resource

        full_message = message
        if resource:
            full_message = f"{message}: {resource}"

        super().__init__(full_message)
        self.message = message


class RequestError(CredHubError):
    """Any other unsuccessful exchange with the service.

    Attributes:
        status_code: HTTP status code, None when no response was received
        response_text: Response body text (if applicable)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
            response_text: Response body text (if applicable)
        """
        self.status_code = status_code
        self.response_text = response_text

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        super().__init__(full_message)
        self.message = message


class TransportError(RequestError):
    """The request never produced a response (connection refused, timeout)."""

    pass


class DecodeError(CredHubError):
    """A credential envelope could not be decoded into the requested type.

    Attributes:
        reason: TYPE_MISMATCH when the discriminant differs from the one the
            accessor expects, MALFORMED_VALUE when the payload shape is wrong
        expected: Discriminant the accessor expects
        actual: Discriminant carried by the envelope
    """

    def __init__(
        self,
        message: str,
        reason: DecodeReason,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        self.reason = reason
        self.expected = expected
        self.actual = actual
        super().__init__(f"{message} ({reason.value})")
        self.message = message
