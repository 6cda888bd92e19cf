"""credhub-client: authenticate against CredHub and read credentials.

Example:
    >>> from credhub_client import new, user_value
    >>> client = new("https://credhub.example.com:8844", "admin", "secret")
    >>> user = user_value(client.get_latest_by_name("/concourse/main/admin"))
"""

from credhub_client.client import CredHubClient, new
from credhub_client.decoder import (
    certificate_value,
    decode,
    decode_as,
    json_value,
    password_value,
    rsa_value,
    ssh_value,
    user_value,
    value_value,
)
from credhub_client.enums import CredentialType, DecodeReason
from credhub_client.exceptions import (
    AuthError,
    ConfigurationError,
    CredHubError,
    DecodeError,
    NotFoundError,
    RequestError,
    TransportError,
)
from credhub_client.models import (
    CertificateValueType,
    Credential,
    CredentialSummary,
    RSAValueType,
    SSHValueType,
    UserValueType,
)

__version__ = "0.1.0"

__all__ = [
    "new",
    "CredHubClient",
    "Credential",
    "CredentialSummary",
    "CredentialType",
    "UserValueType",
    "SSHValueType",
    "RSAValueType",
    "CertificateValueType",
    "decode",
    "decode_as",
    "user_value",
    "ssh_value",
    "rsa_value",
    "certificate_value",
    "value_value",
    "password_value",
    "json_value",
    "CredHubError",
    "ConfigurationError",
    "AuthError",
    "NotFoundError",
    "RequestError",
    "TransportError",
    "DecodeError",
    "DecodeReason",
]
