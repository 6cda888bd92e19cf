"""Authentication negotiation and request signing."""

from credhub_client.auth.authenticator import DEFAULT_CLIENT_ID, Authenticator, Identity
from credhub_client.auth.signer import CredentialAuth, SigningCredential

__all__ = [
    "Authenticator",
    "CredentialAuth",
    "DEFAULT_CLIENT_ID",
    "Identity",
    "SigningCredential",
]
