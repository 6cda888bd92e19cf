"""Data models for credential envelopes and typed values."""

from credhub_client.models.credential import Credential, CredentialSummary
from credhub_client.models.values import (
    CertificateValueType,
    RSAValueType,
    SSHValueType,
    TypedValue,
    UserValueType,
)

__all__ = [
    "Credential",
    "CredentialSummary",
    "TypedValue",
    "UserValueType",
    "SSHValueType",
    "RSAValueType",
    "CertificateValueType",
]
