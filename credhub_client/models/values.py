"""Typed value models for structured credential types.

Each model is a read-only projection of an envelope's ``value`` for one
discriminant. Field names follow CredHub's JSON keys.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from credhub_client.enums import CredentialType


class TypedValue(BaseModel):
    """Base class for typed credential values.

    Subclasses set ``credential_type`` to the discriminant they decode.
    Unknown keys sent by newer service versions are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    credential_type: ClassVar[CredentialType]


class UserValueType(TypedValue):
    """Value of a ``user`` credential."""

    credential_type: ClassVar[CredentialType] = CredentialType.USER

    username: str | None = Field(..., description="Login name, null when the credential was generated without one")
    password: str = Field(..., description="Clear-text password")
    password_hash: str | None = Field(default=None, description="SHA-512 crypt hash of the password")


class SSHValueType(TypedValue):
    """Value of an ``ssh`` credential."""

    credential_type: ClassVar[CredentialType] = CredentialType.SSH

    public_key: str = Field(..., description="OpenSSH formatted public key")
    private_key: str = Field(..., description="PEM encoded private key")
    public_key_fingerprint: str | None = Field(default=None, description="SHA-256 fingerprint of the public key")


class RSAValueType(TypedValue):
    """Value of an ``rsa`` credential."""

    credential_type: ClassVar[CredentialType] = CredentialType.RSA

    public_key: str = Field(..., description="PEM encoded public key")
    private_key: str = Field(..., description="PEM encoded private key")


class CertificateValueType(TypedValue):
    """Value of a ``certificate`` credential.

    ``ca`` may hold several concatenated PEM blocks when the certificate is
    signed by an intermediate authority.
    """

    credential_type: ClassVar[CredentialType] = CredentialType.CERTIFICATE

    certificate: str = Field(..., description="PEM encoded certificate")
    private_key: str | None = Field(default=None, description="PEM encoded private key")
    ca: str | None = Field(default=None, description="PEM encoded certificate authority chain")

    @property
    def ca_chain(self) -> list[str]:
        """Split ``ca`` into its individual PEM certificates."""
        if not self.ca:
            return []
        marker = "-----END CERTIFICATE-----"
        blocks = [block.strip() for block in self.ca.split(marker)]
        return [f"{block}\n{marker}" for block in blocks if block]
