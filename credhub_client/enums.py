"""Enumerations for credential types and client behaviour."""

from enum import Enum


class CredentialType(str, Enum):
    """Credential type discriminants carried in the ``type`` field.

    The discriminant selects the shape of an envelope's ``value``:
    - value, password: a plain string
    - json: any JSON document
    - user, ssh, rsa, certificate: an object with fixed keys
    """

    VALUE = "value"
    PASSWORD = "password"
    JSON = "json"
    USER = "user"
    SSH = "ssh"
    RSA = "rsa"
    CERTIFICATE = "certificate"

    def __str__(self) -> str:
        return self.value


class DecodeReason(str, Enum):
    """Why a typed decode was refused."""

    TYPE_MISMATCH = "type-mismatch"
    MALFORMED_VALUE = "malformed-value"


class AuthScheme(str, Enum):
    """Authorization header schemes a signing credential can use."""

    BEARER = "Bearer"
    BASIC = "Basic"

    def __str__(self) -> str:
        return self.value


class GrantType(str, Enum):
    """OAuth2 grants supported during negotiation."""

    PASSWORD = "password"
    CLIENT_CREDENTIALS = "client_credentials"
