"""Typed decoding of credential envelopes.

The envelope's ``type`` field is the discriminant. An accessor first checks
that the discriminant is the one it decodes, then validates the payload
shape. Both checks raise ``DecodeError`` with a distinct reason; nothing
falls back to an empty value. Decoding is pure and performs no I/O.
"""

from typing import Any, TypeVar

from pydantic import ValidationError

from credhub_client.enums import CredentialType, DecodeReason
from credhub_client.exceptions import DecodeError
from credhub_client.models.credential import Credential
from credhub_client.models.values import (
    CertificateValueType,
    RSAValueType,
    SSHValueType,
    TypedValue,
    UserValueType,
)

T = TypeVar("T", bound=TypedValue)

# JSON primitive each passthrough discriminant must decode to
_PASSTHROUGH_SHAPES: dict[CredentialType, tuple[type, ...] | None] = {
    CredentialType.VALUE: (str,),
    CredentialType.PASSWORD: (str,),
    CredentialType.JSON: None,
}


def _check_type(credential: Credential, expected: CredentialType) -> None:
    if credential.type != expected.value:
        raise DecodeError(
            f"Credential {credential.name} has type '{credential.type}', not '{expected.value}'",
            reason=DecodeReason.TYPE_MISMATCH,
            expected=expected.value,
            actual=credential.type,
        )


def decode_as(credential: Credential, value_type: type[T]) -> T:
    """Decode an envelope's value into ``value_type``.

    Args:
        credential: Envelope returned by the retrieval API
        value_type: One of the ``TypedValue`` subclasses

    Returns:
        Validated, immutable typed value

    Raises:
        DecodeError: TYPE_MISMATCH if the discriminant differs,
            MALFORMED_VALUE if required fields are missing or mistyped
    """
    _check_type(credential, value_type.credential_type)

    if not isinstance(credential.value, dict):
        raise DecodeError(
            f"Credential {credential.name} value is {type(credential.value).__name__}, expected an object",
            reason=DecodeReason.MALFORMED_VALUE,
            expected=value_type.credential_type.value,
            actual=credential.type,
        )

    try:
        return value_type.model_validate(credential.value)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise DecodeError(
            f"Credential {credential.name} value does not match {value_type.__name__} (fields: {fields})",
            reason=DecodeReason.MALFORMED_VALUE,
            expected=value_type.credential_type.value,
            actual=credential.type,
        ) from e


def decode_passthrough(credential: Credential, expected: CredentialType) -> Any:
    """Return the raw decoded value of a ``value``, ``password`` or ``json`` envelope.

    No structural validation happens beyond the JSON primitive check: JSON
    numbers arrive as whatever the JSON decoder produced and callers convert
    fields themselves.
    """
    if expected not in _PASSTHROUGH_SHAPES:
        raise ValueError(f"{expected.value} is not a passthrough credential type")

    _check_type(credential, expected)

    shape = _PASSTHROUGH_SHAPES[expected]
    if shape is not None and not isinstance(credential.value, shape):
        raise DecodeError(
            f"Credential {credential.name} value is {type(credential.value).__name__}, expected a string",
            reason=DecodeReason.MALFORMED_VALUE,
            expected=expected.value,
            actual=credential.type,
        )
    return credential.value


def user_value(credential: Credential) -> UserValueType:
    """Decode a ``user`` credential."""
    return decode_as(credential, UserValueType)


def ssh_value(credential: Credential) -> SSHValueType:
    """Decode an ``ssh`` credential."""
    return decode_as(credential, SSHValueType)


def rsa_value(credential: Credential) -> RSAValueType:
    """Decode an ``rsa`` credential."""
    return decode_as(credential, RSAValueType)


def certificate_value(credential: Credential) -> CertificateValueType:
    """Decode a ``certificate`` credential."""
    return decode_as(credential, CertificateValueType)


def value_value(credential: Credential) -> str:
    """Return the string held by a ``value`` credential."""
    return decode_passthrough(credential, CredentialType.VALUE)


def password_value(credential: Credential) -> str:
    """Return the string held by a ``password`` credential."""
    return decode_passthrough(credential, CredentialType.PASSWORD)


def json_value(credential: Credential) -> Any:
    """Return the JSON document held by a ``json`` credential."""
    return decode_passthrough(credential, CredentialType.JSON)


_STRUCTURED: dict[CredentialType, type[TypedValue]] = {
    CredentialType.USER: UserValueType,
    CredentialType.SSH: SSHValueType,
    CredentialType.RSA: RSAValueType,
    CredentialType.CERTIFICATE: CertificateValueType,
}


def decode(credential: Credential) -> Any:
    """Decode an envelope according to its own discriminant.

    Returns a ``TypedValue`` for structured types and the raw value for
    passthrough types.

    Raises:
        DecodeError: TYPE_MISMATCH for a discriminant this client does not
            know, MALFORMED_VALUE if the payload does not fit its type
    """
    try:
        credential_type = CredentialType(credential.type)
    except ValueError as e:
        raise DecodeError(
            f"Credential {credential.name} has unsupported type '{credential.type}'",
            reason=DecodeReason.TYPE_MISMATCH,
            actual=credential.type,
        ) from e

    if credential_type in _STRUCTURED:
        return decode_as(credential, _STRUCTURED[credential_type])
    return decode_passthrough(credential, credential_type)
