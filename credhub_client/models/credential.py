"""
Credential envelope models.

This module contains the dataclasses the retrieval API returns. They are the
normalized representation of CredHub's JSON records, converted by the parse
helpers below.

Example:
    Converting a response record::

        credential = Credential.from_api({
            "id": "2993f622-cb1e-4e00-a267-4b23c273bf3d",
            "name": "/concourse/main/db-password",
            "type": "password",
            "value": "s3cr3t",
            "version_created_at": "2017-01-05T01:01:01Z",
        })
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse a CredHub ISO 8601 timestamp.

    CredHub uses a 'Z' suffix for UTC, which is replaced with '+00:00' for
    Python's fromisoformat(). Timestamps without an offset are taken as UTC
    so that every parsed value is comparable.

    Raises:
        TypeError: If ``raw`` is not a string
        ValueError: If ``raw`` is not ISO 8601
    """
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        raise TypeError(f"Timestamp must be a string, got {type(raw).__name__}")
    parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _require_mapping(data: Any, kind: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"{kind} record must be an object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class Credential:
    """A single versioned credential record.

    ``value`` is left exactly as the JSON decoder produced it; its shape
    depends on ``type``. Use the accessors in ``credhub_client.decoder`` to
    obtain a typed projection.
    """

    id: str
    """Identifier of this version. Unique per version."""

    name: str
    """Hierarchical, path-like name shared by all versions of a credential."""

    type: str
    """Discriminant selecting the shape of ``value``."""

    value: Any
    """Untyped payload."""

    version_created_at: datetime | None = None
    """Creation time of this version. Defines recency ordering."""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Credential":
        """Build an envelope from a CredHub ``data`` record.

        Raises:
            KeyError: If ``name`` or ``type`` is missing
            TypeError: If ``data`` is not an object or the timestamp is not a string
            ValueError: If ``version_created_at`` is not ISO 8601
        """
        data = _require_mapping(data, "Credential")
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            type=data["type"],
            value=data.get("value"),
            version_created_at=parse_timestamp(data.get("version_created_at")),
        )


@dataclass(frozen=True)
class CredentialSummary:
    """Name-only record returned by path searches."""

    name: str
    version_created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CredentialSummary":
        data = _require_mapping(data, "Credential summary")
        return cls(
            name=data["name"],
            version_created_at=parse_timestamp(data.get("version_created_at")),
        )


def newest_first(credentials: list[Credential]) -> list[Credential]:
    """Order envelopes newest-first by ``version_created_at``.

    The sort is stable, so records without a timestamp or with equal
    timestamps keep the order the service sent them in.
    """
    if any(c.version_created_at is None for c in credentials):
        return list(credentials)
    return sorted(credentials, key=lambda c: c.version_created_at, reverse=True)
