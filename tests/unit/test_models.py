"""Tests for credhub_client/models/credential.py."""

from datetime import datetime, timezone

import pytest

from credhub_client.models.credential import Credential, CredentialSummary, newest_first, parse_timestamp


class TestParseTimestamp:
    def test_zulu_suffix(self) -> None:
        assert parse_timestamp("2017-01-05T01:01:01Z") == datetime(2017, 1, 5, 1, 1, 1, tzinfo=timezone.utc)

    def test_fractional_seconds(self) -> None:
        parsed = parse_timestamp("2017-01-05T01:01:01.123Z")

        assert parsed.microsecond == 123000

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing(self, raw: str | None) -> None:
        assert parse_timestamp(raw) is None

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")

    def test_naive_is_utc(self) -> None:
        assert parse_timestamp("2017-01-05T01:01:01") == datetime(2017, 1, 5, 1, 1, 1, tzinfo=timezone.utc)

    def test_offset_is_kept(self) -> None:
        parsed = parse_timestamp("2017-01-05T03:01:01+02:00")

        assert parsed == datetime(2017, 1, 5, 1, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", [12345, 1.5, ["2017-01-05"]])
    def test_non_string(self, raw: object) -> None:
        with pytest.raises(TypeError):
            parse_timestamp(raw)


class TestCredentialFromApi:
    def test_full_record(self) -> None:
        credential = Credential.from_api(
            {
                "id": "2993f622",
                "name": "/concourse/main/db",
                "type": "json",
                "value": {"port": 5432.0},
                "version_created_at": "2017-01-05T01:01:01Z",
            }
        )

        assert credential.id == "2993f622"
        assert credential.type == "json"
        assert credential.value == {"port": 5432.0}
        assert credential.version_created_at.year == 2017

    def test_numeric_id_is_string(self) -> None:
        credential = Credential.from_api({"id": 1234, "name": "/x", "type": "value", "value": "v"})

        assert credential.id == "1234"
        assert credential.version_created_at is None

    def test_missing_name(self) -> None:
        with pytest.raises(KeyError):
            Credential.from_api({"id": "1", "type": "value", "value": "v"})

    @pytest.mark.parametrize("record", ["oops", 42, None, ["id", "name"]])
    def test_non_object_record(self, record: object) -> None:
        with pytest.raises(TypeError):
            Credential.from_api(record)

    def test_numeric_timestamp(self) -> None:
        with pytest.raises(TypeError):
            Credential.from_api({"id": "1", "name": "/x", "type": "value", "value": "v", "version_created_at": 12345})

    def test_summary_non_object(self) -> None:
        with pytest.raises(TypeError):
            CredentialSummary.from_api("/x")

    def test_summary(self) -> None:
        summary = CredentialSummary.from_api({"name": "/x", "version_created_at": "2017-01-05T01:01:01Z"})

        assert summary.name == "/x"


class TestNewestFirst:
    def _at(self, value: str, second: int | None) -> Credential:
        ts = datetime(2017, 1, 5, 1, 1, second, tzinfo=timezone.utc) if second is not None else None
        return Credential(id=value, name="/x", type="value", value=value, version_created_at=ts)

    def test_sorts_descending(self) -> None:
        creds = [self._at("a", 1), self._at("c", 3), self._at("b", 2)]

        assert [c.value for c in newest_first(creds)] == ["c", "b", "a"]

    def test_ties_keep_service_order(self) -> None:
        creds = [self._at("first", 1), self._at("second", 1)]

        assert [c.value for c in newest_first(creds)] == ["first", "second"]

    def test_missing_timestamps_keep_service_order(self) -> None:
        creds = [self._at("a", 1), self._at("b", None), self._at("c", 3)]

        assert [c.value for c in newest_first(creds)] == ["a", "b", "c"]

    def test_mixed_naive_and_aware_timestamps(self) -> None:
        creds = [
            Credential.from_api({"id": "1", "name": "/x", "type": "value", "value": "a", "version_created_at": "2017-01-05T01:01:01Z"}),
            Credential.from_api({"id": "2", "name": "/x", "type": "value", "value": "b", "version_created_at": "2017-01-05T01:01:03"}),
            Credential.from_api({"id": "3", "name": "/x", "type": "value", "value": "c", "version_created_at": "2017-01-05T01:01:02Z"}),
        ]

        assert [c.value for c in newest_first(creds)] == ["b", "c", "a"]
