"""Tests for building identity records from verified payloads."""

from datetime import datetime, timezone

from telegram_login.identity import IdentityRecord, extract_identity


def _params(**extra) -> dict[str, str]:
    params = {"id": "1", "first_name": "Joe", "last_name": "Smith", "auth_date": "123", "hash": "x"}
    params.update(extra)
    return params


class TestExtractIdentity:
    def test_basic_fields(self):
        record = extract_identity(_params())
        assert record.uid == "1"
        assert record.display_name == "Joe Smith"
        assert record.first_name == "Joe"
        assert record.last_name == "Smith"
        assert record.issued_at == datetime.fromtimestamp(123, tz=timezone.utc)

    def test_optional_fields(self):
        record = extract_identity(_params(username="joe.smith", photo_url="PHOTO_URL"))
        assert record.username == "joe.smith"
        assert record.avatar_url == "PHOTO_URL"

    def test_missing_optional_fields(self):
        record = extract_identity(_params())
        assert record.username is None
        assert record.avatar_url is None

    def test_empty_optional_fields(self):
        record = extract_identity(_params(username="", photo_url=""))
        assert record.username is None
        assert record.avatar_url is None

    def test_issued_at_is_utc(self):
        stamp = int(datetime(2000, 1, 2, 12, 30, tzinfo=timezone.utc).timestamp())
        record = extract_identity(_params(auth_date=str(stamp)))
        assert record.issued_at == datetime(2000, 1, 2, 12, 30, tzinfo=timezone.utc)
        assert record.issued_at.tzinfo is not None

    def test_latest_representable_auth_date(self):
        record = extract_identity(_params(auth_date="253402300799"))
        assert record.issued_at == datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

    def test_unknown_keys_ignored(self):
        record = extract_identity(_params(new_telegram_key="NEW KEY VALUE"))
        assert isinstance(record, IdentityRecord)


class TestToDict:
    def test_auth_hash(self):
        record = extract_identity(_params(username="joe.smith", photo_url="PHOTO_URL", id="ID_VALUE"))
        assert record.to_dict("telegram") == {
            "provider": "telegram",
            "uid": "ID_VALUE",
            "info": {
                "name": "Joe Smith",
                "nickname": "joe.smith",
                "first_name": "Joe",
                "last_name": "Smith",
                "image": "PHOTO_URL",
            },
            "extra": {"auth_date": "1970-01-01T00:02:03+00:00"},
        }

    def test_missing_optional_fields_are_none(self):
        info = extract_identity(_params()).to_dict("telegram")["info"]
        assert info["nickname"] is None
        assert info["image"] is None
