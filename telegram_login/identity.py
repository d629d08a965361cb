from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping

from .validation import parse_auth_date


@dataclass(frozen=True)
class IdentityRecord:
    uid: str
    display_name: str
    first_name: str
    last_name: str
    username: str | None
    avatar_url: str | None
    issued_at: datetime

    def to_dict(self, provider: str) -> dict:
        """Serialize as an auth hash: provider, uid, info and extra."""
        return {
            "provider": provider,
            "uid": self.uid,
            "info": {
                "name": self.display_name,
                "nickname": self.username,
                "first_name": self.first_name,
                "last_name": self.last_name,
                "image": self.avatar_url,
            },
            "extra": {
                "auth_date": self.issued_at.isoformat(),
            },
        }


def _optional(params: Mapping[str, str], key: str) -> str | None:
    return params.get(key) or None


def extract_identity(params: Mapping[str, str]) -> IdentityRecord:
    """Build the identity record from a payload that already passed validation."""
    first_name = params["first_name"]
    last_name = params["last_name"]
    auth_date = parse_auth_date(params["auth_date"])
    return IdentityRecord(
        uid=str(params["id"]),
        display_name=f"{first_name} {last_name}",
        first_name=first_name,
        last_name=last_name,
        username=_optional(params, "username"),
        avatar_url=_optional(params, "photo_url"),
        issued_at=datetime.fromtimestamp(auth_date, tz=timezone.utc),
    )
