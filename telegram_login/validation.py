"""Callback validation: required fields, signature, freshness.

Checks run in that order and stop at the first failure, so a payload that is
both incomplete and forged reports the missing field.
"""

import re
import time
from dataclasses import dataclass
from typing import Mapping

from .defaults import REQUIRED_FIELDS
from .settings import Settings
from .signature import verify_signature


MISSING_REQUIRED_FIELD = "missing_required_field"
SIGNATURE_MISMATCH = "signature_mismatch"
SESSION_EXPIRED = "session_expired"

FAILURE_REASONS = (MISSING_REQUIRED_FIELD, SIGNATURE_MISMATCH, SESSION_EXPIRED)

# 9999-12-31T23:59:59Z, the largest timestamp datetime accepts
MAX_AUTH_DATE = 253402300799
# Twelve digits cover MAX_AUTH_DATE and keep int() far below its digit limit
_AUTH_DATE_RE = re.compile(r"[0-9]{1,12}")


@dataclass(frozen=True)
class ValidationOutcome:
    ok: bool
    reason: str = ""  # one of FAILURE_REASONS when ok is False


VALID = ValidationOutcome(ok=True)


def invalid(reason: str) -> ValidationOutcome:
    return ValidationOutcome(ok=False, reason=reason)


class InvalidAuthDate(ValueError):
    pass


def is_present(params: Mapping[str, str], field: str) -> bool:
    """Absent, None and empty string all count as missing."""
    value = params.get(field)
    return value is not None and str(value) != ""


def parse_auth_date(raw: str) -> int:
    """Parse ``auth_date`` as whole Unix seconds.

    Only plain non-negative base-10 integers are accepted, up to the last
    second a ``datetime`` can represent.
    """
    text = "" if raw is None else str(raw)
    if not _AUTH_DATE_RE.fullmatch(text):
        raise InvalidAuthDate(f"auth_date must be integer seconds, got '{text[:32]}'")
    auth_date = int(text)
    if auth_date > MAX_AUTH_DATE:
        raise InvalidAuthDate(f"auth_date {auth_date} is out of range")
    return auth_date


def validate_callback(
    params: Mapping[str, str], secret: str, settings: Settings, now: int | None = None,
) -> ValidationOutcome:
    """Decide whether a callback payload is an authentic, fresh login.

    ``now`` defaults to the current Unix time. An ``auth_date`` in the
    future is accepted.
    """
    for field in REQUIRED_FIELDS:
        if not is_present(params, field):
            return invalid(MISSING_REQUIRED_FIELD)

    try:
        auth_date = parse_auth_date(params["auth_date"])
    except InvalidAuthDate:
        return invalid(MISSING_REQUIRED_FIELD)

    if not verify_signature(params, secret):
        return invalid(SIGNATURE_MISMATCH)

    if now is None:
        now = int(time.time())
    if now - auth_date > settings.auth_date_limit:
        return invalid(SESSION_EXPIRED)

    return VALID
