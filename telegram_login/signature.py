"""Telegram Login Widget HMAC-SHA256 signature check.

Verifies that a callback payload was signed by Telegram for this bot.
Pure functions, no I/O.

Reference: https://core.telegram.org/widgets/login#checking-authorization
"""

import hashlib
import hmac
from typing import Mapping


def build_data_check_string(params: Mapping[str, str]) -> str:
    """Build the sorted newline-separated data-check-string for HMAC.

    Every key except ``hash`` takes part, with its value exactly as received.
    """
    return "\n".join(sorted(f"{k}={v}" for k, v in params.items() if k != "hash"))


def derive_secret_key(secret: str) -> bytes:
    """The HMAC key is the raw SHA-256 digest of the bot secret, not its hex form."""
    return hashlib.sha256(secret.encode()).digest()


def compute_signature(secret: str, data_check_string: str) -> str:
    """Compute the lowercase hex HMAC-SHA256 of the data-check-string."""
    return hmac.new(
        derive_secret_key(secret), data_check_string.encode(), hashlib.sha256,
    ).hexdigest()


def sign_params(params: Mapping[str, str], secret: str) -> str:
    """Return the signature Telegram would attach to ``params``."""
    return compute_signature(secret, build_data_check_string(params))


def verify_signature(params: Mapping[str, str], secret: str) -> bool:
    """Check the ``hash`` field of ``params`` against the expected signature."""
    received_hash = params.get("hash") or ""
    if not received_hash:
        return False
    expected_hash = sign_params(params, secret)
    # compare_digest rejects non-ASCII str, so compare the encoded forms
    return hmac.compare_digest(expected_hash.encode(), received_hash.encode())
