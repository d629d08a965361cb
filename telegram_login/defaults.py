"""Checked-in defaults for the login strategy.

config.ini keeps only the bot credentials and deployment details.
Any [SETTINGS] entries in config.ini are merged on top of SETTINGS.
"""

PROVIDER_NAME = "telegram"

SETTINGS: dict[str, object] = {
    "request_phase_title": "Telegram Login",
    "request_access": False,
    "button_script_url": "https://telegram.org/js/telegram-widget.js?5",
    # Maximum age of a signed callback, in seconds
    "auth_date_limit": 86400,
}

# Fields every callback must carry, checked in this order
REQUIRED_FIELDS = ("id", "first_name", "last_name", "auth_date", "hash")

FAILURE_PATH = "/auth/failure"
