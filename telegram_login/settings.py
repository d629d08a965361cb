from dataclasses import dataclass, fields, replace

from .defaults import SETTINGS


@dataclass(frozen=True)
class Settings:
    request_phase_title: str
    request_access: bool
    button_script_url: str
    auth_date_limit: int  # seconds


DEFAULT_SETTINGS = Settings(**SETTINGS)

_BOOL_TRUE = {"true", "yes", "1", "on"}
_BOOL_FALSE = {"false", "no", "0", "off"}


def _coerce_bool(key: str, raw) -> bool:
    if isinstance(raw, bool):
        return raw
    lower = str(raw).lower().strip()
    if lower in _BOOL_TRUE:
        return True
    if lower in _BOOL_FALSE:
        return False
    raise ValueError(f"Setting '{key}' expects true/false, got '{raw}'")


def _coerce_int(key: str, raw) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"Setting '{key}' expects an integer, got '{raw}'")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValueError(f"Setting '{key}' expects an integer, got '{raw}'") from None


def _coerce_str(key: str, raw) -> str:
    return str(raw)


_COERCERS = {
    "request_phase_title": _coerce_str,
    "request_access": _coerce_bool,
    "button_script_url": _coerce_str,
    "auth_date_limit": _coerce_int,
}

_KNOWN_KEYS = {f.name for f in fields(Settings)}


def resolve_settings(overrides=None) -> Settings:
    """Merge caller overrides into the defaults and return a frozen Settings.

    Overrides apply key by key; anything not overridden keeps its default.
    Unknown keys and None values are skipped. Values are coerced to the field type, so the
    strings read from config.ini work as well as native values.
    """
    if not overrides:
        return DEFAULT_SETTINGS

    changes = {}
    for key, raw in overrides.items():
        if key not in _KNOWN_KEYS:
            print(f"[Settings] Ignoring unknown setting '{key}'")
            continue
        if raw is None:
            continue
        changes[key] = _COERCERS[key](key, raw)
    return replace(DEFAULT_SETTINGS, **changes)
