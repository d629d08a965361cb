from dataclasses import dataclass, field

from .defaults import PROVIDER_NAME
from .settings import Settings, resolve_settings


@dataclass
class Config:
    bot_name: str
    secret: str = field(repr=False)
    settings: Settings
    button_config: dict[str, str] = field(default_factory=dict)
    name: str = PROVIDER_NAME
    callback_url: str = ""
    host: str = "0.0.0.0"
    port: int = 8080


def _require(section, key: str) -> str:
    value = section.get(key, "").strip()
    if not value:
        raise ValueError(f"[TELEGRAM] {key} must be set in config")
    return value


def _section_items(config, name: str) -> dict[str, str]:
    """Entries written in section ``name`` itself, without inherited [DEFAULT] keys."""
    if not config.has_section(name):
        return {}
    inherited = config.defaults()
    return {
        key: value for key, value in config[name].items()
        if key not in inherited or value != inherited[key]
    }


def load_config(config) -> Config:
    """Build a Config from a parsed configparser object."""
    if not config.has_section("TELEGRAM"):
        raise ValueError("config is missing the [TELEGRAM] section")
    telegram = config["TELEGRAM"]
    bot_name = _require(telegram, "bot_name")
    secret = _require(telegram, "secret")
    name = telegram.get("name", "").strip() or PROVIDER_NAME
    callback_url = telegram.get("callback_url", "").strip()

    overrides = _section_items(config, "SETTINGS")
    button_config = _section_items(config, "BUTTON")

    host = "0.0.0.0"
    port = 8080
    if config.has_section("SERVER"):
        host = config["SERVER"].get("host", host).strip() or host
        port = int(config["SERVER"].get("port", str(port)).strip() or port)

    return Config(
        bot_name=bot_name,
        secret=secret,
        settings=resolve_settings(overrides),
        button_config=button_config,
        name=name,
        callback_url=callback_url,
        host=host,
        port=port,
    )
