"""Login page with the Telegram Login Widget button.

The page is a fixed template: the widget script reads its options from the
``data-*`` attributes of its own ``<script>`` tag and, once the user confirms,
redirects the browser to ``data-auth-url`` with the signed payload.
"""

from html import escape
from typing import Mapping

from .settings import Settings


CONTENT_TYPE = "text/html"

REQUEST_ACCESS_ATTR = 'data-request-access="write"'

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta http-equiv="Content-Type" content="text/html; charset=utf-8">
  <title>{title}</title>
</head>
<body>
  <script
    async
    src="{script_url}"
    data-telegram-login="{bot_name}"
    data-auth-url="{callback_url}"
    {button_attrs}
  >
  </script>
</body>
</html>
"""


def _attr(value) -> str:
    return escape(str(value), quote=True)


def button_attributes(settings: Settings, button_config: Mapping[str, str] | None = None) -> list[str]:
    """Render button options as data attributes, e.g. corner_radius -> data-corner-radius."""
    attrs = [
        f'data-{_attr(key).replace("_", "-")}="{_attr(value)}"'
        for key, value in (button_config or {}).items()
    ]
    if settings.request_access:
        attrs.append(REQUEST_ACCESS_ATTR)
    return attrs


def render_login_page(
    settings: Settings,
    bot_name: str,
    callback_url: str,
    button_config: Mapping[str, str] | None = None,
) -> str:
    return PAGE_TEMPLATE.format(
        title=_attr(settings.request_phase_title),
        script_url=_attr(settings.button_script_url),
        bot_name=_attr(bot_name),
        callback_url=_attr(callback_url),
        button_attrs=" ".join(button_attributes(settings, button_config)),
    )
