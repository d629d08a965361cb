"""HTTP endpoints for the Telegram login flow. Uses aiohttp.

GET  /auth/<name>            login page with the widget button
GET  /auth/<name>/callback   signed payload from Telegram (POST also accepted)
GET  /auth/failure           failure landing page, ?message=<reason>
GET  /auth/health            health check
"""

import time
from typing import Awaitable, Callable
from urllib.parse import urlencode

from aiohttp import web

from .config import Config
from .defaults import FAILURE_PATH
from .identity import IdentityRecord, extract_identity
from .validation import validate_callback
from .widget import CONTENT_TYPE, render_login_page


LoginHandler = Callable[[web.Request, IdentityRecord], Awaitable[web.StreamResponse]]


def _callback_url(request: web.Request, config: Config) -> str:
    """Configured callback URL, or one derived from the incoming request."""
    if config.callback_url:
        return config.callback_url
    return str(request.url.origin().with_path(f"/auth/{config.name}/callback"))


def _failure_location(config: Config, reason: str) -> str:
    return f"{FAILURE_PATH}?{urlencode({'message': reason, 'strategy': config.name})}"


async def _callback_params(request: web.Request) -> dict[str, str]:
    """Merge query string and form body; the body wins, and the last duplicate wins."""
    params = {k: v for k, v in request.query.items()}
    if request.method == "POST" and request.can_read_body:
        form = await request.post()
        params.update({k: v for k, v in form.items() if isinstance(v, str)})
    return params


async def handle_login_page(request: web.Request) -> web.Response:
    """GET /auth/<name> — render the widget page."""
    config: Config = request.app["config"]
    html = render_login_page(
        config.settings, config.bot_name, _callback_url(request, config), config.button_config,
    )
    return web.Response(text=html, content_type=CONTENT_TYPE)


async def handle_callback(request: web.Request) -> web.StreamResponse:
    """GET|POST /auth/<name>/callback — verify the payload and hand off the identity."""
    config: Config = request.app["config"]
    params = await _callback_params(request)

    outcome = validate_callback(params, config.secret, config.settings)
    if not outcome.ok:
        print(f"[Auth] Rejected callback: {outcome.reason}")
        raise web.HTTPFound(_failure_location(config, outcome.reason))

    identity = extract_identity(params)
    print(f"[Auth] Verified login for uid={identity.uid}")

    on_login: LoginHandler | None = request.app.get("on_login")
    if on_login is not None:
        return await on_login(request, identity)
    return web.json_response(identity.to_dict(config.name))


async def handle_failure(request: web.Request) -> web.Response:
    """GET /auth/failure — report why the login was rejected."""
    config: Config = request.app["config"]
    message = request.query.get("message", "unknown_error")
    strategy = request.query.get("strategy", config.name)
    return web.json_response({"error": message, "strategy": strategy}, status=401)


async def handle_health(request: web.Request) -> web.Response:
    """GET /auth/health — simple health check."""
    return web.json_response({"status": "ok", "time": int(time.time())})


@web.middleware
async def logging_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Log all incoming requests. The query string carries the signed payload, so only the path is logged."""
    start = time.time()
    try:
        response = await handler(request)
        elapsed = (time.time() - start) * 1000
        print(f"[HTTP] {request.method} {request.path} → {response.status} ({elapsed:.0f}ms)")
        return response
    except web.HTTPException as e:
        elapsed = (time.time() - start) * 1000
        print(f"[HTTP] {request.method} {request.path} → {e.status} ({elapsed:.0f}ms)")
        raise
    except Exception as e:
        elapsed = (time.time() - start) * 1000
        print(f"[HTTP] {request.method} {request.path} → ERROR: {e} ({elapsed:.0f}ms)")
        raise


def create_web_app(config: Config, on_login: LoginHandler | None = None) -> web.Application:
    """Create and configure the aiohttp web application.

    ``on_login(request, identity)`` builds the response for a verified login;
    without it the identity is returned as JSON.
    """
    app = web.Application(middlewares=[logging_middleware])
    app["config"] = config
    app["on_login"] = on_login

    app.router.add_get("/auth/health", handle_health)
    app.router.add_get(FAILURE_PATH, handle_failure)
    app.router.add_get(f"/auth/{config.name}", handle_login_page)
    app.router.add_get(f"/auth/{config.name}/callback", handle_callback)
    app.router.add_post(f"/auth/{config.name}/callback", handle_callback)

    return app
