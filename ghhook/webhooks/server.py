"""Lightweight async HTTP server exposing a dispatcher.

Uses aiohttp's AppRunner/TCPSite for non-blocking start/stop. Each delivery
is dispatched in a worker thread so slow handlers do not block the loop.

Point the GitHub webhook at ``http://<host>:<WEBHOOK_PORT><WEBHOOK_PATH>``
with content type ``application/json``.
"""

from __future__ import annotations

import asyncio
import base64
import logging

from aiohttp import web

from ghhook.config import settings
from ghhook.webhooks.dispatcher import Dispatcher, default_dispatcher
from ghhook.webhooks.transport import ProxyRequest

logger = logging.getLogger(__name__)

DISPATCHER_KEY = web.AppKey("dispatcher", Dispatcher)


async def _handle_webhook(request: web.Request) -> web.Response:
    """Turn the HTTP request into a ProxyRequest and dispatch it."""
    dispatcher = request.app[DISPATCHER_KEY]
    raw = await request.read()
    try:
        body, is_base64 = raw.decode("utf-8"), False
    except UnicodeDecodeError:
        # Undecodable bytes travel base64-encoded; parsing reports them.
        body, is_base64 = base64.b64encode(raw).decode("ascii"), True

    proxy_request = ProxyRequest(
        headers=dict(request.headers),
        body=body,
        is_base64_encoded=is_base64,
        http_method=request.method,
        path=request.path,
    )

    result = await asyncio.to_thread(dispatcher.dispatch, proxy_request)

    if result.is_base64_encoded:
        return web.Response(
            status=result.status_code,
            headers=result.headers,
            body=base64.b64decode(result.body),
        )
    return web.Response(status=result.status_code, headers=result.headers, text=result.body)


async def _health(request: web.Request) -> web.Response:
    """GET /health — basic liveness check."""
    dispatcher = request.app[DISPATCHER_KEY]
    return web.json_response({"status": "ok", "events": dispatcher.registry.events})


def create_web_app(
    dispatcher: Dispatcher | None = None, path: str | None = None
) -> web.Application:
    """Build the aiohttp Application with routes."""
    app = web.Application()
    app[DISPATCHER_KEY] = dispatcher or default_dispatcher
    app.router.add_get("/health", _health)
    app.router.add_post(path or settings.webhook_path, _handle_webhook)
    return app


class WebhookServer:
    """Manages the aiohttp server lifecycle."""

    def __init__(
        self,
        dispatcher: Dispatcher | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> None:
        self.dispatcher = dispatcher or default_dispatcher
        self.host = host or settings.webhook_host
        self.port = port or settings.webhook_port
        self._runner: web.AppRunner | None = None

    @property
    def running(self) -> bool:
        return self._runner is not None

    async def start(self) -> None:
        """Start listening for webhook deliveries."""
        if self._runner is not None:
            return

        app = create_web_app(self.dispatcher)
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info(
            "Webhook server listening on %s:%d%s (events: %s)",
            self.host,
            self.port,
            settings.webhook_path,
            self.dispatcher.registry.events or ["none registered"],
        )

    async def stop(self) -> None:
        """Shut down the server gracefully."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Webhook server stopped")
