"""ghhook server entry point."""

import asyncio
import importlib
import logging

from ghhook.config import settings
from ghhook.webhooks.dispatcher import default_dispatcher
from ghhook.webhooks.server import WebhookServer

logger = logging.getLogger(__name__)


def load_handler_modules(names: list[str]) -> None:
    """Import each module so its handlers register on the default dispatcher."""
    for name in names:
        importlib.import_module(name)
        logger.info("Loaded handler module: %s", name)


async def serve(server: WebhookServer) -> None:
    """Run ``server`` until cancelled."""
    await server.start()
    try:
        await asyncio.Event().wait()
    finally:
        await server.stop()


def main() -> None:
    """Start the webhook server for the default dispatcher."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level.upper()),
    )

    modules = settings.get_handler_modules()
    if not modules:
        logger.warning("HANDLER_MODULES is empty, every event will be dropped")
    load_handler_modules(modules)

    try:
        asyncio.run(serve(WebhookServer(default_dispatcher)))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
