"""ghhook — dispatch GitHub webhook deliveries to registered handlers."""

from ghhook.github.events import Event
from ghhook.webhooks.dispatcher import Dispatcher, clear, default_dispatcher, register
from ghhook.webhooks.responses import Response

__all__ = [
    "Dispatcher",
    "Event",
    "Response",
    "clear",
    "default_dispatcher",
    "register",
]
