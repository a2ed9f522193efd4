"""Handler registry — maps webhook event names to ordered handler lists."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ghhook.github.payloads import WebhookPayload
    from ghhook.webhooks.responses import Response

logger = logging.getLogger(__name__)


class EventHandler(Protocol):
    """Anything callable with a parsed payload.

    Raise to fail the delivery. Return ``None`` to let the dispatcher answer
    with its default success response.
    """

    def __call__(self, payload: WebhookPayload) -> Response | None: ...


class HandlerRegistry:
    """Ordered handler lists keyed by event name.

    Registration appends, so one event can have several handlers (and the
    same handler more than once). Nothing is ever removed except by
    :meth:`clear`.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def register(self, event: str, handler: EventHandler) -> None:
        """Append ``handler`` to the list for ``event``."""
        name = str(event)
        self._handlers.setdefault(name, []).append(handler)
        logger.info(
            "Registered webhook handler: %s -> %s",
            name,
            getattr(handler, "__qualname__", type(handler).__name__),
        )

    def get(self, event: str) -> list[EventHandler]:
        """Handlers for ``event`` in registration order (a copy)."""
        return list(self._handlers.get(str(event), ()))

    def clear(self) -> None:
        """Drop every registration. Meant for test isolation."""
        self._handlers = {}

    @property
    def events(self) -> list[str]:
        """All event names with at least one handler."""
        return list(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)
