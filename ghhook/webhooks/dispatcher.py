"""Webhook dispatcher — routes one delivery to the handlers for its event.

Usage::

    from ghhook import Event, Response, default_dispatcher

    @default_dispatcher.on(Event.PULL_REQUEST, fields={"action": ["opened"]})
    def announce(payload) -> Response:
        return Response(body=f"PR #{payload.number} opened")

A delivery is handled in a single pass:

1. read the event name from the ``X-GitHub-Event`` header,
2. look up the handlers registered for it,
3. parse the body into a typed payload,
4. call every handler in registration order with that same payload.

The first handler that raises stops the loop and its error becomes the
response. If every handler succeeds, only the *last* handler's response is
returned; earlier results are discarded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ghhook.config import settings
from ghhook.errors import MissingEventHeaderError, PayloadParseError
from ghhook.github.payloads import parse_webhook
from ghhook.webhooks import responses
from ghhook.webhooks.filters import FieldFilter, FieldSpec, Predicate, PredicateFilter
from ghhook.webhooks.registry import EventHandler, HandlerRegistry

if TYPE_CHECKING:
    from ghhook.github.payloads import WebhookPayload
    from ghhook.webhooks.responses import ErrorResponseFn, SuccessResponseFn
    from ghhook.webhooks.transport import ProxyRequest, ProxyResponse

logger = logging.getLogger(__name__)

PayloadParser = Callable[[str, bytes], "WebhookPayload"]


class Dispatcher:
    """Owns a handler table and turns requests into responses.

    Args:
        parser: Turns ``(event_name, body)`` into a payload object. Raise
            :class:`PayloadParseError` on failure; any other exception is
            reported through the error response as well. Filters need the
            payload to expose ``as_mapping()`` or to be a ``Mapping``.
        error_response: Overrides ``responses.error_response_fn`` for this
            dispatcher.
        success_response: Overrides ``responses.success_response_fn`` for
            this dispatcher.
        event_header: Header carrying the event name. Defaults to the
            ``github_event_header`` setting.
    """

    def __init__(
        self,
        *,
        parser: PayloadParser = parse_webhook,
        error_response: ErrorResponseFn | None = None,
        success_response: SuccessResponseFn | None = None,
        event_header: str | None = None,
    ) -> None:
        self.registry = HandlerRegistry()
        self.parser = parser
        self.event_header = event_header or settings.github_event_header
        self._error_response = error_response
        self._success_response = success_response

    # -- Registration ----------------------------------------------------------

    def register(self, event: str, handler: EventHandler) -> None:
        """Append ``handler`` to the handlers for ``event``."""
        self.registry.register(event, handler)

    def register_field_filter(
        self, event: str, fields: FieldSpec, handler: EventHandler
    ) -> None:
        """Register ``handler`` behind a :class:`FieldFilter`."""
        self.registry.register(event, FieldFilter(handler, fields))

    def register_predicate_filter(
        self, event: str, predicate: Predicate, handler: EventHandler
    ) -> None:
        """Register ``handler`` behind a :class:`PredicateFilter`."""
        self.registry.register(event, PredicateFilter(handler, predicate))

    def on(
        self,
        event: str,
        *,
        fields: FieldSpec | None = None,
        predicate: Predicate | None = None,
    ) -> Callable[[EventHandler], EventHandler]:
        """Decorator form of :meth:`register`.

        With ``fields`` and/or ``predicate`` the handler is wrapped in the
        matching filter; the field filter runs first. The undecorated
        function is returned, so it stays directly callable.
        """

        def decorator(fn: EventHandler) -> EventHandler:
            wrapped: EventHandler = fn
            if predicate is not None:
                wrapped = PredicateFilter(wrapped, predicate)
            if fields is not None:
                wrapped = FieldFilter(wrapped, fields)
            self.registry.register(event, wrapped)
            return fn

        return decorator

    def clear(self) -> None:
        """Forget every registration. For tests."""
        self.registry.clear()

    # -- Dispatch --------------------------------------------------------------

    def dispatch(self, request: ProxyRequest) -> ProxyResponse:
        """Handle one delivery. Never raises for request or handler failures."""
        event_name = request.header(self.event_header)
        if event_name is None:
            logger.warning("Webhook rejected: missing %s header", self.event_header)
            return self._error(MissingEventHeaderError(self.event_header))

        handlers = self.registry.get(event_name)
        if not handlers:
            logger.info("Webhook dropped: no handlers for event=%s", event_name)
            return self._success(f"Dropping unregistered event: '{event_name}'")

        try:
            payload = self.parser(event_name, self._body(event_name, request))
        except PayloadParseError as exc:
            logger.warning("Webhook parse failed: event=%s, error=%s", event_name, exc)
            return self._error(exc)
        except Exception as exc:
            logger.exception("Webhook parser raised: event=%s", event_name)
            return self._error(exc)

        logger.info("Webhook received: event=%s, handlers=%d", event_name, len(handlers))

        last: responses.Response | None = None
        for index, handler in enumerate(handlers):
            try:
                last = handler(payload)
            except Exception as exc:
                logger.exception(
                    "Webhook handler failed: event=%s, handler=%d/%d",
                    event_name,
                    index + 1,
                    len(handlers),
                )
                return self._error(exc)
            if last is not None and not isinstance(last, responses.Response):
                logger.error(
                    "Webhook handler returned %s, expected Response or None",
                    type(last).__name__,
                )
                return self._error(
                    TypeError(f"handler returned {type(last).__name__}, expected Response")
                )

        if last is None:
            return self._success(f"Processed event: '{event_name}'")
        return last.to_proxy_response()

    def _body(self, event_name: str, request: ProxyRequest) -> bytes:
        try:
            return request.raw_body()
        except ValueError as exc:
            raise PayloadParseError(event_name, str(exc)) from exc

    def _error(self, exc: Exception) -> ProxyResponse:
        fn = self._error_response or responses.error_response_fn
        return fn(exc)

    def _success(self, message: str) -> ProxyResponse:
        fn = self._success_response or responses.success_response_fn
        return fn(message)


default_dispatcher = Dispatcher()


def register(event: str, handler: EventHandler) -> None:
    """Register ``handler`` on :data:`default_dispatcher`."""
    default_dispatcher.register(event, handler)


def clear() -> None:
    """Clear :data:`default_dispatcher`. For tests."""
    default_dispatcher.clear()
