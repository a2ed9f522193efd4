"""Handler wrappers that drop deliveries before the wrapped handler runs.

Both filters look at the generic JSON view of the payload
(:meth:`WebhookPayload.as_mapping`, or the payload itself when a custom
parser returns a plain mapping). A dropped delivery is not an error: the
filter answers 200 with a body saying why, and the wrapped handler is not
called.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from ghhook.webhooks.responses import Response, ok

if TYPE_CHECKING:
    from ghhook.github.payloads import WebhookPayload
    from ghhook.webhooks.registry import EventHandler

logger = logging.getLogger(__name__)

Predicate = Callable[[dict[str, Any]], bool]
FieldSpec = Mapping[str, Iterable[str] | str]


def _as_mapping(payload: Any) -> Mapping[str, Any]:
    """Generic view of a payload; plain mappings are used as they are."""
    if isinstance(payload, Mapping):
        return payload
    as_mapping = getattr(payload, "as_mapping", None)
    if as_mapping is None:
        raise TypeError(
            f"cannot filter {type(payload).__name__}: expected as_mapping() or a Mapping"
        )
    return as_mapping()


def _normalize_fields(fields: FieldSpec) -> dict[str, tuple[str, ...]]:
    normalized: dict[str, tuple[str, ...]] = {}
    for key, allowed in fields.items():
        if isinstance(allowed, str):
            allowed = (allowed,)
        normalized[key] = tuple(allowed)
    return normalized


class FieldFilter:
    """Call the wrapped handler only when top-level fields hold allowed values.

    Every configured field must be present and equal to one of its allowed
    values::

        FieldFilter(handle_pr, {"action": ["opened", "reopened"]})
    """

    def __init__(self, handler: EventHandler, fields: FieldSpec) -> None:
        self.handler = handler
        self.fields = _normalize_fields(fields)
        functools.update_wrapper(self, handler, updated=())

    def __call__(self, payload: WebhookPayload) -> Response | None:
        data = _as_mapping(payload)
        for key, allowed in self.fields.items():
            if key not in data:
                logger.info("Filter drop: no key '%s' in event body", key)
                return ok(f"No key:'{key}' in event body")
            value = data[key]
            if value not in allowed:
                logger.info("Filter drop: %s=%r not in %s", key, value, allowed)
                return ok(f"Dropping unregistered value: '{value}' for key: '{key}'")
        return self.handler(payload)

    def __repr__(self) -> str:
        return f"FieldFilter({self.handler!r}, {self.fields!r})"


class PredicateFilter:
    """Call the wrapped handler only when ``predicate(payload_dict)`` is true."""

    def __init__(self, handler: EventHandler, predicate: Predicate) -> None:
        self.handler = handler
        self.predicate = predicate
        functools.update_wrapper(self, handler, updated=())

    def __call__(self, payload: WebhookPayload) -> Response | None:
        if not self.predicate(_as_mapping(payload)):
            logger.info("Filter drop: predicate rejected event")
            return ok("Dropping event rejected by filter function")
        return self.handler(payload)

    def __repr__(self) -> str:
        return f"PredicateFilter({self.handler!r}, {self.predicate!r})"
