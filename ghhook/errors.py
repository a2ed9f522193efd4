"""Exceptions raised while handling a webhook delivery."""


class GhHookError(Exception):
    """Base class for ghhook errors."""


class MissingEventHeaderError(GhHookError):
    """The request carries no event-type header."""

    def __init__(self, header: str) -> None:
        self.header = header
        super().__init__(f"ERROR: no '{header}' header")


class PayloadParseError(GhHookError):
    """The webhook body could not be parsed into a typed payload."""

    def __init__(self, event_name: str, reason: str) -> None:
        self.event_name = event_name
        self.reason = reason
        super().__init__(f"Could not parse '{event_name}' payload: {reason}")
