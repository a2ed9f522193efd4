"""Handler response value type and the default response adapters.

``error_response_fn`` and ``success_response_fn`` are process-wide hooks.
Reassign them to change how every dispatcher without its own override
formats responses::

    from ghhook.webhooks import responses

    def json_error(exc: Exception) -> ProxyResponse:
        ...

    responses.error_response_fn = json_error
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ghhook.webhooks.transport import ProxyResponse

ErrorResponseFn = Callable[[Exception], ProxyResponse]
SuccessResponseFn = Callable[[str], ProxyResponse]


@dataclass
class Response:
    """What a handler returns for a delivery it processed."""

    status_code: int = 200
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    is_base64_encoded: bool = False

    def to_proxy_response(self) -> ProxyResponse:
        return ProxyResponse(
            status_code=self.status_code,
            headers=dict(self.headers),
            body=self.body,
            is_base64_encoded=self.is_base64_encoded,
        )


def ok(body: str) -> Response:
    """A plain 200 response; used for filter drops."""
    return Response(status_code=200, body=body)


def default_error_response(exc: Exception) -> ProxyResponse:
    """500 with the error message as body."""
    return ProxyResponse(status_code=500, body=str(exc) or type(exc).__name__)


def default_success_response(message: str) -> ProxyResponse:
    """200 with ``message`` as body."""
    return ProxyResponse(status_code=200, body=message)


error_response_fn: ErrorResponseFn = default_error_response
success_response_fn: SuccessResponseFn = default_success_response
