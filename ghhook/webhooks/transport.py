"""API Gateway proxy request/response types and the Lambda entry point.

The field aliases follow the API Gateway proxy integration format, so an
incoming Lambda ``event`` dict validates directly into :class:`ProxyRequest`
and :meth:`ProxyResponse.to_dict` is a valid Lambda return value.
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from ghhook.webhooks.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

LambdaHandler = Callable[[dict[str, Any], Any], dict[str, Any]]


class ProxyRequest(BaseModel):
    """An inbound webhook delivery as seen by the transport."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""
    is_base64_encoded: bool = Field(default=False, alias="isBase64Encoded")
    http_method: str | None = Field(default=None, alias="httpMethod")
    path: str | None = None

    @field_validator("headers", mode="before")
    @classmethod
    def _null_headers(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("body", mode="before")
    @classmethod
    def _null_body(cls, value: Any) -> Any:
        return "" if value is None else value

    def header(self, name: str) -> str | None:
        """Look up a header value, ignoring the case of the name."""
        if name in self.headers:
            return self.headers[name]
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def raw_body(self) -> bytes:
        """Return the body bytes, decoding base64 when the transport flagged it."""
        if not self.is_base64_encoded:
            return self.body.encode("utf-8")
        try:
            return base64.b64decode(self.body, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"body is not valid base64: {exc}") from exc


class ProxyResponse(BaseModel):
    """The response handed back to the transport."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""
    is_base64_encoded: bool = Field(default=False, alias="isBase64Encoded")

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the API Gateway field names."""
        return self.model_dump(by_alias=True)


def make_lambda_handler(dispatcher: Dispatcher | None = None) -> LambdaHandler:
    """Build an AWS Lambda handler that routes deliveries through ``dispatcher``.

    Usage::

        from ghhook import default_dispatcher
        from ghhook.webhooks.transport import make_lambda_handler

        handler = make_lambda_handler(default_dispatcher)
    """
    if dispatcher is None:
        from ghhook.webhooks.dispatcher import default_dispatcher

        dispatcher = default_dispatcher

    def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
        request = ProxyRequest.model_validate(event)
        return dispatcher.dispatch(request).to_dict()

    return handler
