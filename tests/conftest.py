"""Shared test fixtures."""

import json
from collections.abc import Callable

import pytest

from ghhook.webhooks import responses
from ghhook.webhooks.dispatcher import Dispatcher
from ghhook.webhooks.transport import ProxyRequest

PULL_REQUEST_PAYLOAD = {
    "action": "opened",
    "number": 42,
    "pull_request": {
        "id": 1001,
        "number": 42,
        "state": "open",
        "title": "Add webhook filters",
        "merged": False,
        "user": {"login": "octocat", "id": 1},
        "head": {"ref": "feature", "sha": "abc123"},
        "base": {"ref": "main", "sha": "def456"},
    },
    "repository": {"id": 7, "name": "hello", "full_name": "octocat/hello"},
    "sender": {"login": "octocat", "id": 1},
}


@pytest.fixture
def dispatcher() -> Dispatcher:
    """Fresh dispatcher for each test."""
    return Dispatcher()


@pytest.fixture
def pr_body() -> str:
    return json.dumps(PULL_REQUEST_PAYLOAD)


@pytest.fixture
def make_request() -> Callable[..., ProxyRequest]:
    """Build a ProxyRequest for an event name and JSON-able payload."""

    def _make(event: str | None, payload: dict | str = PULL_REQUEST_PAYLOAD) -> ProxyRequest:
        headers = {"Content-Type": "application/json"}
        if event is not None:
            headers["X-GitHub-Event"] = event
        body = payload if isinstance(payload, str) else json.dumps(payload)
        return ProxyRequest(headers=headers, body=body)

    return _make


@pytest.fixture(autouse=True)
def _restore_response_hooks():
    """Undo any test that reassigns the process-wide response adapters."""
    error_fn = responses.error_response_fn
    success_fn = responses.success_response_fn
    yield
    responses.error_response_fn = error_fn
    responses.success_response_fn = success_fn
