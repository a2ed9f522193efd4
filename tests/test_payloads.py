"""Tests for event names and typed payload parsing."""

import json

import pytest

from ghhook.errors import PayloadParseError
from ghhook.github.events import Event
from ghhook.github.payloads import (
    PullRequestEvent,
    PushEvent,
    WebhookPayload,
    parse_webhook,
    payload_model,
)

# -- Event names -------------------------------------------------------------


def test_event_compares_equal_to_header_value() -> None:
    assert Event.PULL_REQUEST == "pull_request"
    assert str(Event.TEAM_ADD) == "team_add"


def test_event_lookup_by_value() -> None:
    assert Event("issue_comment") is Event.ISSUE_COMMENT


# -- Model selection ---------------------------------------------------------


def test_dedicated_model_for_pull_request() -> None:
    assert payload_model("pull_request") is PullRequestEvent


def test_known_event_without_model_uses_base() -> None:
    assert payload_model(Event.GOLLUM) is WebhookPayload


def test_unknown_event_is_parse_error() -> None:
    with pytest.raises(PayloadParseError, match="unknown X-GitHub-Event"):
        payload_model("not_an_event")


# -- Parsing -----------------------------------------------------------------


def test_parse_pull_request(pr_body: str) -> None:
    payload = parse_webhook("pull_request", pr_body)

    assert isinstance(payload, PullRequestEvent)
    assert payload.action == "opened"
    assert payload.number == 42
    assert payload.pull_request.head.ref == "feature"
    assert payload.repository.full_name == "octocat/hello"


def test_parse_accepts_bytes(pr_body: str) -> None:
    payload = parse_webhook("pull_request", pr_body.encode())
    assert payload.number == 42


def test_parse_push() -> None:
    body = json.dumps(
        {
            "ref": "refs/heads/main",
            "before": "a" * 40,
            "after": "b" * 40,
            "commits": [{"id": "b" * 40, "message": "Fix", "added": ["x.py"]}],
            "pusher": {"name": "octocat", "email": "octocat@example.com"},
        }
    )
    payload = parse_webhook(Event.PUSH, body)

    assert isinstance(payload, PushEvent)
    assert payload.ref == "refs/heads/main"
    assert payload.commits[0].added == ["x.py"]
    assert payload.action is None


def test_unknown_fields_are_kept() -> None:
    payload = parse_webhook("pull_request", json.dumps({"action": "labeled", "label": {"name": "bug"}}))
    assert payload.model_extra["label"] == {"name": "bug"}


def test_invalid_json_is_parse_error() -> None:
    with pytest.raises(PayloadParseError) as exc_info:
        parse_webhook("pull_request", "not json")
    assert exc_info.value.event_name == "pull_request"


def test_non_object_body_is_parse_error() -> None:
    with pytest.raises(PayloadParseError):
        parse_webhook("push", "[1, 2, 3]")


def test_wrong_field_type_is_parse_error() -> None:
    with pytest.raises(PayloadParseError, match="number"):
        parse_webhook("pull_request", json.dumps({"number": "forty-two"}))


def test_unknown_event_name_is_parse_error(pr_body: str) -> None:
    with pytest.raises(PayloadParseError):
        parse_webhook("bogus", pr_body)


# -- Generic mapping view ----------------------------------------------------


def test_as_mapping_contains_only_sent_fields() -> None:
    payload = parse_webhook("pull_request", json.dumps({"number": 1, "extra": [1, 2]}))
    data = payload.as_mapping()

    assert data == {"number": 1, "extra": [1, 2]}
    assert "action" not in data


def test_as_mapping_is_nested_plain_data(pr_body: str) -> None:
    data = parse_webhook("pull_request", pr_body).as_mapping()

    assert data["action"] == "opened"
    assert data["pull_request"]["user"] == {"login": "octocat", "id": 1}


def test_as_mapping_is_cached(pr_body: str) -> None:
    payload = parse_webhook("pull_request", pr_body)
    assert payload.as_mapping() is payload.as_mapping()


def test_as_mapping_drops_explicit_nulls() -> None:
    payload = parse_webhook(
        "pull_request", json.dumps({"action": None, "number": 5, "pull_request": {"title": None}})
    )

    assert payload.as_mapping() == {"number": 5, "pull_request": {}}
