"""Typed GitHub webhook payloads.

Each delivery is parsed once into a pydantic model chosen by its event name.
Models keep every field GitHub sends (``extra="allow"``), so a handler can use
the typed attributes for the common fields and still reach anything else.

Filters never inspect the typed object directly; they use
:meth:`WebhookPayload.as_mapping`, a generic JSON view of the delivery that
contains only the fields actually present in the body.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from ghhook.errors import PayloadParseError
from ghhook.github.events import Event

logger = logging.getLogger(__name__)

_KNOWN_EVENTS = frozenset(Event)


class _GitHubModel(BaseModel):
    model_config = ConfigDict(extra="allow")


# -- Shared objects ------------------------------------------------------------


class User(_GitHubModel):
    login: str | None = None
    id: int | None = None
    type: str | None = None
    html_url: str | None = None


class Organization(_GitHubModel):
    login: str | None = None
    id: int | None = None


class Installation(_GitHubModel):
    id: int | None = None


class Repository(_GitHubModel):
    id: int | None = None
    name: str | None = None
    full_name: str | None = None
    owner: User | None = None
    private: bool | None = None
    html_url: str | None = None
    default_branch: str | None = None


class Label(_GitHubModel):
    id: int | None = None
    name: str | None = None
    color: str | None = None


class GitRef(_GitHubModel):
    """One side (head or base) of a pull request."""

    label: str | None = None
    ref: str | None = None
    sha: str | None = None
    repo: Repository | None = None


class PullRequest(_GitHubModel):
    id: int | None = None
    number: int | None = None
    state: str | None = None
    title: str | None = None
    body: str | None = None
    draft: bool | None = None
    merged: bool | None = None
    html_url: str | None = None
    user: User | None = None
    head: GitRef | None = None
    base: GitRef | None = None
    labels: list[Label] | None = None


class Review(_GitHubModel):
    id: int | None = None
    state: str | None = None
    body: str | None = None
    html_url: str | None = None
    user: User | None = None
    submitted_at: str | None = None


class Comment(_GitHubModel):
    """An issue comment or a pull request review comment."""

    id: int | None = None
    body: str | None = None
    html_url: str | None = None
    user: User | None = None
    path: str | None = None
    diff_hunk: str | None = None


class Issue(_GitHubModel):
    id: int | None = None
    number: int | None = None
    state: str | None = None
    title: str | None = None
    body: str | None = None
    html_url: str | None = None
    user: User | None = None
    labels: list[Label] | None = None
    pull_request: dict[str, Any] | None = None


class CommitAuthor(_GitHubModel):
    name: str | None = None
    email: str | None = None
    username: str | None = None


class Commit(_GitHubModel):
    id: str | None = None
    message: str | None = None
    timestamp: str | None = None
    url: str | None = None
    author: CommitAuthor | None = None
    added: list[str] | None = None
    removed: list[str] | None = None
    modified: list[str] | None = None


class Release(_GitHubModel):
    id: int | None = None
    tag_name: str | None = None
    name: str | None = None
    body: str | None = None
    draft: bool | None = None
    prerelease: bool | None = None
    html_url: str | None = None
    author: User | None = None


# -- Event payloads ------------------------------------------------------------


class WebhookPayload(_GitHubModel):
    """Fields common to every webhook delivery.

    Events without a dedicated model are parsed into this class directly.
    """

    action: str | None = None
    sender: User | None = None
    repository: Repository | None = None
    organization: Organization | None = None
    installation: Installation | None = None

    _mapping: dict[str, Any] | None = PrivateAttr(default=None)

    def as_mapping(self) -> dict[str, Any]:
        """Return the delivery as a plain JSON-compatible dict.

        Only fields present in the original body are included; an explicit
        JSON ``null`` counts as absent. The result is
        computed on first use and shared by every later caller, so treat it
        as read-only.
        """
        if self._mapping is None:
            self._mapping = self.model_dump(
                mode="json", exclude_unset=True, exclude_none=True
            )
        return self._mapping


class PullRequestEvent(WebhookPayload):
    number: int | None = None
    pull_request: PullRequest | None = None


class PullRequestReviewEvent(WebhookPayload):
    review: Review | None = None
    pull_request: PullRequest | None = None


class PullRequestReviewCommentEvent(WebhookPayload):
    comment: Comment | None = None
    pull_request: PullRequest | None = None


class PushEvent(WebhookPayload):
    ref: str | None = None
    before: str | None = None
    after: str | None = None
    created: bool | None = None
    deleted: bool | None = None
    forced: bool | None = None
    compare: str | None = None
    commits: list[Commit] | None = None
    head_commit: Commit | None = None
    pusher: CommitAuthor | None = None


class IssuesEvent(WebhookPayload):
    issue: Issue | None = None


class IssueCommentEvent(WebhookPayload):
    issue: Issue | None = None
    comment: Comment | None = None


class ReleaseEvent(WebhookPayload):
    release: Release | None = None


class PingEvent(WebhookPayload):
    zen: str | None = None
    hook_id: int | None = None
    hook: dict[str, Any] | None = None


class CreateEvent(WebhookPayload):
    ref: str | None = None
    ref_type: str | None = None
    master_branch: str | None = None
    pusher_type: str | None = None


class DeleteEvent(WebhookPayload):
    ref: str | None = None
    ref_type: str | None = None
    pusher_type: str | None = None


class ForkEvent(WebhookPayload):
    forkee: Repository | None = None


class StatusEvent(WebhookPayload):
    sha: str | None = None
    state: str | None = None
    context: str | None = None
    description: str | None = None
    target_url: str | None = None


class WatchEvent(WebhookPayload):
    pass


PAYLOAD_MODELS: dict[str, type[WebhookPayload]] = {
    Event.CREATE: CreateEvent,
    Event.DELETE: DeleteEvent,
    Event.FORK: ForkEvent,
    Event.ISSUE_COMMENT: IssueCommentEvent,
    Event.ISSUES: IssuesEvent,
    Event.PING: PingEvent,
    Event.PULL_REQUEST: PullRequestEvent,
    Event.PULL_REQUEST_REVIEW: PullRequestReviewEvent,
    Event.PULL_REQUEST_REVIEW_COMMENT: PullRequestReviewCommentEvent,
    Event.PUSH: PushEvent,
    Event.RELEASE: ReleaseEvent,
    Event.STATUS: StatusEvent,
    Event.WATCH: WatchEvent,
}


def payload_model(event_name: str) -> type[WebhookPayload]:
    """Pick the model class for an event name.

    Raises:
        PayloadParseError: If the name is not a known GitHub event.
    """
    if event_name not in _KNOWN_EVENTS:
        raise PayloadParseError(event_name, "unknown X-GitHub-Event in message")
    return PAYLOAD_MODELS.get(event_name, WebhookPayload)


def parse_webhook(event_name: str, body: str | bytes) -> WebhookPayload:
    """Parse a raw webhook body into the typed payload for ``event_name``.

    Raises:
        PayloadParseError: On an unknown event name, a body that is not a JSON
            object, or a field whose type does not match the model.
    """
    model = payload_model(event_name)
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        reason = f"{loc}: {first['msg']}" if loc else first["msg"]
        logger.debug("Payload validation failed for %s", event_name, exc_info=True)
        raise PayloadParseError(event_name, reason) from exc
