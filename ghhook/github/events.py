"""Known GitHub webhook event names, as sent in the X-GitHub-Event header."""

from enum import StrEnum


class Event(StrEnum):
    """GitHub webhook event types.

    Members compare equal to their header value, so ``Event.PUSH == "push"``
    and either form can be used as a registry key.
    """

    COMMIT_COMMENT = "commit_comment"
    CREATE = "create"
    DELETE = "delete"
    DEPLOYMENT = "deployment"
    DEPLOYMENT_STATUS = "deployment_status"
    FORK = "fork"
    GOLLUM = "gollum"
    INSTALLATION = "installation"
    INTEGRATION_INSTALLATION = "integration_installation"
    ISSUE_COMMENT = "issue_comment"
    ISSUES = "issues"
    LABEL = "label"
    MEMBER = "member"
    MEMBERSHIP = "membership"
    MILESTONE = "milestone"
    ORGANIZATION = "organization"
    ORG_BLOCK = "org_block"
    PAGE_BUILD = "page_build"
    PING = "ping"
    PROJECT_CARD = "project_card"
    PROJECT_COLUMN = "project_column"
    PROJECT = "project"
    PUBLIC = "public"
    PULL_REQUEST = "pull_request"
    PULL_REQUEST_REVIEW = "pull_request_review"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"
    PUSH = "push"
    RELEASE = "release"
    REPOSITORY = "repository"
    STATUS = "status"
    TEAM = "team"
    TEAM_ADD = "team_add"
    WATCH = "watch"
