"""Shared pytest fixtures for the webhook → mail test suite."""

from __future__ import annotations

import copy
import json
import os

os.environ.setdefault("DB_URL", "sqlite://")

import pytest

from bettermail.config import Settings
from bettermail.services.mailer import RecipientPolicy
from bettermail.services.threads import InMemoryThreadRegistry


PUSH_PAYLOAD = {
    "ref": "refs/heads/main",
    "before": "0000000000000000000000000000000000000000",
    "after": "def5678aaaabbbbccccddddeeeeffff000011112",
    "compare": "https://github.com/org/repo/compare/0000000...def5678",
    "repository": {
        "id": 1,
        "name": "repo",
        "full_name": "org/repo",
        "url": "https://github.com/org/repo",
        "html_url": "https://github.com/org/repo",
        "pushed_at": 1709679845,
    },
    "pusher": {"name": "octocat", "email": "octocat@example.com"},
    "sender": {"login": "octocat"},
    "commits": [
        {
            "id": "abc1234ffffeeeeddddccccbbbbaaaa99998888",
            "message": "Fix bug\n\nLonger explanation of the fix.",
            "timestamp": "2024-03-05T15:04:05-08:00",
            "url": "https://github.com/org/repo/commit/abc1234ffffeeeeddddccccbbbbaaaa99998888",
            "author": {"name": "Mona Lisa", "email": "mona@example.com", "username": "mona"},
            "committer": {"name": "GitHub", "email": "noreply@github.com", "username": "web-flow"},
        },
        {
            "id": "def5678aaaabbbbccccddddeeeeffff000011112",
            "message": "Add test",
            "timestamp": "2024-03-05T15:10:00-08:00",
            "url": "https://github.com/org/repo/commit/def5678aaaabbbbccccddddeeeeffff000011112",
            "author": {"name": "The Octocat", "email": "octocat@example.com", "username": "octocat"},
            "committer": {"name": "The Octocat", "email": "octocat@example.com", "username": "octocat"},
        },
    ],
}

COMMENT_PAYLOAD = {
    "action": "created",
    "comment": {
        "id": 42,
        "commit_id": "abc1234ffffeeeeddddccccbbbbaaaa99998888",
        "body": "Looks **good** to me",
        "html_url": "https://github.com/org/repo/commit/abc1234#commitcomment-42",
        "created_at": "2024-03-06T17:30:00Z",
        "updated_at": "2024-03-06T17:30:00Z",
    },
    "repository": {
        "id": 1,
        "name": "repo",
        "full_name": "org/repo",
        "url": "https://api.github.com/repos/org/repo",
        "html_url": "https://github.com/org/repo",
    },
    "sender": {"login": "hubot", "type": "User"},
}


class FakeRenderer:
    """Records each render call and returns a recognizable body."""

    def __init__(self):
        self.calls = []

    def render(self, template_name, context):
        self.calls.append((template_name, context))
        return f"<p>{template_name}</p>"


class FakeMarkdown:
    def __init__(self):
        self.calls = []

    def to_html(self, text, repository):
        self.calls.append((text, repository.full_name))
        return f"<p>{text}</p>"


class FakeTransport:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def send(self, notification):
        if self.error is not None:
            raise self.error
        self.sent.append(notification)


@pytest.fixture
def push_payload() -> dict:
    return copy.deepcopy(PUSH_PAYLOAD)


@pytest.fixture
def comment_payload() -> dict:
    return copy.deepcopy(COMMENT_PAYLOAD)


@pytest.fixture
def push_body(push_payload) -> bytes:
    return json.dumps(push_payload).encode()


@pytest.fixture
def comment_body(comment_payload) -> bytes:
    return json.dumps(comment_payload).encode()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        app_domain="bettermail-test.appspotmail.com",
        recipient="eng+commits@example.com",
        dev_recipient="dev@example.com",
        dev_mode=False,
        timezone="America/Los_Angeles",
    )


@pytest.fixture
def registry() -> InMemoryThreadRegistry:
    return InMemoryThreadRegistry()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def markdown() -> FakeMarkdown:
    return FakeMarkdown()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def recipients(test_settings) -> RecipientPolicy:
    return RecipientPolicy(test_settings)
