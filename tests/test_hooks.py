"""Tests for payload decoding and dispatch."""

from __future__ import annotations

import json
import logging
from zoneinfo import ZoneInfo

import pytest

from bettermail.errors import DecodeError, TransportError
from bettermail.schemas import CommitCommentPayload, PushPayload
from bettermail.services.comment import CommentEventProcessor
from bettermail.services.hooks import HookDispatcher, decode_payload, is_handled_event
from bettermail.services.push import PushEventProcessor

LA = ZoneInfo("America/Los_Angeles")


@pytest.fixture
def dispatcher(registry, renderer, markdown, recipients, transport):
    return HookDispatcher(
        push=PushEventProcessor(registry, renderer, recipients, "app.example.com", LA),
        comment=CommentEventProcessor(
            registry, renderer, markdown, recipients, "app.example.com", LA
        ),
        transport=transport,
    )


def test_decode_push(push_body):
    payload = decode_payload("push", push_body)
    assert isinstance(payload, PushPayload)
    assert payload.repository.full_name == "org/repo"
    assert len(payload.commits) == 2


def test_decode_commit_comment(comment_body):
    payload = decode_payload("commit_comment", comment_body)
    assert isinstance(payload, CommitCommentPayload)
    assert payload.comment.commit_id.startswith("abc1234")


@pytest.mark.parametrize("event", ["issues", "ping", "", None, "Push"])
def test_unrecognized_event_is_not_an_error(event):
    assert decode_payload(event, b"not even json") is None


@pytest.mark.parametrize("body", [b"", b"{", b"[]", b'{"ref": "refs/heads/main"}'])
def test_malformed_push_raises_decode_error(body):
    with pytest.raises(DecodeError):
        decode_payload("push", body)


def test_dispatch_push_sends_mail(dispatcher, transport, push_body):
    message = dispatcher.deliver("push", push_body)
    assert transport.sent == [message]
    assert message.subject == "[org/repo] abc1234: Fix bug"


def test_dispatch_comment_after_push_threads(dispatcher, transport, push_body, comment_body):
    dispatcher.deliver("push", push_body)
    dispatcher.deliver("commit_comment", comment_body)
    assert [m.subject for m in transport.sent] == ["[org/repo] abc1234: Fix bug"] * 2


def test_dispatch_unhandled_event_sends_nothing(dispatcher, transport):
    assert dispatcher.deliver("issues", b"{}") is None
    assert transport.sent == []


def test_transport_error_propagates(dispatcher, transport, push_body):
    transport.error = TransportError("relay down")
    with pytest.raises(TransportError):
        dispatcher.deliver("push", push_body)


def test_push_without_commits_is_logged_and_not_sent(dispatcher, transport, push_payload, caplog):
    push_payload["commits"] = []
    with caplog.at_level(logging.INFO, logger="bettermail.services.hooks"):
        assert dispatcher.deliver("push", json.dumps(push_payload)) is None

    assert transport.sent == []
    assert "has no commits" in caplog.text
    assert "Unhandled event type" not in caplog.text


@pytest.mark.parametrize(
    "event, handled",
    [("push", True), ("commit_comment", True), ("issues", False), (None, False)],
)
def test_is_handled_event(event, handled):
    assert is_handled_event(event) is handled
