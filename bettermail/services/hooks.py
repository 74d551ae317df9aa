"""Decoding GitHub deliveries and routing them to their processor."""

from __future__ import annotations

import logging
from typing import Optional, Union

from pydantic import ValidationError

from bettermail.errors import DecodeError
from bettermail.schemas import CommitCommentPayload, Notification, PushPayload
from bettermail.services.comment import CommentEventProcessor
from bettermail.services.mailer import Transport
from bettermail.services.push import PushEventProcessor

logger = logging.getLogger(__name__)

PUSH_EVENT = "push"
COMMIT_COMMENT_EVENT = "commit_comment"

Payload = Union[PushPayload, CommitCommentPayload]

PAYLOAD_TYPES = {
    PUSH_EVENT: PushPayload,
    COMMIT_COMMENT_EVENT: CommitCommentPayload,
}


def is_handled_event(event_type: Optional[str]) -> bool:
    return (event_type or "") in PAYLOAD_TYPES


def decode_payload(event_type: Optional[str], body: bytes | str) -> Optional[Payload]:
    """
    Parse ``body`` as the payload for ``event_type``.

    Returns ``None`` for event types this app does not handle; the body is
    not looked at in that case. Raises :class:`DecodeError` when the body is
    not valid JSON of the expected shape.
    """
    model = PAYLOAD_TYPES.get(event_type or "")
    if model is None:
        return None
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"malformed {event_type} payload: {exc}") from exc


class HookDispatcher:
    """Turns one webhook delivery into at most one sent notification."""

    def __init__(
        self,
        push: PushEventProcessor,
        comment: CommentEventProcessor,
        transport: Transport,
    ):
        self.push = push
        self.comment = comment
        self.transport = transport

    def handle(self, event_type: Optional[str], body: bytes | str) -> Optional[Notification]:
        payload = decode_payload(event_type, body)
        if payload is None:
            logger.info("Unhandled event type: %s", event_type)
            return None
        if isinstance(payload, PushPayload):
            message = self.push.process(payload)
            if message is None:
                logger.info(
                    "Push to %s in %s has no commits, nothing to send",
                    payload.ref,
                    payload.repository.full_name,
                )
            return message
        return self.comment.process(payload)

    def deliver(self, event_type: Optional[str], body: bytes | str) -> Optional[Notification]:
        message = self.handle(event_type, body)
        if message is not None:
            self.transport.send(message)
        return message
