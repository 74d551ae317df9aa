"""Commit comment events → mail threaded under the push notification."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from bettermail.schemas import CommentContext, CommitCommentPayload, Notification
from bettermail.services.commits import commit_url, short_id
from bettermail.services.mailer import RecipientPolicy
from bettermail.services.markdown import MarkdownRenderer
from bettermail.services.senders import format_sender_address
from bettermail.services.threads import ThreadRegistry
from bettermail.templating import COMMIT_COMMENT_TEMPLATE
from bettermail.timezone import DISPLAY_DATE_FORMAT, safe_format_date

logger = logging.getLogger(__name__)


class CommentEventProcessor:
    def __init__(
        self,
        registry: ThreadRegistry,
        renderer,
        markdown: MarkdownRenderer,
        recipients: RecipientPolicy,
        app_domain: str,
        tz: Optional[dt.tzinfo] = None,
    ):
        self.registry = registry
        self.renderer = renderer
        self.markdown = markdown
        self.recipients = recipients
        self.app_domain = app_domain
        self.tz = tz

    def subject_for(self, payload: CommitCommentPayload) -> str:
        """Subject of the push mail for this commit, if one was registered."""
        commit_id = payload.comment.commit_id
        subject = self.registry.get(commit_id)
        if subject:
            return subject
        logger.info("No thread found for SHA = %s", commit_id)
        return f"[{payload.repository.full_name}] {short_id(commit_id)}"

    def process(self, payload: CommitCommentPayload) -> Notification:
        repo = payload.repository
        comment = payload.comment
        body = comment.body
        if body:
            body = self.markdown.to_html(body, repo)

        context = CommentContext(
            repository=repo,
            comment=comment,
            sender=payload.sender,
            short_id=short_id(comment.commit_id),
            body=body,
            commit_url=commit_url(repo, comment.commit_id),
            updated_display_date=safe_format_date(
                comment.updated_at, DISPLAY_DATE_FORMAT, self.tz
            ),
        )
        html_body = self.renderer.render(COMMIT_COMMENT_TEMPLATE, context)

        username = payload.sender.login
        return Notification(
            sender_address=format_sender_address(username, username, self.app_domain),
            recipients=self.recipients.recipients(),
            subject=self.subject_for(payload),
            html_body=html_body,
        )
