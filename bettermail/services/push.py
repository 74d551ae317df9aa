"""Push events → commit notification mail."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from bettermail.errors import RegistryWriteError
from bettermail.schemas import Notification, PushContext, PushPayload
from bettermail.services.commits import build_display_commit
from bettermail.services.mailer import RecipientPolicy
from bettermail.services.senders import format_sender_address, resolve_pusher_name
from bettermail.services.threads import ThreadRegistry
from bettermail.templating import PUSH_TEMPLATE
from bettermail.timezone import DISPLAY_DATE_FORMAT, DISPLAY_DATE_FULL_FORMAT, safe_format_date

logger = logging.getLogger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"


def branch_name_from_ref(ref: str) -> str:
    """``refs/heads/main`` → ``main``; refs without that prefix are kept as-is."""
    if ref.startswith(BRANCH_REF_PREFIX) and len(ref) > len(BRANCH_REF_PREFIX):
        return ref[len(BRANCH_REF_PREFIX):]
    return ref


class PushEventProcessor:
    def __init__(
        self,
        registry: ThreadRegistry,
        renderer,
        recipients: RecipientPolicy,
        app_domain: str,
        tz: Optional[dt.tzinfo] = None,
    ):
        self.registry = registry
        self.renderer = renderer
        self.recipients = recipients
        self.app_domain = app_domain
        self.tz = tz

    def _register_thread(self, commit_id: str, subject: str) -> None:
        try:
            self.registry.put(commit_id, subject)
        except RegistryWriteError as exc:
            logger.error("Error creating thread: %s", exc)

    def process(self, payload: PushPayload) -> Optional[Notification]:
        repo = payload.repository
        if not payload.commits:
            return None

        commits = [build_display_commit(c, repo, self.tz) for c in payload.commits]
        branch_name = branch_name_from_ref(payload.ref)
        # The last link in the mail is what the GitHub Gmail extension opens
        # as the diff view: the commit itself, or the compare view for several.
        anchor_url = commits[0].url if len(commits) == 1 else payload.compare

        first = commits[0]
        subject = f"[{repo.full_name}] {first.short_id}: {first.title}"
        for commit in commits:
            self._register_thread(commit.id, subject)

        sender_name = resolve_pusher_name(payload)
        context = PushContext(
            repository=repo,
            commits=commits,
            branch_name=branch_name,
            branch_url=f"{repo.web_url}/tree/{branch_name}",
            pushed_display_date=safe_format_date(repo.pushed_at, DISPLAY_DATE_FORMAT, self.tz),
            pushed_display_date_tooltip=safe_format_date(
                repo.pushed_at, DISPLAY_DATE_FULL_FORMAT, self.tz
            ),
            anchor_url=anchor_url,
            pusher_name=sender_name,
        )
        html_body = self.renderer.render(PUSH_TEMPLATE, context)

        return Notification(
            sender_address=format_sender_address(
                sender_name, payload.pusher.name, self.app_domain
            ),
            recipients=self.recipients.recipients(),
            subject=subject,
            html_body=html_body,
        )
