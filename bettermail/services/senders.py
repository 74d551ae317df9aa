"""Who a notification appears to come from."""

from __future__ import annotations

from email.utils import formataddr

from bettermail.schemas import PushPayload


def resolve_pusher_name(payload: PushPayload) -> str:
    """
    Best display name for the pusher.

    The pusher only carries a username, but usually they authored or
    committed one of the pushed commits, so take the name from there. Commits
    are scanned in order, author before committer. The username stands in
    when nothing matches or the matching commit carries no name.
    """
    username = payload.pusher.name
    for commit in payload.commits:
        if commit.author.username == username:
            return commit.author.name or username
        if commit.committer.username == username:
            return commit.committer.name or username
    return username


def format_sender_address(display_name: str, username: str, app_domain: str) -> str:
    """``Name <username@domain>``, with the name quoted when it needs to be."""
    return formataddr((display_name, f"{username}@{app_domain}"))
