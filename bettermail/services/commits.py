"""Display helpers for commits in a push."""

from __future__ import annotations

import datetime as dt

from bettermail.schemas import Commit, DisplayCommit, Repository
from bettermail.timezone import (
    DISPLAY_DATE_FORMAT,
    DISPLAY_DATE_FULL_FORMAT,
    safe_format_date,
)

SHORT_ID_LENGTH = 7


def short_id(commit_id: str) -> str:
    return commit_id[:SHORT_ID_LENGTH]


def first_line(text: str | None) -> str:
    if not text:
        return ""
    return text.split("\n", 1)[0]


def commit_url(repository: Repository, commit_id: str) -> str:
    return f"{repository.web_url}/commit/{commit_id}"


def _author_display_name(commit: Commit) -> str:
    return commit.author.name or commit.author.username or ""


def build_display_commit(
    commit: Commit,
    repository: Repository,
    tz: dt.tzinfo | None = None,
) -> DisplayCommit:
    """Turn a raw push commit into the values the push template shows."""
    return DisplayCommit(
        id=commit.id,
        short_id=short_id(commit.id),
        title=first_line(commit.message),
        url=commit_url(repository, commit.id),
        author_display_name=_author_display_name(commit),
        display_date=safe_format_date(commit.timestamp, DISPLAY_DATE_FORMAT, tz),
        display_date_tooltip=safe_format_date(
            commit.timestamp, DISPLAY_DATE_FULL_FORMAT, tz
        ),
    )
