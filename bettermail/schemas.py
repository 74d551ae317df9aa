"""Payload schemas and the values built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class _Payload(BaseModel):
    """Base for GitHub payload fragments; unknown fields are dropped."""

    class Config:
        extra = "ignore"


class Repository(_Payload):
    full_name: str
    name: str = ""
    url: str = ""
    html_url: Optional[str] = None
    # push events send a unix timestamp here, pydantic accepts both forms
    pushed_at: Optional[datetime] = None

    @property
    def web_url(self) -> str:
        """Browser URL of the repository (push payloads put it in ``url``)."""
        return (self.html_url or self.url).rstrip("/")


class GitUser(_Payload):
    name: str = ""
    email: str = ""
    username: Optional[str] = None


class Pusher(_Payload):
    name: str
    email: Optional[str] = None


class Sender(_Payload):
    login: str


class Commit(_Payload):
    id: str
    message: str = ""
    timestamp: Optional[datetime] = None
    url: str = ""
    author: GitUser = GitUser()
    committer: GitUser = GitUser()


class PushPayload(_Payload):
    """
    Minimal model for a ``push`` delivery.
    Only fields used by this app are included.
    """

    ref: str
    compare: str = ""
    repository: Repository
    pusher: Pusher
    sender: Optional[Sender] = None
    commits: List[Commit] = []


class Comment(_Payload):
    commit_id: str
    body: str = ""
    html_url: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CommitCommentPayload(_Payload):
    """Minimal model for a ``commit_comment`` delivery."""

    repository: Repository
    comment: Comment
    sender: Sender


@dataclass(frozen=True)
class DisplayCommit:
    """A commit as shown in a push notification."""

    id: str
    short_id: str
    title: str
    url: str
    author_display_name: str
    display_date: str
    display_date_tooltip: str


@dataclass(frozen=True)
class PushContext:
    """Values available to the ``push`` template."""

    repository: Repository
    commits: List[DisplayCommit]
    branch_name: str
    branch_url: str
    pushed_display_date: str
    pushed_display_date_tooltip: str
    anchor_url: str
    pusher_name: str


@dataclass(frozen=True)
class CommentContext:
    """Values available to the ``commit-comment`` template."""

    repository: Repository
    comment: Comment
    sender: Sender
    short_id: str
    body: str
    commit_url: str
    updated_display_date: str


@dataclass(frozen=True)
class Notification:
    """An email ready to be handed to a transport."""

    sender_address: str
    recipients: List[str] = field(default_factory=list)
    subject: str = ""
    html_body: str = ""

    def __post_init__(self) -> None:
        if not self.subject:
            raise ValueError("notification subject must not be empty")
        if not self.recipients:
            raise ValueError("notification needs at least one recipient")
