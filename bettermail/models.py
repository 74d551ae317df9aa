"""models for DBs"""

from __future__ import annotations

from sqlalchemy import Column, String, Text

from .db import Base


class EmailThread(Base):
    """Subject line a commit's notifications are threaded under."""

    __tablename__ = "email_threads"
    commit_id = Column(String, primary_key=True)
    subject = Column(Text, nullable=False)
