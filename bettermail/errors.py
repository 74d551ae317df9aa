"""Errors raised while turning a webhook into mail."""

from __future__ import annotations


class BettermailError(Exception):
    """Base class for every error raised by this app."""


class DecodeError(BettermailError):
    """The webhook body did not match the payload shape for its event type."""


class RenderError(BettermailError):
    """A notification template could not be rendered."""


class TransportError(BettermailError):
    """The mail transport refused or failed to send a notification."""


class RegistryWriteError(BettermailError):
    """A commit's thread subject could not be stored."""
