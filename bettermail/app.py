"""the beautiful world start from here."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from bettermail.config import Settings, settings as default_settings
from bettermail.db import make_session_factory
from bettermail.routers import hook
from bettermail.services.comment import CommentEventProcessor
from bettermail.services.hooks import HookDispatcher
from bettermail.services.mailer import RecipientPolicy, SmtpTransport, Transport
from bettermail.services.markdown import GitHubMarkdownRenderer, MarkdownRenderer
from bettermail.services.push import PushEventProcessor
from bettermail.services.threads import SqlThreadRegistry, ThreadRegistry
from bettermail.templating import JinjaRenderer
from bettermail.timezone import load_timezone


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    *,
    settings: Optional[Settings] = None,
    registry: Optional[ThreadRegistry] = None,
    renderer=None,
    markdown: Optional[MarkdownRenderer] = None,
    transport: Optional[Transport] = None,
    recipients: Optional[RecipientPolicy] = None,
) -> FastAPI:
    """
    Build the webhook app. Collaborators default to the production ones
    (SQL registry, Jinja templates, GitHub markdown API, SMTP) and can be
    replaced, e.g. by in-memory fakes in tests.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    if registry is None:
        registry = SqlThreadRegistry(make_session_factory(settings.db_url))
    renderer = renderer or JinjaRenderer()
    markdown = markdown or GitHubMarkdownRenderer()
    transport = transport or SmtpTransport()
    recipients = recipients or RecipientPolicy(settings)
    tz, _ = load_timezone(settings.timezone)

    dispatcher = HookDispatcher(
        push=PushEventProcessor(registry, renderer, recipients, settings.app_domain, tz),
        comment=CommentEventProcessor(
            registry, renderer, markdown, recipients, settings.app_domain, tz
        ),
        transport=transport,
    )

    app = FastAPI(title="GitHub → threaded commit mail")
    app.state.settings = settings
    app.state.registry = registry
    app.state.dispatcher = dispatcher
    app.include_router(hook.router)
    return app
