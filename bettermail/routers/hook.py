"""Ruter GH?"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from bettermail.errors import DecodeError, RenderError, TransportError
from bettermail.services.hooks import is_handled_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["github"])


@router.get("/", response_class=PlainTextResponse)
async def health() -> str:
    return "OK"


@router.post("/hook", response_class=PlainTextResponse)
async def github_webhook(
    request: Request,
    x_github_event: str | None = Header(None),
):
    """
    GitHub webhook endpoint.

    `push` and `commit_comment` deliveries are turned into a notification and
    mailed; other event types are acknowledged without sending anything.
    """
    body = await request.body()
    dispatcher = request.app.state.dispatcher
    try:
        message = await run_in_threadpool(dispatcher.deliver, x_github_event, body)
    except DecodeError as exc:
        logger.error("Error %s handling %s payload", exc, x_github_event)
        raise HTTPException(400, "Error decoding payload") from exc
    except RenderError as exc:
        logger.error("Error %s handling %s payload", exc, x_github_event)
        raise HTTPException(500, "Error handling payload") from exc
    except TransportError as exc:
        logger.error("Could not send mail: %s", exc)
        raise HTTPException(502, "Could not send mail") from exc

    if message is None:
        if not is_handled_event(x_github_event):
            return f"Unhandled event type: {x_github_event}"
        return "No commits, nothing to send"
    return "OK"


@router.post("/_ah/bounce", response_class=PlainTextResponse)
async def bounce(request: Request) -> str:
    """Mail relays report undeliverable notifications here."""
    body = await request.body()
    logger.warning("Bounce: %s", body.decode("utf-8", errors="replace") or "<empty body>")
    return ""


@router.get("/test-subject", response_class=PlainTextResponse)
async def test_subject(request: Request, sha: str | None = None) -> str:
    """Look up the thread subject registered for a commit (dev mode only)."""
    if not request.app.state.settings.dev_mode:
        raise HTTPException(405)
    if not sha:
        raise HTTPException(400, "Need to specify sha param")
    registry = request.app.state.registry
    subject = await run_in_threadpool(registry.get, sha)
    return f"{subject or ''}\n"
