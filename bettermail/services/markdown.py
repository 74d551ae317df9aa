"""Comment markdown rendered by GitHub's markdown API."""

from __future__ import annotations

import logging
from html import escape
from typing import Optional, Protocol

import httpx

from bettermail.config import settings
from bettermail.schemas import Repository

logger = logging.getLogger(__name__)

HTTP_TIMEOUT_SECONDS = 10


class MarkdownRenderer(Protocol):
    def to_html(self, text: str, repository: Repository) -> str:
        ...


def _plain_html(text: str) -> str:
    return f"<pre>{escape(text, quote=True)}</pre>"


class GitHubMarkdownRenderer:
    """
    Renders GitHub-flavored markdown in the context of the repository, so
    ``#123`` and commit references link the way they do on github.com.
    Falls back to escaped preformatted text when the API is unavailable.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.api_url = (api_url or settings.github_api_url).rstrip("/")
        self.token = settings.github_token if token is None else token
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _post(self, client: httpx.Client, payload: dict) -> httpx.Response:
        return client.post(
            f"{self.api_url}/markdown", json=payload, headers=self._headers()
        )

    def to_html(self, text: str, repository: Repository) -> str:
        payload = {"text": text, "mode": "gfm", "context": repository.full_name}
        try:
            if self._client is not None:
                resp = self._post(self._client, payload)
            else:
                with httpx.Client(timeout=HTTP_TIMEOUT_SECONDS) as client:
                    resp = self._post(client, payload)
        except httpx.HTTPError as exc:
            logger.warning("Markdown render request failed: %s", exc)
            return _plain_html(text)
        if resp.status_code >= 300:
            logger.warning(
                "Markdown render error: %s %s", resp.status_code, resp.text[:200]
            )
            return _plain_html(text)
        return resp.text
