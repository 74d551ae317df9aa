"""Centralized Jinja2 template configuration for notification bodies."""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from bettermail.errors import RenderError

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

PUSH_TEMPLATE = "push"
COMMIT_COMMENT_TEMPLATE = "commit-comment"


class JinjaRenderer:
    """
    Renders a typed context dataclass with ``<name>.html`` from the
    templates directory. Each dataclass field becomes a template variable.
    """

    def __init__(self, directory: Path | str = _TEMPLATES_DIR):
        self.env = Environment(
            loader=FileSystemLoader(str(directory)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, context: Any) -> str:
        values = {f.name: getattr(context, f.name) for f in fields(context)}
        try:
            return self.env.get_template(f"{template_name}.html").render(**values)
        except TemplateError as exc:
            raise RenderError(f"could not render {template_name}: {exc}") from exc
