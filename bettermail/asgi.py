"""ASGI entry point: ``uvicorn bettermail.asgi:app``."""

from bettermail.app import create_app

app = create_app()
