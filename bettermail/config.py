"""the beautiful world start from here."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """App Settings"""

    db_url: str = os.getenv("DB_URL", "sqlite:///./bettermail.sqlite3")
    timezone: str = os.getenv("TIMEZONE", "America/Los_Angeles")
    app_domain: str = os.getenv("APP_DOMAIN", "bettermail.appspotmail.com")
    recipient: str = os.getenv("RECIPIENT", "eng+commits@example.com")
    dev_recipient: str = os.getenv("DEV_RECIPIENT", "dev@example.com")
    dev_mode: bool = _env_flag("DEV_MODE")
    smtp_host: str = os.getenv("SMTP_HOST", "localhost")
    smtp_port: int = int(os.getenv("SMTP_PORT", "25"))
    smtp_user: str = os.getenv("SMTP_USER", "")
    smtp_password: str = os.getenv("SMTP_PASSWORD", "")
    github_api_url: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
    github_token: str = os.getenv("GITHUB_TOKEN", "")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
