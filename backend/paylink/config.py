"""
Runtime configuration.

Values come from the process environment, optionally seeded from a .env
file. Routes receive the settings through the ``get_settings`` dependency so
tests can swap them with ``app.dependency_overrides``.
"""

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

_DEFAULT_FRONTEND_URL = "https://seu-frontend.vercel.app"


def _split_origins(raw: str) -> List[str]:
    """Parse a comma-separated CORS_ORIGINS value, dropping blanks and duplicates."""
    seen: set = set()
    origins: List[str] = []
    for origin in raw.split(","):
        origin = origin.strip()
        if origin and origin not in seen:
            seen.add(origin)
            origins.append(origin)
    return origins or ["*"]


class Settings(BaseModel):
    email_user: str = ""
    email_pass: str = ""
    responsible_email: str = ""
    frontend_url: str = _DEFAULT_FRONTEND_URL
    port: int = 3001

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    mail_sender_name: str = "Guaraci Pagamentos"

    cors_origins: List[str] = ["*"]
    image_retention_seconds: float = 3600
    link_registry: str = "none"  # "none" or "memory"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        A .env file in the working directory is loaded first; variables that
        are already set in the environment take precedence over it.
        """
        load_dotenv()
        return cls(
            email_user=os.getenv("EMAIL_USER", "").strip(),
            email_pass=os.getenv("EMAIL_PASS", ""),
            responsible_email=os.getenv("RESPONSIBLE_EMAIL", "").strip(),
            frontend_url=os.getenv("FRONTEND_URL", "").strip() or _DEFAULT_FRONTEND_URL,
            port=int(os.getenv("PORT", "3001")),
            smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
            smtp_port=int(os.getenv("SMTP_PORT", "465")),
            mail_sender_name=os.getenv("MAIL_SENDER_NAME", "Guaraci Pagamentos"),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "")),
            image_retention_seconds=float(os.getenv("IMAGE_RETENTION_SECONDS", "3600")),
            link_registry=os.getenv("LINK_REGISTRY", "none").lower().strip(),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
