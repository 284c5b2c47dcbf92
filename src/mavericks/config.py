"""Environment-driven settings for the Marketing Mavericks service.

Values are read once per call to :func:`load_settings`; ``.env`` files are
honoured through python-dotenv so local development does not need exported
variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

SERVICE_NAME = "marketing-mavericks-agent"


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4"
    openai_base_url: Optional[str] = None
    port: int = 3000
    environment: str = "development"
    client_dir: str = "client/dist"
    generation_timeout_seconds: float = 29.0
    request_timeout_seconds: float = 30.0

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
        return value if value > 0 else default
    except ValueError:
        return default


def load_settings(*, dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL") or "gpt-4",
        openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
        port=_env_int("PORT", 3000),
        environment=(os.getenv("NODE_ENV") or "development").strip().lower(),
        client_dir=os.getenv("MAVERICKS_CLIENT_DIR") or "client/dist",
    )
