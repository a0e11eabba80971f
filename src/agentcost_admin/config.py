"""Configuration management for the AgentCost admin CLI.

Loads the backend URL and session settings from environment variables
(optionally from a project .env file).
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30.0
DEFAULT_SESSION_FILE = "~/.agentcost-admin/session.json"

_default_url_warned = False


class Settings(BaseModel):
    """Application settings loaded from environment variables."""
    api_url: str = Field(default=DEFAULT_API_URL, description="AgentCost backend base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, description="HTTP timeout in seconds")
    session_file: str = Field(default=DEFAULT_SESSION_FILE, description="Where the admin session is stored")

    @property
    def session_path(self) -> Path:
        return Path(self.session_file).expanduser()


def _find_project_root() -> Path:
    """Walk up from the cwd looking for a .env file."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / ".env").exists():
            return parent
    return current


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _warn_default_url() -> None:
    global _default_url_warned
    if _default_url_warned:
        return
    _default_url_warned = True
    logger.warning(
        "AGENTCOST_API_URL is not set, defaulting to %s. "
        "Set AGENTCOST_API_URL in your environment for production.",
        DEFAULT_API_URL,
    )


def _parse_timeout(raw: str) -> float:
    """Parse AGENTCOST_ADMIN_TIMEOUT, falling back to the default on bad input."""
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if not value > 0:
        logger.warning(
            "AGENTCOST_ADMIN_TIMEOUT=%r is not a positive number of seconds, using %s",
            raw, DEFAULT_TIMEOUT,
        )
        return DEFAULT_TIMEOUT
    return value


def _load_settings() -> Settings:
    """Load settings from environment variables.

    Accepts the web console's NEXT_PUBLIC_API_URL as a fallback name.
    """
    api_url = _env("AGENTCOST_API_URL", "NEXT_PUBLIC_API_URL")
    if not api_url:
        _warn_default_url()
        api_url = DEFAULT_API_URL

    return Settings(
        api_url=api_url.rstrip("/"),
        timeout=_parse_timeout(_env("AGENTCOST_ADMIN_TIMEOUT", default="30")),
        session_file=_env("AGENTCOST_ADMIN_SESSION_FILE", default=DEFAULT_SESSION_FILE),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache the application settings."""
    env_path = _find_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    return _load_settings()
