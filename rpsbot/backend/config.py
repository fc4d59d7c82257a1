"""Configuration helpers for backend runtime."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_API_BASE = "https://discord.com/api/v10"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    app_id: str
    bot_token: str | None
    public_key: str | None
    api_base: str
    host: str
    port: int
    session_ttl_seconds: float
    claim_lease_seconds: float
    strict_accept: bool
    log_level: str


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_settings() -> Settings:
    port_raw = os.getenv("RPSBOT_PORT", "8000")
    ttl_raw = os.getenv("RPSBOT_SESSION_TTL_SECONDS", "900")
    return Settings(
        app_id=os.getenv("RPSBOT_APP_ID", ""),
        bot_token=os.getenv("RPSBOT_BOT_TOKEN"),
        public_key=os.getenv("RPSBOT_PUBLIC_KEY") or None,
        api_base=os.getenv("RPSBOT_API_BASE", DEFAULT_API_BASE),
        host=os.getenv("RPSBOT_HOST", "127.0.0.1"),
        port=int(port_raw),
        session_ttl_seconds=float(ttl_raw),
        claim_lease_seconds=float(os.getenv("RPSBOT_CLAIM_LEASE_SECONDS", "30")),
        strict_accept=_env_flag("RPSBOT_STRICT_ACCEPT"),
        log_level=os.getenv("RPSBOT_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    root.setLevel(level)
