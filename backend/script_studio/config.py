"""Runtime settings read from the environment (and `.env`)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .ai.openai_client import DEFAULT_CHAT_MODEL
from .controller import DEFAULT_EXPORT_PREFIX
from .media import MAX_UPLOAD_BYTES

HACKCLUB_BASE_URL = "https://ai.hackclub.com/proxy/v1"
REPO_ROOT = Path(__file__).resolve().parents[2]

_logging_configured = False


def _read_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _read_int(name: str, default: int, minimum: int) -> int:
    raw = _read_env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(value, minimum)


def _resolve_base_url(api_key: str | None, base_url: str | None) -> str | None:
    if base_url:
        return base_url
    if api_key and api_key.startswith("sk-hc-"):
        return HACKCLUB_BASE_URL
    return None


def read_credential() -> str | None:
    """Current API key; `API_KEY` is accepted when `OPENAI_API_KEY` is unset."""
    return _read_env("OPENAI_API_KEY") or _read_env("API_KEY")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the generation client and the UI."""

    api_key: str | None
    base_url: str | None
    chat_model: str
    export_prefix: str
    max_upload_bytes: int
    log_level: str

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


def load_settings(dotenv_path: Path | None = None) -> Settings:
    load_dotenv(dotenv_path or REPO_ROOT / ".env", override=False)

    api_key = read_credential()
    max_mb = _read_int("SCRIPT_STUDIO_MAX_UPLOAD_MB", default=50, minimum=1)
    return Settings(
        api_key=api_key,
        base_url=_resolve_base_url(api_key, _read_env("OPENAI_BASE_URL")),
        chat_model=_read_env("OPENAI_DEFAULT_CHAT_MODEL") or DEFAULT_CHAT_MODEL,
        export_prefix=_read_env("SCRIPT_STUDIO_EXPORT_PREFIX") or DEFAULT_EXPORT_PREFIX,
        max_upload_bytes=min(max_mb * 1024 * 1024, MAX_UPLOAD_BYTES),
        log_level=(_read_env("SCRIPT_STUDIO_LOG_LEVEL") or "INFO").upper(),
    )


def resolve_log_level(name: str | None) -> int:
    """Map a level name such as ``DEBUG`` to its number; INFO when unknown."""
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str = "INFO") -> None:
    """Install the root log format once per process."""
    global _logging_configured
    if _logging_configured:
        return
    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _logging_configured = True
