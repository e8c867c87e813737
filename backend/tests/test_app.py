"""Basic app construction smoke test."""

import logging

from script_studio.ai.openai_client import DEFAULT_CHAT_MODEL, OpenAIClient
from script_studio.app import create_app
from script_studio.config import HACKCLUB_BASE_URL, resolve_log_level
from script_studio.controller import Idle, StudioController

TRACKED_ENV = [
    "OPENAI_API_KEY",
    "API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_DEFAULT_CHAT_MODEL",
    "SCRIPT_STUDIO_EXPORT_PREFIX",
    "SCRIPT_STUDIO_MAX_UPLOAD_MB",
    "SCRIPT_STUDIO_LOG_LEVEL",
]


def _clear_env(monkeypatch):
    # setenv first so monkeypatch also undoes values load_dotenv writes later.
    for name in TRACKED_ENV:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_app_constructs(monkeypatch, tmp_path):
    _clear_env(monkeypatch)

    app = create_app(dotenv_path=tmp_path / "missing.env")

    assert {"settings", "ai_client", "controller_factory"}.issubset(app.keys())
    assert isinstance(app["ai_client"], OpenAIClient)
    assert app["ai_client"].default_chat_model == DEFAULT_CHAT_MODEL
    assert app["settings"].has_credential is False

    controller = app["controller_factory"]()
    assert isinstance(controller, StudioController)
    assert isinstance(controller.state, Idle)
    controller.close()


def test_settings_read_from_dotenv_and_resolve_hackclub(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    dotenv = tmp_path / ".env"
    dotenv.write_text(
        "API_KEY=sk-hc-demo\n"
        "SCRIPT_STUDIO_EXPORT_PREFIX=studio\n"
        "SCRIPT_STUDIO_MAX_UPLOAD_MB=500\n",
        encoding="utf-8",
    )

    app = create_app(dotenv_path=dotenv)
    settings = app["settings"]

    assert settings.api_key == "sk-hc-demo"
    assert settings.base_url == HACKCLUB_BASE_URL
    assert settings.export_prefix == "studio"
    # The upload limit can be lowered but never raised past 50 MiB.
    assert settings.max_upload_bytes == 50 * 1024 * 1024

    controller = app["controller_factory"]()
    assert controller.export_prefix == "studio"
    controller.close()


def test_environment_wins_over_dotenv(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-live")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://openrouter.ai/api/v1")
    monkeypatch.setenv("SCRIPT_STUDIO_MAX_UPLOAD_MB", "10")
    dotenv = tmp_path / ".env"
    dotenv.write_text("OPENAI_API_KEY=sk-from-file\n", encoding="utf-8")

    settings = create_app(dotenv_path=dotenv)["settings"]

    assert settings.api_key == "sk-live"
    assert settings.base_url == "https://openrouter.ai/api/v1"
    assert settings.max_upload_bytes == 10 * 1024 * 1024


def test_log_level_names_resolve_to_numbers():
    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level("WARNING") == logging.WARNING
    # Attribute names on the logging module that are not levels fall back to INFO.
    assert resolve_log_level("BASIC_FORMAT") == logging.INFO
    assert resolve_log_level("verbose") == logging.INFO
    assert resolve_log_level(None) == logging.INFO
