"""Backend application factory.

Returns a small dependency container; the Streamlit layer builds one
`StudioController` per browser session from it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict

from .ai.openai_client import OpenAIClient
from .config import configure_logging, load_settings, read_credential
from .controller import StudioController


def create_app(dotenv_path: Path | None = None) -> Dict[str, Any]:
    """Create the backend dependency container."""
    settings = load_settings(dotenv_path)
    configure_logging(settings.log_level)

    ai_client = OpenAIClient(
        base_url=settings.base_url,
        default_chat_model=settings.chat_model,
    )

    def _new_controller() -> StudioController:
        return StudioController(
            generator=ai_client.generate,
            credential=read_credential,
            export_prefix=settings.export_prefix,
            max_upload_bytes=settings.max_upload_bytes,
        )

    controller_factory: Callable[[], StudioController] = _new_controller
    return {
        "settings": settings,
        "ai_client": ai_client,
        "controller_factory": controller_factory,
    }
