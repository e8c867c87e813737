"""Main Streamlit UI for IRSHAD Script Studio.

Upload a short video, pick tone, platform and length, and get a viral
narration script back from the configured multimodal model.
"""

from __future__ import annotations

import asyncio
import html
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import streamlit as st
import streamlit.components.v1 as components

# Ensure backend package is importable when running `streamlit run streamlit_app.py`.
ROOT = Path(__file__).resolve().parent
BACKEND_ROOT = ROOT / "backend"
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

logger = logging.getLogger(__name__)

SECRET_ENV_KEYS = (
    "OPENAI_API_KEY",
    "API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_DEFAULT_CHAT_MODEL",
    "SCRIPT_STUDIO_EXPORT_PREFIX",
    "SCRIPT_STUDIO_MAX_UPLOAD_MB",
    "SCRIPT_STUDIO_LOG_LEVEL",
)


def _hydrate_env_from_streamlit_secrets() -> None:
    """Load config from Streamlit Secrets into env when not already set."""
    try:
        secrets = st.secrets.to_dict()
    except Exception as exc:  # no secrets.toml, or not running under `streamlit run`
        logger.debug("Streamlit secrets unavailable: %s", exc)
        return

    openai_block = secrets.get("openai")
    if isinstance(openai_block, dict):
        mapping = {
            "api_key": "OPENAI_API_KEY",
            "base_url": "OPENAI_BASE_URL",
            "default_chat_model": "OPENAI_DEFAULT_CHAT_MODEL",
        }
        for secret_key, env_key in mapping.items():
            value = openai_block.get(secret_key)
            if isinstance(value, str) and value.strip() and not os.getenv(env_key):
                os.environ[env_key] = value.strip()

    for key in SECRET_ENV_KEYS:
        value = secrets.get(key)
        if isinstance(value, str) and value.strip() and not os.getenv(key):
            os.environ[key] = value.strip()


_hydrate_env_from_streamlit_secrets()

from script_studio.app import create_app  # noqa: E402
from script_studio.config import read_credential  # noqa: E402
from script_studio.controller import (  # noqa: E402
    Failed,
    Generating,
    Idle,
    StudioController,
    Succeeded,
)
from script_studio.errors import ValidationError  # noqa: E402
from script_studio.media import ACCEPTED_EXTENSIONS  # noqa: E402
from script_studio.options import GenerationOptions, Platform, ScriptLength, Tone  # noqa: E402

TONES = list(Tone)
PLATFORMS = list(Platform)
LENGTHS = list(ScriptLength)


class BrowserClipboard:
    """Writes text to the visitor's clipboard through a zero-height component."""

    def write_text(self, text: str) -> None:
        components.html(
            f"<script>navigator.clipboard.writeText({json.dumps(text)});</script>",
            height=0,
        )


@st.cache_resource
def _get_app() -> dict[str, Any]:
    return create_app()


def _init_state() -> None:
    defaults = {
        "ss_tone": Tone.MYSTERY,
        "ss_platform": Platform.TIKTOK,
        "ss_length": ScriptLength.MEDIUM,
        "ss_upload_id": None,
        "ss_uploader_nonce": 0,
        "ss_validation_error": None,
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)


def _get_controller() -> StudioController:
    controller = st.session_state.get("ss_controller")
    if controller is None:
        controller = _get_app()["controller_factory"]()
        st.session_state["ss_controller"] = controller
    return controller


def _format_bytes(num_bytes: int | None) -> str:
    if not num_bytes or num_bytes <= 0:
        return "Unknown"
    size = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} GB"


def _upload_identity(uploaded: Any) -> str:
    file_id = getattr(uploaded, "file_id", None)
    if file_id:
        return str(file_id)
    return f"{uploaded.name}:{uploaded.size}"


def _sync_upload(controller: StudioController, uploaded: Any) -> None:
    """Feed uploader changes into the controller, once per distinct file."""
    if uploaded is None:
        if st.session_state["ss_upload_id"] is not None:
            st.session_state["ss_upload_id"] = None
            st.session_state["ss_validation_error"] = None
            controller.remove_asset()
        return

    upload_id = _upload_identity(uploaded)
    if upload_id == st.session_state["ss_upload_id"]:
        return

    try:
        controller.select_file(
            uploaded.getvalue(),
            uploaded.type,
            name=uploaded.name,
            size_bytes=uploaded.size,
        )
    except ValidationError as exc:
        st.session_state["ss_validation_error"] = exc.message
    except OSError as exc:
        logger.error("Could not prepare preview for %s: %s", uploaded.name, exc)
        st.session_state["ss_validation_error"] = f"Could not load the video preview: {exc}"
    else:
        st.session_state["ss_upload_id"] = upload_id
        st.session_state["ss_validation_error"] = None


def _current_options() -> GenerationOptions:
    return GenerationOptions(
        tone=st.session_state["ss_tone"],
        length=st.session_state["ss_length"],
        platform=st.session_state["ss_platform"],
    )


def _inject_styles() -> None:
    st.markdown(
        """
        <style>
        .stApp {
            color: #e2e8f0;
            background: linear-gradient(160deg, #020617 0%, #0b1120 60%, #0f172a 100%);
        }

        header[data-testid="stHeader"] {
            display: none;
        }

        .studio-title {
            font-size: 1.7rem;
            font-weight: 800;
            letter-spacing: -0.02em;
            margin-bottom: 0.8rem;
        }

        .studio-title span {
            color: #3b82f6;
        }

        .script-body {
            white-space: pre-line;
            font-size: 1.1rem;
            line-height: 1.7;
            font-weight: 500;
        }

        .script-placeholder {
            opacity: 0.6;
            text-align: center;
            padding: 4rem 0;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _upload_panel(controller: StudioController) -> None:
    uploaded = st.file_uploader(
        "Click to Upload Video",
        type=list(ACCEPTED_EXTENSIONS),
        key=f"ss_video_{st.session_state['ss_uploader_nonce']}",
        help="MP4, MOV, WebM (Max 50MB)",
    )
    _sync_upload(controller, uploaded)

    preview = controller.preview
    asset = controller.asset
    if asset is not None:
        if preview is not None and not preview.released:
            st.video(str(preview.path))
        else:
            st.video(asset.data)
        st.caption(f"File: {asset.name or 'video'}  Size: {_format_bytes(asset.size_bytes)}  MIME: {asset.mime_type}")
        if st.button("Remove Video", key="ss_remove", disabled=controller.is_generating):
            controller.remove_asset()
            st.session_state["ss_upload_id"] = None
            st.session_state["ss_validation_error"] = None
            st.session_state["ss_uploader_nonce"] += 1
            st.rerun()


def _options_panel() -> None:
    st.markdown("#### Configuration")
    st.radio(
        "Tone & Vibe",
        TONES,
        key="ss_tone",
        horizontal=True,
        format_func=lambda item: item.value,
    )
    st.radio(
        "Target Platform",
        PLATFORMS,
        key="ss_platform",
        horizontal=True,
        format_func=lambda item: item.value,
    )
    st.radio(
        "Script Length",
        LENGTHS,
        key="ss_length",
        horizontal=True,
        format_func=lambda item: item.value,
    )


def _generate_panel(controller: StudioController) -> None:
    clicked = st.button(
        "Generate Viral Script",
        type="primary",
        use_container_width=True,
        disabled=controller.asset is None or controller.is_generating,
    )
    if clicked:
        with st.spinner("Analyzing Visuals..."):
            asyncio.run(controller.generate(_current_options()))

    error = st.session_state["ss_validation_error"]
    state = controller.state
    if isinstance(state, Failed):
        error = state.error.message
    if error:
        st.error(error)


def _output_panel(controller: StudioController) -> None:
    state = controller.state
    heading = "Generated Script"
    if isinstance(state, Succeeded) and state.result.title:
        heading = state.result.title
    st.markdown(f"#### {html.escape(heading)}")

    if isinstance(state, Generating):
        st.info("Analyzing Visuals...")
        return

    if not isinstance(state, Succeeded):
        st.markdown(
            "<div class='script-placeholder'>Upload a video to start generating</div>",
            unsafe_allow_html=True,
        )
        return

    if state.result.is_fallback:
        st.warning("The model returned an empty response.")
    st.markdown(
        f"<div class='script-body'>{html.escape(state.result.text)}</div>",
        unsafe_allow_html=True,
    )

    copy_col, download_col = st.columns(2)
    if copy_col.button("Copy Text", use_container_width=True, key="ss_copy"):
        if controller.copy_result(BrowserClipboard()):
            st.toast("Script copied to clipboard.")

    artifact = controller.export_result()
    if artifact is not None:
        download_col.download_button(
            "Download",
            data=artifact.data,
            file_name=artifact.file_name,
            mime=artifact.mime,
            use_container_width=True,
            key="ss_download",
        )


def main() -> None:
    st.set_page_config(
        page_title="IRSHAD Script Studio",
        page_icon="",
        layout="wide",
    )

    _init_state()
    _inject_styles()

    controller = _get_controller()

    st.markdown(
        "<div class='studio-title'>IRSHAD <span>Script Studio</span></div>",
        unsafe_allow_html=True,
    )
    if not read_credential():
        st.warning("No API key configured. Set OPENAI_API_KEY in `.env` or Streamlit secrets.")

    left, right = st.columns([7, 5], gap="large")
    with left:
        _upload_panel(controller)
        _options_panel()
        _generate_panel(controller)
    with right:
        _output_panel(controller)

    if isinstance(controller.state, Idle) and st.session_state["ss_upload_id"] is None:
        st.caption("Supported formats: " + ", ".join(ext.upper() for ext in ACCEPTED_EXTENSIONS))


if __name__ == "__main__":
    main()
