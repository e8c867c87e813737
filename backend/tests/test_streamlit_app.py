"""Streamlit layer: upload helpers and a first-render smoke test."""

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from streamlit.testing.v1 import AppTest  # noqa: E402

from streamlit_app import _format_bytes, _upload_identity  # noqa: E402


class _Upload:
    def __init__(self, name, size, file_id=None):
        self.name = name
        self.size = size
        if file_id is not None:
            self.file_id = file_id


def test_upload_identity_prefers_file_id():
    assert _upload_identity(_Upload("clip.mp4", 10, file_id="abc123")) == "abc123"
    assert _upload_identity(_Upload("clip.mp4", 10)) == "clip.mp4:10"


def test_format_bytes():
    assert _format_bytes(None) == "Unknown"
    assert _format_bytes(512) == "512 B"
    assert _format_bytes(10 * 1024 * 1024) == "10.0 MB"


def test_first_render_without_credential(monkeypatch):
    for name in ("OPENAI_API_KEY", "API_KEY"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

    at = AppTest.from_file(str(ROOT / "streamlit_app.py"), default_timeout=30)
    at.run()

    assert not at.exception
    assert any("No API key configured" in item.value for item in at.warning)
    generate = [button for button in at.button if button.label == "Generate Viral Script"]
    assert generate and generate[0].disabled
    assert any("Upload a video to start generating" in item.value for item in at.markdown)
