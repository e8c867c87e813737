"""Video intake: selection checks, base64 transport encoding, preview files."""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
import tempfile
import uuid
import weakref
from dataclasses import dataclass, field
from pathlib import Path

from .errors import EncodingError, ValidationError

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 50 * 1024 * 1024
ACCEPTED_EXTENSIONS = ("mp4", "mov", "webm")

SIZE_LIMIT_MESSAGE = "File size exceeds 50MB limit for this demo."
INVALID_TYPE_MESSAGE = "Please upload a valid video file."


def validate_selection(mime_type: str | None, size_bytes: int, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """Raise ValidationError when a selected file cannot be used."""
    if size_bytes > min(max_bytes, MAX_UPLOAD_BYTES):
        raise ValidationError(SIZE_LIMIT_MESSAGE)
    if not (mime_type or "").startswith("video/"):
        raise ValidationError(INVALID_TYPE_MESSAGE)


@dataclass(frozen=True, eq=False)
class MediaAsset:
    """A selected video held in memory.

    Assets compare by identity (`asset_id`), never by content, so two uploads
    of the same bytes are still distinct selections.
    """

    data: bytes
    mime_type: str
    name: str = ""
    size_bytes: int = -1
    asset_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            object.__setattr__(self, "size_bytes", len(self.data))
        validate_selection(self.mime_type, self.size_bytes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaAsset):
            return NotImplemented
        return self.asset_id == other.asset_id

    def __hash__(self) -> int:
        return hash(self.asset_id)

    def __repr__(self) -> str:
        return (
            f"MediaAsset(name={self.name!r}, mime_type={self.mime_type!r}, "
            f"size_bytes={self.size_bytes}, asset_id={self.asset_id!r})"
        )


def strip_data_url_prefix(value: str) -> str:
    """Drop a leading ``data:<mime>;base64,`` header if present."""
    if value.startswith("data:") and "," in value:
        return value.split(",", 1)[1]
    return value


def encode(asset: MediaAsset) -> str:
    """Return the asset bytes as plain base64 text (no data-URL header)."""
    try:
        raw = bytes(asset.data)
        encoded = base64.b64encode(raw).decode("ascii")
    except (TypeError, ValueError, OSError) as exc:
        raise EncodingError(f"Could not read the selected video: {exc}") from exc
    return encoded


def decode(encoded: str) -> bytes:
    """Inverse of `encode`; also accepts the data-URL form."""
    try:
        return base64.b64decode(strip_data_url_prefix(encoded), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncodingError(f"Invalid base64 payload: {exc}") from exc


def _unlink_preview(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove preview file %s: %s", path, exc)
    else:
        logger.debug("Released preview file %s", path)


class PreviewHandle:
    """Temporary file backing the in-browser player for one asset.

    Call `release()` (or use as a context manager) whenever the asset is
    replaced or cleared. Release is idempotent.
    """

    def __init__(self, asset: MediaAsset, directory: str | Path | None = None):
        suffix = mimetypes.guess_extension(asset.mime_type) or ".mp4"
        with tempfile.NamedTemporaryFile(
            delete=False,
            prefix="script_studio_",
            suffix=suffix,
            dir=directory,
        ) as tmp:
            tmp.write(asset.data)
            self.path = Path(tmp.name)
        self.asset_id = asset.asset_id
        self._finalizer = weakref.finalize(self, _unlink_preview, self.path)

    @property
    def released(self) -> bool:
        return not self._finalizer.alive

    def release(self) -> None:
        self._finalizer()

    def __enter__(self) -> "PreviewHandle":
        return self

    def __exit__(self, *_exc) -> None:
        self.release()
