"""Request lifecycle for one studio session.

The controller owns the current `LifecycleState` and the preview handle of
the selected video. Generation calls are tagged with the asset they were
issued for; a completion that arrives after the asset was replaced or
removed is dropped.
"""

from __future__ import annotations

import logging
import time
import weakref
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol, Union

from .errors import ScriptStudioError
from .media import MAX_UPLOAD_BYTES, MediaAsset, PreviewHandle, validate_selection
from .options import GenerationOptions
from .results import GENERIC_ERROR_MESSAGE, ExportArtifact, GenerationError, GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_PREFIX = "irshad"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Ready:
    asset: MediaAsset


@dataclass(frozen=True)
class Generating:
    asset: MediaAsset


@dataclass(frozen=True)
class Succeeded:
    asset: MediaAsset
    result: GenerationResult


@dataclass(frozen=True)
class Failed:
    asset: MediaAsset
    error: GenerationError


LifecycleState = Union[Idle, Ready, Generating, Succeeded, Failed]

Generator = Callable[[MediaAsset, GenerationOptions, Optional[str]], Awaitable[GenerationResult]]


class ClipboardSink(Protocol):
    def write_text(self, text: str) -> None:
        ...


def _release_all(handles: list) -> None:
    while handles:
        handles.pop().release()


class StudioController:
    """Sequences file intake, generation and result handling."""

    def __init__(
        self,
        generator: Generator,
        credential: Callable[[], str | None] = lambda: None,
        preview_factory: Callable[[MediaAsset], PreviewHandle] | None = PreviewHandle,
        export_prefix: str = DEFAULT_EXPORT_PREFIX,
        max_upload_bytes: int = MAX_UPLOAD_BYTES,
    ):
        self._generator = generator
        self._credential = credential
        self._preview_factory = preview_factory
        self.export_prefix = export_prefix
        self.max_upload_bytes = min(max_upload_bytes, MAX_UPLOAD_BYTES)
        self._state: LifecycleState = Idle()
        self._preview: PreviewHandle | None = None
        self.in_flight = 0
        # Teardown guard for sessions dropped without close().
        self._handles: list[PreviewHandle] = []
        self._finalizer = weakref.finalize(self, _release_all, self._handles)

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def asset(self) -> MediaAsset | None:
        return getattr(self._state, "asset", None)

    @property
    def preview(self) -> PreviewHandle | None:
        return self._preview

    @property
    def is_generating(self) -> bool:
        return isinstance(self._state, Generating)

    def _transition(self, new_state: LifecycleState) -> None:
        logger.debug("%s -> %s", type(self._state).__name__, type(new_state).__name__)
        self._state = new_state

    def _release_preview(self) -> None:
        handle, self._preview = self._preview, None
        if handle is None:
            return
        if handle in self._handles:
            self._handles.remove(handle)
        handle.release()

    def select_file(
        self,
        data: bytes,
        mime_type: str | None,
        name: str = "",
        size_bytes: int | None = None,
    ) -> MediaAsset:
        """Accept a new video, replacing any current one.

        Raises ValidationError for oversized or non-video files. The current
        state and preview are left untouched when validation or preview
        creation fails.
        """
        declared_size = len(data) if size_bytes is None else size_bytes
        validate_selection(mime_type, declared_size, self.max_upload_bytes)
        asset = MediaAsset(data=data, mime_type=mime_type or "", name=name, size_bytes=declared_size)

        new_preview = None
        if self._preview_factory is not None:
            new_preview = self._preview_factory(asset)
        self._release_preview()
        if new_preview is not None:
            self._preview = new_preview
            self._handles.append(new_preview)
        self._transition(Ready(asset))
        logger.info("Selected %s (%d bytes, %s)", name or asset.asset_id, declared_size, asset.mime_type)
        return asset

    def remove_asset(self) -> None:
        if isinstance(self._state, Idle):
            return
        self._release_preview()
        self._transition(Idle())

    async def generate(self, options: GenerationOptions) -> LifecycleState | None:
        """Run one generation for the current asset.

        Returns the resulting state, or None when nothing was started
        (no asset, a call already pending, or a stale completion).
        """
        if isinstance(self._state, (Idle, Generating)):
            return None

        asset = self._state.asset
        self._transition(Generating(asset))
        self.in_flight += 1
        try:
            try:
                result = await self._generator(asset, options, self._credential())
            except ScriptStudioError as exc:
                outcome: LifecycleState = Failed(asset, GenerationError(exc.message))
            except Exception as exc:
                logger.exception("Unexpected failure while generating for %s", asset.asset_id)
                outcome = Failed(asset, GenerationError(str(exc) or GENERIC_ERROR_MESSAGE))
            else:
                outcome = Succeeded(asset, result)
        finally:
            self.in_flight -= 1

        current = self._state
        if not (isinstance(current, Generating) and current.asset.asset_id == asset.asset_id):
            logger.info("Discarding stale completion for asset %s", asset.asset_id)
            return None
        self._transition(outcome)
        return outcome

    def copy_result(self, sink: ClipboardSink) -> bool:
        if not isinstance(self._state, Succeeded):
            return False
        sink.write_text(self._state.result.text)
        return True

    def export_result(self, now_ms: int | None = None) -> ExportArtifact | None:
        if not isinstance(self._state, Succeeded):
            return None
        stamp = int(time.time() * 1000) if now_ms is None else now_ms
        return ExportArtifact(
            file_name=f"{self.export_prefix}_script_{stamp}.txt",
            data=self._state.result.text,
        )

    def close(self) -> None:
        self._release_preview()
        self._finalizer()

    def __enter__(self) -> "StudioController":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()
