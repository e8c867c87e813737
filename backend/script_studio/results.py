"""Outcome records for a generation call."""

from __future__ import annotations

from dataclasses import dataclass

from .prompts import extract_title

FALLBACK_SCRIPT_TEXT = "Failed to generate script. Please try again."
GENERIC_ERROR_MESSAGE = "An error occurred while generating the script."


@dataclass(frozen=True)
class GenerationResult:
    text: str

    @property
    def title(self) -> str | None:
        return extract_title(self.text)

    @property
    def is_fallback(self) -> bool:
        return self.text == FALLBACK_SCRIPT_TEXT


@dataclass(frozen=True)
class GenerationError:
    message: str


@dataclass(frozen=True)
class ExportArtifact:
    """Downloadable plain-text copy of a generated script."""

    file_name: str
    data: str
    mime: str = "text/plain"
