"""Error taxonomy for the script studio."""

from __future__ import annotations


class ScriptStudioError(Exception):
    """Base error carrying a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ScriptStudioError):
    """Rejected file selection (size or type)."""


class MissingCredentialError(ScriptStudioError):
    """No API credential configured for the generation call."""


class EncodingError(ScriptStudioError):
    """The selected media could not be read into its transport form."""


class RemoteGenerationError(ScriptStudioError):
    """Transport or provider-side failure during generation."""
