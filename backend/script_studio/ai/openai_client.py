"""OpenAI-compatible client that turns a video into a narration script."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from openai import AsyncOpenAI, OpenAIError

from ..errors import MissingCredentialError, RemoteGenerationError
from ..media import MediaAsset, encode
from ..options import GenerationOptions
from ..prompts import compose
from ..results import FALLBACK_SCRIPT_TEXT, GENERIC_ERROR_MESSAGE, GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_CHAT_MODEL = "google/gemini-3-pro-preview"
MISSING_CREDENTIAL_MESSAGE = "API Key is missing."


@dataclass(frozen=True)
class GenerationRequest:
    """Encoded video plus instructions for one call. Built per call, never kept."""

    encoded_media: str
    mime_type: str
    prompt: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.encoded_media}"

    def to_messages(self) -> List[Dict[str, Any]]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "video_url", "video_url": {"url": self.data_url}},
                    {"type": "text", "text": self.prompt},
                ],
            }
        ]


def build_request(asset: MediaAsset, options: GenerationOptions) -> GenerationRequest:
    """Encode first, then compose; the order is fixed."""
    encoded = encode(asset)
    prompt = compose(options)
    return GenerationRequest(encoded_media=encoded, mime_type=asset.mime_type, prompt=prompt)


def _extract_content(resp: Any) -> str:
    """Handle both plain dict responses and SDK objects."""

    def _normalize(content: Any) -> str:
        if content is None:
            return ""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts: list[str] = []
            for item in content:
                if isinstance(item, dict):
                    text_value = item.get("text") or item.get("content")
                else:
                    text_value = getattr(item, "text", None) or getattr(item, "content", None)
                if isinstance(text_value, str):
                    parts.append(text_value)
            return "\n".join(parts).strip()
        return str(content)

    if isinstance(resp, dict):
        choices = resp.get("choices") or []
        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return _normalize(message.get("content"))

    choices = getattr(resp, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    if isinstance(message, dict):
        return _normalize(message.get("content"))
    return _normalize(getattr(message, "content", None))


class OpenAIClient:
    """Single-call wrapper around an OpenAI-compatible chat endpoint.

    One request per `generate` call: no retries, no timeout, no streaming.
    """

    def __init__(
        self,
        base_url: str | None = None,
        default_chat_model: str | None = None,
    ):
        self.base_url = self._clean(base_url)
        self.default_chat_model = self._clean(default_chat_model) or DEFAULT_CHAT_MODEL

    @staticmethod
    def _clean(value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None

    def _get_live_client(self, api_key: str) -> AsyncOpenAI:
        # A fresh client per call: each Streamlit click runs its own event loop.
        return AsyncOpenAI(api_key=api_key, base_url=self.base_url, max_retries=0, timeout=None)

    async def generate(
        self,
        asset: MediaAsset,
        options: GenerationOptions,
        credential: str | None,
    ) -> GenerationResult:
        api_key = self._clean(credential)
        if not api_key:
            raise MissingCredentialError(MISSING_CREDENTIAL_MESSAGE)

        request = build_request(asset, options)
        logger.info(
            "Requesting narration for %s (%d bytes, %s) with model %s, options %s",
            asset.name or asset.asset_id,
            asset.size_bytes,
            asset.mime_type,
            self.default_chat_model,
            options.as_dict(),
        )

        client = self._get_live_client(api_key)
        try:
            response = await client.chat.completions.create(
                model=self.default_chat_model,
                messages=request.to_messages(),
            )
        except OpenAIError as exc:
            message = (
                self._clean(getattr(exc, "message", None))
                or self._clean(str(exc))
                or GENERIC_ERROR_MESSAGE
            )
            logger.error("Generation API error: %s", message)
            raise RemoteGenerationError(message) from exc
        finally:
            await client.close()

        text = _extract_content(response)
        if not text.strip():
            logger.warning("Model returned an empty script; using fallback text")
            return GenerationResult(FALLBACK_SCRIPT_TEXT)
        return GenerationResult(text)
