"""Narration style options offered to the user."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Type, TypeVar

_E = TypeVar("_E", bound=Enum)


class Tone(str, Enum):
    CINEMATIC = "Cinematic"
    FUNNY = "Funny"
    SERIOUS = "Serious"
    MYSTERY = "Mystery"


class ScriptLength(str, Enum):
    SHORT = "Short (8-12 lines)"
    MEDIUM = "Medium (12-15 lines)"
    LONG = "Long (15-18 lines)"


class Platform(str, Enum):
    TIKTOK = "TikTok"
    SHORTS = "Shorts"
    REELS = "Reels"
    YOUTUBE = "YouTube"


def _coerce(enum_cls: Type[_E], value: Any) -> _E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"{value!r} is not a valid {enum_cls.__name__} (expected one of: {allowed})") from None


@dataclass(frozen=True)
class GenerationOptions:
    """Tone, length and platform picked for a single generation."""

    tone: Tone = Tone.MYSTERY
    length: ScriptLength = ScriptLength.MEDIUM
    platform: Platform = Platform.TIKTOK

    def __post_init__(self) -> None:
        # Frozen dataclass: coerce through object.__setattr__.
        object.__setattr__(self, "tone", _coerce(Tone, self.tone))
        object.__setattr__(self, "length", _coerce(ScriptLength, self.length))
        object.__setattr__(self, "platform", _coerce(Platform, self.platform))

    @classmethod
    def default(cls) -> "GenerationOptions":
        return cls()

    def as_dict(self) -> dict[str, str]:
        return {
            "tone": self.tone.value,
            "length": self.length.value,
            "platform": self.platform.value,
        }
