"""Option model coercion and defaults."""

import pytest

from script_studio.options import GenerationOptions, Platform, ScriptLength, Tone


def test_defaults_match_studio_start_state():
    options = GenerationOptions.default()
    assert options.tone is Tone.MYSTERY
    assert options.length is ScriptLength.MEDIUM
    assert options.platform is Platform.TIKTOK


def test_raw_values_are_coerced_to_members():
    options = GenerationOptions(tone="Funny", length="Long (15-18 lines)", platform="Reels")
    assert options.tone is Tone.FUNNY
    assert options.length is ScriptLength.LONG
    assert options.platform is Platform.REELS
    assert options.as_dict() == {
        "tone": "Funny",
        "length": "Long (15-18 lines)",
        "platform": "Reels",
    }


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tone": "Sarcastic"},
        {"length": "Long"},
        {"platform": "Vine"},
        {"tone": None},
    ],
)
def test_unknown_values_are_rejected(kwargs):
    with pytest.raises(ValueError):
        GenerationOptions(**kwargs)


def test_length_labels_are_fixed():
    assert [item.value for item in ScriptLength] == [
        "Short (8-12 lines)",
        "Medium (12-15 lines)",
        "Long (15-18 lines)",
    ]
