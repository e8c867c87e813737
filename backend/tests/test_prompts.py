"""Narration prompt rendering."""

from script_studio.options import GenerationOptions, Platform, ScriptLength, Tone
from script_studio.prompts import SCRIPT_HEADER, compose, extract_title


def test_compose_is_deterministic():
    options = GenerationOptions(tone=Tone.CINEMATIC, length=ScriptLength.SHORT, platform=Platform.YOUTUBE)
    assert compose(options) == compose(GenerationOptions("Cinematic", "Short (8-12 lines)", "YouTube"))


def test_compose_interpolates_options():
    prompt = compose(GenerationOptions(tone=Tone.FUNNY, length=ScriptLength.LONG, platform=Platform.REELS))

    assert "- Tone: Funny." in prompt
    assert "- Target Audience: Reels viewers." in prompt
    assert prompt.rstrip().endswith("Long (15-18 lines)")


def test_compose_keeps_section_order():
    prompt = compose(GenerationOptions.default())

    markers = [
        "You are IRSHAD Script Studio",
        "1. Analyze every scene frame-by-frame.",
        "2. Understand actions, objects, characters, and context.",
        "3. Write a gripping narration script.",
        "HARD HOOK",
        "Narrate visually.",
        "Short, punchy, emotional sentences.",
        "Build curiosity constantly",
        "- Tone: Mystery.",
        "- Target Audience: TikTok viewers.",
        "NO fake events.",
        "NO moralizing, warnings, or filler words.",
        "NO technical analysis text.",
        "**OUTPUT FORMAT:**",
        "⬛ [Write a Short Catchy Title Here]",
        SCRIPT_HEADER,
        "**LENGTH CONSTRAINT:**",
        "Medium (12-15 lines)",
    ]
    positions = [prompt.index(marker) for marker in markers]
    assert positions == sorted(positions)


def test_different_options_give_different_prompts():
    assert compose(GenerationOptions(tone=Tone.SERIOUS)) != compose(GenerationOptions(tone=Tone.FUNNY))


def test_extract_title_skips_script_header():
    script = "⬛ The Door Nobody Opened\n\n⬛ Viral Narration Script\nLine1\nLine2"
    assert extract_title(script) == "The Door Nobody Opened"
    assert extract_title("⬛ Viral Narration Script\nLine1") is None
    assert extract_title("plain text") is None
