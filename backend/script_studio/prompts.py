"""Narration prompt sent alongside the video."""

from __future__ import annotations

import textwrap

from .options import GenerationOptions

TITLE_MARKER = "⬛"
SCRIPT_HEADER = f"{TITLE_MARKER} Viral Narration Script"

_NARRATION_TEMPLATE = textwrap.dedent(
    """
    You are IRSHAD Script Studio, the world's best viral video scriptwriter.
    Your goal is to analyze the provided video and write a high-retention, hyper-engaging narration script.

    **YOUR ONLY PURPOSE:**
    1. Analyze every scene frame-by-frame.
    2. Understand actions, objects, characters, and context.
    3. Write a gripping narration script.

    **STYLE RULES (STRICTLY FOLLOW):**
    - Open with a HARD HOOK (curiosity, shock, or twist) in the first 1-2 lines.
    - Narrate visually. Describe what is happening but in a dramatic story format.
    - Short, punchy, emotional sentences.
    - Build curiosity constantly (e.g., "But what happens next...", "The secret is...").
    - Tone: {tone}.
    - Target Audience: {platform} viewers.
    - NO fake events. Only describe what is visually in the video.
    - NO moralizing, warnings, or filler words.
    - NO technical analysis text.

    **OUTPUT FORMAT:**
    You must output the response exactly in this format:

    {marker} [Write a Short Catchy Title Here]

    {header}
    [Line 1 of script]
    [Line 2 of script]
    ...
    [Final satisfying line]

    **LENGTH CONSTRAINT:**
    {length}
    """
).strip()


def compose(options: GenerationOptions) -> str:
    """Render the narration instructions for `options`. Pure."""
    return _NARRATION_TEMPLATE.format(
        tone=options.tone.value,
        platform=options.platform.value,
        length=options.length.value,
        marker=TITLE_MARKER,
        header=SCRIPT_HEADER,
    )


def extract_title(script: str) -> str | None:
    """Return the title line of a generated script, if it has one."""
    for raw_line in script.splitlines():
        line = raw_line.strip()
        if not line.startswith(TITLE_MARKER):
            continue
        if line == SCRIPT_HEADER:
            continue
        title = line[len(TITLE_MARKER) :].strip()
        if title:
            return title
    return None
