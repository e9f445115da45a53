import re
from typing import List, Optional


STEP_MARKER = re.compile(r"(?<![\w.,])(\d+)\.(?!\d)")
SENTENCE_BREAK = re.compile(r"\.\s+(?=[A-Z])|\n\s*\n")
STEP_OPENERS = ".!?:;)"
FOLLOWED_BY_WORD = re.compile(r"\s+[A-Za-z]")
MIN_STEP_LENGTH = 20


def segment_steps(instructions: Optional[str]) -> List[str]:
    """
    Split a free-text instructions blob into ordered steps.

    Explicit "1. ... 2. ..." numbering wins whenever it yields at least two
    steps. Otherwise the text is split on sentence ends and blank lines, and
    fragments shorter than MIN_STEP_LENGTH are dropped as noise.
    """
    if not instructions:
        return []

    numbered = _numbered_steps(instructions)
    if numbered is not None:
        return numbered
    return _sentence_steps(instructions)


def _numbered_steps(text: str) -> Optional[List[str]]:
    markers = [m for m in STEP_MARKER.finditer(text) if _opens_step(text, m)]
    if len(markers) < 2:
        return None

    ends = [m.start() for m in markers[1:]] + [len(text)]
    steps = []
    for marker, end in zip(markers, ends):
        step = text[marker.end():end].strip()
        if step:
            steps.append(step)
    return steps


def _opens_step(text: str, marker: re.Match) -> bool:
    # "350." in "Bake at 350." is a temperature, not a marker.
    before = text[:marker.start()]
    stripped = before.rstrip()
    if not stripped:
        return True
    if "\n" in before[len(stripped):]:
        return True
    if stripped[-1] in STEP_OPENERS:
        return True
    # "together 2. Bake": a number followed by words still opens a step
    return FOLLOWED_BY_WORD.match(text, marker.end()) is not None


def _sentence_steps(text: str) -> List[str]:
    steps = []
    for candidate in SENTENCE_BREAK.split(text):
        candidate = candidate.strip()
        if len(candidate) < MIN_STEP_LENGTH:
            continue
        if not candidate.endswith("."):
            candidate += "."
        steps.append(candidate)
    return steps
