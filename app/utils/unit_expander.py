import re
from typing import Optional


FRACTION_GLYPHS = [
    ("1/2", "½"),
    ("1/3", "⅓"),
    ("2/3", "⅔"),
    ("1/4", "¼"),
    ("3/4", "¾"),
    ("1/8", "⅛"),
]

# Applied in order. Boundaries are ASCII so a fraction glyph counts as a separator.
UNIT_PATTERNS = [
    (re.compile(r"\btsp\b\.?", re.IGNORECASE | re.ASCII), "teaspoon"),
    (re.compile(r"\btbsp\b\.?", re.IGNORECASE | re.ASCII), "tablespoon"),
    (re.compile(r"\btbl\b\.?", re.IGNORECASE | re.ASCII), "tablespoon"),
    (re.compile(r"(?<!['’])\bT\b\.?", re.ASCII), "tablespoon"),
    (re.compile(r"(?<!['’])\bt\b\.?", re.ASCII), "teaspoon"),
    (re.compile(r"\bfl\.?\s*oz\b\.?", re.IGNORECASE | re.ASCII), "fluid ounce"),
    (re.compile(r"\boz\b\.?", re.IGNORECASE | re.ASCII), "ounce"),
    (re.compile(r"\blb\b\.?", re.IGNORECASE | re.ASCII), "pound"),
    (re.compile(r"\blbs\b\.?", re.IGNORECASE | re.ASCII), "pounds"),
    (re.compile(r"\bpt\b\.?", re.IGNORECASE | re.ASCII), "pint"),
    (re.compile(r"\bqt\b\.?", re.IGNORECASE | re.ASCII), "quart"),
    (re.compile(r"\bgal\b\.?", re.IGNORECASE | re.ASCII), "gallon"),
    (re.compile(r"\bg\b", re.IGNORECASE | re.ASCII), "gram"),
    (re.compile(r"\bkg\b", re.IGNORECASE | re.ASCII), "kilogram"),
    (re.compile(r"\bml\b", re.IGNORECASE | re.ASCII), "milliliter"),
    (re.compile(r"\bl\b", re.IGNORECASE | re.ASCII), "liter"),
]

PLURAL_PATTERNS = [
    re.compile(rf"(\d+)\s*{unit}(?!s)", re.IGNORECASE)
    for unit in ("teaspoon", "tablespoon", "ounce")
]


def expand_units(measure: Optional[str]) -> Optional[str]:
    """Expand abbreviated cooking units in a measure, e.g. "2 tsp" -> "2 teaspoons"."""
    if not measure:
        return measure

    text = measure
    for ascii_fraction, glyph in FRACTION_GLYPHS:
        text = text.replace(ascii_fraction, glyph)

    for pattern, word in UNIT_PATTERNS:
        text = pattern.sub(word, text)

    for pattern in PLURAL_PATTERNS:
        text = pattern.sub(_pluralize, text)

    return text.strip()


def _pluralize(match: re.Match) -> str:
    if int(match.group(1)) == 1:
        return match.group(0)
    return match.group(0) + "s"
