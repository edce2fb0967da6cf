"""Constants used across the env-blocks package."""

from __future__ import annotations

import re

# Environment literals; `{env}` is filled from the configuration.
BEGIN_TEMPLATE = "\\begin{{{env}}}"
END_TEMPLATE = "\\end{{{env}}}"

# Enumerate format shape, matched against the trimmed text inside the brackets:
# optional "(", one alphabet character, optional closing punctuation.
FORMAT_PATTERN = re.compile(r"^(\(?) *([1aAiI]) *([.)]?\)?)$")
ALPHABET_CHARS = ("1", "a", "A", "i", "I")

# Subtractive Roman numeral table, largest value first.
ROMAN_NUMERALS = (
    (1000, "m"),
    (900, "cm"),
    (500, "d"),
    (400, "cd"),
    (100, "c"),
    (90, "xc"),
    (50, "l"),
    (40, "xl"),
    (10, "x"),
    (9, "ix"),
    (5, "v"),
    (4, "iv"),
    (1, "i"),
)
ROMAN_LIMIT = 4000
LATIN_LETTERS = 26

# Document types accepted by the CLI
DOCUMENT_EXTENSIONS = (".md", ".markdown", ".tex", ".txt")
