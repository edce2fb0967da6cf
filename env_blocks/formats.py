"""Parsing of enumerate format arguments."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .constants import ALPHABET_CHARS, FORMAT_PATTERN
from .models import Alphabet, FormatDescriptor

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = FormatDescriptor(Alphabet.DECIMAL, "", ".")


def _default_suffix(alphabet: Alphabet) -> str:
    return "." if alphabet is Alphabet.DECIMAL else ""


def _match_format(text: str) -> FormatDescriptor | None:
    match = FORMAT_PATTERN.match(text)
    if match:
        alphabet = Alphabet(match.group(2))
        return FormatDescriptor(
            alphabet=alphabet,
            prefix=match.group(1),
            suffix=match.group(3) or _default_suffix(alphabet),
        )

    if text in ALPHABET_CHARS:
        alphabet = Alphabet(text)
        return FormatDescriptor(alphabet=alphabet, prefix="", suffix=_default_suffix(alphabet))

    return None


def parse_format(
    raw: str | None, warn: Callable[[str], None] | None = None
) -> FormatDescriptor:
    """Parse the bracket argument of an enumerate block.

    The surrounding brackets are stripped and the remainder trimmed. Empty or
    absent arguments yield the decimal default. Text that does not describe a
    format also yields the default, after a warning is logged and passed to
    `warn`; parsing never raises.

    Args:
        raw: Bracket text including the brackets, such as ``"[(a)]"``, or None.
        warn: Optional callback receiving the diagnostic for unrecognized text.

    Returns:
        FormatDescriptor: Alphabet and decorations used to render item labels.

    Examples:
        parse_format("[a)]")  # FormatDescriptor(Alphabet.LOWER_LATIN, "", ")")
        parse_format("[(I)]")  # FormatDescriptor(Alphabet.UPPER_ROMAN, "(", ")")
        parse_format(None)  # DEFAULT_FORMAT
    """
    if not raw:
        return DEFAULT_FORMAT

    text = raw[1:-1].strip()
    if not text:
        return DEFAULT_FORMAT

    descriptor = _match_format(text)
    if descriptor is not None:
        return descriptor

    message = f'Unrecognized enumerate format: "{text}". Using default.'
    logger.warning(message)
    if warn is not None:
        warn(message)
    return DEFAULT_FORMAT


def is_recognized_format(text: str) -> bool:
    """Tell whether free text, without brackets, names a numbering format.

    Examples:
        is_recognized_format("(i)")  # True
        is_recognized_format("xyz")  # False
    """
    return _match_format(text.strip()) is not None
