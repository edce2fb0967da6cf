"""Ordinal label generation for ordered-list items."""

from __future__ import annotations

from .constants import LATIN_LETTERS, ROMAN_LIMIT, ROMAN_NUMERALS
from .models import Alphabet, FormatDescriptor


def number_to_letters(number: int) -> str:
    """Convert a positive integer to a bijective base-26 lowercase numeral.

    Each position ranges over ``a``-``z`` with no zero digit, so 26 is ``z``
    and 27 is ``aa``. Non-positive numbers are returned as decimal text.

    Examples:
        number_to_letters(1)  # "a"
        number_to_letters(28)  # "ab"
    """
    if number <= 0:
        return str(number)

    letters = ""
    while number > 0:
        number, remainder = divmod(number - 1, LATIN_LETTERS)
        letters = chr(ord("a") + remainder) + letters
    return letters


def number_to_roman(number: int) -> str:
    """Convert an integer to a lowercase Roman numeral.

    Numbers outside ``1..3999`` are returned as decimal text.

    Examples:
        number_to_roman(1994)  # "mcmxciv"
        number_to_roman(4000)  # "4000"
    """
    if number <= 0 or number >= ROMAN_LIMIT:
        return str(number)

    numeral = []
    for value, symbol in ROMAN_NUMERALS:
        count, number = divmod(number, value)
        numeral.append(symbol * count)
    return "".join(numeral)


def generate_label(counter: int, descriptor: FormatDescriptor) -> str:
    """Render the display label of the `counter`-th item.

    Args:
        counter: One-based item position.
        descriptor: Numbering style of the enclosing list.

    Returns:
        str: ``prefix + value + suffix``.

    Examples:
        generate_label(2, FormatDescriptor(Alphabet.LOWER_LATIN, "(", ")"))  # "(b)"
    """
    alphabet = descriptor.alphabet
    if alphabet is Alphabet.LOWER_LATIN:
        value = number_to_letters(counter)
    elif alphabet is Alphabet.UPPER_LATIN:
        value = number_to_letters(counter).upper()
    elif alphabet is Alphabet.LOWER_ROMAN:
        value = number_to_roman(counter)
    elif alphabet is Alphabet.UPPER_ROMAN:
        value = number_to_roman(counter).upper()
    else:
        value = str(counter)
    return f"{descriptor.prefix}{value}{descriptor.suffix}"
