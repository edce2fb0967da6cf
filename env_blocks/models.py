"""Data models for env-blocks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class BlockKind(Enum):
    """Block grammars recognized by the scanners.

    Attributes:
        NAMED: ``\\begin{questionenv}[name] ... \\end{questionenv}``.
        ORDERED_LIST: ``\\begin{enumerate}[format] ... \\end{enumerate}``.
    """

    NAMED = auto()
    ORDERED_LIST = auto()


class RangeKind(Enum):
    """Rendering instruction attached to a range.

    Attributes:
        REPLACE_START: Replace the opening marker; payload is the block name or
            the raw bracket text of a list.
        REPLACE_END: Replace the closing marker.
        MARK: Style the enclosed content of a named block.
        REPLACE_ITEM: Replace an item marker; payload is the generated label.
    """

    REPLACE_START = auto()
    REPLACE_END = auto()
    MARK = auto()
    REPLACE_ITEM = auto()


class Alphabet(Enum):
    """Numbering alphabets, keyed by the character that selects them."""

    DECIMAL = "1"
    LOWER_LATIN = "a"
    UPPER_LATIN = "A"
    LOWER_ROMAN = "i"
    UPPER_ROMAN = "I"


@dataclass(frozen=True)
class FormatDescriptor:
    """Normalized numbering style of an ordered list.

    Attributes:
        alphabet: Numbering alphabet used for labels.
        prefix: Decoration placed before the number, such as ``"("``.
        suffix: Decoration placed after the number, such as ``"."`` or ``")"``.
    """

    alphabet: Alphabet = Alphabet.DECIMAL
    prefix: str = ""
    suffix: str = "."


@dataclass(frozen=True)
class ItemMatch:
    """One item marker inside an ordered list.

    Attributes:
        counter: One-based position of the item within its block.
        start: Absolute offset of the item marker.
        end: Absolute offset just past the item marker.
        label: Display label generated for the item.
    """

    counter: int
    start: int
    end: int
    label: str


@dataclass(frozen=True)
class BlockMatch:
    """Boundaries of one matched block.

    All offsets are absolute positions into the scanned text. The opening
    marker spans ``[start, content_start)`` and the closing marker spans
    ``[content_end, end)``.

    Attributes:
        kind: Grammar the block was matched with.
        start: Offset of the opening marker.
        argument: Block name for named blocks; raw bracket text (brackets
            included) or None for lists.
        argument_start: Offset where the editable argument begins.
        argument_end: Offset where the editable argument ends.
        content_start: Offset of the first content character.
        content_end: Offset just past the last content character.
        end: Offset just past the closing marker.
        items: Item markers found in the content (lists only).
    """

    kind: BlockKind
    start: int
    argument: str | None
    argument_start: int
    argument_end: int
    content_start: int
    content_end: int
    end: int
    items: tuple[ItemMatch, ...] = ()

    @property
    def has_content(self) -> bool:
        return self.content_end > self.content_start


@dataclass(frozen=True)
class Range:
    """Half-open ``[start, end)`` interval paired with a rendering instruction.

    Attributes:
        start: Inclusive start offset.
        end: Exclusive end offset.
        kind: Rendering instruction.
        block: Grammar of the block that produced the range.
        payload: Name, raw format, or label carried by the instruction.
    """

    start: int
    end: int
    kind: RangeKind
    block: BlockKind
    payload: str | None = None


@dataclass(frozen=True)
class ScanResult:
    """Ranges and block boundaries produced by one scan.

    Attributes:
        ranges: Ranges in increasing start-offset order.
        blocks: Matched blocks in document order.
    """

    ranges: tuple[Range, ...] = ()
    blocks: tuple[BlockMatch, ...] = ()
