"""Block scanning and range computation.

Both scanners are pure functions of the text: every call compiles (or reuses
a cached, stateless) pattern and walks it with `re.finditer`, so no match
cursor survives between calls or documents.
"""

from __future__ import annotations

import heapq
import re
from bisect import bisect_right
from collections.abc import Callable
from functools import lru_cache
from operator import attrgetter
from pathlib import Path

from .config import ConfigError, EnvBlocksConfig, validate_config
from .constants import BEGIN_TEMPLATE, END_TEMPLATE
from .exceptions import ScanFileError
from .filesystem import read_document
from .formats import parse_format
from .models import BlockKind, BlockMatch, ItemMatch, Range, RangeKind, ScanResult
from .ordinals import generate_label
from .ranges import RangeBuilder


@lru_cache(maxsize=32)
def _named_pattern(env: str) -> re.Pattern[str]:
    begin = re.escape(BEGIN_TEMPLATE.format(env=env))
    end = re.escape(END_TEMPLATE.format(env=env))
    return re.compile(rf"{begin}\[(?P<name>[^\]]+)\](?P<content>.*?){end}", re.DOTALL)


@lru_cache(maxsize=32)
def _list_pattern(env: str) -> re.Pattern[str]:
    begin = re.escape(BEGIN_TEMPLATE.format(env=env))
    end = re.escape(END_TEMPLATE.format(env=env))
    return re.compile(rf"{begin}(?P<format>\[[^\]]*\])?(?P<content>.*?){end}", re.DOTALL)


@lru_cache(maxsize=32)
def _item_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(re.escape(marker))


def _resolve_config(config: EnvBlocksConfig | None) -> EnvBlocksConfig:
    if config is None:
        return EnvBlocksConfig()
    validate_config(config)
    return config


def named_block_offsets(
    match_start: int, name: str, content: str, config: EnvBlocksConfig
) -> tuple[int, int, int, int]:
    """Compute the marker and content boundaries of a named block.

    Offsets are derived only from the literal lengths and the captured group
    lengths, so ``end_marker_start + len(end literal)`` equals the end of the
    whole match.

    Args:
        match_start: Absolute offset of the opening marker.
        name: Captured block name.
        content: Captured block content.
        config: Scanning configuration supplying the named environment.

    Returns:
        tuple[int, int, int, int]: In document order: the offset where the
            name begins, the start-marker end (also the content start), the
            content end (also the end-marker start), and the end-marker end.

    Examples:
        named_block_offsets(0, "Q", "body", EnvBlocksConfig())  # (20, 22, 26, 43)
    """
    env = config.named_env
    name_start = match_start + len(BEGIN_TEMPLATE.format(env=env)) + len("[")
    content_start = name_start + len(name) + len("]")
    content_end = content_start + len(content)
    block_end = content_end + len(END_TEMPLATE.format(env=env))
    return name_start, content_start, content_end, block_end


def scan_named_blocks(text: str, config: EnvBlocksConfig | None = None) -> ScanResult:
    """Find every named block and compute its ranges.

    Each ``\\begin{env}[name]content\\end{env}`` match yields a start range
    carrying the name, a mark range over non-empty content, and an end range.
    Content is matched lazily, so a block ends at the nearest end literal.

    Args:
        text: Full document text.
        config: Scanning configuration. Defaults to a new `EnvBlocksConfig`.

    Returns:
        ScanResult: Ranges and blocks in document order; empty when nothing
            matches.

    Raises:
        ConfigError: If the supplied configuration fails validation.

    Examples:
        scan_named_blocks("\\\\begin{questionenv}[Q]A\\\\end{questionenv}")
    """
    config = _resolve_config(config)
    env = config.named_env
    builder = RangeBuilder()
    blocks: list[BlockMatch] = []

    for match in _named_pattern(env).finditer(text):
        name = match.group("name")
        name_start, content_start, content_end, block_end = named_block_offsets(
            match.start(), name, match.group("content"), config
        )

        builder.add(
            match.start(), content_start, RangeKind.REPLACE_START, BlockKind.NAMED, name
        )
        if content_end > content_start:
            builder.add(content_start, content_end, RangeKind.MARK, BlockKind.NAMED)
        builder.add(content_end, block_end, RangeKind.REPLACE_END, BlockKind.NAMED)

        blocks.append(
            BlockMatch(
                kind=BlockKind.NAMED,
                start=match.start(),
                argument=name,
                argument_start=name_start,
                argument_end=name_start + len(name),
                content_start=content_start,
                content_end=content_end,
                end=block_end,
            )
        )

    return ScanResult(ranges=builder.finish(), blocks=tuple(blocks))


def _format_argument(format_arg: str | None, config: EnvBlocksConfig) -> str | None:
    # Lists without a usable argument fall back to the configured default format.
    if format_arg is not None and format_arg[1:-1].strip():
        return format_arg
    if config.default_format.strip():
        return f"[{config.default_format}]"
    return format_arg


def scan_ordered_lists(
    text: str,
    config: EnvBlocksConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> ScanResult:
    """Find every ordered-list block and label its items.

    The bracket argument is parsed once per block. Item counters start at 1
    in each block and follow document order; each item marker is replaced
    by its generated label. The start range carries the raw bracket text so
    an editor can offer to change it.

    Args:
        text: Full document text.
        config: Scanning configuration. Defaults to a new `EnvBlocksConfig`.
        warn: Optional callback receiving diagnostics for unrecognized formats.

    Returns:
        ScanResult: Ranges and blocks in document order; empty when nothing
            matches.

    Raises:
        ConfigError: If the supplied configuration fails validation.

    Examples:
        scan_ordered_lists("\\\\begin{enumerate}[(a)]\\\\item One\\\\end{enumerate}")
    """
    config = _resolve_config(config)
    env = config.list_env
    item_pattern = _item_pattern(config.item_marker)
    begin_length = len(BEGIN_TEMPLATE.format(env=env))
    end_length = len(END_TEMPLATE.format(env=env))
    builder = RangeBuilder()
    blocks: list[BlockMatch] = []

    for match in _list_pattern(env).finditer(text):
        format_arg = match.group("format")
        block_start = match.start()
        content_start = block_start + begin_length + (len(format_arg) if format_arg else 0)
        content_end = content_start + len(match.group("content"))
        block_end = content_end + end_length

        descriptor = parse_format(_format_argument(format_arg, config), warn)

        builder.add(
            block_start, content_start, RangeKind.REPLACE_START, BlockKind.ORDERED_LIST, format_arg
        )

        items: list[ItemMatch] = []
        for counter, item_match in enumerate(
            item_pattern.finditer(text, content_start, content_end), start=1
        ):
            label = generate_label(counter, descriptor)
            items.append(ItemMatch(counter, item_match.start(), item_match.end(), label))
            builder.add(
                item_match.start(),
                item_match.end(),
                RangeKind.REPLACE_ITEM,
                BlockKind.ORDERED_LIST,
                label,
            )

        builder.add(content_end, block_end, RangeKind.REPLACE_END, BlockKind.ORDERED_LIST)

        blocks.append(
            BlockMatch(
                kind=BlockKind.ORDERED_LIST,
                start=block_start,
                argument=format_arg,
                argument_start=block_start + begin_length,
                argument_end=content_start,
                content_start=content_start,
                content_end=content_end,
                end=block_end,
                items=tuple(items),
            )
        )

    return ScanResult(ranges=builder.finish(), blocks=tuple(blocks))


def _replaced_spans(block: BlockMatch) -> list[tuple[int, int]]:
    spans = [(block.start, block.content_start), (block.content_end, block.end)]
    spans.extend((item.start, item.end) for item in block.items)
    return spans


def _overlaps_marker(markers: list[Range], starts: list[int], start: int, end: int) -> bool:
    # Markers are sorted and disjoint: only the one at or before `start` and
    # the next one can intersect [start, end).
    index = bisect_right(starts, start)
    if index > 0 and markers[index - 1].end > start:
        return True
    return index < len(markers) and markers[index].start < end


def _inside_blocks(blocks: list[BlockMatch], starts: list[int], offset: int) -> bool:
    index = bisect_right(starts, offset) - 1
    return index >= 0 and offset < blocks[index].end


def scan_document(
    text: str,
    config: EnvBlocksConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> ScanResult:
    """Run both scanners and merge their output by start offset.

    A named block's mark range may enclose a list nested in its content,
    but replaced spans never overlap: a list block whose start marker, end
    marker or items intersect a named block's start or end marker is dropped
    along with its ranges.

    Args:
        text: Full document text.
        config: Scanning configuration. Defaults to a new `EnvBlocksConfig`.
        warn: Optional callback receiving diagnostics for unrecognized formats.

    Returns:
        ScanResult: Combined ranges and blocks, both in start-offset order.

    Raises:
        ConfigError: If the supplied configuration fails validation.
    """
    config = _resolve_config(config)
    named = scan_named_blocks(text, config)
    lists = scan_ordered_lists(text, config, warn)

    markers = [item for item in named.ranges if item.kind is not RangeKind.MARK]
    marker_starts = [item.start for item in markers]
    kept_blocks = [
        block
        for block in lists.blocks
        if not any(
            _overlaps_marker(markers, marker_starts, start, end)
            for start, end in _replaced_spans(block)
        )
    ]
    kept_starts = [block.start for block in kept_blocks]
    kept_ranges = [
        item for item in lists.ranges if _inside_blocks(kept_blocks, kept_starts, item.start)
    ]

    by_start = attrgetter("start")
    return ScanResult(
        ranges=tuple(heapq.merge(named.ranges, kept_ranges, key=by_start)),
        blocks=tuple(heapq.merge(named.blocks, kept_blocks, key=by_start)),
    )


def scan_file(
    filepath: Path,
    config: EnvBlocksConfig | None = None,
    warn: Callable[[str], None] | None = None,
    max_size: int | None = None,
) -> tuple[str, ScanResult]:
    """Read a document and scan it.

    Args:
        filepath: Path to the document.
        config: Scanning configuration; defaults to a new `EnvBlocksConfig`.
        warn: Optional callback receiving diagnostics for unrecognized formats.
        max_size: Size limit in bytes; defaults to `config.max_file_size`.

    Returns:
        tuple[str, ScanResult]: The document text and its scan result.

    Raises:
        ScanFileError: If the configuration is invalid or the file cannot be
            read, is too large, or is not valid UTF-8.

    Examples:
        text, result = scan_file(Path("notes.md"))
    """
    try:
        config = _resolve_config(config)
    except ConfigError as error:
        raise ScanFileError(str(error)) from error

    try:
        text, _ = read_document(filepath, max_size or config.max_file_size)
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ScanFileError(error_message) from error
    except IOError as error:
        raise ScanFileError(str(error)) from error

    return text, scan_document(text, config, warn)
