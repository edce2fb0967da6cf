"""Edit computations for block names, list formats, and new blocks.

The host editor owns the buffer; these helpers only report which offset
range to replace and with what text.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import EnvBlocksConfig
from .constants import BEGIN_TEMPLATE, END_TEMPLATE
from .exceptions import EditError
from .models import BlockKind, BlockMatch, ScanResult


@dataclass(frozen=True)
class TextEdit:
    """Replacement of ``text[start:end]`` with `insert`."""

    start: int
    end: int
    insert: str

    @property
    def cursor(self) -> int:
        """Offset just past the inserted text."""
        return self.start + len(self.insert)


@dataclass(frozen=True)
class Snippet:
    """Text for a new block and the cursor position relative to its start."""

    text: str
    cursor: int


def apply_edit(text: str, edit: TextEdit) -> str:
    """Return `text` with `edit` applied.

    Raises:
        ValueError: If the edit range falls outside `text`.
    """
    if not 0 <= edit.start <= edit.end <= len(text):
        raise ValueError(f"Edit range {edit.start}-{edit.end} is outside the text")
    return f"{text[: edit.start]}{edit.insert}{text[edit.end :]}"


def find_block_at(
    result: ScanResult, offset: int, kind: BlockKind | None = None
) -> BlockMatch | None:
    """Find the block whose span ``[start, end]`` contains `offset`.

    Args:
        result: Output of a scan over the current text.
        offset: Absolute position, typically where a widget was clicked.
        kind: Restrict the lookup to one grammar.

    Returns:
        BlockMatch | None: The innermost matching block, or None.
    """
    found = None
    for block in result.blocks:
        if kind is not None and block.kind is not kind:
            continue
        if block.start <= offset <= block.end:
            # Blocks are in start order; a later hit sits inside an earlier one.
            found = block
    return found


def rename_block(block: BlockMatch, new_name: str) -> TextEdit | None:
    """Build the edit that renames a named block.

    An empty name becomes a single space so the block still matches.

    Args:
        block: A block produced by the named-block scanner.
        new_name: Replacement title.

    Returns:
        TextEdit | None: Edit over the name span, or None when unchanged.

    Raises:
        EditError: If `block` is not a named block or the name contains ``]``.

    Examples:
        rename_block(block, "Proof of Y")
    """
    if block.kind is not BlockKind.NAMED:
        raise EditError(new_name, "only named blocks have a name")

    name = new_name.strip() or " "
    if "]" in name:
        raise EditError(new_name, "block names cannot contain ']'")
    if name == block.argument:
        return None
    return TextEdit(block.argument_start, block.argument_end, name)


def set_list_format(block: BlockMatch, new_format: str) -> TextEdit:
    """Build the edit that replaces the bracket argument of an ordered list.

    An empty format removes the argument, leaving the default numbering.

    Args:
        block: A block produced by the ordered-list scanner.
        new_format: Format text without brackets, such as ``"a)"``.

    Returns:
        TextEdit: Edit over the bracket span (empty when the list had none).

    Raises:
        EditError: If `block` is not an ordered list or the format contains
            ``[`` or ``]``.

    Examples:
        set_list_format(block, "(i)")
    """
    if block.kind is not BlockKind.ORDERED_LIST:
        raise EditError(new_format, "only ordered lists have a format")

    value = new_format.strip()
    if "[" in value or "]" in value:
        raise EditError(new_format, "formats cannot contain brackets")
    insert = f"[{value}]" if value else ""
    return TextEdit(block.argument_start, block.argument_end, insert)


def named_block_snippet(config: EnvBlocksConfig | None = None) -> Snippet:
    """Snippet for an empty named block with the cursor on its blank line."""
    config = config or EnvBlocksConfig()
    start = BEGIN_TEMPLATE.format(env=config.named_env) + "[ ]\n"
    end = END_TEMPLATE.format(env=config.named_env)
    return Snippet(text=f"{start}\n{end}", cursor=len(start))


def ordered_list_snippet(config: EnvBlocksConfig | None = None) -> Snippet:
    """Snippet for an ordered list with one item and the cursor after it."""
    config = config or EnvBlocksConfig()
    start = BEGIN_TEMPLATE.format(env=config.list_env) + "[]\n"
    item = f"{config.item_marker} "
    end = END_TEMPLATE.format(env=config.list_env)
    return Snippet(text=f"{start}{item}\n{end}", cursor=len(start) + len(item))


def insert_snippet(offset: int, snippet: Snippet) -> tuple[TextEdit, int]:
    """Build the edit inserting `snippet` at `offset`.

    Returns:
        tuple[TextEdit, int]: The edit and the absolute cursor offset after it.
    """
    return TextEdit(offset, offset, snippet.text), offset + snippet.cursor
