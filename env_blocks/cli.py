"""
Lists the rendering ranges of environment blocks in a document.
With an edit option, renames a named block or changes a list format in place.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from .config import ConfigError, build_config
from .editing import apply_edit, rename_block, set_list_format
from .exceptions import EditError
from .filesystem import max_file_size_from_env, read_document, resolve_document, write_document
from .models import BlockKind, Range, ScanResult
from .scanner import scan_document

__all__ = ["cli"]


def _range_to_dict(item: Range) -> dict[str, object]:
    return {
        "start": item.start,
        "end": item.end,
        "kind": item.kind.name.lower(),
        "block": item.block.name.lower(),
        "payload": item.payload,
    }


def format_ranges(result: ScanResult, output: str = "text") -> str:
    """Render scan ranges as tab-separated lines or a JSON array.

    Examples:
        format_ranges(scan_document(text), output="json")
    """
    rows = [_range_to_dict(item) for item in result.ranges]
    if output == "json":
        return json.dumps(rows, indent=2)
    return "".join(
        f"{row['start']}\t{row['end']}\t{row['block']}\t{row['kind']}\t{row['payload'] or ''}\n"
        for row in rows
    )


def _select_block(result: ScanResult, kind: BlockKind, index: int, option: str):
    blocks = [block for block in result.blocks if block.kind is kind]
    if not 1 <= index <= len(blocks):
        raise click.BadParameter(
            f"block {index} does not exist ({len(blocks)} found)", param_hint=option
        )
    return blocks[index - 1]


@click.command()
@click.version_option()
@click.option("--named-env", help="Environment name of named blocks")
@click.option("--list-env", help="Environment name of ordered lists")
@click.option("--item-marker", help="Item marker inside ordered lists")
@click.option("--default-format", help="Numbering format for lists without one (e.g. 'a)')")
@click.option(
    "--output",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format for the range listing",
)
@click.option(
    "--rename-block",
    "rename_request",
    type=(int, str),
    default=None,
    metavar="INDEX NAME",
    help="Rename the INDEX-th named block (1-based)",
)
@click.option(
    "--set-format",
    type=(int, str),
    default=None,
    metavar="INDEX FORMAT",
    help="Set the numbering format of the INDEX-th ordered list (1-based)",
)
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    named_env: str | None = None,
    list_env: str | None = None,
    item_marker: str | None = None,
    default_format: str | None = None,
    output: str = "text",
    rename_request: tuple[int, str] | None = None,
    set_format: tuple[int, str] | None = None,
):
    """
    Entry point for listing or editing environment blocks.

    Args:
        filepath: Path to the document to process.
        named_env: Override for the named-block environment name.
        list_env: Override for the ordered-list environment name.
        item_marker: Override for the item marker.
        default_format: Numbering format for lists without a bracket argument.
        output: `text` or `json` range listing.
        rename_request: Index and new name of a named block.
        set_format: Index and new format of an ordered list.

    Raises:
        click.BadParameter: If parameters reference invalid paths, blocks, or
            configuration values.
        click.ClickException: If reading, editing, or writing the file fails.
        click.UsageError: If both edit options are given.

    Examples:
        env-blocks notes.md --output json
        env-blocks notes.md --set-format 2 "(i)"
    """
    if rename_request and set_format:
        raise click.UsageError("Use either --rename-block or --set-format, not both.")

    base_dir = Path.cwd().resolve()
    try:
        path = resolve_document(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            path.parent,
            named_env=named_env,
            list_env=list_env,
            item_marker=item_marker,
            default_format=default_format,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = max_file_size_from_env(config.max_file_size)
        text, read_stat = read_document(path, max_file_size)
    except UnicodeDecodeError as error:
        raise click.ClickException(f"Invalid UTF-8 sequence in {path}: {error}") from error
    except (ValueError, IOError) as error:
        raise click.ClickException(str(error)) from error

    def warn(message: str) -> None:
        click.echo(message, err=True)

    result = scan_document(text, config, warn)

    if not rename_request and not set_format:
        click.echo(format_ranges(result, output), nl=False)
        return

    try:
        if rename_request:
            index, new_name = rename_request
            block = _select_block(result, BlockKind.NAMED, index, "--rename-block")
            edit = rename_block(block, new_name)
        else:
            index, new_format = set_format
            block = _select_block(result, BlockKind.ORDERED_LIST, index, "--set-format")
            edit = set_list_format(block, new_format)
    except EditError as error:
        raise click.BadParameter(str(error)) from error

    if edit is None or text[edit.start : edit.end] == edit.insert:
        click.echo(f"{path.name}: block {index} unchanged", err=True)
        return

    try:
        write_document(path, apply_edit(text, edit), read_stat)
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
