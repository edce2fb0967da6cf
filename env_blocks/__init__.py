"""
env-blocks: locate environment blocks in plain text and compute rendering ranges.

Two grammars are recognized: named blocks
(``\\begin{questionenv}[Title] ... \\end{questionenv}``) and ordered lists
(``\\begin{enumerate}[(a)] \\item ... \\end{enumerate}``) whose items receive
generated labels.

CLI Usage:
    env-blocks notes.md --output json

Library Usage:
    from env_blocks import scan_document

    result = scan_document(text)
    for item in result.ranges:
        print(item.start, item.end, item.kind, item.payload)
"""

from .config import ConfigError, EnvBlocksConfig
from .editing import (
    Snippet,
    TextEdit,
    apply_edit,
    find_block_at,
    insert_snippet,
    named_block_snippet,
    ordered_list_snippet,
    rename_block,
    set_list_format,
)
from .exceptions import EditError, EnvBlocksError, ScanFileError
from .formats import DEFAULT_FORMAT, parse_format
from .models import (
    Alphabet,
    BlockKind,
    BlockMatch,
    FormatDescriptor,
    ItemMatch,
    Range,
    RangeKind,
    ScanResult,
)
from .ordinals import generate_label, number_to_letters, number_to_roman
from .ranges import RangeBuilder
from .scanner import scan_document, scan_file, scan_named_blocks, scan_ordered_lists

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "scan_document",
    "scan_named_blocks",
    "scan_ordered_lists",
    "scan_file",
    "parse_format",
    "generate_label",
    "number_to_letters",
    "number_to_roman",
    # Data models
    "Alphabet",
    "BlockKind",
    "BlockMatch",
    "FormatDescriptor",
    "ItemMatch",
    "Range",
    "RangeKind",
    "ScanResult",
    "RangeBuilder",
    "DEFAULT_FORMAT",
    # Editing
    "TextEdit",
    "Snippet",
    "apply_edit",
    "find_block_at",
    "rename_block",
    "set_list_format",
    "named_block_snippet",
    "ordered_list_snippet",
    "insert_snippet",
    # Configuration
    "EnvBlocksConfig",
    "ConfigError",
    # Exceptions
    "EnvBlocksError",
    "EditError",
    "ScanFileError",
    # Version
    "__version__",
]
