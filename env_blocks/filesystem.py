"""Reading and rewriting documents for the env-blocks CLI."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .constants import DOCUMENT_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "ENV_BLOCKS_MAX_FILE_SIZE"


def max_file_size_from_env(default: int) -> int:
    """Return the size limit from ``ENV_BLOCKS_MAX_FILE_SIZE``, or `default`.

    Raises:
        ValueError: If the variable is set but is not a positive integer.
    """
    raw = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw is None:
        return default
    if not raw.strip().isdigit() or int(raw) <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw!r}.")
    return int(raw)


def resolve_document(raw_path: str, base_dir: Path) -> Path:
    """Resolve a user-supplied document path.

    The document must exist, be reached without symlinks, live under
    `base_dir`, and carry one of the supported extensions.

    Raises:
        ValueError: If any of those conditions fails.

    Examples:
        resolve_document("notes/week1.tex", Path.cwd())
    """
    path = Path(raw_path).expanduser()
    if any(candidate.is_symlink() for candidate in (path, *path.parents)):
        raise ValueError(f"Symlinks are not supported: {path}")

    try:
        resolved = path.resolve(strict=True)
    except OSError as error:
        raise ValueError(f"Cannot resolve {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    if not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")
    if resolved.suffix.lower() not in DOCUMENT_EXTENSIONS:
        raise ValueError(
            f"{resolved} is not a supported document "
            f"(expected one of: {', '.join(DOCUMENT_EXTENSIONS)})."
        )
    return resolved


def _document_stat(filepath: Path) -> os.stat_result:
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error
    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    return stat_result


def _fingerprint(stat_result: os.stat_result) -> tuple[int, int, int, int]:
    return (
        stat_result.st_ino,
        stat_result.st_dev,
        stat_result.st_size,
        stat_result.st_mtime_ns,
    )


def read_document(filepath: Path, max_size: int) -> tuple[str, os.stat_result]:
    """Read a UTF-8 document no larger than `max_size` bytes.

    Line endings are kept as-is so scan offsets match the text on disk.

    Returns:
        tuple[str, os.stat_result]: The text and the stat taken before
            reading, which `write_document` uses to detect later changes.

    Raises:
        IOError: If the file is missing, not a regular file, or too large.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    stat_result = _document_stat(filepath)
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")

    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as stream:
            text = stream.read()
    except OSError as error:
        raise IOError(f"Error reading {filepath}: {error}") from error
    return text, stat_result


def write_document(filepath: Path, text: str, read_stat: os.stat_result) -> None:
    """Atomically replace a document with edited text.

    The write is refused when the file changed since `read_stat` was taken.
    The new file keeps the permission bits of the old one.

    Raises:
        IOError: If the file changed or cannot be replaced.

    Examples:
        text, read_stat = read_document(path, limit)
        write_document(path, edited_text, read_stat)
    """
    if _fingerprint(_document_stat(filepath)) != _fingerprint(read_stat):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", newline="", delete=False, dir=filepath.parent
        ) as stream:
            temp_path = Path(stream.name)
            stream.write(text)
            stream.flush()
            os.fsync(stream.fileno())
        os.chmod(temp_path, stat.S_IMODE(read_stat.st_mode))
        os.replace(temp_path, filepath)
    except OSError as error:
        raise IOError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
