"""Package-specific exception types."""

from __future__ import annotations


class EnvBlocksError(Exception):
    """Base class for env-blocks errors.

    Scanning never raises; these cover the file and editing seams.
    """


class ScanFileError(EnvBlocksError):
    """Raised when a document cannot be read for scanning."""


class EditError(EnvBlocksError, ValueError):
    """Raised when an edit would produce text the block grammar cannot match.

    Args:
        value: The rejected replacement text.
        reason: Short description of why it was rejected.
    """

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Cannot use {self.value!r}: {self.reason}"
