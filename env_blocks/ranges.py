"""Append-only accumulator for rendering ranges."""

from __future__ import annotations

from .models import BlockKind, Range, RangeKind


class RangeBuilder:
    """Collect ranges in insertion order.

    Callers add ranges in increasing start-offset order; the builder does not
    sort or check. `finish` hands out an immutable snapshot.

    Examples:
        builder = RangeBuilder()
        builder.add(0, 5, RangeKind.REPLACE_END, BlockKind.NAMED)
        ranges = builder.finish()
    """

    def __init__(self) -> None:
        self._ranges: list[Range] = []

    def add(
        self,
        start: int,
        end: int,
        kind: RangeKind,
        block: BlockKind,
        payload: str | None = None,
    ) -> None:
        self._ranges.append(Range(start=start, end=end, kind=kind, block=block, payload=payload))

    def __len__(self) -> int:
        return len(self._ranges)

    def finish(self) -> tuple[Range, ...]:
        return tuple(self._ranges)
