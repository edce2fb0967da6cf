from env_blocks.models import BlockKind, Range, RangeKind
from env_blocks.ranges import RangeBuilder


def test_builder_preserves_insertion_order():
    builder = RangeBuilder()
    builder.add(0, 5, RangeKind.REPLACE_START, BlockKind.NAMED, "Q")
    builder.add(5, 9, RangeKind.MARK, BlockKind.NAMED)
    builder.add(9, 14, RangeKind.REPLACE_END, BlockKind.NAMED)

    assert builder.finish() == (
        Range(0, 5, RangeKind.REPLACE_START, BlockKind.NAMED, "Q"),
        Range(5, 9, RangeKind.MARK, BlockKind.NAMED),
        Range(9, 14, RangeKind.REPLACE_END, BlockKind.NAMED),
    )


def test_finish_returns_snapshot():
    builder = RangeBuilder()
    builder.add(0, 1, RangeKind.REPLACE_END, BlockKind.ORDERED_LIST)
    snapshot = builder.finish()

    builder.add(2, 3, RangeKind.REPLACE_END, BlockKind.ORDERED_LIST)

    assert len(snapshot) == 1
    assert len(builder) == 2
    assert isinstance(snapshot, tuple)


def test_empty_builder_finishes_empty():
    assert RangeBuilder().finish() == ()
