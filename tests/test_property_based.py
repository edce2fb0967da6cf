from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from env_blocks.formats import parse_format
from env_blocks.models import Alphabet, BlockKind, FormatDescriptor, RangeKind
from env_blocks.ordinals import generate_label, number_to_letters, number_to_roman
from env_blocks.scanner import scan_document, scan_named_blocks, scan_ordered_lists

# Text that cannot form a delimiter on its own.
plain_text = st.text(alphabet=string.ascii_letters + string.digits + " .,;:!?\n\t", max_size=40)
block_name = st.text(
    alphabet=st.characters(exclude_characters="]", exclude_categories=("Cs",)),
    min_size=1,
    max_size=20,
)
format_arg = st.sampled_from(["", "[]", "[1]", "[a)]", "[(A)]", "[i.]", "[(I)]", "[junk]"])


@st.composite
def named_documents(draw):
    parts = []
    expected = []
    for _ in range(draw(st.integers(min_value=0, max_value=4))):
        parts.append(draw(plain_text))
        name = draw(block_name)
        content = draw(plain_text)
        parts.append(f"\\begin{{questionenv}}[{name}]{content}\\end{{questionenv}}")
        expected.append((name, content))
    parts.append(draw(plain_text))
    return "".join(parts), expected


@st.composite
def list_documents(draw):
    parts = []
    item_counts = []
    for _ in range(draw(st.integers(min_value=0, max_value=4))):
        parts.append(draw(plain_text))
        items = draw(st.lists(plain_text, max_size=6))
        body = "".join(f"\\item{text}" for text in items)
        preamble = draw(plain_text)
        parts.append(f"\\begin{{enumerate}}{draw(format_arg)}{preamble}{body}\\end{{enumerate}}")
        item_counts.append(len(items))
    parts.append(draw(plain_text))
    return "".join(parts), item_counts


@given(plain_text)
def test_text_without_grammar_yields_no_ranges(text: str):
    assert scan_document(text).ranges == ()


@given(named_documents())
def test_named_ranges_tile_each_block(document):
    text, expected = document
    result = scan_named_blocks(text)

    found = [
        (block.argument, text[block.content_start : block.content_end]) for block in result.blocks
    ]
    assert found == expected
    for block in result.blocks:
        ranges = [item for item in result.ranges if block.start <= item.start < block.end]
        assert ranges[0].start == block.start
        assert ranges[-1].end == block.end
        for left, right in zip(ranges, ranges[1:]):
            assert left.end == right.start
        assert ranges[0].payload == block.argument
        assert (ranges[1].kind is RangeKind.MARK) == bool(text[block.content_start : block.content_end])


@given(list_documents())
def test_item_counters_are_contiguous_per_block(document):
    text, item_counts = document
    result = scan_ordered_lists(text)

    assert [len(block.items) for block in result.blocks] == item_counts
    for block in result.blocks:
        assert [item.counter for item in block.items] == list(range(1, len(block.items) + 1))


@given(st.one_of(named_documents(), list_documents()))
def test_ranges_are_ordered_and_non_overlapping_per_scanner(document):
    text, _ = document
    for result in (scan_named_blocks(text), scan_ordered_lists(text)):
        for left, right in zip(result.ranges, result.ranges[1:]):
            assert left.start < left.end <= right.start
        for left, right in zip(result.blocks, result.blocks[1:]):
            assert left.end <= right.start
        for block in result.blocks:
            assert block.start < block.content_start <= block.content_end < block.end


@given(st.one_of(named_documents(), list_documents()))
def test_scanning_is_deterministic(document):
    text, _ = document

    assert scan_document(text) == scan_document(text)


@given(st.one_of(named_documents(), list_documents()))
def test_merged_ranges_are_sorted(document):
    text, _ = document
    result = scan_document(text)

    starts = [item.start for item in result.ranges]
    assert starts == sorted(starts)
    assert {item.block for item in result.ranges} <= {BlockKind.NAMED, BlockKind.ORDERED_LIST}


# Marker fragments shuffled freely, so blocks of both kinds can interleave.
mixed_fragments = st.lists(
    st.sampled_from(
        [
            "\\begin{questionenv}[",
            "\\end{questionenv}",
            "\\begin{enumerate}",
            "\\end{enumerate}",
            "\\item",
            "[a)]",
            "]",
            "x",
            " ",
        ]
    ),
    max_size=25,
).map("".join)


@given(mixed_fragments)
def test_merged_replaced_spans_never_overlap(text: str):
    result = scan_document(text)

    replaced = [item for item in result.ranges if item.kind is not RangeKind.MARK]
    for previous, current in zip(replaced, replaced[1:]):
        assert previous.end <= current.start


@given(st.integers(min_value=1, max_value=5000))
def test_letters_use_only_latin_letters(number: int):
    letters = number_to_letters(number)

    assert letters and set(letters) <= set(string.ascii_lowercase)


@given(st.integers(min_value=1, max_value=3999))
def test_roman_numerals_are_lowercase_symbols(number: int):
    assert set(number_to_roman(number)) <= set("mdclxvi")


@given(st.text(max_size=12))
def test_parse_format_never_raises(text: str):
    descriptor = parse_format(f"[{text}]", warn=lambda message: None)

    assert isinstance(descriptor, FormatDescriptor)


@given(st.integers(min_value=1, max_value=200), st.sampled_from(list(Alphabet)))
def test_labels_carry_decorations(counter: int, alphabet: Alphabet):
    label = generate_label(counter, FormatDescriptor(alphabet, "(", ")"))

    assert label.startswith("(") and label.endswith(")")
