"""Tests for block partitioning and range expansion."""

from __future__ import annotations

from prosecheck.document import (
    Block,
    Range,
    code_block,
    create_block_id,
    doc,
    expand_ranges_to_parent_blocks,
    get_blocks_from_document,
    li,
    p,
    skip_node_types,
    ul,
)


def test_single_paragraph_block() -> None:
    root = doc(p("Example text to validate"))
    assert get_blocks_from_document(root) == [
        Block("0-from:1-to:26", 1, 26, "Example text to validate")
    ]


def test_nested_blocks_in_document_order() -> None:
    root = doc(
        p("Paragraph 1"),
        p("Paragraph 2"),
        p(ul(li("List item 1"), li("List item 2"))),
    )
    blocks = get_blocks_from_document(root)
    assert [(b.start, b.end) for b in blocks] == [(1, 13), (14, 26), (29, 41), (42, 54)]
    assert [b.text for b in blocks] == [
        "Paragraph 1",
        "Paragraph 2",
        "List item 1",
        "List item 2",
    ]
    assert all(b.id.startswith("0-") for b in blocks)


def test_block_ids_are_stable_and_indexed() -> None:
    root = doc(p("Same text"))
    assert get_blocks_from_document(root) == get_blocks_from_document(root)
    assert get_blocks_from_document(root, index=2)[0].id == "2-from:1-to:11"
    assert create_block_id(0, 1, 25) == "0-from:1-to:25"


def test_skip_predicate_hides_code_blocks() -> None:
    root = doc(p("abc"), code_block("x = 1"))
    skip = skip_node_types("code_block")
    assert [b.text for b in get_blocks_from_document(root)] == ["abc", "x = 1"]
    assert [b.text for b in get_blocks_from_document(root, skip=skip)] == ["abc"]


def test_empty_paragraph_is_a_block() -> None:
    blocks = get_blocks_from_document(doc(p(), p("x")))
    assert [(b.start, b.end, b.text) for b in blocks] == [(1, 2, ""), (3, 5, "x")]


def test_expand_dirty_range_to_block_content() -> None:
    root = doc(p("Example text to validate"))
    blocks = expand_ranges_to_parent_blocks([Range(5, 10)], root)
    assert blocks == [Block("0-from:1-to:25", 1, 25, "Example text to validate")]


def test_expand_boundary_point_reaches_both_blocks() -> None:
    root = doc(p("Paragraph 1"), p("Paragraph 2"))
    blocks = expand_ranges_to_parent_blocks([Range(13, 13)], root)
    assert [(b.start, b.end) for b in blocks] == [(1, 12), (14, 25)]


def test_expand_deduplicates_blocks() -> None:
    root = doc(p("Paragraph 1"), p("Paragraph 2"))
    blocks = expand_ranges_to_parent_blocks([Range(2, 3), Range(5, 6), Range(16, 18)], root)
    assert [(b.start, b.end) for b in blocks] == [(1, 12), (14, 25)]


def test_expand_respects_skip() -> None:
    root = doc(p("abc"), code_block("x = 1"))
    assert expand_ranges_to_parent_blocks([Range(6, 7)], root) == [
        Block("0-from:6-to:11", 6, 11, "x = 1")
    ]
    assert expand_ranges_to_parent_blocks([Range(6, 7)], root, skip_node_types("code_block")) == []


def test_expand_nothing() -> None:
    assert expand_ranges_to_parent_blocks([], doc(p("abc"))) == []
