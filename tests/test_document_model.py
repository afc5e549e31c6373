"""Tests for node sizes, text extraction and document builders."""

from __future__ import annotations

import pytest

from prosecheck.document import code_block, doc, document_from_text, p
from prosecheck.utils.errors import PositionOutOfBoundsError


def test_node_sizes() -> None:
    para = p("Hello")
    assert para.content_size == 5
    assert para.node_size == 7
    assert doc(para, p("World")).content_size == 14


def test_text_between_spans_blocks() -> None:
    root = doc(p("Hello"), p("World"))
    assert root.text_between(1, 6) == "Hello"
    assert root.text_between(3, 10) == "lloWo"
    with pytest.raises(PositionOutOfBoundsError):
        root.text_between(0, 20)


def test_descendants_positions() -> None:
    root = doc(p("Hi"), p("There"))
    positions = [(node.type, pos) for node, pos in root.descendants()]
    assert positions == [("paragraph", 0), ("text", 1), ("paragraph", 4), ("text", 5)]


def test_document_from_text() -> None:
    source = "First para\nline two\n\nSecond\n\n```\ncode\n```\n"
    assert document_from_text(source) == doc(
        p("First para line two"), p("Second"), code_block("code")
    )


def test_document_from_text_crlf_and_blank() -> None:
    assert document_from_text("a\r\n\r\nb") == doc(p("a"), p("b"))
    assert document_from_text("") == doc()
