"""Small constructors for document trees.

``doc(p("Example text"))`` reads like the document it builds.  Plain strings
passed as children become text nodes; empty strings are dropped because a text
node must not be empty.
"""

from __future__ import annotations

import re

from .base import Node

_FENCE_RE = re.compile(r"^```[^\n]*\n(.*?)^```[ \t]*$", re.MULTILINE | re.DOTALL)


def text(value: str) -> Node:
    """Return a text node holding ``value``."""

    return Node("text", text=value)


def node(type_: str, *children: Node | str) -> Node:
    """Return a container node of ``type_`` with ``children``."""

    content = tuple(text(c) if isinstance(c, str) else c for c in children if c != "")
    return Node(type_, content)


def doc(*children: Node | str) -> Node:
    return node("doc", *children)


def p(*children: Node | str) -> Node:
    return node("paragraph", *children)


def ul(*children: Node | str) -> Node:
    return node("bullet_list", *children)


def li(*children: Node | str) -> Node:
    return node("list_item", *children)


def code_block(*children: Node | str) -> Node:
    return node("code_block", *children)


def document_from_text(source: str) -> Node:
    """Build a document from plain text.

    Paragraphs are separated by blank lines and single newlines inside a
    paragraph are folded into spaces.  Fenced blocks delimited by triple
    backticks become ``code_block`` nodes with their content kept verbatim.
    """

    source = source.replace("\r\n", "\n").replace("\r", "\n")
    blocks: list[Node] = []
    last = 0
    for fence in _FENCE_RE.finditer(source):
        blocks.extend(_paragraphs(source[last : fence.start()]))
        blocks.append(code_block(fence.group(1).rstrip("\n")))
        last = fence.end()
    blocks.extend(_paragraphs(source[last:]))
    return doc(*blocks)


def _paragraphs(chunk: str) -> list[Node]:
    result: list[Node] = []
    for para in re.split(r"\n\s*\n", chunk):
        folded = " ".join(line.strip() for line in para.splitlines() if line.strip())
        if folded:
            result.append(p(folded))
    return result


__all__ = ["code_block", "doc", "document_from_text", "li", "node", "p", "text", "ul"]
