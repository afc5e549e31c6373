"""Core document primitives shared by the validation engine.

Positions follow the ProseMirror convention: the root node's content starts at
position ``0``, entering a non-text node costs one position and leaving it
costs another, and every character of text occupies one position.  Ranges are
half-open intervals ``[start, end)`` over those positions; a zero-length range
``[pos, pos)`` marks a collapse point such as a deletion.

The engine never edits a document.  It only enumerates blocks of a snapshot and
maps stored positions through the steps of a :class:`TransactionContext`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from prosecheck.utils.errors import InvalidRangeError, PositionOutOfBoundsError


@dataclass(slots=True, frozen=True)
class Range:
    """Half-open document range ``[start, end)``."""

    start: int
    end: int

    def __post_init__(self) -> None:  # noqa: D401 - simple validation
        if self.start < 0 or self.end < self.start:
            raise InvalidRangeError(f"invalid range [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        """Return range length in positions."""

        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(slots=True, frozen=True)
class Node:
    """Immutable document node.

    Text nodes carry ``text`` and no children.  Every other node is a container
    whose size is the size of its content plus its opening and closing tokens.
    """

    type: str
    children: tuple["Node", ...] = ()
    text: str | None = None

    @property
    def is_text(self) -> bool:
        return self.text is not None

    @property
    def is_textblock(self) -> bool:
        """Return ``True`` for leaf blocks whose content is inline text only."""

        if self.is_text or self.type == "doc":
            return False
        return all(child.is_text for child in self.children)

    @property
    def content_size(self) -> int:
        if self.text is not None:
            return len(self.text)
        return sum(child.node_size for child in self.children)

    @property
    def node_size(self) -> int:
        if self.text is not None:
            return len(self.text)
        return self.content_size + 2

    @property
    def text_content(self) -> str:
        if self.text is not None:
            return self.text
        return "".join(child.text_content for child in self.children)

    def descendants(self) -> Iterator[tuple["Node", int]]:
        """Yield ``(node, pos)`` for every descendant in document order.

        ``pos`` is the position directly before the node.  The receiver is
        treated as the root, so its first child sits at position ``0``.
        """

        yield from _walk(self, 0)

    def text_between(self, start: int, end: int) -> str:
        """Return the text found between ``start`` and ``end``."""

        if start < 0 or end > self.content_size or end < start:
            raise PositionOutOfBoundsError(
                f"range [{start}, {end}) outside document of size {self.content_size}"
            )
        parts: list[str] = []
        for node, pos in self.descendants():
            if node.text is None:
                continue
            lo = max(start, pos)
            hi = min(end, pos + len(node.text))
            if lo < hi:
                parts.append(node.text[lo - pos : hi - pos])
        return "".join(parts)


def _walk(node: Node, content_start: int) -> Iterator[tuple[Node, int]]:
    pos = content_start
    for child in node.children:
        yield child, pos
        if child.text is None:
            yield from _walk(child, pos + 1)
        pos += child.node_size


@dataclass(slots=True, frozen=True)
class Block:
    """Leaf addressable unit of a document used as validation granularity."""

    id: str
    start: int
    end: int
    text: str

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)


# ---------------------------------------------------------------------------
# Transactions and position mapping
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class Step:
    """Single replacement: ``deleted`` is replaced by content spanning ``inserted``.

    ``deleted`` is expressed in the coordinates of the document before the
    step and ``inserted`` in the coordinates after it.  A pure deletion has an
    empty ``inserted`` range and a pure insertion an empty ``deleted`` range.
    """

    deleted: Range
    inserted: Range

    @classmethod
    def replace(cls, start: int, end: int, size: int) -> "Step":
        """Return a step replacing ``[start, end)`` with ``size`` positions."""

        return cls(Range(start, end), Range(start, start + size))

    @classmethod
    def delete(cls, start: int, end: int) -> "Step":
        return cls.replace(start, end, 0)

    @classmethod
    def insert(cls, pos: int, size: int) -> "Step":
        return cls.replace(pos, pos, size)

    def map_position(self, pos: int, assoc: int = 1) -> int:
        """Map ``pos`` through this step.

        Positions before the step are unchanged and positions after it shift
        by the size difference.  A position touching the replaced region sticks
        to the start when it sits on the region's start, to the end of the
        inserted content when it sits on the region's end, and follows
        ``assoc`` when strictly inside (or when nothing was deleted).
        """

        start, end = self.deleted.start, self.deleted.end
        inserted = self.inserted.length
        if pos < start:
            return pos
        if pos > end:
            return pos + inserted - (end - start)
        if start == end:
            side = assoc
        elif pos == start:
            side = -1
        elif pos == end:
            side = 1
        else:
            side = assoc
        return start if side < 0 else start + inserted


@dataclass(slots=True, frozen=True)
class TransactionContext:
    """Document snapshot plus the steps that produced it.

    Stored positions are remapped through ``steps`` so that they stay valid in
    ``doc``.  A context without steps represents a transaction that did not
    change the document.
    """

    doc: Node
    steps: tuple[Step, ...] = ()

    @property
    def doc_changed(self) -> bool:
        return bool(self.steps)

    def map_position(self, pos: int, assoc: int = 1) -> int:
        for step in self.steps:
            pos = step.map_position(pos, assoc)
        return pos

    def map_range(self, rng: Range) -> Range:
        start = self.map_position(rng.start)
        end = self.map_position(rng.end)
        return Range(start, max(start, end))


__all__ = ["Block", "Node", "Range", "Step", "TransactionContext"]
