"""Block partitioning and edit geometry.

:func:`get_blocks_from_document` snapshots a document into the leaf blocks that
are submitted for checking.  :func:`expand_ranges_to_parent_blocks` widens
dirty ranges to the blocks that enclose them and
:func:`get_dirtied_ranges_from_transaction` reduces a transaction to the
ranges its steps touched.  Nothing here merges ranges; coalescing is left to
the consumers.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence

from prosecheck.utils.ranges import ranges_touch

from .base import Block, Node, Range, TransactionContext

SkipPredicate = Callable[[Node], bool]


def do_not_skip(node: Node) -> bool:
    """Skip predicate that keeps every node."""

    return False


def skip_node_types(*types: str) -> SkipPredicate:
    """Return a predicate skipping nodes whose type is in ``types``."""

    excluded = frozenset(types)

    def predicate(node: Node) -> bool:
        return node.type in excluded

    return predicate


def create_block_id(index: int, start: int, end: int) -> str:
    """Return the stable id for a block of snapshot ``index`` at ``[start, end)``."""

    return f"{index}-from:{start}-to:{end}"


def iter_textblocks(root: Node, skip: SkipPredicate = do_not_skip) -> Iterator[tuple[Node, int]]:
    """Yield ``(node, pos)`` for each leaf text block not excluded by ``skip``.

    Skipped nodes hide their whole subtree.
    """

    def walk(node: Node, content_start: int) -> Iterator[tuple[Node, int]]:
        pos = content_start
        for child in node.children:
            if not child.is_text and not skip(child):
                if child.is_textblock:
                    yield child, pos
                else:
                    yield from walk(child, pos + 1)
            pos += child.node_size

    yield from walk(root, 0)


def get_blocks_from_document(
    root: Node, index: int = 0, skip: SkipPredicate = do_not_skip
) -> list[Block]:
    """Return every qualifying leaf block of ``root`` in document order.

    A block spans from just inside its node to just after the node's closing
    token, i.e. ``[pos + 1, pos + node_size)``.
    """

    blocks: list[Block] = []
    for node, pos in iter_textblocks(root, skip):
        start = pos + 1
        end = pos + node.node_size
        blocks.append(Block(create_block_id(index, start, end), start, end, node.text_content))
    return blocks


def expand_ranges_to_parent_blocks(
    ranges: Sequence[Range],
    root: Node,
    skip: SkipPredicate = do_not_skip,
    index: int = 0,
) -> list[Block]:
    """Expand ``ranges`` to the content of every block they touch.

    A range touches a block when it meets the block node anywhere between the
    position before the node and the position after it, so zero-length
    deletion points on a block edge still qualify.  Each block appears once,
    ordered by position.  Ranges that touch no block are dropped.
    """

    if not ranges:
        return []
    expanded: list[Block] = []
    for node, pos in iter_textblocks(root, skip):
        bounds = Range(pos, pos + node.node_size)
        if any(ranges_touch(rng, bounds) for rng in ranges):
            start = pos + 1
            end = pos + node.node_size - 1
            expanded.append(Block(create_block_id(index, start, end), start, end, node.text_content))
    return expanded


def get_dirtied_ranges_from_transaction(tr: TransactionContext) -> list[Range]:
    """Return the ranges touched by each step of ``tr``.

    A replacement dirties the range it replaced.  A pure deletion leaves no
    text behind, so it is reported as the zero-length range at the collapse
    point.  Steps contribute independently and are not merged.
    """

    ranges: list[Range] = []
    for step in tr.steps:
        if step.inserted.is_empty:
            ranges.append(Range(step.deleted.start, step.deleted.start))
        else:
            ranges.append(step.deleted)
    return ranges


__all__ = [
    "SkipPredicate",
    "create_block_id",
    "do_not_skip",
    "expand_ranges_to_parent_blocks",
    "get_blocks_from_document",
    "get_dirtied_ranges_from_transaction",
    "iter_textblocks",
    "skip_node_types",
]
