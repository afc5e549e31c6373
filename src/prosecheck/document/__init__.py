"""Document geometry: positions, ranges, blocks and transactions."""

from .base import Block, Node, Range, Step, TransactionContext
from .blocks import (
    create_block_id,
    do_not_skip,
    expand_ranges_to_parent_blocks,
    get_blocks_from_document,
    get_dirtied_ranges_from_transaction,
    skip_node_types,
)
from .builders import code_block, doc, document_from_text, li, p, text, ul
from .decorations import Decoration, DecorationKind, DecorationSet

__all__ = [
    "Block",
    "Decoration",
    "DecorationKind",
    "DecorationSet",
    "Node",
    "Range",
    "Step",
    "TransactionContext",
    "code_block",
    "create_block_id",
    "do_not_skip",
    "doc",
    "document_from_text",
    "expand_ranges_to_parent_blocks",
    "get_blocks_from_document",
    "get_dirtied_ranges_from_transaction",
    "li",
    "p",
    "skip_node_types",
    "text",
    "ul",
]
