"""Block query registry.

Outstanding block queries are grouped into validation sets keyed by their
validation set id.  Each set remembers how many queries it started with so
progress can be reported across every run in flight.  A set is removed as soon
as its last pending query resolves or fails; empty sets never persist.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from prosecheck.document.base import Block, Node, Range, TransactionContext
from prosecheck.document.blocks import (
    SkipPredicate,
    do_not_skip,
    expand_ranges_to_parent_blocks,
    get_blocks_from_document,
)
from prosecheck.utils.logging import get_logger

from .decorations import sync_debug_decorations
from .dirty import evict_touching_matches
from .models import (
    BlockQueriesInFlight,
    BlockQuery,
    BlockQuerySet,
    PendingBlockQuery,
    PluginState,
)

logger = get_logger(__name__)

ExpandRanges = Callable[[Sequence[Range], Node, SkipPredicate], list[Block]]


# ---------------------------------------------------------------------------
# Registry primitives
# ---------------------------------------------------------------------------


def register_block_queries(
    in_flight: BlockQueriesInFlight,
    validation_set_id: str,
    block_queries: Sequence[BlockQuery],
    category_ids: tuple[str, ...],
) -> BlockQueriesInFlight:
    """Return ``in_flight`` with ``block_queries`` recorded under one set.

    Registering under an id that is already in flight extends that set.
    """

    if not block_queries:
        return in_flight
    existing = in_flight.get(validation_set_id)
    pending = dict(existing.pending) if existing is not None else {}
    added = 0
    for query in block_queries:
        if query.id not in pending:
            added += 1
        pending[query.id] = PendingBlockQuery(query, category_ids)
    total = (existing.total if existing is not None else 0) + added
    categories = existing.category_ids if existing is not None else category_ids
    new_set = BlockQuerySet(total=total, pending=pending, category_ids=categories)
    return {**in_flight, validation_set_id: new_set}


def remove_block_query(
    in_flight: BlockQueriesInFlight, validation_set_id: str, block_query_id: str
) -> tuple[BlockQueriesInFlight, PendingBlockQuery | None]:
    """Remove one pending query, dropping its set once nothing is pending.

    Returns the new registry and the removed entry, or ``None`` when the query
    was not in flight.
    """

    query_set = in_flight.get(validation_set_id)
    if query_set is None or block_query_id not in query_set.pending:
        return in_flight, None
    removed = query_set.pending[block_query_id]
    pending = {k: v for k, v in query_set.pending.items() if k != block_query_id}
    updated = {k: v for k, v in in_flight.items() if k != validation_set_id}
    if pending:
        updated[validation_set_id] = replace(query_set, pending=pending)
    return updated, removed


def map_block_queries_in_flight(
    in_flight: BlockQueriesInFlight, tr: TransactionContext
) -> BlockQueriesInFlight:
    """Return ``in_flight`` with every query range mapped through ``tr``."""

    if not in_flight or not tr.doc_changed:
        return in_flight
    mapped: dict[str, BlockQuerySet] = {}
    for set_id, query_set in in_flight.items():
        pending = {
            query_id: PendingBlockQuery(
                entry.block_query.with_range(tr.map_range(entry.block_query.range)),
                entry.category_ids,
            )
            for query_id, entry in query_set.pending.items()
        }
        mapped[set_id] = replace(query_set, pending=pending)
    return mapped


def percent_remaining(in_flight: BlockQueriesInFlight) -> float:
    """Return the share of queries still pending across all sets, in percent.

    Nothing in flight yields ``0``: there is nothing left to wait for.
    """

    total = sum(s.total for s in in_flight.values())
    if total == 0:
        return 0.0
    pending = sum(s.pending_count for s in in_flight.values())
    return 100.0 * pending / total


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def validation_request_for_document(
    state: PluginState,
    tr: TransactionContext,
    validation_set_id: str,
    category_ids: tuple[str, ...],
    skip: SkipPredicate = do_not_skip,
) -> PluginState:
    """Register every block of the current document as one validation set."""

    queries = [BlockQuery.from_block(b) for b in get_blocks_from_document(tr.doc, 0, skip)]
    in_flight = register_block_queries(
        state.block_queries_in_flight, validation_set_id, queries, category_ids
    )
    if in_flight is state.block_queries_in_flight:
        return state
    logger.debug("validation set %s: %d block(s) for document", validation_set_id, len(queries))
    return sync_debug_decorations(replace(state, block_queries_in_flight=in_flight))


def validation_request_for_dirty_ranges(
    state: PluginState,
    tr: TransactionContext,
    validation_set_id: str,
    category_ids: tuple[str, ...],
    expand_ranges: ExpandRanges = expand_ranges_to_parent_blocks,
    skip: SkipPredicate = do_not_skip,
) -> PluginState:
    """Turn the dirty ranges into block queries and clear them.

    Each dirty range is widened to its enclosing blocks before registration.
    ``dirtied_ranges`` and ``validation_pending`` are cleared even when no
    block qualifies, e.g. when every dirty range sits in a skipped node.
    """

    blocks = expand_ranges(list(state.dirtied_ranges), tr.doc, skip)
    queries = [BlockQuery.from_block(b) for b in blocks]
    in_flight = register_block_queries(
        state.block_queries_in_flight, validation_set_id, queries, category_ids
    )
    logger.debug(
        "validation set %s: %d dirty range(s) expanded to %d block(s)",
        validation_set_id,
        len(state.dirtied_ranges),
        len(queries),
    )
    new_state = replace(
        state,
        block_queries_in_flight=in_flight,
        dirtied_ranges=(),
        validation_pending=False,
    )
    return sync_debug_decorations(new_state)


def validation_request_error(
    state: PluginState,
    validation_set_id: str,
    validation_id: str,
    message: str,
) -> PluginState:
    """Record a failed query: re-dirty its range and surface ``message``.

    Matches touching the re-dirtied range are evicted as for any other edit.
    """

    in_flight, removed = remove_block_query(
        state.block_queries_in_flight, validation_set_id, validation_id
    )
    logger.debug("validation %s in set %s failed: %s", validation_id, validation_set_id, message)
    if removed is None:
        return replace(state, error=message)
    rng = removed.block_query.range
    dirtied = state.dirtied_ranges if rng in state.dirtied_ranges else state.dirtied_ranges + (rng,)
    new_state = replace(
        evict_touching_matches(state, (rng,)),
        block_queries_in_flight=in_flight,
        dirtied_ranges=dirtied,
        validation_pending=True,
        error=message,
    )
    return sync_debug_decorations(new_state)


__all__ = [
    "ExpandRanges",
    "map_block_queries_in_flight",
    "percent_remaining",
    "register_block_queries",
    "remove_block_query",
    "validation_request_error",
    "validation_request_for_dirty_ranges",
    "validation_request_for_document",
]
