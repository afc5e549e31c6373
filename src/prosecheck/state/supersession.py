"""Supersession and staleness resolution for incoming results.

For every block result of a successful response, in the order received:

1. The query is removed from the registry.
2. If the query's range now touches a dirty range, the text changed after the
   request was made.  The result is discarded, the dirty range stays where it
   is and ``validation_pending`` is set.
3. Otherwise every current match lying within the query range whose category
   was requested for that query is removed.  Matches of other categories are
   kept even when they sit in the same block.
4. The result's matches are inserted in their place.

Results are applied in processing order, so when two queries for the same
block and category race the last one applied wins.  Staleness is judged
against the whole query range, so an edit anywhere in a block discards the
block's result.  Decorations are then updated for exactly the matches that
left or entered ``current_matches``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from prosecheck.document.base import Range
from prosecheck.utils.logging import get_logger
from prosecheck.utils.ranges import range_contains

from .decorations import (
    create_decorations_for_matches,
    remove_decorations_for_match_ids,
    sync_debug_decorations,
)
from .dirty import find_touching_dirty_ranges
from .models import BlockResult, Match, PluginState
from .registry import remove_block_query

logger = get_logger(__name__)

IgnoreMatchPredicate = Callable[[Match], bool]


def include_all_matches(match: Match) -> bool:
    """Ignore-predicate that keeps every match."""

    return False


def is_superseded_by(match: Match, query_range: Range, category_ids: Sequence[str]) -> bool:
    """Return ``True`` if a result for ``query_range`` replaces ``match``."""

    return match.category.id in category_ids and range_contains(query_range, match.range)


def validation_request_success(
    state: PluginState,
    validation_set_id: str,
    block_results: Sequence[BlockResult],
    ignore_match: IgnoreMatchPredicate = include_all_matches,
) -> PluginState:
    """Reconcile ``block_results`` into ``state``."""

    if not block_results:
        return state

    in_flight = state.block_queries_in_flight
    matches: list[Match] = list(state.current_matches)
    stale = False

    for result in block_results:
        in_flight, pending = remove_block_query(in_flight, validation_set_id, result.block_query_id)
        query_range = pending.block_query.range if pending is not None else result.range
        if find_touching_dirty_ranges(state, query_range):
            logger.debug(
                "discarding stale result for %s: [%d, %d) was edited after the request",
                result.block_query_id,
                query_range.start,
                query_range.end,
            )
            stale = True
            continue
        matches = [
            m
            for m in matches
            if not is_superseded_by(m, query_range, result.category_ids)
        ]
        matches.extend(m for m in result.matches if not ignore_match(m))

    previous = {m.match_id: m for m in state.current_matches}
    final_ids = {m.match_id for m in matches}
    removed_ids = {mid for mid in previous if mid not in final_ids}
    added = [m for m in matches if previous.get(m.match_id) != m]
    # A match id that came back with new content also loses its old decorations.
    removed_ids.update(m.match_id for m in added if m.match_id in previous)

    if removed_ids or added:
        current_matches = tuple(matches)
        decorations = remove_decorations_for_match_ids(state.decorations, removed_ids)
        decorations = decorations.add(create_decorations_for_matches(added, state))
    else:
        current_matches = state.current_matches
        decorations = state.decorations

    new_state = replace(
        state,
        current_matches=current_matches,
        decorations=decorations,
        block_queries_in_flight=in_flight,
        validation_pending=state.validation_pending or stale,
    )
    return sync_debug_decorations(new_state)


__all__ = [
    "IgnoreMatchPredicate",
    "include_all_matches",
    "is_superseded_by",
    "validation_request_success",
]
