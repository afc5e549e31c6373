"""Dirty range tracker.

Dirty ranges accumulate as edits arrive.  Marking a range dirty evicts every
current match touching it, together with the match's decorations, in the same
transition, so no accepted match ever overlaps a dirty range.  Coalescing is
left to :func:`prosecheck.document.blocks.expand_ranges_to_parent_blocks`
when the ranges are turned into block queries.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from prosecheck.document.base import Range
from prosecheck.utils.ranges import dedupe_ranges, touches_any

from .decorations import remove_decorations_for_match_ids, sync_debug_decorations
from .models import PluginState


def apply_new_dirtied_ranges(state: PluginState, ranges: Iterable[Range]) -> PluginState:
    """Mark ``ranges`` dirty and evict the matches they touch.

    Re-applying a range that is already dirty adds nothing.
    """

    incoming = dedupe_ranges(ranges)
    if not incoming:
        return state

    dirtied = tuple(dedupe_ranges(state.dirtied_ranges + tuple(incoming)))
    new_state = evict_touching_matches(state, incoming)
    new_state = replace(new_state, dirtied_ranges=dirtied, validation_pending=True)
    return sync_debug_decorations(new_state)


def evict_touching_matches(state: PluginState, ranges: Sequence[Range]) -> PluginState:
    """Drop the current matches touching ``ranges`` along with their decorations."""

    evicted = {m.match_id for m in state.current_matches if touches_any(m.range, ranges)}
    if not evicted:
        return state
    return replace(
        state,
        current_matches=tuple(m for m in state.current_matches if m.match_id not in evicted),
        decorations=remove_decorations_for_match_ids(state.decorations, evicted),
    )


def find_touching_dirty_ranges(state: PluginState, rng: Range) -> list[Range]:
    """Return the dirty ranges of ``state`` touching ``rng``."""

    return [d for d in state.dirtied_ranges if touches_any(d, (rng,))]


__all__ = ["apply_new_dirtied_ranges", "evict_touching_matches", "find_touching_dirty_ranges"]
