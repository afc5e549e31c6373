"""Decoration synchronizer.

Decorations are a projection of ``(visible matches, hover_id, selected_match,
debug, dirtied ranges, in-flight queries)``.  :func:`derive_decorations`
rebuilds that projection from scratch; the remaining helpers update an existing
set in place of a rebuild, touching only the decorations owned by the matches
or debug ranges that changed.  Both paths must always agree.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import replace

from prosecheck.document.base import Range
from prosecheck.document.decorations import Decoration, DecorationKind, DecorationSet

from .models import Match, MatchColours, PluginState


def create_decorations_for_match(
    match: Match,
    *,
    is_hovered: bool = False,
    is_selected: bool = False,
) -> list[Decoration]:
    """Return the highlight and anchor widget for ``match``."""

    common = {
        "match_id": match.match_id,
        "category_id": match.category.id,
        "colour": match.category.colour,
        "is_hovered": is_hovered,
        "is_selected": is_selected,
    }
    return [
        Decoration(match.start, match.end, DecorationKind.MATCH, **common),
        Decoration(match.start, match.start, DecorationKind.MATCH_WIDGET, **common),
    ]


def create_decorations_for_matches(
    matches: Iterable[Match], state: PluginState
) -> list[Decoration]:
    """Return decorations for ``matches`` flagged against ``state``."""

    decorations: list[Decoration] = []
    for match in matches:
        decorations.extend(
            create_decorations_for_match(
                match,
                is_hovered=match.match_id == state.hover_id,
                is_selected=match.match_id == state.selected_match,
            )
        )
    return decorations


def create_debug_decoration_from_range(
    rng: Range, colours: MatchColours, *, dirty: bool = True
) -> Decoration:
    """Return a debug decoration marking ``rng`` as dirty or in flight."""

    if dirty:
        return Decoration(rng.start, rng.end, DecorationKind.DEBUG_DIRTY, colour=colours.debug_dirty)
    return Decoration(
        rng.start, rng.end, DecorationKind.DEBUG_INFLIGHT, colour=colours.debug_inflight
    )


def derive_debug_decorations(state: PluginState) -> list[Decoration]:
    """Return the debug decorations implied by ``state`` (none unless debugging)."""

    if not state.debug:
        return []
    colours = state.config.match_colours
    decorations = [
        create_debug_decoration_from_range(rng, colours, dirty=True) for rng in state.dirtied_ranges
    ]
    for query_set in state.block_queries_in_flight.values():
        for pending in query_set.pending.values():
            decorations.append(
                create_debug_decoration_from_range(
                    pending.block_query.range, colours, dirty=False
                )
            )
    return decorations


def derive_decorations(state: PluginState) -> DecorationSet:
    """Rebuild the full decoration set for ``state`` from its source entities."""

    return DecorationSet(
        create_decorations_for_matches(state.visible_matches, state)
        + derive_debug_decorations(state)
    )


def remove_decorations_for_match_ids(
    decorations: DecorationSet, match_ids: Collection[str]
) -> DecorationSet:
    if not match_ids:
        return decorations
    return decorations.remove_where(lambda d: d.match_id is not None and d.match_id in match_ids)


def regenerate_decorations_for_match_ids(
    state: PluginState, match_ids: Iterable[str | None]
) -> DecorationSet:
    """Recreate the decorations of the given matches using the current flags.

    Only decorations owned by ``match_ids`` are removed and re-added; matches
    that are not visible simply lose theirs.
    """

    ids = {mid for mid in match_ids if mid is not None}
    if not ids:
        return state.decorations
    decorations = remove_decorations_for_match_ids(state.decorations, ids)
    matches = [m for m in state.visible_matches if m.match_id in ids]
    return decorations.add(create_decorations_for_matches(matches, state))


def sync_debug_decorations(state: PluginState) -> PluginState:
    """Return ``state`` with debug decorations matching its dirty and pending ranges.

    Match decorations are left untouched.
    """

    expected = DecorationSet(derive_debug_decorations(state))
    current = DecorationSet(state.decorations.find(predicate=lambda d: d.kind.is_debug))
    if expected == current:
        return state
    decorations = state.decorations.remove_where(lambda d: d.kind.is_debug).add(expected)
    return replace(state, decorations=decorations)


__all__ = [
    "create_debug_decoration_from_range",
    "create_decorations_for_match",
    "create_decorations_for_matches",
    "derive_debug_decorations",
    "derive_decorations",
    "regenerate_decorations_for_match_ids",
    "remove_decorations_for_match_ids",
    "sync_debug_decorations",
]
