"""Filtered view of the current matches.

A caller-supplied ``filter_matches(filter_state, matches)`` decides which
matches are shown.  The view and its decorations are recomputed only when the
filter state or the ``current_matches`` tuple is a different object than
before; equal-but-new values count as changes, deep comparison is never done.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from .decorations import create_decorations_for_matches
from .models import Match, PluginState

FilterMatches = Callable[[object | None, Sequence[Match]], Sequence[Match]]


def is_filter_state_stale(
    old_state: PluginState,
    new_state: PluginState,
    filter_matches: FilterMatches | None,
) -> bool:
    """Return ``True`` if the filtered view must be recomputed for ``new_state``."""

    if filter_matches is None:
        return False
    matches_changed = old_state.current_matches is not new_state.current_matches
    filter_state_changed = old_state.filter_state is not new_state.filter_state
    no_filter_applied = old_state.filter_state is None and new_state.filter_state is None
    return filter_state_changed or (matches_changed and not no_filter_applied)


def derive_filtered_decorations(
    state: PluginState, filter_matches: FilterMatches
) -> PluginState:
    """Apply ``filter_matches`` and bring match decorations in line with it.

    Decorations of matches filtered out are removed and matches newly let
    through gain theirs.  Debug decorations are left alone.  A ``None`` filter
    state clears the view so every current match is shown.
    """

    if state.filter_state is None:
        filtered: tuple[Match, ...] | None = None
        visible: Sequence[Match] = state.current_matches
    else:
        filtered = tuple(filter_matches(state.filter_state, state.current_matches))
        visible = filtered

    visible_ids = {m.match_id for m in visible}
    decorated_ids = {d.match_id for d in state.decorations if d.match_id is not None}
    decorations = state.decorations.remove_where(
        lambda d: d.match_id is not None and d.match_id not in visible_ids
    )
    missing = [m for m in visible if m.match_id not in decorated_ids]
    decorations = decorations.add(create_decorations_for_matches(missing, state))
    return replace(state, filtered_matches=filtered, decorations=decorations)


__all__ = ["FilterMatches", "derive_filtered_decorations", "is_filter_state_stale"]
