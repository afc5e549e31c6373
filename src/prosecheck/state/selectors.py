"""Derived, read-only views over :class:`~prosecheck.state.models.PluginState`.

Selectors never mutate and never raise on a lookup miss; absence is reported
as ``None`` (or an empty list).
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import (
    BlockQuerySet,
    Match,
    PendingBlockQuery,
    PluginState,
    Suggestion,
    SuggestionKind,
)
from .registry import percent_remaining


@dataclass(slots=True, frozen=True)
class SuggestionAndRange:
    start: int
    end: int
    suggestion: Suggestion


@dataclass(slots=True, frozen=True)
class NewBlockQuerySet:
    """A validation set that appeared or changed between two states."""

    validation_set_id: str
    block_query_set: BlockQuerySet


def select_percent_remaining(state: PluginState) -> float:
    return percent_remaining(state.block_queries_in_flight)


def select_block_matches_by_match_id(state: PluginState, match_id: str) -> Match | None:
    return next((m for m in state.current_matches if m.match_id == match_id), None)


def select_suggestion_and_range(
    state: PluginState, match_id: str, suggestion_index: int
) -> SuggestionAndRange | None:
    """Return the suggestion at ``suggestion_index`` and the range it replaces."""

    match = select_block_matches_by_match_id(state, match_id)
    if match is None or not 0 <= suggestion_index < len(match.suggestions):
        return None
    return SuggestionAndRange(match.start, match.end, match.suggestions[suggestion_index])


def select_block_queries_in_flight_for_set(
    state: PluginState, validation_set_id: str
) -> BlockQuerySet | None:
    return state.block_queries_in_flight.get(validation_set_id)


def select_single_block_query_in_flight_by_id(
    state: PluginState, validation_set_id: str, block_query_id: str
) -> PendingBlockQuery | None:
    query_set = select_block_queries_in_flight_for_set(state, validation_set_id)
    if query_set is None:
        return None
    return query_set.pending.get(block_query_id)


def select_all_block_queries_in_flight(state: PluginState) -> list[PendingBlockQuery]:
    return [
        pending
        for query_set in state.block_queries_in_flight.values()
        for pending in query_set.pending.values()
    ]


def select_new_block_query_in_flight(
    old_state: PluginState, new_state: PluginState
) -> list[NewBlockQuerySet]:
    """Return sets present in ``new_state`` but absent or different in ``old_state``.

    Sets that disappeared are not reported.
    """

    old = old_state.block_queries_in_flight
    return [
        NewBlockQuerySet(set_id, query_set)
        for set_id, query_set in new_state.block_queries_in_flight.items()
        if set_id not in old or old[set_id] != query_set
    ]


def is_auto_fixable(match: Match) -> bool:
    """Return ``True`` if ``match`` has exactly one plain text replacement."""

    return len(match.suggestions) == 1 and match.suggestions[0].kind is SuggestionKind.TEXT


def select_all_auto_fixable_matches(state: PluginState) -> list[Match]:
    return [m for m in state.current_matches if is_auto_fixable(m)]


__all__ = [
    "NewBlockQuerySet",
    "SuggestionAndRange",
    "is_auto_fixable",
    "select_all_auto_fixable_matches",
    "select_all_block_queries_in_flight",
    "select_block_matches_by_match_id",
    "select_block_queries_in_flight_for_set",
    "select_new_block_query_in_flight",
    "select_percent_remaining",
    "select_single_block_query_in_flight_by_id",
    "select_suggestion_and_range",
]
