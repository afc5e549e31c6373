"""Validation state machine.

:func:`create_validation_reducer` returns the single transition function of the
engine: ``reducer(tr, state, action) -> state``.  Before any action is handled,
a transaction that changed the document remaps every stored position so the
state stays valid against ``tr.doc``.  The reducer then routes the action to
the component that owns it and, when a filter is configured, refreshes the
filtered view.  A missing or unknown action returns the (remapped) state
unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from prosecheck.document.base import TransactionContext
from prosecheck.document.blocks import SkipPredicate, do_not_skip, expand_ranges_to_parent_blocks
from prosecheck.utils.logging import get_logger

from . import dirty, registry, supersession
from .actions import (
    Action,
    AddCategory,
    ApplyNewDirtiedRanges,
    NewHoverIdReceived,
    RemoveCategory,
    SelectMatch,
    SetDebugState,
    SetFilterState,
    ValidationRequestError,
    ValidationRequestForDirtyRanges,
    ValidationRequestForDocument,
    ValidationRequestSuccess,
)
from .decorations import regenerate_decorations_for_match_ids, sync_debug_decorations
from .filters import FilterMatches, derive_filtered_decorations, is_filter_state_stale
from .models import PluginState
from .registry import ExpandRanges, map_block_queries_in_flight
from .supersession import IgnoreMatchPredicate, include_all_matches

logger = get_logger(__name__)

Reducer = Callable[[TransactionContext, PluginState, "Action | object | None"], PluginState]


def get_new_state_from_transaction(tr: TransactionContext, state: PluginState) -> PluginState:
    """Map every stored position of ``state`` through the steps of ``tr``."""

    if not tr.doc_changed:
        return state
    filtered = state.filtered_matches
    return replace(
        state,
        current_matches=tuple(m.with_range(tr.map_range(m.range)) for m in state.current_matches),
        filtered_matches=(
            tuple(m.with_range(tr.map_range(m.range)) for m in filtered)
            if filtered is not None
            else None
        ),
        dirtied_ranges=tuple(tr.map_range(r) for r in state.dirtied_ranges),
        block_queries_in_flight=map_block_queries_in_flight(state.block_queries_in_flight, tr),
        decorations=state.decorations.map(tr),
    )


def _select_match(state: PluginState, match_id: str | None) -> PluginState:
    new_state = replace(state, selected_match=match_id)
    decorations = regenerate_decorations_for_match_ids(new_state, (state.selected_match, match_id))
    return replace(new_state, decorations=decorations)


def _new_hover_id_received(
    state: PluginState, hover_id: str | None, hover_info: object | None
) -> PluginState:
    new_state = replace(state, hover_id=hover_id, hover_info=hover_info)
    decorations = regenerate_decorations_for_match_ids(new_state, (state.hover_id, hover_id))
    return replace(new_state, decorations=decorations)


def _set_debug_state(state: PluginState, debug: bool) -> PluginState:
    if state.debug == debug:
        return state
    return sync_debug_decorations(replace(state, debug=debug))


def _add_category(state: PluginState, action: AddCategory) -> PluginState:
    categories = state.config.categories
    if any(c.id == action.category.id for c in categories):
        return state
    config = replace(state.config, categories=categories + (action.category,))
    return replace(state, config=config)


def _remove_category(state: PluginState, action: RemoveCategory) -> PluginState:
    categories = tuple(c for c in state.config.categories if c.id != action.category_id)
    if len(categories) == len(state.config.categories):
        return state
    return replace(state, config=replace(state.config, categories=categories))


def create_validation_reducer(
    expand_ranges: ExpandRanges = expand_ranges_to_parent_blocks,
    *,
    skip: SkipPredicate = do_not_skip,
    filter_matches: FilterMatches | None = None,
    ignore_match: IgnoreMatchPredicate = include_all_matches,
) -> Reducer:
    """Return the reducer for the given block expansion and match policies.

    Parameters
    ----------
    expand_ranges:
        Widens dirty ranges to the blocks that are re-checked.
    skip:
        Excludes nodes (e.g. code blocks) from validation.
    filter_matches:
        Optional ``(filter_state, matches) -> matches`` used to derive
        ``filtered_matches``.
    ignore_match:
        Predicate dropping incoming matches before they are accepted.
    """

    def dispatch(tr: TransactionContext, state: PluginState, action: object) -> PluginState:
        if isinstance(action, ApplyNewDirtiedRanges):
            return dirty.apply_new_dirtied_ranges(state, action.ranges)
        if isinstance(action, ValidationRequestForDocument):
            return registry.validation_request_for_document(
                state, tr, action.validation_set_id, action.category_ids, skip
            )
        if isinstance(action, ValidationRequestForDirtyRanges):
            return registry.validation_request_for_dirty_ranges(
                state, tr, action.validation_set_id, action.category_ids, expand_ranges, skip
            )
        if isinstance(action, ValidationRequestSuccess):
            return supersession.validation_request_success(
                state, action.validation_set_id, action.block_results, ignore_match
            )
        if isinstance(action, ValidationRequestError):
            return registry.validation_request_error(
                state, action.validation_set_id, action.validation_id, action.message
            )
        if isinstance(action, SelectMatch):
            return _select_match(state, action.match_id)
        if isinstance(action, NewHoverIdReceived):
            return _new_hover_id_received(state, action.hover_id, action.hover_info)
        if isinstance(action, SetDebugState):
            return _set_debug_state(state, action.debug)
        if isinstance(action, AddCategory):
            return _add_category(state, action)
        if isinstance(action, RemoveCategory):
            return _remove_category(state, action)
        if isinstance(action, SetFilterState):
            return replace(state, filter_state=action.filter_state)
        logger.debug("ignoring unknown action %r", action)
        return state

    def reducer(
        tr: TransactionContext,
        incoming_state: PluginState,
        action: "Action | object | None" = None,
    ) -> PluginState:
        state = get_new_state_from_transaction(tr, incoming_state)
        if action is None:
            return state
        new_state = dispatch(tr, state, action)
        if filter_matches is not None and is_filter_state_stale(state, new_state, filter_matches):
            new_state = derive_filtered_decorations(new_state, filter_matches)
        return new_state

    return reducer


__all__ = ["Reducer", "create_validation_reducer", "get_new_state_from_transaction"]
