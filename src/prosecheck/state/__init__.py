"""Validation state engine: model, actions, reducer and selectors."""

from .actions import (
    add_category,
    apply_new_dirtied_ranges,
    new_hover_id_received,
    remove_category,
    select_match,
    set_debug_state,
    set_filter_state,
    validation_request_error,
    validation_request_for_dirty_ranges,
    validation_request_for_document,
    validation_request_success,
)
from .models import (
    BlockQuery,
    BlockQuerySet,
    BlockResult,
    Category,
    Match,
    PendingBlockQuery,
    PluginConfig,
    PluginState,
    TextSuggestion,
    WikiSuggestion,
    create_initial_state,
)
from .reducer import Reducer, create_validation_reducer

__all__ = [
    "BlockQuery",
    "BlockQuerySet",
    "BlockResult",
    "Category",
    "Match",
    "PendingBlockQuery",
    "PluginConfig",
    "PluginState",
    "Reducer",
    "TextSuggestion",
    "WikiSuggestion",
    "add_category",
    "apply_new_dirtied_ranges",
    "create_initial_state",
    "create_validation_reducer",
    "new_hover_id_received",
    "remove_category",
    "select_match",
    "set_debug_state",
    "set_filter_state",
    "validation_request_error",
    "validation_request_for_dirty_ranges",
    "validation_request_for_document",
    "validation_request_success",
]
