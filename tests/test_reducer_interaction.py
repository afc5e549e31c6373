"""Tests for hover, selection, debug mode, categories and position mapping."""

from __future__ import annotations

from prosecheck.document import DecorationKind, Range, Step, TransactionContext, doc, p
from prosecheck.state import (
    BlockResult,
    Category,
    Match,
    PluginConfig,
    PluginState,
    add_category,
    apply_new_dirtied_ranges,
    create_initial_state,
    create_validation_reducer,
    new_hover_id_received,
    remove_category,
    select_match,
    set_debug_state,
    set_filter_state,
    validation_request_for_dirty_ranges,
    validation_request_for_document,
    validation_request_success,
)
from prosecheck.state.decorations import derive_decorations

GRAMMAR = Category("grammar", "Grammar", "e53935")
TEXT = "Example text to validate"


def _tr() -> TransactionContext:
    return TransactionContext(doc(p(TEXT)))


def _state_with_matches() -> PluginState:
    reducer = create_validation_reducer()
    state = create_initial_state(PluginConfig(categories=(GRAMMAR,)))
    state = reducer(_tr(), state, validation_request_for_document("s1", ("grammar",)))
    result = BlockResult(
        "0-from:1-to:26",
        1,
        26,
        ("grammar",),
        (Match("m1", 1, 8, GRAMMAR, "Word"), Match("m2", 14, 16, GRAMMAR, "Preposition")),
    )
    return reducer(_tr(), state, validation_request_success("s1", [result]))


def _flags(state: PluginState, match_id: str) -> set[tuple[bool, bool]]:
    return {(d.is_hovered, d.is_selected) for d in state.decorations if d.match_id == match_id}


def test_hover_flags_decorations() -> None:
    reducer = create_validation_reducer()
    state = reducer(_tr(), _state_with_matches(), new_hover_id_received("m1", {"left": 10}))
    assert state.hover_id == "m1"
    assert state.hover_info == {"left": 10}
    assert _flags(state, "m1") == {(True, False)}
    assert _flags(state, "m2") == {(False, False)}
    assert state.decorations == derive_decorations(state)

    state = reducer(_tr(), state, new_hover_id_received(None))
    assert state.hover_id is None
    assert _flags(state, "m1") == {(False, False)}
    assert state.decorations == derive_decorations(state)


def test_hover_moves_between_matches() -> None:
    reducer = create_validation_reducer()
    state = reducer(_tr(), _state_with_matches(), new_hover_id_received("m1"))
    state = reducer(_tr(), state, new_hover_id_received("m2"))
    assert _flags(state, "m1") == {(False, False)}
    assert _flags(state, "m2") == {(True, False)}


def test_select_match_flags_decorations() -> None:
    reducer = create_validation_reducer()
    state = reducer(_tr(), _state_with_matches(), select_match("m2"))
    assert state.selected_match == "m2"
    assert _flags(state, "m2") == {(False, True)}
    state = reducer(_tr(), state, select_match(None))
    assert _flags(state, "m2") == {(False, False)}
    assert state.decorations == derive_decorations(state)


def test_hover_unknown_match_adds_nothing() -> None:
    reducer = create_validation_reducer()
    before = _state_with_matches()
    state = reducer(_tr(), before, new_hover_id_received("ghost"))
    assert state.decorations == before.decorations


def test_debug_state_toggles_debug_decorations() -> None:
    reducer = create_validation_reducer()
    state = reducer(_tr(), _state_with_matches(), apply_new_dirtied_ranges([Range(20, 22)]))
    state = reducer(_tr(), state, set_debug_state(True))
    debug = [(d.kind, d.start, d.end) for d in state.decorations if d.kind.is_debug]
    assert debug == [(DecorationKind.DEBUG_DIRTY, 20, 22)]

    state = reducer(_tr(), state, validation_request_for_dirty_ranges("s2", ("grammar",)))
    debug = [(d.kind, d.start, d.end) for d in state.decorations if d.kind.is_debug]
    assert debug == [(DecorationKind.DEBUG_INFLIGHT, 1, 25)]
    assert state.decorations == derive_decorations(state)

    state = reducer(_tr(), state, set_debug_state(False))
    assert not [d for d in state.decorations if d.kind.is_debug]
    assert reducer(_tr(), state, set_debug_state(False)) is state


def test_transaction_maps_matches_and_decorations() -> None:
    reducer = create_validation_reducer()
    state = _state_with_matches()
    tr = TransactionContext(doc(p("The " + TEXT)), (Step.insert(1, 4),))
    state = reducer(tr, state)
    assert [(m.start, m.end) for m in state.current_matches] == [(5, 12), (18, 20)]
    assert state.decorations == derive_decorations(state)


def test_transaction_maps_dirty_ranges_and_queries() -> None:
    reducer = create_validation_reducer()
    state = create_initial_state(PluginConfig(categories=(GRAMMAR,)), debug=True)
    state = reducer(_tr(), state, validation_request_for_document("s1", ("grammar",)))
    state = reducer(_tr(), state, apply_new_dirtied_ranges([Range(10, 12)]))
    tr = TransactionContext(doc(p("The " + TEXT)), (Step.insert(1, 4),))
    state = reducer(tr, state)
    assert state.dirtied_ranges == (Range(14, 16),)
    query = state.block_queries_in_flight["s1"].pending["0-from:1-to:26"].block_query
    assert query.range == Range(5, 30)
    assert state.decorations == derive_decorations(state)


def test_categories_can_be_added_and_removed() -> None:
    reducer = create_validation_reducer()
    state = create_initial_state(PluginConfig(categories=(GRAMMAR,)))
    style = Category("style", "Style", "fb8c00")
    state = reducer(_tr(), state, add_category(style))
    assert state.config.category_ids == ("grammar", "style")
    assert reducer(_tr(), state, add_category(style)) is state
    state = reducer(_tr(), state, remove_category("grammar"))
    assert state.config.category_ids == ("style",)
    assert reducer(_tr(), state, remove_category("grammar")) is state


def test_filter_state_is_stored_without_filter() -> None:
    reducer = create_validation_reducer()
    state = reducer(_tr(), _state_with_matches(), set_filter_state({"hide": ["grammar"]}))
    assert state.filter_state == {"hide": ["grammar"]}
    assert state.filtered_matches is None
