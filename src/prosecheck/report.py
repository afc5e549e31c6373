"""JSON-friendly summaries of engine state.

The command line prints these summaries after replaying a script.  Only plain
``dict``/``list``/``str``/``int``/``float``/``bool`` values are produced so the
result can be passed straight to :func:`json.dumps`.
"""

from __future__ import annotations

from typing import Any

from .document.base import Block, Node
from .document.decorations import Decoration
from .state.models import Match, PluginState
from .state.selectors import select_all_auto_fixable_matches, select_percent_remaining

__all__ = ["block_to_dict", "build_state_summary", "decoration_to_dict", "match_to_dict"]


def block_to_dict(block: Block) -> dict[str, Any]:
    return {"id": block.id, "from": block.start, "to": block.end, "text": block.text}


def match_to_dict(match: Match, doc: Node | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "match_id": match.match_id,
        "from": match.start,
        "to": match.end,
        "category": match.category.id,
        "annotation": match.annotation,
        "suggestions": [s.text for s in match.suggestions],
    }
    if doc is not None:
        data["text"] = doc.text_between(match.start, match.end)
    return data


def decoration_to_dict(decoration: Decoration) -> dict[str, Any]:
    data: dict[str, Any] = {
        "from": decoration.start,
        "to": decoration.end,
        "kind": decoration.kind.value,
    }
    if decoration.match_id is not None:
        data["match_id"] = decoration.match_id
    if decoration.is_hovered:
        data["hovered"] = True
    if decoration.is_selected:
        data["selected"] = True
    return data


def build_state_summary(state: PluginState, doc: Node | None = None) -> dict[str, Any]:
    """Return a serialisable snapshot of ``state``.

    With ``doc`` every match also carries the text it covers.
    """

    in_flight = {
        set_id: {
            "total": query_set.total,
            "pending": sorted(query_set.pending),
        }
        for set_id, query_set in sorted(state.block_queries_in_flight.items())
    }
    return {
        "validation_pending": state.validation_pending,
        "debug": state.debug,
        "error": state.error,
        "selected_match": state.selected_match,
        "hover_id": state.hover_id,
        "percent_remaining": select_percent_remaining(state),
        "dirtied_ranges": [[r.start, r.end] for r in state.dirtied_ranges],
        "block_queries_in_flight": in_flight,
        "current_matches": [match_to_dict(m, doc) for m in state.current_matches],
        "auto_fixable": [m.match_id for m in select_all_auto_fixable_matches(state)],
        "decorations": [decoration_to_dict(d) for d in state.decorations],
    }
