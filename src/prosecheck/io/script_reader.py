"""Replay script reader.

A replay script is a YAML mapping with an ``actions`` list.  Every entry names
the action in ``type`` and carries its fields::

    actions:
      - type: apply_new_dirtied_ranges
        ranges: [[5, 10]]
      - type: validation_request_for_dirty_ranges
        validation_set_id: s1
        category_ids: [grammar]
      - type: validation_request_success
        validation_set_id: s1
        block_results:
          - block_query_id: "0-from:1-to:25"
            start: 1
            end: 25
            category_ids: [grammar]
            matches:
              - match_id: m1
                start: 1
                end: 8
                category: grammar
                annotation: "Consider rephrasing"
                suggestions:
                  - {type: text, text: "An example"}

Match categories are looked up by id among the configured categories; an
unknown id is an error.  ``category_ids`` default to every configured category.
Malformed entries raise :class:`~prosecheck.utils.errors.ScriptError`.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from prosecheck.document.base import Range
from prosecheck.state import actions
from prosecheck.state.models import (
    BlockResult,
    Category,
    Match,
    PluginConfig,
    Suggestion,
    TextSuggestion,
    WikiSuggestion,
)
from prosecheck.utils.errors import InvalidRangeError, ScriptError


def load_script(path: str | os.PathLike[str]) -> list[dict[str, Any]]:
    """Return the raw action entries of the script at ``path``."""

    with Path(path).open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ScriptError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, Mapping) or not isinstance(data.get("actions", []), list):
        raise ScriptError("script must be a mapping with an 'actions' list")
    return list(data.get("actions", []))


def _require(entry: Mapping[str, Any], key: str) -> Any:
    if key not in entry:
        raise ScriptError(f"{entry.get('type', '<untyped>')}: missing '{key}'")
    return entry[key]


def _range(raw: Any) -> Range:
    if isinstance(raw, Mapping):
        raw = (raw.get("start"), raw.get("end"))
    if not isinstance(raw, Sequence) or isinstance(raw, str) or len(raw) != 2:
        raise ScriptError(f"invalid range {raw!r}")
    try:
        return Range(int(raw[0]), int(raw[1]))
    except (TypeError, ValueError, InvalidRangeError) as exc:
        raise ScriptError(f"invalid range {raw!r}") from exc


def _suggestion(raw: Mapping[str, Any]) -> Suggestion:
    kind = raw.get("type", "text")
    if kind == "text":
        return TextSuggestion(str(_require(raw, "text")))
    if kind == "wiki":
        score = raw.get("score")
        return WikiSuggestion(
            text=str(_require(raw, "text")),
            title=str(_require(raw, "title")),
            score=float(score) if score is not None else None,
            link=raw.get("link"),
        )
    raise ScriptError(f"unknown suggestion type {kind!r}")


def _match(raw: Mapping[str, Any], categories: Mapping[str, Category]) -> Match:
    category_id = str(_require(raw, "category"))
    if category_id not in categories:
        raise ScriptError(f"unknown category {category_id!r}")
    rng = _range((_require(raw, "start"), _require(raw, "end")))
    return Match(
        match_id=str(_require(raw, "match_id")),
        start=rng.start,
        end=rng.end,
        category=categories[category_id],
        annotation=str(raw.get("annotation", "")),
        suggestions=tuple(_suggestion(s) for s in raw.get("suggestions", [])),
        input_string=str(raw.get("input_string", "")),
    )


def _block_result(
    raw: Mapping[str, Any], categories: Mapping[str, Category], default_ids: tuple[str, ...]
) -> BlockResult:
    rng = _range((_require(raw, "start"), _require(raw, "end")))
    return BlockResult(
        block_query_id=str(_require(raw, "block_query_id")),
        start=rng.start,
        end=rng.end,
        category_ids=tuple(raw.get("category_ids", default_ids)),
        matches=tuple(_match(m, categories) for m in raw.get("matches", [])),
    )


def parse_actions(entries: Sequence[Mapping[str, Any]], config: PluginConfig) -> list[object]:
    """Turn raw script entries into reducer actions."""

    categories = {c.id: c for c in config.categories}
    default_ids = config.category_ids

    def category_ids(entry: Mapping[str, Any]) -> tuple[str, ...]:
        return tuple(str(c) for c in entry.get("category_ids", default_ids))

    builders: dict[str, Callable[[Mapping[str, Any]], object]] = {
        "apply_new_dirtied_ranges": lambda e: actions.apply_new_dirtied_ranges(
            _range(r) for r in _require(e, "ranges")
        ),
        "validation_request_for_document": lambda e: actions.validation_request_for_document(
            str(_require(e, "validation_set_id")), category_ids(e)
        ),
        "validation_request_for_dirty_ranges": lambda e: (
            actions.validation_request_for_dirty_ranges(
                str(_require(e, "validation_set_id")), category_ids(e)
            )
        ),
        "validation_request_success": lambda e: actions.validation_request_success(
            str(_require(e, "validation_set_id")),
            (_block_result(r, categories, default_ids) for r in e.get("block_results", [])),
        ),
        "validation_request_error": lambda e: actions.validation_request_error(
            str(_require(e, "validation_set_id")),
            str(_require(e, "validation_id")),
            str(_require(e, "message")),
        ),
        "select_match": lambda e: actions.select_match(e.get("match_id")),
        "new_hover_id_received": lambda e: actions.new_hover_id_received(
            e.get("hover_id"), e.get("hover_info")
        ),
        "set_debug_state": lambda e: actions.set_debug_state(bool(_require(e, "debug"))),
        "add_category": lambda e: actions.add_category(
            Category(str(_require(e, "id")), str(_require(e, "name")), str(_require(e, "colour")))
        ),
        "remove_category": lambda e: actions.remove_category(str(_require(e, "category_id"))),
        "set_filter_state": lambda e: actions.set_filter_state(e.get("filter_state")),
    }

    parsed: list[object] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise ScriptError(f"action #{index} is not a mapping")
        kind = entry.get("type")
        builder = builders.get(str(kind))
        if builder is None:
            raise ScriptError(f"action #{index}: unknown type {kind!r}")
        try:
            action = builder(entry)
        except ScriptError as exc:
            raise ScriptError(f"action #{index}: {exc}") from exc
        if kind == "add_category":
            category = action.category  # type: ignore[attr-defined]
            categories[category.id] = category
        parsed.append(action)
    return parsed


__all__ = ["load_script", "parse_actions"]
