"""Tests for parsing replay scripts into actions."""

from __future__ import annotations

from pathlib import Path

import pytest

from prosecheck.document import Range
from prosecheck.io import load_script, parse_actions
from prosecheck.state import Category, PluginConfig, TextSuggestion, WikiSuggestion
from prosecheck.state.actions import (
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
from prosecheck.utils.errors import ScriptError

CONFIG = PluginConfig(categories=(Category("grammar", "Grammar", "e53935"),))

SCRIPT = """
actions:
  - type: apply_new_dirtied_ranges
    ranges: [[5, 10], {start: 1, end: 1}]
  - type: validation_request_for_document
    validation_set_id: doc
  - type: validation_request_for_dirty_ranges
    validation_set_id: s1
    category_ids: [grammar]
  - type: add_category
    id: tone
    name: Tone
    colour: "00ff00"
  - type: validation_request_success
    validation_set_id: s1
    block_results:
      - block_query_id: "0-from:1-to:25"
        start: 1
        end: 25
        matches:
          - match_id: m1
            start: 1
            end: 8
            category: tone
            annotation: Too formal
            suggestions:
              - {type: text, text: Sample}
              - {type: wiki, text: Ada, title: Ada Lovelace, score: 0.9}
  - type: validation_request_error
    validation_set_id: s1
    validation_id: "0-from:1-to:25"
    message: Too many requests
  - type: new_hover_id_received
    hover_id: m1
  - type: select_match
    match_id: m1
  - type: set_debug_state
    debug: true
  - type: remove_category
    category_id: tone
  - type: set_filter_state
    filter_state: [tone]
"""


def _script(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "script.yml"
    path.write_text(body, encoding="utf-8")
    return path


def test_parse_every_action_type(tmp_path: Path) -> None:
    actions = parse_actions(load_script(_script(tmp_path, SCRIPT)), CONFIG)
    assert [type(a) for a in actions] == [
        ApplyNewDirtiedRanges,
        ValidationRequestForDocument,
        ValidationRequestForDirtyRanges,
        AddCategory,
        ValidationRequestSuccess,
        ValidationRequestError,
        NewHoverIdReceived,
        SelectMatch,
        SetDebugState,
        RemoveCategory,
        SetFilterState,
    ]
    dirty = actions[0]
    assert isinstance(dirty, ApplyNewDirtiedRanges)
    assert dirty.ranges == (Range(5, 10), Range(1, 1))

    document = actions[1]
    assert isinstance(document, ValidationRequestForDocument)
    assert document.category_ids == ("grammar",)

    success = actions[4]
    assert isinstance(success, ValidationRequestSuccess)
    result = success.block_results[0]
    assert result.category_ids == ("grammar",)
    match = result.matches[0]
    assert match.category.id == "tone"
    assert match.suggestions == (
        TextSuggestion("Sample"),
        WikiSuggestion("Ada", "Ada Lovelace", 0.9, None),
    )


def test_empty_script(tmp_path: Path) -> None:
    assert load_script(_script(tmp_path, "")) == []


@pytest.mark.parametrize(
    "body",
    [
        "- not a mapping\n",
        "actions: 3\n",
        "actions: [\n",
    ],
)
def test_malformed_scripts(tmp_path: Path, body: str) -> None:
    with pytest.raises(ScriptError):
        load_script(_script(tmp_path, body))


@pytest.mark.parametrize(
    "entry",
    [
        {"type": "explode"},
        {"type": "apply_new_dirtied_ranges"},
        {"type": "apply_new_dirtied_ranges", "ranges": [[10, 5]]},
        {"type": "apply_new_dirtied_ranges", "ranges": ["ab"]},
        {
            "type": "validation_request_success",
            "validation_set_id": "s1",
            "block_results": [
                {
                    "block_query_id": "q",
                    "start": 1,
                    "end": 5,
                    "matches": [
                        {"match_id": "m", "start": 1, "end": 2, "category": "unknown"}
                    ],
                }
            ],
        },
    ],
)
def test_invalid_entries(entry: dict[str, object]) -> None:
    with pytest.raises(ScriptError):
        parse_actions([entry], CONFIG)
