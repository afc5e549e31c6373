"""Actions accepted by the validation reducer.

Each action is a frozen dataclass; the lower-case functions are the creators
callers are expected to use.  The reducer treats any other object as an
unknown action and returns the state it was given.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from prosecheck.document.base import Range

from .models import BlockResult, Category


@dataclass(slots=True, frozen=True)
class ApplyNewDirtiedRanges:
    ranges: tuple[Range, ...]


@dataclass(slots=True, frozen=True)
class ValidationRequestForDocument:
    validation_set_id: str
    category_ids: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class ValidationRequestForDirtyRanges:
    validation_set_id: str
    category_ids: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class ValidationRequestSuccess:
    validation_set_id: str
    block_results: tuple[BlockResult, ...]


@dataclass(slots=True, frozen=True)
class ValidationRequestError:
    validation_set_id: str
    validation_id: str
    message: str


@dataclass(slots=True, frozen=True)
class SelectMatch:
    match_id: str | None


@dataclass(slots=True, frozen=True)
class NewHoverIdReceived:
    hover_id: str | None
    hover_info: object | None = None


@dataclass(slots=True, frozen=True)
class SetDebugState:
    debug: bool


@dataclass(slots=True, frozen=True)
class AddCategory:
    category: Category


@dataclass(slots=True, frozen=True)
class RemoveCategory:
    category_id: str


@dataclass(slots=True, frozen=True)
class SetFilterState:
    filter_state: object | None


Action = Union[
    ApplyNewDirtiedRanges,
    ValidationRequestForDocument,
    ValidationRequestForDirtyRanges,
    ValidationRequestSuccess,
    ValidationRequestError,
    SelectMatch,
    NewHoverIdReceived,
    SetDebugState,
    AddCategory,
    RemoveCategory,
    SetFilterState,
]


# ---------------------------------------------------------------------------
# Action creators
# ---------------------------------------------------------------------------


def apply_new_dirtied_ranges(ranges: Iterable[Range]) -> ApplyNewDirtiedRanges:
    return ApplyNewDirtiedRanges(tuple(ranges))


def validation_request_for_document(
    validation_set_id: str, category_ids: Iterable[str]
) -> ValidationRequestForDocument:
    return ValidationRequestForDocument(validation_set_id, tuple(category_ids))


def validation_request_for_dirty_ranges(
    validation_set_id: str, category_ids: Iterable[str]
) -> ValidationRequestForDirtyRanges:
    return ValidationRequestForDirtyRanges(validation_set_id, tuple(category_ids))


def validation_request_success(
    validation_set_id: str, block_results: Iterable[BlockResult]
) -> ValidationRequestSuccess:
    return ValidationRequestSuccess(validation_set_id, tuple(block_results))


def validation_request_error(
    validation_set_id: str, validation_id: str, message: str
) -> ValidationRequestError:
    return ValidationRequestError(validation_set_id, validation_id, message)


def select_match(match_id: str | None) -> SelectMatch:
    return SelectMatch(match_id)


def new_hover_id_received(
    hover_id: str | None, hover_info: object | None = None
) -> NewHoverIdReceived:
    return NewHoverIdReceived(hover_id, hover_info)


def set_debug_state(debug: bool) -> SetDebugState:
    return SetDebugState(debug)


def add_category(category: Category) -> AddCategory:
    return AddCategory(category)


def remove_category(category_id: str) -> RemoveCategory:
    return RemoveCategory(category_id)


def set_filter_state(filter_state: object | None) -> SetFilterState:
    return SetFilterState(filter_state)


__all__ = [
    "Action",
    "AddCategory",
    "ApplyNewDirtiedRanges",
    "NewHoverIdReceived",
    "RemoveCategory",
    "SelectMatch",
    "SetDebugState",
    "SetFilterState",
    "ValidationRequestError",
    "ValidationRequestForDirtyRanges",
    "ValidationRequestForDocument",
    "ValidationRequestSuccess",
    "add_category",
    "apply_new_dirtied_ranges",
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
