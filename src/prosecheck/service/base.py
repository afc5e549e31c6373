"""Checking-service protocol and the messages exchanged with it.

The engine is agnostic to transport.  A request carries the block queries of
one validation set; a service answers with any number of responses, each either
a :class:`ValidationSuccess` holding block results or a
:class:`ValidationFailure` naming the single block query that failed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

from prosecheck.state.actions import (
    ValidationRequestError,
    ValidationRequestSuccess,
    validation_request_error,
    validation_request_success,
)
from prosecheck.state.models import BlockQuery, BlockResult, PluginState
from prosecheck.state.selectors import select_new_block_query_in_flight


@dataclass(slots=True, frozen=True)
class ValidationRequest:
    validation_set_id: str
    category_ids: tuple[str, ...]
    block_queries: tuple[BlockQuery, ...]


@dataclass(slots=True, frozen=True)
class ValidationSuccess:
    validation_set_id: str
    block_results: tuple[BlockResult, ...]


@dataclass(slots=True, frozen=True)
class ValidationFailure:
    validation_set_id: str
    validation_id: str
    message: str


ValidationResponse = Union[ValidationSuccess, ValidationFailure]


@runtime_checkable
class CheckingService(Protocol):
    """Protocol for services that check block queries."""

    def name(self) -> str:
        """Return a short, stable identifier for the service."""

        ...

    def check(self, request: ValidationRequest) -> Sequence[ValidationResponse]:
        """Check every block query of ``request``.

        Implementations report per-query failures as :class:`ValidationFailure`
        responses rather than raising.
        """

        ...


def build_validation_requests(
    old_state: PluginState, new_state: PluginState
) -> list[ValidationRequest]:
    """Return requests for the block queries that became pending in ``new_state``.

    Queries already pending in ``old_state`` under the same set are not sent
    again.
    """

    requests: list[ValidationRequest] = []
    for new_set in select_new_block_query_in_flight(old_state, new_state):
        previous = old_state.block_queries_in_flight.get(new_set.validation_set_id)
        already_sent = set(previous.pending) if previous is not None else set()
        queries = tuple(
            entry.block_query
            for query_id, entry in new_set.block_query_set.pending.items()
            if query_id not in already_sent
        )
        if queries:
            requests.append(
                ValidationRequest(
                    new_set.validation_set_id, new_set.block_query_set.category_ids, queries
                )
            )
    return requests


def response_to_action(
    response: ValidationResponse,
) -> ValidationRequestSuccess | ValidationRequestError:
    """Return the reducer action that delivers ``response``."""

    if isinstance(response, ValidationFailure):
        return validation_request_error(
            response.validation_set_id, response.validation_id, response.message
        )
    return validation_request_success(response.validation_set_id, response.block_results)


__all__ = [
    "CheckingService",
    "ValidationFailure",
    "ValidationRequest",
    "ValidationResponse",
    "ValidationSuccess",
    "build_validation_requests",
    "response_to_action",
]
