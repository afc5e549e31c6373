"""Tests for the session wiring the reducer to a checking service."""

from __future__ import annotations

from collections.abc import Sequence

from prosecheck.config import load_config
from prosecheck.document import Range, Step, code_block, doc, p
from prosecheck.service import (
    CheckingService,
    ValidationFailure,
    ValidationRequest,
    ValidationResponse,
    ValidationSuccess,
)
from prosecheck.session import ValidationSession
from prosecheck.state import BlockResult, Category, Match, PluginState

GRAMMAR = Category("grammar", "Grammar", "e53935")
TEXT = "Example text to validate"


class FirstWordService:
    """Flags the first word of every block as a grammar problem."""

    def __init__(self) -> None:
        self.requests: list[ValidationRequest] = []

    def name(self) -> str:
        return "first-word"

    def check(self, request: ValidationRequest) -> Sequence[ValidationResponse]:
        self.requests.append(request)
        results = []
        for query in request.block_queries:
            word = query.input_string.split(" ")[0]
            match = Match(
                f"{query.id}:first",
                query.start,
                query.start + len(word),
                GRAMMAR,
                "Starts here",
            )
            results.append(
                BlockResult(query.id, query.start, query.end, request.category_ids, (match,))
            )
        return [ValidationSuccess(request.validation_set_id, tuple(results))]


class FailingService:
    def name(self) -> str:
        return "failing"

    def check(self, request: ValidationRequest) -> Sequence[ValidationResponse]:
        return [
            ValidationFailure(request.validation_set_id, q.id, "Service unavailable")
            for q in request.block_queries
        ]


def test_services_satisfy_protocol() -> None:
    assert isinstance(FirstWordService(), CheckingService)
    assert isinstance(FailingService(), CheckingService)


def test_validate_document_round_trip() -> None:
    service = FirstWordService()
    session = ValidationSession(doc(p(TEXT)), load_config(env={}), service=service)
    seen: list[PluginState] = []
    session.subscribe(seen.append)

    set_id = session.validate_document()

    assert len(service.requests) == 1
    request = service.requests[0]
    assert request.validation_set_id == set_id
    assert request.category_ids == ("grammar", "style", "spelling")
    assert [q.id for q in request.block_queries] == ["0-from:1-to:26"]
    state = session.state
    assert [(m.start, m.end) for m in state.current_matches] == [(1, 8)]
    assert dict(state.block_queries_in_flight) == {}
    assert len(seen) == 2


def test_edit_then_validate_dirty_ranges() -> None:
    service = FirstWordService()
    session = ValidationSession(doc(p(TEXT)), load_config(env={}), service=service)
    session.validate_document(["grammar"])

    edited = doc(p("Sample text to validate"))
    state = session.apply_transaction(edited, [Step.replace(1, 8, 6)])
    assert state.current_matches == ()
    assert state.dirtied_ranges == (Range(1, 8),)
    assert state.validation_pending is True
    assert session.doc is edited

    session.validate_dirty_ranges(["grammar"])
    assert [q.input_string for q in service.requests[-1].block_queries] == [
        "Sample text to validate"
    ]
    state = session.state
    assert [(m.start, m.end) for m in state.current_matches] == [(1, 7)]
    assert state.dirtied_ranges == ()
    assert state.validation_pending is False


def test_failures_redirty_blocks() -> None:
    session = ValidationSession(
        doc(p(TEXT)), load_config(env={}), service=FailingService()
    )
    session.validate_document()
    state = session.state
    assert state.error == "Service unavailable"
    assert state.dirtied_ranges == (Range(1, 26),)
    assert dict(state.block_queries_in_flight) == {}


def test_skip_node_types_from_config() -> None:
    service = FirstWordService()
    session = ValidationSession(
        doc(p("abc"), code_block("x = 1")), load_config(env={}), service=service
    )
    session.validate_document()
    assert [q.input_string for q in service.requests[0].block_queries] == ["abc"]


def test_unsubscribe_and_no_service() -> None:
    session = ValidationSession(doc(p(TEXT)), load_config(env={}))
    seen: list[PluginState] = []
    unsubscribe = session.subscribe(seen.append)
    session.mark_dirty([Range(2, 4)])
    unsubscribe()
    session.validate_dirty_ranges()
    assert len(seen) == 1
    assert session.state.block_queries_in_flight
    assert session.state.dirtied_ranges == ()


def test_transaction_without_steps_changes_nothing() -> None:
    session = ValidationSession(doc(p(TEXT)), load_config(env={}))
    before = session.state
    assert session.apply_transaction(session.doc, []) is before
