"""Single-owner holder of the engine state for one document session.

:class:`ValidationSession` plays the part of the editor plugin: it owns the
current :class:`~prosecheck.state.models.PluginState`, runs every action
through the reducer, tells subscribers about each new snapshot and, when a
checking service is attached, sends requests for newly pending block queries
and feeds the responses back as actions.  Calls are synchronous; responses are
dispatched in the order the service returns them.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Sequence

from .config import ConfigModel
from .document.base import Node, Range, Step, TransactionContext
from .document.blocks import get_dirtied_ranges_from_transaction, skip_node_types
from .service.base import CheckingService, build_validation_requests, response_to_action
from .state import actions
from .state.filters import FilterMatches
from .state.models import PluginConfig, PluginState, create_initial_state
from .state.reducer import create_validation_reducer
from .state.supersession import IgnoreMatchPredicate, include_all_matches
from .utils.logging import get_logger

logger = get_logger(__name__)

Subscriber = Callable[[PluginState], None]


class ValidationSession:
    """Dispatch actions for one document and keep the latest state."""

    def __init__(
        self,
        doc: Node,
        cfg: ConfigModel,
        *,
        service: CheckingService | None = None,
        filter_matches: FilterMatches | None = None,
        filter_state: object | None = None,
        ignore_match: IgnoreMatchPredicate = include_all_matches,
    ) -> None:
        self._doc = doc
        self._service = service
        self._subscribers: list[Subscriber] = []
        self._reducer = create_validation_reducer(
            skip=skip_node_types(*cfg.skip_node_types),
            filter_matches=filter_matches,
            ignore_match=ignore_match,
        )
        self._state = create_initial_state(
            PluginConfig.from_model(cfg), debug=cfg.debug, filter_state=filter_state
        )

    @property
    def state(self) -> PluginState:
        return self._state

    @property
    def doc(self) -> Node:
        return self._doc

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register ``subscriber`` and return a callable that unregisters it."""

        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def dispatch(self, action: object | None, tr: TransactionContext | None = None) -> PluginState:
        """Run ``action`` through the reducer and publish the new state."""

        if tr is None:
            tr = TransactionContext(self._doc)
        old_state = self._state
        self._doc = tr.doc
        self._state = self._reducer(tr, old_state, action)
        if self._state is not old_state:
            for subscriber in list(self._subscribers):
                subscriber(self._state)
        if self._service is not None:
            self._send_requests(self._service, old_state, self._state)
        return self._state

    def apply_transaction(self, doc: Node, steps: Sequence[Step]) -> PluginState:
        """Move to ``doc`` and mark the ranges touched by ``steps`` dirty."""

        tr = TransactionContext(doc, tuple(steps))
        ranges = get_dirtied_ranges_from_transaction(tr)
        state = self.dispatch(None, tr)
        if not ranges:
            return state
        return self.dispatch(actions.apply_new_dirtied_ranges(ranges))

    def mark_dirty(self, ranges: Iterable[Range]) -> PluginState:
        return self.dispatch(actions.apply_new_dirtied_ranges(ranges))

    def validate_document(self, category_ids: Iterable[str] | None = None) -> str:
        """Queue the whole document for checking and return the set id."""

        set_id = new_validation_set_id()
        self.dispatch(
            actions.validation_request_for_document(set_id, self._categories(category_ids))
        )
        return set_id

    def validate_dirty_ranges(self, category_ids: Iterable[str] | None = None) -> str:
        """Queue the dirty ranges for checking and return the set id."""

        set_id = new_validation_set_id()
        self.dispatch(
            actions.validation_request_for_dirty_ranges(set_id, self._categories(category_ids))
        )
        return set_id

    def _categories(self, category_ids: Iterable[str] | None) -> tuple[str, ...]:
        if category_ids is None:
            return self._state.config.category_ids
        return tuple(category_ids)

    def _send_requests(
        self, service: CheckingService, old_state: PluginState, new_state: PluginState
    ) -> None:
        for request in build_validation_requests(old_state, new_state):
            logger.debug(
                "sending %d block query(ies) for set %s to %s",
                len(request.block_queries),
                request.validation_set_id,
                service.name(),
            )
            for response in service.check(request):
                self.dispatch(response_to_action(response))


def new_validation_set_id() -> str:
    return uuid.uuid4().hex


__all__ = ["Subscriber", "ValidationSession", "new_validation_set_id"]
