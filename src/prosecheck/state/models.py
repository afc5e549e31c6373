"""Data model of the validation engine.

Every type here is a frozen dataclass.  Collections held by
:class:`PluginState` are tuples or dicts that are never mutated after
construction: transitions build new containers and reuse the untouched ones, so
consecutive states share structure and any snapshot handed to a reader stays
consistent.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Union

from prosecheck.document.base import Block, Range
from prosecheck.document.decorations import DecorationSet

if TYPE_CHECKING:  # pragma: no cover - typing only
    from prosecheck.config.schema import ConfigModel


@dataclass(slots=True, frozen=True)
class Category:
    """Classification of checks.  Immutable reference data."""

    id: str
    name: str
    colour: str


class SuggestionKind(Enum):
    """Tags of the suggestion union."""

    TEXT = "TEXT_SUGGESTION"
    WIKI = "WIKI_SUGGESTION"


@dataclass(slots=True, frozen=True)
class TextSuggestion:
    """Plain replacement text."""

    text: str
    kind: ClassVar[SuggestionKind] = SuggestionKind.TEXT


@dataclass(slots=True, frozen=True)
class WikiSuggestion:
    """Replacement backed by a reference entry, e.g. a named entity."""

    text: str
    title: str
    score: float | None = None
    link: str | None = None
    kind: ClassVar[SuggestionKind] = SuggestionKind.WIKI


Suggestion = Union[TextSuggestion, WikiSuggestion]


@dataclass(slots=True, frozen=True)
class Match:
    """A problem reported by the checking service for a range of text."""

    match_id: str
    start: int
    end: int
    category: Category
    annotation: str
    suggestions: tuple[Suggestion, ...] = ()
    input_string: str = ""

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)

    def with_range(self, rng: Range) -> "Match":
        if rng.start == self.start and rng.end == self.end:
            return self
        return Match(
            self.match_id,
            rng.start,
            rng.end,
            self.category,
            self.annotation,
            self.suggestions,
            self.input_string,
        )


@dataclass(slots=True, frozen=True)
class BlockQuery:
    """The exact text and range submitted for checking."""

    id: str
    start: int
    end: int
    input_string: str

    @classmethod
    def from_block(cls, block: Block) -> "BlockQuery":
        return cls(block.id, block.start, block.end, block.text)

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)

    def with_range(self, rng: Range) -> "BlockQuery":
        if rng.start == self.start and rng.end == self.end:
            return self
        return BlockQuery(self.id, rng.start, rng.end, self.input_string)


@dataclass(slots=True, frozen=True)
class BlockResult:
    """Service result for one block query.

    ``category_ids`` are the categories that were requested for the block;
    ``start``/``end`` echo the range of the query the result answers.
    """

    block_query_id: str
    start: int
    end: int
    category_ids: tuple[str, ...]
    matches: tuple[Match, ...] = ()

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)


@dataclass(slots=True, frozen=True)
class PendingBlockQuery:
    """A block query awaiting its result together with its categories."""

    block_query: BlockQuery
    category_ids: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class BlockQuerySet:
    """Progress group for one validation run."""

    total: int
    pending: Mapping[str, PendingBlockQuery]
    category_ids: tuple[str, ...] = ()

    @property
    def pending_count(self) -> int:
        return len(self.pending)


BlockQueriesInFlight = Mapping[str, BlockQuerySet]


@dataclass(slots=True, frozen=True)
class MatchColours:
    default: str = "ffeb3b"
    hovered: str = "ffc107"
    selected: str = "ff9800"
    debug_dirty: str = "f44336"
    debug_inflight: str = "9c27b0"


@dataclass(slots=True, frozen=True)
class PluginConfig:
    """Opaque pass-through configuration carried by the state."""

    categories: tuple[Category, ...] = ()
    match_colours: MatchColours = field(default_factory=MatchColours)

    @classmethod
    def from_model(cls, cfg: "ConfigModel") -> "PluginConfig":
        colours = cfg.match_colours
        return cls(
            categories=tuple(Category(c.id, c.name, c.colour) for c in cfg.categories),
            match_colours=MatchColours(
                default=colours.default,
                hovered=colours.hovered,
                selected=colours.selected,
                debug_dirty=colours.debug_dirty,
                debug_inflight=colours.debug_inflight,
            ),
        )

    @property
    def category_ids(self) -> tuple[str, ...]:
        return tuple(c.id for c in self.categories)


@dataclass(slots=True, frozen=True)
class PluginState:
    """Top-level aggregate produced by the reducer."""

    current_matches: tuple[Match, ...] = ()
    block_queries_in_flight: BlockQueriesInFlight = field(default_factory=dict)
    dirtied_ranges: tuple[Range, ...] = ()
    validation_pending: bool = False
    decorations: DecorationSet = field(default_factory=DecorationSet.empty)
    selected_match: str | None = None
    hover_id: str | None = None
    hover_info: object | None = None
    debug: bool = False
    error: str | None = None
    config: PluginConfig = field(default_factory=PluginConfig)
    filter_state: object | None = None
    filtered_matches: tuple[Match, ...] | None = None

    @property
    def visible_matches(self) -> tuple[Match, ...]:
        """Matches that own decorations: the filtered view when one exists."""

        if self.filtered_matches is not None:
            return self.filtered_matches
        return self.current_matches


def create_initial_state(
    config: PluginConfig | None = None,
    *,
    debug: bool = False,
    filter_state: object | None = None,
) -> PluginState:
    """Return the empty state a document session starts from."""

    return PluginState(
        config=config if config is not None else PluginConfig(),
        debug=debug,
        filter_state=filter_state,
    )


__all__ = [
    "BlockQueriesInFlight",
    "BlockQuery",
    "BlockQuerySet",
    "BlockResult",
    "Category",
    "Match",
    "MatchColours",
    "PendingBlockQuery",
    "PluginConfig",
    "PluginState",
    "Suggestion",
    "SuggestionKind",
    "TextSuggestion",
    "WikiSuggestion",
    "create_initial_state",
]
