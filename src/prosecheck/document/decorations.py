"""Renderer-agnostic decorations and an immutable decoration set.

A :class:`Decoration` is a positional annotation a renderer can turn into a
highlight or a widget.  :class:`DecorationSet` keeps decorations in a canonical
order so two sets holding the same decorations compare equal regardless of the
order they were added in.  Every operation returns a new set.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from prosecheck.utils.ranges import ranges_touch

from .base import Range, TransactionContext


class DecorationKind(Enum):
    """Enumeration of decoration kinds."""

    MATCH = "match"
    MATCH_WIDGET = "match-widget"
    DEBUG_DIRTY = "debug-dirty"
    DEBUG_INFLIGHT = "debug-inflight"

    @property
    def is_debug(self) -> bool:
        return self in (DecorationKind.DEBUG_DIRTY, DecorationKind.DEBUG_INFLIGHT)


@dataclass(slots=True, frozen=True)
class Decoration:
    """Annotation over ``[start, end)``.

    Match decorations carry the owning ``match_id`` and the hover/selection
    flags they were rendered with.  Widgets are zero-length anchors.
    """

    start: int
    end: int
    kind: DecorationKind
    match_id: str | None = None
    category_id: str | None = None
    colour: str | None = None
    is_hovered: bool = False
    is_selected: bool = False

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)

    def sort_key(self) -> tuple[int, int, str, str, str, str, bool, bool]:
        return (
            self.start,
            self.end,
            self.kind.value,
            self.match_id or "",
            self.category_id or "",
            self.colour or "",
            self.is_hovered,
            self.is_selected,
        )

    def mapped(self, tr: TransactionContext) -> "Decoration":
        start = tr.map_position(self.start)
        end = max(start, tr.map_position(self.end))
        if start == self.start and end == self.end:
            return self
        return Decoration(
            start,
            end,
            self.kind,
            self.match_id,
            self.category_id,
            self.colour,
            self.is_hovered,
            self.is_selected,
        )


DecorationPredicate = Callable[[Decoration], bool]


class DecorationSet:
    """Immutable, canonically ordered collection of decorations."""

    __slots__ = ("_items",)

    def __init__(self, decorations: Iterable[Decoration] = ()) -> None:
        self._items: tuple[Decoration, ...] = tuple(
            sorted(decorations, key=Decoration.sort_key)
        )

    @classmethod
    def empty(cls) -> "DecorationSet":
        return _EMPTY

    def __iter__(self) -> Iterator[Decoration]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecorationSet):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"DecorationSet({list(self._items)!r})"

    def add(self, decorations: Iterable[Decoration]) -> "DecorationSet":
        new = tuple(decorations)
        if not new:
            return self
        return DecorationSet(self._items + new)

    def remove_where(self, predicate: DecorationPredicate) -> "DecorationSet":
        kept = [d for d in self._items if not predicate(d)]
        if len(kept) == len(self._items):
            return self
        return DecorationSet(kept)

    def find(
        self,
        start: int | None = None,
        end: int | None = None,
        predicate: DecorationPredicate | None = None,
    ) -> list[Decoration]:
        """Return decorations touching ``[start, end]`` and matching ``predicate``."""

        window: Range | None = None
        if start is not None or end is not None:
            lo = start if start is not None else 0
            hi = end if end is not None else max((d.end for d in self._items), default=lo)
            window = Range(lo, max(lo, hi))
        result: list[Decoration] = []
        for deco in self._items:
            if window is not None and not ranges_touch(deco.range, window):
                continue
            if predicate is not None and not predicate(deco):
                continue
            result.append(deco)
        return result

    def map(self, tr: TransactionContext) -> "DecorationSet":
        """Return the set with every decoration mapped through ``tr``."""

        if not tr.doc_changed or not self._items:
            return self
        return DecorationSet(d.mapped(tr) for d in self._items)


_EMPTY = DecorationSet()


__all__ = ["Decoration", "DecorationKind", "DecorationPredicate", "DecorationSet"]
