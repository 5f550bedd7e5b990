"""
Chain base class and the registry of link kinds.

A chain is a linked list of immutable links. Each link holds a reference
to its predecessor plus the parameters of one operation; nothing is read
from the source until somebody advances a cursor. The fluent methods on
``Chain`` look the concrete link class up by ``LinkKind`` so the base
class never imports its own subclasses.
"""

import logging
from abc import abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Type

from .cursor import Cursor, Enumerable
from .models import ValueShape, get_settings

logger = logging.getLogger(__name__)

_MISSING = object()


class LinkKind(str, Enum):
    """Tags of every concrete chain link."""
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    COLLECTION = "collection"
    ENUMERABLE = "enumerable"
    MAPPED = "mapped"
    FILTERED = "filtered"
    FLATTENED = "flattened"
    GROUPED = "grouped"
    SORTED = "sorted"
    UNIQUELY = "uniquely"
    ZIPPED = "zipped"
    CONCATENATED = "concatenated"
    REVERSED = "reversed"
    SLICED = "sliced"
    COUNTED = "counted"


LINK_REGISTRY: Dict[LinkKind, Type["Chain"]] = {}


def register_link(kind: LinkKind):
    """Class decorator binding a Chain subclass to its link kind."""
    def decorator(cls):
        cls.kind = kind
        LINK_REGISTRY[kind] = cls
        logger.debug(f"Registered chain link: {kind.value} -> {cls.__name__}")
        return cls
    return decorator


def get_link_class(kind: LinkKind) -> Type["Chain"]:
    try:
        return LINK_REGISTRY[kind]
    except KeyError:
        raise LookupError(f"No chain link registered for kind: {kind.value}") from None


class Chain(Enumerable):
    """
    Abstract chain link.

    Fluent methods return new links and never touch the receiver. Terminal
    methods (value, count, reduce, first, last, ...) drive a fresh cursor
    to completion. A link holds no per-traversal state, so one chain can
    be traversed any number of times.
    """

    kind: Optional[LinkKind] = None

    def __init__(self, previous: Optional["Chain"] = None):
        self._previous = previous

    @property
    def previous(self) -> Optional["Chain"]:
        return self._previous

    @property
    def should_save_indices(self) -> bool:
        """Whether indices produced by this link are meaningful keys rather than positions."""
        if self._previous is None:
            return True
        return self._previous.should_save_indices

    def get_cursor(self) -> Cursor:
        cursor = self._create_cursor()
        if get_settings().trace_cursors:
            logger.debug(f"Created {type(cursor).__name__} for {self!r}")
        return cursor

    @abstractmethod
    def _create_cursor(self) -> Cursor:
        """Build a fresh cursor for this link."""

    def _link(self, kind: LinkKind, *args, **kwargs) -> "Chain":
        return get_link_class(kind)(self, *args, **kwargs)

    # --------- chainable operations (lazy) ----------
    def map(self, callback: Callable[[Any, Any], Any]) -> "Chain":
        return self._link(LinkKind.MAPPED, callback)

    def filter(self, predicate: Callable[[Any, Any], bool]) -> "Chain":
        return self._link(LinkKind.FILTERED, predicate)

    def reject(self, predicate: Callable[[Any, Any], bool]) -> "Chain":
        """Keep the elements the predicate rejects."""
        return self.filter(lambda item, index: not predicate(item, index))

    def flatten(self) -> "Chain":
        return self._link(LinkKind.FLATTENED)

    def group(self, key, value: Optional[Callable[[Any], Any]] = None) -> "Chain":
        """
        Group elements by key in first-occurrence order.

        The resulting chain is indexed by group key; every element is the
        list of (optionally value-extracted) members of that group.
        """
        return self._link(LinkKind.GROUPED, key, value)

    def sort(self, compare: Optional[Callable[[Any, Any], int]] = None, key=None) -> "Chain":
        return self._link(LinkKind.SORTED, compare, key)

    def unique(self, id_extractor: Optional[Callable[[Any, Any], Any]] = None) -> "Chain":
        return self._link(LinkKind.UNIQUELY, id_extractor)

    def union(self, *collections) -> "Chain":
        return self.concat(*collections).unique()

    def zip(self, *collections) -> "Chain":
        return self._link(LinkKind.ZIPPED, collections)

    def concat(self, *collections) -> "Chain":
        from .factory import factory
        return self._link(LinkKind.CONCATENATED, [factory(c) for c in collections])

    def reverse(self) -> "Chain":
        return self._link(LinkKind.REVERSED)

    def slice(self, begin: int = 0, end: Optional[int] = None) -> "Chain":
        return self._link(LinkKind.SLICED, begin, end)

    # --------- terminal operations (force evaluation) ----------
    def count(self, key=None):
        """
        Count elements.

        Without a key this is terminal and returns an int. With a key
        (callable or item key) it returns a chain indexed by key whose
        elements are the number of occurrences of each key.
        """
        counted = self._link(LinkKind.COUNTED, key)
        if key is None:
            return counted.first()
        return counted

    def first(self, n: Optional[int] = None):
        if n is not None:
            return self.slice(0, n)
        cursor = self.get_cursor()
        return cursor.current() if cursor.move_next() else None

    def last(self, n: Optional[int] = None):
        if n is not None:
            return self.reverse().slice(0, n).reverse()
        last_item = None
        for item in self:
            last_item = item
        return last_item

    def each(self, callback: Callable[[Any, Any], Any]) -> None:
        for index, item in self.items():
            callback(item, index)

    def reduce(self, callback: Callable[[Any, Any, Any], Any], initial=_MISSING):
        """Fold elements left to right with callback(accumulator, item, index)."""
        return _fold(self.items(), callback, initial)

    def reduce_right(self, callback: Callable[[Any, Any, Any], Any], initial=_MISSING):
        """Fold elements right to left with callback(accumulator, item, index)."""
        return _fold(reversed(list(self.items())), callback, initial)

    def value(self, shape=None):
        """
        Materialize the chain.

        ``shape`` is a ValueShape (or its name): "sequence" collects the
        elements into a list, "mapping" collects index -> element into a
        dict. Any other callable is invoked with the chain itself, e.g.
        ``value(tuple)``.
        """
        if shape is None:
            shape = get_settings().default_shape
        if callable(shape) and not isinstance(shape, (ValueShape, str)):
            return shape(self)
        shape = ValueShape(shape)
        if shape is ValueShape.MAPPING:
            return self.to_dict()
        return self.to_list()

    def to_list(self) -> list:
        return list(self)

    def to_dict(self) -> dict:
        return dict(self.items())

    # --------- iterator protocol ----------
    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Lazily yield (index, item) pairs from a fresh cursor."""
        yield from self.get_cursor().pairs()

    def __iter__(self):
        cursor = self.get_cursor()
        while cursor.move_next():
            yield cursor.current()

    def __repr__(self):
        kind = self.kind.value if self.kind else None
        return f"<{type(self).__name__} kind={kind}>"


def _fold(pairs, callback, initial):
    accumulator = initial
    for index, item in pairs:
        if accumulator is _MISSING:
            accumulator = item
            continue
        accumulator = callback(accumulator, item, index)
    if accumulator is _MISSING:
        raise TypeError("reduce() of empty chain with no initial value")
    return accumulator
