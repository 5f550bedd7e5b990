"""
Cursor and Enumerable contracts.

Every chain link and every source adapter speaks these two interfaces.
An ``Enumerable`` hands out fresh ``Cursor`` objects; a ``Cursor`` walks
the elements once and can be rewound with ``reset()``.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Callable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

ItemFilter = Callable[[Any, Any], bool]

TEXT_TYPES = (str, bytes, bytearray)


class Cursor(ABC):
    """
    Stateful iteration handle owned by a single traversal.

    A new cursor is positioned before its first element: ``current()`` and
    ``current_index()`` return None until ``move_next()`` returns True.
    Once ``move_next()`` returns False it keeps returning False until
    ``reset()`` is called, after which the cursor produces the same
    sequence again.

    Advancing the same cursor from two call sites is a precondition
    violation; request one cursor per traversal instead.
    """

    @abstractmethod
    def current(self) -> Any:
        """Element at the current position."""

    @abstractmethod
    def current_index(self) -> Any:
        """Index or key of the current element."""

    @abstractmethod
    def move_next(self) -> bool:
        """Advance to the next element; False once exhausted."""

    @abstractmethod
    def reset(self) -> None:
        """Rewind to the position before the first element."""

    def pairs(self) -> Iterator[Tuple[Any, Any]]:
        """Advance through the remaining elements yielding (index, item)."""
        while self.move_next():
            yield self.current_index(), self.current()


class Enumerable(ABC):
    """
    Capability of producing cursors over one's own elements.

    Collaborators either subclass it or declare support with
    ``Enumerable.register(SomeClass)``.
    """

    @abstractmethod
    def get_cursor(self) -> Cursor:
        """Return a fresh cursor positioned before the first element."""


def is_enumerable(value: Any) -> bool:
    return isinstance(value, Enumerable)


def is_array_like(value: Any) -> bool:
    """Sequences with positional access, text excluded."""
    return isinstance(value, Sequence) and not isinstance(value, TEXT_TYPES)


class FilteredCursor(Cursor):
    """Skips upstream elements rejected by a predicate(item, index)."""

    def __init__(self, cursor: Cursor, predicate: ItemFilter):
        self._cursor = cursor
        self._predicate = predicate
        self._matched = False

    def current(self):
        return self._cursor.current() if self._matched else None

    def current_index(self):
        return self._cursor.current_index() if self._matched else None

    def move_next(self) -> bool:
        while self._cursor.move_next():
            if self._predicate(self._cursor.current(), self._cursor.current_index()):
                self._matched = True
                return True
        self._matched = False
        return False

    def reset(self):
        self._cursor.reset()
        self._matched = False


class IndexedCursor(Cursor):
    """
    Replays a materialized list of (index, item) pairs.

    The pairs are built by ``_load_items()`` on the first ``move_next()``
    and kept for the lifetime of the cursor, so ``reset()`` replays them
    without reading upstream again. Subclasses override ``_load_items()``
    to reorder or regroup what ``_pull()`` returns.
    """

    def __init__(self, previous: Enumerable):
        self._previous = previous
        self._items: Optional[List[Tuple[Any, Any]]] = None
        self._position = -1

    def _pull(self) -> List[Tuple[Any, Any]]:
        return list(self._previous.get_cursor().pairs())

    def _load_items(self) -> List[Tuple[Any, Any]]:
        return self._pull()

    def _get_items(self) -> List[Tuple[Any, Any]]:
        if self._items is None:
            self._items = self._load_items()
            logger.debug(f"{type(self).__name__} materialized {len(self._items)} items")
        return self._items

    def _pair(self) -> Optional[Tuple[Any, Any]]:
        if self._items is not None and 0 <= self._position < len(self._items):
            return self._items[self._position]
        return None

    def current(self):
        pair = self._pair()
        return pair[1] if pair else None

    def current_index(self):
        pair = self._pair()
        return pair[0] if pair else None

    def move_next(self) -> bool:
        items = self._get_items()
        if self._position + 1 >= len(items):
            self._position = len(items)
            return False
        self._position += 1
        return True

    def reset(self):
        self._position = -1
