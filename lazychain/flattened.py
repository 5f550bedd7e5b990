"""Flattened link: depth-first expansion of nested sequences and enumerables."""

from typing import List, Optional

from .cursor import Cursor, is_array_like, is_enumerable
from .lazy import Chain, LinkKind, register_link
from .sources import SequenceCursor


def nested_cursor(item) -> Optional[Cursor]:
    """Cursor over ``item`` if it should be expanded, else None."""
    if is_enumerable(item):
        return item.get_cursor()
    if is_array_like(item):
        return SequenceCursor(item)
    return None


class FlattenedCursor(Cursor):
    """
    Keeps a stack with one cursor per nesting level.

    Nested sequences and enumerables push a new level instead of being
    yielded; an exhausted level is popped. Only atomic elements come out,
    numbered by a flat counter.
    """

    def __init__(self, previous: Chain):
        self._root = previous.get_cursor()
        self._stack: List[Cursor] = [self._root]
        self._current = None
        self._index = -1

    def current(self):
        return self._current

    def current_index(self):
        return self._index if self._index >= 0 and self._stack else None

    def move_next(self) -> bool:
        while self._stack:
            cursor = self._stack[-1]
            if not cursor.move_next():
                self._stack.pop()
                continue
            item = cursor.current()
            nested = nested_cursor(item)
            if nested is not None:
                self._stack.append(nested)
                continue
            self._current = item
            self._index += 1
            return True
        self._current = None
        return False

    def reset(self):
        self._root.reset()
        self._stack = [self._root]
        self._current = None
        self._index = -1


@register_link(LinkKind.FLATTENED)
class Flattened(Chain):
    """Nested sequences and enumerables expanded into one flat sequence."""

    should_save_indices = False

    def _create_cursor(self):
        return FlattenedCursor(self._previous)
