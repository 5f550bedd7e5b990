"""Zipped link: positional pairing of the chain with other collections."""

from typing import Any, Dict, Sequence

from .cursor import Cursor, is_array_like, is_enumerable
from .errors import UnsupportedZipArgument
from .lazy import Chain, LinkKind, register_link


class ZippedCursor(Cursor):
    """
    Drives the chain's own cursor and reads the same position from every
    other collection.

    Sequences are read by index; enumerables get a parallel cursor created
    on first use. Missing positions yield None. Iteration ends with the
    chain's own cursor, whatever the other lengths are.
    """

    def __init__(self, previous: Chain, collections: Sequence[Any]):
        self._cursor = previous.get_cursor()
        self._collections = collections
        self._secondary: Dict[int, Cursor] = {}
        self._index = -1
        self._current = None
        self._on_row = False

    def current(self):
        return self._current

    def current_index(self):
        return self._index if self._index >= 0 and self._on_row else None

    def _read(self, position: int, collection) -> Any:
        if is_enumerable(collection):
            cursor = self._secondary.get(position)
            if cursor is None:
                cursor = self._secondary[position] = collection.get_cursor()
            return cursor.current() if cursor.move_next() else None
        return collection[self._index] if self._index < len(collection) else None

    def move_next(self) -> bool:
        if not self._cursor.move_next():
            self._current = None
            self._on_row = False
            return False
        self._index += 1
        row = [self._cursor.current()]
        for position, collection in enumerate(self._collections):
            row.append(self._read(position, collection))
        self._current = row
        self._on_row = True
        return True

    def reset(self):
        self._cursor.reset()
        for cursor in self._secondary.values():
            cursor.reset()
        self._index = -1
        self._current = None
        self._on_row = False


@register_link(LinkKind.ZIPPED)
class Zipped(Chain):
    """Each element is a list [item, other_1[i], other_2[i], ...]; indices are renumbered."""

    should_save_indices = False

    def __init__(self, previous: Chain, collections: Sequence[Any]):
        super().__init__(previous)
        for position, collection in enumerate(collections):
            if not (is_enumerable(collection) or is_array_like(collection)):
                raise UnsupportedZipArgument(position, collection)
        self._collections = tuple(collections)

    def _create_cursor(self):
        return ZippedCursor(self._previous, self._collections)
