"""
Source adapters: the first link of every chain.

Adapters keep a reference to the caller's container and read it only
while a cursor is advanced. The container is never modified.
"""

from collections.abc import Collection, Iterator, Mapping
from typing import Any, Optional

from .cursor import TEXT_TYPES, Cursor, FilteredCursor, ItemFilter, is_array_like, is_enumerable
from .errors import UnsupportedSourceType
from .lazy import Chain, LinkKind, register_link


class SequenceCursor(Cursor):
    """Walks a sequence; indices are integer positions."""

    def __init__(self, items, item_filter: Optional[ItemFilter] = None):
        self._items = items
        self._filter = item_filter
        self._index = -1

    def set_filter(self, item_filter: Optional[ItemFilter]):
        self._filter = item_filter

    def _in_range(self) -> bool:
        return 0 <= self._index < len(self._items)

    def current(self):
        return self._items[self._index] if self._in_range() else None

    def current_index(self):
        return self._index if self._in_range() else None

    def move_next(self) -> bool:
        while self._index + 1 < len(self._items):
            self._index += 1
            if self._filter is None or self._filter(self._items[self._index], self._index):
                return True
        self._index = len(self._items)
        return False

    def reset(self):
        self._index = -1


class MappingCursor(Cursor):
    """Walks a mapping in its own key order; indices are the keys."""

    def __init__(self, items: Mapping, item_filter: Optional[ItemFilter] = None):
        self._items = items
        self._filter = item_filter
        self._keys = None
        self._index = -1

    def set_filter(self, item_filter: Optional[ItemFilter]):
        self._filter = item_filter

    def _in_range(self) -> bool:
        return self._keys is not None and 0 <= self._index < len(self._keys)

    def current(self):
        return self._items[self._keys[self._index]] if self._in_range() else None

    def current_index(self):
        return self._keys[self._index] if self._in_range() else None

    def move_next(self) -> bool:
        # keys are captured once per cursor so reset() replays the same order
        if self._keys is None:
            self._keys = list(self._items.keys())
        while self._index + 1 < len(self._keys):
            self._index += 1
            if self._filter is None or self._filter(self.current(), self.current_index()):
                return True
        self._index = len(self._keys)
        return False

    def reset(self):
        self._index = -1


class CollectionCursor(Cursor):
    """Walks any re-iterable container; indices are integer positions."""

    def __init__(self, items: Collection, item_filter: Optional[ItemFilter] = None):
        self._items = items
        self._filter = item_filter
        self.reset()

    def set_filter(self, item_filter: Optional[ItemFilter]):
        self._filter = item_filter

    def current(self):
        return self._current

    def current_index(self):
        return self._index if self._has_current else None

    def move_next(self) -> bool:
        if self._iterator is None:
            self._iterator = iter(self._items)
        for item in self._iterator:
            self._position += 1
            if self._filter is None or self._filter(item, self._position):
                self._current = item
                self._index = self._position
                self._has_current = True
                return True
        self._current = None
        self._has_current = False
        return False

    def reset(self):
        self._iterator = None
        self._position = -1
        self._index = -1
        self._current = None
        self._has_current = False


@register_link(LinkKind.SEQUENCE)
class SequenceSource(Chain):
    """Chain over a list, tuple, range or any other non-text sequence."""

    should_save_indices = False

    def __init__(self, source, item_filter: Optional[ItemFilter] = None):
        if not is_array_like(source):
            raise UnsupportedSourceType(source)
        super().__init__()
        self._source = source
        self._item_filter = item_filter

    def _create_cursor(self):
        return SequenceCursor(self._source, self._item_filter)


@register_link(LinkKind.MAPPING)
class MappingSource(Chain):
    """Chain over the values of a mapping, indexed by key."""

    should_save_indices = True

    def __init__(self, source: Mapping, item_filter: Optional[ItemFilter] = None):
        if not isinstance(source, Mapping):
            raise UnsupportedSourceType(source)
        super().__init__()
        self._source = source
        self._item_filter = item_filter

    def _create_cursor(self):
        return MappingCursor(self._source, self._item_filter)


@register_link(LinkKind.COLLECTION)
class CollectionSource(Chain):
    """Chain over sets, dict views and other re-iterable containers."""

    should_save_indices = False

    def __init__(self, source: Collection, item_filter: Optional[ItemFilter] = None):
        if not is_collection(source):
            raise UnsupportedSourceType(source)
        super().__init__()
        self._source = source
        self._item_filter = item_filter

    def _create_cursor(self):
        return CollectionCursor(self._source, self._item_filter)


@register_link(LinkKind.ENUMERABLE)
class EnumerableSource(Chain):
    """Chain delegating to an object that produces its own cursors."""

    def __init__(self, source: Any, item_filter: Optional[ItemFilter] = None,
                 should_save_indices: bool = True):
        if not is_enumerable(source):
            raise UnsupportedSourceType(source)
        super().__init__()
        self._source = source
        self._item_filter = item_filter
        self._should_save_indices = should_save_indices

    @property
    def should_save_indices(self) -> bool:
        return self._should_save_indices

    def _create_cursor(self):
        cursor = self._source.get_cursor()
        if self._item_filter is not None:
            return FilteredCursor(cursor, self._item_filter)
        return cursor


def is_collection(value: Any) -> bool:
    """Re-iterable containers: excludes one-shot iterators and text."""
    return (
        isinstance(value, Collection)
        and not isinstance(value, (Iterator, Mapping) + TEXT_TYPES)
    )
