"""Single-pass and materializing links that need no dedicated algorithm module."""

import logging
from operator import itemgetter
from typing import Any, Callable, Dict, List, Optional, Tuple

from .cursor import Cursor, FilteredCursor, IndexedCursor
from .lazy import Chain, LinkKind, register_link
from .models import SliceBounds
from .uniquely import is_value_key

logger = logging.getLogger(__name__)


def key_getter(key) -> Callable[[Any], Any]:
    """Callables are used as is; anything else is looked up as item[key]."""
    if callable(key):
        return key
    return itemgetter(key)


# ---------- map / filter ----------

class MappedCursor(Cursor):
    def __init__(self, previous: Chain, callback):
        self._cursor = previous.get_cursor()
        self._callback = callback
        self._current = None

    def current(self):
        return self._current

    def current_index(self):
        return self._cursor.current_index()

    def move_next(self) -> bool:
        if self._cursor.move_next():
            self._current = self._callback(self._cursor.current(), self._cursor.current_index())
            return True
        self._current = None
        return False

    def reset(self):
        self._cursor.reset()
        self._current = None


@register_link(LinkKind.MAPPED)
class Mapped(Chain):
    """Replaces each element with callback(item, index); indices pass through."""

    def __init__(self, previous: Chain, callback: Callable[[Any, Any], Any]):
        super().__init__(previous)
        self._callback = callback

    def _create_cursor(self):
        return MappedCursor(self._previous, self._callback)


@register_link(LinkKind.FILTERED)
class Filtered(Chain):
    """Keeps elements for which predicate(item, index) is truthy; indices pass through."""

    def __init__(self, previous: Chain, predicate: Callable[[Any, Any], bool]):
        super().__init__(previous)
        self._predicate = predicate

    def _create_cursor(self):
        return FilteredCursor(self._previous.get_cursor(), self._predicate)


# ---------- concat ----------

class ConcatenatedCursor(Cursor):
    def __init__(self, previous: Chain, sources: List[Chain]):
        self._cursors = [previous.get_cursor()] + [source.get_cursor() for source in sources]
        self._active = 0
        self._count = 0
        self._current = None
        self._current_index = None

    def current(self):
        return self._current

    def current_index(self):
        return self._current_index

    def move_next(self) -> bool:
        while self._active < len(self._cursors):
            cursor = self._cursors[self._active]
            if cursor.move_next():
                self._current = cursor.current()
                self._current_index = self._count
                self._count += 1
                return True
            self._active += 1
        self._current = None
        self._current_index = None
        return False

    def reset(self):
        for cursor in self._cursors:
            cursor.reset()
        self._active = 0
        self._count = 0
        self._current = None
        self._current_index = None


@register_link(LinkKind.CONCATENATED)
class Concatenated(Chain):
    """Appends other chains after this one; indices are renumbered from 0."""

    should_save_indices = False

    def __init__(self, previous: Chain, sources: List[Chain]):
        super().__init__(previous)
        self._sources = list(sources)

    def _create_cursor(self):
        return ConcatenatedCursor(self._previous, self._sources)


# ---------- group / count ----------

class KeyBuckets:
    """
    Insertion-ordered buckets for group keys.

    Value-like keys are matched by type and value through a dict, any
    other key (lists, dicts, objects) by identity, so keys need not be
    hashable. Buckets come out in first-occurrence order.
    """

    def __init__(self, new_bucket: Callable[[], Any]):
        self._new_bucket = new_bucket
        self._entries: List[Tuple[Any, Any]] = []
        self._positions: Dict[Any, int] = {}

    def _find(self, key) -> Optional[int]:
        if is_value_key(key):
            return self._positions.get((type(key), key))
        for position, (seen, _) in enumerate(self._entries):
            if seen is key:
                return position
        return None

    def get(self, key):
        """Return the bucket for key, creating it on first sight."""
        position = self._find(key)
        if position is None:
            position = len(self._entries)
            self._entries.append((key, self._new_bucket()))
            if is_value_key(key):
                self._positions[(type(key), key)] = position
        return self._entries[position][1]

    def items(self) -> List[Tuple[Any, Any]]:
        return list(self._entries)


class GroupedCursor(IndexedCursor):
    def __init__(self, previous: Chain, key, value):
        super().__init__(previous)
        self._key = key
        self._value = value

    def _load_items(self):
        groups = KeyBuckets(list)
        for _, item in self._pull():
            member = self._value(item) if self._value else item
            groups.get(self._key(item)).append(member)
        return groups.items()


@register_link(LinkKind.GROUPED)
class Grouped(Chain):
    """Indexed by group key, each element is the list of members sharing that key."""

    should_save_indices = True

    def __init__(self, previous: Chain, key, value: Optional[Callable[[Any], Any]] = None):
        super().__init__(previous)
        self._key = key_getter(key)
        self._value = key_getter(value) if value is not None else None

    def _create_cursor(self):
        return GroupedCursor(self._previous, self._key, self._value)


class CountedCursor(IndexedCursor):
    def __init__(self, previous: Chain, key):
        super().__init__(previous)
        self._key = key

    def _load_items(self):
        if self._key is None:
            total = 0
            cursor = self._previous.get_cursor()
            while cursor.move_next():
                total += 1
            return [(0, total)]
        counts = KeyBuckets(lambda: [0])
        for _, item in self._pull():
            counts.get(self._key(item))[0] += 1
        return [(key, count[0]) for key, count in counts.items()]


@register_link(LinkKind.COUNTED)
class Counted(Chain):
    """
    Number of elements, either in total or per key.

    Without a key the chain has a single element (the total count) at
    index 0. With a key it is indexed by key in first-occurrence order.
    """

    def __init__(self, previous: Chain, key=None):
        super().__init__(previous)
        self._key = key_getter(key) if key is not None else None

    @property
    def should_save_indices(self) -> bool:
        return self._key is not None

    def _create_cursor(self):
        return CountedCursor(self._previous, self._key)


# ---------- reverse / slice ----------

class ReversedCursor(IndexedCursor):
    def _load_items(self):
        items = self._pull()
        items.reverse()
        if self._previous.should_save_indices:
            return items
        return [(position, item) for position, (_, item) in enumerate(items)]


@register_link(LinkKind.REVERSED)
class Reversed(Chain):
    """
    Yields upstream elements back to front.

    Keyed upstreams keep each element's key; positional upstreams are
    renumbered so index 0 is the former last element.
    """

    def _create_cursor(self):
        return ReversedCursor(self._previous)


class SlicedCursor(Cursor):
    def __init__(self, previous: Chain, bounds: SliceBounds):
        self._cursor = previous.get_cursor()
        self._bounds = bounds
        self._resolved = None
        self._position = -1
        self._inside = False
        self._exhausted = False

    def _resolve(self):
        if self._resolved is None:
            begin, end = self._bounds.begin, self._bounds.end
            if self._bounds.needs_count:
                total = 0
                while self._cursor.move_next():
                    total += 1
                self._cursor.reset()
                begin, end, _ = slice(begin, end).indices(total)
                logger.debug(
                    f"Resolved slice({self._bounds.begin}, {self._bounds.end}) "
                    f"to ({begin}, {end}) over {total} items"
                )
            self._resolved = (begin, end)
        return self._resolved

    def current(self):
        return self._cursor.current() if self._inside else None

    def current_index(self):
        return self._cursor.current_index() if self._inside else None

    def move_next(self) -> bool:
        begin, end = self._resolve()
        while not self._exhausted:
            if end is not None and self._position + 1 >= end:
                break
            if not self._cursor.move_next():
                break
            self._position += 1
            if self._position >= begin:
                self._inside = True
                return True
        self._exhausted = True
        self._inside = False
        return False

    def reset(self):
        self._cursor.reset()
        self._position = -1
        self._inside = False
        self._exhausted = False


@register_link(LinkKind.SLICED)
class Sliced(Chain):
    """
    Elements from offset ``begin`` up to (not including) ``end``.

    Negative offsets count from the end, which requires one extra pass
    over upstream to learn its length. Indices pass through.
    """

    def __init__(self, previous: Chain, begin: int = 0, end: Optional[int] = None):
        super().__init__(previous)
        self._bounds = SliceBounds.parse(begin, end)

    def _create_cursor(self):
        return SlicedCursor(self._previous, self._bounds)
