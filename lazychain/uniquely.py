"""
Uniquely link.

Duplicates are detected with two stores that live for one traversal:
value-like keys (numbers, strings, None, hashable tuples, ...) go to a
dict and are compared by value and type; every other key is compared by
identity against a list of already seen objects. Two distinct objects
with equal contents are therefore never merged.
"""

from enum import Enum
from numbers import Number
from typing import Any, Callable, Dict, List, Optional

from .cursor import Cursor
from .lazy import Chain, LinkKind, register_link

VALUE_TYPES = (type(None), Number, str, bytes, Enum, tuple, frozenset)


def is_value_key(key: Any) -> bool:
    """Keys compared by value rather than by identity."""
    if not isinstance(key, VALUE_TYPES):
        return False
    try:
        hash(key)
    except TypeError:
        return False
    return True


class UniquelyCursor(Cursor):
    def __init__(self, previous: Chain, id_extractor: Optional[Callable[[Any, Any], Any]]):
        self._cursor = previous.get_cursor()
        self._id_extractor = id_extractor
        self._seen_objects: List[Any] = []
        self._seen_values: Dict[Any, bool] = {}

    def current(self):
        return self._cursor.current()

    def current_index(self):
        return self._cursor.current_index()

    def _is_new(self, key) -> bool:
        if is_value_key(key):
            # type is part of the key: 1 and "1" (and 1 and True) stay distinct
            marker = (type(key), key)
            if marker in self._seen_values:
                return False
            self._seen_values[marker] = True
            return True
        if any(seen is key for seen in self._seen_objects):
            return False
        self._seen_objects.append(key)
        return True

    def move_next(self) -> bool:
        while self._cursor.move_next():
            key = self._cursor.current()
            if self._id_extractor is not None:
                key = self._id_extractor(key, self._cursor.current_index())
            if self._is_new(key):
                return True
        return False

    def reset(self):
        self._cursor.reset()
        self._seen_objects = []
        self._seen_values = {}


@register_link(LinkKind.UNIQUELY)
class Uniquely(Chain):
    """
    First occurrence of every element (or of every id_extractor(item, index)).

    Indices pass through, so gaps appear where duplicates were dropped.
    """

    def __init__(self, previous: Chain, id_extractor: Optional[Callable[[Any, Any], Any]] = None):
        super().__init__(previous)
        self._id_extractor = id_extractor

    def _create_cursor(self):
        return UniquelyCursor(self._previous, self._id_extractor)
