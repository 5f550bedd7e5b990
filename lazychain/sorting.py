"""
Sorted link.

Sorting needs every element at once, so the cursor pulls the whole
upstream on its first move, sorts it with a stable sort and replays the
result. Each element travels with its pre-sort index in a SortWrapper so
keyed chains can keep their original keys after sorting.
"""

from functools import cmp_to_key
from numbers import Number
from typing import Any, Callable, Optional

from .cursor import IndexedCursor
from .lazy import Chain, LinkKind, register_link
from .links import key_getter

Comparator = Callable[[Any, Any], int]


class SortWrapper:
    """An element paired with its index before the sort."""
    __slots__ = ("item", "index")

    def __init__(self, item, index):
        self.item = item
        self.index = index


def _type_rank(value):
    # None < numbers < str < bytes < everything else, grouped by type name
    if value is None:
        return (0, "")
    if isinstance(value, Number):
        return (1, "")
    if isinstance(value, str):
        return (2, "")
    if isinstance(value, (bytes, bytearray)):
        return (3, "")
    return (4, type(value).__qualname__)


def default_compare(a, b) -> int:
    """
    Compare with the native ``==`` and ``>`` operators.

    A pair that is neither equal nor greater compares as -1, NaN included.

    Values whose types cannot be ordered against each other fall back to
    a fixed order of type groups; two unorderable values of the same
    group compare equal, so a stable sort leaves them in upstream order.
    """
    try:
        if a == b:
            return 0
        if a > b:
            return 1
        return -1
    except TypeError:
        pass
    rank_a, rank_b = _type_rank(a), _type_rank(b)
    if rank_a == rank_b:
        return 0
    return 1 if rank_a > rank_b else -1


class SortedCursor(IndexedCursor):
    def __init__(self, previous: Chain, compare: Comparator):
        super().__init__(previous)
        self._compare = compare

    def _load_items(self):
        save_indices = self._previous.should_save_indices
        wrappers = [SortWrapper(item, index) for index, item in self._pull()]
        # list.sort is stable: equal elements keep their upstream order
        wrappers.sort(key=cmp_to_key(lambda a, b: self._compare(a.item, b.item)))
        return [
            (wrapper.index if save_indices else position, wrapper.item)
            for position, wrapper in enumerate(wrappers)
        ]


@register_link(LinkKind.SORTED)
class Sorted(Chain):
    """
    Elements in comparator order.

    ``compare(a, b)`` returns a negative, zero or positive number. With
    ``key`` the comparison applies to ``key(item)`` (or ``item[key]``)
    instead of the item. Keyed upstreams keep their indices; positional
    ones are renumbered 0..n-1 in sorted order.
    """

    def __init__(self, previous: Chain, compare: Optional[Comparator] = None, key=None):
        super().__init__(previous)
        compare = compare or default_compare
        if key is not None:
            get_key = key_getter(key)
            base_compare = compare
            compare = lambda a, b: base_compare(get_key(a), get_key(b))
        self._compare = compare

    def _create_cursor(self):
        return SortedCursor(self._previous, self._compare)
