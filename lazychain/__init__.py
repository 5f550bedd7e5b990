"""Lazy, composable transformation chains over sequences, mappings and enumerables."""

from .cursor import Cursor, Enumerable, FilteredCursor, IndexedCursor, is_array_like, is_enumerable
from .errors import ChainError, InvalidSliceBounds, UnsupportedSourceType, UnsupportedZipArgument
from .lazy import LINK_REGISTRY, Chain, LinkKind, get_link_class, register_link
from .models import (
    ChainSettings,
    SliceBounds,
    ValueShape,
    configure,
    get_settings,
    reset_settings,
    setup_logging,
)
from .sources import CollectionSource, EnumerableSource, MappingSource, SequenceSource
from .links import Concatenated, Counted, Filtered, Grouped, Mapped, Reversed, Sliced
from .sorting import SortWrapper, Sorted, default_compare
from .uniquely import Uniquely
from .flattened import Flattened
from .zipped import Zipped
from .factory import factory

__all__ = [
    "Chain",
    "ChainError",
    "ChainSettings",
    "CollectionSource",
    "Concatenated",
    "Counted",
    "Cursor",
    "Enumerable",
    "EnumerableSource",
    "FilteredCursor",
    "Filtered",
    "Flattened",
    "Grouped",
    "IndexedCursor",
    "InvalidSliceBounds",
    "LINK_REGISTRY",
    "LinkKind",
    "Mapped",
    "MappingSource",
    "Reversed",
    "SequenceSource",
    "SliceBounds",
    "Sliced",
    "SortWrapper",
    "Sorted",
    "Uniquely",
    "UnsupportedSourceType",
    "UnsupportedZipArgument",
    "ValueShape",
    "Zipped",
    "configure",
    "default_compare",
    "factory",
    "get_link_class",
    "get_settings",
    "is_array_like",
    "is_enumerable",
    "register_link",
    "reset_settings",
    "setup_logging",
]
