"""Entry point turning arbitrary containers into chains."""

from collections.abc import Mapping

from .cursor import is_array_like, is_enumerable
from .errors import UnsupportedSourceType
from .lazy import Chain
from .sources import CollectionSource, EnumerableSource, MappingSource, SequenceSource, is_collection


def factory(source) -> Chain:
    """
    Wrap ``source`` in the matching source adapter.

    Chains are returned unchanged. Enumerables are checked before
    sequences so a container providing its own cursors keeps control of
    its traversal.

    Example:
        >>> factory([
        ...     {"name": "Philip J. Fry", "gender": "M"},
        ...     {"name": "Turanga Leela", "gender": "F"},
        ...     {"name": "Amy Wong", "gender": "F"},
        ... ]).filter(lambda item, index: item["gender"] == "F").map(
        ...     lambda item, index: item["name"]
        ... ).sort().value()
        ['Amy Wong', 'Turanga Leela']
    """
    if isinstance(source, Chain):
        return source
    if is_enumerable(source):
        return EnumerableSource(source)
    if is_array_like(source):
        return SequenceSource(source)
    if isinstance(source, Mapping):
        return MappingSource(source)
    if is_collection(source):
        return CollectionSource(source)
    raise UnsupportedSourceType(source)
