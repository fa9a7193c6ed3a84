"""Iteration over sequences and mappings with loop context."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .coercion import is_mapping, is_sequence
from .safe import SafeString


@dataclass(frozen=True)
class Loop:
    """Position of the current item within an iteration."""

    index0: int
    length: int

    @property
    def index(self) -> int:
        """One-based index."""
        return self.index0 + 1

    @property
    def revindex0(self) -> int:
        """Zero-based index counted from the end."""
        return self.length - self.index0 - 1

    @property
    def revindex(self) -> int:
        """One-based index counted from the end."""
        return self.length - self.index0

    @property
    def first(self) -> bool:
        return self.index0 == 0

    @property
    def last(self) -> bool:
        return self.index0 == self.length - 1


def is_iterable(value: Any) -> bool:
    """Check if value can be walked by iterate().

    Strings, bytes and safe strings are scalars here.
    """
    if value is None or isinstance(value, (str, bytes, SafeString)):
        return False
    return isinstance(value, Iterable)


def iterate(value: Any) -> Iterator[tuple[Any, Any, Loop]]:
    """Walk a sequence or mapping in its stable order.

    Sequences yield keys 0..n-1, mappings yield their own keys in iteration
    order. Nil and scalars yield nothing. Stop early with a plain ``break``.

    Args:
        value: Sequence, mapping or other iterable

    Yields:
        (key, item, loop) tuples
    """
    if is_mapping(value):
        items = list(value.items())
    elif is_sequence(value):
        items = list(enumerate(value))
    elif is_iterable(value):
        # Generators and sets are single-pass: materialize once for length
        items = list(enumerate(value))
    else:
        return

    length = len(items)
    for index0, (key, item) in enumerate(items):
        yield key, item, Loop(index0=index0, length=length)


def values_of(value: Any) -> list[Any]:
    """Collect the items of an iterable value, in order."""
    return [item for _, item, _ in iterate(value)]
