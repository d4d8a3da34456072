"""Value shapes for sequences, sets and everything else.

A *shape* answers the handful of questions pointers ask about a raw value:
is it a collection, how long is it, what is at position *i*.  Shapes are
registered in a ``ValueShapeRegistry`` and tried by descending priority, so a
new family of values is supported by registering one more ``ShapeNode``
rather than by teaching every pointer about it.

Exports
-------
SequenceShape
    Lists, tuples and other non-string ``Sequence`` objects.

SetShape
    ``set`` / ``frozenset``: collections without positional writes.

ScalarShape
    Catch-all: strings, mappings, numbers, ``None``, arbitrary objects.

build_default_shapes
    Registry with the three shapes above.

unwrap / to_plain
    One-level and deep container unwrapping.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableSequence, Sequence, Set
from typing import Any

from .core import Container, JPathValueError, ShapeNode, ValueShape, ValueShapeRegistry

_TEXT_TYPES = (str, bytes, bytearray)


class SequenceShape(ValueShape):
    """Positional collections.  Writes need a ``MutableSequence``."""

    def matches(self, value: Any) -> bool:
        return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)

    def is_collection(self, value: Any) -> bool:
        return True

    def length(self, value: Any) -> int:
        return len(value)

    def element_at(self, value: Any, index: int) -> Any:
        if 0 <= index < len(value):
            return value[index]
        return None

    def assign(self, value: Any, index: int, new: Any) -> None:
        if not isinstance(value, MutableSequence):
            raise JPathValueError(f"cannot assign into immutable {type(value).__name__}")
        if not 0 <= index < len(value):
            raise JPathValueError(f"index {index} out of range for length {len(value)}")
        value[index] = new


class SetShape(ValueShape):
    """Unordered collections, exposed in iteration order."""

    def matches(self, value: Any) -> bool:
        return isinstance(value, Set)

    def is_collection(self, value: Any) -> bool:
        return True

    def length(self, value: Any) -> int:
        return len(value)

    def element_at(self, value: Any, index: int) -> Any:
        if 0 <= index < len(value):
            for i, item in enumerate(value):
                if i == index:
                    return item
        return None

    def assign(self, value: Any, index: int, new: Any) -> None:
        raise JPathValueError("cannot assign by position into a set")


class ScalarShape(ValueShape):
    """Anything that is not a collection: a single slot holding the value.

    ``element_at`` ignores the index and returns the value itself, so a
    scalar reads the same whether it is addressed as ``x`` or ``x[1]``.
    """

    def matches(self, value: Any) -> bool:
        return True

    def is_collection(self, value: Any) -> bool:
        return False

    def length(self, value: Any) -> int:
        return 1

    def element_at(self, value: Any, index: int) -> Any:
        return value

    def assign(self, value: Any, index: int, new: Any) -> None:
        raise JPathValueError(f"{type(value).__name__} is not a collection")


def build_default_shapes() -> ValueShapeRegistry:
    """Registry with ``SetShape`` (20), ``SequenceShape`` (10), ``ScalarShape`` (-999)."""
    shapes = ValueShapeRegistry()
    shapes.register(ShapeNode(name="set", priority=20, shape=SetShape()))
    shapes.register(ShapeNode(name="sequence", priority=10, shape=SequenceShape()))
    shapes.register(ShapeNode(name="scalar", priority=-999, shape=ScalarShape()))
    return shapes


def unwrap(value: Any) -> Any:
    """Return the contents of *value* if it is a ``Container``, else *value*."""
    if isinstance(value, Container):
        return value.get_value()
    return value


def to_plain(value: Any) -> Any:
    """Recursively replace containers by their contents.

    Tuples and sets become lists and mappings become dicts, so the result is plain
    JSON-like data suitable for JMESPath.
    """
    while isinstance(value, Container):
        value = value.get_value()
    if isinstance(value, Mapping):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (Set, Sequence)) and not isinstance(value, _TEXT_TYPES):
        return [to_plain(v) for v in value]
    return value
