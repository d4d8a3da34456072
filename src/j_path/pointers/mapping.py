"""Mapping-valued nodes and their entries.

MapPointer
    A dict (any ``Mapping``).  Children are its entries; the only attribute
    is ``xml:lang``.

PropertyPointer
    One entry of a mapping, or one element of an entry whose value is a
    collection.  The pointer over the entry's value comes from the factory
    registry, so an entry holding a ``Container`` is walked through a
    ``ContainerPointer``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core import (
    WHOLE_COLLECTION,
    Container,
    EmptyNodeIterator,
    JPathValueError,
    ListNodeIterator,
    NodeIterator,
    NodePointer,
    NodeTest,
    PointerContext,
    QName,
)
from .iterators import PropertyIterator
from .value import LangAttributePointer


class MapPointer(NodePointer):
    """Pointer to a mapping.  Entry order is the mapping's iteration order."""

    def __init__(
            self,
            parent: Optional[NodePointer],
            mapping: Mapping[Any, Any],
            context: Optional[PointerContext] = None,
            *,
            name: Optional[QName] = None,
    ) -> None:
        super().__init__(parent, context)
        self.mapping = mapping
        self.name = name

    def is_leaf(self) -> bool:
        return False

    def get_name(self) -> Optional[QName]:
        return self.name

    def get_base_value(self) -> Any:
        return self.mapping

    def get_immediate_node(self) -> Any:
        return self.mapping

    def set_value(self, value: Any) -> None:
        self._set_value_through_parent(value)
        self.mapping = value

    def child_iterator(
            self,
            test: Optional[NodeTest],
            reverse: bool,
            start_with: Optional[NodePointer],
    ) -> NodeIterator:
        return PropertyIterator(self, test, reverse, start_with)

    def attribute_iterator(self, name: QName) -> NodeIterator:
        lang = LangAttributePointer.NAME
        if name.prefix == lang.prefix and name.name in (lang.name, "*"):
            return ListNodeIterator([LangAttributePointer(self)])
        return EmptyNodeIterator()

    def compare_child_node_pointers(self, pointer1: NodePointer, pointer2: NodePointer) -> int:
        """Attributes first, then entries in key order, then element index."""
        rank1, rank2 = self._rank(pointer1), self._rank(pointer2)
        if rank1 != rank2:
            return -1 if rank1 < rank2 else 1
        return pointer1.index - pointer2.index

    def _rank(self, pointer: NodePointer) -> int:
        if isinstance(pointer, PropertyPointer):
            for i, key in enumerate(self.mapping):
                if key == pointer.key:
                    return i
        return -1

    def __hash__(self) -> int:
        return id(self.mapping)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self.parent == other.parent and self.mapping is other.mapping


class PropertyPointer(NodePointer):
    """Pointer to ``owner.mapping[key]`` (or to element *index* of it)."""

    def __init__(
            self,
            parent: MapPointer,
            key: Any,
            *,
            index: int = WHOLE_COLLECTION,
    ) -> None:
        super().__init__(parent, index=index)
        self.key = key

    @property
    def mapping(self) -> Mapping[Any, Any]:
        return self.parent.mapping

    # -- classification -----------------------------------------------------

    def get_name(self) -> Optional[QName]:
        return QName(None, str(self.key))

    def is_collection(self) -> bool:
        return self.index == WHOLE_COLLECTION and self.context.shapes.is_collection_like(
            self.get_base_value()
        )

    def get_length(self) -> int:
        return self.context.shapes.length_of(self.get_base_value())

    def is_actual(self) -> bool:
        return self.key in self.mapping

    def is_leaf(self) -> bool:
        return self.get_immediate_value_pointer().is_leaf()

    # -- values -------------------------------------------------------------

    def get_base_value(self) -> Any:
        return self.mapping.get(self.key)

    def get_immediate_node(self) -> Any:
        raw = self.get_base_value()
        if self.index == WHOLE_COLLECTION:
            return raw
        if 0 <= self.index < self.get_length():
            return self.context.shapes.element_at(raw, self.index)
        return None

    def get_immediate_value_pointer(self) -> NodePointer:
        return self.context.factories.new_child_node_pointer(
            self, self.get_name(), self.get_immediate_node(),
        )

    def set_value(self, value: Any) -> None:
        """Replace the entry, one element of it, or the contents of its container."""
        raw = self.get_base_value()
        if self.index != WHOLE_COLLECTION:
            self.context.shapes.assign_at(raw, self.index, value)
        elif isinstance(raw, Container):
            raw.set_value(value)
        elif not hasattr(self.mapping, "__setitem__"):
            raise JPathValueError(f"cannot write {self.key!r} into a read-only mapping")
        else:
            self.mapping[self.key] = value

    def compare_child_node_pointers(self, pointer1: NodePointer, pointer2: NodePointer) -> int:
        return pointer1.index - pointer2.index

    # -- rendering / identity -----------------------------------------------

    def as_path(self) -> str:
        path = self.parent.as_path()
        step = str(self.key)
        if self.index != WHOLE_COLLECTION:
            step = f"{step}[{self.index + 1}]"
        return path + step if path.endswith("/") else f"{path}/{step}"

    def __hash__(self) -> int:
        return hash((str(self.key), self.index))

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.parent == other.parent
            and self.key == other.key
            and self.index == other.index
        )
