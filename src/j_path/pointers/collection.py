"""Collection-valued nodes: the whole collection, or one element of it."""

from __future__ import annotations

from typing import Any, Optional

from ..core import (
    WHOLE_COLLECTION,
    NodeIterator,
    NodePointer,
    NodeTest,
    PointerContext,
    QName,
)
from .iterators import CollectionChildIterator


class CollectionPointer(NodePointer):
    """Pointer to a collection (``index == WHOLE_COLLECTION``) or one of its elements.

    Element pointers are children of the whole-collection pointer, so two
    elements of the same collection order by index.  The element value
    pointer is built once per pointer and dropped when the index changes.
    """

    def __init__(
            self,
            parent: Optional[NodePointer],
            collection: Any,
            context: Optional[PointerContext] = None,
            *,
            index: int = WHOLE_COLLECTION,
            name: Optional[QName] = None,
    ) -> None:
        super().__init__(parent, context, index=index)
        self.collection = collection
        self.name = name
        self._value_pointer: Optional[NodePointer] = None

    def set_index(self, index: int) -> None:
        super().set_index(index)
        self._value_pointer = None

    def element(self, index: int) -> CollectionPointer:
        """Pointer to the element at *index*, parented at this pointer."""
        return CollectionPointer(self, self.collection, index=index, name=self.name)

    # -- classification -----------------------------------------------------

    def is_collection(self) -> bool:
        return True

    def get_length(self) -> int:
        return self.context.shapes.length_of(self.collection)

    def get_name(self) -> Optional[QName]:
        return self.name

    def is_leaf(self) -> bool:
        if self.index == WHOLE_COLLECTION:
            return False
        return self.get_immediate_value_pointer().is_leaf()

    # -- values -------------------------------------------------------------

    def get_base_value(self) -> Any:
        return self.collection

    def get_immediate_node(self) -> Any:
        if self.index == WHOLE_COLLECTION:
            return self.collection
        if 0 <= self.index < self.get_length():
            return self.context.shapes.element_at(self.collection, self.index)
        return None

    def get_immediate_value_pointer(self) -> NodePointer:
        if self.index == WHOLE_COLLECTION:
            return self
        if self._value_pointer is None:
            self._value_pointer = self.context.factories.new_child_node_pointer(
                self, self.name, self.get_immediate_node(),
            )
        return self._value_pointer

    def set_value(self, value: Any) -> None:
        if self.index == WHOLE_COLLECTION:
            self._set_value_through_parent(value)
            self.collection = value
        else:
            self.context.shapes.assign_at(self.collection, self.index, value)
            self._value_pointer = None

    # -- structure ----------------------------------------------------------

    def child_iterator(
            self,
            test: Optional[NodeTest],
            reverse: bool,
            start_with: Optional[NodePointer],
    ) -> NodeIterator:
        if self.index != WHOLE_COLLECTION:
            return self.get_immediate_value_pointer().child_iterator(test, reverse, start_with)
        return CollectionChildIterator(self, test, reverse, start_with)

    def compare_child_node_pointers(self, pointer1: NodePointer, pointer2: NodePointer) -> int:
        return pointer1.index - pointer2.index

    # -- rendering / identity -----------------------------------------------

    def as_path(self) -> str:
        """Parent path, plus ``[n]`` (1-based) for an element.

        An element of a root collection renders as ``/.[n]``.
        """
        path = "/" if self.parent is None else self.parent.as_path()
        if self.index == WHOLE_COLLECTION:
            return path
        step = f"[{self.index + 1}]"
        return f"{path}.{step}" if path.endswith("/") else path + step

    def __hash__(self) -> int:
        return id(self.collection) + self.index

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.parent == other.parent
            and self.collection is other.collection
            and self.index == other.index
        )
