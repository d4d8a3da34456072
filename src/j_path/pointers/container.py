"""Transparent pointer to a ``Container``.

Path evaluation walks *into* a container as if the box were not there: every
structural query is answered by a delegate pointer built over the
container's contents, while the box itself stays addressable through
``get_base_value`` and writable through ``set_value``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..core import (
    WHOLE_COLLECTION,
    Container,
    NodeIterator,
    NodePointer,
    NodeTest,
    PointerContext,
    QName,
)

logger = logging.getLogger(__name__)


class ContainerPointer(NodePointer):
    """Indirection pointer over a ``Container``.

    The delegate (``get_immediate_value_pointer``) is resolved from the
    container's value on first use and then kept for the lifetime of this
    pointer; later changes to the container are not picked up.  Equality and
    hashing look only at the container's identity and ``index``, so a
    resolved and an unresolved pointer over the same slot compare equal.

    A ``ContainerPointer`` is not thread-safe: the delegate slot is filled
    without locking.  Concurrent evaluations must build their own pointers.

    ::

        box = ValueContainer({"name": "Alice"})
        ptr = ContainerPointer.for_root(box, ctx)
        ptr.as_path()                         → "/"
        ptr.get_value()                       → {"name": "Alice"}
        ptr.get_immediate_value_pointer()     → <MapPointer />
    """

    def __init__(
            self,
            parent: Optional[NodePointer],
            container: Container,
            context: Optional[PointerContext] = None,
            *,
            index: int = WHOLE_COLLECTION,
    ) -> None:
        super().__init__(parent, context, index=index)
        self.container = container
        self._value_pointer: Optional[NodePointer] = None

    @classmethod
    def for_root(
            cls,
            container: Container,
            context: PointerContext,
            *,
            index: int = WHOLE_COLLECTION,
    ) -> ContainerPointer:
        """Pointer over *container* at the root of a chain (no parent)."""
        return cls(None, container, context, index=index)

    # -- classification -----------------------------------------------------

    def is_container(self) -> bool:
        return True

    def get_name(self) -> Optional[QName]:
        return None

    def is_collection(self) -> bool:
        value = self.container.get_value()
        return value is not None and self.context.shapes.is_collection_like(value)

    def get_length(self) -> int:
        return self._length_of(self.container.get_value())

    def is_leaf(self) -> bool:
        return self.get_immediate_value_pointer().is_leaf()

    # -- values -------------------------------------------------------------

    def get_base_value(self) -> Any:
        return self.container

    def get_immediate_node(self) -> Any:
        value = self.container.get_value()
        shapes = self.context.shapes
        if self.index == WHOLE_COLLECTION:
            return shapes.whole_value_of(value)
        if 0 <= self.index < self._length_of(value):
            return shapes.element_at(value, self.index)
        return None

    def set_value(self, value: Any) -> None:
        # An indexed pointer still replaces the whole container value.
        self.container.set_value(value)

    def get_immediate_value_pointer(self) -> NodePointer:
        if self._value_pointer is None:
            node = self.get_immediate_node()
            self._value_pointer = self.context.factories.new_child_node_pointer(
                self, self.get_name(), node,
            )
            logger.debug("resolved %r over %r to %r", self, self.container, self._value_pointer)
        return self._value_pointer

    def _length_of(self, value: Any) -> int:
        return 1 if value is None else self.context.shapes.length_of(value)

    # -- structure (forwarded to the delegate) ------------------------------

    def child_iterator(
            self,
            test: Optional[NodeTest],
            reverse: bool,
            start_with: Optional[NodePointer],
    ) -> NodeIterator:
        return self.get_immediate_value_pointer().child_iterator(test, reverse, start_with)

    def attribute_iterator(self, name: QName) -> NodeIterator:
        return self.get_immediate_value_pointer().attribute_iterator(name)

    def namespace_iterator(self) -> NodeIterator:
        return self.get_immediate_value_pointer().namespace_iterator()

    def namespace_pointer(self, prefix: str) -> Optional[NodePointer]:
        return self.get_immediate_value_pointer().namespace_pointer(prefix)

    def get_namespace_uri(self, prefix: Optional[str] = None) -> Optional[str]:
        return self.get_immediate_value_pointer().get_namespace_uri(prefix)

    def test_node(self, test: Optional[NodeTest]) -> bool:
        return self.get_immediate_value_pointer().test_node(test)

    def compare_child_node_pointers(self, pointer1: NodePointer, pointer2: NodePointer) -> int:
        return pointer1.index - pointer2.index

    # -- identity -----------------------------------------------------------

    def __hash__(self) -> int:
        return id(self.container) + self.index

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self.container is other.container and self.index == other.index

    def as_path(self) -> str:
        return "/" if self.parent is None else self.parent.as_path()
