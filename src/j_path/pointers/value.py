"""Leaf pointers — scalars, ``None``, opaque objects, and ``xml:lang``."""

from __future__ import annotations

from typing import Any, Optional

from ..core import JPathValueError, NodePointer, PointerContext, QName

_PRIMITIVES = (str, int, float, bool, bytes)


class ValuePointer(NodePointer):
    """Pointer to a value with no children.

    Writes go to the parent: a container parent replaces its contents, a
    property parent replaces the mapping entry.  A root ``ValuePointer`` is
    read-only.
    """

    def __init__(
            self,
            parent: Optional[NodePointer],
            name: Optional[QName],
            value: Any,
            context: Optional[PointerContext] = None,
    ) -> None:
        super().__init__(parent, context)
        self.name = name
        self.value = value

    def is_leaf(self) -> bool:
        return True

    def get_name(self) -> Optional[QName]:
        return self.name

    def get_base_value(self) -> Any:
        return self.value

    def get_immediate_node(self) -> Any:
        return self.value

    def set_value(self, value: Any) -> None:
        self._set_value_through_parent(value)
        self.value = value

    def compare_child_node_pointers(self, pointer1: NodePointer, pointer2: NodePointer) -> int:
        return 0

    def __hash__(self) -> int:
        return hash(self.name)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if type(other) is not type(self):
            return NotImplemented
        if self.parent != other.parent or self.name != other.name:
            return False
        if self.value is other.value:
            return True
        return isinstance(self.value, _PRIMITIVES) and self.value == other.value


class LangAttributePointer(NodePointer):
    """The ``xml:lang`` attribute: reports the locale of the pointer context."""

    NAME = QName("xml", "lang")

    def __init__(self, parent: NodePointer) -> None:
        super().__init__(parent)

    def is_leaf(self) -> bool:
        return True

    def get_name(self) -> Optional[QName]:
        return self.NAME

    def get_base_value(self) -> Any:
        return self.locale

    def get_immediate_node(self) -> Any:
        return self.locale

    def set_value(self, value: Any) -> None:
        raise JPathValueError("cannot change the xml:lang attribute")

    def compare_child_node_pointers(self, pointer1: NodePointer, pointer2: NodePointer) -> int:
        return 0

    def as_path(self) -> str:
        path = self.parent.as_path()
        return f"{path}@{self.NAME}" if path.endswith("/") else f"{path}/@{self.NAME}"

    def __hash__(self) -> int:
        return hash(self.parent)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.parent == other.parent
