"""Core abstractions, errors, registries, and the base ``NodePointer``.

This module owns every *interface* in the system.  Nothing here depends on a
concrete implementation; concrete classes live in the sub-packages
(``pointers``) or in ``shapes``, ``containers`` and ``factory``.

Pointer model::

    PointerContext (locale, shapes, factories, lenient)
      │
      ▼
    NodePointer ── parent ──► NodePointer ── parent ──► … ──► root
      │
      ├─ get_immediate_value_pointer()   ← one hop of indirection
      ├─ child_iterator(test, reverse, start_with)
      ├─ attribute_iterator(qname) / namespace_iterator()
      └─ as_path() / compare_to(other)

Every pointer that wraps a value asks ``context.factories`` for the pointer
over that value, and every question about the *shape* of a value (is it a
collection? how long is it?) goes through ``context.shapes``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

import regex

WHOLE_COLLECTION = -(2 ** 31)
"""Index sentinel: the pointer denotes the entire value, not one element."""

UNKNOWN_NAMESPACE = "<<unknown namespace>>"


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────


class JPathError(Exception):
    """Base class for every error raised by ``j_path``."""


class JPathNotFoundError(JPathError, KeyError):
    """A path selected no node and the context is not lenient."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class JPathSyntaxError(JPathError, ValueError):
    """A path or qualified name could not be parsed."""


class JPathValueError(JPathError, TypeError):
    """A value cannot be written or compared at this position."""


# ─────────────────────────────────────────────────────────────────────────────
# QName
# ─────────────────────────────────────────────────────────────────────────────

_QNAME_RE = regex.compile(r"^(?:(?P<prefix>[\p{L}_][\w.\-]*):)?(?P<name>\*|[\w$][\w.\-$]*)$")


@dataclass(frozen=True)
class QName:
    """Qualified name: optional *prefix* plus local *name*.

    ::

        QName.parse("item")       → QName(None, "item")
        QName.parse("xml:lang")   → QName("xml", "lang")
        str(QName("xml", "lang")) → "xml:lang"
    """

    prefix: Optional[str]
    name: str

    @classmethod
    def parse(cls, text: str) -> QName:
        m = _QNAME_RE.match(text)
        if m is None:
            raise JPathSyntaxError(f"invalid qualified name: {text!r}")
        return cls(m.group("prefix"), m.group("name"))

    def __str__(self) -> str:
        return f"{self.prefix}:{self.name}" if self.prefix else self.name


# ─────────────────────────────────────────────────────────────────────────────
# Node tests
# ─────────────────────────────────────────────────────────────────────────────

NODE_TYPE_NODE = 1
NODE_TYPE_TEXT = 2
NODE_TYPE_COMMENT = 3
NODE_TYPE_PI = 4


class NodeTest(ABC):
    """Marker base for the tests a path step applies to candidate nodes."""


class NodeNameTest(NodeTest):
    """Match nodes by qualified name; a local name of ``*`` is a wildcard."""

    def __init__(self, qname: QName, namespace_uri: Optional[str] = None) -> None:
        self.qname = qname
        self.namespace_uri = namespace_uri

    @property
    def is_wildcard(self) -> bool:
        return self.qname.name == "*"

    def __repr__(self) -> str:
        return f"NodeNameTest({str(self.qname)!r})"


class NodeTypeTest(NodeTest):
    """Match nodes by kind (``node()``, ``text()``, ``comment()``, ``processing-instruction()``)."""

    def __init__(self, node_type: int) -> None:
        self.node_type = node_type

    def __repr__(self) -> str:
        return f"NodeTypeTest({self.node_type})"


# ─────────────────────────────────────────────────────────────────────────────
# NodeIterator
# ─────────────────────────────────────────────────────────────────────────────


class NodeIterator(ABC):
    """Positional cursor over a sequence of pointers.

    Positions are 1-based; position 0 means "before the first node".
    ``set_position`` returns ``False`` when the position is past the end.
    The iterator protocol walks positions 1, 2, … until that happens::

        for pointer in parent.child_iterator(test, False, None):
            ...
    """

    @property
    @abstractmethod
    def position(self) -> int: ...

    @abstractmethod
    def set_position(self, position: int) -> bool: ...

    @property
    @abstractmethod
    def node_pointer(self) -> Optional[NodePointer]: ...

    def __iter__(self) -> Iterator[NodePointer]:
        position = 1
        while self.set_position(position):
            pointer = self.node_pointer
            if pointer is not None:
                yield pointer
            position += 1


class ListNodeIterator(NodeIterator):
    """``NodeIterator`` over an already materialised list of pointers."""

    def __init__(self, pointers: List[NodePointer]) -> None:
        self._pointers = pointers
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def set_position(self, position: int) -> bool:
        self._position = position
        return 1 <= position <= len(self._pointers)

    @property
    def node_pointer(self) -> Optional[NodePointer]:
        if 1 <= self._position <= len(self._pointers):
            return self._pointers[self._position - 1]
        return None


class EmptyNodeIterator(ListNodeIterator):
    """Iterator with no nodes, the default for leaves and attributes."""

    def __init__(self) -> None:
        super().__init__([])


# ─────────────────────────────────────────────────────────────────────────────
# Container contract
# ─────────────────────────────────────────────────────────────────────────────


class Container(ABC):
    """A boxed value whose contents are obtained (and replaced) on demand."""

    @abstractmethod
    def get_value(self) -> Any:
        """Return the current contents."""

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """Replace the contents."""


# ─────────────────────────────────────────────────────────────────────────────
# Value shapes — registered-handler table for "what does this value look like"
# ─────────────────────────────────────────────────────────────────────────────


class ValueShape(ABC):
    """Capability interface for one family of values (sequence, set, scalar…).

    Every method receives an already unwrapped value (never a ``Container``);
    unwrapping is the registry's job.
    """

    @abstractmethod
    def matches(self, value: Any) -> bool: ...

    @abstractmethod
    def is_collection(self, value: Any) -> bool: ...

    @abstractmethod
    def length(self, value: Any) -> int: ...

    @abstractmethod
    def element_at(self, value: Any, index: int) -> Any:
        """Return the element at *index*, or ``None`` when out of range."""

    def whole_value(self, value: Any) -> Any:
        return value

    @abstractmethod
    def assign(self, value: Any, index: int, new: Any) -> None:
        """Replace the element at *index* in place."""


@dataclass
class ShapeNode:
    """One entry of a ``ValueShapeRegistry``; higher *priority* is tried first."""

    name: str
    priority: int
    shape: ValueShape


class ValueShapeRegistry:
    """Priority-ordered table of ``ValueShape`` handlers with first-match dispatch.

    The contract functions (``is_collection_like``, ``length_of``,
    ``element_at``, ``whole_value_of``) unwrap one container level first, so
    callers may pass either a value or a ``Container`` holding it.
    """

    def __init__(self) -> None:
        self._nodes: List[ShapeNode] = []

    # -- registration -------------------------------------------------------

    def register(self, node: ShapeNode) -> None:
        """Add a node to the table, keeping it in descending priority order."""
        self._nodes.append(node)
        self._nodes.sort(key=lambda n: n.priority, reverse=True)

    def nodes(self) -> List[ShapeNode]:
        """Return a copy of the nodes, highest priority first."""
        return list(self._nodes)

    # -- dispatch -----------------------------------------------------------

    def resolve(self, value: Any) -> ValueShape:
        """Return the highest-priority shape matching *value*."""
        for node in self._nodes:
            if node.shape.matches(value):
                return node.shape
        raise JPathError(f"no value shape registered for {type(value).__name__}")

    # -- contract -----------------------------------------------------------

    def is_collection_like(self, value: Any) -> bool:
        value = _unwrap(value)
        return value is not None and self.resolve(value).is_collection(value)

    def length_of(self, value: Any) -> int:
        value = _unwrap(value)
        if value is None:
            return 1
        return self.resolve(value).length(value)

    def element_at(self, value: Any, index: int) -> Any:
        value = _unwrap(value)
        if value is None:
            return None
        return self.resolve(value).element_at(value, index)

    def whole_value_of(self, value: Any) -> Any:
        value = _unwrap(value)
        if value is None:
            return None
        return self.resolve(value).whole_value(value)

    def assign_at(self, value: Any, index: int, new: Any) -> None:
        value = _unwrap(value)
        if value is None:
            raise JPathValueError("cannot assign an element of a null value")
        self.resolve(value).assign(value, index, new)


def _unwrap(value: Any) -> Any:
    return value.get_value() if isinstance(value, Container) else value


# ─────────────────────────────────────────────────────────────────────────────
# Pointer factories — registered-handler table for "which pointer fits"
# ─────────────────────────────────────────────────────────────────────────────


class PointerFactory(ABC):
    """Builds pointers for the values it recognises; returns ``None`` otherwise."""

    @abstractmethod
    def create_node_pointer(
            self, name: Optional[QName], value: Any, context: PointerContext,
    ) -> Optional[NodePointer]:
        """Root pointer for *value*."""

    @abstractmethod
    def create_child_node_pointer(
            self, parent: NodePointer, name: Optional[QName], value: Any,
    ) -> Optional[NodePointer]:
        """Pointer for *value* as a child of *parent*."""


@dataclass
class FactoryNode:
    """One entry of a ``PointerFactoryRegistry``; higher *priority* is tried first."""

    name: str
    priority: int
    factory: PointerFactory


class PointerFactoryRegistry:
    """Priority-ordered table of ``PointerFactory`` objects.

    ``new_child_node_pointer`` walks nodes by descending priority and returns
    the first non-``None`` result.  A catch-all factory is expected at the
    bottom; if nothing applies ``JPathError`` is raised.
    """

    def __init__(self) -> None:
        self._nodes: List[FactoryNode] = []

    def register(self, node: FactoryNode) -> None:
        """Add a node to the table, keeping it in descending priority order."""
        self._nodes.append(node)
        self._nodes.sort(key=lambda n: n.priority, reverse=True)

    def nodes(self) -> List[FactoryNode]:
        """Return a copy of the nodes, highest priority first."""
        return list(self._nodes)

    def new_node_pointer(
            self, name: Optional[QName], value: Any, context: PointerContext,
    ) -> NodePointer:
        for node in self._nodes:
            pointer = node.factory.create_node_pointer(name, value, context)
            if pointer is not None:
                return pointer
        raise JPathError(f"no pointer factory accepts {type(value).__name__}")

    def new_child_node_pointer(
            self, parent: NodePointer, name: Optional[QName], value: Any,
    ) -> NodePointer:
        for node in self._nodes:
            pointer = node.factory.create_child_node_pointer(parent, name, value)
            if pointer is not None:
                return pointer
        raise JPathError(f"no pointer factory accepts {type(value).__name__}")


# ─────────────────────────────────────────────────────────────────────────────
# PointerContext
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class PointerContext:
    """Shared configuration threaded through a whole pointer chain.

    Attributes:
        locale:    Language tag reported by ``xml:lang`` attributes.
        shapes:    Value-shape table used for every collection question.
        factories: Pointer-factory table used to build child pointers.
        lenient:   When ``True`` the navigator returns ``None`` instead of
                   raising ``JPathNotFoundError`` for paths that select nothing.
    """

    locale: str
    shapes: ValueShapeRegistry
    factories: PointerFactoryRegistry
    lenient: bool = False


# ─────────────────────────────────────────────────────────────────────────────
# NodePointer — base pointer contract
# ─────────────────────────────────────────────────────────────────────────────


class NodePointer(ABC):
    """One navigable position in a host data structure.

    A pointer never owns its *parent*; the chain is held together by whoever
    holds the leaf pointer.  The *context* is inherited from the parent when
    one is given.

    Subclasses must implement ``get_name``, ``get_base_value``,
    ``get_immediate_node``, ``is_leaf``, ``set_value`` and
    ``compare_child_node_pointers``.  Every structural query has an "empty"
    default so leaves only override what they need.
    """

    def __init__(
            self,
            parent: Optional[NodePointer] = None,
            context: Optional[PointerContext] = None,
            *,
            index: int = WHOLE_COLLECTION,
    ) -> None:
        if context is None:
            if parent is None:
                raise JPathError("a root pointer needs a PointerContext")
            context = parent.context
        self.parent = parent
        self.context = context
        self.index = index

    # -- linkage ------------------------------------------------------------

    @property
    def locale(self) -> str:
        return self.context.locale

    def set_index(self, index: int) -> None:
        self.index = index

    def is_root(self) -> bool:
        return self.parent is None

    def get_root_node(self) -> NodePointer:
        pointer = self
        while pointer.parent is not None:
            pointer = pointer.parent
        return pointer

    # -- classification -----------------------------------------------------

    def is_container(self) -> bool:
        return False

    def is_collection(self) -> bool:
        return False

    def is_actual(self) -> bool:
        return True

    @abstractmethod
    def is_leaf(self) -> bool: ...

    @abstractmethod
    def get_name(self) -> Optional[QName]: ...

    def get_length(self) -> int:
        return 1

    # -- values -------------------------------------------------------------

    @abstractmethod
    def get_base_value(self) -> Any:
        """The raw object this pointer was built around."""

    @abstractmethod
    def get_immediate_node(self) -> Any:
        """The value this pointer denotes right now, without building children."""

    def get_immediate_value_pointer(self) -> NodePointer:
        return self

    def get_value_pointer(self) -> NodePointer:
        """Follow immediate value pointers until one returns itself."""
        pointer: NodePointer = self
        nxt = pointer.get_immediate_value_pointer()
        while nxt is not pointer:
            pointer = nxt
            nxt = pointer.get_immediate_value_pointer()
        return pointer

    def get_node(self) -> Any:
        return self.get_value_pointer().get_immediate_node()

    def get_value(self) -> Any:
        node = self.get_node()
        return node.get_value() if isinstance(node, Container) else node

    @abstractmethod
    def set_value(self, value: Any) -> None: ...

    def _set_value_through_parent(self, value: Any) -> None:
        if self.parent is None:
            raise JPathValueError(f"cannot replace the value of root pointer {type(self).__name__}")
        self.parent.set_value(value)

    # -- structure ----------------------------------------------------------

    def child_iterator(
            self,
            test: Optional[NodeTest],
            reverse: bool,
            start_with: Optional[NodePointer],
    ) -> NodeIterator:
        """Children of the value this pointer leads to; none for a terminal pointer."""
        value_pointer = self.get_value_pointer()
        if value_pointer is self:
            return EmptyNodeIterator()
        return value_pointer.child_iterator(test, reverse, start_with)

    def attribute_iterator(self, name: QName) -> NodeIterator:
        value_pointer = self.get_value_pointer()
        if value_pointer is self:
            return EmptyNodeIterator()
        return value_pointer.attribute_iterator(name)

    def namespace_iterator(self) -> NodeIterator:
        return EmptyNodeIterator()

    def namespace_pointer(self, prefix: str) -> Optional[NodePointer]:
        return None

    def get_namespace_uri(self, prefix: Optional[str] = None) -> Optional[str]:
        return None

    def test_node(self, test: Optional[NodeTest]) -> bool:
        """Apply *test* to this pointer.

        * ``None``             → always matches.
        * ``NodeNameTest``     → compares names; containers and unnamed nodes
                                 never match.
        * ``NodeTypeTest``     → ``node()`` always, ``text()`` on leaves.
        """
        if test is None:
            return True
        if isinstance(test, NodeNameTest):
            name = self.get_name()
            if self.is_container() or name is None:
                return False
            if test.qname.prefix != name.prefix:
                if test.namespace_uri is None:
                    return False
                if self.get_namespace_uri(name.prefix) != test.namespace_uri:
                    return False
            return test.is_wildcard or test.qname.name == name.name
        if isinstance(test, NodeTypeTest):
            if test.node_type == NODE_TYPE_NODE:
                return True
            return test.node_type == NODE_TYPE_TEXT and self.is_leaf()
        return False

    # -- ordering -----------------------------------------------------------

    @abstractmethod
    def compare_child_node_pointers(self, pointer1: NodePointer, pointer2: NodePointer) -> int:
        """Order two children of this pointer (negative, zero, positive)."""

    def compare_to(self, other: NodePointer) -> int:
        """Document order of *self* relative to *other*."""
        if self is other or self == other:
            return 0
        return _compare_node_pointers(self, _depth(self), other, _depth(other))

    # -- rendering ----------------------------------------------------------

    def as_path(self) -> str:
        return "/" if self.parent is None else self.parent.as_path()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.as_path()}>"


def _depth(pointer: Optional[NodePointer]) -> int:
    depth = 0
    while pointer is not None:
        depth += 1
        pointer = pointer.parent
    return depth


def _compare_node_pointers(
        p1: Optional[NodePointer], depth1: int,
        p2: Optional[NodePointer], depth2: int,
) -> int:
    if depth1 < depth2:
        r = _compare_node_pointers(p1, depth1, p2.parent, depth2 - 1)
        return -1 if r == 0 else r
    if depth1 > depth2:
        r = _compare_node_pointers(p1.parent, depth1 - 1, p2, depth2)
        return 1 if r == 0 else r
    if p1 is None and p2 is None:
        return 0
    if p1 is not None and (p1 is p2 or p1 == p2):
        return 0
    if depth1 == 1:
        raise JPathValueError("cannot compare pointers that belong to different trees")
    r = _compare_node_pointers(p1.parent, depth1 - 1, p2.parent, depth2 - 1)
    if r != 0:
        return r
    return p1.parent.compare_child_node_pointers(p1, p2)
