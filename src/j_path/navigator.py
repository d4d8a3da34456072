"""PathNavigator — a small path evaluator over node pointers.

Path syntax
-----------
* ``/``                – the root pointer itself.
* ``/a/b``             – child steps by name; ``*`` matches any name and
                         ``prefix:name`` is accepted.
* ``/items[2]``        – 1-based position among the nodes one step selects
                         for each context node.  A selected node that holds
                         a whole collection (a container around a list, say)
                         is expanded into its elements first.
* ``/m[1][2]``         – every further ``[n]`` descends into the collection
                         held by the element selected so far.
* ``/.[2]``            – ``.`` is the context node itself; with ``[n]`` it
                         selects an element of a root collection.
* ``/user/@xml:lang``  – attribute step.

Paths rendered by ``NodePointer.as_path`` use only this syntax, so they can
be read back with ``get_pointer``.

Relative paths (no leading ``/``) are evaluated from the given pointer as
well; there is no ``..`` or predicate language beyond ``[n]``.

JMESPath
--------
``query`` runs a JMESPath expression over the *plain* value behind a pointer:
containers are unwrapped recursively, so a query never sees a box::

    nav.query(ValueContainer({"a": [1, 2]}), "a[1]")   → 2
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import jmespath
import regex

from .core import (
    WHOLE_COLLECTION,
    JPathNotFoundError,
    JPathSyntaxError,
    NodeNameTest,
    NodePointer,
    PointerContext,
    QName,
)
from .pointers.collection import CollectionPointer
from .shapes import to_plain

logger = logging.getLogger(__name__)

_STEP_RE = regex.compile(
    r"^(?:(?P<self>\.)|(?P<attr>@)?(?P<qname>[^\[\]@/]+))(?:\[(?P<pos>[1-9]\d*)\])*$"
)


@dataclass(frozen=True)
class Step:
    """One parsed path step; ``qname`` is ``None`` for the ``.`` self step."""

    qname: Optional[QName]
    attribute: bool = False
    positions: Tuple[int, ...] = ()


def parse_path(path: str) -> List[Step]:
    """Split *path* into ``Step`` objects.

    ::

        parse_path("/a/b[2]")  → [Step(QName(None, "a")), Step(QName(None, "b"), positions=(2,))]
        parse_path("/.[1]")    → [Step(None, positions=(1,))]
        parse_path("/")        → []
    """
    body = path[1:] if path.startswith("/") else path
    if not body:
        return []
    steps: List[Step] = []
    for raw in body.split("/"):
        m = _STEP_RE.match(raw)
        if m is None:
            raise JPathSyntaxError(f"invalid step {raw!r} in path {path!r}")
        positions = tuple(int(p) for p in m.captures("pos"))
        if m.group("self") is not None:
            steps.append(Step(qname=None, positions=positions))
            continue
        steps.append(Step(
            qname=QName.parse(m.group("qname")),
            attribute=m.group("attr") is not None,
            positions=positions,
        ))
    return steps


def _elements(pointers: List[NodePointer]) -> List[NodePointer]:
    """Replace every pointer that leads to a whole collection by its element pointers."""
    expanded: List[NodePointer] = []
    for pointer in pointers:
        target = pointer.get_value_pointer() if pointer.index == WHOLE_COLLECTION else None
        if isinstance(target, CollectionPointer) and target.index == WHOLE_COLLECTION:
            expanded.extend(target.element(i) for i in range(target.get_length()))
        else:
            expanded.append(pointer)
    return expanded


class PathNavigator:
    """Evaluate paths and JMESPath queries against pointers built from *context*."""

    def __init__(
            self,
            context: PointerContext,
            *,
            jmes_options: Optional[jmespath.Options] = None,
    ) -> None:
        self.context = context
        self._jmes_options = jmes_options

    # -- pointers -----------------------------------------------------------

    def pointer_for(self, value: Any) -> NodePointer:
        """Root pointer over *value* (a ``Container`` gives a ``ContainerPointer``)."""
        return self.context.factories.new_node_pointer(None, value, self.context)

    def _as_pointer(self, root: Any) -> NodePointer:
        return root if isinstance(root, NodePointer) else self.pointer_for(root)

    def iterate_pointers(self, root: Any, path: str) -> List[NodePointer]:
        """Every pointer *path* selects from *root*, in document order."""
        current = [self._as_pointer(root)]
        for step in parse_path(path):
            selected: List[NodePointer] = []
            for pointer in current:
                if step.qname is None:
                    matched = [pointer]
                elif step.attribute:
                    matched = list(pointer.attribute_iterator(step.qname))
                else:
                    matched = list(pointer.child_iterator(NodeNameTest(step.qname), False, None))
                for i, position in enumerate(step.positions):
                    if i:
                        matched = [p.get_value_pointer() for p in matched]
                    matched = _elements(matched)[position - 1:position]
                selected.extend(matched)
            current = selected
            if not current:
                break
        logger.debug("path %r selected %d node(s)", path, len(current))
        return current

    def get_pointer(self, root: Any, path: str) -> Optional[NodePointer]:
        """First pointer *path* selects.

        Raises ``JPathNotFoundError`` when nothing is selected, unless the
        context is lenient, in which case ``None`` is returned.
        """
        pointers = self.iterate_pointers(root, path)
        if pointers:
            return pointers[0]
        if self.context.lenient:
            return None
        raise JPathNotFoundError(f"no value for path {path!r}")

    # -- values -------------------------------------------------------------

    def get_value(self, root: Any, path: str) -> Any:
        pointer = self.get_pointer(root, path)
        return None if pointer is None else pointer.get_value()

    def iterate(self, root: Any, path: str) -> List[Any]:
        """Values of every pointer *path* selects."""
        return [p.get_value() for p in self.iterate_pointers(root, path)]

    def set_value(self, root: Any, path: str, value: Any) -> NodePointer:
        """Write *value* at the first node *path* selects; returns its pointer."""
        pointers = self.iterate_pointers(root, path)
        if not pointers:
            raise JPathNotFoundError(f"no node to set for path {path!r}")
        pointer = pointers[0]
        pointer.set_value(value)
        return pointer

    # -- JMESPath -----------------------------------------------------------

    def query(self, root: Any, expression: str) -> Any:
        """Evaluate JMESPath *expression* over the plain value behind *root*."""
        data = to_plain(self._as_pointer(root).get_value())
        return jmespath.search(expression, data, options=self._jmes_options)
