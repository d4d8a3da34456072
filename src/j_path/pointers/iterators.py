"""Child iterators shared by the pointer variants."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from ..core import WHOLE_COLLECTION, Container, ListNodeIterator, NodePointer, NodeTest

if TYPE_CHECKING:
    from .collection import CollectionPointer
    from .mapping import MapPointer


def start_after(pointers: List[NodePointer], start_with: Optional[NodePointer]) -> List[NodePointer]:
    """Drop every pointer up to and including *start_with*.

    ``None`` keeps the list as is; a *start_with* that is not in the list
    leaves nothing to iterate.
    """
    if start_with is None:
        return pointers
    for i, pointer in enumerate(pointers):
        if pointer == start_with:
            return pointers[i + 1:]
    return []


class PropertyIterator(ListNodeIterator):
    """Walk the entries of a mapping as ``PropertyPointer`` children.

    A key whose raw value is a collection yields one pointer per element;
    any other key (including one that holds a ``Container``) yields a single
    whole-value pointer.
    """

    def __init__(
            self,
            owner: MapPointer,
            test: Optional[NodeTest],
            reverse: bool,
            start_with: Optional[NodePointer],
    ) -> None:
        from .mapping import PropertyPointer

        shapes = owner.context.shapes
        pointers: List[NodePointer] = []
        for key, raw in owner.mapping.items():
            if not isinstance(raw, Container) and shapes.is_collection_like(raw):
                candidates = [
                    PropertyPointer(owner, key, index=i)
                    for i in range(shapes.length_of(raw))
                ]
            else:
                candidates = [PropertyPointer(owner, key, index=WHOLE_COLLECTION)]
            pointers.extend(p for p in candidates if p.test_node(test))
        if reverse:
            pointers.reverse()
        super().__init__(start_after(pointers, start_with))


class CollectionChildIterator(ListNodeIterator):
    """Walk the children of every element of a whole collection, element by element.

    *owner* is a whole-collection pointer; each element pointer comes from
    ``owner.element(i)`` so the children keep the element position in their
    paths.
    """

    def __init__(
            self,
            owner: CollectionPointer,
            test: Optional[NodeTest],
            reverse: bool,
            start_with: Optional[NodePointer],
    ) -> None:
        pointers: List[NodePointer] = []
        for i in range(owner.get_length()):
            pointers.extend(owner.element(i).child_iterator(test, False, None))
        if reverse:
            pointers.reverse()
        super().__init__(start_after(pointers, start_with))
