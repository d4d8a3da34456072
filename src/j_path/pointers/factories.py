"""Pointer factories — which pointer variant fits a value.

Registered in a ``PointerFactoryRegistry`` by ``build_default_factories``:

* ``ContainerPointerFactory``  (priority  100) — ``Container`` instances.
* ``CollectionPointerFactory`` (priority   50) — collection-like values.
* ``MapPointerFactory``        (priority   40) — ``Mapping`` instances.
* ``ValuePointerFactory``      (priority -999) — everything else.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from ..core import (
    Container,
    FactoryNode,
    NodePointer,
    PointerContext,
    PointerFactory,
    PointerFactoryRegistry,
    QName,
)
from .collection import CollectionPointer
from .container import ContainerPointer
from .mapping import MapPointer
from .value import ValuePointer

logger = logging.getLogger(__name__)


class ContainerPointerFactory(PointerFactory):
    """Wrap containers in a transparent ``ContainerPointer``; the name is dropped."""

    def create_node_pointer(self, name, value, context):
        if isinstance(value, Container):
            return ContainerPointer.for_root(value, context)
        return None

    def create_child_node_pointer(self, parent, name, value):
        if isinstance(value, Container):
            return ContainerPointer(parent, value)
        return None


class CollectionPointerFactory(PointerFactory):
    """Lists, tuples, sets: anything the value-shape table calls a collection."""

    def create_node_pointer(self, name, value, context):
        if context.shapes.is_collection_like(value):
            return CollectionPointer(None, value, context, name=name)
        return None

    def create_child_node_pointer(self, parent, name, value):
        if parent.context.shapes.is_collection_like(value):
            return CollectionPointer(parent, value, name=name)
        return None


class MapPointerFactory(PointerFactory):
    def create_node_pointer(self, name, value, context):
        if isinstance(value, Mapping):
            return MapPointer(None, value, context, name=name)
        return None

    def create_child_node_pointer(self, parent, name, value):
        if isinstance(value, Mapping):
            return MapPointer(parent, value, name=name)
        return None


class ValuePointerFactory(PointerFactory):
    """Catch-all: a leaf ``ValuePointer``."""

    def create_node_pointer(
            self, name: Optional[QName], value: Any, context: PointerContext,
    ) -> Optional[NodePointer]:
        logger.debug("no structured pointer for %s, using ValuePointer", type(value).__name__)
        return ValuePointer(None, name, value, context)

    def create_child_node_pointer(
            self, parent: NodePointer, name: Optional[QName], value: Any,
    ) -> Optional[NodePointer]:
        return ValuePointer(parent, name, value)


def build_default_factories() -> PointerFactoryRegistry:
    """Registry with the four built-in factories."""
    factories = PointerFactoryRegistry()
    factories.register(FactoryNode(name="container", priority=100, factory=ContainerPointerFactory()))
    factories.register(FactoryNode(name="collection", priority=50, factory=CollectionPointerFactory()))
    factories.register(FactoryNode(name="mapping", priority=40, factory=MapPointerFactory()))
    factories.register(FactoryNode(name="value", priority=-999, factory=ValuePointerFactory()))
    return factories
