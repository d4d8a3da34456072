"""Pointers sub-package — concrete ``NodePointer`` variants and their factories.

container  – ``ContainerPointer``, the transparent indirection over a ``Container``
collection – ``CollectionPointer`` for lists / tuples / sets and their elements
mapping    – ``MapPointer`` and its entries (``PropertyPointer``)
value      – leaf ``ValuePointer`` and the ``xml:lang`` attribute pointer
iterators  – child iterators shared by the variants
factories  – ``PointerFactory`` implementations + ``build_default_factories``
"""

from .collection import CollectionPointer
from .container import ContainerPointer
from .factories import (
    CollectionPointerFactory,
    ContainerPointerFactory,
    MapPointerFactory,
    ValuePointerFactory,
    build_default_factories,
)
from .iterators import CollectionChildIterator, PropertyIterator, start_after
from .mapping import MapPointer, PropertyPointer
from .value import LangAttributePointer, ValuePointer

__all__ = [
    "CollectionPointer",
    "ContainerPointer",
    "MapPointer",
    "PropertyPointer",
    "ValuePointer",
    "LangAttributePointer",
    "PropertyIterator",
    "CollectionChildIterator",
    "start_after",
    "ContainerPointerFactory",
    "CollectionPointerFactory",
    "MapPointerFactory",
    "ValuePointerFactory",
    "build_default_factories",
]
