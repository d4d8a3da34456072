"""j_path — node pointers for path navigation over plain Python data.

Quick start::

    from j_path import ValueContainer, build_default_navigator

    nav = build_default_navigator()
    data = {"user": ValueContainer({"name": "Alice"})}
    nav.get_value(data, "/user/name")        → "Alice"
    nav.get_pointer(data, "/user/name").as_path()   → "/user/name"
"""

from .containers import KeyedContainer, LazyContainer, ValueContainer
from .core import (
    NODE_TYPE_COMMENT,
    NODE_TYPE_NODE,
    NODE_TYPE_PI,
    NODE_TYPE_TEXT,
    WHOLE_COLLECTION,
    Container,
    EmptyNodeIterator,
    FactoryNode,
    JPathError,
    JPathNotFoundError,
    JPathSyntaxError,
    JPathValueError,
    ListNodeIterator,
    NodeIterator,
    NodeNameTest,
    NodePointer,
    NodeTest,
    NodeTypeTest,
    PointerContext,
    PointerFactory,
    PointerFactoryRegistry,
    QName,
    ShapeNode,
    ValueShape,
    ValueShapeRegistry,
)
from .factory import build_default_context, build_default_navigator
from .navigator import PathNavigator, Step, parse_path
from .pointers import (
    CollectionPointer,
    CollectionPointerFactory,
    ContainerPointer,
    ContainerPointerFactory,
    LangAttributePointer,
    MapPointer,
    MapPointerFactory,
    PropertyPointer,
    ValuePointer,
    ValuePointerFactory,
    build_default_factories,
)
from .shapes import (
    ScalarShape,
    SequenceShape,
    SetShape,
    build_default_shapes,
    to_plain,
    unwrap,
)

__all__ = [
    # core
    "WHOLE_COLLECTION",
    "NODE_TYPE_NODE",
    "NODE_TYPE_TEXT",
    "NODE_TYPE_COMMENT",
    "NODE_TYPE_PI",
    "JPathError",
    "JPathNotFoundError",
    "JPathSyntaxError",
    "JPathValueError",
    "QName",
    "NodeTest",
    "NodeNameTest",
    "NodeTypeTest",
    "NodeIterator",
    "ListNodeIterator",
    "EmptyNodeIterator",
    "Container",
    "ValueShape",
    "ShapeNode",
    "ValueShapeRegistry",
    "PointerFactory",
    "FactoryNode",
    "PointerFactoryRegistry",
    "PointerContext",
    "NodePointer",
    # containers
    "ValueContainer",
    "LazyContainer",
    "KeyedContainer",
    # shapes
    "SequenceShape",
    "SetShape",
    "ScalarShape",
    "build_default_shapes",
    "unwrap",
    "to_plain",
    # pointers
    "ContainerPointer",
    "CollectionPointer",
    "MapPointer",
    "PropertyPointer",
    "ValuePointer",
    "LangAttributePointer",
    "ContainerPointerFactory",
    "CollectionPointerFactory",
    "MapPointerFactory",
    "ValuePointerFactory",
    "build_default_factories",
    # navigation
    "PathNavigator",
    "Step",
    "parse_path",
    # factory
    "build_default_context",
    "build_default_navigator",
]
