"""Tests for core infrastructure."""

import pytest

from j_path import (
    EmptyNodeIterator,
    FactoryNode,
    JPathError,
    JPathNotFoundError,
    JPathSyntaxError,
    JPathValueError,
    ListNodeIterator,
    MapPointer,
    NodeNameTest,
    PointerFactory,
    PointerFactoryRegistry,
    PropertyPointer,
    QName,
    ShapeNode,
    ValuePointer,
    ValueShape,
    ValueShapeRegistry,
)


class TestQName:
    """QName parsing and rendering."""

    def test_parse_local_name(self):
        """Unprefixed names."""
        assert QName.parse("item") == QName(None, "item")
        assert QName.parse("item_2") == QName(None, "item_2")
        assert QName.parse("0") == QName(None, "0")

    def test_parse_prefixed_name(self):
        """prefix:name splits on the colon."""
        assert QName.parse("xml:lang") == QName("xml", "lang")

    def test_parse_wildcard(self):
        """* is a valid local name."""
        assert QName.parse("*") == QName(None, "*")
        assert QName.parse("ns:*") == QName("ns", "*")

    def test_parse_invalid(self):
        """Spaces and empty names are rejected."""
        with pytest.raises(JPathSyntaxError):
            QName.parse("a b")
        with pytest.raises(JPathSyntaxError):
            QName.parse("")
        with pytest.raises(ValueError):
            QName.parse(":x")

    def test_str(self):
        """Rendering with and without prefix."""
        assert str(QName("xml", "lang")) == "xml:lang"
        assert str(QName(None, "a")) == "a"


class TestErrors:
    """Error hierarchy."""

    def test_hierarchy(self):
        """Every error is a JPathError and a matching builtin."""
        assert issubclass(JPathNotFoundError, JPathError)
        assert issubclass(JPathNotFoundError, KeyError)
        assert issubclass(JPathSyntaxError, ValueError)
        assert issubclass(JPathValueError, TypeError)

    def test_not_found_message(self):
        """KeyError quoting is not applied to the message."""
        assert str(JPathNotFoundError("no value for path '/a'")) == "no value for path '/a'"


class TestNodeIterators:
    """ListNodeIterator and EmptyNodeIterator."""

    def test_positions(self, ctx):
        """Positions are 1-based."""
        a = ValuePointer(None, None, "a", ctx)
        b = ValuePointer(None, None, "b", ctx)
        it = ListNodeIterator([a, b])

        assert it.position == 0
        assert it.node_pointer is None
        assert it.set_position(2) is True
        assert it.node_pointer is b
        assert it.set_position(3) is False
        assert it.node_pointer is None

    def test_iteration(self, ctx):
        """Iterating yields every pointer in order."""
        pointers = [ValuePointer(None, None, v, ctx) for v in (1, 2, 3)]

        assert list(ListNodeIterator(pointers)) == pointers

    def test_empty(self):
        """EmptyNodeIterator yields nothing."""
        it = EmptyNodeIterator()

        assert list(it) == []
        assert it.set_position(1) is False


class _TupleOnlyShape(ValueShape):
    def matches(self, value):
        return isinstance(value, tuple)

    def is_collection(self, value):
        return False

    def length(self, value):
        return 99

    def element_at(self, value, index):
        return "tuple"

    def assign(self, value, index, new):
        raise JPathValueError("no")


class TestValueShapeRegistry:
    """Priority dispatch of value shapes."""

    def test_empty_registry_raises(self):
        """No shape → JPathError."""
        with pytest.raises(JPathError):
            ValueShapeRegistry().resolve(1)

    def test_null_needs_no_shape(self):
        """None is handled by the registry itself."""
        shapes = ValueShapeRegistry()

        assert shapes.length_of(None) == 1
        assert shapes.is_collection_like(None) is False
        assert shapes.element_at(None, 0) is None
        assert shapes.whole_value_of(None) is None

    def test_higher_priority_wins(self, ctx):
        """A registered shape overrides the default for the values it matches."""
        ctx.shapes.register(ShapeNode(name="tuple", priority=100, shape=_TupleOnlyShape()))

        assert ctx.shapes.is_collection_like((1, 2)) is False
        assert ctx.shapes.length_of((1, 2)) == 99
        assert ctx.shapes.is_collection_like([1, 2]) is True

    def test_nodes_sorted(self, ctx):
        """nodes() is priority-descending."""
        names = [n.name for n in ctx.shapes.nodes()]

        assert names == ["set", "sequence", "scalar"]

    def test_order_kept_across_registrations(self):
        """Late registrations slot in by priority; ties keep registration order."""
        shapes = ValueShapeRegistry()
        shapes.register(ShapeNode(name="low", priority=0, shape=_TupleOnlyShape()))
        shapes.register(ShapeNode(name="high", priority=50, shape=_TupleOnlyShape()))
        shapes.register(ShapeNode(name="low-2", priority=0, shape=_TupleOnlyShape()))

        assert [n.name for n in shapes.nodes()] == ["high", "low", "low-2"]

    def test_nodes_returns_a_copy(self, ctx):
        """Mutating the returned list does not touch the table."""
        ctx.shapes.nodes().clear()

        assert ctx.shapes.is_collection_like([1]) is True
        assert len(ctx.shapes.nodes()) == 3


class _NeverFactory(PointerFactory):
    def create_node_pointer(self, name, value, context):
        return None

    def create_child_node_pointer(self, parent, name, value):
        return None


class TestPointerFactoryRegistry:
    """Priority dispatch of pointer factories."""

    def test_nothing_applies(self, ctx):
        """A registry whose factories all decline raises JPathError."""
        registry = PointerFactoryRegistry()
        registry.register(FactoryNode(name="never", priority=0, factory=_NeverFactory()))

        with pytest.raises(JPathError):
            registry.new_node_pointer(None, 1, ctx)
        with pytest.raises(JPathError):
            registry.new_child_node_pointer(MapPointer(None, {}, ctx), None, 1)

    def test_default_nodes(self, ctx):
        """Built-in factories in priority order."""
        names = [n.name for n in ctx.factories.nodes()]

        assert names == ["container", "collection", "mapping", "value"]

    def test_late_registration_takes_precedence(self, ctx):
        """A factory registered after the defaults is still tried by priority."""
        ctx.factories.register(FactoryNode(name="never", priority=500, factory=_NeverFactory()))

        assert [n.name for n in ctx.factories.nodes()][0] == "never"
        assert isinstance(ctx.factories.new_node_pointer(None, {"a": 1}, ctx), MapPointer)


class TestNodePointerBase:
    """Behaviour shared by every pointer."""

    def test_root_needs_context(self):
        """A pointer without parent and context cannot be built."""
        with pytest.raises(JPathError):
            ValuePointer(None, None, 1)

    def test_root_node(self, ctx):
        """get_root_node walks to the top of the chain."""
        root = MapPointer(None, {"a": 1}, ctx)
        child = PropertyPointer(root, "a")
        leaf = child.get_value_pointer()

        assert leaf.get_root_node() is root
        assert root.is_root() is True
        assert child.is_root() is False

    def test_name_test_prefix_mismatch(self, ctx):
        """Prefixed tests do not match unprefixed names without a namespace."""
        prop = PropertyPointer(MapPointer(None, {"a": 1}, ctx), "a")

        assert prop.test_node(NodeNameTest(QName(None, "a"))) is True
        assert prop.test_node(NodeNameTest(QName("x", "a"))) is False
        assert prop.test_node(NodeNameTest(QName(None, "b"))) is False
        assert prop.test_node(None) is True

    def test_compare_different_trees(self, ctx):
        """Pointers without a common root cannot be ordered."""
        a = MapPointer(None, {}, ctx)
        b = MapPointer(None, {}, ctx)

        with pytest.raises(JPathValueError):
            a.compare_to(b)

    def test_compare_to_self(self, ctx):
        """A pointer is equal in order to itself."""
        a = MapPointer(None, {}, ctx)

        assert a.compare_to(a) == 0
