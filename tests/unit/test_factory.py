"""Tests for build_default_context / build_default_navigator."""

import jmespath
from jmespath import functions as jp_functions

from j_path import (
    CollectionPointer,
    ContainerPointer,
    KeyedContainer,
    MapPointer,
    PathNavigator,
    PointerFactoryRegistry,
    ValueContainer,
    ValuePointer,
    build_default_context,
    build_default_factories,
    build_default_navigator,
    build_default_shapes,
)


class _ShoutFunctions(jp_functions.Functions):
    @jp_functions.signature({"types": ["string"]})
    def _func_shout(self, s):
        return s.upper()


class TestBuildDefaultContext:
    """Context assembly."""

    def test_defaults(self):
        """Locale en, strict, default registries."""
        ctx = build_default_context()

        assert ctx.locale == "en"
        assert ctx.lenient is False
        assert [n.name for n in ctx.shapes.nodes()] == ["set", "sequence", "scalar"]
        assert [n.name for n in ctx.factories.nodes()] == ["container", "collection", "mapping", "value"]

    def test_overrides(self):
        """Explicit registries are used as given."""
        shapes = build_default_shapes()
        factories = build_default_factories()
        ctx = build_default_context(locale="fr", shapes=shapes, factories=factories, lenient=True)

        assert ctx.locale == "fr"
        assert ctx.shapes is shapes
        assert ctx.factories is factories
        assert ctx.lenient is True

    def test_fresh_registries_per_context(self):
        """Two default contexts do not share registries."""
        assert build_default_context().factories is not build_default_context().factories

    def test_root_pointer_variants(self, ctx):
        """Each value family gets its own root pointer."""
        new = ctx.factories.new_node_pointer

        assert isinstance(new(None, ValueContainer(1), ctx), ContainerPointer)
        assert isinstance(new(None, KeyedContainer({}, "k"), ctx), ContainerPointer)
        assert isinstance(new(None, [1], ctx), CollectionPointer)
        assert isinstance(new(None, {1, 2}, ctx), CollectionPointer)
        assert isinstance(new(None, {"a": 1}, ctx), MapPointer)
        assert isinstance(new(None, "text", ctx), ValuePointer)
        assert isinstance(new(None, None, ctx), ValuePointer)


class TestBuildDefaultNavigator:
    """Navigator assembly."""

    def test_context_options_are_passed_through(self):
        """Keyword options reach the context."""
        nav = build_default_navigator(locale="de", lenient=True)

        assert isinstance(nav, PathNavigator)
        assert nav.context.locale == "de"
        assert nav.context.lenient is True
        assert nav.get_value({"a": 1}, "/@xml:lang") == "de"

    def test_custom_jmes_options(self):
        """Custom JMESPath functions are available to queries."""
        nav = build_default_navigator(jmes_options=jmespath.Options(custom_functions=_ShoutFunctions()))

        assert nav.query({"a": ValueContainer("x")}, "shout(a)") == "X"

    def test_custom_factories(self):
        """An empty factory registry is honoured (and fails loudly)."""
        nav = build_default_navigator(factories=PointerFactoryRegistry())

        assert nav.context.factories.nodes() == []
