"""Context factory — the single place where all pieces are assembled.

``build_default_context`` is the recommended entry point for users who want
working pointers without hand-wiring every registry.

Customisation points:

* **locale**    – language tag reported by ``xml:lang`` (default ``"en"``).
* **shapes**    – ``ValueShapeRegistry``; ``None`` → ``build_default_shapes()``.
* **factories** – ``PointerFactoryRegistry``; ``None`` → ``build_default_factories()``.
* **lenient**   – navigator returns ``None`` instead of raising for empty paths.
"""

from __future__ import annotations

from typing import Any, Optional

import jmespath

from .core import PointerContext, PointerFactoryRegistry, ValueShapeRegistry
from .navigator import PathNavigator
from .pointers.factories import build_default_factories
from .shapes import build_default_shapes

DEFAULT_LOCALE = "en"


def build_default_context(
        *,
        locale: Optional[str] = None,
        shapes: Optional[ValueShapeRegistry] = None,
        factories: Optional[PointerFactoryRegistry] = None,
        lenient: bool = False,
) -> PointerContext:
    """Assemble a ``PointerContext`` with the standard registries.

    What gets wired
    ---------------
    shapes
        * ``SetShape``       (priority  20)
        * ``SequenceShape``  (priority  10)
        * ``ScalarShape``    (priority -999, catch-all)

    factories
        * ``ContainerPointerFactory``  (priority  100)
        * ``CollectionPointerFactory`` (priority   50)
        * ``MapPointerFactory``        (priority   40)
        * ``ValuePointerFactory``      (priority -999, catch-all)

    Example::

        ctx = build_default_context(locale="de")
        ptr = ctx.factories.new_node_pointer(None, ValueContainer({"a": 1}), ctx)
        ptr.get_value()   → {"a": 1}
    """
    return PointerContext(
        locale=locale or DEFAULT_LOCALE,
        shapes=shapes if shapes is not None else build_default_shapes(),
        factories=factories if factories is not None else build_default_factories(),
        lenient=lenient,
    )


def build_default_navigator(
        *,
        jmes_options: Optional[jmespath.Options] = None,
        **context_options: Any,
) -> PathNavigator:
    """``PathNavigator`` over ``build_default_context(**context_options)``."""
    return PathNavigator(build_default_context(**context_options), jmes_options=jmes_options)
