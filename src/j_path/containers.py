"""Concrete ``Container`` implementations.

ValueContainer
    Holds a value directly.

LazyContainer
    Produces its value with a loader on first read, then keeps it.

KeyedContainer
    A property reference: reads and writes one key of a mapping.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, MutableMapping

from .core import Container

logger = logging.getLogger(__name__)

_UNLOADED = object()


class ValueContainer(Container):
    """A mutable box around a single value."""

    def __init__(self, value: Any = None) -> None:
        self._value = value

    def get_value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"ValueContainer({self._value!r})"


class LazyContainer(Container):
    """Compute the value with *loader* when first needed.

    ``set_value`` replaces the loaded value without calling the loader;
    ``reset`` drops it so the next read loads again.
    """

    def __init__(self, loader: Callable[[], Any]) -> None:
        self._loader = loader
        self._value: Any = _UNLOADED

    @property
    def loaded(self) -> bool:
        return self._value is not _UNLOADED

    def get_value(self) -> Any:
        if self._value is _UNLOADED:
            logger.debug("loading lazy container value via %r", self._loader)
            self._value = self._loader()
        return self._value

    def set_value(self, value: Any) -> None:
        self._value = value

    def reset(self) -> None:
        self._value = _UNLOADED


class KeyedContainer(Container):
    """Reference to ``target[key]``.  A missing key reads as ``None``."""

    def __init__(self, target: MutableMapping[Any, Any], key: Any) -> None:
        self.target = target
        self.key = key

    def get_value(self) -> Any:
        return self.target.get(self.key)

    def set_value(self, value: Any) -> None:
        self.target[self.key] = value

    def __repr__(self) -> str:
        return f"KeyedContainer(key={self.key!r})"
