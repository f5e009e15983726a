"""Debug rendering of operand values.

``debug_repr`` dispatches on the value's type, typeclass style: exact type
first, then the MRO, then ``repr()``. Register renderers for types whose
``repr`` is unhelpful in a failure report::

    @debug_repr.instance(Decimal)
    def _(value: Decimal) -> str:
        return f'Decimal({value})'
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import wrapt

__all__ = ['DebugRenderer', 'debug_repr']


class DebugRenderer(wrapt.ObjectProxy):
    """A rendering function with per-type instances.

    Attributes:
        _self_name: Name of the wrapped default function.
        _self_instances: Mapping of types to their renderers.
    """

    def __init__(self, default_fn: Callable[[Any], str]) -> None:
        super().__init__(default_fn)
        self._self_name = default_fn.__name__
        self._self_instances: dict[type, Callable[[Any], str]] = {}

    def instance(self, type_: type) -> Callable[[Callable[[Any], str]], Callable[[Any], str]]:
        """Register a renderer for ``type_`` and its subclasses."""

        def decorator(fn: Callable[[Any], str]) -> Callable[[Any], str]:
            self._self_instances[type_] = fn
            return fn

        return decorator

    def remove(self, type_: type) -> None:
        """Drop the renderer registered for ``type_``, if any."""
        self._self_instances.pop(type_, None)

    def _find_instance(self, value: Any) -> Callable[[Any], str] | None:
        for base in type(value).__mro__:
            if base in self._self_instances:
                return self._self_instances[base]
        return None

    def __call__(self, value: Any) -> str:
        fn = self._find_instance(value)
        if fn is not None:
            return fn(value)
        return self.__wrapped__(value)

    def __repr__(self) -> str:
        return f'<renderer {self._self_name} with {len(self._self_instances)} instances>'


@DebugRenderer
def debug_repr(value: Any) -> str:
    """Render a value for a failure report."""
    return repr(value)
