"""Expression evaluators for Tessera.

An evaluator answers two questions for each context patch:

- ``changed(context)``: does this patch carry anything that could alter my
  value?
- ``get_value(context)``: absorb the patch and produce the current value.

StaticExpression looks up one key. DynamicExpression calls a context-held
function with independently tracked parameters. Both remember what they last
saw, so a patch that omits their keys, or repeats the values already seen,
reports no change.

Partial Updates:
    DynamicExpression keeps every parameter it has been given. A later patch
    only needs to carry the parameters that moved::

        expr = create_expression("add(a, b)")
        expr.get_value({"add": operator.add, "a": 1, "b": 2})  # 3
        expr.changed({"b": 5})                                 # True
        expr.get_value({"b": 5})                               # 6, a stays 1

Thread Safety:
    Evaluators carry mutable state and belong to exactly one Part.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Final

from tessera.errors import ExpressionError
from tessera.grammar import parse_expression


class _Unset:
    """Type of the UNSET sentinel."""

    __slots__ = ()
    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = object.__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNSET"


# Distinct from every application value, None and False included
UNSET: Final = _Unset()


def differs(value: Any, previous: Any) -> bool:
    """True if ``value`` should count as a change from ``previous``.

    Same object: no change. Different types: change, so ``1`` -> ``True`` or
    ``1`` -> ``1.0`` still re-renders. Otherwise ``!=`` decides; values whose
    comparison raises or has no truth value (arrays) count as changed.
    """
    if value is previous:
        return False
    if type(value) is not type(previous):
        return True
    try:
        return bool(value != previous)
    except Exception:
        return True


def replaced(value: Any, previous: Any) -> bool:
    """True unless ``value`` is the very object seen last.

    Used for host-object fields: an equal but distinct object is still handed
    to the node, so the node never keeps a reference the caller has let go of.
    """
    return value is not previous


Comparison = Callable[[Any, Any], bool]


class StaticExpression:
    """Direct lookup of a single context key."""

    __slots__ = ("_compare", "_key", "_value")

    def __init__(self, key: str, *, compare: Comparison = differs) -> None:
        self._key = key
        self._compare = compare
        self._value: Any = UNSET

    @property
    def key(self) -> str:
        return self._key

    @property
    def keys(self) -> tuple[str, ...]:
        return (self._key,)

    def changed(self, context: Mapping[str, Any]) -> bool:
        return self._key in context and self._compare(context[self._key], self._value)

    def get_value(self, context: Mapping[str, Any]) -> Any:
        value = context.get(self._key)
        self._value = value
        return value

    def __repr__(self) -> str:
        return f"StaticExpression({self._key!r})"


class DynamicExpression:
    """Call of a context-held function with positional parameters.

    Parameters never supplied are passed as None. The function itself has
    no such default: until a patch provides it, ``get_value`` returns UNSET
    and the owning part withholds its update.

    """

    __slots__ = ("_compare", "_function", "_function_key", "_params", "_source", "_store")

    def __init__(
        self,
        function_key: str,
        params: tuple[str, ...],
        source: str | None = None,
        *,
        compare: Comparison = differs,
    ) -> None:
        self._function_key = function_key
        self._params = params
        self._source = source if source is not None else f"{function_key}({', '.join(params)})"
        self._compare = compare
        self._function: Any = UNSET
        self._store: dict[str, Any] = dict.fromkeys(params)

    @property
    def function_key(self) -> str:
        return self._function_key

    @property
    def params(self) -> tuple[str, ...]:
        return self._params

    @property
    def keys(self) -> tuple[str, ...]:
        return (self._function_key, *self._params)

    def changed(self, context: Mapping[str, Any]) -> bool:
        return self._params_changed(context) or self._function_changed(context)

    def _params_changed(self, context: Mapping[str, Any]) -> bool:
        return any(
            param in context and self._compare(context[param], self._store[param])
            for param in self._params
        )

    def _function_changed(self, context: Mapping[str, Any]) -> bool:
        return self._function_key in context and differs(
            context[self._function_key], self._function
        )

    def get_value(self, context: Mapping[str, Any]) -> Any:
        """Merge the patch into stored state and call the function.

        A patch carrying a non-callable function is rejected whole: nothing
        is stored, so resending it raises again.

        Raises:
            ExpressionError: If the function is not callable.
        """
        function = context.get(self._function_key, self._function)
        if function is not UNSET and not callable(function):
            msg = f"'{self._function_key}' is {type(function).__name__}, not callable"
            raise ExpressionError(self._source, msg)

        for param in self._params:
            if param in context:
                self._store[param] = context[param]
        self._function = function

        if function is UNSET:
            return UNSET
        return function(*(self._store[param] for param in self._params))

    def __repr__(self) -> str:
        return f"DynamicExpression({self._source!r})"


Expression = StaticExpression | DynamicExpression


def create_expression(source: str, *, compare: Comparison = differs) -> Expression:
    """Build the evaluator for an expression source.

    ``compare`` decides whether a patched value counts as a change (default:
    ``differs``; property parts pass ``replaced``).

    Example:
        >>> create_expression("name")
        StaticExpression('name')
        >>> create_expression("fmt(a, b)")
        DynamicExpression('fmt(a, b)')

    """
    spec = parse_expression(source)
    if spec.function is not None:
        return DynamicExpression(spec.function, spec.params, source=source.strip(), compare=compare)
    return StaticExpression(spec.key or "", compare=compare)


__all__ = [
    "UNSET",
    "DynamicExpression",
    "Comparison",
    "Expression",
    "StaticExpression",
    "create_expression",
    "differs",
    "replaced",
]
