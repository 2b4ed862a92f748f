"""Live bindings ("parts") between compiled descriptors and tree nodes.

A PartDescriptor is the compile-time record: which kind of mutation, which
expression, which attribute or property. A Part is its runtime counterpart,
bound to one node of one TemplateInstance's cloned tree.

Part kinds form a closed set. Casting and mutation dispatch through a single
``match`` per concern; a kind without a branch is a build error surfaced as
UnimplementedPartError, never a data error.

Kinds:
    TEXT               ``<p>{x}</p>``             set the text node's content
    ATTRIBUTE          ``<a href="{x}">``         set the attribute value
    PROPERTY           ``<x-el .items="{x}">``    assign a host-object field
    BOOLEAN_ATTRIBUTE  ``<input ?disabled="{x}">`` toggle a valueless attribute

Update Cycle:
    1. ``expression.changed(context)`` false: nothing happens.
    2. Otherwise the raw value is cast for the kind.
    3. The cast value is compared with the last applied value (by identity
       for PROPERTY, by value otherwise); only a
       difference reaches the tree.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from tessera.errors import UnimplementedPartError
from tessera.expressions import UNSET, Comparison, Expression, create_expression, differs, replaced
from tessera.profiling import get_render_accumulator
from tessera.protocols import TreeAdapter


class PartKind(Enum):
    """Mutation kind of a part."""

    TEXT = "text"
    ATTRIBUTE = "attribute"
    PROPERTY = "property"
    BOOLEAN_ATTRIBUTE = "boolean-attribute"


@dataclass(frozen=True, slots=True)
class PartDescriptor:
    """Compile-time description of one binding.

    Attributes:
        kind: Mutation kind
        expression: Expression source between the placeholder delimiters
        name: Attribute name (ATTRIBUTE, BOOLEAN_ATTRIBUTE) or property name
            (PROPERTY); None for TEXT

    """

    kind: PartKind
    expression: str
    name: str | None = None

    @property
    def attribute_name(self) -> str | None:
        if self.kind in (PartKind.ATTRIBUTE, PartKind.BOOLEAN_ATTRIBUTE):
            return self.name
        return None

    @property
    def property_name(self) -> str | None:
        return self.name if self.kind is PartKind.PROPERTY else None


class Part:
    """Runtime binding of one descriptor to one node.

    ``value`` holds the last applied (cast) value, UNSET until the first
    mutation.

    """

    __slots__ = ("_adapter", "_compare", "_descriptor", "_expression", "_node", "_value")

    def __init__(self, node: Any, descriptor: PartDescriptor, adapter: TreeAdapter) -> None:
        self._node = node
        self._descriptor = descriptor
        self._adapter = adapter
        # Host-object fields are compared by identity, everything else by value
        self._compare: Comparison = replaced if descriptor.kind is PartKind.PROPERTY else differs
        self._expression: Expression = create_expression(descriptor.expression, compare=self._compare)
        self._value: Any = UNSET

    @property
    def node(self) -> Any:
        return self._node

    @property
    def descriptor(self) -> PartDescriptor:
        return self._descriptor

    @property
    def kind(self) -> PartKind:
        return self._descriptor.kind

    @property
    def expression(self) -> Expression:
        return self._expression

    @property
    def value(self) -> Any:
        return self._value

    def update(self, context: Mapping[str, Any]) -> bool:
        """Apply ``context`` to the bound node.

        Returns:
            True if the node was mutated.
        """
        if not self._expression.changed(context):
            return False

        acc = get_render_accumulator()
        if acc is not None:
            acc.record_evaluation()

        raw = self._expression.get_value(context)
        if raw is UNSET:
            # Dynamic expression still waiting for its function
            return False

        value = self._cast(raw)
        if not self._compare(value, self._value):
            return False

        self._apply(value)
        self._value = value
        if acc is not None:
            acc.record_mutation(self._descriptor.kind)
        return True

    def _cast(self, value: Any) -> Any:
        match self._descriptor.kind:
            case PartKind.TEXT | PartKind.ATTRIBUTE:
                return str(value) if value else ""
            case PartKind.BOOLEAN_ATTRIBUTE:
                return bool(value)
            case PartKind.PROPERTY:
                return value
            case kind:
                raise UnimplementedPartError(kind)

    def _apply(self, value: Any) -> None:
        adapter = self._adapter
        descriptor = self._descriptor
        match descriptor.kind:
            case PartKind.TEXT:
                adapter.set_text(self._node, value)
            case PartKind.ATTRIBUTE:
                adapter.set_attribute(self._node, descriptor.name, value)
            case PartKind.PROPERTY:
                adapter.set_property(self._node, descriptor.name, value)
            case PartKind.BOOLEAN_ATTRIBUTE:
                adapter.toggle_attribute(self._node, descriptor.name, value)
            case kind:
                raise UnimplementedPartError(kind)

    def __repr__(self) -> str:
        kind = getattr(self._descriptor.kind, "name", self._descriptor.kind)
        return f"Part({kind}, {self._descriptor.expression!r}, value={self._value!r})"


def create_part(node: Any, descriptor: PartDescriptor, adapter: TreeAdapter) -> Part:
    """Bind ``descriptor`` to ``node``."""
    return Part(node, descriptor, adapter)


def instantiate_parts(
    content: Any,
    table: Mapping[int, Iterable[PartDescriptor]],
    adapter: TreeAdapter,
) -> list[Part]:
    """Walk a fresh clone and bind every descriptor to its node.

    Uses the same traversal the compiler used, so position ``i`` in the walk
    is the node the compiler registered at index ``i``. The table is only
    read.

    """
    parts: list[Part] = []
    for index, node in enumerate(adapter.walk(content)):
        for descriptor in table.get(index, ()):
            parts.append(create_part(node, descriptor, adapter))
    return parts


__all__ = [
    "Part",
    "PartDescriptor",
    "PartKind",
    "create_part",
    "instantiate_parts",
]
