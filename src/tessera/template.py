"""Compiled templates and their live instances.

A Template is the immutable product of compilation: the rewritten tree plus
the table mapping node index to the descriptors bound there. Each call to
``create_instance`` clones that tree and binds fresh parts to the clone, so
any number of instances can coexist without sharing mutable state.

Example:
    >>> from tessera import compile_markup
    >>> template = compile_markup('<p class="{tone}">Hello, {name}!</p>')
    >>> instance = template.create_instance({"tone": "warm", "name": "Ada"})
    >>> instance.render()
    '<p class="warm">Hello, Ada!</p>'
    >>> instance.update({"name": "Grace"})
    >>> instance.render()
    '<p class="warm">Hello, Grace!</p>'

Thread Safety:
    A Template is safe to share: instantiation only reads it. A
    TemplateInstance is not; its parts are mutated in place by ``update``.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from tessera.parts import Part, PartDescriptor, instantiate_parts
from tessera.profiling import get_render_accumulator
from tessera.protocols import TreeAdapter
from tessera.tree import DEFAULT_ADAPTER
from tessera.utils.logger import get_logger

logger = get_logger(__name__)


class Template:
    """Compiled, reusable template.

    Build with ``tessera.compile`` or ``tessera.compile_markup``.

    """

    __slots__ = ("_adapter", "_content", "_parts")

    def __init__(
        self,
        content: Any,
        parts: Mapping[int, tuple[PartDescriptor, ...]],
        *,
        adapter: TreeAdapter | None = None,
    ) -> None:
        self._content = content
        self._parts: Mapping[int, tuple[PartDescriptor, ...]] = MappingProxyType(
            {index: tuple(descriptors) for index, descriptors in parts.items()}
        )
        self._adapter = adapter or DEFAULT_ADAPTER

    @property
    def content(self) -> Any:
        """Compiled tree. Treat as read-only; instances work on clones."""
        return self._content

    @property
    def parts(self) -> Mapping[int, tuple[PartDescriptor, ...]]:
        """Read-only mapping of node index to descriptors."""
        return self._parts

    @property
    def adapter(self) -> TreeAdapter:
        return self._adapter

    @property
    def part_count(self) -> int:
        return sum(len(descriptors) for descriptors in self._parts.values())

    def create_instance(self, initial_context: Mapping[str, Any] | None = None) -> TemplateInstance:
        """Clone the compiled tree and bind a fresh set of parts to it.

        Args:
            initial_context: If given, applied with one full update.

        """
        content = self._adapter.clone(self._content)
        parts = instantiate_parts(content, self._parts, self._adapter)
        logger.debug("Created template instance with %d parts", len(parts))

        acc = get_render_accumulator()
        if acc is not None:
            acc.record_instance(len(parts))

        return TemplateInstance(content, parts, initial_context, adapter=self._adapter)

    def __repr__(self) -> str:
        return f"Template(parts={self.part_count})"


class TemplateInstance:
    """One live rendering of a Template.

    Owns its cloned tree (``content``) and the parts bound into it, in node
    index order.

    """

    __slots__ = ("_adapter", "_content", "_parts")

    def __init__(
        self,
        content: Any,
        parts: list[Part] | tuple[Part, ...],
        initial_context: Mapping[str, Any] | None = None,
        *,
        adapter: TreeAdapter | None = None,
    ) -> None:
        self._content = content
        self._parts = tuple(parts)
        self._adapter = adapter or DEFAULT_ADAPTER
        if initial_context is not None:
            self.update(initial_context)

    @property
    def content(self) -> Any:
        return self._content

    @property
    def parts(self) -> tuple[Part, ...]:
        return self._parts

    def update(self, context: Mapping[str, Any] | None = None, /, **values: Any) -> None:
        """Apply a context patch.

        Only keys present in the patch are considered. Keyword arguments are
        merged over ``context``.

        Example:
            >>> instance.update({"name": "Ada"})
            >>> instance.update(name="Ada", tone="cool")

        """
        if values:
            context = {**context, **values} if context else values
        elif context is None:
            return
        for part in self._parts:
            part.update(context)

    def render(self) -> str:
        """Serialize the instance's tree to HTML (virtual tree only)."""
        from tessera.renderers.html import render

        return render(self._content)

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self) -> Iterator[Part]:
        return iter(self._parts)

    def __repr__(self) -> str:
        return f"TemplateInstance(parts={len(self._parts)})"


__all__ = ["Template", "TemplateInstance"]
