"""Protocols for Tessera.

Defines the host-tree contract the compiler and part runtime depend on.
The engine never touches a concrete tree type directly; everything goes
through a TreeAdapter, so the same compiler drives the bundled virtual tree
or any other tree (a DOM binding, a widget tree, a string-buffer tree).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol


class TreeAdapter(Protocol):
    """Host-tree collaborator used by compile and instantiate.

    Index Alignment:
        ``walk`` must yield the same sequence for a tree and for its
        ``clone``. Node indices assigned at compile time are positions in
        that sequence, so any divergence silently misbinds parts.

    Thread Safety:
        Implementations should be stateless; one adapter instance is shared by
        every Template compiled with it.

    """

    def is_root(self, node: Any) -> bool:
        """True if ``node`` can be compiled (a fragment or element)."""
        ...

    def walk(self, root: Any) -> Iterator[Any]:
        """Pre-order traversal of ``root`` and its descendants.

        Yields element and text nodes only; an element root is yielded
        first, a fragment root is not. Other node kinds (comments,
        processing instructions) are skipped, but element children are
        always descended into.
        """
        ...

    def clone(self, root: Any) -> Any:
        """Deep copy of ``root``."""
        ...

    def is_text(self, node: Any) -> bool: ...

    def is_element(self, node: Any) -> bool: ...

    def get_text(self, node: Any) -> str: ...

    def set_text(self, node: Any, text: str) -> None: ...

    def split_text(self, node: Any, offset: int) -> Any:
        """Split a text node at ``offset``; return the new tail node.

        The head stays in ``node``. The tail must become ``node``'s next
        sibling so that ``walk`` visits it next.
        """
        ...

    def remove(self, node: Any) -> None:
        """Detach ``node`` from the tree."""
        ...

    def attribute_names(self, node: Any) -> list[str]:
        """Attribute names of an element, in document order."""
        ...

    def get_attribute(self, node: Any, name: str) -> str | None: ...

    def set_attribute(self, node: Any, name: str, value: str) -> None: ...

    def remove_attribute(self, node: Any, name: str) -> None: ...

    def toggle_attribute(self, node: Any, name: str, force: bool) -> None:
        """Make a valueless attribute present (``force``) or absent."""
        ...

    def set_property(self, node: Any, name: str, value: Any) -> None:
        """Assign a field on the node's host object."""
        ...
