"""TreeAdapter implementation for the bundled virtual tree.

Example:
    >>> from tessera.nodes import Element, Fragment, Text
    >>> root = Fragment(children=[Element("p", children=[Text("hi")])])
    >>> [type(n).__name__ for n in DEFAULT_ADAPTER.walk(root)]
    ['Element', 'Text']
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from tessera.nodes import Element, Fragment, Node, ParentNode, Text


class VirtualTreeAdapter:
    """Adapter over ``tessera.nodes``.

    Stateless; share the module-level DEFAULT_ADAPTER.
    """

    __slots__ = ()

    def is_root(self, node: Any) -> bool:
        return isinstance(node, (Fragment, Element))

    def walk(self, root: ParentNode) -> Iterator[Node]:
        # Explicit stack; deep trees must not hit the recursion limit
        stack: list[Node] = [root]
        while stack:
            node = stack.pop()
            if isinstance(node, Text):
                yield node
            elif isinstance(node, Element):
                yield node
                stack.extend(reversed(node.children))
            elif isinstance(node, Fragment):
                stack.extend(reversed(node.children))

    def clone(self, root: Node) -> Node:
        return root.clone()

    def is_text(self, node: Any) -> bool:
        return isinstance(node, Text)

    def is_element(self, node: Any) -> bool:
        return isinstance(node, Element)

    def get_text(self, node: Text) -> str:
        return node.data

    def set_text(self, node: Text, text: str) -> None:
        node.data = text

    def split_text(self, node: Text, offset: int) -> Text:
        return node.split(offset)

    def remove(self, node: Node) -> None:
        node.remove()

    def attribute_names(self, node: Element) -> list[str]:
        return list(node.attributes)

    def get_attribute(self, node: Element, name: str) -> str | None:
        return node.get_attribute(name)

    def set_attribute(self, node: Element, name: str, value: str) -> None:
        node.set_attribute(name, value)

    def remove_attribute(self, node: Element, name: str) -> None:
        node.remove_attribute(name)

    def toggle_attribute(self, node: Element, name: str, force: bool) -> None:
        node.toggle_attribute(name, force)

    def set_property(self, node: Element, name: str, value: Any) -> None:
        node.properties[name] = value


DEFAULT_ADAPTER = VirtualTreeAdapter()


__all__ = ["DEFAULT_ADAPTER", "VirtualTreeAdapter"]
