"""Mutable virtual tree for Tessera.

A small DOM-like tree used as the default host for compiled templates.
Unlike an immutable AST, these nodes are edited in place: the compiler splits
text and strips bound attributes, and live parts rewrite text, attributes and
properties on every update.

Node Hierarchy:
Node (base)
├── Text
├── Comment
└── ParentNode
    ├── Fragment
    └── Element

Identity Semantics:
Nodes compare by identity (``eq=False``). Two separately built trees with the
same shape are different trees; use ``tessera.renderers.html.render`` to
compare their serialized form.

Thread Safety:
Nodes are mutable and not synchronized. A tree belongs to one Template or
one TemplateInstance; do not share a live tree across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

# =============================================================================
# Base Node
# =============================================================================


@dataclass(slots=True, eq=False)
class Node:
    """Base class for all tree nodes.

    ``parent`` is maintained by ParentNode; never assign it directly.

    """

    parent: ParentNode | None = field(default=None, repr=False, kw_only=True)

    @property
    def text_content(self) -> str:
        return ""

    def remove(self) -> None:
        """Detach this node from its parent (no-op when already detached)."""
        if self.parent is not None:
            self.parent.remove_child(self)

    def clone(self) -> Node:
        """Deep copy of this node, detached from any parent."""
        raise NotImplementedError

    def iter_nodes(self) -> Iterator[Node]:
        """Yield this node and all descendants in pre-order."""
        yield self


# =============================================================================
# Leaf Nodes
# =============================================================================


@dataclass(slots=True, eq=False)
class Text(Node):
    """Character data."""

    data: str

    @property
    def text_content(self) -> str:
        return self.data

    def split(self, offset: int) -> Text:
        """Split at ``offset``, keeping the head here and returning the tail.

        The tail is inserted as this node's next sibling when attached.

        Raises:
            IndexError: If offset lies outside ``0..len(data)``.
        """
        if offset < 0 or offset > len(self.data):
            msg = f"split offset {offset} out of range for text of length {len(self.data)}"
            raise IndexError(msg)
        tail = Text(self.data[offset:])
        self.data = self.data[:offset]
        if self.parent is not None:
            self.parent.insert_after(self, tail)
        return tail

    def clone(self) -> Text:
        return Text(self.data)


@dataclass(slots=True, eq=False)
class Comment(Node):
    """Comment node. Kept in the tree but never indexed or bound."""

    data: str

    def clone(self) -> Comment:
        return Comment(self.data)


# =============================================================================
# Container Nodes
# =============================================================================


@dataclass(slots=True, eq=False)
class ParentNode(Node):
    """Node holding an ordered list of children."""

    children: list[Node] = field(default_factory=list, kw_only=True)

    def __post_init__(self) -> None:
        for child in self.children:
            self._adopt(child)

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self.children)

    def _adopt(self, node: Node) -> None:
        if node.parent is not None and node.parent is not self:
            node.parent.remove_child(node)
        node.parent = self

    def append(self, *nodes: Node) -> None:
        for node in nodes:
            node.remove()
            node.parent = self
            self.children.append(node)

    def extend(self, nodes: Iterable[Node]) -> None:
        self.append(*nodes)

    def insert(self, position: int, node: Node) -> None:
        node.remove()
        node.parent = self
        self.children.insert(position, node)

    def insert_after(self, reference: Node, node: Node) -> None:
        """Insert ``node`` directly after ``reference`` (a child of this node)."""
        node.remove()
        position = self.index(reference) + 1
        node.parent = self
        self.children.insert(position, node)

    def index(self, child: Node) -> int:
        """Position of ``child`` among children, compared by identity.

        Raises:
            ValueError: If ``child`` is not a child of this node.
        """
        for position, candidate in enumerate(self.children):
            if candidate is child:
                return position
        msg = "node is not a child of this parent"
        raise ValueError(msg)

    def remove_child(self, child: Node) -> None:
        del self.children[self.index(child)]
        child.parent = None

    def iter_nodes(self) -> Iterator[Node]:
        yield self
        for child in self.children:
            yield from child.iter_nodes()


@dataclass(slots=True, eq=False)
class Fragment(ParentNode):
    """Parentless container for a sequence of top-level nodes."""

    def clone(self) -> Fragment:
        return Fragment(children=[child.clone() for child in self.children])


@dataclass(slots=True, eq=False)
class Element(ParentNode):
    """Element with attributes and host-object properties.

    Attributes:
        tag: Tag name
        attributes: Attribute name -> value. ``None`` marks an attribute that
            is present without a value (``<input disabled>``).
        properties: Host-object fields assigned by property bindings. Not
            serialized.

    """

    tag: str
    attributes: dict[str, str | None] = field(default_factory=dict)
    properties: dict[str, Any] = field(default_factory=dict)

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def set_attribute(self, name: str, value: str | None) -> None:
        self.attributes[name] = value

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def toggle_attribute(self, name: str, force: bool | None = None) -> bool:
        """Add or remove a valueless attribute, DOM ``toggleAttribute`` style.

        Returns:
            True if the attribute is present afterwards.
        """
        if force is None:
            force = name not in self.attributes
        if not force:
            self.attributes.pop(name, None)
            return False
        # An existing value is kept when forcing presence
        self.attributes.setdefault(name, None)
        return True

    def clone(self) -> Element:
        return Element(
            tag=self.tag,
            attributes=dict(self.attributes),
            properties=dict(self.properties),
            children=[child.clone() for child in self.children],
        )


__all__ = [
    "Comment",
    "Element",
    "Fragment",
    "Node",
    "ParentNode",
    "Text",
]
