"""HTML serializer for the virtual tree.

Turns a Fragment, Element or any other node back into markup. Used to inspect
template instances and to compare trees in tests.

Rules:
- Text is escaped (``&``, ``<``, ``>``) except inside raw-text elements
  (``script``, ``style``).
- Attribute values are escaped including quotes; valueless attributes are
  written bare (``<input disabled>``).
- Void elements get no end tag.
- Comments are kept.
- Element properties are host-object state and are never serialized.

Thread Safety:
    All per-render state lives in a list local to each ``render`` call.

"""

from __future__ import annotations

import html

from tessera.markup import VOID_ELEMENTS
from tessera.nodes import Comment, Element, Fragment, Node, Text

RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


def escape_text(s: str) -> str:
    """Escape character data (quotes are left alone)."""
    return html.escape(s, quote=False)


def escape_attribute(s: str) -> str:
    """Escape an attribute value for a double-quoted context."""
    return html.escape(s, quote=True)


class HtmlRenderer:
    """Serialize virtual-tree nodes to HTML.

    Usage:
        >>> from tessera.nodes import Element, Text
        >>> HtmlRenderer().render(Element("b", children=[Text("1 < 2")]))
        '<b>1 &lt; 2</b>'

    """

    __slots__ = ()

    def render(self, node: Node) -> str:
        out: list[str] = []
        self._render_node(node, out, raw=False)
        return "".join(out)

    def _render_node(self, node: Node, out: list[str], *, raw: bool) -> None:
        match node:
            case Text(data=data):
                out.append(data if raw else escape_text(data))
            case Element():
                self._render_element(node, out)
            case Fragment(children=children):
                for child in children:
                    self._render_node(child, out, raw=raw)
            case Comment(data=data):
                out.append(f"<!--{data}-->")

    def _render_element(self, element: Element, out: list[str]) -> None:
        out.append(f"<{element.tag}")
        for name, value in element.attributes.items():
            if value is None:
                out.append(f" {name}")
            else:
                out.append(f' {name}="{escape_attribute(value)}"')
        out.append(">")
        if element.tag in VOID_ELEMENTS:
            return
        raw = element.tag in RAW_TEXT_ELEMENTS
        for child in element.children:
            self._render_node(child, out, raw=raw)
        out.append(f"</{element.tag}>")


_RENDERER = HtmlRenderer()


def render(node: Node) -> str:
    """Serialize ``node`` to HTML.

    Example:
        >>> from tessera.markup import parse_fragment
        >>> render(parse_fragment('<input disabled value="a&quot;b">'))
        '<input disabled value="a&quot;b">'

    """
    return _RENDERER.render(node)


__all__ = ["HtmlRenderer", "escape_attribute", "escape_text", "render"]
