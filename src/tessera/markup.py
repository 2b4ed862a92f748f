"""HTML front end: markup text to virtual tree.

Built on the standard library ``html.parser``. Lenient like a browser by
default: unknown end tags are dropped and unclosed elements are closed at
the end of input. Attribute names are case-folded (``.myProp`` becomes
``.myprop``), as an HTML parser in a browser would.

A document consisting of a single ``<template>`` element (surrounded by
whitespace at most) is unwrapped: the fragment holds the template's
children, the same content a browser exposes as ``template.content``.

Example:
    >>> fragment = parse_fragment('<ul><li ?hidden="{done}">{label}</li></ul>')
    >>> fragment.children[0].children[0].attributes
    {'?hidden': '{done}'}

"""

from __future__ import annotations

from html.parser import HTMLParser

from tessera.config import get_compile_config
from tessera.errors import MarkupError
from tessera.nodes import Comment, Element, Fragment, ParentNode, Text

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})


class _FragmentBuilder(HTMLParser):
    """HTMLParser subclass assembling a Fragment."""

    def __init__(self, *, strict: bool) -> None:
        super().__init__(convert_charrefs=True)
        self.root = Fragment()
        self._stack: list[ParentNode] = [self.root]
        self._strict = strict

    @property
    def _current(self) -> ParentNode:
        return self._stack[-1]

    def _element(self, tag: str, attrs: list[tuple[str, str | None]]) -> Element:
        attributes: dict[str, str | None] = {}
        for name, value in attrs:
            # First occurrence wins, as in browsers
            attributes.setdefault(name, value)
        element = Element(tag, attributes)
        self._current.append(element)
        return element

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        element = self._element(tag, attrs)
        if tag not in VOID_ELEMENTS:
            self._stack.append(element)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._element(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        for depth in range(len(self._stack) - 1, 0, -1):
            node = self._stack[depth]
            if isinstance(node, Element) and node.tag == tag:
                del self._stack[depth:]
                return
        if self._strict and tag not in VOID_ELEMENTS:
            lineno, offset = self.getpos()
            raise MarkupError(f"unexpected end tag </{tag}>", lineno, offset)

    def handle_data(self, data: str) -> None:
        children = self._current.children
        if children and isinstance(children[-1], Text):
            children[-1].data += data
        else:
            self._current.append(Text(data))

    def handle_comment(self, data: str) -> None:
        self._current.append(Comment(data))


def _unwrap_template(fragment: Fragment) -> Fragment:
    significant = [
        child for child in fragment.children
        if not (isinstance(child, Text) and not child.data.strip())
    ]
    if len(significant) == 1 and isinstance(significant[0], Element) and significant[0].tag == "template":
        return Fragment(children=list(significant[0].children))
    return fragment


def parse_fragment(markup: str, *, unwrap_template: bool = True) -> Fragment:
    """Parse HTML markup into a virtual-tree Fragment.

    Args:
        markup: HTML source
        unwrap_template: Return a lone ``<template>``'s content instead of
            the element itself

    Raises:
        MarkupError: On a stray end tag when ``CompileConfig.strict_markup``
            is set.

    """
    builder = _FragmentBuilder(strict=get_compile_config().strict_markup)
    builder.feed(markup)
    builder.close()
    fragment = builder.root
    return _unwrap_template(fragment) if unwrap_template else fragment


__all__ = ["VOID_ELEMENTS", "parse_fragment"]
