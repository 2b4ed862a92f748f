"""Template compiler for Tessera.

Walks a source tree once, assigns node indices and records which bindings
live at each index. The walk also rewrites the tree it compiles:

- Text containing placeholders is split so every placeholder owns one empty
  text node (``"pre{x}post"`` becomes ``"pre"``, ``""``, ``"post"``).
- Empty segments produced by splitting (``"{x}"`` has no head or tail) are
  removed after the walk and never receive an index.
- Bound attributes are removed; the part that owns them restores them at
  update time.

Index Rules:
    The walk is pre-order over elements and text nodes only. Every element
    and every text node that survives into the compiled tree takes the next
    index. Instantiation walks a clone of the compiled tree with the same
    adapter, so position ``i`` of that walk is the node registered at ``i``.

Example:
    >>> from tessera.markup import parse_fragment
    >>> template = compile(parse_fragment('<p class="{cls}">pre{x}post</p>'))
    >>> sorted(template.parts)
    [0, 2]
    >>> template.parts[2][0].kind
    <PartKind.TEXT: 'text'>

"""

from __future__ import annotations

from typing import Any

from tessera.config import CompileConfig, get_compile_config
from tessera.errors import CompileError
from tessera.grammar import find_placeholders, match_attribute
from tessera.parts import PartDescriptor, PartKind
from tessera.profiling import get_render_accumulator
from tessera.protocols import TreeAdapter
from tessera.template import Template
from tessera.tree import DEFAULT_ADAPTER
from tessera.utils.logger import get_logger

logger = get_logger(__name__)


def classify_attribute(name: str, config: CompileConfig | None = None) -> tuple[PartKind, str]:
    """Map a bound attribute name to its part kind and target name.

    Example:
        >>> classify_attribute("?hidden")
        (<PartKind.BOOLEAN_ATTRIBUTE: 'boolean-attribute'>, 'hidden')
        >>> classify_attribute(".items")
        (<PartKind.PROPERTY: 'property'>, 'items')
        >>> classify_attribute("href")
        (<PartKind.ATTRIBUTE: 'attribute'>, 'href')

    """
    config = config or get_compile_config()
    if name.startswith(config.boolean_prefix):
        return PartKind.BOOLEAN_ATTRIBUTE, name[len(config.boolean_prefix):]
    if name.startswith(config.property_prefix):
        return PartKind.PROPERTY, name[len(config.property_prefix):]
    return PartKind.ATTRIBUTE, name


class TemplateCompiler:
    """Single-use compiler for one source tree.

    Holds the per-compile state (running index, descriptor table, empty
    segments awaiting removal). Use the module-level ``compile`` function
    rather than driving this class directly.

    """

    __slots__ = ("_adapter", "_config", "_empty", "_index", "_table")

    def __init__(self, adapter: TreeAdapter, config: CompileConfig) -> None:
        self._adapter = adapter
        self._config = config
        self._index = 0
        self._table: dict[int, list[PartDescriptor]] = {}
        self._empty: list[Any] = []

    @property
    def node_count(self) -> int:
        """Indices assigned so far."""
        return self._index

    def compile(self, content: Any) -> dict[int, tuple[PartDescriptor, ...]]:
        """Rewrite ``content`` in place and return the descriptor table."""
        adapter = self._adapter
        # Snapshot: splitting inserts siblings, which are handled inline
        for node in list(adapter.walk(content)):
            if adapter.is_text(node):
                self._compile_text(node)
            elif adapter.is_element(node):
                self._compile_element(node)

        for node in self._empty:
            adapter.remove(node)

        return {index: tuple(descriptors) for index, descriptors in self._table.items()}

    def _add(self, descriptor: PartDescriptor) -> None:
        self._table.setdefault(self._index, []).append(descriptor)

    def _claim(self, node: Any) -> None:
        """Give ``node`` the next index, or schedule it for removal if empty."""
        if self._adapter.get_text(node):
            self._index += 1
        else:
            self._empty.append(node)

    def _compile_text(self, node: Any) -> None:
        adapter = self._adapter
        consumed = 0
        current = node
        for placeholder in find_placeholders(adapter.get_text(node), self._config):
            # current holds the source text from ``consumed`` onward
            span = adapter.split_text(current, placeholder.start - consumed)
            self._claim(current)
            rest = adapter.split_text(span, placeholder.length)
            adapter.set_text(span, "")
            self._add(PartDescriptor(PartKind.TEXT, placeholder.expression))
            self._index += 1
            current = rest
            consumed = placeholder.end
        self._claim(current)

    def _compile_element(self, node: Any) -> None:
        adapter = self._adapter
        for name in adapter.attribute_names(node):
            placeholder = match_attribute(adapter.get_attribute(node, name), self._config)
            if placeholder is None:
                continue
            kind, target = classify_attribute(name, self._config)
            self._add(PartDescriptor(kind, placeholder.expression, target))
            adapter.remove_attribute(node, name)
        self._index += 1


def compile(source: Any, *, adapter: TreeAdapter | None = None) -> Template:
    """Compile a source tree into a reusable Template.

    The source is cloned first; the caller's tree is left untouched.

    Args:
        source: Tree root (a Fragment or Element for the virtual tree)
        adapter: Host-tree adapter (defaults to the virtual tree adapter)

    Returns:
        Immutable Template

    Raises:
        CompileError: If ``source`` is not a root the adapter can walk.

    """
    adapter = adapter or DEFAULT_ADAPTER
    if not adapter.is_root(source):
        msg = f"cannot compile {type(source).__name__}: expected a tree root"
        raise CompileError(msg)

    config = get_compile_config()
    content = adapter.clone(source)
    compiler = TemplateCompiler(adapter, config)
    table = compiler.compile(content)

    part_count = sum(len(descriptors) for descriptors in table.values())
    logger.debug("Compiled template: %d indexed nodes, %d parts", compiler.node_count, part_count)

    acc = get_render_accumulator()
    if acc is not None:
        acc.record_compile(part_count)

    return Template(content, table, adapter=adapter)


__all__ = [
    "TemplateCompiler",
    "classify_attribute",
    "compile",
]
