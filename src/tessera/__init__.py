"""
Tessera — compile-once templates with minimal, incremental tree updates.

A template is markup (or a tree) containing ``{expression}`` placeholders.
Compiling it records where each binding lives; every instance is a clone of
the compiled tree whose bindings ("parts") apply only the mutations a context
patch actually requires.

Quick Start:
    >>> from tessera import compile_markup
    >>> template = compile_markup('<p ?hidden="{hidden}">{greet(name)}</p>')
    >>> instance = template.create_instance({
    ...     "greet": lambda name: f"Hello, {name}!",
    ...     "name": "Ada",
    ...     "hidden": False,
    ... })
    >>> instance.render()
    '<p>Hello, Ada!</p>'
    >>> instance.update({"name": "Grace"})    # only the text node changes
    >>> instance.render()
    '<p>Hello, Grace!</p>'

Binding Syntax:
    {key}                text content or attribute value from ``context[key]``
    {fn(a, b)}           ``context[fn](context[a], context[b])``
    name="{x}"           attribute binding
    ?name="{x}"          boolean attribute (present without value when truthy)
    .name="{x}"          property binding (host-object field)

Custom Trees:
    Any tree works through a TreeAdapter (see ``tessera.protocols``):
    >>> template = compile(my_root, adapter=MyDomAdapter())

"""

from tessera.cache import DictTemplateCache, TemplateCache, hash_config, hash_content
from tessera.compiler import TemplateCompiler, classify_attribute, compile
from tessera.config import (
    CompileConfig,
    compile_config_context,
    get_compile_config,
    reset_compile_config,
    set_compile_config,
)
from tessera.errors import (
    CompileError,
    ExpressionError,
    MarkupError,
    TesseraError,
    UnimplementedPartError,
)
from tessera.expressions import UNSET, DynamicExpression, StaticExpression, create_expression
from tessera.grammar import ExpressionSpec, Placeholder, find_placeholders, parse_expression
from tessera.markup import parse_fragment
from tessera.nodes import Comment, Element, Fragment, Node, Text
from tessera.parts import Part, PartDescriptor, PartKind
from tessera.profiling import RenderAccumulator, get_render_accumulator, profiled_render
from tessera.protocols import TreeAdapter
from tessera.renderers.html import HtmlRenderer, render
from tessera.template import Template, TemplateInstance
from tessera.tree import DEFAULT_ADAPTER, VirtualTreeAdapter

__version__ = "0.1.0"


def compile_markup(markup: str, *, cache: TemplateCache | None = None) -> Template:
    """Parse HTML markup and compile it into a Template.

    Args:
        markup: HTML source with ``{expression}`` placeholders
        cache: Optional content-addressed template cache

    Returns:
        Immutable Template

    Example:
        >>> template = compile_markup("<li>{label}</li>")
        >>> template.create_instance({"label": "one"}).render()
        '<li>one</li>'

    """
    if cache is not None:
        content_hash = hash_content(markup)
        config_hash = hash_config(get_compile_config())
        cached = cache.get(content_hash, config_hash)
        if cached is not None:
            return cached

    template = compile(parse_fragment(markup))

    if cache is not None:
        cache.put(content_hash, config_hash, template)
    return template


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "compile",
    "compile_markup",
    "parse_fragment",
    "render",
    # Templates
    "Template",
    "TemplateInstance",
    "TemplateCompiler",
    "classify_attribute",
    # Parts
    "Part",
    "PartDescriptor",
    "PartKind",
    # Expressions
    "UNSET",
    "DynamicExpression",
    "StaticExpression",
    "create_expression",
    "ExpressionSpec",
    "Placeholder",
    "find_placeholders",
    "parse_expression",
    # Virtual tree
    "Node",
    "Element",
    "Fragment",
    "Text",
    "Comment",
    "TreeAdapter",
    "VirtualTreeAdapter",
    "DEFAULT_ADAPTER",
    "HtmlRenderer",
    # Compile cache
    "DictTemplateCache",
    "TemplateCache",
    "hash_config",
    "hash_content",
    # Configuration (ContextVar-based)
    "CompileConfig",
    "get_compile_config",
    "set_compile_config",
    "reset_compile_config",
    "compile_config_context",
    # Profiling
    "RenderAccumulator",
    "get_render_accumulator",
    "profiled_render",
    # Errors
    "TesseraError",
    "CompileError",
    "ExpressionError",
    "MarkupError",
    "UnimplementedPartError",
]
