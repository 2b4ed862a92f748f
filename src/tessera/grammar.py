"""Placeholder and expression grammar for Tessera.

Two small grammars:

Placeholders:
    ``{expression}`` inside text content or an attribute value. Matching is
    non-greedy: ``{a}{b}`` is two placeholders, and the expression cannot
    contain the closing delimiter. Delimiters come from the active
    CompileConfig.

Expressions:
    ``key`` is a static lookup of one context key.
    ``name(arg1, arg2, ...)`` is a dynamic call: ``name`` and every argument
    are trimmed context keys. Anything that does not fit the call shape,
    including unbalanced parentheses, is a static key. Parsing never fails.

Scanning is stateless: patterns are compiled once per delimiter pair and no
cursor survives a call, so pattern objects are safe to share between threads.

"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache

from tessera.config import CompileConfig, get_compile_config

# name(args) with no nested parentheses
_CALL_PATTERN = re.compile(r"\s*([^()]+?)\s*\(([^()]*)\)\s*")


@dataclass(frozen=True, slots=True)
class Placeholder:
    """One placeholder occurrence.

    Attributes:
        start: Offset of the opening delimiter
        end: Offset just past the closing delimiter
        expression: Raw text between the delimiters (untrimmed)

    """

    start: int
    end: int
    expression: str

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class ExpressionSpec:
    """Parsed form of an expression source.

    Exactly one of ``key`` (static) or ``function`` (dynamic) is set.

    """

    source: str
    key: str | None = None
    function: str | None = None
    params: tuple[str, ...] = ()

    @property
    def is_dynamic(self) -> bool:
        return self.function is not None


@lru_cache(maxsize=32)
def _placeholder_pattern(open_delimiter: str, close_delimiter: str) -> re.Pattern[str]:
    return re.compile(
        re.escape(open_delimiter)
        + r"([\s\S]+?)"
        + re.escape(close_delimiter)
    )


def placeholder_pattern(config: CompileConfig | None = None) -> re.Pattern[str]:
    """Compiled placeholder regex for ``config`` (default: the active config)."""
    config = config or get_compile_config()
    return _placeholder_pattern(config.open_delimiter, config.close_delimiter)


def find_placeholders(text: str, config: CompileConfig | None = None) -> Iterator[Placeholder]:
    """Yield every placeholder in ``text``, left to right.

    Example:
        >>> [p.expression for p in find_placeholders("pre{x}mid{ y }")]
        ['x', ' y ']

    """
    for match in placeholder_pattern(config).finditer(text):
        yield Placeholder(match.start(), match.end(), match.group(1))


def match_attribute(value: str | None, config: CompileConfig | None = None) -> Placeholder | None:
    """Return the first placeholder in an attribute value, if any.

    An attribute holds at most one binding. When a placeholder is found the
    whole attribute becomes runtime-controlled and any surrounding static
    text is discarded.

    """
    if not value:
        return None
    match = placeholder_pattern(config).search(value)
    if match is None:
        return None
    return Placeholder(match.start(), match.end(), match.group(1))


def parse_expression(source: str) -> ExpressionSpec:
    """Parse an expression into a static key or a dynamic call.

    Example:
        >>> parse_expression(" title ").key
        'title'
        >>> spec = parse_expression("join(first, last)")
        >>> spec.function, spec.params
        ('join', ('first', 'last'))
        >>> parse_expression("join(first").key
        'join(first'

    """
    match = _CALL_PATTERN.fullmatch(source)
    if match is not None:
        function = match.group(1).strip()
        if function:
            args = match.group(2)
            params = tuple(arg.strip() for arg in args.split(",")) if args.strip() else ()
            return ExpressionSpec(source=source, function=function, params=params)
    return ExpressionSpec(source=source, key=source.strip())


__all__ = [
    "ExpressionSpec",
    "Placeholder",
    "find_placeholders",
    "match_attribute",
    "parse_expression",
    "placeholder_pattern",
]
