"""Content-addressed compile cache for Tessera.

Maps (content_hash, config_hash) to a compiled Template so identical markup
is compiled once. Templates are immutable, so a cached Template can be
handed to any number of callers and instantiated independently.

Thread Safety:
    DictTemplateCache is not thread-safe. For concurrent compiles, use a
    cache implementation with internal locking.

Example:
    >>> from tessera import compile_markup, DictTemplateCache
    >>> cache = DictTemplateCache()
    >>> t1 = compile_markup("<p>{x}</p>", cache=cache)
    >>> t2 = compile_markup("<p>{x}</p>", cache=cache)  # Cache hit
    >>> t1 is t2
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from tessera.utils.hashing import hash_str

if TYPE_CHECKING:
    from tessera.config import CompileConfig
    from tessera.template import Template


class TemplateCache(Protocol):
    """Protocol for content-addressed template caches."""

    def get(self, content_hash: str, config_hash: str) -> Template | None:
        """Return cached Template if present, else None."""
        ...

    def put(self, content_hash: str, config_hash: str, template: Template) -> None:
        """Store Template in cache."""
        ...


class DictTemplateCache:
    """In-memory template cache using a dict."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[tuple[str, str], Template] = {}

    def get(self, content_hash: str, config_hash: str) -> Template | None:
        return self._data.get((content_hash, config_hash))

    def put(self, content_hash: str, config_hash: str, template: Template) -> None:
        self._data[(content_hash, config_hash)] = template

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


def hash_content(markup: str) -> str:
    """SHA256 of template markup, for the cache key."""
    return hash_str(markup)


def hash_config(config: CompileConfig) -> str:
    """Hash of every CompileConfig field that changes compile output."""
    parts = (
        config.open_delimiter,
        config.close_delimiter,
        config.boolean_prefix,
        config.property_prefix,
        str(config.strict_markup),
    )
    # Unit separator keeps ("a|", "b") and ("a", "|b") apart
    return hash_str("\x1f".join(parts))


__all__ = [
    "DictTemplateCache",
    "TemplateCache",
    "hash_config",
    "hash_content",
]
