"""ContextVar-based compile configuration for Tessera.

Holds the placeholder delimiters and attribute binding prefixes the compiler
recognizes. Config is read once at the start of each compile() call, so a
compiled Template is unaffected by later config changes.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Defaults: {expr}, ?bool, .prop
    template = compile_markup("<p>{greeting}</p>")

    # Alternate delimiters for one compile
    with compile_config_context(CompileConfig(open_delimiter="[[", close_delimiter="]]")):
        template = compile_markup("<p>[[greeting]]</p>")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CompileConfig:
    """Immutable compile configuration.

    Attributes:
        open_delimiter: Text opening a placeholder
        close_delimiter: Text closing a placeholder
        boolean_prefix: Attribute-name prefix selecting a boolean-attribute binding
        property_prefix: Attribute-name prefix selecting a property binding
        strict_markup: Raise MarkupError on stray end tags in markup input

    """

    open_delimiter: str = "{"
    close_delimiter: str = "}"
    boolean_prefix: str = "?"
    property_prefix: str = "."
    strict_markup: bool = False

    def __post_init__(self) -> None:
        if not self.open_delimiter or not self.close_delimiter:
            msg = "placeholder delimiters must be non-empty"
            raise ValueError(msg)
        if not self.boolean_prefix or not self.property_prefix:
            msg = "attribute binding prefixes must be non-empty"
            raise ValueError(msg)
        if self.boolean_prefix == self.property_prefix:
            msg = "boolean and property prefixes must differ"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "CompileConfig":
        """Create CompileConfig from a dictionary.

        Unknown keys are silently ignored.

        Example:
            >>> config = CompileConfig.from_dict({
            ...     "open_delimiter": "[[",
            ...     "close_delimiter": "]]",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.open_delimiter
            '[['

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: CompileConfig = CompileConfig()

_compile_config: ContextVar[CompileConfig] = ContextVar(
    "compile_config",
    default=_DEFAULT_CONFIG,
)


def get_compile_config() -> CompileConfig:
    """Get the active compile configuration for this thread/context."""
    return _compile_config.get()


def set_compile_config(config: CompileConfig) -> None:
    """Set compile configuration for the current context."""
    _compile_config.set(config)


def reset_compile_config() -> None:
    """Reset to the default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton.
    """
    _compile_config.set(_DEFAULT_CONFIG)


@contextmanager
def compile_config_context(config: CompileConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with compile_config_context(CompileConfig(boolean_prefix="!")):
        ...     template = compile_markup('<input !disabled="{off}">')

    """
    previous = _compile_config.get()
    _compile_config.set(config)
    try:
        yield
    finally:
        _compile_config.set(previous)


__all__ = [
    "CompileConfig",
    "compile_config_context",
    "get_compile_config",
    "reset_compile_config",
    "set_compile_config",
]
