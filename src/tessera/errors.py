"""Exception classes for Tessera.

Every error raised by the engine derives from TesseraError. Data problems in
a context patch (missing keys, odd values) are never errors; the exceptions
here signal programming mistakes or unusable input.
"""

from __future__ import annotations


class TesseraError(Exception):
    """Base exception for all Tessera errors."""

    pass


class CompileError(TesseraError):
    """Error while compiling a source tree into a Template.

    Raised when the object handed to the compiler is not a tree root the
    active adapter can walk.
    """

    pass


class MarkupError(TesseraError):
    """Error while building a tree from markup.

    Only raised in strict mode (``CompileConfig.strict_markup``); the
    default front end is lenient.
    """

    def __init__(self, message: str, lineno: int | None = None, col_offset: int | None = None) -> None:
        """Initialize markup error with optional position.

        Args:
            message: Error description
            lineno: Line number where the error occurred (1-indexed)
            col_offset: Column offset where the error occurred (0-indexed)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset

        location = ""
        if lineno is not None:
            location = f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ExpressionError(TesseraError):
    """Error while evaluating an expression.

    Raised when the value bound to a dynamic expression's function key is
    not callable. A function key that is simply absent is not an error; the
    part waits until a patch supplies it.
    """

    def __init__(self, expression: str, message: str) -> None:
        """Initialize expression error.

        Args:
            expression: Source of the failing expression (e.g. "fmt(a, b)")
            message: Description of the failure
        """
        self.expression = expression
        super().__init__(f"Expression '{expression}': {message}")


class UnimplementedPartError(TesseraError, NotImplementedError):
    """A part kind reached dispatch without a cast/apply mapping.

    This is unreachable in a correct build. Seeing it means a PartKind member
    was added without teaching tessera.parts how to handle it.
    """

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"No mutation implemented for part kind {kind!r}")
