"""
Error taxonomy of the demo compile pipeline.

Every failure of a compile attempt is one of these. The pipeline catches them
at its outer boundary and turns them into ``CompileResult.error``.
"""


class CompileError(ValueError):
    """Base class: one failed compile attempt, with a display message."""

    kind = "compile"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TranspileError(CompileError):
    """The sanitized source is not valid in the supported TypeScript subset."""

    kind = "transpile"

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        if line is not None and column is not None:
            message = f"{message} ({line}:{column})"
        elif line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
        self.line = line
        self.column = column


class SymbolNotFoundError(CompileError):
    """No class extends one of the recognized base names."""

    kind = "symbol_not_found"

    def __init__(self, message: str = "No entry class found") -> None:
        super().__init__(message)


class RuntimeThrowError(CompileError):
    """The script threw while being evaluated or while its classes were constructed."""

    kind = "runtime"
