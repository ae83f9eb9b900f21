"""
TypeScript-subset to Python transpiler used behind the engine's transpiler adapter.

Exports: parse, generate, to_python.
"""

from .codegen import generate
from .parser import parse


def to_python(source: str) -> str:
    """Transpile *source* to Python source text. Raises TranspileError."""
    return generate(parse(source))


__all__ = ["parse", "generate", "to_python"]
