"""
Live demo engine: compiles user-edited TypeScript demos into instances.

Stages: sanitize, combine, transpile, discover, execute (RestrictedPython), build.
Entry point: compile_demo.
"""

from livedemo.engines.errors import CompileError, RuntimeThrowError, SymbolNotFoundError, TranspileError
from livedemo.engines.models import NO_FALLBACK, CompileResult, Constructors, Discovery, Fallback, SourceUnit
from livedemo.engines.pipeline import FORM_VARIANT, PAGE_VARIANT, VARIANTS, Variant, compile_demo
from livedemo.engines.scope import CompilationScope

__all__ = [
    "CompilationScope",
    "CompileError",
    "CompileResult",
    "Constructors",
    "Discovery",
    "FORM_VARIANT",
    "Fallback",
    "NO_FALLBACK",
    "PAGE_VARIANT",
    "RuntimeThrowError",
    "SourceUnit",
    "SymbolNotFoundError",
    "TranspileError",
    "VARIANTS",
    "Variant",
    "compile_demo",
]
