"""
Result builder: instantiate the discovered classes, or fall back.
"""

from typing import Any

from .errors import RuntimeThrowError, SymbolNotFoundError
from .models import CompileResult, Constructors, Fallback
from .runtime import error_message, to_str


def _construct(ctor: Any) -> Any:
    if not callable(ctor):
        raise RuntimeThrowError(f"{to_str(ctor)} is not a constructor")
    try:
        return ctor()
    except Exception as exc:
        raise RuntimeThrowError(error_message(exc)) from exc


def build(ctors: Constructors, fallback: Fallback) -> CompileResult:
    """
    ``new Primary()`` and, when present, ``new Companion()``.

    Without a primary constructor, or when a constructor throws, the result
    carries the fallback pair and the error message.
    """
    if ctors.primary is None:
        return CompileResult.failed(fallback, SymbolNotFoundError().message)
    try:
        instance = _construct(ctors.primary)
        initial_data = _construct(ctors.companion) if ctors.companion is not None else None
    except RuntimeThrowError as exc:
        return CompileResult.failed(fallback, exc.message)
    return CompileResult(instance=instance, initial_data=initial_data)
