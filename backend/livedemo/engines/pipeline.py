"""
Compile pipeline: source units in, CompileResult out.

sanitize -> combine -> transpile -> discover -> execute -> build. Every
failure on the way is turned into ``CompileResult.error`` with the fallback
pair kept as the instance; nothing raises out of ``compile_demo``.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from livedemo.core.config import settings

from .builder import build
from .combiner import combine, entry_name
from .discovery import DEFAULT_BASES, discover
from .errors import CompileError, RuntimeThrowError, SymbolNotFoundError
from .executor import execute
from .models import NO_FALLBACK, CompileResult, Fallback, SourceUnit
from .sandbox import time_limit
from .sanitizer import sanitize
from .transpiler import transpile

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Variant:
    """How a kind of demo is compiled: which base classes mark the entry class, and
    whether a companion data class is looked for."""

    name: str
    bases: tuple[str, ...] = DEFAULT_BASES
    companion: bool = False


FORM_VARIANT = Variant("form", bases=("Form",), companion=True)
PAGE_VARIANT = Variant("page", bases=("Page",), companion=False)

VARIANTS = {v.name: v for v in (FORM_VARIANT, PAGE_VARIANT)}


def _compile(
    units: Sequence[SourceUnit],
    scope: Mapping[str, Any],
    variant: Variant,
    fallback: Fallback,
    extra: dict[str, Any],
) -> CompileResult:
    source = combine(units, entry_name(units))
    code = transpile(sanitize(source))
    discovery = discover(code, variant.bases, variant.companion)
    if discovery.primary is None:
        raise SymbolNotFoundError()
    with time_limit(settings.DEMO_EXEC_TIMEOUT):
        ctors = execute(code, discovery, scope, console_extra=extra)
        return build(ctors, fallback)


def compile_demo(
    units: Sequence[SourceUnit],
    scope: Mapping[str, Any],
    variant: Variant = FORM_VARIANT,
    fallback: Fallback = NO_FALLBACK,
    demo_id: str | None = None,
) -> CompileResult:
    """
    Compile and instantiate one demo. On any failure the result holds
    *fallback* and the error message.
    """
    extra = {"demo_id": demo_id}
    try:
        result = _compile(units, scope, variant, fallback, extra)
    except CompileError as exc:
        result = CompileResult.failed(fallback, exc.message)
        _log.warning("Compile failed (%s): %s", exc.kind, exc.message, extra=extra)
        return result
    except Exception as exc:
        err = RuntimeThrowError(str(exc) or type(exc).__name__)
        _log.warning("Compile failed with unexpected %s: %s", type(exc).__name__, err.message, exc_info=True, extra=extra)
        return CompileResult.failed(fallback, err.message)
    if result.error:
        _log.warning("Compile failed (runtime): %s", result.error, extra=extra)
    return result
