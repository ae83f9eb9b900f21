"""
Executor: run transpiled code in the sandbox and read the discovered classes back.

The script is executed as a module in a fresh restricted globals table
pre-loaded with the compilation scope. Instead of appending a synthetic
return statement, the discovered names are looked up in that table once the
module body has finished.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .errors import CompileError, RuntimeThrowError
from .models import Constructors, Discovery
from .runtime import error_message
from .sandbox import build_restricted_globals, compile_script

_log = logging.getLogger(__name__)


def _lookup(g: dict[str, Any], name: str | None) -> Any:
    if name is None:
        return None
    if name not in g:
        raise RuntimeThrowError(f"{name} is not defined")
    return g[name]


def execute(
    code: str,
    discovery: Discovery,
    scope: Mapping[str, Any],
    console_extra: dict[str, Any] | None = None,
) -> Constructors:
    """
    Compile *code* with RestrictedPython, exec it against *scope* and return
    the constructors named by *discovery*.

    Raises TranspileError when the sandbox rejects the code and
    RuntimeThrowError for anything the script raises, with the message in
    JavaScript wording ("x is not defined").
    """
    bytecode = compile_script(code)
    g = build_restricted_globals(scope, console_extra)
    try:
        exec(bytecode, g)
    except CompileError:
        raise
    except Exception as exc:
        _log.debug("Script raised %s during evaluation", type(exc).__name__)
        raise RuntimeThrowError(error_message(exc)) from exc
    return Constructors(
        primary=_lookup(g, discovery.primary),
        companion=_lookup(g, discovery.companion),
    )
