"""
RestrictedPython sandbox for transpiled demo scripts.

Allowed: safe_builtins plus the few builtins generated code needs (super,
property, staticmethod, isinstance, Exception), the JS runtime (jsrt and the
JS globals) and the compilation scope.

Blocked: open, exec, eval, __import__, compile, underscore attributes, writes
to classes and modules the script did not define.
"""

import ast
import contextlib
import signal
import threading
from collections.abc import Iterator, Mapping
from typing import Any

from RestrictedPython import compile_restricted
from RestrictedPython.Guards import guarded_iter_unpack_sequence, guarded_unpack_sequence, safe_builtins
from RestrictedPython.transformer import RestrictingNodeTransformer

from .errors import RuntimeThrowError, TranspileError
from .runtime import SCRIPT_MODULE, JSWrite, js_getattr, js_getitem, js_globals, js_iter, jsrt, make_console

_EXTRA_BUILTINS = {
    "super": super,
    "property": property,
    "staticmethod": staticmethod,
    "isinstance": isinstance,
    "Exception": Exception,
}


class ScriptTimeout(BaseException):
    """Raised inside the script by SIGALRM. Not an Exception, so a script's catch cannot swallow it."""


class DemoScriptPolicy(RestrictingNodeTransformer):
    """RestrictedPython policy plus what generated classes and closures need.

    - ``super(Cls, self).__init__`` (constructors chaining to their base)
    - ``nonlocal`` (closures rebinding an enclosing variable)
    """

    def visit_Attribute(self, node: ast.Attribute) -> ast.AST:
        if (
            node.attr == "__init__"
            and isinstance(node.ctx, ast.Load)
            and isinstance(node.value, ast.Call)
            and isinstance(node.value.func, ast.Name)
            and node.value.func.id == "super"
        ):
            return self.node_contents_visit(node)
        return super().visit_Attribute(node)

    def visit_Nonlocal(self, node: ast.Nonlocal) -> ast.AST:
        return self.node_contents_visit(node)


def _apply(func: Any, *args: Any, **kwargs: Any) -> Any:
    return func(*args, **kwargs)


def _make_safe_builtins() -> dict[str, Any]:
    builtins = dict(safe_builtins)
    builtins.update(_EXTRA_BUILTINS)
    return builtins


def _make_guard_globals() -> dict[str, Any]:
    """Guards required by RestrictedPython's rewritten code, with JS member semantics."""
    return {
        "_getattr_": js_getattr,
        "_getitem_": js_getitem,
        "_getiter_": js_iter,
        "_write_": JSWrite,
        "_apply_": _apply,
        "_iter_unpack_sequence_": guarded_iter_unpack_sequence,
        "_unpack_sequence_": guarded_unpack_sequence,
    }


def compile_script(code: str, filename: str = "<demo>") -> Any:
    """
    Compile generated Python with the demo policy.

    Returns a code object for exec(bytecode, globals). A rejection by the
    policy is reported as TranspileError: the source used something the
    sandbox does not allow.
    """
    try:
        compiled = compile_restricted(code, filename, "exec", policy=DemoScriptPolicy)
    except SyntaxError as exc:
        raise TranspileError(f"Script rejected by sandbox: {exc}") from None
    if compiled is None:
        raise TranspileError("Script rejected by sandbox")
    return compiled


def build_restricted_globals(
    scope: Mapping[str, Any], console_extra: dict[str, Any] | None = None
) -> dict[str, Any]:
    """
    Build a fresh globals dict for one run: safe builtins, guards, the JS
    runtime and globals, then the scope entries, which win over everything
    before them.
    """
    g: dict[str, Any] = {
        "__builtins__": _make_safe_builtins(),
        "__metaclass__": type,
        "__name__": SCRIPT_MODULE,
        "jsrt": jsrt,
    }
    g.update(_make_guard_globals())
    g.update(js_globals(make_console(extra=console_extra)))
    g.update(scope)
    return g


def _timeout_supported() -> bool:
    return hasattr(signal, "SIGALRM") and threading.current_thread() is threading.main_thread()


@contextlib.contextmanager
def time_limit(seconds: int | None) -> Iterator[None]:
    """Abort the block after *seconds* with RuntimeThrowError.

    Uses SIGALRM, so it only applies on the main thread of a Unix process;
    elsewhere, or when *seconds* is None or 0, the block runs unbounded.
    """
    if not seconds or seconds <= 0 or not _timeout_supported():
        yield
        return

    def _handler(signum: int, frame: Any) -> None:
        raise ScriptTimeout()

    old = signal.signal(signal.SIGALRM, _handler)
    try:
        signal.alarm(seconds)
        try:
            yield
        finally:
            signal.alarm(0)
    except ScriptTimeout:
        raise RuntimeThrowError(f"Script execution timed out after {seconds}s") from None
    finally:
        signal.signal(signal.SIGALRM, old)
