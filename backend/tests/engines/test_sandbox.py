"""Unit tests for engines.sandbox (RestrictedPython policy, globals, time limit)."""

import signal
import time

import pytest

from livedemo.engines.errors import RuntimeThrowError, TranspileError
from livedemo.engines.runtime import MATH, JSError
from livedemo.engines.sandbox import build_restricted_globals, compile_script, time_limit
from livedemo.engines.scope import CompilationScope


def _exec(code: str, scope: CompilationScope | None = None) -> dict:
    g = build_restricted_globals(scope or CompilationScope())
    exec(compile_script(code), g)
    return g


class TestCompileScript:
    def test_compile_simple(self) -> None:
        assert compile_script("x = 1") is not None

    def test_underscore_name_rejected(self) -> None:
        with pytest.raises(TranspileError, match="rejected by sandbox"):
            compile_script("x = _secret")

    def test_dunder_attribute_rejected(self) -> None:
        with pytest.raises(TranspileError):
            compile_script("x = y.__class__")

    def test_super_init_allowed(self) -> None:
        code = "class A:\n    pass\nclass B(A):\n    def __init__(self):\n        super(B, self).__init__()\n"
        assert compile_script(code) is not None

    def test_nonlocal_allowed(self) -> None:
        code = "def outer():\n    n = 0\n    def inc():\n        nonlocal n\n        n = n + 1\n    inc()\n    return n\n"
        assert _exec(code + "result = outer()\n")["result"] == 1


class TestBuildRestrictedGlobals:
    def test_includes_guards_and_runtime(self) -> None:
        g = build_restricted_globals(CompilationScope())
        for name in ("__builtins__", "_getattr_", "_getitem_", "_getiter_", "_write_", "jsrt", "console"):
            assert name in g
        assert g["Math"] is MATH
        assert g["Error"] is JSError

    def test_scope_wins(self) -> None:
        g = build_restricted_globals(CompilationScope(Math="mine"))
        assert g["Math"] == "mine"

    def test_open_not_available(self) -> None:
        with pytest.raises(NameError):
            _exec("f = open('/etc/passwd')")

    def test_import_blocked(self) -> None:
        with pytest.raises(ImportError):
            _exec("import os")

    def test_fresh_globals_per_call(self) -> None:
        g1 = build_restricted_globals(CompilationScope())
        g1["leak"] = 1
        assert "leak" not in build_restricted_globals(CompilationScope())

    def test_script_classes_writable_library_values_not(self) -> None:
        g = _exec("class Box:\n    pass\nBox.size = 3\nsize = Box.size\n")
        assert g["size"] == 3
        with pytest.raises(TypeError, match="read only"):
            _exec("Math.PI = 3\n")


@pytest.mark.skipif(not hasattr(signal, "SIGALRM"), reason="SIGALRM not available")
class TestTimeLimit:
    def test_aborts_long_running_block(self) -> None:
        with pytest.raises(RuntimeThrowError, match="timed out after 1s"):
            with time_limit(1):
                while True:
                    time.sleep(0.01)

    def test_script_cannot_catch_timeout(self) -> None:
        code = "def spin():\n    while True:\n        try:\n            pass\n        except Exception:\n            pass\nspin()\n"
        with pytest.raises(RuntimeThrowError):
            with time_limit(1):
                _exec(code)

    def test_none_means_unbounded(self) -> None:
        with time_limit(None):
            value = 42
        assert value == 42

    def test_alarm_cleared_after_block(self) -> None:
        with time_limit(5):
            pass
        assert signal.alarm(0) == 0
