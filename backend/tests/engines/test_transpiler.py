"""Unit tests for engines.transpiler (adapter + LRU cache)."""

from unittest.mock import patch

import pytest

from livedemo.engines import transpiler
from livedemo.engines.errors import TranspileError
from livedemo.engines.transpiler import clear_cache, transpile


class TestTranspile:
    def test_returns_python(self) -> None:
        code = transpile("class A extends Form {}")
        assert "class A(Form):" in code

    def test_syntax_error_has_position(self) -> None:
        with pytest.raises(TranspileError) as exc_info:
            transpile("class {")
        assert exc_info.value.line == 1
        assert exc_info.value.column is not None
        assert exc_info.value.message.endswith(f"(1:{exc_info.value.column})")

    def test_unsupported_construct(self) -> None:
        with pytest.raises(TranspileError):
            transpile("function* gen() { yield 1; }")


class TestTranspileCache:
    def test_hit_returns_same_object(self) -> None:
        first = transpile("const a = 1;")
        assert transpile("const a = 1;") is first

    def test_clear_cache(self) -> None:
        transpile("const a = 1;")
        clear_cache()
        assert len(transpiler._transpile_cache) == 0

    def test_size_bound(self) -> None:
        with patch.object(transpiler.settings, "DEMO_TRANSPILE_CACHE_SIZE", 2):
            for i in range(5):
                transpile(f"const a = {i};")
        assert len(transpiler._transpile_cache) == 2

    def test_failures_not_cached(self) -> None:
        with pytest.raises(TranspileError):
            transpile("const = ;")
        assert len(transpiler._transpile_cache) == 0

    def test_deep_nesting_reported(self) -> None:
        source = "const a = " + "(" * 1500 + "1" + ")" * 1500 + ";"
        with pytest.raises(TranspileError, match="nested too deeply"):
            transpile(source)
