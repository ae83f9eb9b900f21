"""Unit tests for engines.scope.CompilationScope."""

import pytest

from livedemo.engines.scope import CompilationScope


class TestCompilationScope:
    def test_mapping_behaviour(self) -> None:
        scope = CompilationScope({"Form": 1}, Validators=2)
        assert dict(scope) == {"Form": 1, "Validators": 2}
        assert list(scope) == ["Form", "Validators"]
        assert len(scope) == 2

    def test_immutable(self) -> None:
        scope = CompilationScope(Form=1)
        with pytest.raises(TypeError):
            scope["Form"] = 2  # type: ignore[index]

    @pytest.mark.parametrize("key", ["_private", "not-an-ident", "jsrt", "self", "js_tmp", "class"])
    def test_invalid_keys(self, key: str) -> None:
        with pytest.raises(ValueError):
            CompilationScope({key: 1})

    def test_extend_returns_new_scope(self) -> None:
        base = CompilationScope(Form=1)
        extended = base.extend({"Page": 2}, Form=3)
        assert dict(base) == {"Form": 1}
        assert dict(extended) == {"Form": 3, "Page": 2}
