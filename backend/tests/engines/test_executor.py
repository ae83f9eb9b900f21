"""Unit tests for engines.executor."""

import pytest

from livedemo.engines.errors import RuntimeThrowError, TranspileError
from livedemo.engines.executor import execute
from livedemo.engines.models import Discovery
from livedemo.engines.scope import CompilationScope
from livedemo.engines.transpiler import transpile


class Base:
    pass


SCOPE = CompilationScope(Base=Base)


class TestExecute:
    def test_returns_discovered_constructors(self) -> None:
        code = transpile("class Model { name = 'x'; }\nclass Entry extends Base {}")
        ctors = execute(code, Discovery(primary="Entry", companion="Model"), SCOPE)
        assert issubclass(ctors.primary, Base)
        assert ctors.companion().name == "x"

    def test_missing_companion_is_none(self) -> None:
        code = transpile("class Entry extends Base {}")
        ctors = execute(code, Discovery(primary="Entry"), SCOPE)
        assert ctors.companion is None

    def test_undefined_identifier(self) -> None:
        code = transpile("const x = missingThing + 1;\nclass Entry extends Base {}")
        with pytest.raises(RuntimeThrowError, match="missingThing is not defined"):
            execute(code, Discovery(primary="Entry"), SCOPE)

    def test_top_level_throw(self) -> None:
        code = transpile('throw new Error("boom");')
        with pytest.raises(RuntimeThrowError) as exc_info:
            execute(code, Discovery(primary="Entry"), SCOPE)
        assert exc_info.value.message == "boom"

    def test_discovered_name_not_defined(self) -> None:
        with pytest.raises(RuntimeThrowError, match="Ghost is not defined"):
            execute("x = 1\n", Discovery(primary="Ghost"), SCOPE)

    def test_sandbox_rejection_is_transpile_error(self) -> None:
        with pytest.raises(TranspileError):
            execute("x = _hidden\n", Discovery(primary="Entry"), SCOPE)

    def test_runs_are_isolated(self) -> None:
        code = transpile("var counter = 0;\ncounter++;\nclass Entry extends Base { n = counter; }")
        first = execute(code, Discovery(primary="Entry"), SCOPE)
        second = execute(code, Discovery(primary="Entry"), SCOPE)
        assert first.primary().n == 1
        assert second.primary().n == 1
