"""
CompilationScope: the names a demo script may use unqualified.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from livedemo.tsc.names import is_reserved_identifier


class CompilationScope(Mapping[str, Any]):
    """
    Immutable, ordered mapping of identifier -> library value.

    Keys must be identifiers a script can spell: no leading underscore and
    no name the transpiler reserves for generated code.
    """

    def __init__(self, bindings: Mapping[str, Any] | None = None, /, **more: Any) -> None:
        merged: dict[str, Any] = dict(bindings or {})
        merged.update(more)
        for name in merged:
            if not isinstance(name, str) or not name.isidentifier():
                raise ValueError(f"Scope key {name!r} is not an identifier")
            if name.startswith("_") or is_reserved_identifier(name):
                raise ValueError(f"Scope key {name!r} is reserved")
        self._bindings = MappingProxyType(merged)

    def __getitem__(self, name: str) -> Any:
        return self._bindings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"CompilationScope({', '.join(self._bindings)})"

    def extend(self, bindings: Mapping[str, Any] | None = None, /, **more: Any) -> "CompilationScope":
        """Return a new scope with extra (or replaced) bindings."""
        merged = dict(self._bindings)
        merged.update(bindings or {})
        merged.update(more)
        return CompilationScope(merged)
