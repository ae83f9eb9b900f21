"""
Data passed between the compile pipeline stages.
"""

from dataclasses import dataclass
from typing import Any, Literal

SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")


@dataclass
class SourceUnit:
    """One named source buffer of a demo. ``content`` is replaced as the user edits."""

    name: str
    content: str
    is_entry: bool = False
    read_only: bool = False

    @property
    def is_source(self) -> bool:
        """Script files, and names without any extension; css/json/... are not."""
        stem = self.name.rsplit("/", 1)[-1]
        return "." not in stem or stem.endswith(SOURCE_EXTENSIONS)


@dataclass(frozen=True)
class DiscoveredSymbol:
    kind: Literal["primary", "companion"]
    name: str


@dataclass(frozen=True)
class Discovery:
    """Class names picked out of transpiled code; either may be missing."""

    primary: str | None = None
    companion: str | None = None

    @property
    def symbols(self) -> list[DiscoveredSymbol]:
        found = []
        if self.primary:
            found.append(DiscoveredSymbol("primary", self.primary))
        if self.companion:
            found.append(DiscoveredSymbol("companion", self.companion))
        return found


@dataclass(frozen=True)
class Constructors:
    """Classes read back from an executed script. ``primary`` is None when discovery found none."""

    primary: Any = None
    companion: Any = None


@dataclass(frozen=True)
class Fallback:
    """The last good (instance, initial_data) pair; both None before any success."""

    instance: Any = None
    initial_data: Any = None


NO_FALLBACK = Fallback()


@dataclass(frozen=True)
class CompileResult:
    """
    Outcome of one compile attempt.

    ``instance`` can be set together with ``error``: on failure it holds the
    fallback instance, so the caller always has the last good view to show.
    """

    instance: Any = None
    initial_data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def fallback(self) -> Fallback:
        return Fallback(self.instance, self.initial_data)

    @classmethod
    def failed(cls, fallback: Fallback, message: str) -> "CompileResult":
        return cls(fallback.instance, fallback.initial_data, message)
