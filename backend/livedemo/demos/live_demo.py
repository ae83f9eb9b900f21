"""
LiveDemo: one editable demo and its compile state.

    INITIAL             --run ok-->    COMPILED
    INITIAL             --run fails--> COMPILED_WITH_ERROR
    COMPILED            --run fails--> COMPILED_WITH_ERROR
    COMPILED_WITH_ERROR --run ok-->    COMPILED

Editing only marks the demo dirty; state changes happen on ``run()``. A
failed run keeps the last good instance (the fallback) on display.
"""

import enum
import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from livedemo.core.config import settings
from livedemo.engines import NO_FALLBACK, CompileResult, Fallback, SourceUnit, Variant, compile_demo
from livedemo.engines.combiner import entry_name
from livedemo.engines.errors import CompileError, RuntimeThrowError
from livedemo.engines.runtime import error_message
from livedemo.engines.sandbox import time_limit
from livedemo.lumino import render_view

_log = logging.getLogger(__name__)


class DemoState(str, enum.Enum):
    INITIAL = "initial"
    COMPILED = "compiled"
    COMPILED_WITH_ERROR = "compiled_with_error"


class ReadOnlySourceError(Exception):
    """Raised when editing a source unit flagged read-only."""

    def __init__(self, name: str) -> None:
        super().__init__(f"File {name!r} is read-only")
        self.name = name


def render_instance(instance: Any, initial_data: Any) -> dict[str, Any]:
    """render_view with script errors reported as RuntimeThrowError."""
    try:
        with time_limit(settings.DEMO_EXEC_TIMEOUT):
            return render_view(instance, initial_data)
    except CompileError:
        raise
    except Exception as exc:
        raise RuntimeThrowError(error_message(exc)) from exc


class LiveDemo:
    def __init__(
        self,
        demo_id: str,
        units: Sequence[SourceUnit],
        scope: Mapping[str, Any],
        variant: Variant,
        *,
        title: str = "",
        description: str = "",
        fallback: Fallback = NO_FALLBACK,
    ) -> None:
        if not units:
            raise ValueError("A demo needs at least one source unit")
        self.id = demo_id
        self.title = title or demo_id
        self.description = description
        self.scope = scope
        self.variant = variant
        self.state = DemoState.INITIAL
        self.dirty = False
        self.error: str | None = None
        self._units = [replace(u) for u in units]
        self._fallback = fallback
        self._view: dict[str, Any] | None = None
        self._lock = threading.Lock()

    @property
    def units(self) -> list[SourceUnit]:
        return list(self._units)

    @property
    def entry(self) -> str:
        return entry_name(self._units) or ""

    @property
    def instance(self) -> Any:
        return self._fallback.instance

    @property
    def initial_data(self) -> Any:
        return self._fallback.initial_data

    def unit(self, name: str) -> SourceUnit:
        for unit in self._units:
            if unit.name == name:
                return unit
        raise KeyError(name)

    def edit(self, name: str, content: str) -> None:
        unit = self.unit(name)
        if unit.read_only:
            raise ReadOnlySourceError(name)
        with self._lock:
            unit.content = content
            self.dirty = True

    def copy_source(self, name: str | None = None) -> str:
        """Current buffer of *name*, or of the entry unit."""
        return self.unit(name or self.entry).content

    def run(self) -> CompileResult:
        """Compile the current buffers and update state. Never raises for script errors."""
        with self._lock:
            result = compile_demo(self._units, self.scope, self.variant, self._fallback, demo_id=self.id)
            view = None
            if result.ok:
                try:
                    view = render_instance(result.instance, result.initial_data)
                except CompileError as exc:
                    _log.warning("Render failed for demo %s: %s", self.id, exc.message)
                    result = CompileResult.failed(self._fallback, exc.message)
            if result.ok:
                self._fallback = result.fallback
                self._view = view
                self.state = DemoState.COMPILED
                self.error = None
            else:
                self.state = DemoState.COMPILED_WITH_ERROR
                self.error = result.error
            self.dirty = False
            _log.info("Demo %s ran: %s", self.id, self.state.value)
            return result

    def view(self) -> dict[str, Any] | None:
        """Rendered view of the instance on display (the fallback after a failed run)."""
        with self._lock:
            if self._view is None and self._fallback.instance is not None:
                try:
                    self._view = render_instance(self._fallback.instance, self._fallback.initial_data)
                except CompileError as exc:
                    _log.warning("Render of fallback failed for demo %s: %s", self.id, exc.message)
            return self._view
