"""
In-process registry of live demos, created lazily from the built-in catalogue.
"""

import logging
import threading

from livedemo.engines import NO_FALLBACK, compile_demo

from .catalog import DEMOS_BY_ID, DemoDefinition
from .live_demo import LiveDemo

_log = logging.getLogger(__name__)


def create_demo(definition: DemoDefinition) -> LiveDemo:
    """
    A LiveDemo in its initial state. The pristine sources are compiled once
    (without fallback) to get the instance shown before the first run.
    """
    scope = definition.scope()
    sources = definition.sources()
    initial = compile_demo(sources, scope, definition.variant, NO_FALLBACK, demo_id=definition.id)
    if initial.error:
        _log.error("Built-in demo %s does not compile: %s", definition.id, initial.error)
    return LiveDemo(
        definition.id,
        sources,
        scope,
        definition.variant,
        title=definition.title,
        description=definition.description,
        fallback=initial.fallback,
    )


class DemoRegistry:
    def __init__(self, definitions: dict[str, DemoDefinition] | None = None) -> None:
        self._definitions = dict(DEMOS_BY_ID if definitions is None else definitions)
        self._demos: dict[str, LiveDemo] = {}
        self._lock = threading.Lock()

    def ids(self) -> list[str]:
        return list(self._definitions)

    def get(self, demo_id: str) -> LiveDemo:
        """The demo with *demo_id*; KeyError if the catalogue has no such demo."""
        with self._lock:
            demo = self._demos.get(demo_id)
            if demo is None:
                demo = create_demo(self._definitions[demo_id])
                self._demos[demo_id] = demo
            return demo

    def all(self) -> list[LiveDemo]:
        return [self.get(demo_id) for demo_id in self.ids()]

    def reset(self, demo_id: str | None = None) -> None:
        """Forget edits: the next get() starts from the pristine sources."""
        with self._lock:
            if demo_id is None:
                self._demos.clear()
            else:
                self._demos.pop(demo_id, None)


registry = DemoRegistry()
