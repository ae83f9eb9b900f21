"""
Live demos: editable source units, the per-demo state machine and the registry.
"""

from .catalog import CATALOG, DEMOS_BY_ID, DemoDefinition
from .live_demo import DemoState, LiveDemo, ReadOnlySourceError, render_instance
from .registry import DemoRegistry, create_demo, registry

__all__ = [
    "CATALOG",
    "DEMOS_BY_ID",
    "DemoDefinition",
    "DemoRegistry",
    "DemoState",
    "LiveDemo",
    "ReadOnlySourceError",
    "create_demo",
    "registry",
    "render_instance",
]
