from typing import Annotated

from fastapi import Depends, HTTPException

from livedemo.demos import DemoRegistry, LiveDemo, registry


def get_registry() -> DemoRegistry:
    return registry


RegistryDep = Annotated[DemoRegistry, Depends(get_registry)]


def get_demo(demo_id: str, demos: RegistryDep) -> LiveDemo:
    try:
        return demos.get(demo_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Demo {demo_id!r} not found")


DemoDep = Annotated[LiveDemo, Depends(get_demo)]
