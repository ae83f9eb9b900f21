"""
Live demos: list, inspect, edit, run, copy, reset and preview.
"""

from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse

from livedemo.api.deps import DemoDep, RegistryDep
from livedemo.api.schemas import DemoDetail, DemoSummary, FileUpdate, RunResult, SourceFile
from livedemo.demos import LiveDemo, ReadOnlySourceError
from livedemo.lumino import render_html

router = APIRouter(prefix="/demos", tags=["demos"])


def _to_summary(demo: LiveDemo) -> DemoSummary:
    return DemoSummary(
        id=demo.id,
        title=demo.title,
        description=demo.description,
        variant=demo.variant.name,
        state=demo.state,
        dirty=demo.dirty,
    )


def _to_file(unit: Any) -> SourceFile:
    return SourceFile(name=unit.name, content=unit.content, is_entry=unit.is_entry, read_only=unit.read_only)


def _to_detail(demo: LiveDemo) -> DemoDetail:
    return DemoDetail(
        **_to_summary(demo).model_dump(),
        entry=demo.entry,
        files=[_to_file(u) for u in demo.units],
        error=demo.error,
        view=demo.view(),
    )


@router.get("", response_model=list[DemoSummary])
def list_demos(demos: RegistryDep) -> Any:
    return [_to_summary(d) for d in demos.all()]


@router.get("/{demo_id}", response_model=DemoDetail)
def get_demo(demo: DemoDep) -> Any:
    return _to_detail(demo)


@router.put("/{demo_id}/files/{name}", response_model=SourceFile)
def update_file(demo: DemoDep, name: str, body: FileUpdate) -> Any:
    """Replace a file's buffer. The demo is marked dirty until the next run."""
    try:
        demo.edit(name, body.content)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"File {name!r} not found")
    except ReadOnlySourceError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_file(demo.unit(name))


@router.get("/{demo_id}/files/{name}", response_class=PlainTextResponse)
def copy_file(demo: DemoDep, name: str) -> Any:
    """Current buffer of one file, verbatim (the editor's "copy" action)."""
    try:
        return demo.copy_source(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"File {name!r} not found")


@router.post("/{demo_id}/run", response_model=RunResult)
def run_demo(demo: DemoDep) -> Any:
    """Compile the current buffers. Script errors are reported in ``error``, not as HTTP errors."""
    demo.run()
    return RunResult(state=demo.state, error=demo.error, view=demo.view())


@router.post("/{demo_id}/reset", response_model=DemoDetail)
def reset_demo(demo_id: str, demos: RegistryDep) -> Any:
    """Drop all edits and start over from the built-in sources."""
    if demo_id not in demos.ids():
        raise HTTPException(status_code=404, detail=f"Demo {demo_id!r} not found")
    demos.reset(demo_id)
    return _to_detail(demos.get(demo_id))


@router.get("/{demo_id}/preview", response_class=HTMLResponse)
def preview_demo(demo: DemoDep) -> Any:
    return render_html(demo.view(), title=demo.title, error=demo.error, state=demo.state.value)
