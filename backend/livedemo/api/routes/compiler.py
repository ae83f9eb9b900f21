"""
Stateless compile: run a set of files through the engine once, without fallback.
"""

from typing import Any

from fastapi import APIRouter

from livedemo.api.schemas import CompileRequest, CompileResponse
from livedemo.demos import render_instance
from livedemo.engines import NO_FALLBACK, VARIANTS, CompileError, SourceUnit, compile_demo
from livedemo.lumino import form_scope, page_scope

router = APIRouter(tags=["compile"])

_SCOPES = {"form": form_scope, "page": page_scope}


@router.post("/compile", response_model=CompileResponse)
def compile_files(body: CompileRequest) -> Any:
    units = [
        SourceUnit(
            f.name,
            f.content,
            is_entry=f.is_entry if body.entry is None else f.name == body.entry,
            read_only=f.read_only,
        )
        for f in body.files
    ]
    result = compile_demo(units, _SCOPES[body.variant](), VARIANTS[body.variant], NO_FALLBACK)
    if result.error:
        return CompileResponse(error=result.error)
    try:
        view = render_instance(result.instance, result.initial_data)
    except CompileError as e:
        return CompileResponse(error=e.message)
    return CompileResponse(view=view)
