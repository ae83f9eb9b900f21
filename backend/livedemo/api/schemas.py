"""
Request and response bodies of the demo API.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from livedemo.demos import DemoState


class SourceFile(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    is_entry: bool = False
    read_only: bool = False


class DemoSummary(BaseModel):
    id: str
    title: str
    description: str = ""
    variant: str
    state: DemoState
    dirty: bool


class DemoDetail(DemoSummary):
    entry: str
    files: list[SourceFile]
    error: str | None = None
    view: dict[str, Any] | None = None


class FileUpdate(BaseModel):
    """Body for PUT /demos/{id}/files/{name}."""

    content: str


class RunResult(BaseModel):
    state: DemoState
    error: str | None = None
    view: dict[str, Any] | None = None


class CompileRequest(BaseModel):
    """Body for POST /compile: a throwaway demo compiled without fallback."""

    files: list[SourceFile] = Field(..., min_length=1)
    entry: str | None = None
    variant: Literal["form", "page"] = "form"

    @model_validator(mode="after")
    def entry_names_a_file(self) -> "CompileRequest":
        if self.entry is not None and self.entry not in {f.name for f in self.files}:
            raise ValueError(f"Entry file '{self.entry}' is not among the submitted files.")
        return self


class CompileResponse(BaseModel):
    error: str | None = None
    view: dict[str, Any] | None = None
