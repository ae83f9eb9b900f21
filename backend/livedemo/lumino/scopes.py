"""
Stock compilation scopes: the library names a demo script can use without importing.
"""

from livedemo.engines.scope import CompilationScope

from . import components as c
from .containers import Component, Dialog, Form, Page
from .validators import Validators

_FORM_BINDINGS = {
    "Form": Form,
    "Validators": Validators,
    **c.FIELD_COMPONENTS,
    "LuminoButton": c.LuminoButton,
}

_PAGE_BINDINGS = {
    "Page": Page,
    "Dialog": Dialog,
    "Component": Component,
    "LuminoTabs": c.LuminoTabs,
    **c.CONTAINER_COMPONENTS,
}

_form_scope = CompilationScope(_FORM_BINDINGS)
_page_scope = _form_scope.extend(_PAGE_BINDINGS)


def form_scope() -> CompilationScope:
    """Scope of single-file form demos."""
    return _form_scope


def page_scope() -> CompilationScope:
    """Scope of multi-file page demos: the form scope plus pages, dialogs, components and containers."""
    return _page_scope
