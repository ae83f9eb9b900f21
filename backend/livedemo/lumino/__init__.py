"""
Lumino: the form/page builder library demo scripts are written against.

Exports: Component, Form, Page, Dialog, Validators, ValidationRule,
form_scope, page_scope, render_view, render_html.
"""

from .containers import Component, Dialog, Form, Page
from .render import FN_MARKER, render_html, render_view, to_plain
from .scopes import form_scope, page_scope
from .validators import ValidationRule, Validators

__all__ = [
    "Component",
    "Dialog",
    "Form",
    "Page",
    "Validators",
    "ValidationRule",
    "form_scope",
    "page_scope",
    "render_view",
    "render_html",
    "to_plain",
    "FN_MARKER",
]
