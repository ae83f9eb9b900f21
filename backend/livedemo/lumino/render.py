"""
Renderer: turns a built instance into a JSON-safe view tree and an HTML preview.

Callables in the tree (event handlers, visibility conditions, computed
props) are not evaluated; they are shown as the marker ``"<fn>"``.
"""

import math
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from livedemo.engines.runtime import source_key

from .components import ComponentType
from .validators import ValidationRule

FN_MARKER = "<fn>"
CIRCULAR_MARKER = "<circular>"

_HTML_ENV: Environment | None = None


def _get_html_env() -> Environment:
    global _HTML_ENV
    if _HTML_ENV is None:
        _HTML_ENV = Environment(
            loader=PackageLoader("livedemo.lumino", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        _HTML_ENV.globals["FN_MARKER"] = FN_MARKER
    return _HTML_ENV


def to_plain(value: Any, _seen: frozenset[int] = frozenset()) -> Any:
    """JSON-safe copy of *value*: script objects become dicts of their public fields."""
    if value is None or isinstance(value, (bool, str, int)):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, ComponentType):
        return value.name
    if isinstance(value, ValidationRule):
        return value.describe()
    if isinstance(value, type):
        return value.__name__
    if id(value) in _seen:
        return CIRCULAR_MARKER
    seen = _seen | {id(value)}
    if isinstance(value, dict):
        return {str(k): to_plain(v, seen) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v, seen) for v in value]
    if callable(value):
        return FN_MARKER
    attrs = getattr(value, "__dict__", None)
    if attrs is not None:
        out = {}
        for name, item in attrs.items():
            if name.startswith("_"):
                continue
            key = source_key(name)
            if not key.startswith("#"):
                out[key] = to_plain(item, seen)
        return out
    return str(value)


def render_view(instance: Any, initial_data: Any = None) -> dict[str, Any]:
    """
    Build *instance* and describe it: ``{"root": <tree>, "initialData": <values>}``.

    ``root`` is None when there is no instance. Errors raised by the
    instance's ``build()`` (a page's deferred ``configure()`` runs here)
    propagate to the caller.
    """
    if instance is None:
        return {"root": None, "initialData": to_plain(initial_data)}
    build = getattr(instance, "build", None)
    if not callable(build):
        raise TypeError(f"{type(instance).__name__} has no build() method and cannot be rendered")
    return {"root": to_plain(build()), "initialData": to_plain(initial_data)}


def render_html(view: dict[str, Any] | None, *, title: str, error: str | None = None, state: str | None = None) -> str:
    """HTML preview of a view tree produced by ``render_view``, with an optional error banner."""
    template = _get_html_env().get_template("preview.html")
    view = view or {}
    return template.render(
        title=title,
        error=error,
        state=state,
        root=view.get("root"),
        initial_data=view.get("initialData") or {},
    )
