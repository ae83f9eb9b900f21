"""
Base classes demo scripts extend: Component, Form, Page and Dialog.

Subclasses implement ``configure()`` and describe their layout with the
builder methods; ``build()`` returns the description as plain data for the
renderer. Component, Form and Dialog configure while being constructed, Page
waits for the first ``build()`` so that subclass fields are already set.
"""

from typing import Any

from .builders import ComponentBuilder, ContainerBuilder, ListBuilder, RowBuilder, SectionBuilder
from .validators import ValidationRule


class _Configurable:
    def configure(self, *extra: Any) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement configure()")

    def _include_component(self, component_cls: Any, props: Any) -> "Component":
        if not callable(component_cls):
            raise TypeError("include() expects a component class")
        component = component_cls(props)
        if not isinstance(component, Component):
            raise TypeError(f"include() expects a Component subclass, got {type(component).__name__}")
        return component


class Component(_Configurable):
    """Reusable group of rows and containers; included by forms, pages and lists."""

    kind = "component"

    def __init__(self, props: Any = None, *extra: Any) -> None:
        self.props = props
        self._items: list[Any] = []
        self.configure()

    def addRow(self, *extra: Any) -> RowBuilder:
        row = RowBuilder(self)
        self._items.append(row)
        return row

    def container(self, component: Any = None, *extra: Any) -> ContainerBuilder:
        builder = ContainerBuilder(component, self)
        self._items.append(builder)
        return builder

    def include(self, component_cls: Any = None, props: Any = None, *extra: Any) -> "Component":
        self._items.append(self._include_component(component_cls, props))
        return self

    def _item_views(self) -> list[dict[str, Any]]:
        return [item.build() if isinstance(item, Component) else item.to_view() for item in self._items]

    def build(self, *extra: Any) -> dict[str, Any]:
        return {"kind": self.kind, "name": type(self).__name__, "items": self._item_views()}


class Dialog(Component):
    kind = "dialog"

    def __init__(self, id: Any = None, *extra: Any) -> None:
        self.id = id
        self._title: Any = None
        self._size: Any = "medium"
        super().__init__(None)

    def title(self, title: Any = None, *extra: Any) -> "Dialog":
        self._title = title
        return self

    def size(self, size: Any = None, *extra: Any) -> "Dialog":
        self._size = size
        return self

    def build(self, *extra: Any) -> dict[str, Any]:
        view = super().build()
        view.update(id=self.id, title=self._title, size=self._size)
        return view


class Form(_Configurable):
    kind = "form"

    def __init__(self, id: Any = None, *extra: Any) -> None:
        self.id = id
        self._items: list[Any] = []
        self._read_only: Any = False
        self._default_values: Any = None
        self.configure()

    def addSection(self, title: Any = None, *extra: Any) -> SectionBuilder:
        section = SectionBuilder(title, self)
        self._items.append(section)
        return section

    def addRow(self, *extra: Any) -> RowBuilder:
        row = RowBuilder(self)
        self._items.append(row)
        return row

    def addList(self, name: Any = None, *extra: Any) -> ListBuilder:
        if not isinstance(name, str) or not name:
            raise TypeError("addList() expects a property name")
        builder = ListBuilder(name, self)
        self._items.append(builder)
        return builder

    def include(self, component_cls: Any = None, props: Any = None, *extra: Any) -> "Form":
        self._items.append(self._include_component(component_cls, props))
        return self

    def setReadOnly(self, condition: Any = True, *extra: Any) -> "Form":
        self._read_only = condition
        return self

    def setDefaultValues(self, values: Any = None, *extra: Any) -> "Form":
        self._default_values = values
        return self

    def field_rules(self) -> dict[str, list[ValidationRule]]:
        """Validation rules per field name, for every field in a section or a direct row."""
        rules: dict[str, list[ValidationRule]] = {}
        for item in self._items:
            rows = item.rows if isinstance(item, SectionBuilder) else [item] if isinstance(item, RowBuilder) else []
            for row in rows:
                for field in row.fields:
                    if field.field_rules:
                        rules.setdefault(field.name, []).extend(field.field_rules)
        return rules

    def build(self, *extra: Any) -> dict[str, Any]:
        view: dict[str, Any] = {
            "kind": self.kind,
            "id": self.id,
            "name": type(self).__name__,
            "readOnly": self._read_only,
            "items": [item.build() if isinstance(item, Component) else item.to_view() for item in self._items],
        }
        if self._default_values is not None:
            view["defaultValues"] = self._default_values
        return view


class Page(_Configurable):
    kind = "page"

    def __init__(self, id: Any = None, *extra: Any) -> None:
        self.id = id
        self._items: list[Any] = []
        self._route: Any = None
        self._mode: Any = None
        self._mode_handlers: dict[str, Any] = {}
        self._configured = False

    def route(self, path: Any = None, *extra: Any) -> "Page":
        self._route = path
        return self

    def mode(self, mode: Any = None, *extra: Any) -> "Page":
        self._mode = mode
        return self

    def onMode(self, mode: Any = None, handler: Any = None, *extra: Any) -> "Page":
        self._mode_handlers[str(mode)] = handler
        return self

    def addForm(self, form: Any = None, *extra: Any) -> "Page":
        if not isinstance(form, Form):
            raise TypeError("addForm() expects a Form instance")
        self._items.append(form)
        return self

    def addRow(self, *extra: Any) -> RowBuilder:
        row = RowBuilder(self)
        self._items.append(row)
        return row

    def addComponent(self, component: Any = None, *extra: Any) -> ComponentBuilder:
        row = RowBuilder(self)
        self._items.append(row)
        builder = ComponentBuilder(component, self)
        row._items.append(builder)
        return builder

    def include(self, component_cls: Any = None, props: Any = None, *extra: Any) -> "Page":
        self._items.append(self._include_component(component_cls, props))
        return self

    def build(self, *extra: Any) -> dict[str, Any]:
        if not self._configured:
            self._configured = True
            self.configure()
        return {
            "kind": self.kind,
            "id": self.id,
            "name": type(self).__name__,
            "route": self._route,
            "mode": self._mode,
            "modes": sorted(self._mode_handlers),
            "items": [
                item.build() if isinstance(item, (Component, Form)) else item.to_view() for item in self._items
            ],
        }
