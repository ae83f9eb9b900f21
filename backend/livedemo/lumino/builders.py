"""
Chainable builders behind ``addSection()``, ``addRow()``, ``addField()`` ...

Every setter returns the builder itself; ``end()`` (and its specific alias
such as ``endRow()``) returns the parent, so a whole layout reads as one
expression. ``to_view()`` describes the built element as plain data; values
the script supplied (callbacks, props) are passed through untouched.
"""

from typing import Any

from .validators import ValidationRule, Validators


class _Builder:
    """Settings shared by every builder: css, style and visibility conditions."""

    kind = "element"

    def __init__(self, parent: Any) -> None:
        self._parent = parent
        self._css: Any = None
        self._style: Any = None
        self._conditions: list[tuple[str, Any]] = []

    def css(self, class_name: Any = None, *extra: Any) -> "_Builder":
        self._css = class_name
        return self

    def style(self, styles: Any = None, *extra: Any) -> "_Builder":
        self._style = styles
        return self

    def hideByCondition(self, condition: Any = None, *extra: Any) -> "_Builder":
        self._conditions.append(("hideByCondition", condition))
        return self

    def visibleByCondition(self, condition: Any = None, *extra: Any) -> "_Builder":
        self._conditions.append(("visibleByCondition", condition))
        return self

    def hideByAccess(self, condition: Any = None, *extra: Any) -> "_Builder":
        self._conditions.append(("hideByAccess", condition))
        return self

    def visibleByAccess(self, condition: Any = None, *extra: Any) -> "_Builder":
        self._conditions.append(("visibleByAccess", condition))
        return self

    def end(self, *extra: Any) -> Any:
        return self._parent

    def _common(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": self.kind}
        if self._css is not None:
            out["css"] = self._css
        if self._style is not None:
            out["style"] = self._style
        if self._conditions:
            out["conditions"] = [{"type": kind, "when": cond} for kind, cond in self._conditions]
        return out


class FieldBuilder(_Builder):
    kind = "field"

    def __init__(self, name: str, parent: Any) -> None:
        super().__init__(parent)
        self.name = name
        self._component: Any = None
        self._label: Any = None
        self._placeholder: Any = None
        self._rules: list[ValidationRule] = []
        self._props: Any = None
        self._col_span: Any = None
        self._disabled: Any = None
        self._read_only: Any = None
        self._display = False

    def component(self, component: Any = None, *extra: Any) -> "FieldBuilder":
        self._component = component
        return self

    def label(self, label: Any = None, *extra: Any) -> "FieldBuilder":
        self._label = label
        return self

    def placeholder(self, text: Any = None, *extra: Any) -> "FieldBuilder":
        self._placeholder = text
        return self

    def rules(self, *rules: Any) -> "FieldBuilder":
        for rule in rules:
            if not isinstance(rule, ValidationRule):
                raise TypeError(f"rules() expects validation rules, got {type(rule).__name__}")
            self._rules.append(rule)
        return self

    def required(self, message: Any = None, *extra: Any) -> "FieldBuilder":
        self._rules.append(Validators.required(message))
        return self

    def props(self, props: Any = None, *extra: Any) -> "FieldBuilder":
        self._props = props
        return self

    def colSpan(self, span: Any = None, *extra: Any) -> "FieldBuilder":
        self._col_span = span
        return self

    def disable(self, condition: Any = True, *extra: Any) -> "FieldBuilder":
        self._disabled = condition
        return self

    def readOnly(self, condition: Any = True, *extra: Any) -> "FieldBuilder":
        self._read_only = condition
        return self

    def display(self, flag: Any = True, *extra: Any) -> "FieldBuilder":
        self._display = flag is not False
        return self

    def endField(self, *extra: Any) -> Any:
        return self._parent

    @property
    def field_rules(self) -> list[ValidationRule]:
        return list(self._rules)

    def to_view(self) -> dict[str, Any]:
        out = self._common()
        out.update(
            name=self.name,
            component=self._component,
            label=self._label,
            placeholder=self._placeholder,
            rules=[r.describe() for r in self._rules],
            required=any(r.type == "required" for r in self._rules),
        )
        for key, value in (
            ("props", self._props),
            ("colSpan", self._col_span),
            ("disabled", self._disabled),
            ("readOnly", self._read_only),
        ):
            if value is not None:
                out[key] = value
        if self._display:
            out["display"] = True
        return out


class ComponentBuilder(_Builder):
    kind = "component"

    def __init__(self, component: Any, parent: Any) -> None:
        super().__init__(parent)
        self._component = component
        self._props: Any = None
        self._children: Any = None
        self._on_click: Any = None
        self._col_span: Any = None

    def props(self, props: Any = None, *extra: Any) -> "ComponentBuilder":
        self._props = props
        return self

    def children(self, children: Any = None, *extra: Any) -> "ComponentBuilder":
        self._children = children
        return self

    text = children

    def onClick(self, handler: Any = None, *extra: Any) -> "ComponentBuilder":
        self._on_click = handler
        return self

    def colSpan(self, span: Any = None, *extra: Any) -> "ComponentBuilder":
        self._col_span = span
        return self

    def endComponent(self, *extra: Any) -> Any:
        return self._parent

    def to_view(self) -> dict[str, Any]:
        out = self._common()
        out["component"] = self._component
        for key, value in (
            ("props", self._props),
            ("children", self._children),
            ("onClick", self._on_click),
            ("colSpan", self._col_span),
        ):
            if value is not None:
                out[key] = value
        return out


class RowBuilder(_Builder):
    kind = "row"

    def __init__(self, parent: Any) -> None:
        super().__init__(parent)
        self._items: list[FieldBuilder | ComponentBuilder] = []
        self._layout: Any = None
        self._columns: Any = None
        self._gap: Any = None

    def addField(self, name: Any = None, *extra: Any) -> FieldBuilder:
        if not isinstance(name, str) or not name:
            raise TypeError("addField() expects a field name")
        field = FieldBuilder(name, self)
        self._items.append(field)
        return field

    def addComponent(self, component: Any = None, *extra: Any) -> ComponentBuilder:
        builder = ComponentBuilder(component, self)
        self._items.append(builder)
        return builder

    def layout(self, layout: Any = None, *extra: Any) -> "RowBuilder":
        self._layout = layout
        return self

    def columns(self, count: Any = None, *extra: Any) -> "RowBuilder":
        self._columns = count
        return self

    def gap(self, gap: Any = None, *extra: Any) -> "RowBuilder":
        self._gap = gap
        return self

    def endRow(self, *extra: Any) -> Any:
        return self._parent

    @property
    def fields(self) -> list[FieldBuilder]:
        return [item for item in self._items if isinstance(item, FieldBuilder)]

    def to_view(self) -> dict[str, Any]:
        out = self._common()
        out["items"] = [item.to_view() for item in self._items]
        for key, value in (("layout", self._layout), ("columns", self._columns), ("gap", self._gap)):
            if value is not None:
                out[key] = value
        return out


class SectionBuilder(_Builder):
    kind = "section"

    def __init__(self, title: Any, parent: Any) -> None:
        super().__init__(parent)
        self.title = title
        self._rows: list[RowBuilder] = []
        self._collapsible = False
        self._collapsed = False
        self._gap: Any = None

    def addRow(self, *extra: Any) -> RowBuilder:
        row = RowBuilder(self)
        self._rows.append(row)
        return row

    def addComponent(self, component: Any = None, *extra: Any) -> ComponentBuilder:
        """A component on a row of its own; ``end()`` returns to the section."""
        row = RowBuilder(self)
        self._rows.append(row)
        builder = ComponentBuilder(component, self)
        row._items.append(builder)
        return builder

    def collapsible(self, flag: Any = True, *extra: Any) -> "SectionBuilder":
        self._collapsible = flag is not False
        return self

    def collapsed(self, flag: Any = True, *extra: Any) -> "SectionBuilder":
        self._collapsed = flag is not False
        return self

    def gap(self, gap: Any = None, *extra: Any) -> "SectionBuilder":
        self._gap = gap
        return self

    def endSection(self, *extra: Any) -> Any:
        return self._parent

    @property
    def rows(self) -> list[RowBuilder]:
        return list(self._rows)

    def to_view(self) -> dict[str, Any]:
        out = self._common()
        out["title"] = self.title
        out["rows"] = [row.to_view() for row in self._rows]
        if self._collapsible:
            out["collapsible"] = True
            out["collapsed"] = self._collapsed
        if self._gap is not None:
            out["gap"] = self._gap
        return out


class ListBuilder(_Builder):
    """A repeated group of fields bound to an array property of the entity."""

    kind = "list"

    def __init__(self, name: str, parent: Any) -> None:
        super().__init__(parent)
        self.name = name
        self._display: Any = None
        self._tab_label: Any = None
        self._item: Any = None
        self._defaults: Any = None
        self._min: Any = None
        self._max: Any = None
        self._rules: list[ValidationRule] = []

    def as_(self, component: Any = None, *extra: Any) -> "ListBuilder":
        self._display = component
        return self

    def tabLabel(self, label: Any = None, *extra: Any) -> "ListBuilder":
        self._tab_label = label
        return self

    def include(self, component_cls: Any = None, props: Any = None, *extra: Any) -> "ListBuilder":
        if not callable(component_cls):
            raise TypeError("include() expects a component class")
        self._item = component_cls(props)
        return self

    def defaults(self, values: Any = None, *extra: Any) -> "ListBuilder":
        self._defaults = values
        return self

    def min(self, count: Any = None, *extra: Any) -> "ListBuilder":
        self._min = count
        return self

    def max(self, count: Any = None, *extra: Any) -> "ListBuilder":
        self._max = count
        return self

    def rules(self, *rules: Any) -> "ListBuilder":
        self._rules.extend(rules)
        return self

    def endList(self, *extra: Any) -> Any:
        return self._parent

    def to_view(self) -> dict[str, Any]:
        out = self._common()
        out["name"] = self.name
        out["display"] = self._display
        if self._item is not None:
            out["item"] = self._item.build()
        for key, value in (
            ("tabLabel", self._tab_label),
            ("defaults", self._defaults),
            ("min", self._min),
            ("max", self._max),
        ):
            if value is not None:
                out[key] = value
        if self._rules:
            out["rules"] = [r.describe() for r in self._rules]
        return out


class ContainerBuilder(_Builder):
    """Nested container tree built with ``add()`` (tables, boxes, text)."""

    kind = "container"

    def __init__(self, component: Any, parent: Any, each: str | None = None, repeat: bool = False) -> None:
        super().__init__(parent)
        self._component = component
        self._children: list[ContainerBuilder] = []
        self._text: Any = None
        self._field: Any = None
        self._display = False
        self._props: Any = None
        self._on_click: Any = None
        self._repeat = repeat
        self._each = each

    def add(self, component: Any = None, *extra: Any) -> "ContainerBuilder":
        child = ContainerBuilder(component, self)
        self._children.append(child)
        return child

    def text(self, content: Any = None, *extra: Any) -> "ContainerBuilder":
        self._text = content
        return self

    def field(self, name: Any = None, *extra: Any) -> "ContainerBuilder":
        self._field = name
        return self

    def display(self, flag: Any = True, *extra: Any) -> "ContainerBuilder":
        self._display = flag is not False
        return self

    def props(self, props: Any = None, *extra: Any) -> "ContainerBuilder":
        self._props = props
        return self

    def onClick(self, handler: Any = None, *extra: Any) -> "ContainerBuilder":
        self._on_click = handler
        return self

    def each(self, field_name: Any = None, *extra: Any) -> "ContainerBuilder":
        """Children added until ``endEach()`` repeat once per item."""
        block = ContainerBuilder(None, self, each=field_name, repeat=True)
        self._children.append(block)
        return block

    def endEach(self, *extra: Any) -> Any:
        return self._parent

    def to_view(self) -> dict[str, Any]:
        out = self._common()
        if self._repeat:
            out["kind"] = "each"
            if self._each is not None:
                out["field"] = self._each
        else:
            out["component"] = self._component
        out["children"] = [child.to_view() for child in self._children]
        for key, value in (
            ("text", self._text),
            ("field", self._field),
            ("props", self._props),
            ("onClick", self._on_click),
        ):
            if value is not None:
                out[key] = value
        if self._display:
            out["display"] = True
        return out
