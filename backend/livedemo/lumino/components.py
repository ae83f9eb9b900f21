"""
Component catalogue: the values demo scripts pass to ``component()``,
``addComponent()``, ``container()`` and ``add()``.
"""

from dataclasses import dataclass
from typing import Literal

ComponentKind = Literal["field", "action", "layout", "container"]


@dataclass(frozen=True)
class ComponentType:
    name: str
    kind: ComponentKind
    tag: str = "div"

    def __repr__(self) -> str:
        return self.name

    def toString(self) -> str:
        return self.name


LuminoTextInput = ComponentType("LuminoTextInput", "field", "input")
LuminoNumberInput = ComponentType("LuminoNumberInput", "field", "input")
LuminoTextArea = ComponentType("LuminoTextArea", "field", "textarea")
LuminoSelect = ComponentType("LuminoSelect", "field", "select")
LuminoMultiSelect = ComponentType("LuminoMultiSelect", "field", "select")
LuminoAutocomplete = ComponentType("LuminoAutocomplete", "field", "input")
LuminoCheckbox = ComponentType("LuminoCheckbox", "field", "input")
LuminoSwitch = ComponentType("LuminoSwitch", "field", "input")
LuminoRadioGroup = ComponentType("LuminoRadioGroup", "field", "fieldset")
LuminoCheckboxGroup = ComponentType("LuminoCheckboxGroup", "field", "fieldset")
LuminoDatePicker = ComponentType("LuminoDatePicker", "field", "input")
LuminoTimePicker = ComponentType("LuminoTimePicker", "field", "input")
LuminoButton = ComponentType("LuminoButton", "action", "button")
LuminoTabs = ComponentType("LuminoTabs", "layout", "div")

LumTable = ComponentType("LumTable", "container", "table")
LumTHead = ComponentType("LumTHead", "container", "thead")
LumTBody = ComponentType("LumTBody", "container", "tbody")
LumTR = ComponentType("LumTR", "container", "tr")
LumTH = ComponentType("LumTH", "container", "th")
LumTD = ComponentType("LumTD", "container", "td")
LumText = ComponentType("LumText", "container", "span")
LumBox = ComponentType("LumBox", "container", "div")

FIELD_COMPONENTS = {
    c.name: c
    for c in (
        LuminoTextInput,
        LuminoNumberInput,
        LuminoTextArea,
        LuminoSelect,
        LuminoMultiSelect,
        LuminoAutocomplete,
        LuminoCheckbox,
        LuminoSwitch,
        LuminoRadioGroup,
        LuminoCheckboxGroup,
        LuminoDatePicker,
        LuminoTimePicker,
    )
}
CONTAINER_COMPONENTS = {c.name: c for c in (LumTable, LumTHead, LumTBody, LumTR, LumTH, LumTD, LumText, LumBox)}
