"""Unit tests for the LiveDemo state machine."""

import warnings
from pathlib import Path

import pytest

from livedemo.demos import DemoState, LiveDemo, ReadOnlySourceError
from livedemo.engines import FORM_VARIANT, SourceUnit
from livedemo.demos import live_demo
from livedemo.lumino import form_scope

GOOD = """\
export class Contact {
  name = 'Ada';
}

export class ContactForm extends Form {
  configure() {
    this.addRow().addField('name').component(LuminoTextInput).label('Name');
  }
}
"""

RENAMED = GOOD.replace("'Name'", "'Full name'")

BROKEN = """\
export class ContactForm extends Form {
  configure() {
    missing();
  }
}
"""

BAD_BUILD = """\
export class ContactForm extends Form {
  configure() {}
  build() {
    throw new Error('cannot render');
  }
}
"""


def make_demo() -> LiveDemo:
    units = [
        SourceUnit("ContactForm.ts", GOOD, is_entry=True),
        SourceUnit("README.md", "# Contact", read_only=True),
    ]
    return LiveDemo("contact", units, form_scope(), FORM_VARIANT, title="Contact")


def field_label(demo: LiveDemo) -> str:
    return demo.view()["root"]["items"][0]["items"][0]["label"]


class TestEditing:
    def test_initial_state(self) -> None:
        demo = make_demo()
        assert demo.state is DemoState.INITIAL
        assert demo.dirty is False
        assert demo.error is None
        assert demo.entry == "ContactForm.ts"
        assert demo.view() is None

    def test_edit_marks_dirty_without_running(self) -> None:
        demo = make_demo()
        demo.edit("ContactForm.ts", BROKEN)
        assert demo.dirty is True
        assert demo.state is DemoState.INITIAL
        assert demo.copy_source() == BROKEN

    def test_read_only(self) -> None:
        demo = make_demo()
        with pytest.raises(ReadOnlySourceError, match="read-only"):
            demo.edit("README.md", "changed")
        assert demo.copy_source("README.md") == "# Contact"

    def test_unknown_unit(self) -> None:
        with pytest.raises(KeyError):
            make_demo().edit("Nope.ts", "")

    def test_units_are_copies(self) -> None:
        units = [SourceUnit("A.ts", GOOD, is_entry=True)]
        demo = LiveDemo("a", units, form_scope(), FORM_VARIANT)
        demo.edit("A.ts", BROKEN)
        assert units[0].content == GOOD

    def test_needs_units(self) -> None:
        with pytest.raises(ValueError):
            LiveDemo("empty", [], form_scope(), FORM_VARIANT)


class TestRun:
    def test_success(self) -> None:
        demo = make_demo()
        result = demo.run()
        assert result.ok
        assert demo.state is DemoState.COMPILED
        assert demo.initial_data.name == "Ada"
        assert field_label(demo) == "Name"
        assert demo.view()["initialData"] == {"name": "Ada"}

    def test_failure_keeps_last_good_instance(self) -> None:
        demo = make_demo()
        demo.run()
        good_instance = demo.instance
        demo.edit("ContactForm.ts", BROKEN)
        result = demo.run()
        assert result.error == "missing is not defined"
        assert result.instance is good_instance
        assert demo.state is DemoState.COMPILED_WITH_ERROR
        assert demo.error == "missing is not defined"
        assert demo.dirty is False
        assert demo.instance is good_instance
        assert field_label(demo) == "Name"

    def test_recovery_after_error(self) -> None:
        demo = make_demo()
        demo.edit("ContactForm.ts", BROKEN)
        demo.run()
        assert demo.state is DemoState.COMPILED_WITH_ERROR
        assert demo.instance is None
        demo.edit("ContactForm.ts", RENAMED)
        demo.run()
        assert demo.state is DemoState.COMPILED
        assert demo.error is None
        assert field_label(demo) == "Full name"

    def test_render_failure_is_a_run_error(self) -> None:
        demo = make_demo()
        demo.run()
        demo.edit("ContactForm.ts", BAD_BUILD)
        result = demo.run()
        assert result.error == "cannot render"
        assert demo.state is DemoState.COMPILED_WITH_ERROR
        assert field_label(demo) == "Name"


def test_module_compiles_without_warnings() -> None:
    path = Path(live_demo.__file__)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(path.read_text(encoding="utf-8"), str(path), "exec")
