"""Tests for engines.pipeline.compile_demo: the end-to-end compile funnel."""

import logging
import signal
from unittest.mock import patch

import pytest

from livedemo.engines import (
    FORM_VARIANT,
    NO_FALLBACK,
    PAGE_VARIANT,
    VARIANTS,
    Fallback,
    SourceUnit,
    compile_demo,
)
from livedemo.engines import pipeline
from livedemo.lumino import Form, Page, form_scope, page_scope

CONTACT = """\
import { Form, Validators } from "lumino/core";

class Contact {
  name = "Ada";
  email = "";
}

export class ContactForm extends Form<Contact> {
  constructor() {
    super("contact");
  }

  configure() {
    this.addSection("Info")
      .addRow()
        .addField("name").component(LuminoTextInput).label("Name").required().endField()
      .endRow()
    .endSection();
  }
}
"""


def _form(source: str) -> list[SourceUnit]:
    return [SourceUnit("Form.ts", source, is_entry=True)]


class TestFormVariant:
    def test_success(self) -> None:
        result = compile_demo(_form(CONTACT), form_scope())
        assert result.ok
        assert isinstance(result.instance, Form)
        assert type(result.instance).__name__ == "ContactForm"
        assert result.initial_data.name == "Ada"

    def test_no_entry_class(self) -> None:
        result = compile_demo(_form("class Plain {}"), form_scope())
        assert result.error == "No entry class found"
        assert result.instance is None

    def test_transpile_error_keeps_fallback(self) -> None:
        fallback = Fallback(instance="previous", initial_data=None)
        result = compile_demo(_form("class Broken extends Form {"), form_scope(), FORM_VARIANT, fallback)
        assert not result.ok
        assert result.instance == "previous"

    def test_runtime_error_message(self) -> None:
        source = "class F extends Form { configure() { this.nope.call(); } }"
        result = compile_demo(_form(source), form_scope())
        assert result.error == "Cannot read properties of undefined (reading 'call')"

    def test_unknown_scope_name(self) -> None:
        source = "class F extends Form { configure() { this.addRow().addField('a').component(Missing); } }"
        result = compile_demo(_form(source), form_scope())
        assert result.error == "Missing is not defined"

    def test_page_base_not_recognised_by_form_variant(self) -> None:
        result = compile_demo(_form("class P extends Page {}"), page_scope(), FORM_VARIANT)
        assert result.error == "No entry class found"

    def test_never_raises_on_garbage(self) -> None:
        result = compile_demo(_form("}}}} ((( \u0000"), form_scope())
        assert result.error

    def test_failure_logged_with_demo_id(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="livedemo.engines.pipeline"):
            compile_demo(_form("class Plain {}"), form_scope(), demo_id="demo-1")
        record = caplog.records[-1]
        assert "No entry class found" in record.getMessage()
        assert record.demo_id == "demo-1"


class TestPageVariant:
    UNITS = [
        SourceUnit("options.ts", 'export const roles = ["admin", "user"];', read_only=True),
        SourceUnit(
            "Toolbar.ts",
            "export class Toolbar extends Component {\n"
            "  configure() { for (const r of roles) { this.addRow().addComponent(LuminoButton).children(r).end(); } }\n"
            "}\n",
        ),
        SourceUnit("notes.md", "# not code {{{"),
        SourceUnit(
            "MainPage.ts",
            "class MainPage extends Page {\n"
            "  configure() { this.route('/main'); this.include(Toolbar); }\n"
            "}\n",
            is_entry=True,
        ),
    ]

    def test_multi_file_success(self) -> None:
        result = compile_demo(self.UNITS, page_scope(), PAGE_VARIANT)
        assert result.ok
        assert isinstance(result.instance, Page)
        assert result.initial_data is None
        view = result.instance.build()
        assert view["route"] == "/main"
        toolbar = view["items"][0]
        assert toolbar["name"] == "Toolbar"
        assert len(toolbar["items"]) == 2

    def test_page_without_companion_discovery(self) -> None:
        units = [SourceUnit("P.ts", "class Data { a = 'x'; }\nclass P extends Page {}", is_entry=True)]
        result = compile_demo(units, page_scope(), PAGE_VARIANT)
        assert result.ok
        assert result.initial_data is None

    def test_variants_registry(self) -> None:
        assert VARIANTS == {"form": FORM_VARIANT, "page": PAGE_VARIANT}
        assert PAGE_VARIANT.bases == ("Page",)
        assert FORM_VARIANT.companion is True


class TestTimeout:
    @pytest.mark.skipif(not hasattr(signal, "SIGALRM"), reason="SIGALRM not available")
    def test_infinite_loop_times_out(self) -> None:
        source = "while (true) {}\nclass F extends Form {}"
        with patch.object(pipeline.settings, "DEMO_EXEC_TIMEOUT", 1):
            result = compile_demo(_form(source), form_scope())
        assert result.error == "Script execution timed out after 1s"

    def test_fallback_is_kept_on_each_failure(self) -> None:
        good = compile_demo(_form(CONTACT), form_scope())
        bad = compile_demo(_form("class X {"), form_scope(), FORM_VARIANT, good.fallback)
        assert bad.instance is good.instance
        assert bad.initial_data is good.initial_data
        assert NO_FALLBACK.instance is None
