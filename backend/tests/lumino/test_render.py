"""Unit tests for lumino.render."""

import math

import pytest

from livedemo.lumino import FN_MARKER, Form, Page, Validators, render_html, render_view, to_plain
from livedemo.lumino import components as c


class Person:
    def __init__(self) -> None:
        self.name = "Ada"
        self.tags = ["x"]
        self._hidden = 1
        self.priv_secret = "s"


class SignupForm(Form):
    def configure(self) -> None:
        (
            self.addSection("Account")
            .addRow()
            .addField("email")
            .component(c.LuminoTextInput)
            .label("Email <address>")
            .rules(Validators.required())
            .endField()
            .addField("role")
            .component(c.LuminoSelect)
            .props({"options": [{"label": "Admin", "value": "admin"}]})
            .endField()
            .endRow()
            .endSection()
        )
        self.addRow().addComponent(c.LuminoButton).text("Sign up").onClick(lambda: None)


class BrokenPage(Page):
    def configure(self) -> None:
        raise RuntimeError("boom")


class TestToPlain:
    def test_scalars(self) -> None:
        assert to_plain(None) is None
        assert to_plain(2.0) == 2
        assert to_plain(1.5) == 1.5
        assert to_plain(math.nan) is None

    def test_objects(self) -> None:
        assert to_plain(Person()) == {"name": "Ada", "tags": ["x"]}

    def test_callables_and_components(self) -> None:
        assert to_plain({"f": lambda: 1, "c": c.LuminoButton, "t": Person}) == {
            "f": FN_MARKER,
            "c": "LuminoButton",
            "t": "Person",
        }

    def test_validation_rule(self) -> None:
        assert to_plain(Validators.required()) == {"type": "required", "message": "This field is required"}

    def test_circular(self) -> None:
        items: list = []
        items.append(items)
        assert to_plain(items) == ["<circular>"]


class TestRenderView:
    def test_form(self) -> None:
        view = render_view(SignupForm("signup"), Person())
        assert view["root"]["kind"] == "form"
        assert view["root"]["items"][1]["items"][0]["onClick"] == FN_MARKER
        assert view["initialData"] == {"name": "Ada", "tags": ["x"]}

    def test_no_instance(self) -> None:
        assert render_view(None, None) == {"root": None, "initialData": None}

    def test_not_buildable(self) -> None:
        with pytest.raises(TypeError, match="no build"):
            render_view(object())

    def test_page_configure_errors_propagate(self) -> None:
        with pytest.raises(RuntimeError, match="boom"):
            render_view(BrokenPage())


class TestRenderHtml:
    def test_preview(self) -> None:
        view = render_view(SignupForm("signup"), {"email": "ada@example.com"})
        html = render_html(view, title="Signup", state="compiled")
        assert "<h1>Signup</h1>" in html
        assert "State: compiled" in html
        assert "Email &lt;address&gt;" in html
        assert 'value="ada@example.com"' in html
        assert '<option value="admin">Admin</option>' in html
        assert "Sign up</button>" in html
        assert "lum-error" not in html.split("</style>")[1]

    def test_error_banner_is_escaped(self) -> None:
        html = render_html(None, title="Demo", error="<b>bad</b>")
        assert 'role="alert">&lt;b&gt;bad&lt;/b&gt;</div>' in html
        assert "Nothing to preview yet." in html
