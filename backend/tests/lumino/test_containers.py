"""Unit tests for lumino containers and builders, used the way demo scripts use them."""

import pytest

from livedemo.lumino import Component, Dialog, Form, Page, Validators
from livedemo.lumino import components as c


class ContactForm(Form):
    def configure(self) -> None:
        (
            self.addSection("Contact")
            .addRow()
            .addField("name")
            .component(c.LuminoTextInput)
            .label("Name")
            .rules(Validators.required(), Validators.maxLength(40))
            .endField()
            .addField("email")
            .component(c.LuminoTextInput)
            .rules(Validators.email())
            .endField()
            .endRow()
            .endSection()
        )
        self.addRow().addComponent(c.LuminoButton).text("Save").onClick(lambda: None)


class AddressFields(Component):
    def configure(self) -> None:
        self.addRow().addField("city").component(c.LuminoTextInput).required()


class Toolbar(Component):
    def configure(self) -> None:
        self.container(c.LumBox).add(c.LumText).text("Tools")


class EmployeeForm(Form):
    def configure(self) -> None:
        self.setReadOnly(lambda ctx: ctx.get("locked"))
        self.addList("addresses").as_("tabs").include(AddressFields).min(1).endList()


class ProfilePage(Page):
    def __init__(self) -> None:
        super().__init__("profile")
        self.greeting = "Hello"

    def configure(self) -> None:
        self.route("/profile")
        self.onMode("edit", lambda: None)
        self.addComponent(c.LuminoButton).children(self.greeting)
        self.include(Toolbar)


class TestForm:
    def test_build_tree(self) -> None:
        view = ContactForm("contact").build()
        assert view["kind"] == "form"
        assert view["id"] == "contact"
        assert view["name"] == "ContactForm"
        section, row = view["items"]
        assert section["title"] == "Contact"
        name, email = section["rows"][0]["items"]
        assert name["name"] == "name"
        assert name["label"] == "Name"
        assert name["required"] is True
        assert [r["type"] for r in name["rules"]] == ["required", "maxLength"]
        assert email["required"] is False
        button = row["items"][0]
        assert button["kind"] == "component"
        assert button["children"] == "Save"
        assert callable(button["onClick"])

    def test_field_rules(self) -> None:
        rules = ContactForm().field_rules()
        assert sorted(rules) == ["email", "name"]
        assert [r.type for r in rules["name"]] == ["required", "maxLength"]

    def test_list_with_included_component(self) -> None:
        view = EmployeeForm().build()
        assert callable(view["readOnly"])
        addresses = view["items"][0]
        assert addresses["kind"] == "list"
        assert addresses["display"] == "tabs"
        assert addresses["min"] == 1
        assert addresses["item"]["kind"] == "component"
        assert addresses["item"]["items"][0]["items"][0]["required"] is True

    def test_configure_is_required(self) -> None:
        with pytest.raises(NotImplementedError, match="must implement configure"):
            Form()

    def test_rules_type_checked(self) -> None:
        class Bad(Form):
            def configure(self) -> None:
                self.addRow().addField("x").rules("required")

        with pytest.raises(TypeError, match="validation rules"):
            Bad()

    def test_add_field_needs_name(self) -> None:
        class Bad(Form):
            def configure(self) -> None:
                self.addRow().addField()

        with pytest.raises(TypeError, match="field name"):
            Bad()


class TestPage:
    def test_configure_deferred_until_build(self) -> None:
        page = ProfilePage()
        assert page._configured is False
        view = page.build()
        assert view["route"] == "/profile"
        assert view["modes"] == ["edit"]
        row, toolbar = view["items"]
        assert row["items"][0]["children"] == "Hello"
        assert toolbar["name"] == "Toolbar"
        assert toolbar["items"][0]["children"][0]["text"] == "Tools"

    def test_configure_runs_once(self) -> None:
        page = ProfilePage()
        page.build()
        assert len(page.build()["items"]) == 2

    def test_add_form_type_checked(self) -> None:
        class Bad(Page):
            def configure(self) -> None:
                self.addForm({"not": "a form"})

        with pytest.raises(TypeError, match="Form instance"):
            Bad().build()

    def test_include_needs_component_subclass(self) -> None:
        class Bad(Page):
            def configure(self) -> None:
                self.include(ContactForm)

        with pytest.raises(TypeError, match="Component subclass"):
            Bad().build()


class TestDialog:
    def test_title_and_size(self) -> None:
        class Confirm(Dialog):
            def configure(self) -> None:
                self.title("Are you sure?").size("small")
                self.addRow().addComponent(c.LuminoButton).text("OK")

        view = Confirm("confirm").build()
        assert view["kind"] == "dialog"
        assert view["id"] == "confirm"
        assert view["title"] == "Are you sure?"
        assert view["size"] == "small"
        assert view["items"][0]["items"][0]["children"] == "OK"


class TestContainers:
    def test_each_block(self) -> None:
        class Table(Component):
            def configure(self) -> None:
                body = self.container(c.LumTable).add(c.LumTBody)
                body.each("rows").add(c.LumTR).add(c.LumTD).field("title").display()

        view = Table().build()
        table = view["items"][0]
        assert table["component"] is c.LumTable
        each = table["children"][0]["children"][0]
        assert each["kind"] == "each"
        assert each["field"] == "rows"
        cell = each["children"][0]["children"][0]
        assert cell["field"] == "title"
        assert cell["display"] is True
