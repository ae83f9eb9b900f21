"""Tests for POST /api/v1/compile."""

import re

from fastapi.testclient import TestClient

from livedemo.core.config import settings

URL = f"{settings.API_V1_STR}/compile"

FORM = """\
export class Note { text = 'hello'; }
export class NoteForm extends Form {
  configure() {
    this.addRow().addField('text').component(LuminoTextArea).required();
  }
}
"""

PAGE = """\
export class Dashboard extends Page {
  configure() {
    this.route('/dash');
    this.addComponent(LuminoButton).text('Refresh');
  }
}
"""


def test_compile_form(client: TestClient) -> None:
    r = client.post(URL, json={"files": [{"name": "NoteForm.ts", "content": FORM}]})
    assert r.status_code == 200
    data = r.json()
    assert data["error"] is None
    assert data["view"]["initialData"] == {"text": "hello"}
    field = data["view"]["root"]["items"][0]["items"][0]
    assert field["component"] == "LuminoTextArea"
    assert field["required"] is True


def test_compile_error(client: TestClient) -> None:
    r = client.post(URL, json={"files": [{"name": "A.ts", "content": "class {"}]})
    assert r.status_code == 200
    data = r.json()
    assert data["view"] is None
    assert re.search(r"\(1:\d+\)$", data["error"])


def test_compile_without_entry_class(client: TestClient) -> None:
    r = client.post(URL, json={"files": [{"name": "A.ts", "content": "const x = 1;"}]})
    assert r.json()["error"] == "No entry class found"


def test_compile_page_with_explicit_entry(client: TestClient) -> None:
    body = {
        "variant": "page",
        "entry": "Dashboard.ts",
        "files": [
            {"name": "helpers.ts", "content": "export const title = 'Dash';"},
            {"name": "Dashboard.ts", "content": PAGE},
        ],
    }
    r = client.post(URL, json=body)
    data = r.json()
    assert data["error"] is None
    root = data["view"]["root"]
    assert root["kind"] == "page"
    assert root["route"] == "/dash"
    assert root["items"][0]["items"][0]["children"] == "Refresh"


def test_page_classes_are_not_in_form_scope(client: TestClient) -> None:
    r = client.post(URL, json={"files": [{"name": "Dashboard.ts", "content": PAGE}]})
    assert r.json()["error"] == "No entry class found"


def test_compile_needs_files(client: TestClient) -> None:
    r = client.post(URL, json={"files": []})
    assert r.status_code == 422


def test_compile_rejects_unknown_variant(client: TestClient) -> None:
    r = client.post(URL, json={"variant": "grid", "files": [{"name": "A.ts", "content": ""}]})
    assert r.status_code == 422


def test_compile_rejects_unknown_entry(client: TestClient) -> None:
    body = {"entry": "Missing.ts", "files": [{"name": "NoteForm.ts", "content": FORM}]}
    r = client.post(URL, json=body)
    assert r.status_code == 422
    assert "Missing.ts" in r.json()["detail"]
