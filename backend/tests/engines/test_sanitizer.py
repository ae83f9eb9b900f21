"""Unit tests for engines.sanitizer."""

import pytest

from livedemo.engines.sanitizer import sanitize


class TestSanitizeImports:
    def test_named_import(self) -> None:
        src = 'import { Form, Validators } from "lumino/core";\nclass A {}'
        assert sanitize(src) == "class A {}"

    def test_multiline_import(self) -> None:
        src = 'import {\n  Form,\n  Validators,\n} from "lumino/core";\nclass A {}'
        assert sanitize(src) == "class A {}"

    def test_type_only_import(self) -> None:
        assert sanitize('import type { FormContext } from "lumino/core";\nx;') == "x;"

    def test_side_effect_import(self) -> None:
        assert sanitize('import "./styles.css";\nx;') == "x;"


class TestSanitizeExportsAndTypes:
    def test_export_keyword_removed(self) -> None:
        assert sanitize("export class A {}") == "class A {}"
        assert sanitize("export const a = 1;") == "const a = 1;"

    def test_interface_removed(self) -> None:
        src = "interface Props { name: string; age: number }\nclass A {}"
        assert sanitize(src).strip() == "class A {}"

    def test_type_alias_removed(self) -> None:
        src = 'type Mode = "new" | "edit";\nconst m = 1;'
        assert sanitize(src).strip() == "const m = 1;"

    def test_export_type_list_removed(self) -> None:
        assert sanitize("export type { A, B };\nx;").strip() == "x;"

    def test_as_cast_removed(self) -> None:
        assert sanitize("const el = value as HTMLElement;") == "const el = value;"

    def test_plain_code_untouched(self) -> None:
        src = "class ContactForm extends Form {\n  configure() {}\n}\n"
        assert sanitize(src) == src


class TestSanitizeFixpoint:
    def test_removal_that_creates_new_match(self) -> None:
        assert sanitize("expexport ort class A {}") == "class A {}"

    @pytest.mark.parametrize(
        "src",
        [
            "expexport ort class A {}",
            'import { a } from "x";\nexport class B {}\ntype T = string;',
            "interface I { x: number }\nconst y = z as Foo;",
            "",
        ],
    )
    def test_idempotent(self, src: str) -> None:
        once = sanitize(src)
        assert sanitize(once) == once

    def test_unbalanced_input_does_not_raise(self) -> None:
        assert sanitize("interface Broken {") == "interface Broken {"

    def test_string_contents_are_rewritten_too(self) -> None:
        out = sanitize("const s = \"import x from 'y'\";")
        assert "import" not in out
