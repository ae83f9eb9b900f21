"""Unit tests for tsc.parser: tree-sitter TypeScript lowered into the syntax tree."""

import pytest

from livedemo.engines.errors import TranspileError
from livedemo.tsc import nodes as n
from livedemo.tsc import parse
from livedemo.tsc.parser import cook, number_value


class TestParseDeclarations:
    def test_variable_declarations(self) -> None:
        program = parse("const a: number = 1, b = 'x';")
        decl = program.body[0]
        assert isinstance(decl, n.VarDecl)
        assert decl.kind == "const"
        assert [target.name for target, _ in decl.decls] == ["a", "b"]
        assert decl.decls[0][1] == n.Literal(1)

    def test_class_with_type_arguments_and_members(self) -> None:
        program = parse(
            "class EmployeeForm extends Form<Employee> implements Thing {\n"
            "  private count: number = 0;\n"
            "  static label = 'x';\n"
            "  constructor() { super('id'); }\n"
            "  get total(): number { return this.count; }\n"
            "  configure(): void {}\n"
            "}\n"
        )
        cls = program.body[0].cls
        assert cls.name == "EmployeeForm"
        assert cls.superclass == n.Ident("Form")
        kinds = [(m.kind, m.key, m.static) for m in cls.members]
        assert kinds == [
            ("field", "count", False),
            ("field", "label", True),
            ("constructor", "constructor", False),
            ("get", "total", False),
            ("method", "configure", False),
        ]

    def test_arrow_functions(self) -> None:
        program = parse("const f = async (a: string, b = 2): Promise<void> => a;")
        func = program.body[0].decls[0][1]
        assert isinstance(func, n.Func)
        assert func.is_arrow and func.expr_body and func.is_async
        assert [p.target.name for p in func.params] == ["a", "b"]
        assert func.params[1].default == n.Literal(2)

    def test_type_only_syntax_is_skipped(self) -> None:
        program = parse("let x = value!;\nlet y = <T,>(v: T) => v;\nlet z = list as string[];")
        assert len(program.body) == 3

    def test_generic_call(self) -> None:
        call = parse("this.addList<Address>('addresses');").body[0].expr
        assert isinstance(call, n.Call)
        assert call.args == [n.Literal("addresses")]

    def test_optional_chain(self) -> None:
        expr = parse("ctx.user?.hasRole?.('admin');").body[0].expr
        assert isinstance(expr, n.Chain)

    def test_enum(self) -> None:
        decl = parse("enum Color { Red, Green = 5 }").body[0]
        assert decl.members[0][0] == "Red"


class TestParseErrors:
    def test_syntax_error_position(self) -> None:
        with pytest.raises(TranspileError) as exc_info:
            parse("const a = ;")
        err = exc_info.value
        assert err.line == 1
        assert err.column is not None
        assert err.message.endswith(f"(1:{err.column})")

    def test_unclosed_block(self) -> None:
        with pytest.raises(TranspileError) as exc_info:
            parse("function f() {")
        assert exc_info.value.line == 1

    @pytest.mark.parametrize(
        ("source", "feature"),
        [
            ("function* g() {}", "Generators"),
            ("@dec class A {}", "Decorators"),
            ("const C = class {};", "Class expressions"),
            ("namespace N {}", "Namespaces"),
            ("tag`x`;", "Tagged templates"),
        ],
    )
    def test_unsupported_features(self, source: str, feature: str) -> None:
        with pytest.raises(TranspileError, match=f"{feature} are not supported"):
            parse(source)

    def test_error_line_counts_newlines(self) -> None:
        with pytest.raises(TranspileError) as exc_info:
            parse("const a = 1;\n\nconst b = );")
        assert exc_info.value.line == 3

    @pytest.mark.parametrize(
        ("source", "feature"),
        [
            ("for (const k in o) { continue outer; }", "Labels"),
            ("const re = /a+/;", "Regular expression literals"),
            ("class A { static { init(); } }", "Static blocks"),
        ],
    )
    def test_rejected_constructs(self, source: str, feature: str) -> None:
        with pytest.raises(TranspileError, match=feature):
            parse(source)


class TestLowering:
    def test_comments_are_ignored(self) -> None:
        program = parse("// lead\nconst a = /* inline */ 1; /* tail */\n")
        assert len(program.body) == 1
        assert program.body[0].decls[0][1] == n.Literal(1)

    def test_array_holes(self) -> None:
        arr = parse("x = [, 1, , 2,];").body[0].expr.value
        assert arr.elements == [None, n.Literal(1), None, n.Literal(2)]

    def test_template_parts(self) -> None:
        tpl = parse("const s = `a${x}b\\n${y}`;").body[0].decls[0][1]
        assert isinstance(tpl, n.TemplateLit)
        assert tpl.strings == ["a", "b\n", ""]
        assert tpl.exprs == [n.Ident("x"), n.Ident("y")]

    def test_destructuring_patterns(self) -> None:
        decl = parse("const { a, b: [c, d = 2], ...rest } = obj;").body[0]
        pattern = decl.decls[0][0]
        assert isinstance(pattern, n.ObjectPattern)
        assert [p.key.value for p in pattern.props] == ["a", "b"]
        inner = pattern.props[1].target
        assert isinstance(inner, n.ArrayPattern)
        assert inner.elements[1].default == n.Literal(2)
        assert pattern.rest == n.Ident("rest")

    def test_constructor_parameter_properties(self) -> None:
        cls = parse("class P { constructor(private readonly name: string, age?: number) {} }").body[0].cls
        params = cls.members[0].value.params
        assert [p.accessibility for p in params] == ["private", None]
        assert [p.target.name for p in params] == ["name", "age"]

    def test_private_members_keep_hash(self) -> None:
        cls = parse("class A { #n = 1; get n() { return this.#n; } }").body[0].cls
        assert cls.members[0].key == "#n"
        ret = cls.members[1].value.body[0]
        assert ret.arg == n.Member(n.This(), "#n")

    def test_for_of_declared(self) -> None:
        loop = parse("for (const item of items) {}").body[0]
        assert isinstance(loop, n.ForEach)
        assert loop.of_ and loop.declared
        assert loop.target == n.Ident("item")

    def test_type_declarations_produce_nothing(self) -> None:
        program = parse("interface A { x: number }\ntype B = string;\ndeclare const c: number;\n")
        assert program.body == []

    def test_string_escapes(self) -> None:
        assert cook("a\\tb\\u0041\\x42\\u{1F600}") == "a\tbAB\U0001F600"

    @pytest.mark.parametrize(
        ("text", "value"),
        [("42", 42), ("1_000", 1000), ("0x1F", 31), ("0b101", 5), ("1.5", 1.5), ("1e3", 1000.0)],
    )
    def test_number_literals(self, text: str, value: float) -> None:
        assert number_value(text) == value
