"""
TypeScript-subset front end: a tree-sitter parse lowered into ``nodes``.

tree-sitter's TypeScript grammar does the parsing. This module walks its
concrete syntax tree, drops type-only syntax (annotations, generics,
``as``/``satisfies``, ``!``, interfaces, type aliases, ``declare``) and
builds the ``nodes`` tree the code generator consumes. Syntax errors and
constructs outside the subset raise ``TranspileError`` with a position.
"""

from __future__ import annotations

import re

import tree_sitter_language_pack

from livedemo.engines.errors import TranspileError

from . import nodes as n

EXTRAS = frozenset({"comment", "html_comment", "hash_bang_line"})

# Declarations that only exist for the type checker.
TYPE_ONLY = frozenset(
    {
        "interface_declaration",
        "type_alias_declaration",
        "ambient_declaration",
        "function_signature",
        "empty_statement",
        "debugger_statement",
    }
)
SKIPPED_MEMBERS = frozenset({"method_signature", "abstract_method_signature", "index_signature", ";"})
# Wrappers whose only runtime content is one expression.
TYPE_WRAPPERS = frozenset(
    {"as_expression", "satisfies_expression", "non_null_expression", "instantiation_expression"}
)
CHAIN_LINKS = frozenset({"member_expression", "subscript_expression", "call_expression"})
PARAM_MODIFIERS = frozenset({"accessibility_modifier", "readonly", "override_modifier"})

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\n|[\s\S])")


def cook(raw: str) -> str:
    """Resolve the escape sequences of a string or template chunk."""

    def replace(match: re.Match) -> str:
        esc = match.group(1)
        if esc.startswith("u{"):
            return chr(int(esc[2:-1], 16))
        if len(esc) > 1:
            return chr(int(esc[1:], 16))
        if esc == "\n":  # line continuation
            return ""
        return _SIMPLE_ESCAPES.get(esc, esc)

    return _ESCAPE.sub(replace, raw)


def number_value(text: str) -> int | float:
    text = text.replace("_", "").rstrip("n")
    if text[:2].lower() in ("0x", "0o", "0b"):
        return int(text, 0)
    if any(ch in text for ch in ".eE"):
        return float(text)
    return int(text)


def number_key(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_optional(node) -> bool:
    return any(child.type in ("optional_chain", "?.") for child in node.children)


def _first_error(node):
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


class Lowering:
    """Builds ``nodes`` from one tree-sitter tree of *src* (UTF-8 bytes)."""

    def __init__(self, src: bytes) -> None:
        self.src = src

    # -- helpers --------------------------------------------------------------

    def text(self, node) -> str:
        return self.src[node.start_byte : node.end_byte].decode("utf-8")

    @staticmethod
    def line(node) -> int:
        return node.start_point[0] + 1

    def error(self, message: str, node) -> TranspileError:
        return TranspileError(message, node.start_point[0] + 1, node.start_point[1] + 1)

    def unsupported(self, what: str, node) -> TranspileError:
        return self.error(f"{what} are not supported", node)

    @staticmethod
    def named(node) -> list:
        return [child for child in node.named_children if child.type not in EXTRAS]

    def only(self, node):
        children = self.named(node)
        if not children:
            raise self.error("Expected an expression", node)
        return children[0]

    def syntax_error(self, bad) -> TranspileError:
        if bad.start_byte >= len(self.src.rstrip()):
            return self.error("Unexpected end of input", bad)
        if bad.is_missing:
            return self.error(f"Missing '{bad.type}'", bad)
        leaf = bad
        while leaf.children:
            leaf = leaf.children[0]
        token = self.text(leaf).strip() or self.text(bad).strip()
        if not token:
            return self.error("Unexpected end of input", bad)
        return self.error(f"Unexpected token '{token.split()[0][:24]}'", leaf)

    # -- program & statements -------------------------------------------------

    def program(self, root) -> n.Program:
        bad = _first_error(root) if root.has_error else None
        if bad is not None:
            raise self.syntax_error(bad)
        return n.Program(self.statements(self.named(root)), line=1)

    def statements(self, children) -> list[n.Node]:
        body = []
        for child in children:
            stmt = self.statement(child)
            if stmt is not None:
                body.append(stmt)
        return body

    def block(self, node) -> n.Block:
        return n.Block(self.statements(self.named(node)), line=self.line(node))

    def body(self, node) -> n.Node:
        stmt = self.statement(node)
        return stmt if stmt is not None else n.Empty(line=self.line(node))

    def statement(self, node) -> n.Node | None:
        kind = node.type
        if kind in TYPE_ONLY:
            return None
        handler = getattr(self, "stmt_" + kind, None)
        if handler is None:
            raise self.error(f"Unexpected statement '{self.text(node).split()[0]}'", node)
        return handler(node)

    def stmt_expression_statement(self, node) -> n.Node:
        return n.ExprStmt(self.expr(self.only(node)), line=self.line(node))

    def stmt_statement_block(self, node) -> n.Block:
        return self.block(node)

    def stmt_lexical_declaration(self, node) -> n.VarDecl:
        return self.var_decl(node, node.children[0].type)

    def stmt_variable_declaration(self, node) -> n.VarDecl:
        return self.var_decl(node, "var")

    def var_decl(self, node, kind: str) -> n.VarDecl:
        decls = []
        for declarator in self.named(node):
            value = declarator.child_by_field_name("value")
            target = self.pattern(declarator.child_by_field_name("name"))
            decls.append((target, self.expr(value) if value is not None else None))
        return n.VarDecl(kind, decls, line=self.line(node))

    def stmt_function_declaration(self, node) -> n.FuncDecl:
        return n.FuncDecl(self.function(node, self.text(node.child_by_field_name("name"))), line=self.line(node))

    def stmt_generator_function_declaration(self, node):
        raise self.unsupported("Generators", node)

    def stmt_class_declaration(self, node) -> n.ClassDecl:
        return n.ClassDecl(self.class_def(node), line=self.line(node))

    stmt_abstract_class_declaration = stmt_class_declaration

    def stmt_enum_declaration(self, node) -> n.EnumDecl:
        members: list[tuple[str, n.Node | None]] = []
        for member in self.named(node.child_by_field_name("body")):
            if member.type == "enum_assignment":
                key = self.static_key(member.child_by_field_name("name"))
                members.append((key, self.expr(member.child_by_field_name("value"))))
            else:
                members.append((self.static_key(member), None))
        name = self.text(node.child_by_field_name("name"))
        return n.EnumDecl(name, members, line=self.line(node))

    def stmt_if_statement(self, node) -> n.If:
        alt = node.child_by_field_name("alternative")
        if alt is not None and alt.type == "else_clause":
            alt = self.only(alt)
        return n.If(
            self.expr(node.child_by_field_name("condition")),
            self.body(node.child_by_field_name("consequence")),
            self.body(alt) if alt is not None else None,
            line=self.line(node),
        )

    def optional_expr(self, node) -> n.Node | None:
        if node is None or node.type in ("empty_statement", ";"):
            return None
        if node.type == "expression_statement":
            return self.expr(self.only(node))
        return self.expr(node)

    def stmt_for_statement(self, node) -> n.For:
        init_node = node.child_by_field_name("initializer")
        init: n.Node | None = None
        if init_node is not None and init_node.type in ("lexical_declaration", "variable_declaration"):
            init = self.statement(init_node)
        else:
            expr = self.optional_expr(init_node)
            if expr is not None:
                init = n.ExprStmt(expr, line=expr.line)
        return n.For(
            init,
            self.optional_expr(node.child_by_field_name("condition")),
            self.optional_expr(node.child_by_field_name("increment")),
            self.body(node.child_by_field_name("body")),
            line=self.line(node),
        )

    def stmt_for_in_statement(self, node) -> n.ForEach:
        if any(child.type == "await" for child in node.children):
            raise self.unsupported("'for await' loops", node)
        operator = node.child_by_field_name("operator")
        return n.ForEach(
            self.pattern(node.child_by_field_name("left")),
            self.expr(node.child_by_field_name("right")),
            self.body(node.child_by_field_name("body")),
            of_=self.text(operator) == "of",
            declared=any(child.type in ("const", "let", "var") for child in node.children),
            line=self.line(node),
        )

    def stmt_while_statement(self, node) -> n.While:
        return n.While(
            self.expr(node.child_by_field_name("condition")),
            self.body(node.child_by_field_name("body")),
            line=self.line(node),
        )

    def stmt_do_statement(self, node) -> n.DoWhile:
        return n.DoWhile(
            self.body(node.child_by_field_name("body")),
            self.expr(node.child_by_field_name("condition")),
            line=self.line(node),
        )

    def stmt_return_statement(self, node) -> n.Return:
        children = self.named(node)
        return n.Return(self.expr(children[0]) if children else None, line=self.line(node))

    def stmt_throw_statement(self, node) -> n.Throw:
        return n.Throw(self.expr(self.only(node)), line=self.line(node))

    def stmt_break_statement(self, node) -> n.Break:
        if node.child_by_field_name("label") is not None:
            raise self.unsupported("Labels", node)
        return n.Break(line=self.line(node))

    def stmt_continue_statement(self, node) -> n.Continue:
        if node.child_by_field_name("label") is not None:
            raise self.unsupported("Labels", node)
        return n.Continue(line=self.line(node))

    def stmt_labeled_statement(self, node):
        raise self.unsupported("Labels", node)

    def stmt_with_statement(self, node):
        raise self.unsupported("'with' statements", node)

    def stmt_try_statement(self, node) -> n.Try:
        param = handler = finalizer = None
        catch = node.child_by_field_name("handler")
        if catch is not None:
            param_node = catch.child_by_field_name("parameter")
            param = self.pattern(param_node) if param_node is not None else None
            handler = self.block(catch.child_by_field_name("body"))
        finally_ = node.child_by_field_name("finalizer")
        if finally_ is not None:
            finalizer = self.block(finally_.child_by_field_name("body"))
        return n.Try(self.block(node.child_by_field_name("body")), param, handler, finalizer, line=self.line(node))

    def stmt_switch_statement(self, node) -> n.Switch:
        cases = []
        for case in self.named(node.child_by_field_name("body")):
            value = case.child_by_field_name("value") if case.type == "switch_case" else None
            stmts = self.named(case)[1:] if value is not None else self.named(case)
            test = self.expr(value) if value is not None else None
            cases.append(n.SwitchCase(test, self.statements(stmts), line=self.line(case)))
        return n.Switch(self.expr(node.child_by_field_name("value")), cases, line=self.line(node))

    def stmt_import_statement(self, node):
        raise self.error("'import' is not supported here; demo files share one scope", node)

    def stmt_export_statement(self, node):
        raise self.error("'export' is not supported here; demo files share one scope", node)

    def stmt_internal_module(self, node):
        raise self.unsupported("Namespaces", node)

    stmt_module = stmt_internal_module

    # -- functions & classes --------------------------------------------------

    def function(self, node, name: str | None = None) -> n.Func:
        is_async = any(child.type == "async" for child in node.children)
        body = self.block(node.child_by_field_name("body")).body
        params = self.params(node.child_by_field_name("parameters"))
        return n.Func(name, params, body, is_async=is_async, line=self.line(node))

    def params(self, node) -> list[n.Param]:
        params: list[n.Param] = []
        for param in self.named(node):
            line = self.line(param)
            if param.type not in ("required_parameter", "optional_parameter"):
                if param.type == "assignment_pattern":
                    default = self.expr(param.child_by_field_name("right"))
                    params.append(n.Param(self.pattern(param.child_by_field_name("left")), default, line=line))
                elif param.type == "rest_pattern":
                    params.append(n.Param(self.pattern(self.only(param)), rest=True, line=line))
                else:
                    params.append(n.Param(self.pattern(param), line=line))
                continue
            target = param.child_by_field_name("pattern")
            if target.type == "this":
                continue
            accessibility = None
            for child in param.children:
                if child.start_byte >= target.start_byte:
                    break
                if child.type in PARAM_MODIFIERS:
                    accessibility = accessibility or self.text(child)
            rest = target.type == "rest_pattern"
            if rest:
                target = self.only(target)
            value = param.child_by_field_name("value")
            default = self.expr(value) if value is not None else None
            params.append(n.Param(self.pattern(target), default, rest, accessibility, line=line))
        return params

    def arrow(self, node) -> n.Func:
        single = node.child_by_field_name("parameter")
        if single is not None:
            params = [n.Param(n.Ident(self.text(single), line=self.line(single)), line=self.line(single))]
        else:
            params = self.params(node.child_by_field_name("parameters"))
        is_async = any(child.type == "async" for child in node.children)
        body = node.child_by_field_name("body")
        line = self.line(node)
        if body.type == "statement_block":
            return n.Func(None, params, self.block(body).body, is_arrow=True, is_async=is_async, line=line)
        return n.Func(None, params, self.expr(body), is_arrow=True, expr_body=True, is_async=is_async, line=line)

    def class_def(self, node) -> n.ClassDef:
        if any(child.type == "decorator" for child in node.children):
            raise self.unsupported("Decorators", node)
        superclass = None
        for child in node.children:
            if child.type != "class_heritage":
                continue
            extends = next((c for c in child.named_children if c.type == "extends_clause"), None)
            if extends is not None:
                value = extends.child_by_field_name("value") or self.only(extends)
                superclass = self.expr(value)
            elif self.named(child) and child.named_children[0].type != "implements_clause":
                superclass = self.expr(self.only(child))
        name = self.text(node.child_by_field_name("name"))
        members = self.class_members(node.child_by_field_name("body"))
        return n.ClassDef(name, superclass, members, line=self.line(node))

    def member_key(self, node) -> str:
        if node.type == "computed_property_name":
            raise self.unsupported("Computed class member names", node)
        return self.static_key(node)

    def static_key(self, node) -> str:
        if node.type == "string":
            return cook(self.text(node)[1:-1])
        if node.type == "number":
            return number_key(number_value(self.text(node)))
        return self.text(node)

    @staticmethod
    def modifiers(node, name_node) -> set[str]:
        return {child.type for child in node.children if child.start_byte < name_node.start_byte}

    def class_members(self, body) -> list[n.ClassMember]:
        members: list[n.ClassMember] = []
        for member in body.children:
            kind = member.type
            if kind in SKIPPED_MEMBERS or kind in EXTRAS or not member.is_named:
                continue
            if kind == "decorator":
                raise self.unsupported("Decorators", member)
            if kind == "class_static_block":
                raise self.unsupported("Static blocks", member)
            name_node = member.child_by_field_name("name")
            key = self.member_key(name_node)
            mods = self.modifiers(member, name_node)
            static = "static" in mods
            line = self.line(member)
            if "decorator" in mods:
                raise self.unsupported("Decorators", member)
            if kind == "method_definition":
                if "*" in mods:
                    raise self.unsupported("Generators", member)
                member_kind = "get" if "get" in mods else "set" if "set" in mods else "method"
                if key == "constructor" and not static:
                    member_kind = "constructor"
                func = self.function(member, name=key)
                members.append(n.ClassMember(member_kind, key, static, func, line=line))
            elif kind == "public_field_definition":
                if "declare" in mods or "abstract" in mods:
                    continue
                value = member.child_by_field_name("value")
                init = self.expr(value) if value is not None else None
                members.append(n.ClassMember("field", key, static, init, line=line))
            else:
                raise self.error(f"Unexpected class member '{self.text(member).split()[0]}'", member)
        return members

    # -- expressions ----------------------------------------------------------

    def expr(self, node) -> n.Node:
        kind = node.type
        if kind in TYPE_WRAPPERS:
            if kind == "non_null_expression" or kind == "instantiation_expression":
                return self.chain(node)
            return self.expr(self.only(node))
        if kind in CHAIN_LINKS:
            return self.chain(node)
        handler = getattr(self, "expr_" + kind, None)
        if handler is None:
            raise self.error(f"Unexpected token '{self.text(node).split()[0][:24]}'", node)
        return handler(node)

    def expr_identifier(self, node) -> n.Node:
        name = self.text(node)
        if name == "undefined":
            return n.Literal(None, line=self.line(node))
        return n.Ident(name, line=self.line(node))

    def expr_undefined(self, node) -> n.Literal:
        return n.Literal(None, line=self.line(node))

    def expr_null(self, node) -> n.Literal:
        return n.Literal(None, raw="null", line=self.line(node))

    def expr_true(self, node) -> n.Literal:
        return n.Literal(True, line=self.line(node))

    def expr_false(self, node) -> n.Literal:
        return n.Literal(False, line=self.line(node))

    def expr_this(self, node) -> n.This:
        return n.This(line=self.line(node))

    def expr_super(self, node) -> n.Super:
        return n.Super(line=self.line(node))

    def expr_number(self, node) -> n.Literal:
        return n.Literal(number_value(self.text(node)), line=self.line(node))

    def expr_string(self, node) -> n.Literal:
        return n.Literal(cook(self.text(node)[1:-1]), line=self.line(node))

    def expr_template_string(self, node) -> n.TemplateLit:
        strings: list[str] = []
        exprs: list[n.Node] = []
        cursor = node.start_byte + 1
        for child in node.children:
            if child.type != "template_substitution":
                continue
            strings.append(cook(self.src[cursor : child.start_byte].decode("utf-8")))
            exprs.append(self.expr(self.only(child)))
            cursor = child.end_byte
        strings.append(cook(self.src[cursor : node.end_byte - 1].decode("utf-8")))
        return n.TemplateLit(strings, exprs, line=self.line(node))

    def expr_regex(self, node):
        raise self.error("Regular expression literals are not supported", node)

    def expr_parenthesized_expression(self, node) -> n.Node:
        return self.expr(self.only(node))

    def expr_type_assertion(self, node) -> n.Node:
        return self.expr(self.named(node)[-1])

    def expr_sequence_expression(self, node) -> n.Sequence:
        exprs: list[n.Node] = []
        for child in self.named(node):
            item = self.expr(child)
            exprs.extend(item.exprs if isinstance(item, n.Sequence) else [item])
        return n.Sequence(exprs, line=self.line(node))

    def elements(self, node) -> list:
        """Named children of an array literal or pattern, with None for holes."""
        items: list = []
        pending = False
        for child in node.children:
            if child.type == ",":
                if not pending:
                    items.append(None)
                pending = False
            elif child.is_named and child.type not in EXTRAS:
                items.append(child)
                pending = True
        return items

    def expr_array(self, node) -> n.ArrayLit:
        elements = [self.expr(el) if el is not None else None for el in self.elements(node)]
        return n.ArrayLit(elements, line=self.line(node))

    def expr_spread_element(self, node) -> n.Spread:
        return n.Spread(self.expr(self.only(node)), line=self.line(node))

    def object_key(self, node) -> tuple[n.Node, bool]:
        """Return (key node, computed)."""
        if node.type == "computed_property_name":
            return self.expr(self.only(node)), True
        return n.Literal(self.static_key(node), line=self.line(node)), False

    def expr_object(self, node) -> n.ObjectLit:
        props: list[n.Node] = []
        for prop in self.named(node):
            line = self.line(prop)
            if prop.type == "spread_element":
                props.append(self.expr_spread_element(prop))
            elif prop.type == "shorthand_property_identifier":
                name = self.text(prop)
                props.append(n.Prop(n.Literal(name, line=line), n.Ident(name, line=line), shorthand=True, line=line))
            elif prop.type == "pair":
                key, computed = self.object_key(prop.child_by_field_name("key"))
                props.append(n.Prop(key, self.expr(prop.child_by_field_name("value")), computed, line=line))
            elif prop.type == "method_definition":
                name_node = prop.child_by_field_name("name")
                mods = self.modifiers(prop, name_node)
                if "get" in mods or "set" in mods:
                    raise self.unsupported("Object literal accessors", prop)
                if "*" in mods:
                    raise self.unsupported("Generators", prop)
                key, computed = self.object_key(name_node)
                func_name = key.value if isinstance(key, n.Literal) else None
                props.append(n.Prop(key, self.function(prop, name=func_name), computed, line=line))
            else:
                raise self.error(f"Unexpected token '{self.text(prop).split()[0]}'", prop)
        return n.ObjectLit(props, line=self.line(node))

    def expr_function_expression(self, node) -> n.Func:
        name = node.child_by_field_name("name")
        return self.function(node, self.text(name) if name is not None else None)

    expr_function = expr_function_expression

    def expr_arrow_function(self, node) -> n.Func:
        return self.arrow(node)

    def expr_generator_function(self, node):
        raise self.unsupported("Generators", node)

    def expr_yield_expression(self, node):
        raise self.unsupported("Generators", node)

    def expr_class(self, node):
        raise self.unsupported("Class expressions", node)

    def expr_meta_property(self, node):
        raise self.unsupported("'new.target' expressions", node)

    expr_internal_module = stmt_internal_module

    def expr_new_expression(self, node) -> n.New:
        callee_node = node.child_by_field_name("constructor")
        callee = self.expr(callee_node)
        if isinstance(callee, n.Chain):
            raise self.error("Invalid optional chain from new expression", callee_node)
        args_node = node.child_by_field_name("arguments")
        args = self.args(args_node) if args_node is not None else []
        return n.New(callee, args, line=self.line(node))

    def args(self, node) -> list[n.Node]:
        return [self.expr(arg) for arg in self.named(node)]

    def chain(self, node) -> n.Node:
        """Lower a member/call chain; optional links put a ``Chain`` around it."""
        seen = [False]
        expr = self.link(node, seen)
        return n.Chain(expr, line=expr.line) if seen[0] else expr

    def link(self, node, seen: list[bool]) -> n.Node:
        kind = node.type
        if kind in ("non_null_expression", "instantiation_expression"):
            return self.link(self.only(node), seen)
        if kind not in CHAIN_LINKS:
            return self.expr(node)
        optional = _is_optional(node)
        seen[0] = seen[0] or optional
        line = self.line(node)
        if kind == "call_expression":
            args = node.child_by_field_name("arguments")
            if args.type == "template_string":
                raise self.unsupported("Tagged templates", node)
            callee = node.child_by_field_name("function")
            if callee.type == "import":
                raise self.error("'import' is not supported here; demo files share one scope", callee)
            return n.Call(self.link(callee, seen), self.args(args), optional=optional, line=line)
        obj = self.link(node.child_by_field_name("object"), seen)
        if kind == "member_expression":
            prop = self.text(node.child_by_field_name("property"))
            return n.Member(obj, prop, optional=optional, line=line)
        index = self.expr(node.child_by_field_name("index"))
        return n.Index(obj, index, optional=optional, line=line)

    def expr_await_expression(self, node) -> n.Unary:
        return n.Unary("await", self.expr(self.only(node)), line=self.line(node))

    def expr_unary_expression(self, node) -> n.Unary:
        op = self.text(node.child_by_field_name("operator"))
        return n.Unary(op, self.expr(node.child_by_field_name("argument")), line=self.line(node))

    def expr_update_expression(self, node) -> n.Update:
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        prefix = operator.start_byte < argument.start_byte
        target = self.expr(argument)
        if not isinstance(target, (n.Ident, n.Member, n.Index)):
            where = "prefix" if prefix else "postfix"
            raise self.error(f"Invalid left-hand side expression in {where} operation", node)
        return n.Update(self.text(operator), prefix, target, line=self.line(node))

    def expr_binary_expression(self, node) -> n.Node:
        op = self.text(node.child_by_field_name("operator"))
        left = self.expr(node.child_by_field_name("left"))
        right = self.expr(node.child_by_field_name("right"))
        node_type = n.Logical if op in ("&&", "||", "??") else n.Binary
        return node_type(op, left, right, line=self.line(node))

    def expr_ternary_expression(self, node) -> n.Cond:
        return n.Cond(
            self.expr(node.child_by_field_name("condition")),
            self.expr(node.child_by_field_name("consequence")),
            self.expr(node.child_by_field_name("alternative")),
            line=self.line(node),
        )

    def expr_assignment_expression(self, node) -> n.Assign:
        target = self.pattern(node.child_by_field_name("left"))
        return n.Assign("=", target, self.expr(node.child_by_field_name("right")), line=self.line(node))

    def expr_augmented_assignment_expression(self, node) -> n.Assign:
        target = self.expr(node.child_by_field_name("left"))
        if not isinstance(target, (n.Ident, n.Member, n.Index)):
            raise self.error("Invalid left-hand side in assignment", node)
        op = self.text(node.child_by_field_name("operator"))
        return n.Assign(op, target, self.expr(node.child_by_field_name("right")), line=self.line(node))

    # -- binding & assignment patterns ----------------------------------------

    def pattern(self, node) -> n.Node:
        kind = node.type
        line = self.line(node)
        if kind == "parenthesized_expression" or kind == "non_null_expression":
            return self.pattern(self.only(node))
        if kind in ("identifier", "shorthand_property_identifier_pattern"):
            return n.Ident(self.text(node), line=line)
        if kind == "array_pattern":
            return self.array_pattern(node)
        if kind == "object_pattern":
            return self.object_pattern(node)
        target = self.expr(node)
        if not isinstance(target, (n.Ident, n.Member, n.Index)):
            raise self.error("Invalid left-hand side in assignment", node)
        return target

    def array_pattern(self, node) -> n.ArrayPattern:
        elements: list[n.PatternElem | None] = []
        rest = None
        for el in self.elements(node):
            if el is None:
                elements.append(None)
            elif el.type == "rest_pattern":
                rest = self.pattern(self.only(el))
            elif el.type == "assignment_pattern":
                target = self.pattern(el.child_by_field_name("left"))
                default = self.expr(el.child_by_field_name("right"))
                elements.append(n.PatternElem(target, default, line=self.line(el)))
            else:
                elements.append(n.PatternElem(self.pattern(el), line=self.line(el)))
        return n.ArrayPattern(elements, rest, line=self.line(node))

    def object_pattern(self, node) -> n.ObjectPattern:
        props: list[n.PatternProp] = []
        rest = None
        for prop in self.named(node):
            line = self.line(prop)
            if prop.type == "rest_pattern":
                rest = self.pattern(self.only(prop))
            elif prop.type == "shorthand_property_identifier_pattern":
                name = self.text(prop)
                props.append(n.PatternProp(n.Literal(name, line=line), n.Ident(name, line=line), line=line))
            elif prop.type == "object_assignment_pattern":
                target = self.pattern(prop.child_by_field_name("left"))
                default = self.expr(prop.child_by_field_name("right"))
                key = n.Literal(target.name, line=line)
                props.append(n.PatternProp(key, target, default, line=line))
            elif prop.type == "pair_pattern":
                key, computed = self.object_key(prop.child_by_field_name("key"))
                value = prop.child_by_field_name("value")
                default = None
                if value.type == "assignment_pattern":
                    default = self.expr(value.child_by_field_name("right"))
                    value = value.child_by_field_name("left")
                props.append(n.PatternProp(key, self.pattern(value), default, computed, line=line))
            else:
                raise self.error(f"Unexpected token '{self.text(prop).split()[0]}'", prop)
        return n.ObjectPattern(props, rest, line=self.line(node))


def parse(source: str) -> n.Program:
    """Parse *source* into a ``Program``; raises ``TranspileError``."""
    src = source.replace("\r\n", "\n").replace("\r", "\n").encode("utf-8")
    tree = tree_sitter_language_pack.get_parser("typescript").parse(src)
    return Lowering(src).program(tree.root_node)
