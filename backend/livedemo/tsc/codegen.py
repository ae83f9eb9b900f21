"""
Python code generation.

The tree from ``parser`` is turned into a Python ``ast.Module`` and printed
with ``ast.unparse``. Whatever Python cannot express directly (``+`` with
JavaScript coercion, ``??``, optional chains, destructuring, ``typeof`` ...)
is routed through helpers of the runtime namespace ``jsrt``, which the
sandbox provides as a global.
"""

from __future__ import annotations

import ast
import itertools
from dataclasses import dataclass, field, replace

from livedemo.engines.errors import TranspileError

from . import nodes as n
from .analysis import (
    assigned_names,
    contains_continue,
    declared_names,
    param_names,
    pattern_names,
    referenced_names,
)
from .names import REST_ARGS, RUNTIME, ident_name, member_name, needs_member_mangling

# Python 3.12 added ``type_params`` to function and class definitions.
_TYPE_PARAMS = {"type_params": []} if "type_params" in ast.FunctionDef._fields else {}

_NATIVE_BINOPS = {"-": ast.Sub, "*": ast.Mult, "**": ast.Pow}
_RUNTIME_BINOPS = {
    "+": "add",
    "/": "div",
    "%": "mod",
    "&": "bitand",
    "|": "bitor",
    "^": "bitxor",
    "<<": "lshift",
    ">>": "rshift",
    ">>>": "urshift",
}
_COMPARE_OPS = {
    "<": ast.Lt,
    "<=": ast.LtE,
    ">": ast.Gt,
    ">=": ast.GtE,
}
_EQUALITY = frozenset({"==", "===", "!=", "!=="})
_BLOCK_SCOPED = frozenset({"let", "const"})


@dataclass
class _Raw(n.Node):
    """A generated Python name used where the tree expects an expression."""

    name: str


@dataclass
class _Scope:
    """One Python function being generated, or the module."""

    kind: str  # "module" | "function"
    declared: set[str]
    parent: _Scope | None = None
    this_name: str | None = None
    cls: str | None = None
    # let/const names bound so far in each enclosing loop of this function
    loops: list[set[str]] = field(default_factory=list)
    # innermost-last: "loop" or "switch"
    breakables: list[str] = field(default_factory=list)


_INHERIT = object()


def _load(name: str) -> ast.Name:
    return ast.Name(id=name, ctx=ast.Load())


def _store(name: str) -> ast.Name:
    return ast.Name(id=name, ctx=ast.Store())


def _const(value) -> ast.Constant:
    return ast.Constant(value=value)


def _call(func: ast.expr, args=(), keywords=()) -> ast.Call:
    return ast.Call(func=func, args=list(args), keywords=list(keywords))


def _rt(helper: str, *args: ast.expr) -> ast.Call:
    return _call(ast.Attribute(value=_load(RUNTIME), attr=helper, ctx=ast.Load()), args)


def _assign(target: ast.expr, value: ast.expr) -> ast.Assign:
    return ast.Assign(targets=[target], value=value)


def _is_none(expr: ast.expr, negate: bool = False) -> ast.Compare:
    op = ast.IsNot() if negate else ast.Is()
    return ast.Compare(left=expr, ops=[op], comparators=[_const(None)])


def _if(test: ast.expr, body: list[ast.stmt], orelse: list[ast.stmt] | None = None) -> ast.If:
    return ast.If(test=test, body=body or [ast.Pass()], orelse=orelse or [])


def _not(expr: ast.expr) -> ast.UnaryOp:
    return ast.UnaryOp(op=ast.Not(), operand=expr)


def _arguments(
    params: list[str], vararg: str | None, captures: list[str] = (), self_arg: bool = False
) -> ast.arguments:
    args = [ast.arg(arg="self")] if self_arg else []
    args += [ast.arg(arg=p) for p in params]
    return ast.arguments(
        posonlyargs=[],
        args=args,
        vararg=ast.arg(arg=vararg) if vararg else None,
        kwonlyargs=[ast.arg(arg=c) for c in captures],
        kw_defaults=[_load(c) for c in captures],
        kwarg=None,
        defaults=[_const(None)] * len(params),
    )


def _is_null(node: n.Node) -> bool:
    return isinstance(node, n.Literal) and node.value is None


_BOOLEAN_OPS = frozenset({"==", "===", "!=", "!==", "<", "<=", ">", ">=", "instanceof", "in"})


def _is_boolean(node: n.Node) -> bool:
    """True when *node* always evaluates to a bool, so Python truthiness is JS truthiness."""
    if isinstance(node, n.Literal):
        return isinstance(node.value, bool)
    if isinstance(node, n.Binary):
        return node.op in _BOOLEAN_OPS
    if isinstance(node, n.Unary):
        return node.op == "!"
    if isinstance(node, n.Logical):
        return node.op != "??" and _is_boolean(node.left) and _is_boolean(node.right)
    return False


def _is_number(node: n.Node) -> bool:
    return isinstance(node, n.Literal) and type(node.value) in (int, float)


def _is_string(node: n.Node) -> bool:
    return isinstance(node, n.Literal) and isinstance(node.value, str)


def _has_statement_effect(expr: n.Node) -> bool:
    """Assignments and updates can only be emitted as statements."""
    if isinstance(expr, (n.Assign, n.Update)):
        return True
    if isinstance(expr, n.Sequence):
        return any(_has_statement_effect(e) for e in expr.exprs)
    return False


def _terminates(stmt: n.Node) -> bool:
    if isinstance(stmt, (n.Return, n.Throw, n.Continue, n.Break)):
        return True
    if isinstance(stmt, n.Block):
        return bool(stmt.body) and _terminates(stmt.body[-1])
    if isinstance(stmt, n.If):
        return stmt.alt is not None and _terminates(stmt.cons) and _terminates(stmt.alt)
    return False


def _strip_break(body: list[n.Node]) -> tuple[list[n.Node], bool]:
    if not body:
        return body, False
    last = body[-1]
    if isinstance(last, n.Break):
        return body[:-1], True
    if isinstance(last, n.Block):
        inner, stripped = _strip_break(last.body)
        if stripped:
            return body[:-1] + [n.Block(inner, line=last.line)], True
    return body, False


class CodeGenerator:
    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.pending: list[ast.stmt] = []
        self.scope = _Scope("module", set())

    def temp(self, hint: str) -> str:
        return f"js_{hint}{next(self._ids)}"

    def error(self, message: str, node: n.Node) -> TranspileError:
        return TranspileError(message, node.line or None)

    def _collect(self, build) -> list[ast.stmt]:
        """Run *build*; prepend the function definitions it hoisted."""
        saved, self.pending = self.pending, []
        try:
            out = build()
            return self.pending + out
        finally:
            self.pending = saved

    # -- module & blocks ----------------------------------------------------

    def module(self, program: n.Program) -> ast.Module:
        self.scope = _Scope("module", declared_names(program.body))
        return ast.Module(body=self.block(program.body), type_ignores=[])

    def block(self, stmts: list[n.Node]) -> list[ast.stmt]:
        """Statements of one block; function declarations are hoisted to its start."""
        out: list[ast.stmt] = []
        for stmt in stmts:
            if isinstance(stmt, n.FuncDecl):
                out += self.stmt(stmt)
        for stmt in stmts:
            if not isinstance(stmt, n.FuncDecl):
                out += self.stmt(stmt)
        return out

    def body(self, node: n.Node | None) -> list[ast.stmt]:
        if node is None:
            return [ast.Pass()]
        out = self.block(node.body) if isinstance(node, n.Block) else self.stmt(node)
        return out or [ast.Pass()]

    def stmt(self, node: n.Node) -> list[ast.stmt]:
        handler = getattr(self, "stmt_" + type(node).__name__, None)
        if handler is None:
            raise self.error(f"Unsupported statement {type(node).__name__}", node)
        out = self._collect(lambda: handler(node))
        if self.scope.loops:
            if isinstance(node, n.VarDecl) and node.kind in _BLOCK_SCOPED:
                for target, _init in node.decls:
                    self.scope.loops[-1].update(pattern_names(target))
            elif isinstance(node, n.FuncDecl) and node.func.name:
                self.scope.loops[-1].add(node.func.name)
            elif isinstance(node, n.ClassDecl):
                self.scope.loops[-1].add(node.cls.name)
        return out

    def loop_body(self, body: n.Node, header_names: list[str]) -> list[ast.stmt]:
        self.scope.loops.append(set(header_names))
        self.scope.breakables.append("loop")
        try:
            return self.body(body)
        finally:
            self.scope.loops.pop()
            self.scope.breakables.pop()

    # -- statements ---------------------------------------------------------

    def stmt_VarDecl(self, node: n.VarDecl) -> list[ast.stmt]:
        out: list[ast.stmt] = []
        for target, init in node.decls:
            if (
                isinstance(target, n.Ident)
                and isinstance(init, n.Func)
                and not self._lambda_ok(init)
            ):
                out.append(self.function_def(init, ident_name(target.name)))
                continue
            value = self.expr(init) if init is not None else _const(None)
            out += self.assign_to(target, value)
        return out

    def stmt_FuncDecl(self, node: n.FuncDecl) -> list[ast.stmt]:
        return [self.function_def(node.func, ident_name(node.func.name))]

    def stmt_ClassDecl(self, node: n.ClassDecl) -> list[ast.stmt]:
        return self.class_def(node.cls)

    def stmt_EnumDecl(self, node: n.EnumDecl) -> list[ast.stmt]:
        keys: list[ast.expr] = []
        values: list[ast.expr] = []
        reverse: list[tuple[str, str]] = []
        next_value: int | float | None = 0
        for name, init in node.members:
            number = None
            if init is None:
                if next_value is None:
                    raise self.error(f"Enum member '{name}' must have an initializer", node)
                number = next_value
            elif _is_number(init):
                number = init.value
            elif isinstance(init, n.Unary) and init.op == "-" and _is_number(init.arg):
                number = -init.arg.value
            if number is not None:
                value = _const(number)
                reverse.append((_number_text(number), name))
                next_value = number + 1
            else:
                value = self.expr(init)
                next_value = None
            keys.append(_const(name))
            values.append(value)
        for number_key, name in reverse:
            keys.append(_const(number_key))
            values.append(_const(name))
        return [_assign(_store(ident_name(node.name)), ast.Dict(keys=keys, values=values))]

    def stmt_ExprStmt(self, node: n.ExprStmt) -> list[ast.stmt]:
        return self.expr_stmt(node.expr)

    def stmt_Block(self, node: n.Block) -> list[ast.stmt]:
        return self.block(node.body)

    def stmt_Empty(self, node: n.Empty) -> list[ast.stmt]:
        return []

    def stmt_Return(self, node: n.Return) -> list[ast.stmt]:
        if self.scope.kind == "module":
            raise self.error("Illegal return statement", node)
        return [ast.Return(value=self.expr(node.arg) if node.arg is not None else None)]

    def stmt_If(self, node: n.If) -> list[ast.stmt]:
        test = self.test(node.test)
        orelse: list[ast.stmt] = []
        if isinstance(node.alt, n.Block):
            orelse = self.block(node.alt.body)
        elif node.alt is not None:
            orelse = self.stmt(node.alt)
        return [_if(test, self.body(node.cons), orelse)]

    def stmt_While(self, node: n.While) -> list[ast.stmt]:
        test = self.test(node.test)
        return [ast.While(test=test, body=self.loop_body(node.body, []), orelse=[])]

    def stmt_DoWhile(self, node: n.DoWhile) -> list[ast.stmt]:
        first = self.temp("first")
        test = self.test(node.test)
        check = _if(ast.BoolOp(op=ast.And(), values=[_not(_load(first)), _not(test)]), [ast.Break()])
        body = [check, _assign(_store(first), _const(False))] + self.loop_body(node.body, [])
        return [
            _assign(_store(first), _const(True)),
            ast.While(test=_const(True), body=body, orelse=[]),
        ]

    def stmt_For(self, node: n.For) -> list[ast.stmt]:
        out: list[ast.stmt] = []
        header: list[str] = []
        if isinstance(node.init, n.VarDecl):
            out += self.stmt(node.init)
            if node.init.kind in _BLOCK_SCOPED:
                for target, _init in node.init.decls:
                    header += pattern_names(target)
        elif node.init is not None:
            out += self.stmt(node.init)
        test = self.test(node.test) if node.test is not None else None
        self.scope.loops.append(set(header))
        try:
            update = self.stmt(n.ExprStmt(node.update, line=node.line)) if node.update is not None else []
        finally:
            self.scope.loops.pop()
        body = self.loop_body(node.body, header)
        if update and contains_continue(node.body):
            first = self.temp("first")
            loop: list[ast.stmt] = [
                _if(_not(_load(first)), update),
                _assign(_store(first), _const(False)),
            ]
            if test is not None:
                loop.append(_if(_not(test), [ast.Break()]))
            out.append(_assign(_store(first), _const(True)))
            out.append(ast.While(test=_const(True), body=loop + body, orelse=[]))
        else:
            out.append(ast.While(test=test if test is not None else _const(True), body=body + update, orelse=[]))
        return out

    def stmt_ForEach(self, node: n.ForEach) -> list[ast.stmt]:
        iterable = self.expr(node.iterable)
        if not node.of_:
            iterable = _rt("keys", iterable)
        header = pattern_names(node.target) if node.declared else []
        prelude: list[ast.stmt] = []
        if isinstance(node.target, n.Ident):
            target = _store(ident_name(node.target.name))
        else:
            item = self.temp("item")
            target = _store(item)
            prelude = self.assign_to(node.target, _load(item))
        body = prelude + self.loop_body(node.body, header)
        return [ast.For(target=target, iter=iterable, body=body, orelse=[])]

    def stmt_Break(self, node: n.Break) -> list[ast.stmt]:
        if not self.scope.breakables:
            raise self.error("Illegal break statement", node)
        if self.scope.breakables[-1] == "switch":
            raise self.error("'break' is only supported as the last statement of a switch case", node)
        return [ast.Break()]

    def stmt_Continue(self, node: n.Continue) -> list[ast.stmt]:
        if "loop" not in self.scope.breakables:
            raise self.error("Illegal continue statement", node)
        return [ast.Continue()]

    def stmt_Throw(self, node: n.Throw) -> list[ast.stmt]:
        return [ast.Raise(exc=_rt("throwable", self.expr(node.arg)), cause=None)]

    def stmt_Try(self, node: n.Try) -> list[ast.stmt]:
        handlers = []
        if node.handler is not None:
            err = self.temp("err")
            body: list[ast.stmt] = []
            if node.param is not None:
                body += self.assign_to(node.param, _rt("caught", _load(err)))
            body += self.body(node.handler)
            handlers.append(ast.ExceptHandler(type=_load("Exception"), name=err, body=body))
        finalbody = self.body(node.finalizer) if node.finalizer is not None else []
        return [ast.Try(body=self.body(node.block), handlers=handlers, orelse=[], finalbody=finalbody)]

    def stmt_Switch(self, node: n.Switch) -> list[ast.stmt]:
        disc = self.temp("switch")
        out: list[ast.stmt] = [_assign(_store(disc), self.expr(node.disc))]

        groups: list[tuple[list[n.Node | None], list[n.Node], n.Node]] = []
        tests: list[n.Node | None] = []
        for case in node.cases:
            tests.append(case.test)
            if case.body:
                groups.append((tests, case.body, case))
                tests = []
        if tests:
            groups.append((tests, [], node.cases[-1]))

        branches: list[tuple[ast.expr, list[ast.stmt]]] = []
        default: list[ast.stmt] | None = None
        for index, (case_tests, case_body, case) in enumerate(groups):
            case_body, _stripped = _strip_break(case_body)
            is_last = index == len(groups) - 1
            if not is_last and not _stripped and not (case_body and _terminates(case_body[-1])):
                raise self.error("Switch case fall-through is not supported", case)
            self.scope.breakables.append("switch")
            try:
                compiled = self.block(case_body) or [ast.Pass()]
            finally:
                self.scope.breakables.pop()
            if None in case_tests:
                default = compiled
                continue
            conditions = [self._equals(_load(disc), test) for test in case_tests]
            cond = conditions[0] if len(conditions) == 1 else ast.BoolOp(op=ast.Or(), values=conditions)
            branches.append((cond, compiled))

        chain: list[ast.stmt] = default or []
        for cond, compiled in reversed(branches):
            chain = [_if(cond, compiled, chain)]
        return out + chain

    def _equals(self, left: ast.expr, test: n.Node) -> ast.expr:
        if _is_null(test):
            return _is_none(left)
        if _is_string(test):
            return ast.Compare(left=left, ops=[ast.Eq()], comparators=[self.expr(test)])
        return _rt("strict_eq", left, self.expr(test))

    # -- expression statements & assignment ---------------------------------

    def expr_stmt(self, expr: n.Node) -> list[ast.stmt]:
        if isinstance(expr, n.Assign):
            return self.assignment(expr)
        if isinstance(expr, n.Update):
            return self.update(expr)
        if isinstance(expr, n.Sequence):
            return [stmt for e in expr.exprs for stmt in self.expr_stmt(e)]
        if isinstance(expr, n.Logical):
            if expr.op == "&&":
                test = self.test(expr.left)
            elif expr.op == "||":
                test = _not(self.test(expr.left))
            else:
                test = _is_none(self.expr(expr.left))
            return [_if(test, self.expr_stmt(expr.right))]
        if isinstance(expr, n.Cond):
            orelse = self.expr_stmt(expr.alt)
            return [_if(self.test(expr.test), self.expr_stmt(expr.cons), orelse)]
        if isinstance(expr, n.Unary) and expr.op in ("void", "await"):
            return self.expr_stmt(expr.arg)
        return [ast.Expr(value=self.expr(expr))]

    def assignment(self, node: n.Assign) -> list[ast.stmt]:
        if node.op == "=":
            targets = [node.target]
            value = node.value
            while isinstance(value, n.Assign):
                if value.op != "=":
                    raise self.error("Compound assignments are only supported as statements", value)
                targets.append(value.target)
                value = value.value
            compiled = self.expr(value)
            if len(targets) == 1:
                return self.assign_to(targets[0], compiled)
            if all(self._plain_target(t) for t in targets):
                return [ast.Assign(targets=[self.store_target(t) for t in reversed(targets)], value=compiled)]
            tmp = self.temp("value")
            out: list[ast.stmt] = [_assign(_store(tmp), compiled)]
            for target in reversed(targets):
                out += self.assign_to(target, _load(tmp))
            return out

        prelude, target = self.stable_target(node.target)
        current = self.expr(target)
        if node.op in ("&&=", "||=", "??="):
            if node.op == "&&=":
                test = _rt("truthy", current)
            elif node.op == "||=":
                test = _not(_rt("truthy", current))
            else:
                test = _is_none(current)
            return prelude + [_if(test, self.assign_to(target, self.expr(node.value)))]
        value = self.binary_ast(node.op[:-1], current, self.expr(node.value), target, node.value)
        return prelude + self.assign_to(target, value)

    def update(self, node: n.Update) -> list[ast.stmt]:
        prelude, target = self.stable_target(node.target)
        op = ast.Add() if node.op == "++" else ast.Sub()
        value = ast.BinOp(left=self.expr(target), op=op, right=_const(1))
        return prelude + self.assign_to(target, value)

    def stable_target(self, target: n.Node) -> tuple[list[ast.stmt], n.Node]:
        """Evaluate the object (and index) of a member target once."""
        prelude: list[ast.stmt] = []
        if isinstance(target, (n.Member, n.Index)) and not isinstance(target.obj, (n.Ident, n.This, _Raw)):
            tmp = self.temp("obj")
            prelude.append(_assign(_store(tmp), self.expr(target.obj)))
            target = replace(target, obj=_Raw(tmp, line=target.line))
        if isinstance(target, n.Index) and not isinstance(target.index, (n.Ident, n.Literal, _Raw)):
            tmp = self.temp("key")
            prelude.append(_assign(_store(tmp), self.expr(target.index)))
            target = replace(target, index=_Raw(tmp, line=target.line))
        return prelude, target

    def _plain_target(self, target: n.Node) -> bool:
        if isinstance(target, (n.Ident, n.Index)):
            return True
        return (
            isinstance(target, n.Member)
            and not isinstance(target.obj, n.Super)
            and (target.prop.startswith("#") or not needs_member_mangling(target.prop))
        )

    def store_target(self, target: n.Node) -> ast.expr:
        if isinstance(target, n.Ident):
            return _store(ident_name(target.name))
        if isinstance(target, _Raw):
            return _store(target.name)
        if isinstance(target, n.Member):
            attr = member_name(target.prop) if target.prop.startswith("#") else target.prop
            return ast.Attribute(value=self.expr(target.obj), attr=attr, ctx=ast.Store())
        if isinstance(target, n.Index):
            return ast.Subscript(value=self.expr(target.obj), slice=self.expr(target.index), ctx=ast.Store())
        raise self.error("Invalid assignment target", target)

    def assign_to(self, target: n.Node, value: ast.expr) -> list[ast.stmt]:
        if isinstance(target, (n.ObjectPattern, n.ArrayPattern)):
            return self.destructure(target, value)
        if isinstance(target, n.Member):
            if isinstance(target.obj, n.Super):
                raise self.error("Assignment to 'super' properties is not supported", target)
            if not self._plain_target(target):
                return [ast.Expr(value=_rt("put", self.expr(target.obj), _const(target.prop), value))]
        return [_assign(self.store_target(target), value)]

    def destructure(self, pattern: n.Node, value: ast.expr) -> list[ast.stmt]:
        out: list[ast.stmt] = []
        if isinstance(value, ast.Name):
            source = value
        else:
            tmp = self.temp("src")
            out.append(_assign(_store(tmp), value))
            source = _load(tmp)
        if isinstance(pattern, n.ObjectPattern):
            keys: list[ast.expr] = []
            for prop in pattern.props:
                key = _rt("key", self.expr(prop.key)) if prop.computed else _const(prop.key.value)
                keys.append(key)
                out += self.bind(prop.target, _rt("get", source, key), prop.default)
            if pattern.rest is not None:
                rest = _rt("rest_object", source, ast.List(elts=keys, ctx=ast.Load()))
                out += self.assign_to(pattern.rest, rest)
        else:
            for index, element in enumerate(pattern.elements):
                if element is None:
                    continue
                item = ast.Subscript(value=source, slice=_const(index), ctx=ast.Load())
                out += self.bind(element.target, item, element.default)
            if pattern.rest is not None:
                out += self.assign_to(pattern.rest, _rt("slice", source, _const(len(pattern.elements))))
        return out

    def bind(self, target: n.Node, value: ast.expr, default: n.Node | None) -> list[ast.stmt]:
        if default is None:
            return self.assign_to(target, value)
        if isinstance(target, n.Ident):
            name = ident_name(target.name)
            return [
                _assign(_store(name), value),
                _if(_is_none(_load(name)), [_assign(_store(name), self.expr(default))]),
            ]
        tmp = self.temp("val")
        return [
            _assign(_store(tmp), value),
            _if(_is_none(_load(tmp)), [_assign(_store(tmp), self.expr(default))]),
        ] + self.assign_to(target, _load(tmp))

    # -- functions ----------------------------------------------------------

    def _lambda_ok(self, func: n.Func) -> bool:
        return (
            func.expr_body
            and not _has_statement_effect(func.body)
            and all(isinstance(p.target, n.Ident) and p.default is None and not p.rest for p in func.params)
        )

    def _captures(self, func: n.Func) -> list[str]:
        """Loop-local bindings the function reads; bound per iteration as defaults."""
        if not self.scope.loops:
            return []
        candidates = set().union(*self.scope.loops)
        if not candidates:
            return []
        own = param_names(func)
        if not func.expr_body:
            own |= declared_names(func.body)
        free = referenced_names(func) - own - assigned_names([func], into_functions=True)
        return sorted(ident_name(name) for name in free & candidates)

    def _enter(self, func: n.Func, this_name, cls) -> _Scope:
        if func.is_arrow:
            this_name, cls = self.scope.this_name, self.scope.cls
        else:
            this_name = None if this_name is _INHERIT else this_name
            cls = None if cls is _INHERIT else cls
        declared = param_names(func)
        if not func.expr_body:
            declared |= declared_names(func.body)
        return _Scope("function", declared, self.scope, this_name, cls)

    def func_expr(self, func: n.Func) -> ast.expr:
        if not self._lambda_ok(func):
            name = self.temp("fn")
            self.pending.append(self.function_def(func, name))
            return _load(name)
        captures = self._captures(func)
        outer, self.scope = self.scope, self._enter(func, _INHERIT, _INHERIT)
        saved, self.pending = self.pending, []
        try:
            body = self.expr(func.body)
            hoisted = self.pending
        finally:
            self.scope, self.pending = outer, saved
        params = [ident_name(p.target.name) for p in func.params]
        args = _arguments(params, REST_ARGS, captures, self_arg=False)
        if not hoisted:
            return ast.Lambda(args=args, body=body)
        # the body needs function definitions of its own: emit a def instead
        name = self.temp("fn")
        self.pending.append(
            ast.FunctionDef(
                name=name, args=args, body=hoisted + [ast.Return(value=body)],
                decorator_list=[], returns=None, **_TYPE_PARAMS,
            )
        )
        return _load(name)

    def function_def(
        self,
        func: n.Func,
        name: str,
        *,
        this_name=_INHERIT,
        cls=_INHERIT,
        self_arg: bool = False,
        init_hook=None,
        derived: bool = False,
    ) -> ast.FunctionDef:
        captures = self._captures(func)
        scope = self._enter(func, this_name, cls)
        outer, self.scope = self.scope, scope
        try:
            params, vararg, prelude = self._params(func)
            decls = self._scope_decls(func)
            if func.expr_body:
                body = self._collect(lambda: self._expr_body(func.body))
            elif init_hook is not None:
                body = self._constructor_body(func.body, init_hook, derived)
            else:
                body = self.block(func.body)
        finally:
            self.scope = outer
        return ast.FunctionDef(
            name=name,
            args=_arguments(params, vararg, captures, self_arg),
            body=decls + prelude + body or [ast.Pass()],
            decorator_list=[],
            returns=None,
            **_TYPE_PARAMS,
        )

    def _expr_body(self, expr: n.Node) -> list[ast.stmt]:
        if not _has_statement_effect(expr):
            return [ast.Return(value=self.expr(expr))]
        out = self.expr_stmt(expr)
        last = expr.exprs[-1] if isinstance(expr, n.Sequence) else expr
        if isinstance(last, n.Assign) and not isinstance(last.target, (n.ObjectPattern, n.ArrayPattern)):
            out.append(ast.Return(value=self.expr(last.target)))
        elif isinstance(last, n.Update):
            out.append(ast.Return(value=self.expr(last.target)))
        elif not _has_statement_effect(last):
            out[-1:] = [ast.Return(value=self.expr(last))]
        return out

    def _params(self, func: n.Func) -> tuple[list[str], str, list[ast.stmt]]:
        params: list[str] = []
        vararg = REST_ARGS
        prelude: list[ast.stmt] = []
        for param in func.params:
            if isinstance(param.target, n.Ident):
                pname = ident_name(param.target.name)
            else:
                pname = self.temp("arg")
            if param.rest:
                vararg = pname
                prelude.append(_assign(_store(pname), _rt("array", _load(pname))))
            else:
                params.append(pname)
            if param.default is not None:
                default = param.default
                prelude += self._collect(
                    lambda: [_if(_is_none(_load(pname)), [_assign(_store(pname), self.expr(default))])]
                )
            if not isinstance(param.target, n.Ident):
                target = param.target
                prelude += self._collect(lambda: self.destructure(target, _load(pname)))
        return params, vararg, prelude

    def _scope_decls(self, func: n.Func) -> list[ast.stmt]:
        """global/nonlocal statements for names the function rebinds but does not declare."""
        roots = [func.body] if func.expr_body else func.body
        rebound = assigned_names(roots) - self.scope.declared
        globals_: list[str] = []
        nonlocals: list[str] = []
        for name in sorted(rebound):
            owner = self.scope.parent
            while owner is not None and owner.kind != "module" and name not in owner.declared:
                owner = owner.parent
            if owner is None or owner.kind == "module":
                globals_.append(ident_name(name))
            else:
                nonlocals.append(ident_name(name))
        out: list[ast.stmt] = []
        if globals_:
            out.append(ast.Global(names=globals_))
        if nonlocals:
            out.append(ast.Nonlocal(names=nonlocals))
        return out

    def _constructor_body(self, stmts: list[n.Node], init_hook, derived: bool) -> list[ast.stmt]:
        split = None
        if derived:
            for index, stmt in enumerate(stmts):
                if (
                    isinstance(stmt, n.ExprStmt)
                    and isinstance(stmt.expr, n.Call)
                    and isinstance(stmt.expr.callee, n.Super)
                ):
                    split = index + 1
                    break
        if split is None:
            return init_hook() + self.block(stmts)
        return self.block(stmts[:split]) + init_hook() + self.block(stmts[split:])

    # -- classes ------------------------------------------------------------

    def class_def(self, cls: n.ClassDef) -> list[ast.stmt]:
        py_name = ident_name(cls.name)
        bases = [self.expr(cls.superclass)] if cls.superclass is not None else []
        derived = cls.superclass is not None
        ctor = next((m for m in cls.members if m.kind == "constructor"), None)
        fields_ = [m for m in cls.members if m.kind == "field" and not m.static]
        statics = [m for m in cls.members if m.kind == "field" and m.static]

        body: list[ast.stmt] = []
        if ctor is not None or fields_:
            body.append(self._constructor(py_name, ctor, fields_, derived))

        accessors: dict[str, dict[str, str]] = {}
        for member in cls.members:
            if member.kind == "method":
                attr = member_name(member.key)
                if not attr.isidentifier():
                    raise self.error(f"Unsupported method name '{member.key}'", member)
                fd = self.function_def(
                    member.value,
                    attr,
                    this_name=py_name if member.static else "self",
                    cls=py_name,
                    self_arg=not member.static,
                )
                if member.static:
                    fd.decorator_list = [_load("staticmethod")]
                body.append(fd)
            elif member.kind in ("get", "set"):
                if member.static:
                    raise self.error("Static accessors are not supported", member)
                attr = member_name(member.key)
                if not attr.isidentifier():
                    raise self.error(f"Unsupported accessor name '{member.key}'", member)
                fname = f"js_{member.kind}_{attr}"
                body.append(self.function_def(member.value, fname, this_name="self", cls=py_name, self_arg=True))
                accessors.setdefault(attr, {})[member.kind] = fname
        for attr, pair in accessors.items():
            args = [_load(pair["get"]) if "get" in pair else _const(None)]
            if "set" in pair:
                args.append(_load(pair["set"]))
            body.append(_assign(_store(attr), _call(_load("property"), args)))

        out: list[ast.stmt] = [
            ast.ClassDef(
                name=py_name,
                bases=bases,
                keywords=[],
                body=body or [ast.Pass()],
                decorator_list=[],
                **_TYPE_PARAMS,
            )
        ]
        saved = (self.scope.this_name, self.scope.cls)
        self.scope.this_name, self.scope.cls = py_name, py_name
        try:
            for member in statics:
                value = self.expr(member.value) if member.value is not None else _const(None)
                target = n.Member(_Raw(py_name), member.key, line=member.line)
                out += self.assign_to(target, value)
        finally:
            self.scope.this_name, self.scope.cls = saved
        return out

    def _constructor(self, py_name: str, ctor, fields_, derived: bool) -> ast.FunctionDef:
        if ctor is not None:
            func = ctor.value
        else:
            body = []
            if derived:
                spread = n.Spread(_Raw(REST_ARGS))
                body = [n.ExprStmt(n.Call(n.Super(), [spread]))]
            func = n.Func("constructor", [], body)
        param_props = [p for p in func.params if p.accessibility and isinstance(p.target, n.Ident)]

        def init_hook() -> list[ast.stmt]:
            out: list[ast.stmt] = []
            for param in param_props:
                target = n.Member(n.This(), param.target.name, line=param.line)
                out += self.assign_to(target, _load(ident_name(param.target.name)))
            for member in fields_:
                def build(member=member):
                    value = self.expr(member.value) if member.value is not None else _const(None)
                    return self.assign_to(n.Member(n.This(), member.key, line=member.line), value)
                out += self._collect(build)
            return out

        return self.function_def(
            func,
            "__init__",
            this_name="self",
            cls=py_name,
            self_arg=True,
            init_hook=init_hook,
            derived=derived,
        )

    # -- expressions --------------------------------------------------------

    def expr(self, node: n.Node) -> ast.expr:
        handler = getattr(self, "expr_" + type(node).__name__, None)
        if handler is None:
            raise self.error(f"Unsupported expression {type(node).__name__}", node)
        return handler(node)

    def expr__Raw(self, node: _Raw) -> ast.expr:
        return _load(node.name)

    def expr_Literal(self, node: n.Literal) -> ast.expr:
        return _const(node.value)

    def expr_TemplateLit(self, node: n.TemplateLit) -> ast.expr:
        parts: list[ast.expr] = []
        for index, text in enumerate(node.strings):
            if text:
                parts.append(_const(text))
            if index < len(node.exprs):
                parts.append(self.expr(node.exprs[index]))
        if not node.exprs:
            return _const(node.strings[0] if node.strings else "")
        return _rt("concat", *parts)

    def expr_Ident(self, node: n.Ident) -> ast.expr:
        return _load(ident_name(node.name))

    def expr_This(self, node: n.This) -> ast.expr:
        name = self.scope.this_name
        return _load(name) if name else _const(None)

    def expr_Super(self, node: n.Super) -> ast.expr:
        raise self.error("'super' keyword unexpected here", node)

    def super_call(self, node: n.Node) -> ast.expr:
        if not self.scope.cls or not self.scope.this_name:
            raise self.error("'super' keyword unexpected here", node)
        return _call(_load("super"), [_load(self.scope.cls), _load(self.scope.this_name)])

    def expr_Spread(self, node: n.Spread) -> ast.expr:
        raise self.error("Unexpected spread", node)

    def _element(self, node: n.Node | None) -> ast.expr:
        if node is None:
            return _const(None)
        if isinstance(node, n.Spread):
            return ast.Starred(value=self.expr(node.arg), ctx=ast.Load())
        return self.expr(node)

    def expr_ArrayLit(self, node: n.ArrayLit) -> ast.expr:
        return ast.List(elts=[self._element(e) for e in node.elements], ctx=ast.Load())

    def expr_ObjectLit(self, node: n.ObjectLit) -> ast.expr:
        keys: list[ast.expr | None] = []
        values: list[ast.expr] = []
        for prop in node.props:
            if isinstance(prop, n.Spread):
                keys.append(None)
                values.append(_rt("own", self.expr(prop.arg)))
                continue
            if prop.computed:
                keys.append(_rt("key", self.expr(prop.key)))
            else:
                keys.append(_const(str(prop.key.value)))
            if isinstance(prop.value, n.Assign) and prop.shorthand:
                raise self.error("Invalid shorthand property initializer", prop)
            values.append(self.expr(prop.value))
        return ast.Dict(keys=keys, values=values)

    def expr_Func(self, node: n.Func) -> ast.expr:
        return self.func_expr(node)

    def expr_New(self, node: n.New) -> ast.expr:
        return _call(self.expr(node.callee), [self._element(a) for a in node.args])

    def expr_Call(self, node: n.Call) -> ast.expr:
        args = [self._element(a) for a in node.args]
        if isinstance(node.callee, n.Super):
            func = ast.Attribute(value=self.super_call(node), attr="__init__", ctx=ast.Load())
            return _call(func, args)
        return _call(self.expr(node.callee), args)

    def _member(self, obj: ast.expr, prop: str) -> ast.expr:
        if prop.startswith("#"):
            return ast.Attribute(value=obj, attr=member_name(prop), ctx=ast.Load())
        if needs_member_mangling(prop):
            return _rt("get", obj, _const(prop))
        return ast.Attribute(value=obj, attr=prop, ctx=ast.Load())

    def expr_Member(self, node: n.Member) -> ast.expr:
        if isinstance(node.obj, n.Super):
            return ast.Attribute(value=self.super_call(node), attr=member_name(node.prop), ctx=ast.Load())
        return self._member(self.expr(node.obj), node.prop)

    def expr_Index(self, node: n.Index) -> ast.expr:
        if isinstance(node.obj, n.Super):
            raise self.error("Computed 'super' access is not supported", node)
        return ast.Subscript(value=self.expr(node.obj), slice=self.expr(node.index), ctx=ast.Load())

    def expr_Chain(self, node: n.Chain) -> ast.expr:
        links: list[n.Node] = []
        current = node.expr
        while isinstance(current, (n.Member, n.Index, n.Call)):
            links.append(current)
            current = current.callee if isinstance(current, n.Call) else current.obj
        links.reverse()
        if isinstance(current, n.Super):
            # super.x?.y: the first link is an ordinary super access
            base = self.expr(links[0])
            links = links[1:]
        else:
            base = self.expr(current)
        return self._chain_links(base, links)

    def _chain_links(self, current: ast.expr, links: list[n.Node]) -> ast.expr:
        for index, link in enumerate(links):
            if link.optional:
                param = self.temp("oc")
                rest = self._chain_links(_load(param), [replace(link, optional=False)] + links[index + 1 :])
                args = _arguments([param], None)
                return _rt("chain", current, ast.Lambda(args=args, body=rest))
            if isinstance(link, n.Member):
                current = self._member(current, link.prop)
            elif isinstance(link, n.Index):
                current = ast.Subscript(value=current, slice=self.expr(link.index), ctx=ast.Load())
            else:
                current = _call(current, [self._element(a) for a in link.args])
        return current

    def expr_Unary(self, node: n.Unary) -> ast.expr:
        op = node.op
        if op == "await":
            return self.expr(node.arg)
        if op == "delete":
            target = node.arg
            if isinstance(target, n.Member):
                return _rt("delete", self.expr(target.obj), _const(target.prop))
            if isinstance(target, n.Index):
                return _rt("delete", self.expr(target.obj), self.expr(target.index))
            raise self.error("Delete of an unqualified identifier is not supported", node)
        if op == "!":
            return _not(self.test(node.arg))
        if op == "typeof" and isinstance(node.arg, n.Literal) and node.arg.raw == "null":
            return _const("object")
        arg = self.expr(node.arg)
        if op == "-":
            return ast.UnaryOp(op=ast.USub(), operand=arg)
        if op == "+":
            return _rt("num", arg)
        if op == "~":
            return _rt("bitnot", arg)
        if op == "typeof":
            return _rt("typeof", arg)
        if op == "void":
            return _rt("void", arg)
        raise self.error(f"Unsupported operator '{op}'", node)

    def expr_Update(self, node: n.Update) -> ast.expr:
        raise self.error(f"'{node.op}' is only supported as a statement", node)

    def expr_Assign(self, node: n.Assign) -> ast.expr:
        raise self.error("Assignments are only supported as statements", node)

    def expr_Binary(self, node: n.Binary) -> ast.expr:
        op = node.op
        if op in _EQUALITY and (_is_null(node.left) or _is_null(node.right)):
            other = node.right if _is_null(node.left) else node.left
            return _is_none(self.expr(other), negate=op in ("!=", "!=="))
        if op == "instanceof":
            return _rt("instanceof", self.expr(node.left), self.expr(node.right))
        if op == "in":
            return _rt("has", self.expr(node.right), self.expr(node.left))
        if op in _EQUALITY:
            return self.equality(op, node.left, node.right)
        return self.binary_ast(op, self.expr(node.left), self.expr(node.right), node.left, node.right)

    def binary_ast(self, op: str, left: ast.expr, right: ast.expr, lnode: n.Node, rnode: n.Node) -> ast.expr:
        if op == "+" and (
            (_is_number(lnode) and _is_number(rnode)) or (_is_string(lnode) and _is_string(rnode))
        ):
            return ast.BinOp(left=left, op=ast.Add(), right=right)
        if op in _NATIVE_BINOPS:
            return ast.BinOp(left=left, op=_NATIVE_BINOPS[op](), right=right)
        if op in _RUNTIME_BINOPS:
            return _rt(_RUNTIME_BINOPS[op], left, right)
        if op in _COMPARE_OPS:
            return ast.Compare(left=left, ops=[_COMPARE_OPS[op]()], comparators=[right])
        raise self.error(f"Unsupported operator '{op}'", lnode)

    def equality(self, op: str, lnode: n.Node, rnode: n.Node) -> ast.expr:
        left = self.expr(lnode)
        right = self.expr(rnode)
        negate = op in ("!=", "!==")
        if op in ("===", "!==") and (_is_string(lnode) or _is_string(rnode)):
            cmp = ast.NotEq() if negate else ast.Eq()
            return ast.Compare(left=left, ops=[cmp], comparators=[right])
        result = _rt("loose_eq" if op in ("==", "!=") else "strict_eq", left, right)
        return _not(result) if negate else result

    def test(self, node: n.Node) -> ast.expr:
        """*node* as a Python condition with JS truthiness."""
        if isinstance(node, n.Logical) and node.op != "??":
            op = ast.And() if node.op == "&&" else ast.Or()
            return ast.BoolOp(op=op, values=[self.test(node.left), self.test(node.right)])
        if isinstance(node, n.Unary) and node.op == "!":
            return _not(self.test(node.arg))
        expr = self.expr(node)
        return expr if _is_boolean(node) else _rt("truthy", expr)

    def expr_Logical(self, node: n.Logical) -> ast.expr:
        left = self.expr(node.left)
        right = self.expr(node.right)
        if node.op != "??" and _is_boolean(node.left):
            op = ast.And() if node.op == "&&" else ast.Or()
            return ast.BoolOp(op=op, values=[left, right])
        thunk = ast.Lambda(args=_arguments([], None), body=right)
        helper = {"??": "coalesce", "&&": "logical_and", "||": "logical_or"}[node.op]
        return _rt(helper, left, thunk)

    def expr_Cond(self, node: n.Cond) -> ast.expr:
        return ast.IfExp(test=self.test(node.test), body=self.expr(node.cons), orelse=self.expr(node.alt))

    def expr_Sequence(self, node: n.Sequence) -> ast.expr:
        return _rt("last", *[self.expr(e) for e in node.exprs])


def _number_text(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def generate(program: n.Program) -> str:
    """Python source for a parsed program."""
    module = CodeGenerator().module(program)
    ast.fix_missing_locations(module)
    return ast.unparse(module) + "\n"
