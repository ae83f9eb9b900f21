"""
Syntax tree of the TypeScript subset. Type-only syntax never reaches the tree:
the parser skips it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Node:
    line: int = field(default=0, kw_only=True, compare=False, repr=False)


# -- expressions --------------------------------------------------------------


@dataclass
class Literal(Node):
    value: Any  # str, int, float, bool or None (null / undefined)
    raw: Optional[str] = field(default=None, kw_only=True, compare=False, repr=False)


@dataclass
class TemplateLit(Node):
    strings: list[str]
    exprs: list[Node]


@dataclass
class Ident(Node):
    name: str


@dataclass
class This(Node):
    pass


@dataclass
class Super(Node):
    pass


@dataclass
class Spread(Node):
    arg: Node


@dataclass
class ArrayLit(Node):
    elements: list[Optional[Node]]  # None is a hole


@dataclass
class Prop(Node):
    key: Node  # Literal (static key) or any expression when computed
    value: Node
    computed: bool = False
    shorthand: bool = False


@dataclass
class ObjectLit(Node):
    props: list[Node]  # Prop or Spread


@dataclass
class Param(Node):
    target: Node  # Ident or pattern
    default: Optional[Node] = None
    rest: bool = False
    accessibility: Optional[str] = None  # set for constructor parameter properties


@dataclass
class Func(Node):
    name: Optional[str]
    params: list[Param]
    body: Any  # list of statements, or one expression for `x => expr`
    is_arrow: bool = False
    expr_body: bool = False
    is_async: bool = False


@dataclass
class ClassMember(Node):
    kind: str  # "constructor" | "method" | "get" | "set" | "field"
    key: str
    static: bool = False
    value: Optional[Node] = None  # Func for methods, initializer for fields


@dataclass
class ClassDef(Node):
    name: str
    superclass: Optional[Node]
    members: list[ClassMember]


@dataclass
class New(Node):
    callee: Node
    args: list[Node]


@dataclass
class Call(Node):
    callee: Node
    args: list[Node]
    optional: bool = False


@dataclass
class Member(Node):
    obj: Node
    prop: str
    optional: bool = False


@dataclass
class Index(Node):
    obj: Node
    index: Node
    optional: bool = False


@dataclass
class Chain(Node):
    """Boundary of an optional chain: a null link short-circuits everything inside."""

    expr: Node


@dataclass
class Unary(Node):
    op: str
    arg: Node


@dataclass
class Update(Node):
    op: str  # "++" | "--"
    prefix: bool
    target: Node


@dataclass
class Binary(Node):
    op: str
    left: Node
    right: Node


@dataclass
class Logical(Node):
    op: str  # "&&" | "||" | "??"
    left: Node
    right: Node


@dataclass
class Cond(Node):
    test: Node
    cons: Node
    alt: Node


@dataclass
class Assign(Node):
    op: str  # "=", "+=", ...
    target: Node
    value: Node


@dataclass
class Sequence(Node):
    exprs: list[Node]


# -- patterns -----------------------------------------------------------------


@dataclass
class PatternProp(Node):
    key: Node  # Literal or computed expression
    target: Node
    default: Optional[Node] = None
    computed: bool = False


@dataclass
class ObjectPattern(Node):
    props: list[PatternProp]
    rest: Optional[Node] = None


@dataclass
class PatternElem(Node):
    target: Node
    default: Optional[Node] = None


@dataclass
class ArrayPattern(Node):
    elements: list[Optional[PatternElem]]
    rest: Optional[Node] = None


# -- statements ---------------------------------------------------------------


@dataclass
class VarDecl(Node):
    kind: str  # "var" | "let" | "const"
    decls: list[tuple[Node, Optional[Node]]]


@dataclass
class FuncDecl(Node):
    func: Func


@dataclass
class ClassDecl(Node):
    cls: ClassDef


@dataclass
class EnumDecl(Node):
    name: str
    members: list[tuple[str, Optional[Node]]]


@dataclass
class ExprStmt(Node):
    expr: Node


@dataclass
class Block(Node):
    body: list[Node]


@dataclass
class Empty(Node):
    pass


@dataclass
class Return(Node):
    arg: Optional[Node]


@dataclass
class If(Node):
    test: Node
    cons: Node
    alt: Optional[Node] = None


@dataclass
class For(Node):
    init: Optional[Node]  # VarDecl or ExprStmt
    test: Optional[Node]
    update: Optional[Node]
    body: Node


@dataclass
class ForEach(Node):
    """``for (x of xs)`` (``of_=True``) or ``for (k in obj)``."""

    target: Node
    iterable: Node
    body: Node
    of_: bool = True
    declared: bool = True


@dataclass
class While(Node):
    test: Node
    body: Node


@dataclass
class DoWhile(Node):
    body: Node
    test: Node


@dataclass
class Break(Node):
    pass


@dataclass
class Continue(Node):
    pass


@dataclass
class Throw(Node):
    arg: Node


@dataclass
class Try(Node):
    block: Block
    param: Optional[Node]
    handler: Optional[Block]
    finalizer: Optional[Block]


@dataclass
class SwitchCase(Node):
    test: Optional[Node]  # None for default
    body: list[Node]


@dataclass
class Switch(Node):
    disc: Node
    cases: list[SwitchCase]


@dataclass
class Program(Node):
    body: list[Node]
