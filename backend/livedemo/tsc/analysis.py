"""
Name analysis over the syntax tree.

Python decides scopes per function from assignments, the script language
from declarations. The code generator uses these helpers to bridge the two:
which names a function declares, which it rebinds, which it only reads.
"""

from collections.abc import Iterable, Iterator
from dataclasses import fields

from . import nodes as n

_LOOPS = (n.For, n.ForEach, n.While, n.DoWhile)


def iter_children(node: n.Node) -> Iterator[n.Node]:
    for f in fields(node):
        yield from _nodes_in(getattr(node, f.name))


def _nodes_in(value) -> Iterator[n.Node]:
    if isinstance(value, n.Node):
        yield value
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _nodes_in(item)


def walk(roots: Iterable[n.Node], into_functions: bool = True) -> Iterator[n.Node]:
    """Depth-first walk. With ``into_functions=False`` function bodies and
    class members are not entered (a class's ``extends`` expression is)."""
    stack = list(roots)[::-1]
    while stack:
        node = stack.pop()
        yield node
        if not into_functions:
            if isinstance(node, n.Func):
                continue
            if isinstance(node, n.ClassDef):
                if node.superclass is not None:
                    stack.append(node.superclass)
                continue
        stack.extend(reversed(list(iter_children(node))))


def pattern_names(target: n.Node | None) -> list[str]:
    """Variables bound by a binding target (identifier or pattern)."""
    if target is None:
        return []
    if isinstance(target, n.Ident):
        return [target.name]
    if isinstance(target, n.ObjectPattern):
        names = [name for prop in target.props for name in pattern_names(prop.target)]
        return names + pattern_names(target.rest)
    if isinstance(target, n.ArrayPattern):
        names = [name for el in target.elements if el is not None for name in pattern_names(el.target)]
        return names + pattern_names(target.rest)
    return []


def param_names(func: n.Func) -> set[str]:
    return {name for p in func.params for name in pattern_names(p.target)}


def declared_names(body: list[n.Node]) -> set[str]:
    """Names declared by statements of one function body, nested blocks included."""
    declared: set[str] = set()
    for node in walk(body, into_functions=False):
        if isinstance(node, n.VarDecl):
            for target, _init in node.decls:
                declared.update(pattern_names(target))
        elif isinstance(node, n.FuncDecl) and node.func.name:
            declared.add(node.func.name)
        elif isinstance(node, n.ClassDecl):
            declared.add(node.cls.name)
        elif isinstance(node, n.EnumDecl):
            declared.add(node.name)
        elif isinstance(node, n.ForEach) and node.declared:
            declared.update(pattern_names(node.target))
        elif isinstance(node, n.Try):
            declared.update(pattern_names(node.param))
    return declared


def assigned_names(roots: Iterable[n.Node], into_functions: bool = False) -> set[str]:
    """Names rebound by assignment, ``++``/``--`` or an undeclared loop target."""
    assigned: set[str] = set()
    for node in walk(roots, into_functions):
        if isinstance(node, n.Assign):
            assigned.update(pattern_names(node.target))
        elif isinstance(node, n.Update) and isinstance(node.target, n.Ident):
            assigned.add(node.target.name)
        elif isinstance(node, n.ForEach) and not node.declared:
            assigned.update(pattern_names(node.target))
    return assigned


def referenced_names(root: n.Node) -> set[str]:
    return {node.name for node in walk([root]) if isinstance(node, n.Ident)}


def contains_continue(body: n.Node) -> bool:
    """True if *body* has a ``continue`` that targets the loop owning *body*."""
    stack = [body]
    while stack:
        node = stack.pop()
        if isinstance(node, n.Continue):
            return True
        if isinstance(node, (n.Func, n.ClassDef) + _LOOPS):
            continue
        stack.extend(iter_children(node))
    return False
