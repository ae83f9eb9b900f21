"""
Identifier mapping between script source and generated Python.

Script identifiers are rewritten only when Python (or the sandbox) cannot
use them as-is. The mapping is applied the same way wherever a name occurs,
so declarations and uses always agree.
"""

import keyword

# Runtime helper namespace and the catch-all rest parameter of generated functions.
RUNTIME = "jsrt"
REST_ARGS = "jsextra"

# Names the generated code refers to unqualified.
GENERATED_NAMES = frozenset(
    {"self", "super", "property", "staticmethod", "Exception", RUNTIME, REST_ARGS}
)
# Rejected by the sandbox compiler as variable/function names.
SANDBOX_FORBIDDEN = frozenset({"print", "printed", "exec", "eval", "compile"})
# Prefix of temporaries and hoisted functions created by the code generator.
TEMP_PREFIX = "js_"

_PY_KEYWORDS = frozenset(keyword.kwlist)


def is_reserved_identifier(name: str) -> bool:
    return (
        name in _PY_KEYWORDS
        or name in GENERATED_NAMES
        or name in SANDBOX_FORBIDDEN
        or name.startswith(TEMP_PREFIX)
    )


def _clean(name: str) -> str:
    name = name.replace("$", "S_")
    if name.startswith("_"):
        name = "u" + name
    return name


def ident_name(name: str) -> str:
    """Python name for a script variable, function, class or parameter."""
    name = _clean(name)
    if is_reserved_identifier(name):
        name += "_"
    return name


def member_name(name: str) -> str:
    """Python attribute name for a class member or property (``#x`` -> ``priv_x``)."""
    if name.startswith("#"):
        name = "priv_" + name[1:]
    name = _clean(name)
    if name in _PY_KEYWORDS or name in SANDBOX_FORBIDDEN:
        name += "_"
    return name


def needs_member_mangling(name: str) -> bool:
    return member_name(name) != name


def source_name(py_name: str) -> str:
    """Best-effort inverse of ``ident_name`` for error messages."""
    if py_name.endswith("_") and is_reserved_identifier(py_name[:-1]):
        return py_name[:-1]
    return py_name
