"""
JavaScript semantics for transpiled demo scripts.

Generated code reaches these helpers through the ``jsrt`` namespace and the
sandbox guard hooks (``js_getattr``, ``js_getitem``, ``js_write``). The JS
globals a script expects (``console``, ``Math``, ``JSON`` ...) are built by
``js_globals``.

``null`` and ``undefined`` are both ``None``; only a literal ``typeof null``
is told apart, at compile time.
"""

import functools
import json
import logging
import math
import random
import re
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from types import BuiltinFunctionType, FunctionType, MethodType, ModuleType, SimpleNamespace
from typing import Any

from RestrictedPython.Guards import safer_getattr

from livedemo.tsc.names import member_name, source_name

_log = logging.getLogger(__name__)

CONSOLE_LOGGER = "livedemo.engines.runtime.console"
# ``__name__`` of the sandbox globals; classes a script defines carry it as ``__module__``.
SCRIPT_MODULE = "livedemo_script"


# -- errors --------------------------------------------------------------------


class JSError(Exception):
    """``Error`` as seen by scripts; script classes may extend it."""

    name = "Error"

    def __init__(self, message: Any = None, *extra: Any) -> None:
        text = "" if message is None else to_str(message)
        super().__init__(text)
        self.message = text

    def toString(self, *extra: Any) -> str:
        return f"{self.name}: {self.message}" if self.message else self.name


class JSTypeError(JSError):
    name = "TypeError"


class JSReferenceError(JSError):
    name = "ReferenceError"


class JSRangeError(JSError):
    name = "RangeError"


class JSSyntaxError(JSError):
    name = "SyntaxError"


class JSThrown(Exception):
    """Carries a thrown value that is not an error object (``throw "msg"``)."""

    def __init__(self, value: Any) -> None:
        super().__init__(to_str(value))
        self.value = value


_NAME_ERROR_RE = re.compile(r"name '(\w+)' is not defined")
_UNBOUND_RE = re.compile(r"local variable '(\w+)'")


def error_message(exc: BaseException) -> str:
    """Display message of an exception raised by script code, in JS wording."""
    if isinstance(exc, JSThrown):
        return to_str(exc.value)
    if isinstance(exc, JSError):
        return exc.message or exc.name
    if isinstance(exc, UnboundLocalError):
        match = _UNBOUND_RE.search(str(exc))
        if match:
            return f"Cannot access '{source_name(match.group(1))}' before initialization"
    if isinstance(exc, NameError):
        name = getattr(exc, "name", None)
        if not name:
            match = _NAME_ERROR_RE.search(str(exc))
            name = match.group(1) if match else None
        if name:
            return f"{source_name(name)} is not defined"
    if isinstance(exc, RecursionError):
        return "Maximum call stack size exceeded"
    text = str(exc)
    if isinstance(exc, TypeError):
        if "'NoneType' object is not callable" in text:
            return "undefined is not a function"
        if "'NoneType' object is not iterable" in text:
            return "undefined is not iterable"
    return text or type(exc).__name__


def caught(exc: BaseException) -> Any:
    """The value a ``catch (e)`` clause binds for *exc*."""
    if isinstance(exc, JSThrown):
        return exc.value
    if isinstance(exc, JSError):
        return exc
    if isinstance(exc, NameError):
        return JSReferenceError(error_message(exc))
    if isinstance(exc, RecursionError):
        return JSRangeError(error_message(exc))
    if isinstance(exc, (TypeError, AttributeError)):
        return JSTypeError(error_message(exc))
    return JSError(error_message(exc))


def throwable(value: Any) -> BaseException:
    if isinstance(value, BaseException):
        return value
    return JSThrown(value)


# -- conversions ---------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def number_str(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        power = int(exponent)
        return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"
    return text


def to_str(value: Any) -> str:
    """``String(value)``."""
    if value is None:
        return "undefined"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return value
    if _is_number(value):
        return number_str(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_str(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    if isinstance(value, JSError):
        return value.toString()
    if isinstance(value, type):
        return f"class {value.__name__}"
    if isinstance(value, BaseException):
        return f"Error: {error_message(value)}"
    to_string = getattr(value, "toString", None)
    if callable(to_string):
        return to_str(to_string())
    if callable(value):
        return "function () { [native code] }"
    return "[object Object]"


_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?)$")


def to_num(value: Any = None, *extra: Any) -> int | float:
    """``Number(value)``."""
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return int(value)
    if _is_number(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if text in ("Infinity", "+Infinity"):
            return math.inf
        if text == "-Infinity":
            return -math.inf
        if text[:2].lower() in ("0x", "0o", "0b"):
            try:
                return int(text, 0)
            except ValueError:
                return math.nan
        if _NUMBER_RE.match(text):
            number = float(text)
            return int(number) if number.is_integer() and "." not in text and "e" not in text.lower() else number
        return math.nan
    if isinstance(value, (list, tuple)):
        if not value:
            return 0
        if len(value) == 1:
            return to_num(value[0])
    if isinstance(value, JSDate):
        return value.getTime()
    return math.nan


def truthy(value: Any) -> bool:
    """JavaScript truthiness: only ``undefined``, false, 0, NaN and "" are falsy."""
    if value is None or value is False:
        return False
    if _is_number(value):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def property_key(value: Any) -> str:
    """Key under which ``obj[value]`` is stored on a plain object."""
    return value if isinstance(value, str) else to_str(value)


def _index(key: Any) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, float) and key.is_integer():
        return int(key)
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return None


# -- operators -----------------------------------------------------------------


def add(left: Any, right: Any) -> Any:
    if isinstance(left, str) or isinstance(right, str):
        return to_str(left) + to_str(right)
    if (left is None or isinstance(left, (int, float))) and (right is None or isinstance(right, (int, float))):
        if left is None or right is None:
            return math.nan
        return left + right
    return to_str(left) + to_str(right)


def div(left: Any, right: Any) -> int | float:
    a, b = to_num(left), to_num(right)
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1, b)
    if isinstance(a, int) and isinstance(b, int) and a % b == 0:
        return a // b
    return a / b


def mod(left: Any, right: Any) -> int | float:
    a, b = to_num(left), to_num(right)
    if b == 0 or math.isnan(a) or math.isnan(b) or math.isinf(a):
        return math.nan
    if isinstance(a, int) and isinstance(b, int):
        remainder = abs(a) % abs(b)
        return -remainder if a < 0 else remainder
    return math.fmod(a, b)


def _uint32(value: Any) -> int:
    number = to_num(value)
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number) & 0xFFFFFFFF


def _int32(value: Any) -> int:
    number = _uint32(value)
    return number - 0x100000000 if number >= 0x80000000 else number


def bitand(left: Any, right: Any) -> int:
    return _int32(left) & _int32(right)


def bitor(left: Any, right: Any) -> int:
    return _int32(left) | _int32(right)


def bitxor(left: Any, right: Any) -> int:
    return _int32(left) ^ _int32(right)


def bitnot(value: Any) -> int:
    return ~_int32(value)


def lshift(left: Any, right: Any) -> int:
    return _int32(_int32(left) << (_uint32(right) & 31))


def rshift(left: Any, right: Any) -> int:
    return _int32(left) >> (_uint32(right) & 31)


def urshift(left: Any, right: Any) -> int:
    return _uint32(left) >> (_uint32(right) & 31)


def typeof(value: Any) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if _is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if callable(value) and not isinstance(value, _Namespace):
        return "function"
    return "object"


def instanceof(value: Any, cls: Any) -> bool:
    if cls is ARRAY:
        return isinstance(value, (list, tuple))
    if cls is OBJECT:
        return value is not None and not isinstance(value, (str, int, float, bool))
    if cls in (STRING, NUMBER, BOOLEAN):
        return False
    if isinstance(cls, type):
        return isinstance(value, cls)
    raise TypeError("Right-hand side of 'instanceof' is not callable")


def has(obj: Any, key: Any) -> bool:
    """``key in obj``."""
    if obj is None or isinstance(obj, (str, int, float, bool)):
        raise TypeError(f"Cannot use 'in' operator to search for '{to_str(key)}' in {to_str(obj)}")
    if isinstance(obj, dict):
        return property_key(key) in obj
    if isinstance(obj, (list, tuple)):
        index = _index(key)
        return key == "length" or (index is not None and 0 <= index < len(obj))
    name = member_name(property_key(key))
    return not name.startswith("_") and hasattr(obj, name)


def delete(obj: Any, key: Any) -> bool:
    if obj is None:
        raise TypeError(f"Cannot convert undefined or null to object")
    if isinstance(obj, dict):
        obj.pop(property_key(key), None)
        return True
    if isinstance(obj, list):
        index = _index(key)
        if index is not None and 0 <= index < len(obj):
            obj[index] = None
        return True
    check_writable(obj)
    name = member_name(property_key(key))
    if name in getattr(obj, "__dict__", {}):
        delattr(obj, name)
    return True


def void(*values: Any) -> None:
    return None


def strict_eq(left: Any, right: Any) -> bool:
    """``left === right``: primitives by value, everything else by identity."""
    if isinstance(left, bool) or isinstance(right, bool):
        return left is right
    if _is_number(left) and _is_number(right):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return left is right


def _to_primitive(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return to_str(value)


def loose_eq(left: Any, right: Any) -> bool:
    """``left == right`` with the JS conversions between primitives."""
    if left is None or right is None:
        return left is right
    if type(left) is type(right) or (_is_number(left) and _is_number(right)):
        return strict_eq(left, right)
    primitives = (bool, int, float, str)
    if not isinstance(left, primitives) and not isinstance(right, primitives):
        return left is right
    left, right = _to_primitive(left), _to_primitive(right)
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return to_num(left) == to_num(right)


def logical_and(value: Any, rest: Callable[[], Any]) -> Any:
    return rest() if truthy(value) else value


def logical_or(value: Any, rest: Callable[[], Any]) -> Any:
    return value if truthy(value) else rest()


def coalesce(value: Any, fallback: Callable[[], Any]) -> Any:
    return fallback() if value is None else value


def chain(value: Any, rest: Callable[[Any], Any]) -> Any:
    """One optional link: ``value?.rest``."""
    return None if value is None else rest(value)


def last(*values: Any) -> Any:
    return values[-1]


def concat(*parts: Any) -> str:
    return "".join(to_str(part) for part in parts)


def array(items: Any) -> list:
    return list(items)


# -- objects -------------------------------------------------------------------


def _own_attributes(obj: Any) -> dict[str, Any]:
    attrs = getattr(obj, "__dict__", None)
    if attrs is None:
        return {}
    return {source_key(name): value for name, value in attrs.items() if not name.startswith("_")}


def source_key(attr: str) -> str:
    """Inverse of ``member_name`` for attribute names set by generated code."""
    if attr.startswith("priv_"):
        return "#" + attr[5:]
    if attr.startswith("u_"):
        attr = attr[1:]
    return attr.replace("S_", "$")


def own(obj: Any) -> dict[str, Any]:
    """Own enumerable properties, for ``{...obj}`` and ``Object.keys``."""
    if obj is None or isinstance(obj, (bool, int, float)):
        return {}
    if isinstance(obj, dict):
        return obj
    if isinstance(obj, (list, tuple, str)):
        return {str(i): item for i, item in enumerate(obj)}
    return {key: value for key, value in _own_attributes(obj).items() if not key.startswith("#")}


def for_in_keys(obj: Any) -> list[str]:
    return list(own(obj))


def rest_object(obj: Any, used: list[Any]) -> dict[str, Any]:
    skip = {property_key(key) for key in used}
    return {key: value for key, value in own(obj).items() if key not in skip}


def slice_from(items: Any, start: int) -> list:
    if items is None:
        raise TypeError("undefined is not iterable")
    return list(items)[start:]


def get(obj: Any, key: Any) -> Any:
    """Property read by source name (``obj.class``, ``obj._x``, destructuring)."""
    if obj is None:
        raise TypeError(f"Cannot read properties of undefined (reading '{to_str(key)}')")
    if isinstance(obj, dict):
        return js_getattr(obj, property_key(key))
    if isinstance(obj, (list, tuple, str)):
        return js_getitem(obj, key)
    return js_getattr(obj, member_name(property_key(key)))


def put(obj: Any, key: Any, value: Any) -> None:
    """Property write by source name or computed key."""
    if obj is None:
        raise TypeError(f"Cannot set properties of undefined (setting '{to_str(key)}')")
    if isinstance(obj, dict):
        obj[property_key(key)] = value
        return
    if isinstance(obj, list):
        index = _index(key)
        if index is not None:
            if index >= len(obj):
                obj.extend([None] * (index + 1 - len(obj)))
            obj[index] = value
        elif key == "length":
            _set_length(obj, value)
        else:
            raise TypeError(f"Cannot set property '{to_str(key)}' of an array")
        return
    check_writable(obj)
    setattr(obj, member_name(property_key(key)), value)


def _set_length(items: list, value: Any) -> None:
    length = _index(value)
    if length is None or length < 0:
        raise JSRangeError("Invalid array length")
    if length < len(items):
        del items[length:]
    else:
        items.extend([None] * (length - len(items)))


class _Namespace:
    """Base of the read-only JS global objects (``Math``, ``JSON`` ...)."""

    def __repr__(self) -> str:
        return f"[object {type(self).__name__.lstrip('_')}]"


_READ_ONLY_TYPES = (
    ModuleType,
    SimpleNamespace,
    FunctionType,
    BuiltinFunctionType,
    MethodType,
    functools.partial,
    _Namespace,
)


def check_writable(obj: Any) -> None:
    """Scripts may write to containers, to instances, and to classes they defined."""
    if isinstance(obj, type):
        if obj.__module__ != SCRIPT_MODULE:
            raise TypeError(f"Cannot assign to read only class '{obj.__name__}'")
        return
    if isinstance(obj, _READ_ONLY_TYPES) or type(obj).__module__ == "builtins":
        raise TypeError(f"Cannot assign to read only object '{to_str(obj)}'")


# -- member access (sandbox guards) -------------------------------------------


def js_getattr(obj: Any, name: str, default: Any = None) -> Any:
    """``_getattr_`` of the sandbox: ``obj.name`` with JS semantics."""
    if obj is None:
        raise TypeError(f"Cannot read properties of undefined (reading '{name}')")
    if isinstance(obj, dict):
        if name in obj:
            return obj[name]
        method = OBJECT_METHODS.get(name)
        return functools.partial(method, obj) if method else None
    if isinstance(obj, (list, tuple)):
        if name == "length":
            return len(obj)
        method = ARRAY_METHODS.get(name)
        return functools.partial(method, obj) if method else None
    if isinstance(obj, str):
        if name == "length":
            return len(obj)
        method = STRING_METHODS.get(name)
        return functools.partial(method, obj) if method else None
    if isinstance(obj, (bool, int, float)):
        method = (BOOLEAN_METHODS if isinstance(obj, bool) else NUMBER_METHODS).get(name)
        return functools.partial(method, obj) if method else None
    if name == "constructor" and not isinstance(obj, type):
        return type(obj)
    if name == "name" and isinstance(obj, type) and "name" not in obj.__dict__:
        return obj.__name__
    value = safer_getattr(obj, name, default)
    if value is None and callable(obj):
        method = FUNCTION_METHODS.get(name)
        if method:
            return functools.partial(method, obj)
    return value


def js_getitem(obj: Any, key: Any) -> Any:
    """``_getitem_`` of the sandbox: ``obj[key]`` with JS semantics."""
    if obj is None:
        raise TypeError(f"Cannot read properties of undefined (reading '{to_str(key)}')")
    if isinstance(obj, dict):
        return obj.get(property_key(key))
    if isinstance(obj, (list, tuple, str)):
        index = _index(key)
        if index is not None:
            return obj[index] if 0 <= index < len(obj) else None
        if isinstance(key, str):
            return js_getattr(obj, key)
        return None
    name = member_name(property_key(key))
    if name.startswith("_"):
        return None
    return js_getattr(obj, name)


def js_iter(obj: Any) -> Any:
    """``_getiter_`` of the sandbox: for-of accepts arrays, strings and iterators."""
    if obj is None:
        raise TypeError("undefined is not iterable")
    if isinstance(obj, dict):
        raise TypeError("object is not iterable")
    return iter(obj)


class JSWrite:
    """``_write_`` of the sandbox: routes ``obj.x = v`` / ``obj[k] = v`` through ``put``."""

    __slots__ = ("_target",)

    def __init__(self, target: Any) -> None:
        object.__setattr__(self, "_target", target)

    def __setattr__(self, name: str, value: Any) -> None:
        target = self._target
        if isinstance(target, (dict, list)):
            put(target, name, value)
            return
        check_writable(target)
        setattr(target, name, value)

    def __delattr__(self, name: str) -> None:
        delete(self._target, name)

    def __setitem__(self, key: Any, value: Any) -> None:
        put(self._target, key, value)

    def __delitem__(self, key: Any) -> None:
        delete(self._target, key)


# -- built-in methods ----------------------------------------------------------


def _call(fn: Any, *args: Any) -> Any:
    if not callable(fn):
        raise TypeError(f"{to_str(fn)} is not a function")
    return fn(*args)


def _relative(position: Any, length: int, default: int) -> int:
    if position is None:
        return default
    number = to_num(position)
    if math.isnan(number):
        return 0
    if math.isinf(number):
        return length if number > 0 else 0
    number = int(number)
    return max(length + number, 0) if number < 0 else min(number, length)


def _a_push(items: list, *values: Any) -> int:
    items.extend(values)
    return len(items)


def _a_pop(items: list, *extra: Any) -> Any:
    return items.pop() if items else None


def _a_shift(items: list, *extra: Any) -> Any:
    return items.pop(0) if items else None


def _a_unshift(items: list, *values: Any) -> int:
    items[0:0] = values
    return len(items)


def _a_slice(items: list, start: Any = None, end: Any = None, *extra: Any) -> list:
    length = len(items)
    return list(items[_relative(start, length, 0) : _relative(end, length, length)])


def _a_splice(items: list, start: Any = None, count: Any = None, *values: Any) -> list:
    length = len(items)
    begin = _relative(start, length, 0)
    if count is None:
        stop = length if start is not None else begin
    else:
        stop = begin + max(int(to_num(count)), 0)
    removed = items[begin:stop]
    items[begin:stop] = values
    return removed


def _a_concat(items: list, *others: Any) -> list:
    out = list(items)
    for other in others:
        if isinstance(other, (list, tuple)):
            out.extend(other)
        else:
            out.append(other)
    return out


def _a_join(items: list, separator: Any = None, *extra: Any) -> str:
    sep = "," if separator is None else to_str(separator)
    return sep.join("" if item is None else to_str(item) for item in items)


def _a_index_of(items: list, value: Any, start: Any = None, *extra: Any) -> int:
    for i in range(_relative(start, len(items), 0), len(items)):
        if items[i] == value and type(items[i]) is type(value):
            return i
    return -1


def _a_last_index_of(items: list, value: Any, *extra: Any) -> int:
    for i in range(len(items) - 1, -1, -1):
        if items[i] == value and type(items[i]) is type(value):
            return i
    return -1


def _a_includes(items: list, value: Any, *extra: Any) -> bool:
    return _a_index_of(items, value) >= 0


def _a_map(items: list, fn: Any, *extra: Any) -> list:
    return [_call(fn, item, i, items) for i, item in enumerate(list(items))]


def _a_filter(items: list, fn: Any, *extra: Any) -> list:
    return [item for i, item in enumerate(list(items)) if truthy(_call(fn, item, i, items))]


def _a_for_each(items: list, fn: Any, *extra: Any) -> None:
    for i, item in enumerate(list(items)):
        _call(fn, item, i, items)


_NO_INITIAL = object()


def _a_reduce(items: list, fn: Any, initial: Any = _NO_INITIAL, *extra: Any) -> Any:
    values = list(items)
    if initial is _NO_INITIAL:
        if not values:
            raise TypeError("Reduce of empty array with no initial value")
        acc, start = values[0], 1
    else:
        acc, start = initial, 0
    for i in range(start, len(values)):
        acc = _call(fn, acc, values[i], i, items)
    return acc


def _a_reduce_right(items: list, fn: Any, initial: Any = _NO_INITIAL, *extra: Any) -> Any:
    return _a_reduce(list(reversed(items)), fn, initial)


def _a_find(items: list, fn: Any, *extra: Any) -> Any:
    for i, item in enumerate(items):
        if truthy(_call(fn, item, i, items)):
            return item
    return None


def _a_find_index(items: list, fn: Any, *extra: Any) -> int:
    for i, item in enumerate(items):
        if truthy(_call(fn, item, i, items)):
            return i
    return -1


def _a_find_last(items: list, fn: Any, *extra: Any) -> Any:
    for i in range(len(items) - 1, -1, -1):
        if truthy(_call(fn, items[i], i, items)):
            return items[i]
    return None


def _a_find_last_index(items: list, fn: Any, *extra: Any) -> int:
    for i in range(len(items) - 1, -1, -1):
        if truthy(_call(fn, items[i], i, items)):
            return i
    return -1


def _a_some(items: list, fn: Any, *extra: Any) -> bool:
    return any(truthy(_call(fn, item, i, items)) for i, item in enumerate(items))


def _a_every(items: list, fn: Any, *extra: Any) -> bool:
    return all(truthy(_call(fn, item, i, items)) for i, item in enumerate(items))


def _a_sort(items: list, compare: Any = None, *extra: Any) -> list:
    present = [item for item in items if item is not None]
    missing = len(items) - len(present)
    if compare is None:
        present.sort(key=to_str)
    else:
        def cmp(a: Any, b: Any) -> int:
            result = to_num(_call(compare, a, b))
            return 0 if math.isnan(result) else (result > 0) - (result < 0)

        present.sort(key=functools.cmp_to_key(cmp))
    items[:] = present + [None] * missing
    return items


def _a_reverse(items: list, *extra: Any) -> list:
    items.reverse()
    return items


def _flatten(items: Any, depth: int) -> list:
    out: list = []
    for item in items:
        if isinstance(item, (list, tuple)) and depth > 0:
            out.extend(_flatten(item, depth - 1))
        else:
            out.append(item)
    return out


def _a_flat(items: list, depth: Any = 1, *extra: Any) -> list:
    number = to_num(depth)
    return _flatten(items, 10**6 if math.isinf(number) else int(number))


def _a_flat_map(items: list, fn: Any, *extra: Any) -> list:
    return _flatten(_a_map(items, fn), 1)


def _a_fill(items: list, value: Any, start: Any = None, end: Any = None, *extra: Any) -> list:
    length = len(items)
    for i in range(_relative(start, length, 0), _relative(end, length, length)):
        items[i] = value
    return items


def _a_at(items: Any, position: Any = 0, *extra: Any) -> Any:
    index = int(to_num(position))
    if index < 0:
        index += len(items)
    return items[index] if 0 <= index < len(items) else None


def _a_keys(items: list, *extra: Any) -> list:
    return list(range(len(items)))


def _a_values(items: list, *extra: Any) -> list:
    return list(items)


def _a_entries(items: list, *extra: Any) -> list:
    return [[i, item] for i, item in enumerate(items)]


ARRAY_METHODS: dict[str, Callable[..., Any]] = {
    "push": _a_push,
    "pop": _a_pop,
    "shift": _a_shift,
    "unshift": _a_unshift,
    "slice": _a_slice,
    "splice": _a_splice,
    "concat": _a_concat,
    "join": _a_join,
    "indexOf": _a_index_of,
    "lastIndexOf": _a_last_index_of,
    "includes": _a_includes,
    "map": _a_map,
    "filter": _a_filter,
    "forEach": _a_for_each,
    "reduce": _a_reduce,
    "reduceRight": _a_reduce_right,
    "find": _a_find,
    "findIndex": _a_find_index,
    "findLast": _a_find_last,
    "findLastIndex": _a_find_last_index,
    "some": _a_some,
    "every": _a_every,
    "sort": _a_sort,
    "reverse": _a_reverse,
    "flat": _a_flat,
    "flatMap": _a_flat_map,
    "fill": _a_fill,
    "at": _a_at,
    "keys": _a_keys,
    "values": _a_values,
    "entries": _a_entries,
    "toString": lambda items, *extra: _a_join(items),
}


def _s_char_at(text: str, position: Any = 0, *extra: Any) -> str:
    index = int(to_num(position) or 0)
    return text[index] if 0 <= index < len(text) else ""


def _s_char_code_at(text: str, position: Any = 0, *extra: Any) -> int | float:
    index = int(to_num(position) or 0)
    return ord(text[index]) if 0 <= index < len(text) else math.nan


def _s_index_of(text: str, search: Any, start: Any = None, *extra: Any) -> int:
    return text.find(to_str(search), _relative(start, len(text), 0))


def _s_last_index_of(text: str, search: Any, *extra: Any) -> int:
    return text.rfind(to_str(search))


def _s_includes(text: str, search: Any, start: Any = None, *extra: Any) -> bool:
    return to_str(search) in text[_relative(start, len(text), 0) :]


def _s_starts_with(text: str, search: Any, start: Any = None, *extra: Any) -> bool:
    return text.startswith(to_str(search), _relative(start, len(text), 0))


def _s_ends_with(text: str, search: Any, end: Any = None, *extra: Any) -> bool:
    return text[: _relative(end, len(text), len(text))].endswith(to_str(search))


def _s_slice(text: str, start: Any = None, end: Any = None, *extra: Any) -> str:
    length = len(text)
    return text[_relative(start, length, 0) : _relative(end, length, length)]


def _s_substring(text: str, start: Any = None, end: Any = None, *extra: Any) -> str:
    length = len(text)

    def clamp(value: Any, default: int) -> int:
        if value is None:
            return default
        number = to_num(value)
        return 0 if math.isnan(number) else int(min(max(number, 0), length))

    a, b = clamp(start, 0), clamp(end, length)
    return text[min(a, b) : max(a, b)]


def _s_substr(text: str, start: Any = None, count: Any = None, *extra: Any) -> str:
    begin = _relative(start, len(text), 0)
    if count is None:
        return text[begin:]
    return text[begin : begin + max(int(to_num(count)), 0)]


def _s_pad(text: str, length: Any, fill: Any, at_start: bool) -> str:
    target = int(to_num(length))
    filler = " " if fill is None else to_str(fill)
    missing = target - len(text)
    if missing <= 0 or not filler:
        return text
    padding = (filler * (missing // len(filler) + 1))[:missing]
    return padding + text if at_start else text + padding


def _s_split(text: str, separator: Any = None, limit: Any = None, *extra: Any) -> list[str]:
    if separator is None:
        parts = [text]
    elif separator == "":
        parts = list(text)
    else:
        parts = text.split(to_str(separator))
    return parts if limit is None else parts[: int(to_num(limit))]


def _s_replace(text: str, search: Any, replacement: Any, *extra: Any) -> str:
    needle = to_str(search)
    position = text.find(needle)
    if position < 0:
        return text
    value = to_str(_call(replacement, needle, position, text)) if callable(replacement) else to_str(replacement)
    return text[:position] + value + text[position + len(needle) :]


def _s_replace_all(text: str, search: Any, replacement: Any, *extra: Any) -> str:
    needle = to_str(search)
    if callable(replacement):
        pieces = text.split(needle)
        out = pieces[0]
        position = len(pieces[0])
        for piece in pieces[1:]:
            out += to_str(_call(replacement, needle, position, text)) + piece
            position += len(needle) + len(piece)
        return out
    return text.replace(needle, to_str(replacement))


def _s_repeat(text: str, count: Any = 0, *extra: Any) -> str:
    times = int(to_num(count))
    if times < 0:
        raise JSRangeError(f"Invalid count value: {times}")
    return text * times


def _s_locale_compare(text: str, other: Any, *extra: Any) -> int:
    other_text = to_str(other)
    return (text > other_text) - (text < other_text)


STRING_METHODS: dict[str, Callable[..., Any]] = {
    "charAt": _s_char_at,
    "charCodeAt": _s_char_code_at,
    "codePointAt": _s_char_code_at,
    "indexOf": _s_index_of,
    "lastIndexOf": _s_last_index_of,
    "includes": _s_includes,
    "startsWith": _s_starts_with,
    "endsWith": _s_ends_with,
    "slice": _s_slice,
    "substring": _s_substring,
    "substr": _s_substr,
    "toUpperCase": lambda text, *extra: text.upper(),
    "toLowerCase": lambda text, *extra: text.lower(),
    "toLocaleUpperCase": lambda text, *extra: text.upper(),
    "toLocaleLowerCase": lambda text, *extra: text.lower(),
    "trim": lambda text, *extra: text.strip(),
    "trimStart": lambda text, *extra: text.lstrip(),
    "trimEnd": lambda text, *extra: text.rstrip(),
    "padStart": lambda text, length=0, fill=None, *extra: _s_pad(text, length, fill, True),
    "padEnd": lambda text, length=0, fill=None, *extra: _s_pad(text, length, fill, False),
    "repeat": _s_repeat,
    "split": _s_split,
    "replace": _s_replace,
    "replaceAll": _s_replace_all,
    "concat": lambda text, *parts: text + "".join(to_str(p) for p in parts),
    "at": _a_at,
    "localeCompare": _s_locale_compare,
    "normalize": lambda text, *extra: text,
    "toString": lambda text, *extra: text,
    "valueOf": lambda text, *extra: text,
}


def _n_to_fixed(number: int | float, digits: Any = 0, *extra: Any) -> str:
    places = int(to_num(digits) or 0)
    if isinstance(number, float) and (math.isnan(number) or math.isinf(number)):
        return number_str(number)
    return f"{number:.{places}f}"


def _n_to_string(number: int | float, radix: Any = None, *extra: Any) -> str:
    base = 10 if radix is None else int(to_num(radix))
    if base == 10 or not (isinstance(number, int) or number.is_integer()):
        return number_str(number)
    value = int(number)
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value == 0:
        return "0"
    out = ""
    magnitude = abs(value)
    while magnitude:
        magnitude, remainder = divmod(magnitude, base)
        out = digits[remainder] + out
    return "-" + out if value < 0 else out


def _n_to_locale_string(number: int | float, *extra: Any) -> str:
    if isinstance(number, int) or number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


NUMBER_METHODS: dict[str, Callable[..., Any]] = {
    "toFixed": _n_to_fixed,
    "toString": _n_to_string,
    "toLocaleString": _n_to_locale_string,
    "toPrecision": lambda number, precision=None, *extra: (
        number_str(number) if precision is None else f"{number:.{int(to_num(precision))}g}"
    ),
    "valueOf": lambda number, *extra: number,
}

BOOLEAN_METHODS: dict[str, Callable[..., Any]] = {
    "toString": lambda value, *extra: to_str(value),
    "valueOf": lambda value, *extra: value,
}

OBJECT_METHODS: dict[str, Callable[..., Any]] = {
    "hasOwnProperty": lambda obj, key=None, *extra: property_key(key) in obj,
    "toString": lambda obj, *extra: "[object Object]",
    "valueOf": lambda obj, *extra: obj,
}

FUNCTION_METHODS: dict[str, Callable[..., Any]] = {
    "call": lambda fn, this=None, *args: fn(*args),
    "apply": lambda fn, this=None, args=None, *extra: fn(*(args or [])),
    "bind": lambda fn, this=None, *args: functools.partial(fn, *args),
}


# -- JS globals ----------------------------------------------------------------


def _math_args(values: tuple) -> list[int | float]:
    return [to_num(v) for v in values]


def _round_half_up(value: Any = None, *extra: Any) -> int | float:
    number = to_num(value)
    if math.isnan(number) or math.isinf(number):
        return number
    return math.floor(number + 0.5)


def _guarded(fn: Callable[[float], float]) -> Callable[..., int | float]:
    def apply(value: Any = None, *extra: Any) -> int | float:
        number = to_num(value)
        if math.isnan(number):
            return math.nan
        try:
            return fn(number)
        except (ValueError, OverflowError):
            return math.nan

    return apply


def _floor(value: Any = None, *extra: Any) -> int | float:
    number = to_num(value)
    return number if math.isnan(number) or math.isinf(number) else math.floor(number)


def _ceil(value: Any = None, *extra: Any) -> int | float:
    number = to_num(value)
    return number if math.isnan(number) or math.isinf(number) else math.ceil(number)


def _trunc(value: Any = None, *extra: Any) -> int | float:
    number = to_num(value)
    return number if math.isnan(number) or math.isinf(number) else math.trunc(number)


def _sign(value: Any = None, *extra: Any) -> int | float:
    number = to_num(value)
    if math.isnan(number):
        return math.nan
    return (number > 0) - (number < 0)


def _max(*values: Any) -> int | float:
    numbers = _math_args(values)
    if any(math.isnan(n) for n in numbers):
        return math.nan
    return max(numbers, default=-math.inf)


def _min(*values: Any) -> int | float:
    numbers = _math_args(values)
    if any(math.isnan(n) for n in numbers):
        return math.nan
    return min(numbers, default=math.inf)


def _pow(base: Any = None, exponent: Any = None, *extra: Any) -> int | float:
    try:
        return to_num(base) ** to_num(exponent)
    except (ZeroDivisionError, OverflowError):
        return math.inf


class _Math(_Namespace):
    PI = math.pi
    E = math.e
    LN2 = math.log(2)
    LN10 = math.log(10)
    LOG2E = 1 / math.log(2)
    LOG10E = 1 / math.log(10)
    SQRT2 = math.sqrt(2)
    SQRT1_2 = math.sqrt(0.5)

    abs = staticmethod(_guarded(abs))
    floor = staticmethod(_floor)
    ceil = staticmethod(_ceil)
    round = staticmethod(_round_half_up)
    trunc = staticmethod(_trunc)
    sign = staticmethod(_sign)
    sqrt = staticmethod(_guarded(math.sqrt))
    cbrt = staticmethod(_guarded(lambda x: math.copysign(abs(x) ** (1 / 3), x)))
    exp = staticmethod(_guarded(math.exp))
    log = staticmethod(_guarded(lambda x: math.log(x) if x > 0 else (-math.inf if x == 0 else math.nan)))
    log10 = staticmethod(_guarded(lambda x: math.log10(x) if x > 0 else (-math.inf if x == 0 else math.nan)))
    log2 = staticmethod(_guarded(lambda x: math.log2(x) if x > 0 else (-math.inf if x == 0 else math.nan)))
    sin = staticmethod(_guarded(math.sin))
    cos = staticmethod(_guarded(math.cos))
    tan = staticmethod(_guarded(math.tan))
    atan = staticmethod(_guarded(math.atan))
    max = staticmethod(_max)
    min = staticmethod(_min)
    pow = staticmethod(_pow)

    @staticmethod
    def atan2(y: Any = None, x: Any = None, *extra: Any) -> float:
        return math.atan2(to_num(y), to_num(x))

    @staticmethod
    def hypot(*values: Any) -> float:
        return math.hypot(*_math_args(values))

    @staticmethod
    def random(*extra: Any) -> float:
        return random.random()


def _json_ready(value: Any) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if _is_number(value):
        if isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                return None
            if value.is_integer():
                return int(value)
        return value
    if isinstance(value, (list, tuple)):
        return [None if callable(item) else _json_ready(item) for item in value]
    if callable(value):
        return None
    to_json = getattr(value, "toJSON", None)
    if callable(to_json) and not isinstance(value, dict):
        return _json_ready(to_json())
    return {key: _json_ready(item) for key, item in own(value).items() if not callable(item)}


class _JSON(_Namespace):
    @staticmethod
    def stringify(value: Any = None, replacer: Any = None, space: Any = None, *extra: Any) -> str | None:
        if value is None or callable(value):
            return None
        indent = None
        if _is_number(space) and space > 0:
            indent = int(min(space, 10))
        elif isinstance(space, str) and space:
            indent = space[:10]
        separators = (",", ": ") if indent is not None else (",", ":")
        return json.dumps(_json_ready(value), indent=indent, separators=separators, ensure_ascii=False)

    @staticmethod
    def parse(text: Any = None, *extra: Any) -> Any:
        try:
            return json.loads(to_str(text))
        except json.JSONDecodeError as exc:
            raise JSSyntaxError(f"Unexpected token in JSON at position {exc.pos}") from None


class _Object(_Namespace):
    @staticmethod
    def keys(obj: Any = None, *extra: Any) -> list[str]:
        return list(own(_require_object(obj)))

    @staticmethod
    def values(obj: Any = None, *extra: Any) -> list:
        return list(own(_require_object(obj)).values())

    @staticmethod
    def entries(obj: Any = None, *extra: Any) -> list[list]:
        return [[key, value] for key, value in own(_require_object(obj)).items()]

    @staticmethod
    def assign(target: Any = None, *sources: Any) -> Any:
        _require_object(target)
        for source in sources:
            for key, value in own(source).items():
                put(target, key, value)
        return target

    @staticmethod
    def fromEntries(entries: Any = None, *extra: Any) -> dict:
        return {property_key(pair[0]): pair[1] for pair in entries or []}

    @staticmethod
    def freeze(obj: Any = None, *extra: Any) -> Any:
        return obj

    @staticmethod
    def hasOwn(obj: Any = None, key: Any = None, *extra: Any) -> bool:
        return property_key(key) in own(_require_object(obj))


def _require_object(obj: Any) -> Any:
    if obj is None:
        raise TypeError("Cannot convert undefined or null to object")
    return obj


class _Array(_Namespace):
    def __call__(self, *items: Any) -> list:
        if len(items) == 1 and _is_number(items[0]):
            return [None] * int(items[0])
        return list(items)

    @staticmethod
    def isArray(value: Any = None, *extra: Any) -> bool:
        return isinstance(value, (list, tuple))

    @staticmethod
    def of(*items: Any) -> list:
        return list(items)

    @staticmethod
    def from_(source: Any = None, fn: Any = None, *extra: Any) -> list:
        if source is None:
            raise TypeError("undefined is not iterable")
        if isinstance(source, dict):
            length = _index(source.get("length")) or 0
            items = [None] * length
        else:
            items = list(source)
        if fn is None:
            return items
        return [_call(fn, item, i) for i, item in enumerate(items)]


class _String(_Namespace):
    def __call__(self, value: Any = "", *extra: Any) -> str:
        return to_str(value)

    @staticmethod
    def fromCharCode(*codes: Any) -> str:
        return "".join(chr(int(to_num(code))) for code in codes)


def parse_int(value: Any = None, radix: Any = None, *extra: Any) -> int | float:
    text = to_str(value).strip()
    sign = 1
    if text[:1] in "+-" and text:
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    base = int(to_num(radix)) if radix is not None else 0
    if base == 0 or base == 16:
        if text[:2].lower() == "0x":
            text, base = text[2:], 16
    base = base or 10
    if not 2 <= base <= 36:
        return math.nan
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"[:base]
    count = 0
    while count < len(text) and text[count].lower() in digits:
        count += 1
    if count == 0:
        return math.nan
    return sign * int(text[:count], base)


_FLOAT_PREFIX_RE = re.compile(r"^[+-]?(Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)")


def parse_float(value: Any = None, *extra: Any) -> int | float:
    match = _FLOAT_PREFIX_RE.match(to_str(value).strip())
    if not match:
        return math.nan
    text = match.group(0)
    if "Infinity" in text:
        return -math.inf if text.startswith("-") else math.inf
    number = float(text)
    return int(number) if number.is_integer() else number


def is_nan(value: Any = None, *extra: Any) -> bool:
    number = to_num(value)
    return isinstance(number, float) and math.isnan(number)


class _Number(_Namespace):
    MAX_SAFE_INTEGER = 2**53 - 1
    MIN_SAFE_INTEGER = -(2**53 - 1)
    EPSILON = 2.0**-52
    POSITIVE_INFINITY = math.inf
    NEGATIVE_INFINITY = -math.inf
    NaN = math.nan

    def __call__(self, value: Any = 0, *extra: Any) -> int | float:
        return to_num(value)

    parseInt = staticmethod(parse_int)
    parseFloat = staticmethod(parse_float)

    @staticmethod
    def isInteger(value: Any = None, *extra: Any) -> bool:
        return _is_number(value) and math.isfinite(value) and float(value).is_integer()

    @staticmethod
    def isFinite(value: Any = None, *extra: Any) -> bool:
        return _is_number(value) and math.isfinite(value)

    @staticmethod
    def isNaN(value: Any = None, *extra: Any) -> bool:
        return isinstance(value, float) and math.isnan(value)


class _Boolean(_Namespace):
    def __call__(self, value: Any = None, *extra: Any) -> bool:
        return truthy(value)


# -- keyed collections and dates ------------------------------------------------


def _same_value_key(value: Any) -> tuple:
    """Hashable identity of a Map key or Set member: primitives by value, objects by identity."""
    if isinstance(value, bool):
        return ("bool", value)
    if _is_number(value):
        if isinstance(value, float) and math.isnan(value):
            return ("nan",)
        return ("num", value)
    if value is None or isinstance(value, str):
        return ("str", value)
    return ("obj", id(value))


class JSMap:
    """``Map``: insertion-ordered entries; keys compare like ``===`` except that NaN equals NaN."""

    def __init__(self, entries: Any = None, *extra: Any) -> None:
        self._entries: dict[tuple, tuple[Any, Any]] = {}
        if entries is not None:
            for entry in js_iter(entries):
                self.set(js_getitem(entry, 0), js_getitem(entry, 1))

    @property
    def size(self) -> int:
        return len(self._entries)

    def get(self, key: Any = None, *extra: Any) -> Any:
        entry = self._entries.get(_same_value_key(key))
        return entry[1] if entry is not None else None

    def set(self, key: Any = None, value: Any = None, *extra: Any) -> "JSMap":
        self._entries[_same_value_key(key)] = (key, value)
        return self

    def has(self, key: Any = None, *extra: Any) -> bool:
        return _same_value_key(key) in self._entries

    def delete(self, key: Any = None, *extra: Any) -> bool:
        return self._entries.pop(_same_value_key(key), None) is not None

    def clear(self, *extra: Any) -> None:
        self._entries.clear()

    def keys(self, *extra: Any) -> list:
        return [key for key, _value in self._entries.values()]

    def values(self, *extra: Any) -> list:
        return [value for _key, value in self._entries.values()]

    def entries(self, *extra: Any) -> list[list]:
        return [[key, value] for key, value in self._entries.values()]

    def forEach(self, fn: Any, *extra: Any) -> None:
        for key, value in list(self._entries.values()):
            _call(fn, value, key, self)

    def toString(self, *extra: Any) -> str:
        return "[object Map]"

    def __iter__(self):
        return iter(self.entries())


class JSSet:
    """``Set``: insertion-ordered members, compared the way ``JSMap`` compares keys."""

    def __init__(self, items: Any = None, *extra: Any) -> None:
        self._members: dict[tuple, Any] = {}
        if items is not None:
            for item in js_iter(items):
                self.add(item)

    @property
    def size(self) -> int:
        return len(self._members)

    def add(self, value: Any = None, *extra: Any) -> "JSSet":
        self._members.setdefault(_same_value_key(value), value)
        return self

    def has(self, value: Any = None, *extra: Any) -> bool:
        return _same_value_key(value) in self._members

    def delete(self, value: Any = None, *extra: Any) -> bool:
        key = _same_value_key(value)
        if key not in self._members:
            return False
        del self._members[key]
        return True

    def clear(self, *extra: Any) -> None:
        self._members.clear()

    def values(self, *extra: Any) -> list:
        return list(self._members.values())

    keys = values

    def entries(self, *extra: Any) -> list[list]:
        return [[value, value] for value in self._members.values()]

    def forEach(self, fn: Any, *extra: Any) -> None:
        for value in list(self._members.values()):
            _call(fn, value, value, self)

    def toString(self, *extra: Any) -> str:
        return "[object Set]"

    def __iter__(self):
        return iter(self.values())


_NO_TIME = object()
_WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _parse_date(text: str) -> int | float:
    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return math.nan
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


class JSDate:
    """``Date`` as epoch milliseconds. Every calendar field is read and written in UTC."""

    def __init__(self, value: Any = _NO_TIME, *parts: Any) -> None:
        if value is _NO_TIME:
            self._time: int | float = JSDate.now()
        elif parts:
            self._time = self._from_parts(value, *parts)
        elif isinstance(value, JSDate):
            self._time = value._time
        elif isinstance(value, str):
            self._time = _parse_date(value)
        else:
            number = to_num(value)
            self._time = int(number) if math.isfinite(number) else math.nan

    @staticmethod
    def _from_parts(year: Any, month: Any, day: Any = 1, *clock: Any) -> int | float:
        fields = [to_num(year), to_num(month), to_num(day)] + [to_num(c) for c in clock[:4]]
        if not all(math.isfinite(f) for f in fields):
            return math.nan
        year, month, day, *rest = (int(f) for f in fields)
        hours, minutes, seconds, millis = (rest + [0, 0, 0, 0])[:4]
        year += month // 12
        try:
            start = datetime(year, month % 12 + 1, 1, tzinfo=timezone.utc)
        except ValueError:
            return math.nan
        offset = timedelta(days=day - 1, hours=hours, minutes=minutes, seconds=seconds, milliseconds=millis)
        return int((start + offset).timestamp() * 1000)

    @staticmethod
    def now(*extra: Any) -> int:
        return int(time.time() * 1000)

    @staticmethod
    def parse(text: Any = None, *extra: Any) -> int | float:
        return _parse_date(to_str(text))

    def _datetime(self) -> datetime:
        if isinstance(self._time, float):
            raise JSRangeError("Invalid time value")
        return datetime.fromtimestamp(self._time / 1000, tz=timezone.utc)

    def getTime(self, *extra: Any) -> int | float:
        return self._time

    valueOf = getTime

    def _field(self, name: str) -> int | float:
        if isinstance(self._time, float):
            return math.nan
        return getattr(self._datetime(), name)

    def getFullYear(self, *extra: Any) -> int | float:
        return self._field("year")

    def getMonth(self, *extra: Any) -> int | float:
        month = self._field("month")
        return month - 1 if isinstance(month, int) else month

    def getDate(self, *extra: Any) -> int | float:
        return self._field("day")

    def getDay(self, *extra: Any) -> int | float:
        if isinstance(self._time, float):
            return math.nan
        return (self._datetime().weekday() + 1) % 7

    def getHours(self, *extra: Any) -> int | float:
        return self._field("hour")

    def getMinutes(self, *extra: Any) -> int | float:
        return self._field("minute")

    def getSeconds(self, *extra: Any) -> int | float:
        return self._field("second")

    def getMilliseconds(self, *extra: Any) -> int | float:
        return math.nan if isinstance(self._time, float) else self._time % 1000

    def toISOString(self, *extra: Any) -> str:
        moment = self._datetime()
        return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{self._time % 1000:03d}Z"

    def toJSON(self, *extra: Any) -> str | None:
        return None if isinstance(self._time, float) else self.toISOString()

    def toLocaleDateString(self, *extra: Any) -> str:
        if isinstance(self._time, float):
            return "Invalid Date"
        moment = self._datetime()
        return f"{moment.month}/{moment.day}/{moment.year}"

    def toString(self, *extra: Any) -> str:
        if isinstance(self._time, float):
            return "Invalid Date"
        moment = self._datetime()
        weekday = _WEEKDAYS[(moment.weekday() + 1) % 7]
        return f"{weekday} {moment.strftime('%b %d %Y %H:%M:%S')} GMT+0000 (Coordinated Universal Time)"

    def __sub__(self, other: Any) -> int | float:
        return self._time - to_num(other)

    def __rsub__(self, other: Any) -> int | float:
        return to_num(other) - self._time

    def __lt__(self, other: Any) -> bool:
        return self._time < to_num(other)

    def __le__(self, other: Any) -> bool:
        return self._time <= to_num(other)

    def __gt__(self, other: Any) -> bool:
        return self._time > to_num(other)

    def __ge__(self, other: Any) -> bool:
        return self._time >= to_num(other)


MATH = _Math()
JSON_ = _JSON()
OBJECT = _Object()
ARRAY = _Array()
STRING = _String()
NUMBER = _Number()
BOOLEAN = _Boolean()


def _inspect(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(_json_ready(value), ensure_ascii=False)
        except (TypeError, ValueError):
            return to_str(value)
    return to_str(value)


def make_console(*, extra: dict[str, Any] | None = None) -> SimpleNamespace:
    """Build the script's ``console``: log, info, warn, error, debug. *extra* goes to every record."""
    logger = logging.getLogger(CONSOLE_LOGGER)
    ext = dict(extra or {})

    def _emit(level: int, args: tuple) -> None:
        logger.log(level, "%s", " ".join(_inspect(a) for a in args), extra=ext)

    def log(*args: Any) -> None:
        _emit(logging.INFO, args)

    def warn(*args: Any) -> None:
        _emit(logging.WARNING, args)

    def error(*args: Any) -> None:
        _emit(logging.ERROR, args)

    def debug(*args: Any) -> None:
        _emit(logging.DEBUG, args)

    return SimpleNamespace(log=log, info=log, warn=warn, error=error, debug=debug)


def js_globals(console: SimpleNamespace) -> dict[str, Any]:
    """The global object of a script run, minus the compilation scope."""
    return {
        "console": console,
        "Math": MATH,
        "JSON": JSON_,
        "Object": OBJECT,
        "Array": ARRAY,
        "String": STRING,
        "Number": NUMBER,
        "Boolean": BOOLEAN,
        "Error": JSError,
        "TypeError": JSTypeError,
        "ReferenceError": JSReferenceError,
        "RangeError": JSRangeError,
        "SyntaxError": JSSyntaxError,
        "Map": JSMap,
        "Set": JSSet,
        "Date": JSDate,
        "parseInt": parse_int,
        "parseFloat": parse_float,
        "isNaN": is_nan,
        "NaN": math.nan,
        "Infinity": math.inf,
    }


jsrt = SimpleNamespace(
    add=add,
    div=div,
    mod=mod,
    bitand=bitand,
    bitor=bitor,
    bitxor=bitxor,
    bitnot=bitnot,
    lshift=lshift,
    rshift=rshift,
    urshift=urshift,
    num=to_num,
    str=to_str,
    typeof=typeof,
    instanceof=instanceof,
    has=has,
    delete=delete,
    void=void,
    truthy=truthy,
    strict_eq=strict_eq,
    loose_eq=loose_eq,
    logical_and=logical_and,
    logical_or=logical_or,
    coalesce=coalesce,
    chain=chain,
    last=last,
    concat=concat,
    array=array,
    keys=for_in_keys,
    own=own,
    key=property_key,
    get=get,
    put=put,
    rest_object=rest_object,
    slice=slice_from,
    caught=caught,
    throwable=throwable,
)
