"""
Source sanitizer: strips module and type-only syntax before transpiling.

The passes run in a fixed order; later patterns assume the earlier ones have
already removed the constructs that would confuse them. This is a text
transform, not a parser: a pattern occurring inside a string literal or a
comment is rewritten too.
"""

import re

_SANITIZE_PASSES: tuple[tuple[re.Pattern[str], str], ...] = (
    # import { A, B } from "x";   (import lists may span lines)
    (re.compile(r"import\s+[\s\S]*?from\s+['\"][^'\"]+['\"];?\s*"), ""),
    # import "x";
    (re.compile(r"import\s+['\"][^'\"]+['\"];?\s*"), ""),
    # export class A ...  ->  class A ...
    (re.compile(r"export\s+"), ""),
    # interface A { ... }  (single brace level)
    (re.compile(r"interface\s+\w+\s*\{[\s\S]*?\}"), ""),
    # type A = ...;
    (re.compile(r"type\s+\w+\s*=\s*[^;]+;"), ""),
    # type { A, B };  left over from "export type { A, B };"
    (re.compile(r"type\s*\{[^}]*\};?"), ""),
    # value as Type
    (re.compile(r"\s+as\s+\w+"), ""),
)


def _sanitize_once(text: str) -> str:
    for pattern, replacement in _SANITIZE_PASSES:
        text = pattern.sub(replacement, text)
    return text


def sanitize(raw: str) -> str:
    """Return *raw* with imports, exports and type-only syntax removed. Never raises.

    The passes are repeated until the text stops changing, so a removal that
    joins two fragments into a new match (``"expexport ort"``) is handled and
    ``sanitize(sanitize(x)) == sanitize(x)`` for every input. Every pass only
    deletes text, so the loop terminates.
    """
    text = raw
    while True:
        cleaned = _sanitize_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned
