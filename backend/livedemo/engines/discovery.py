"""
Symbol discovery: which classes of a transpiled script the engine instantiates.

Works on the generated Python text with regular expressions, not on a
syntax tree, so a matching line inside a string literal counts too.
"""

import logging
import re
from collections.abc import Sequence

from .models import Discovery

_log = logging.getLogger(__name__)

DEFAULT_BASES = ("Form", "Page", "Dialog")

# Top-level class without bases whose body assigns a string literal somewhere.
_COMPANION_RE = re.compile(
    r"^class\s+(\w+)\s*:[ \t]*\n((?:[ \t]+[^\n]*\n?|[ \t]*\n)*)",
    re.MULTILINE,
)
_STRING_FIELD_RE = re.compile(r"[^=!<>]=\s*['\"]")


def _primary_pattern(bases: Sequence[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(b) for b in bases)
    return re.compile(rf"^[ \t]*class\s+(\w+)\(\s*(?:{alternatives})\s*[,)]", re.MULTILINE)


def discover(code: str, bases: Sequence[str] = DEFAULT_BASES, companion: bool = False) -> Discovery:
    """
    Find the primary class (last class extending one of *bases*) and, when
    *companion* is set, the companion class (last top-level class whose body
    assigns a string literal). Either may be None.
    """
    primary = None
    if bases:
        for match in _primary_pattern(bases).finditer(code):
            primary = match.group(1)

    companion_name = None
    if companion:
        for match in _COMPANION_RE.finditer(code):
            if match.group(1) != primary and _STRING_FIELD_RE.search(match.group(2)):
                companion_name = match.group(1)

    found = Discovery(primary=primary, companion=companion_name)
    _log.debug("Discovered symbols: %s", [(s.kind, s.name) for s in found.symbols])
    return found
