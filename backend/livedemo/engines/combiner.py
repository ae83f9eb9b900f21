"""
Multi-file combiner: joins demo files into one compilation unit.

Helper files come first in their given order and the entry file last, so
every class the entry file refers to is already declared when it runs.
"""

from collections.abc import Sequence

from .models import SourceUnit

_SEPARATOR = "\n\n"


def entry_name(units: Sequence[SourceUnit]) -> str | None:
    """The unit flagged as entry, else the first unit; None for no units."""
    for unit in units:
        if unit.is_entry:
            return unit.name
    return units[0].name if units else None


def combine(units: Sequence[SourceUnit], entry: str | None) -> str:
    """Concatenate every script unit except *entry*, then the entry unit.

    Files with other extensions (css, json, ...) are not source and are
    skipped; see ``SourceUnit.is_source``. The entry unit is appended whatever its extension; an unknown
    *entry* simply contributes nothing.
    """
    parts = [u.content + _SEPARATOR for u in units if u.name != entry and u.is_source]
    for unit in units:
        if unit.name == entry:
            parts.append(unit.content)
            break
    return "".join(parts)
