"""
Transpiler adapter: sanitized TypeScript in, Python source out.

Output is cached in an LRU dict keyed by a hash of the input, so re-running
an unchanged demo skips parsing and code generation. Failures are
not cached.
"""

import hashlib
import logging
import threading
from collections import OrderedDict

from livedemo import tsc
from livedemo.core.config import settings

from .errors import TranspileError

_log = logging.getLogger(__name__)

_transpile_cache: OrderedDict[str, str] = OrderedDict()
_cache_lock = threading.Lock()


def _cache_key(source: str) -> str:
    return hashlib.md5(source.encode(), usedforsecurity=False).hexdigest()


def transpile(source: str) -> str:
    """Return Python code equivalent to *source*. Raises TranspileError."""
    key = _cache_key(source)
    with _cache_lock:
        code = _transpile_cache.get(key)
        if code is not None:
            _transpile_cache.move_to_end(key)
            _log.debug("Transpile cache hit (%s)", key)
            return code
    try:
        code = tsc.to_python(source)
    except RecursionError:
        raise TranspileError("Source is nested too deeply") from None
    _log.debug("Transpiled %d chars of source into %d chars of Python", len(source), len(code))
    with _cache_lock:
        _transpile_cache[key] = code
        while len(_transpile_cache) > max(settings.DEMO_TRANSPILE_CACHE_SIZE, 0):
            _transpile_cache.popitem(last=False)
    return code


def clear_cache() -> None:
    with _cache_lock:
        _transpile_cache.clear()
