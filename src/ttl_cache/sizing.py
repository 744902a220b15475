"""Approximate byte footprints of cached values.

Estimates are derived from a serialized form of the value, not from the
interpreter's allocator. They only need to grow with the real size so the
store's capacity accounting stays sane. Estimators never raise: anything
that cannot be serialized gets a fixed fallback size.
"""

from __future__ import annotations

import json
import pickle
from typing import Any


class JsonSizeEstimator:
    # JSON text length times the width of one character (UTF-16 by default)
    def __init__(self, *, bytes_per_char: int = 2, fallback_bytes: int = 1024) -> None:
        self._bytes_per_char = max(1, int(bytes_per_char))
        self._fallback_bytes = max(0, int(fallback_bytes))

    def estimate(self, value: Any) -> int:
        try:
            text = json.dumps(value)
        except Exception:
            # Circular structures, sets, handles and other non-JSON values
            return self._fallback_bytes
        return len(text) * self._bytes_per_char


class PickleSizeEstimator:
    # Pickled byte length; handles sets, bytes and dataclasses that JSON rejects
    def __init__(self, *, fallback_bytes: int = 1024) -> None:
        self._fallback_bytes = max(0, int(fallback_bytes))

    def estimate(self, value: Any) -> int:
        try:
            return len(pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL))
        except Exception:
            # Unpicklable handles, or a __reduce__ that raises
            return self._fallback_bytes
