"""Core protocol definitions.

Defines the SizeEstimator protocol the store uses to account for entry
footprints, so the sizing strategy can be swapped per cache instance.
"""

from __future__ import annotations

from typing import Any, Protocol


class SizeEstimator(Protocol):
    """Contract for any footprint estimator (JSON length, pickle length, etc.)."""
    def estimate(self, value: Any) -> int:
        ...
