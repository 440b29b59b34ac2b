#!/usr/bin/env python3
"""
Angle lookup capability.

The table-based atan2 trades a little accuracy for speed in code paths that
evaluate many turn angles. It is built once per process and never mutated,
so it can be read concurrently without locking. Callers that need exact
results can pass `atan2_exact` wherever an angle lookup is accepted.
"""

from typing import Callable, Tuple
import functools
import logging
import math

logger = logging.getLogger(__name__)

Atan2Function = Callable[[float, float], float]

ATAN_TABLE_SIZE = 4096

atan2_exact: Atan2Function = math.atan2


class Atan2Table:
    """Precomputed arctangent values over [0, 1] with octant reduction."""

    def __init__(self, size: int = ATAN_TABLE_SIZE):
        if size < 1:
            raise ValueError(f"Table size must be positive, got {size}")
        self.size = size
        self._table: Tuple[float, ...] = tuple(math.atan(i / size) for i in range(size + 1))
        logger.debug(f"Built atan2 lookup table with {size + 1} entries")

    def _atan_unit(self, t: float) -> float:
        # t in [0, 1]; linear interpolation between neighbouring entries
        position = t * self.size
        index = min(int(position), self.size - 1)
        fraction = position - index
        low = self._table[index]
        return low + (self._table[index + 1] - low) * fraction

    def __call__(self, y: float, x: float) -> float:
        """
        Approximate math.atan2(y, x).

        Follows the sign convention of math.atan2: results lie in
        [-pi, pi], atan2(0, 0) is 0 and x == 0 gives +/- pi/2.
        """
        if x == 0.0:
            if y == 0.0:
                return 0.0
            return math.pi / 2 if y > 0.0 else -math.pi / 2

        abs_x, abs_y = abs(x), abs(y)
        if abs_y > abs_x:
            angle = math.pi / 2 - self._atan_unit(abs_x / abs_y)
        else:
            angle = self._atan_unit(abs_y / abs_x)

        if x < 0.0:
            angle = math.pi - angle
        return -angle if y < 0.0 else angle


@functools.lru_cache(maxsize=None)
def atan2_table() -> Atan2Table:
    """Return the process-wide lookup table, building it on first use."""
    return Atan2Table()


def atan2_lookup(y: float, x: float) -> float:
    """Table-based atan2 using the shared lookup table."""
    return atan2_table()(y, x)
