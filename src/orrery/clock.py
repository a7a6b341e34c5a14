"""
Fixed-point simulation time.

A `SimTime` is an unsigned 64-bit tick counter where the 6 low bits are the
fractional part, i.e. one tick is 1/64 of a time unit. Orbit phases are
computed from the remainder and the ratio of two such values.
"""

import logging
import operator

logger = logging.getLogger(__name__)

FRAC_BITS = 6
FACTOR = 1 << FRAC_BITS
WIDTH = 64
MASK = (1 << WIDTH) - 1


class SimTime:
    """Elapsed simulation time, counted in ticks of 1/64 unit.

    Values wrap modulo 2**64, like the underlying unsigned integer.

    >>> t = SimTime.from_whole_units(2)
    >>> t.ticks
    128
    >>> t.tick()
    >>> t.units
    2.015625

    """

    __slots__ = ("_ticks",)

    def __init__(self, ticks=0):
        self._ticks = operator.index(ticks) & MASK

    @classmethod
    def from_ticks(cls, ticks):
        return cls(ticks)

    @classmethod
    def from_whole_units(cls, n):
        """Pack ``n`` whole units into the integer part of the counter.

        If ``n`` does not fit in the bits left above the fractional part, a
        warning is logged and the wrapped value is returned.
        """
        n = operator.index(n)
        if n < 0:
            raise ValueError(f"SimTime cannot be negative: {n}")
        packed = (n << FRAC_BITS) & MASK
        if packed >> FRAC_BITS != n:
            logger.warning("Constructed invalid SimTime: %d", n)
        return cls(packed)

    @property
    def ticks(self):
        """Raw tick count."""
        return self._ticks

    @property
    def units(self):
        """Value in time units, as a float."""
        return self._ticks / FACTOR

    def tick(self):
        """Advance by exactly one tick (1/64 unit), wrapping at 2**64."""
        self._ticks = (self._ticks + 1) & MASK

    def copy(self):
        return SimTime(self._ticks)

    def __mod__(self, other):
        return remainder(self, other)

    def __truediv__(self, other):
        return progress(self, other)

    def __add__(self, other):
        if not isinstance(other, SimTime):
            return NotImplemented
        return SimTime(self._ticks + other._ticks)

    def __eq__(self, other):
        if not isinstance(other, SimTime):
            return NotImplemented
        return self._ticks == other._ticks

    def __lt__(self, other):
        if not isinstance(other, SimTime):
            return NotImplemented
        return self._ticks < other._ticks

    def __le__(self, other):
        if not isinstance(other, SimTime):
            return NotImplemented
        return self._ticks <= other._ticks

    # mutable through tick()
    __hash__ = None

    def __repr__(self):
        return f"SimTime({self._ticks})"


def remainder(a, b):
    """Raw modulo of the tick counts of ``a`` and ``b``."""
    if b.ticks == 0:
        raise ZeroDivisionError("SimTime remainder with a zero period")
    return SimTime(a.ticks % b.ticks)


def progress(a, b):
    """Ratio of the tick counts of ``a`` and ``b``, as a float.

    Used on the output of `remainder`, so that the result lies in [0, 1).
    """
    if b.ticks == 0:
        raise ZeroDivisionError("SimTime ratio with a zero period")
    return a.ticks / b.ticks
