"""Interval value constructors for bounds and constraints.

An interval is a pair (lo, hi) with lo <= hi. Equalities have lo == hi and
one-sided intervals use an infinite endpoint.
"""

from collections import namedtuple

import numpy as np

from hsnlp.tools.exceptions import BoundConstraintsError


Interval = namedtuple("Interval", ["lo", "hi"])


def make_interval(lo, hi):
    """Return the interval [lo, hi]."""
    lo = float(lo)
    hi = float(hi)
    if np.isnan(lo) or np.isnan(hi) or lo > hi:
        raise BoundConstraintsError("Ill-formed interval [%g, %g]" % (lo, hi))
    return Interval(lo, hi)


def make_lower_interval(lo):
    """Return the interval [lo, +inf)."""
    return make_interval(lo, np.inf)


def make_upper_interval(hi):
    """Return the interval (-inf, hi]."""
    return make_interval(-np.inf, hi)


def make_equality(value):
    """Return the degenerate interval [value, value]."""
    return make_interval(value, value)


def as_interval(interval):
    """Convert a pair to an :class:`Interval`, checking it is well formed."""
    if isinstance(interval, Interval):
        return make_interval(interval.lo, interval.hi)
    try:
        lo, hi = interval
    except (TypeError, ValueError):
        raise BoundConstraintsError("Expected a (lo, hi) pair, got %r" %
                                    (interval,))
    return make_interval(lo, hi)
