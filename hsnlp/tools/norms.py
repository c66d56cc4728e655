"""Convenience functions for computing vector norms."""

import numpy as np
from numpy.linalg import norm


def norm1(x):
    """Compute 1-norm of `x`."""
    if len(x) > 0:
        return norm(x, ord=1)
    return 0.0


def norm2(x):
    """Compute 2-norm of `x`."""
    if len(x) > 0:
        return norm(x)
    return 0.0


def norm_infty(x):
    """Compute infinity norm of `x`."""
    if len(x) > 0:
        return norm(x, ord=np.inf)
    return 0.0
