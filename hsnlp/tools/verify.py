# -*- coding: utf-8 -*-
"""Comparison of computed values with reference values."""

import numpy as np


def check_small_or_close(value, expected, tol):
    u"""Check that `value` is small or close to `expected`.

    If ``|expected| < tol``, the check passes when ``|value| < tol``.
    Otherwise it passes when ``|value - expected| ≤ tol |expected|``. Arrays
    are compared componentwise and the check passes if all components pass.
    """
    value = np.asarray(value, dtype=float)
    expected = np.asarray(expected, dtype=float)
    if value.shape != expected.shape:
        return False
    small = np.abs(expected) < tol
    ok = np.where(small,
                  np.abs(value) < tol,
                  np.abs(value - expected) <= tol * np.abs(expected))
    return bool(np.all(ok))


def process_result(result, expected, x_tol=1.0e-4, f_tol=1.0e-4):
    """Compare a solver result with the reference values of a problem.

    :parameters:
        :result:   a :class:`~hsnlp.optimize.solver.SolverResult`
        :expected: an :class:`~hsnlp.problems.expected.ExpectedResult`

    Return the list of failure messages, empty if `result` is a success
    whose solution and optimal value match the references.
    """
    if not result.success:
        return ["solver failed with status %s: %s" %
                (result.status, result.message)]

    failures = []
    if not check_small_or_close(result.x, expected.x, x_tol):
        failures.append("x = %s differs from expected %s" %
                        (result.x, np.asarray(expected.x)))
    if not check_small_or_close(result.f, expected.fx, f_tol):
        failures.append("f = %g differs from expected %g" %
                        (result.f, expected.fx))
    return failures
