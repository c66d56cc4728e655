# -*- coding: utf-8 -*-
u"""Hock-Schittkowski problem 66.

    min  0.2 x₂ - 0.8 x₀
    s.t. x₁ - exp(x₀) ≥ 0
         x₂ - exp(x₁) ≥ 0
         0 ≤ x₀ ≤ 100,  0 ≤ x₁ ≤ 100,  0 ≤ x₂ ≤ 10

Source: Problem 66 in W. Hock and K. Schittkowski, *Test examples for
nonlinear programming codes*, Lecture Notes in Economics and Mathematical
Systems 187, Springer, 1981.
"""

import numpy as np

from hsnlp.model.backend import DENSE
from hsnlp.model.function import DifferentiableFunction
from hsnlp.model.intervals import make_interval, make_lower_interval
from hsnlp.model.nlpmodel import NLPModel
from hsnlp.problems.expected import ExpectedResult

expected = ExpectedResult(f0=0.58,
                          x=(0.1841264879, 1.202167873, 3.327322322),
                          fx=0.5181632741)

x0 = np.array([0., 1.05, 2.9])


class F(DifferentiableFunction):
    u"""Linear objective 0.2 x₂ - 0.8 x₀."""

    def __init__(self, backend=DENSE):
        super(F, self).__init__(3, 1, u"0.2x₂ - 0.8x₀", backend=backend)

    def impl_compute(self, result, x):
        result[0] = 0.2 * x[2] - 0.8 * x[0]

    def impl_gradient(self, grad, x, i):
        grad[0] = -0.8
        grad[2] = 0.2


class G(DifferentiableFunction):
    u"""Constraints x₁ - exp(x₀), x₂ - exp(x₁).

    The sparsity pattern is fixed while the values depend on x.
    """

    def __init__(self, backend=DENSE):
        super(G, self).__init__(3, 2, u"x₁ - exp(x₀), x₂ - exp(x₁)",
                                backend=backend)

    def impl_compute(self, result, x):
        result[0] = x[1] - np.exp(x[0])
        result[1] = x[2] - np.exp(x[1])

    def impl_jacobian(self, jac, x):
        jac[0, 0] = -np.exp(x[0])
        jac[0, 1] = 1

        jac[1, 1] = -np.exp(x[1])
        jac[1, 2] = 1


def build(backend=DENSE):
    """Assemble problem 66 with functions in the given backend."""
    f = F(backend)
    model = NLPModel(f, name="hs066")

    model.set_variable_bound(0, make_interval(0., 100.))
    model.set_variable_bound(1, make_interval(0., 100.))
    model.set_variable_bound(2, make_interval(0., 10.))

    g = G(backend)
    model.add_constraint(g, [make_lower_interval(0.), make_lower_interval(0.)],
                         np.ones(g.m))

    model.set_starting_point(x0)
    return model
