# -*- coding: utf-8 -*-
u"""Hock-Schittkowski problem 48.

    min  (x₀ - 1)² + (x₁ - x₂)² + (x₃ - x₄)²
    s.t. x₀ + x₁ + x₂ + x₃ + x₄ = 5
         x₂ - 2(x₃ + x₄) = -3

Source: Problem 48 in W. Hock and K. Schittkowski, *Test examples for
nonlinear programming codes*, Lecture Notes in Economics and Mathematical
Systems 187, Springer, 1981.
"""

import numpy as np

from hsnlp.model.backend import DENSE
from hsnlp.model.function import DifferentiableFunction
from hsnlp.model.intervals import make_equality
from hsnlp.model.nlpmodel import NLPModel
from hsnlp.problems.expected import ExpectedResult

expected = ExpectedResult(f0=84.,
                          x=(1., 1., 1., 1., 1.),
                          fx=0.)

x0 = np.array([3., 5., -3., 2., -2.])


class F(DifferentiableFunction):
    u"""Objective (x₀ - 1)² + (x₁ - x₂)² + (x₃ - x₄)²."""

    def __init__(self, backend=DENSE):
        super(F, self).__init__(5, 1, u"(x₀ - 1)² + (x₁ - x₂)² + (x₃ - x₄)²",
                                backend=backend)

    def impl_compute(self, result, x):
        result[0] = (x[0] - 1)**2 + (x[1] - x[2])**2 + (x[3] - x[4])**2

    def impl_gradient(self, grad, x, i):
        grad[0] = 2 * (x[0] - 1)
        grad[1] = 2 * (x[1] - x[2])
        grad[2] = 2 * (-x[1] + x[2])
        grad[3] = 2 * (x[3] - x[4])
        grad[4] = 2 * (-x[3] + x[4])


class G(DifferentiableFunction):
    u"""Linear constraints x₀ + x₁ + x₂ + x₃ + x₄, x₂ - 2(x₃ + x₄).

    The Jacobian is constant and has 8 nonzeros.
    """

    def __init__(self, backend=DENSE):
        super(G, self).__init__(5, 2, u"x₀ + x₁ + x₂ + x₃ + x₄, x₂ - 2(x₃ + x₄)",
                                backend=backend)

    def impl_compute(self, result, x):
        result[0] = x[0] + x[1] + x[2] + x[3] + x[4]
        result[1] = x[2] - 2 * (x[3] + x[4])

    def impl_jacobian(self, jac, x):
        jac[0, 0] = 1
        jac[0, 1] = 1
        jac[0, 2] = 1
        jac[0, 3] = 1
        jac[0, 4] = 1

        jac[1, 2] = 1
        jac[1, 3] = -2
        jac[1, 4] = -2


def build(backend=DENSE):
    """Assemble problem 48 with functions in the given backend."""
    f = F(backend)
    model = NLPModel(f, name="hs048")

    g = G(backend)
    model.add_constraint(g, [make_equality(5.), make_equality(-3.)],
                         np.ones(g.m))

    model.set_starting_point(x0)
    return model
