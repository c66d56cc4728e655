"""Tests of NLPModel assembly and evaluation."""

from unittest import TestCase

import numpy as np
import pytest
from scipy import sparse as sp

from helper import *
from hsnlp.model.function import DifferentiableFunction
from hsnlp.model.intervals import make_equality, make_interval, \
    make_lower_interval, make_upper_interval
from hsnlp.model.nlpmodel import Constraint, NLPModel
from hsnlp.tools.exceptions import BoundConstraintsError, DimensionMismatch, \
    GeneralConstraintsError, IndexOutOfRange


class SumSquares(DifferentiableFunction):

    def __init__(self, n, backend=DENSE):
        super(SumSquares, self).__init__(n, 1, "sum of squares",
                                         backend=backend)

    def impl_compute(self, result, x):
        result[0] = np.dot(x, x)

    def impl_gradient(self, grad, x, i):
        for j in range(self.n):
            grad[j] = 2 * x[j]


class Linear(DifferentiableFunction):
    """Rows of a fixed matrix A, x -> Ax."""

    def __init__(self, A, backend=DENSE):
        self.A = np.array(A, dtype=float)
        m, n = self.A.shape
        super(Linear, self).__init__(n, m, "linear", backend=backend)

    def impl_compute(self, result, x):
        result[:] = np.dot(self.A, x)

    def impl_jacobian(self, jac, x):
        rows, cols = np.nonzero(self.A)
        for i, j in zip(rows, cols):
            jac[i, j] = self.A[i, j]


class Test_Constraint(TestCase):

    def setUp(self):
        self.g = Linear([[1., 1.], [1., -1.]])

    def test_bounds(self):
        cons = Constraint(self.g, [make_equality(1.), make_lower_interval(0.)])
        np.testing.assert_array_equal(cons.lower, [1., 0.])
        np.testing.assert_array_equal(cons.upper, [1., np.inf])
        np.testing.assert_array_equal(cons.scales, [1., 1.])
        assert cons.m == 2

    def test_wrong_number_of_intervals(self):
        with pytest.raises(DimensionMismatch):
            Constraint(self.g, [make_equality(1.)])

    def test_wrong_number_of_scales(self):
        with pytest.raises(DimensionMismatch):
            Constraint(self.g, [(0, 1), (0, 1)], scales=[1., 2., 3.])

    def test_bad_interval(self):
        with pytest.raises(GeneralConstraintsError):
            Constraint(self.g, [(0, 1), (1, 0)])

    def test_bad_scales(self):
        with pytest.raises(GeneralConstraintsError):
            Constraint(self.g, [(0, 1), (0, 1)], scales=[1., 0.])
        with pytest.raises(GeneralConstraintsError):
            Constraint(self.g, [(0, 1), (0, 1)], scales=[1., np.inf])

    def test_scales_read_only(self):
        cons = Constraint(self.g, [(0, 1), (0, 1)], scales=[2., 3.])
        with pytest.raises(ValueError):
            cons.scales[0] = 1.


class Test_NLPModel(TestCase):

    def setUp(self):
        self.model = NLPModel(SumSquares(3), name="test")
        self.x = np.array([1., 2., 3.])

    def test_empty(self):
        model = self.model
        assert model.n == 3
        assert model.m == 0
        assert model.cons(self.x).size == 0
        assert model.jac(self.x).shape == (0, 3)
        assert model.Lcon.size == model.Ucon.size == model.scales.size == 0
        np.testing.assert_array_equal(model.x0, np.zeros(3))
        assert model.freeB == [0, 1, 2]

    def test_objective_must_be_scalar(self):
        with pytest.raises(DimensionMismatch):
            NLPModel(Linear(np.eye(2)))

    def test_add_constraint(self):
        model = self.model
        model.add_constraint(Linear([[1., 0., 1.]]), [make_equality(2.)])
        model.add_constraint(Linear([[0., 1., 0.], [1., 1., 1.]]),
                             [make_upper_interval(5.),
                              make_interval(-1., 1.)])
        assert model.m == 3
        assert len(model.constraints) == 2
        np.testing.assert_array_equal(model.cons(self.x), [4., 2., 6.])
        np.testing.assert_array_equal(model.jac(self.x),
                                      [[1., 0., 1.],
                                       [0., 1., 0.],
                                       [1., 1., 1.]])
        np.testing.assert_array_equal(model.Lcon, [2., -np.inf, -1.])
        np.testing.assert_array_equal(model.Ucon, [2., 5., 1.])
        assert model.equalC == [0]
        assert model.upperC == [1]
        assert model.rangeC == [2]
        assert model.lowerC == model.freeC == []
        np.testing.assert_array_equal(model.primal_feasibility(self.x),
                                      [2., 0., 5.])

    def test_constraint_dimension(self):
        with pytest.raises(DimensionMismatch):
            self.model.add_constraint(Linear([[1., 1.]]), [(0., 1.)])
        assert self.model.m == 0

    def test_constraint_type(self):
        with pytest.raises(TypeError):
            self.model.add_constraint(np.ones((1, 3)), [(0., 1.)])
        assert self.model.m == 0

    def test_variable_index(self):
        model = self.model
        for i in (1.5, "1", None):
            with pytest.raises(IndexOutOfRange):
                model.set_variable_bound(i, make_interval(0., 1.))
            with pytest.raises(IndexOutOfRange):
                model.variable_bound(i)
        model.set_variable_bound(np.int64(1), make_interval(0., 1.))
        assert model.variable_bound(np.int64(1)) == (0., 1.)

    def test_scaled(self):
        model = self.model
        model.add_constraint(Linear([[1., 0., 1.], [0., 1., 0.]]),
                             [(0., 1.), (0., 1.)], scales=[2., 0.5])
        np.testing.assert_array_equal(model.scaled_cons(self.x), [8., 1.])
        np.testing.assert_array_equal(model.scaled_jac(self.x),
                                      [[2., 0., 2.], [0., 0.5, 0.]])

    def test_variable_bounds(self):
        model = self.model
        model.set_variable_bound(0, make_lower_interval(0.))
        model.set_variable_bound(1, make_interval(-1., 1.))
        model.set_variable_bound(2, make_equality(3.))
        assert model.lowerB == [0]
        assert model.rangeB == [1]
        assert model.fixedB == [2]
        assert model.variable_bound(1) == (-1., 1.)
        np.testing.assert_array_equal(model.bound_violation(self.x),
                                      [0., 1., 0.])
        with pytest.raises(IndexOutOfRange):
            model.set_variable_bound(3, make_equality(0.))
        with pytest.raises(BoundConstraintsError):
            model.set_variable_bound(0, (1., 0.))

    def test_set_bounds(self):
        with pytest.raises(DimensionMismatch):
            self.model.set_bounds(np.zeros(2), np.ones(3))
        with pytest.raises(BoundConstraintsError):
            self.model.set_bounds(np.ones(3), np.zeros(3))

    def test_starting_point(self):
        model = self.model
        model.set_starting_point(self.x)
        self.x[0] = 100.
        np.testing.assert_array_equal(model.x0, [1., 2., 3.])
        x0 = model.x0
        x0[0] = -1.
        np.testing.assert_array_equal(model.x0, [1., 2., 3.])
        with pytest.raises(DimensionMismatch):
            model.set_starting_point(np.ones(4))

    def test_keywords(self):
        model = NLPModel(SumSquares(2), x0=[1., 1.], Lvar=[0., -1.])
        np.testing.assert_array_equal(model.x0, [1., 1.])
        np.testing.assert_array_equal(model.Lvar, [0., -1.])
        np.testing.assert_array_equal(model.Uvar, [np.inf, np.inf])

    def test_obj_grad(self):
        assert self.model.obj(self.x) == 14.
        np.testing.assert_array_equal(self.model.grad(self.x), [2., 4., 6.])

    def test_str(self):
        self.model.add_constraint(Linear([[1., 0., 1.]]), [make_equality(2.)])
        s = str(self.model)
        assert "Problem Name: test" in s
        assert "Number of General Constraints: 1" in s


class Test_SparseNLPModel(TestCase):

    def setUp(self):
        self.model = NLPModel(SumSquares(3, SPARSE))
        self.model.add_constraint(Linear([[1., 0., 1.]], SPARSE),
                                  [make_equality(2.)], scales=[3.])
        self.model.add_constraint(Linear([[0., 2., 0.]], SPARSE),
                                  [make_lower_interval(0.)])
        self.x = np.array([1., 2., 3.])

    def test_jac(self):
        J = self.model.jac(self.x)
        assert sp.issparse(J)
        assert J.shape == (2, 3)
        assert J.nnz == 3
        np.testing.assert_array_equal(J.toarray(), [[1., 0., 1.],
                                                    [0., 2., 0.]])

    def test_scaled_jac(self):
        J = self.model.scaled_jac(self.x)
        assert sp.issparse(J)
        np.testing.assert_array_equal(J.toarray(), [[3., 0., 3.],
                                                    [0., 2., 0.]])

    def test_empty_jac(self):
        model = NLPModel(SumSquares(3, SPARSE))
        J = model.jac(self.x)
        assert sp.issparse(J)
        assert J.shape == (0, 3)

    def test_grad(self):
        g = self.model.grad(self.x)
        assert g.shape == (1, 3)
        np.testing.assert_array_equal(to_dense(g).ravel(), [2., 4., 6.])
