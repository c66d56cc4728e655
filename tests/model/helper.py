"""Helper module for hsnlp.model tests."""

import numpy as np

from hsnlp.model.backend import DENSE, SPARSE, to_dense, sparsity_pattern


BACKENDS = [DENSE, SPARSE]


class Hs48Data(object):

    def __init__(self):
        self.x0 = np.array([3., 5., -3., 2., -2.])
        self.expected_f = 84.0
        self.expected_g = np.array([4., 16., -16., 8., -8.])
        self.expected_c = np.array([5., -3.])
        self.expected_J = np.array([[1., 1., 1., 1., 1.],
                                    [0., 0., 1., -2., -2.]])
        self.expected_Lcon = np.array([5., -3.])
        self.expected_Ucon = np.array([5., -3.])
        self.expected_Lvar = -np.inf * np.ones(5)
        self.expected_Uvar = np.inf * np.ones(5)
        self.expected_grad_nnz = 5
        self.expected_jac_nnz = 8


class Hs66Data(object):

    def __init__(self):
        self.x0 = np.array([0., 1.05, 2.9])
        self.expected_f = 0.58
        self.expected_g = np.array([-0.8, 0., 0.2])
        self.expected_c = np.array([0.05, 2.9 - np.exp(1.05)])
        self.expected_J = np.array([[-1., 1., 0.],
                                    [0., -np.exp(1.05), 1.]])
        self.expected_Lcon = np.zeros(2)
        self.expected_Ucon = np.inf * np.ones(2)
        self.expected_Lvar = np.zeros(3)
        self.expected_Uvar = np.array([100., 100., 10.])
        self.expected_grad_nnz = 2
        self.expected_jac_nnz = 4


class SchittkowskiTest(object):
    """Mixin checking a problem against its expected data.

    Subclasses set ``self.model`` and ``self.data`` in ``setUp``.
    """

    def test_dimensions(self):
        data = self.data
        assert self.model.n == data.x0.size
        assert self.model.nvar == data.x0.size
        assert self.model.m == data.expected_c.size
        assert self.model.ncon == data.expected_c.size

    def test_starting_point(self):
        np.testing.assert_array_equal(self.model.x0, self.data.x0)

    def test_bounds(self):
        data = self.data
        np.testing.assert_array_equal(self.model.Lvar, data.expected_Lvar)
        np.testing.assert_array_equal(self.model.Uvar, data.expected_Uvar)
        np.testing.assert_array_equal(self.model.Lcon, data.expected_Lcon)
        np.testing.assert_array_equal(self.model.Ucon, data.expected_Ucon)

    def test_obj(self):
        f = self.model.obj(self.data.x0)
        np.testing.assert_allclose(f, self.data.expected_f, rtol=1.0e-12)

    def test_grad(self):
        g = to_dense(self.model.grad(self.data.x0)).ravel()
        np.testing.assert_allclose(g, self.data.expected_g, atol=1.0e-12)

    def test_cons(self):
        c = self.model.cons(self.data.x0)
        np.testing.assert_allclose(c, self.data.expected_c, atol=1.0e-12)

    def test_jac(self):
        J = to_dense(self.model.jac(self.data.x0))
        np.testing.assert_allclose(J, self.data.expected_J, atol=1.0e-12)

    def test_scaled_cons(self):
        # Unit scales leave the constraints unchanged.
        x = self.data.x0
        np.testing.assert_allclose(self.model.scaled_cons(x),
                                   self.model.cons(x))
        np.testing.assert_allclose(to_dense(self.model.scaled_jac(x)),
                                   to_dense(self.model.jac(x)))

    def test_pattern(self):
        g = self.model.grad(self.data.x0)
        J = self.model.jac(self.data.x0)
        if self.model.backend == SPARSE:
            assert len(sparsity_pattern(g)[0]) == self.data.expected_grad_nnz
            assert len(sparsity_pattern(J)[0]) == self.data.expected_jac_nnz
        else:
            assert g.shape == (self.model.n,)
            assert J.shape == (self.model.m, self.model.n)
