# -*- coding: utf-8 -*-
u"""Differentiable functions with dense or sparse derivatives.

A differentiable function f: ℝⁿ → ℝᵐ exposes its value, the gradient of
each of its components and its Jacobian. Subclasses implement the
mathematics in :meth:`impl_compute` and in at least one of
:meth:`impl_gradient` and :meth:`impl_jacobian`, writing coefficients into
a storage object. The numeric backend selected at construction decides
whether derivatives are returned as Numpy arrays or SciPy COO matrices; the
formulas are written only once.
"""

import numpy as np

from hsnlp.model.backend import DENSE, check_backend, make_storage
from hsnlp.tools.exceptions import DimensionMismatch, IndexOutOfRange

__docformat__ = 'restructuredtext'


class DifferentiableFunction(object):
    u"""Abstract differentiable function f: ℝⁿ → ℝᵐ.

    Instances are immutable and hold no evaluation state, so that a single
    instance may be evaluated concurrently and shared among problems.
    """

    def __init__(self, n, m=1, name="", backend=DENSE):
        """Initialize a function with `n` arguments and `m` components.

        :parameters:
            :n:       input dimension
            :m:       output dimension (default: 1)
            :name:    label used in diagnostics only
            :backend: ``DENSE`` or ``SPARSE`` (default: ``DENSE``)
        """
        if n < 1 or m < 1:
            raise ValueError("Function dimensions must be positive, "
                             "got n=%d, m=%d" % (n, m))

        cls = type(self)
        if cls.impl_gradient is DifferentiableFunction.impl_gradient and \
                cls.impl_jacobian is DifferentiableFunction.impl_jacobian:
            raise TypeError("%s must implement impl_gradient or impl_jacobian"
                            % cls.__name__)

        self._n = int(n)
        self._m = int(m)
        self._name = name
        self._backend = check_backend(backend)

    @property
    def n(self):
        """Input dimension."""
        return self._n

    @property
    def m(self):
        """Output dimension."""
        return self._m

    @property
    def name(self):
        """Human-readable label."""
        return self._name

    @property
    def backend(self):
        """Numeric backend of derivatives."""
        return self._backend

    def __str__(self):
        return "%s (%d -> %d, %s)" % (self.name or type(self).__name__,
                                      self.n, self.m, self.backend)

    def __call__(self, x):
        return self.compute(x)

    def check_argument(self, x):
        """Return `x` as a float vector, checking its size."""
        x = np.asarray(x, dtype=float)
        if x.ndim != 1 or x.size != self.n:
            raise DimensionMismatch("Argument of size %d given to %s, "
                                    "expected %d" % (x.size, self, self.n))
        return x

    def compute(self, x):
        """Evaluate f(x), a vector of size m."""
        x = self.check_argument(x)
        result = np.zeros(self.m)
        self.impl_compute(result, x)
        return result

    def gradient(self, x, i=0):
        """Evaluate the gradient of the `i`-th component of f at x.

        Dense functions return a vector of size n, sparse functions a
        1 x n COO matrix.
        """
        x = self.check_argument(x)
        if not 0 <= i < self.m:
            raise IndexOutOfRange("Component %d of a function with %d "
                                  "components" % (i, self.m))
        grad = make_storage(self.backend, (self.n,))
        self.impl_gradient(grad, x, i)
        return grad.finalize()

    def jacobian(self, x):
        """Evaluate the m x n Jacobian of f at x."""
        x = self.check_argument(x)
        jac = make_storage(self.backend, (self.m, self.n))
        self.impl_jacobian(jac, x)
        return jac.finalize()

    def impl_compute(self, result, x):
        """Store f(x) into `result`. Must be overridden."""
        raise NotImplementedError("Please subclass")

    def impl_gradient(self, grad, x, i):
        """Store the gradient of component `i` into `grad`.

        The default implementation extracts row `i` of the Jacobian.
        """
        jac = make_storage(self.backend, (self.m, self.n))
        self.impl_jacobian(jac, x)
        for col, val in jac.row_items(i):
            grad.set_entry(0, col, val)

    def impl_jacobian(self, jac, x):
        """Store the Jacobian into `jac`.

        The default implementation assembles the Jacobian row by row from
        :meth:`impl_gradient`.
        """
        for i in range(self.m):
            grad = make_storage(self.backend, (self.n,))
            self.impl_gradient(grad, x, i)
            for col, val in grad.row_items(0):
                jac.set_entry(i, col, val)
