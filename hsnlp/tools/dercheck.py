# -*- coding: utf-8 -*-
"""A simple derivative checker."""

import logging
import numpy as np
from hsnlp.model.backend import to_dense
from hsnlp.tools.norms import norm1, norm2

macheps = np.finfo(np.double).eps  # Machine epsilon.


class DerivativeChecker(object):
    """Verify numerically the accuracy of first derivatives.

    The `DerivativeChecker` class provides facilities for verifying
    numerically the accuracy of the objective gradient and of the constraints
    Jacobian implemented in an optimization model, whatever the numeric
    backend of its functions.
    """

    def __init__(self, model, x, **kwargs):
        u"""Initialize a :class:`DerivativeChecker` instance.

        :parameters:
            :model: a `NLPModel` instance
            :x:     the point about which we are checking derivatives.
                    See the documentation of :meth:`check` for options.

        :keywords:
            :tol:         tolerance under which derivatives are considered
                            accurate (default: 1.0e-6)
            :step:        centered finite difference step, will be scaled
                            by (1 + ‖x‖₁) (default: ³√(ϵ/3))
            :seed:        seed of the random direction of the cheap check
                            (default: 0)
            :logger_name: name of a logger object (default: 'hsnlp.der')
        """
        self.x = np.array(x, dtype=float)
        self.tol = kwargs.get('tol', 1.0e-6)
        self.step = kwargs.get('step', (macheps / 3)**(1. / 3))
        self.h = self.step * (1 + norm1(self.x))
        self.rng = np.random.RandomState(kwargs.get('seed', 0))

        # Setup the logger. Install a NullHandler if no output needed.
        logger_name = kwargs.get('logger_name', 'hsnlp.der')
        self.log = logging.getLogger(logger_name)
        self.log.addHandler(logging.NullHandler())
        self.log.propagate = False

        self.model = model
        self.grad_errs = {}
        self.cheap_grad_errs = {}
        self.jac_errs = {}

        headfmt = '%4s  %4s        %22s  %22s  %7s'
        self.head = headfmt % ('Fun', 'Var', 'Expected',
                               'Finite Diff', 'Rel.Err')
        self.d1fmt = '%4d  %4d        %22.15e  %22.15e  %7.1e'
        head3fmt = '%17s %22s  %22s  %7s'
        self.head3 = head3fmt % ('Directional Deriv', 'Expected',
                                 'Finite Diff', 'Rel.Err')
        self.d3fmt = '%17s %22.15e  %22.15e  %7.1e'

    def check(self, **kwargs):
        """Perform derivative check.

        :keywords:
            :grad:        Check objective gradient  (default `True`)
            :jac:         Check constraints Jacobian (default `True` if m > 0)
            :cheap_check: Check the objective gradient along a random
                          direction only (default `False`)
        """
        grad = kwargs.get('grad', True)
        jac = kwargs.get('jac', True) if self.model.m > 0 else False
        cheap = kwargs.get('cheap_check', False)

        self.log.debug('Gradient checking')

        if grad:
            if cheap:
                self.cheap_grad_errs = self.cheap_check_obj_gradient()
            else:
                self.grad_errs = self.check_obj_gradient()
        if jac:
            self.jac_errs = self.check_con_jacobian()

    @property
    def ok(self):
        """Whether no error was found by the last checks."""
        return not (self.grad_errs or self.cheap_grad_errs or self.jac_errs)

    def cheap_check_obj_gradient(self):
        """Check objective derivative along a random direction.

        Return a dictionary containing the scaled error between the directional
        derivative of the objective in a random direction and the
        finite-difference approximation.
        """
        n = self.model.n
        gx = to_dense(self.model.grad(self.x)).ravel()
        errs = {}

        dx = self.rng.standard_normal(n)
        dx /= norm2(dx)
        xph = self.x + self.h * dx
        xmh = self.x - self.h * dx
        dfdx = (self.model.obj(xph) - self.model.obj(xmh)) / (2 * self.h)
        gtdx = np.dot(gx, dx)                      # expected
        err = max(abs(dfdx - gtdx) / (1 + abs(gtdx)),
                  abs(dfdx - gtdx) / (1 + abs(dfdx)))

        self.log.debug('Objective directional derivative')
        self.log.debug(self.head3)
        line = self.d3fmt % ('', gtdx, dfdx, err)
        if err > self.tol:
            self.log.warning(line)
            errs['dir'] = dx
            errs['err'] = err
        else:
            self.log.debug(line)

        return errs

    def check_obj_gradient(self):
        """Check objective gradient using centered finite differences.

        Return a dictionary of gradient components for which the scaled error
        with the finite-difference approximation exceeds ``self.tol``.
        """
        model = self.model
        gx = to_dense(model.grad(self.x)).ravel()

        self.log.debug('Objective gradient')
        self.log.debug(self.head)

        errs = {}
        dfdx = central_differences(lambda x: np.array([model.obj(x)]),
                                   self.x, self.h)
        for i in range(model.n):
            err = abs(gx[i] - dfdx[0, i]) / max(1, abs(dfdx[0, i]))
            line = self.d1fmt % (0, i, gx[i], dfdx[0, i], err)
            if err > self.tol:
                self.log.warning(line)
                errs[i] = err
            else:
                self.log.debug(line)

        return errs

    def check_con_jacobian(self):
        """Check constraints Jacobian using centered finite differences.

        Return a dictionary of Jacobian components (constraint, variable) for
        which the scaled error with the finite-difference approximation
        exceeds ``self.tol``.
        """
        model = self.model
        if model.m == 0:
            return {}   # Problem is unconstrained.

        self.log.debug('Constraints Jacobian')
        self.log.debug(self.head)

        Jx = to_dense(model.jac(self.x))
        dcdx = central_differences(model.cons, self.x, self.h)
        return self._compare(Jx, dcdx, offset=1)

    def _compare(self, Jx, dcdx, offset=0):
        errs = {}
        m, n = dcdx.shape
        for i in range(n):  # i = variable.
            for j in range(m):  # j = function component.
                err = abs(Jx[j, i] - dcdx[j, i]) / max(1, abs(dcdx[j, i]))
                line = self.d1fmt % (j + offset, i, Jx[j, i], dcdx[j, i], err)
                if err > self.tol:
                    self.log.warning(line)
                    errs[(j, i)] = err
                else:
                    self.log.debug(line)
        return errs


def central_differences(fun, x, h):
    """Approximate the Jacobian of `fun` at `x` with centered differences."""
    x = np.asarray(x, dtype=float)
    n = x.size
    fx = np.atleast_1d(fun(x))
    J = np.empty((fx.size, n))
    xph = x.copy()
    xmh = x.copy()
    for i in range(n):
        xph[i] += h
        xmh[i] -= h
        J[:, i] = (np.atleast_1d(fun(xph)) - np.atleast_1d(fun(xmh))) / (2 * h)
        xph[i] = xmh[i] = x[i]
    return J


def check_function(function, x, **kwargs):
    """Check the Jacobian of a single differentiable function at x.

    Keywords are those of :class:`DerivativeChecker`. Return a dictionary of
    Jacobian components (component, variable) whose scaled error exceeds
    the tolerance.
    """
    checker = DerivativeChecker(_FunctionModel(function), x, **kwargs)
    checker.log.debug('Jacobian of %s', function)
    checker.log.debug(checker.head)
    Jx = to_dense(function.jacobian(checker.x))
    dfdx = central_differences(function.compute, checker.x, checker.h)
    return checker._compare(Jx, dfdx)


class _FunctionModel(object):
    """Minimal model view of a single function, for the checker."""

    def __init__(self, function):
        self.function = function
        self.n = function.n
        self.m = function.m
