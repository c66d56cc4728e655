# -*- coding: utf-8 -*-
u"""Solvers backed by :func:`scipy.optimize.minimize`.

Two methods are exposed:

* ``slsqp``: sequential least squares programming. SLSQP works with dense
  derivatives, so sparse Jacobians are converted.
* ``trust-constr``: trust-region SQP / interior point. Sparse Jacobians are
  passed on in CSR format.

Constraints cᴸ ≤ c(x) ≤ cᵁ are passed on scaled, i.e., as
s ∘ cᴸ ≤ s ∘ c(x) ≤ s ∘ cᵁ where s is the vector of scale factors.
"""

import numpy as np
from scipy import sparse as sp
from scipy.optimize import BFGS, Bounds, NonlinearConstraint, minimize

from hsnlp.model.backend import to_dense
from hsnlp.optimize.solver import Solver, register_solver

__docformat__ = "restructuredtext"


def _finite_bounds(model):
    """Return variable bounds, or None if every variable is free."""
    Lvar, Uvar = model.Lvar, model.Uvar
    if not (np.any(np.isfinite(Lvar)) or np.any(np.isfinite(Uvar))):
        return None
    return Bounds(Lvar, Uvar)


@register_solver("slsqp")
class SLSQPSolver(Solver):
    """Sequential least-squares programming from SciPy."""

    # SLSQP exit modes.
    _statuses = {0: "opt", 4: "infeas", 9: "iter"}

    def constraints(self):
        """Translate the model constraints to SLSQP dictionaries."""
        model = self.model
        sL, sU = self.scaled_bounds()
        equal = model.equalC
        lower = sorted(model.lowerC + model.rangeC)
        upper = sorted(model.upperC + model.rangeC)

        def dense_jac(x):
            return to_dense(model.scaled_jac(x))

        cons = []
        if equal:
            cons.append({"type": "eq",
                         "fun": lambda x: model.scaled_cons(x)[equal] -
                         sL[equal],
                         "jac": lambda x: dense_jac(x)[equal, :]})
        if lower or upper:
            def ineq(x):
                c = model.scaled_cons(x)
                return np.concatenate((c[lower] - sL[lower],
                                       sU[upper] - c[upper]))

            def ineq_jac(x):
                J = dense_jac(x)
                return np.vstack((J[lower, :], -J[upper, :]))

            cons.append({"type": "ineq", "fun": ineq, "jac": ineq_jac})
        return cons

    def solve(self):
        model = self.model
        res = minimize(model.obj, self.x, jac=self.dense_grad,
                       method="SLSQP",
                       bounds=_finite_bounds(model),
                       constraints=self.constraints(),
                       callback=self.notify,
                       options={"maxiter": self.maxiter, "ftol": self.tol})
        status = self._statuses.get(int(res.status), "fail")
        return (res.x, status, res.message, int(res.nit), int(res.nfev),
                int(res.njev))


@register_solver("trust-constr")
class TrustConstrSolver(Solver):
    """Trust-region constrained algorithm from SciPy.

    The Hessian of the Lagrangian is approximated with BFGS.

    :keywords:
        :gtol:  tolerance on the norm of the Lagrangian gradient (1.0e-8)
    """

    # trust-constr exit statuses.
    _statuses = {0: "iter", 1: "opt", 2: "opt"}

    def __init__(self, model, **kwargs):
        kwargs.setdefault("maxiter", 1000)
        super(TrustConstrSolver, self).__init__(model, **kwargs)
        self.gtol = kwargs.get("gtol", 1.0e-8)

    def jac(self, x):
        """Scaled Jacobian, in CSR format for sparse models."""
        J = self.model.scaled_jac(x)
        if sp.issparse(J):
            return J.tocsr()
        return J

    def constraints(self):
        model = self.model
        if model.m == 0:
            return []
        sL, sU = self.scaled_bounds()
        return [NonlinearConstraint(model.scaled_cons, sL, sU, jac=self.jac,
                                    hess=BFGS())]

    def solve(self):
        model = self.model
        res = minimize(model.obj, self.x, jac=self.dense_grad, hess=BFGS(),
                       method="trust-constr",
                       bounds=_finite_bounds(model),
                       constraints=self.constraints(),
                       callback=lambda x, state: self.notify(x),
                       options={"maxiter": self.maxiter,
                                "gtol": self.gtol,
                                "xtol": self.tol,
                                "barrier_tol": self.gtol})
        status = self._statuses.get(int(res.status), "fail")
        return (res.x, status, res.message, int(res.nit), int(res.nfev),
                int(res.njev))
