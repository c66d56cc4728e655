# -*- coding: utf-8 -*-
"""Solver registry, factory and common solver machinery.

Solvers are registered under a name with :func:`register_solver` and
instantiated with :func:`solver_factory`. Every solver reads an
:class:`~hsnlp.model.nlpmodel.NLPModel` and returns a :class:`SolverResult`
from :meth:`Solver.minimum`. Failure to converge is reported through the
result status, never raised.

:Exit codes:
    :opt:    Optimal solution found
    :iter:   Maximum iteration reached
    :infeas: Terminated at an infeasible point
    :fail:   Numerical failure, cannot make further progress
"""

import logging

import numpy as np

from hsnlp.model.backend import to_dense
from hsnlp.tools.exceptions import DimensionMismatch, UnknownSolver
from hsnlp.tools.norms import norm_infty
from hsnlp.tools.timing import cputime

__docformat__ = "restructuredtext"

_registry = {}


def register_solver(name):
    """Class decorator registering a :class:`Solver` subclass under `name`."""
    def decorator(cls):
        _registry[name] = cls
        cls.name = name
        return cls
    return decorator


def available_solvers():
    """Return the sorted list of registered solver names."""
    return sorted(_registry)


def solver_factory(name, model, **kwargs):
    """Instantiate the solver registered as `name` on `model`.

    Keyword arguments are passed to the solver constructor. Raise
    :class:`UnknownSolver` if `name` is not registered.
    """
    try:
        cls = _registry[name]
    except KeyError:
        raise UnknownSolver("Unknown solver %r, available: %s" %
                            (name, ", ".join(available_solvers())))
    return cls(model, **kwargs)


class SolverResult(object):
    """Outcome of a call to :meth:`Solver.minimum`."""

    def __init__(self, x, f, status, message="", niter=0, nfev=0, njev=0,
                 cons_violation=0.0, tsolve=0.0):
        self.x = x
        self.f = f
        self.status = status
        self.message = message
        self.niter = niter
        self.nfev = nfev
        self.njev = njev
        self.cons_violation = cons_violation
        self.tsolve = tsolve

    @property
    def success(self):
        """Whether an optimal solution was found."""
        return self.status == "opt"

    def __str__(self):
        return ("status: %s (%s)\n  f = %g\n  x = %s\n"
                "  constraint violation = %7.1e\n"
                "  iterations = %d, #f = %d, #g = %d, time = %gs" %
                (self.status, self.message, self.f, self.x,
                 self.cons_violation, self.niter, self.nfev, self.njev,
                 self.tsolve))


class Solver(object):
    """Base class for solvers of constrained nonlinear programs.

    Subclasses implement :meth:`solve`, which runs the underlying algorithm
    from ``self.x`` and returns a tuple ``(x, status, message, niter, nfev,
    njev)``. Subclasses should call :meth:`notify` once per iteration.
    """

    name = None

    def __init__(self, model, **kwargs):
        u"""Instantiate a solver for `model`.

        :parameters:
            :model:       a :class:`NLPModel` instance.

        :keywords:
            :x0:          starting point                 (``model.x0``)
            :maxiter:     maximum number of iterations   (max(100, 10n))
            :tol:         stopping tolerance             (1.0e-10)
            :feas_tol:    tolerance on the constraint violation below which
                          a point is considered feasible (1.0e-6)
            :logger_name: name of a logger object        (``hsnlp.solver``)
        """
        self.model = model

        x0 = kwargs.get("x0", None)
        self.x = model.x0 if x0 is None else np.array(x0, dtype=float)
        if self.x.size != model.n:
            raise DimensionMismatch("Starting point of size %d given for %d "
                                    "variables" % (self.x.size, model.n))

        self.maxiter = kwargs.get("maxiter", max(100, 10 * model.n))
        self.tol = kwargs.get("tol", 1.0e-10)
        self.feas_tol = kwargs.get("feas_tol", 1.0e-6)

        self.iter = 0
        self.f = None
        self.f0 = None
        self.cons_violation = None
        self.tsolve = None
        self.status = ""
        self.message = ""
        self.observers = []

        self.hformat = "%-5s  %9s  %8s"
        self.header = self.hformat % ("iter", "f", u"‖c‖")
        self.format = "%-5d  %9.2e  %8.1e"

        # Setup the logger. Install a NullHandler if no output needed.
        logger_name = kwargs.get("logger_name", "hsnlp.solver")
        self.log = logging.getLogger(logger_name)
        self.log.addHandler(logging.NullHandler())
        self.log.propagate = False

    def add_observer(self, observer):
        """Call `observer(iter, x, f, residuals)` at every iteration."""
        self.observers.append(observer)

    def remove_observer(self, observer):
        """Stop notifying `observer`."""
        self.observers.remove(observer)

    def violation(self, x):
        """Infinity norm of the constraint and bound violation at x."""
        model = self.model
        return max(norm_infty(model.primal_feasibility(x)),
                   norm_infty(model.bound_violation(x)))

    def notify(self, x):
        """Record a new iterate and inform observers."""
        self.iter += 1
        x = np.array(x, dtype=float)
        f = self.model.obj(x)
        residuals = self.model.primal_feasibility(x)
        self.log.info(self.format, self.iter, f, norm_infty(residuals))
        for observer in self.observers:
            observer(self.iter, x, f, residuals)

    # Shortcuts for backends that work with dense, scaled quantities.

    def dense_grad(self, x):
        """Objective gradient at x as a dense vector."""
        return to_dense(self.model.grad(x)).ravel()

    def scaled_bounds(self):
        """Lower and upper bounds of the scaled constraints."""
        scales = self.model.scales
        return (scales * self.model.Lcon, scales * self.model.Ucon)

    def solve(self):
        """Run the optimization algorithm. Must be overridden."""
        raise NotImplementedError("Please subclass")

    def minimum(self):
        """Solve the problem and return a :class:`SolverResult`.

        Non-convergence is reported through the result status.
        """
        model = self.model
        self.iter = 0
        self.f0 = model.obj(self.x)

        self.log.info(self.header)
        self.log.info(self.format, 0, self.f0, self.violation(self.x))

        t = cputime()
        try:
            (x, status, message, niter, nfev, njev) = self.solve()
        except (ArithmeticError, np.linalg.LinAlgError) as exc:
            (x, status, message, niter, nfev, njev) = \
                (self.x, "fail", str(exc), self.iter, 0, 0)
        self.tsolve = cputime() - t

        self.x = np.array(x, dtype=float)
        self.f = model.obj(self.x)
        self.cons_violation = self.violation(self.x)

        if status == "opt" and not self.cons_violation <= self.feas_tol:
            status = "infeas"
        self.status = status
        self.message = message

        if status == "opt":
            self.log.info("%s: optimal solution found, f = %g",
                          self.name, self.f)
        else:
            self.log.warning("%s terminated with status %s: %s",
                             self.name, status, message)

        return SolverResult(self.x.copy(), self.f, status, message,
                            niter=niter, nfev=nfev, njev=njev,
                            cons_violation=self.cons_violation,
                            tsolve=self.tsolve)
