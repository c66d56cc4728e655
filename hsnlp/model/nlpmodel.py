# -*- coding: utf-8 -*-
u"""Assembly of constrained nonlinear programs.

An :class:`NLPModel` represents the problem

    min f(x)  subject to  cᴸ ≤ c(x) ≤ cᵁ,  l ≤ x ≤ u,

where f is a scalar :class:`DifferentiableFunction` fixed at construction and
c is the concatenation, in order of insertion, of the constraint functions
appended with :meth:`NLPModel.add_constraint`.
"""

import logging
import operator

import numpy as np
from scipy import sparse as sp

from hsnlp.model.backend import SPARSE, to_dense
from hsnlp.model.function import DifferentiableFunction
from hsnlp.model.intervals import as_interval
from hsnlp.tools.exceptions import BoundConstraintsError, DimensionMismatch, \
    GeneralConstraintsError, IndexOutOfRange

__docformat__ = 'restructuredtext'


def where(cond):
    """Return the indices at which `cond` holds as a list."""
    return list(np.where(cond)[0])


class Constraint(object):
    """A vector-valued function constrained to lie in a box.

    Component i of the function must lie in ``intervals[i]`` and is scaled
    by ``scales[i]`` when handed to a solver.
    """

    def __init__(self, function, intervals, scales=None):
        """Initialize a constraint descriptor.

        :parameters:
            :function:  a :class:`DifferentiableFunction` with m components
            :intervals: sequence of m (lo, hi) pairs
            :scales:    sequence of m positive scale factors (default: ones)
        """
        if not isinstance(function, DifferentiableFunction):
            raise TypeError("function should be a DifferentiableFunction")
        m = function.m

        intervals = list(intervals)
        if len(intervals) != m:
            raise DimensionMismatch("%d intervals given for %s, expected %d" %
                                    (len(intervals), function, m))
        try:
            intervals = tuple(as_interval(iv) for iv in intervals)
        except BoundConstraintsError as exc:
            raise GeneralConstraintsError(str(exc)) from exc

        if scales is None:
            scales = np.ones(m)
        scales = np.array(scales, dtype=float).ravel()
        if scales.size != m:
            raise DimensionMismatch("%d scales given for %s, expected %d" %
                                    (scales.size, function, m))
        if not np.all(np.isfinite(scales)) or np.any(scales <= 0):
            raise GeneralConstraintsError("Scales must be positive and "
                                          "finite: %s" % scales)
        scales.setflags(write=False)

        self.function = function
        self.intervals = intervals
        self.scales = scales

    @property
    def m(self):
        """Number of constraint components."""
        return self.function.m

    @property
    def lower(self):
        """Lower bounds as a vector."""
        return np.array([iv.lo for iv in self.intervals])

    @property
    def upper(self):
        """Upper bounds as a vector."""
        return np.array([iv.hi for iv in self.intervals])

    def __repr__(self):
        return "Constraint(%s, %s)" % (self.function, list(self.intervals))


class NLPModel(object):
    """A constrained nonlinear program assembled from differentiable functions.

    The objective is fixed at construction. Constraints are appended with
    :meth:`add_constraint`, bounds set with :meth:`set_variable_bound` and
    the starting point with :meth:`set_starting_point`. Solvers only read
    the model; :attr:`x0`, :attr:`Lvar` and :attr:`Uvar` return copies.
    """

    def __init__(self, objective, name="Generic", **kwargs):
        """Initialize a model from a scalar objective function.

        :parameters:
            :objective: a :class:`DifferentiableFunction` with a single
                        component

        :keywords:
            :name:        problem name (default: 'Generic')
            :x0:          starting point (default: all zero)
            :Lvar:        vector of lower bounds (default: -inf)
            :Uvar:        vector of upper bounds (default: +inf)
            :logger_name: name of a logger object (default: 'hsnlp.model')
        """
        if not isinstance(objective, DifferentiableFunction):
            raise TypeError("objective should be a DifferentiableFunction")
        if objective.m != 1:
            raise DimensionMismatch("Objective must have a single component, "
                                    "%s has %d" % (objective, objective.m))

        self.objective = objective
        self.name = name
        self._n = objective.n
        self._constraints = []

        self._Lvar = -np.inf * np.ones(self.n)
        self._Uvar = np.inf * np.ones(self.n)
        Lvar = kwargs.get("Lvar", None)
        Uvar = kwargs.get("Uvar", None)
        if Lvar is not None or Uvar is not None:
            Lvar = self._Lvar if Lvar is None else Lvar
            Uvar = self._Uvar if Uvar is None else Uvar
            self.set_bounds(Lvar, Uvar)

        self._x0 = np.zeros(self.n)
        if kwargs.get("x0", None) is not None:
            self.set_starting_point(kwargs["x0"])

        logger_name = kwargs.get("logger_name", "hsnlp.model")
        self.logger = logging.getLogger(logger_name)
        self.logger.addHandler(logging.NullHandler())

    # Dimensions.

    @property
    def n(self):
        """Number of variables."""
        return self._n

    @property
    def nvar(self):
        """Number of variables."""
        return self._n

    @property
    def m(self):
        """Number of constraint components, over all constraints."""
        return sum(cons.m for cons in self._constraints)

    @property
    def ncon(self):
        """Number of constraint components, over all constraints."""
        return self.m

    @property
    def backend(self):
        """Numeric backend of the objective, used for assembled Jacobians."""
        return self.objective.backend

    @property
    def constraints(self):
        """Tuple of :class:`Constraint` in order of insertion."""
        return tuple(self._constraints)

    # Assembly.

    def add_constraint(self, function, intervals, scales=None):
        """Append the constraint `function(x)` in `intervals`.

        :parameters:
            :function:  a :class:`DifferentiableFunction` of n variables
            :intervals: one (lo, hi) pair per component of `function`
            :scales:    one positive scale per component (default: ones)

        Raise :class:`DimensionMismatch` if the sizes disagree.
        """
        if not isinstance(function, DifferentiableFunction):
            raise TypeError("function should be a DifferentiableFunction")
        if function.n != self.n:
            raise DimensionMismatch("Constraint %s has %d arguments, "
                                    "problem has %d variables" %
                                    (function, function.n, self.n))
        constraint = Constraint(function, intervals, scales)
        self._constraints.append(constraint)
        self.logger.debug("added constraint %s", constraint)
        return constraint

    def _variable_index(self, i):
        try:
            i = operator.index(i)
        except TypeError:
            raise IndexOutOfRange("Invalid variable index %r" % (i,))
        if not 0 <= i < self.n:
            raise IndexOutOfRange("Variable %d out of range [0, %d)" %
                                  (i, self.n))
        return i

    def set_variable_bound(self, i, interval):
        """Set the bounds of variable `i` to `interval`."""
        i = self._variable_index(i)
        lo, hi = as_interval(interval)
        self._Lvar[i] = lo
        self._Uvar[i] = hi

    def set_bounds(self, Lvar, Uvar):
        """Set all variable bounds at once."""
        Lvar = np.array(Lvar, dtype=float).ravel()
        Uvar = np.array(Uvar, dtype=float).ravel()
        if Lvar.size != self.n or Uvar.size != self.n:
            raise DimensionMismatch("Bounds of size %d and %d given for %d "
                                    "variables" % (Lvar.size, Uvar.size,
                                                   self.n))
        if np.any(Lvar > Uvar):
            raise BoundConstraintsError("Lower bounds exceed upper bounds at "
                                        "%s" % where(Lvar > Uvar))
        self._Lvar = Lvar
        self._Uvar = Uvar

    def variable_bound(self, i):
        """Return the bounds of variable `i` as an interval."""
        i = self._variable_index(i)
        return as_interval((self._Lvar[i], self._Uvar[i]))

    def set_starting_point(self, x):
        """Set the starting point to a copy of `x`."""
        x = np.array(x, dtype=float).ravel()
        if x.size != self.n:
            raise DimensionMismatch("Starting point of size %d given for %d "
                                    "variables" % (x.size, self.n))
        self._x0 = x

    @property
    def x0(self):
        """Copy of the starting point."""
        return self._x0.copy()

    @property
    def pi0(self):
        """Initial multipliers, all zero."""
        return np.zeros(self.m)

    @property
    def Lvar(self):
        """Copy of the vector of variable lower bounds."""
        return self._Lvar.copy()

    @property
    def Uvar(self):
        """Copy of the vector of variable upper bounds."""
        return self._Uvar.copy()

    @property
    def Lcon(self):
        """Vector of constraint lower bounds."""
        if not self._constraints:
            return np.empty(0)
        return np.concatenate([cons.lower for cons in self._constraints])

    @property
    def Ucon(self):
        """Vector of constraint upper bounds."""
        if not self._constraints:
            return np.empty(0)
        return np.concatenate([cons.upper for cons in self._constraints])

    @property
    def scales(self):
        """Vector of constraint scale factors."""
        if not self._constraints:
            return np.empty(0)
        return np.concatenate([cons.scales for cons in self._constraints])

    # Index sets of bounds.

    @property
    def lowerB(self):
        """Variables with a finite lower bound only."""
        return where(np.isfinite(self._Lvar) & ~np.isfinite(self._Uvar))

    @property
    def upperB(self):
        """Variables with a finite upper bound only."""
        return where(~np.isfinite(self._Lvar) & np.isfinite(self._Uvar))

    @property
    def rangeB(self):
        """Variables with distinct finite lower and upper bounds."""
        return where(np.isfinite(self._Lvar) & np.isfinite(self._Uvar) &
                     (self._Lvar < self._Uvar))

    @property
    def fixedB(self):
        """Fixed variables."""
        return where(self._Lvar == self._Uvar)

    @property
    def freeB(self):
        """Unbounded variables."""
        return where(~np.isfinite(self._Lvar) & ~np.isfinite(self._Uvar))

    # Index sets of constraint components.

    @property
    def equalC(self):
        """Equality constraints."""
        return where(self.Lcon == self.Ucon)

    @property
    def lowerC(self):
        """Constraints with a finite lower bound only."""
        Lcon, Ucon = self.Lcon, self.Ucon
        return where(np.isfinite(Lcon) & ~np.isfinite(Ucon))

    @property
    def upperC(self):
        """Constraints with a finite upper bound only."""
        Lcon, Ucon = self.Lcon, self.Ucon
        return where(~np.isfinite(Lcon) & np.isfinite(Ucon))

    @property
    def rangeC(self):
        """Constraints with distinct finite lower and upper bounds."""
        Lcon, Ucon = self.Lcon, self.Ucon
        return where(np.isfinite(Lcon) & np.isfinite(Ucon) & (Lcon < Ucon))

    @property
    def freeC(self):
        """Constraints with no finite bound."""
        Lcon, Ucon = self.Lcon, self.Ucon
        return where(~np.isfinite(Lcon) & ~np.isfinite(Ucon))

    # Evaluation.

    def obj(self, x):
        """Evaluate the objective at x."""
        return self.objective.compute(x)[0]

    def grad(self, x):
        """Evaluate the objective gradient at x in the objective's backend."""
        return self.objective.gradient(x)

    def cons(self, x):
        """Evaluate the vector of all constraint components at x."""
        if not self._constraints:
            return np.empty(0)
        return np.concatenate([cons.function.compute(x)
                               for cons in self._constraints])

    def scaled_cons(self, x):
        """Evaluate the constraints at x, multiplied by their scales."""
        return self.scales * self.cons(x)

    def jac(self, x):
        """Evaluate the Jacobian of all constraint components at x.

        Jacobians of individual constraints are stacked in order of
        insertion. The result is a SciPy COO matrix if the objective uses
        the sparse backend and a Numpy array otherwise.
        """
        if self.backend == SPARSE:
            if not self._constraints:
                return sp.coo_matrix((0, self.n))
            blocks = [sp.coo_matrix(cons.function.jacobian(x))
                      for cons in self._constraints]
            return sp.vstack(blocks, format="coo")

        if not self._constraints:
            return np.empty((0, self.n))
        return np.vstack([to_dense(cons.function.jacobian(x))
                          for cons in self._constraints])

    def scaled_jac(self, x):
        """Evaluate the Jacobian of the scaled constraints at x."""
        J = self.jac(x)
        if sp.issparse(J):
            return (sp.diags(self.scales) @ J).tocoo()
        return self.scales[:, np.newaxis] * J

    def primal_feasibility(self, x, c=None):
        """Evaluate the violation of each constraint interval at x.

        Component i is zero when cᴸᵢ ≤ cᵢ(x) ≤ cᵁᵢ and measures the distance
        to the interval otherwise.
        """
        if c is None:
            c = self.cons(x)
        return np.maximum(self.Lcon - c, 0) + np.maximum(c - self.Ucon, 0)

    def bound_violation(self, x):
        """Evaluate the violation of each variable bound at x."""
        x = np.asarray(x, dtype=float)
        return np.maximum(self._Lvar - x, 0) + np.maximum(x - self._Uvar, 0)

    def __str__(self):
        lines = ["Problem Name: %s" % self.name,
                 "Number of Variables: %d" % self.n,
                 "  lower bounds only: %d, upper bounds only: %d, "
                 "two-sided: %d, fixed: %d, free: %d" %
                 (len(self.lowerB), len(self.upperB), len(self.rangeB),
                  len(self.fixedB), len(self.freeB)),
                 "Number of General Constraints: %d" % self.m,
                 "  equalities: %d, lower only: %d, upper only: %d, "
                 "two-sided: %d, free: %d" %
                 (len(self.equalC), len(self.lowerC), len(self.upperC),
                  len(self.rangeC), len(self.freeC)),
                 "Objective: %s" % self.objective]
        for cons in self._constraints:
            lines.append("Constraint: %s" % cons.function)
        return "\n".join(lines)
