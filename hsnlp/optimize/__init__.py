"""Solver adapters.

Importing this package registers the SciPy-based solvers.
"""

from hsnlp.optimize.solver import Solver, SolverResult, available_solvers, \
    register_solver, solver_factory
from hsnlp.optimize import scipy_solvers  # noqa: F401

__all__ = ["Solver", "SolverResult", "available_solvers", "register_solver",
           "solver_factory"]
