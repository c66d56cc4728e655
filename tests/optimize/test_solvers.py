"""Tests of the solver factory and SciPy solvers on Schittkowski problems."""

import numpy as np
import pytest

from hsnlp.model.backend import DENSE, SPARSE
from hsnlp.model.intervals import make_equality
from hsnlp.model.nlpmodel import NLPModel
from hsnlp.optimize import Solver, SolverResult, available_solvers, \
    solver_factory
from hsnlp.optimize.scipy_solvers import SLSQPSolver, TrustConstrSolver
from hsnlp.problems import PROBLEMS, get_problem, hs048, hs066
from hsnlp.tools.exceptions import DimensionMismatch, UnknownSolver
from hsnlp.tools.verify import process_result


class Diverging(Solver):

    def solve(self):
        raise ZeroDivisionError("division by zero in step computation")


class Cheating(Solver):
    """Claims optimality at the starting point."""

    def solve(self):
        return (self.x, "opt", "done", 0, 1, 1)


def test_available_solvers():
    assert "slsqp" in available_solvers()
    assert "trust-constr" in available_solvers()


def test_factory():
    model = hs048.build()
    solver = solver_factory("slsqp", model)
    assert isinstance(solver, SLSQPSolver)
    assert solver.name == "slsqp"
    solver = solver_factory("trust-constr", model, maxiter=10)
    assert isinstance(solver, TrustConstrSolver)
    assert solver.maxiter == 10


def test_unknown_solver():
    with pytest.raises(UnknownSolver):
        solver_factory("simplex", hs048.build())
    # Still a KeyError.
    with pytest.raises(KeyError):
        solver_factory("", hs048.build())


def test_bad_starting_point():
    with pytest.raises(DimensionMismatch):
        solver_factory("slsqp", hs048.build(), x0=np.zeros(3))


@pytest.mark.parametrize("name", sorted(PROBLEMS))
@pytest.mark.parametrize("backend", [DENSE, SPARSE])
def test_slsqp(name, backend):
    problem = get_problem(name)
    model = problem.build(backend)
    result = solver_factory("slsqp", model).minimum()
    assert isinstance(result, SolverResult)
    assert result.status == "opt"
    assert result.success
    assert result.cons_violation <= 1.0e-6
    assert result.niter > 0
    assert process_result(result, problem.expected) == []


@pytest.mark.parametrize("name", sorted(PROBLEMS))
@pytest.mark.parametrize("backend", [DENSE, SPARSE])
def test_trust_constr(name, backend):
    problem = get_problem(name)
    model = problem.build(backend)
    result = solver_factory("trust-constr", model).minimum()
    assert result.status == "opt"
    assert process_result(result, problem.expected) == []


def scaled_hs048(backend):
    """Problem 48 with badly scaled constraint rows."""
    model = NLPModel(hs048.F(backend), name="hs048")
    model.add_constraint(hs048.G(backend),
                         [make_equality(5.), make_equality(-3.)],
                         scales=[100., 0.01])
    model.set_starting_point(hs048.x0)
    return model


def test_scaled_bounds():
    solver = solver_factory("slsqp", scaled_hs048(DENSE))
    sL, sU = solver.scaled_bounds()
    np.testing.assert_allclose(sL, [500., -0.03])
    np.testing.assert_allclose(sU, [500., -0.03])


@pytest.mark.parametrize("solver_name", ["slsqp", "trust-constr"])
@pytest.mark.parametrize("backend", [DENSE, SPARSE])
def test_scaled_constraints(solver_name, backend):
    model = scaled_hs048(backend)
    result = solver_factory(solver_name, model).minimum()
    assert result.status == "opt"
    # Violation is measured on the unscaled rows.
    assert result.cons_violation <= 1.0e-6
    assert process_result(result, hs048.expected) == []


def test_iteration_limit():
    model = hs066.build()
    solver = solver_factory("slsqp", model, maxiter=1)
    result = solver.minimum()
    assert result.status == "iter"
    assert not result.success
    assert process_result(result, hs066.expected) != []


def test_model_not_modified():
    model = hs066.build()
    solver_factory("slsqp", model).minimum()
    np.testing.assert_array_equal(model.x0, hs066.x0)
    np.testing.assert_array_equal(model.Uvar, [100., 100., 10.])


def test_custom_starting_point():
    model = hs048.build()
    x0 = np.array([2., 2., 2., 2., 2.])
    result = solver_factory("slsqp", model, x0=x0).minimum()
    assert process_result(result, hs048.expected) == []


def test_observers():
    model = hs048.build()
    solver = solver_factory("slsqp", model)
    seen = []
    solver.add_observer(lambda k, x, f, r: seen.append((k, f, r.size)))
    solver.minimum()
    assert [k for k, _, _ in seen] == list(range(1, solver.iter + 1))
    assert all(m == model.m for _, _, m in seen)


def test_numerical_failure():
    result = Diverging(hs048.build()).minimum()
    assert result.status == "fail"
    assert "division" in result.message
    np.testing.assert_array_equal(result.x, hs048.x0)


def test_infeasible_claim():
    # The origin violates the equality constraints of hs048.
    result = Cheating(hs048.build(), x0=np.zeros(5)).minimum()
    assert result.status == "infeas"
    assert result.cons_violation > 1.0e-6


def test_result_str():
    result = solver_factory("slsqp", hs048.build()).minimum()
    assert "status: opt" in str(result)
