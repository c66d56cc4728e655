# -*- coding: utf-8 -*-
"""Demo of dense and sparse derivative backends.

Each Hock-Schittkowski problem is solved with every registered solver,
once with dense and once with sparse derivatives.
"""

from hsnlp.model.backend import BACKENDS
from hsnlp.optimize import available_solvers, solver_factory
from hsnlp.problems import PROBLEMS, get_problem
import sys

headerfmt = "%-7s %-7s %-13s %-12s %-7s %-5s %-6s %-5s\n"
header = headerfmt % ("problem", "backend", "solver", "f", u"‖c‖", "iter",
                      "status", "time")
format = "%-7s %-7s %-13s %-12.6e %-7.1e %-5d %-6s %-5.2f\n"
sys.stdout.write(header)

for problem_name in sys.argv[1:] or sorted(PROBLEMS):
    problem = get_problem(problem_name)
    for backend in BACKENDS:
        for solver_name in available_solvers():
            model = problem.build(backend)
            result = solver_factory(solver_name, model).minimum()

            # Output final statistics
            sys.stdout.write(format % (model.name, backend, solver_name,
                                       result.f, result.cons_violation,
                                       result.niter, result.status,
                                       result.tsolve))
