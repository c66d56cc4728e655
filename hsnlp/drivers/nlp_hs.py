#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Driver solving Hock-Schittkowski problems and checking known optima."""

import logging
import os
import sys
from argparse import ArgumentParser

from hsnlp.model.backend import DENSE, SPARSE
from hsnlp.optimize import available_solvers, solver_factory
from hsnlp.problems import PROBLEMS, get_problem
from hsnlp.tools.dercheck import DerivativeChecker
from hsnlp.tools.logs import config_logger
from hsnlp.tools.optlog import OptimizationLogger
from hsnlp.tools.verify import check_small_or_close, process_result


desc = """Solve Hock-Schittkowski test problems with a registered solver and
compare the results with the known optima."""


def make_parser():
    """Create the command-line argument parser."""
    parser = ArgumentParser(description=desc)
    parser.add_argument("problems", nargs="*", default=sorted(PROBLEMS),
                        help="problems to solve (default: all of %s)" %
                        ", ".join(sorted(PROBLEMS)))
    parser.add_argument("-s", "--solver", default="slsqp",
                        choices=available_solvers(),
                        help="solver name (default: slsqp)")
    parser.add_argument("--sparse", action="store_true", default=False,
                        help="evaluate derivatives in sparse format")
    parser.add_argument("-i", "--maxiter", type=int, default=None,
                        help="maximum number of iterations")
    parser.add_argument("-l", "--logdir", default=None,
                        help="directory receiving one optimization log per "
                        "problem")
    parser.add_argument("-c", "--check", action="store_true", default=False,
                        help="check derivatives at the starting point first")
    parser.add_argument("-t", "--tol", type=float, default=1.0e-4,
                        help="tolerance on the solution and optimal value")
    return parser


def solve(name, args, logger):
    """Solve problem `name` and return the list of verification failures."""
    problem = get_problem(name)
    model = problem.build(SPARSE if args.sparse else DENSE)
    expected = problem.expected
    failures = []

    if args.check:
        dcheck = DerivativeChecker(model, model.x0)
        dcheck.check()
        if not dcheck.ok:
            failures.append("derivative check failed")

    f0 = model.obj(model.x0)
    if not check_small_or_close(f0, expected.f0, args.tol):
        failures.append("f(x0) = %g differs from expected %g" %
                        (f0, expected.f0))

    opts = {}
    if args.maxiter is not None:
        opts["maxiter"] = args.maxiter
    solver = solver_factory(args.solver, model, **opts)

    optlog = None
    if args.logdir is not None:
        path = os.path.join(args.logdir, args.solver, "schittkowski",
                            "problem-%s" % name[2:].lstrip("0"))
        optlog = OptimizationLogger(solver, path)

    try:
        result = solver.minimum()
    finally:
        if optlog is not None:
            optlog.close()

    failures.extend(process_result(result, expected, x_tol=args.tol,
                                   f_tol=args.tol))

    logger.info("%8s %5d %5d %6d %10.3e %8.1e %6s %7.3f",
                model.name, model.n, model.m, result.niter, result.f,
                result.cons_violation, result.status, result.tsolve)
    return failures


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    # Create root logger.
    logger = config_logger("hsnlp", "%(name)-6s %(levelname)-5s %(message)s")

    # Create solver logger.
    nprobs = len(args.problems)
    config_logger("hsnlp.solver", "%(name)-12s %(levelname)-5s %(message)s",
                  level=logging.WARN if nprobs > 1 else logging.INFO)
    config_logger("hsnlp.der", "%(name)-9s %(levelname)-8s %(message)s",
                  level=logging.WARN)

    logger.info("%8s %5s %5s %6s %10s %8s %6s %7s", "name", "nvar", "ncon",
                "iter", "f", u"‖c‖", "stat", "time")

    nfail = 0
    for name in args.problems:
        failures = solve(name, args, logger)
        for msg in failures:
            logger.error("%s: %s", name, msg)
        nfail += len(failures) > 0

    return 1 if nfail > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
