# -*- coding: utf-8 -*-
"""Record the iterations of a solver in a log file.

An :class:`OptimizationLogger` observes a solver and writes, for each
iteration, the objective value, the iterate and the constraint residuals.
It never influences the solver.
"""

import logging
import os
import sys

import numpy as np


def _one_line(a):
    return np.array2string(np.asarray(a), precision=10, separator=", ",
                           max_line_width=sys.maxsize)


class OptimizationLogger(object):
    """Write the iterations of `solver` to the file `path`.

    The logger can be used as a context manager, in which case the file is
    closed and the logger detached from the solver on exit.
    """

    def __init__(self, solver, path, **kwargs):
        """Attach a file logger to a solver.

        :parameters:
            :solver: a :class:`~hsnlp.optimize.solver.Solver` instance
            :path:   path of the log file; parent directories are created

        :keywords:
            :filemode: 'w' to overwrite or 'a' to append (default: 'w')
        """
        self.solver = solver
        self.path = path
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self.handler = logging.FileHandler(path, kwargs.get("filemode", "w"))
        self.handler.setFormatter(logging.Formatter("%(message)s"))
        # Private logger, not registered with the logging manager.
        self.log = logging.Logger("hsnlp.optlog", logging.INFO)
        self.log.propagate = False
        self.log.addHandler(self.handler)

        model = solver.model
        self.log.info("problem: %s, solver: %s", model.name, solver.name)
        self.log.info("nvar: %d, ncon: %d", model.n, model.m)
        solver.add_observer(self)

    def __call__(self, iteration, x, f, residuals):
        self.log.info("%d  f = %.15e  x = %s  residuals = %s", iteration, f,
                      _one_line(x), _one_line(residuals))

    def close(self):
        """Detach from the solver and close the log file."""
        if self.handler is None:
            return
        self.solver.remove_observer(self)
        self.log.removeHandler(self.handler)
        self.handler.close()
        self.handler = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
