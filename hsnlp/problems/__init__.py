"""Collection of Hock-Schittkowski test problems.

Each problem module exposes ``build(backend)``, returning an
:class:`~hsnlp.model.nlpmodel.NLPModel`, and the reference values in
``expected``.
"""

from hsnlp.problems import hs048, hs066

PROBLEMS = {
    "hs048": hs048,
    "hs066": hs066,
}


def get_problem(name):
    """Return the module of problem `name`, e.g., 'hs048'."""
    try:
        return PROBLEMS[name]
    except KeyError:
        raise KeyError("Unknown problem %r, available: %s" %
                       (name, ", ".join(sorted(PROBLEMS))))
