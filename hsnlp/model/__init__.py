"""Differentiable functions, numeric backends and NLP models."""

from hsnlp.model.backend import DENSE, SPARSE
from hsnlp.model.function import DifferentiableFunction
from hsnlp.model.intervals import Interval, make_interval, \
    make_lower_interval, make_upper_interval, make_equality
from hsnlp.model.nlpmodel import Constraint, NLPModel

__all__ = ["DENSE", "SPARSE", "DifferentiableFunction", "Interval",
           "make_interval", "make_lower_interval", "make_upper_interval",
           "make_equality", "Constraint", "NLPModel"]
