"""hsnlp: dual-backend differentiable functions and constrained NLP models.

Objective and constraint functions expose values, gradients and Jacobians
in dense (Numpy) or sparse (SciPy COO) form. They are assembled into an
:class:`~hsnlp.model.nlpmodel.NLPModel` and handed to a solver obtained
from :func:`~hsnlp.optimize.solver_factory`.
"""

__version__ = "0.1.0"
