"""Local optimization of symbolic objectives.

Example
-------
>>> from symopt.expr import sqr
>>> from symopt.optimize import ConjugateGradientOptimizer, FunctionModel
>>> optimizer = ConjugateGradientOptimizer(
...     FunctionModel, lambda x: sqr(x[0] - 1) + sqr(x[1] + 2)
... )
>>> result = optimizer.optimize([0.0, 0.0])
>>> [round(v, 6) for v in result.point]
[1.0, -2.0]
"""

from .base import FunctionModel, Model, Optimizer
from .conjugate_gradient import ConjugateGradientOptimizer
from .core import NoImprovementTracker, OptimizationResult, Status, ValueAndPoint
from .factory import STRATEGIES, create_optimizer
from .gradient import GradientDescentOptimizer, GradientDescentOptimizerBT
from .line_search import LineSearchResult, backtracking
from .parameters import DescentSettings, LineSearchSettings, OptimizerParameters
from .utils import approx_grad, flip_sign, l2_norm, polak_ribiere, sum_vectors

__all__ = [
    "ConjugateGradientOptimizer",
    "DescentSettings",
    "FunctionModel",
    "GradientDescentOptimizer",
    "GradientDescentOptimizerBT",
    "LineSearchResult",
    "LineSearchSettings",
    "Model",
    "NoImprovementTracker",
    "OptimizationResult",
    "Optimizer",
    "OptimizerParameters",
    "STRATEGIES",
    "Status",
    "ValueAndPoint",
    "approx_grad",
    "backtracking",
    "create_optimizer",
    "flip_sign",
    "l2_norm",
    "polak_ribiere",
    "sum_vectors",
]
