"""symopt - symbolic differentiation and local optimization of scalar functions."""

__version__ = "0.1.0"

from .exceptions import NumericalFailureError, SymoptError, UnsupportedOperatorError
from .expr import (
    CompiledFunction,
    CompiledGradient,
    Expr,
    VariableVector,
    differentiate,
    gradient,
    is_normal,
)
from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    ConjugateGradientOptimizer,
    FunctionModel,
    GradientDescentOptimizer,
    GradientDescentOptimizerBT,
    OptimizationResult,
    Optimizer,
    OptimizerParameters,
    Status,
    ValueAndPoint,
    create_optimizer,
)

__all__ = [
    "CompiledFunction",
    "CompiledGradient",
    "ConjugateGradientOptimizer",
    "Expr",
    "FunctionModel",
    "GradientDescentOptimizer",
    "GradientDescentOptimizerBT",
    "NumericalFailureError",
    "OptimizationResult",
    "Optimizer",
    "OptimizerParameters",
    "Status",
    "SymoptError",
    "UnsupportedOperatorError",
    "ValueAndPoint",
    "VariableVector",
    "configure_logging",
    "create_optimizer",
    "differentiate",
    "get_logger",
    "gradient",
    "is_normal",
    "set_log_level",
]
