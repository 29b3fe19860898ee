"""Symbolic expression graphs, differentiation and compiled evaluators.

Example
-------
>>> from symopt.expr import VariableVector, CompiledGradient, sqr
>>> x = VariableVector(2)
>>> g = CompiledGradient(x, sqr(x[0]) + x[0] * x[1])
>>> g([1.0, 2.0]).tolist()
[4.0, 1.0]
"""

from .compiled import CompiledFunction, CompiledGradient, is_normal
from .core import (
    OPERATORS,
    Expr,
    ExpressionPool,
    Node,
    NodeKind,
    Operator,
    VariableVector,
    as_expr,
)
from .differentiate import differentiate, gradient
from .functions import (
    acos,
    asin,
    atan,
    cos,
    exp,
    log,
    log_sigmoid,
    ramp,
    sigmoid,
    sin,
    sqr,
    sqrt,
    tan,
    unit_step,
)

__all__ = [
    "CompiledFunction",
    "CompiledGradient",
    "Expr",
    "ExpressionPool",
    "Node",
    "NodeKind",
    "OPERATORS",
    "Operator",
    "VariableVector",
    "acos",
    "as_expr",
    "asin",
    "atan",
    "cos",
    "differentiate",
    "exp",
    "gradient",
    "is_normal",
    "log",
    "log_sigmoid",
    "ramp",
    "sigmoid",
    "sin",
    "sqr",
    "sqrt",
    "tan",
    "unit_step",
]
