"""Elementary functions accepting expressions or plain numbers.

Applied to an :class:`~symopt.expr.core.Expr` they add a node to its pool;
applied to a real number they evaluate immediately, so the same model code can
be used symbolically and numerically.
"""

from __future__ import annotations

from typing import Union

from .core import Expr, Number, _apply

ExprOrNumber = Union[Expr, Number]


def _unary(op: str, a: ExprOrNumber) -> ExprOrNumber:
    if isinstance(a, Expr):
        return Expr(a.pool, a.pool.unary(op, a.handle))
    return _apply(op, float(a))


def sqr(a: ExprOrNumber) -> ExprOrNumber:
    return _unary("sqr", a)


def sqrt(a: ExprOrNumber) -> ExprOrNumber:
    return _unary("sqrt", a)


def exp(a: ExprOrNumber) -> ExprOrNumber:
    return _unary("exp", a)


def log(a: ExprOrNumber) -> ExprOrNumber:
    """Natural logarithm; evaluates to NaN for negative arguments."""
    return _unary("log", a)


def sin(a: ExprOrNumber) -> ExprOrNumber:
    return _unary("sin", a)


def cos(a: ExprOrNumber) -> ExprOrNumber:
    return _unary("cos", a)


def tan(a: ExprOrNumber) -> ExprOrNumber:
    return _unary("tan", a)


def asin(a: ExprOrNumber) -> ExprOrNumber:
    return _unary("asin", a)


def acos(a: ExprOrNumber) -> ExprOrNumber:
    return _unary("acos", a)


def atan(a: ExprOrNumber) -> ExprOrNumber:
    return _unary("atan", a)


def sigmoid(a: ExprOrNumber) -> ExprOrNumber:
    """Logistic function ``1 / (1 + exp(-a))``."""
    return _unary("sigmoid", a)


def log_sigmoid(a: ExprOrNumber) -> ExprOrNumber:
    """Numerically stable ``log(sigmoid(a))``."""
    return _unary("log_sigmoid", a)


def ramp(a: ExprOrNumber) -> ExprOrNumber:
    """``max(a, 0)``."""
    return _unary("ramp", a)


def unit_step(a: ExprOrNumber) -> ExprOrNumber:
    """Heaviside step, 1 for ``a >= 0`` and 0 otherwise. Not differentiable."""
    return _unary("unit_step", a)


__all__ = [
    "acos",
    "asin",
    "atan",
    "cos",
    "exp",
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
