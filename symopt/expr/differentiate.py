"""Symbolic differentiation of expression graphs.

Derivatives are built as new nodes in the same pool and cached per
``(handle, variable_index)``, so asking for the same partial derivative twice
returns the existing graph instead of rebuilding it.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from ..exceptions import UnsupportedOperatorError
from .core import Expr, ExpressionPool, NodeKind, VariableVector
from .functions import cos, exp, log, sigmoid, sin, sqrt, unit_step

UnaryRule = Callable[[Expr, Expr], Expr]
BinaryRule = Callable[[Expr, Expr, Expr, Expr], Expr]


def _pow_rule(a: Expr, b: Expr, da: Expr, db: Expr) -> Expr:
    if b.is_constant():
        return b * a ** (b - 1.0) * da
    return a**b * (db * log(a) + b * da / a)


# Rules receive the argument(s) and their derivative(s) w.r.t. the variable.
_UNARY_RULES: Dict[str, UnaryRule] = {
    "neg": lambda a, da: -da,
    "sqr": lambda a, da: 2.0 * a * da,
    "sqrt": lambda a, da: da / (2.0 * sqrt(a)),
    "exp": lambda a, da: exp(a) * da,
    "log": lambda a, da: da / a,
    "sin": lambda a, da: cos(a) * da,
    "cos": lambda a, da: -(sin(a) * da),
    "tan": lambda a, da: da / (cos(a) * cos(a)),
    "asin": lambda a, da: da / sqrt(1.0 - a * a),
    "acos": lambda a, da: -(da / sqrt(1.0 - a * a)),
    "atan": lambda a, da: da / (1.0 + a * a),
    "sigmoid": lambda a, da: sigmoid(a) * (1.0 - sigmoid(a)) * da,
    "log_sigmoid": lambda a, da: (1.0 - sigmoid(a)) * da,
    "ramp": lambda a, da: unit_step(a) * da,
}

_BINARY_RULES: Dict[str, BinaryRule] = {
    "add": lambda a, b, da, db: da + db,
    "sub": lambda a, b, da, db: da - db,
    "mul": lambda a, b, da, db: da * b + a * db,
    "div": lambda a, b, da, db: (da * b - a * db) / (b * b),
    "pow": _pow_rule,
}


def _derive_node(pool: ExpressionPool, handle: int, index: int) -> int:
    node = pool.node(handle)
    if node.kind is NodeKind.CONSTANT:
        return pool.constant(0.0)
    if node.kind is NodeKind.VARIABLE:
        return pool.constant(1.0 if node.index == index else 0.0)

    args = [Expr(pool, h) for h in node.args]
    dargs = [Expr(pool, pool.derivatives[(h, index)]) for h in node.args]
    if node.kind is NodeKind.UNARY:
        rule = _UNARY_RULES.get(node.op)
        if rule is None:
            raise UnsupportedOperatorError(node.op)
        return rule(args[0], dargs[0]).handle
    rule = _BINARY_RULES.get(node.op)
    if rule is None:
        raise UnsupportedOperatorError(node.op)
    return rule(args[0], args[1], dargs[0], dargs[1]).handle


def differentiate(expr: Expr, index: int) -> Expr:
    """Return the partial derivative of ``expr`` with respect to ``x[index]``.

    Args:
        expr: Root of the expression graph.
        index: Variable index to differentiate by.

    Returns:
        Expression in the same pool as ``expr``.

    Raises:
        UnsupportedOperatorError: If the graph contains an operator without a
            differentiation rule.
    """
    if index < 0:
        raise ValueError("Variable index must be non-negative.")
    pool = expr.pool
    cache = pool.derivatives
    key = (expr.handle, index)
    if key not in cache:
        # Children precede parents in handle order, so every argument's
        # derivative is cached before the node that needs it.
        for handle in pool.reachable([expr.handle]):
            if (handle, index) not in cache:
                cache[(handle, index)] = _derive_node(pool, handle, index)
    return Expr(pool, cache[key])


def gradient(expr: Expr, x: VariableVector) -> List[Expr]:
    """Return ``[d expr / d x[i] for i in range(len(x))]``."""
    if expr.pool is not x.pool:
        raise ValueError("Expression and variables belong to different pools.")
    return [differentiate(expr, i) for i in range(len(x))]


__all__ = ["differentiate", "gradient"]
