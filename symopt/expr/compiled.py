"""Compiled evaluators for expression graphs.

Compilation linearizes the reachable part of the DAG into a flat instruction
list once; every call then runs that list with numpy ufuncs. Domain errors
(``log(-1)``, ``1 / 0``) yield NaN or infinity instead of raising, and callers
screen results with :func:`is_normal`.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Callable, List, Sequence, Tuple, Union

import numpy as np

from .core import OPERATORS, Expr, ExpressionPool, Number, NodeKind, VariableVector, as_expr
from .differentiate import gradient

Point = Union[Sequence[float], np.ndarray]


def is_normal(value: Any) -> bool:
    """Return True if ``value`` is a finite real number (not NaN or infinite)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


class _Program:
    """Flat instruction list evaluating several roots of one pool."""

    def __init__(self, pool: ExpressionPool, roots: Sequence[int], dim: int) -> None:
        order = pool.reachable(roots)
        slot = {handle: i for i, handle in enumerate(order)}
        self.dim = dim
        self._steps: List[Tuple[NodeKind, Any, Tuple[int, ...]]] = []
        for handle in order:
            node = pool.node(handle)
            if node.kind is NodeKind.CONSTANT:
                self._steps.append((node.kind, node.value, ()))
            elif node.kind is NodeKind.VARIABLE:
                if node.index >= dim:
                    raise ValueError(
                        f"Expression references x[{node.index}] but dimension is {dim}."
                    )
                self._steps.append((node.kind, node.index, ()))
            else:
                fn: Callable[..., Any] = OPERATORS[node.op].fn
                self._steps.append((node.kind, fn, tuple(slot[a] for a in node.args)))
        self._outputs = [slot[r] for r in roots]

    def __len__(self) -> int:
        return len(self._steps)

    def run(self, points: np.ndarray) -> List[Any]:
        if points.shape[-1] != self.dim:
            raise ValueError(
                f"Point has dimension {points.shape[-1]}, expected {self.dim}."
            )
        values: List[Any] = [None] * len(self._steps)
        with np.errstate(all="ignore"):
            for i, (kind, payload, args) in enumerate(self._steps):
                if kind is NodeKind.CONSTANT:
                    values[i] = payload
                elif kind is NodeKind.VARIABLE:
                    values[i] = points[..., payload]
                else:
                    values[i] = payload(*[values[a] for a in args])
        return [values[o] for o in self._outputs]


def _as_points(point: Point) -> np.ndarray:
    return np.asarray(point, dtype=float)


class CompiledFunction:
    """Callable ``f(point) -> float`` built from an expression.

    Example
    -------
    >>> from symopt.expr import VariableVector, CompiledFunction
    >>> x = VariableVector(2)
    >>> f = CompiledFunction(x, x[0] * x[0] + 3 * x[1])
    >>> f([2.0, 1.0])
    7.0
    """

    def __init__(self, x: VariableVector, expr: Union[Expr, Number]) -> None:
        self.expr = as_expr(x.pool, expr)
        self.dim = len(x)
        self._program = _Program(x.pool, [self.expr.handle], self.dim)

    @property
    def size(self) -> int:
        """Number of instructions executed per evaluation."""
        return len(self._program)

    def __call__(self, point: Point) -> float:
        points = _as_points(point)
        if points.ndim != 1:
            raise ValueError("CompiledFunction expects a single point; use evaluate_batch.")
        return float(self._program.run(points)[0])

    def evaluate_batch(self, points: Point) -> np.ndarray:
        """Evaluate at each row of an ``(n, dim)`` array."""
        points = _as_points(points)
        if points.ndim != 2:
            raise ValueError("evaluate_batch expects an array of shape (n, dim).")
        (value,) = self._program.run(points)
        return np.broadcast_to(np.asarray(value, dtype=float), points.shape[:-1]).copy()


class CompiledGradient:
    """Callable ``g(point) -> ndarray`` of partial derivatives.

    The expression is differentiated once per variable at construction; all
    partials share a single compiled program.
    """

    def __init__(self, x: VariableVector, expr: Union[Expr, Number]) -> None:
        self.expr = as_expr(x.pool, expr)
        self.dim = len(x)
        self.partials = gradient(self.expr, x)
        self._program = _Program(x.pool, [p.handle for p in self.partials], self.dim)

    @property
    def size(self) -> int:
        return len(self._program)

    def __call__(self, point: Point) -> np.ndarray:
        points = _as_points(point)
        if points.ndim != 1:
            raise ValueError("CompiledGradient expects a single point; use evaluate_batch.")
        return np.array([float(v) for v in self._program.run(points)], dtype=float)

    def evaluate_batch(self, points: Point) -> np.ndarray:
        """Return an ``(n, dim)`` array of gradients for each row of ``points``."""
        points = _as_points(points)
        if points.ndim != 2:
            raise ValueError("evaluate_batch expects an array of shape (n, dim).")
        batch_shape = points.shape[:-1]
        columns = [
            np.broadcast_to(np.asarray(v, dtype=float), batch_shape)
            for v in self._program.run(points)
        ]
        return np.stack(columns, axis=-1)


__all__ = ["CompiledFunction", "CompiledGradient", "is_normal"]
