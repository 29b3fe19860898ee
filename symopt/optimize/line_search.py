"""Backtracking line search with the Armijo sufficient-decrease test."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .core import Array, ValueAndPoint

Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]


@dataclass
class LineSearchResult:
    """Outcome of :func:`backtracking`.

    Attributes:
        candidate: Value and point at the final step.
        step: Final step size, in ``(0, 1]``.
        trials: Number of objective evaluations performed.
        armijo_satisfied: False when the trial budget ran out first; the last
            trial is returned anyway and may not decrease the objective.
    """

    candidate: ValueAndPoint
    step: float
    trials: int
    armijo_satisfied: bool


def backtracking(
    f: Objective,
    grad: Gradient,
    x: Array,
    direction: Array,
    alpha: float = 0.5,
    beta: float = 0.8,
    max_steps: int = 100,
) -> LineSearchResult:
    """Shrink the step ``t`` from 1 by ``beta`` until Armijo holds.

    The accepted step satisfies ``f(x + t d) <= f(x) + alpha * t * grad(x) . d``.
    Non-finite trial values never satisfy the test, so the search also backs
    away from points outside the objective's domain.
    """
    if not (0 < alpha < 1):
        raise ValueError("alpha must lie in (0, 1)")
    if not (0 < beta < 1):
        raise ValueError("beta must lie in (0, 1)")
    if max_steps < 1:
        raise ValueError("max_steps must be at least 1")
    x = np.asarray(x, dtype=float)
    direction = np.asarray(direction, dtype=float)
    fx = f(x)
    slope = float(np.dot(grad(x), direction))

    step = 1.0
    trials = 0
    while True:
        point = x + step * direction
        value = f(point)
        trials += 1
        if value <= fx + alpha * step * slope:
            return LineSearchResult(ValueAndPoint(value, point), step, trials, True)
        if trials >= max_steps:
            return LineSearchResult(ValueAndPoint(value, point), step, trials, False)
        step *= beta


__all__ = ["LineSearchResult", "backtracking"]
