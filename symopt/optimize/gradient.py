"""Gradient descent strategies over compiled symbolic objectives."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..exceptions import NumericalFailureError
from ..expr import is_normal
from ..logging import get_logger
from .base import Optimizer
from .core import NoImprovementTracker, OptimizationResult, PointLike, Status, ValueAndPoint
from .line_search import backtracking
from .parameters import DescentSettings, LineSearchSettings
from .utils import flip_sign, l2_norm, sum_vectors

module_logger = get_logger(__name__)


class GradientDescentOptimizer(Optimizer):
    """Naive gradient descent sampling three step sizes per iteration.

    Each iteration steps against the gradient by every multiplier in
    :attr:`step_sizes` (scaled by ``step_factor``), drops non-finite trials and
    moves to the best remaining one. The current point competes with the
    trials, so the run never moves uphill: when every trial is worse it stays
    put and the no-improvement streak ends the run.

    Recognized parameters: ``max_steps``, ``step_factor``,
    ``min_absolute_per_step_improvement``, ``min_relative_per_step_improvement``,
    ``no_improvement_steps_to_terminate``.
    """

    settings_class = DescentSettings
    step_sizes: Tuple[float, ...] = (0.01, 0.05, 0.2)

    def optimize(
        self, starting_point: PointLike, logger: Optional[logging.Logger] = None
    ) -> OptimizationResult:
        log = logger if logger is not None else module_logger
        name = type(self).__name__
        settings = self.settings
        point, f, g = self._compile(starting_point)
        current = self._start(f, point, log)
        tracker = NoImprovementTracker.from_settings(settings)

        for iteration in range(1, settings.max_steps + 1):
            log.debug(
                "%s: Iteration %d, OF = %s @ %s", name, iteration, current.value, current.point
            )
            grad = g(current.point)
            candidates = []
            for step in self.step_sizes:
                candidate_point = sum_vectors(current.point, grad, -step * settings.step_factor)
                value = f(candidate_point)
                if is_normal(value):
                    log.debug("%s: Value %s at step %s", name, value, step)
                    candidates.append(ValueAndPoint(value, candidate_point))
            if not candidates:
                raise NumericalFailureError(
                    f"{name}: no finite trial point at iteration {iteration}.", iteration
                )
            best = min([current, *candidates])
            if tracker.update(current.value, best.value):
                return self._finish(
                    current, Status.CONVERGED, iteration, "Terminating due to no improvement.", log
                )
            current = best

        return self._finish(
            current,
            Status.MAX_STEPS_REACHED,
            settings.max_steps,
            "Maximum number of steps reached.",
            log,
        )


class GradientDescentOptimizerBT(Optimizer):
    """Gradient descent with a backtracking line search along ``-grad``.

    Stops when the gradient norm drops below ``grad_eps`` (once more than
    ``min_steps`` iterations have run), on the no-improvement streak, or after
    ``max_steps`` iterations.
    """

    settings_class = LineSearchSettings

    def optimize(
        self, starting_point: PointLike, logger: Optional[logging.Logger] = None
    ) -> OptimizationResult:
        log = logger if logger is not None else module_logger
        name = type(self).__name__
        settings = self.settings
        point, f, g = self._compile(starting_point)
        current = self._start(f, point, log)
        tracker = NoImprovementTracker.from_settings(settings)

        for iteration in range(1, settings.max_steps + 1):
            log.debug(
                "%s: Iteration %d, OF = %s @ %s", name, iteration, current.value, current.point
            )
            direction = g(current.point)
            if l2_norm(direction) < settings.grad_eps and iteration > settings.min_steps:
                return self._finish(
                    current,
                    Status.CONVERGED,
                    iteration,
                    "Terminating due to small gradient norm.",
                    log,
                )

            flip_sign(direction)
            search = backtracking(
                f,
                g,
                current.point,
                direction,
                alpha=settings.bt_alpha,
                beta=settings.bt_beta,
                max_steps=settings.bt_max_steps,
            )
            candidate = search.candidate
            if not is_normal(candidate.value):
                raise NumericalFailureError(
                    f"{name}: line search found no finite point at iteration {iteration}.",
                    iteration,
                )
            if tracker.update(current.value, candidate.value):
                return self._finish(
                    current, Status.CONVERGED, iteration, "Terminating due to no improvement.", log
                )
            current = candidate

        return self._finish(
            current,
            Status.MAX_STEPS_REACHED,
            settings.max_steps,
            "Maximum number of steps reached.",
            log,
        )


__all__ = ["GradientDescentOptimizer", "GradientDescentOptimizerBT"]
