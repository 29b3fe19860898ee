"""Nonlinear conjugate gradient (Polak-Ribiere) with backtracking."""

from __future__ import annotations

import logging
from typing import Optional

from ..exceptions import NumericalFailureError
from ..expr import is_normal
from ..logging import get_logger
from .base import Optimizer
from .core import NoImprovementTracker, OptimizationResult, PointLike, Status
from .line_search import backtracking
from .parameters import LineSearchSettings
from .utils import flip_sign, l2_norm, polak_ribiere, sum_vectors

module_logger = get_logger(__name__)


class ConjugateGradientOptimizer(Optimizer):
    """Conjugate gradient with a non-negative Polak-Ribiere restart.

    The search direction starts as ``-grad(x0)``. After every line search it
    becomes ``omega * direction - grad(x_new)`` with
    ``omega = max(0, polak_ribiere(grad(x_new), grad(x_old)))``.

    Stops when the direction norm drops below ``grad_eps`` (once more than
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

        current_gradient = g(current.point)
        direction = flip_sign(current_gradient.copy())

        for iteration in range(1, settings.max_steps + 1):
            log.debug(
                "%s: Iteration %d, OF = %s @ %s", name, iteration, current.value, current.point
            )
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
            new_gradient = g(candidate.point)
            omega = max(polak_ribiere(new_gradient, current_gradient), 0.0)
            direction = sum_vectors(direction, new_gradient, -1.0, omega)

            if tracker.update(current.value, candidate.value):
                return self._finish(
                    current, Status.CONVERGED, iteration, "Terminating due to no improvement.", log
                )
            current = candidate
            current_gradient = new_gradient

            if l2_norm(direction) < settings.grad_eps and iteration > settings.min_steps:
                return self._finish(
                    current,
                    Status.CONVERGED,
                    iteration,
                    "Terminating due to small direction norm.",
                    log,
                )

        return self._finish(
            current,
            Status.MAX_STEPS_REACHED,
            settings.max_steps,
            "Maximum number of steps reached.",
            log,
        )


__all__ = ["ConjugateGradientOptimizer"]
