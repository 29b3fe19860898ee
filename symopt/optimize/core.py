"""Core result types and convergence bookkeeping shared by all strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Sequence, Union

import numpy as np

if TYPE_CHECKING:
    from .parameters import DescentSettings

Array = np.ndarray
PointLike = Union[Sequence[float], np.ndarray]


class Status(Enum):
    """Terminal outcome of a successful optimization run."""

    CONVERGED = "converged"
    MAX_STEPS_REACHED = "max_steps_reached"


@dataclass(order=True)
class ValueAndPoint:
    """Objective value paired with the point it was evaluated at.

    Instances are ordered by ``value`` only, so ``min()`` over candidates picks
    the one with the lowest objective.
    """

    value: float
    point: Array = field(compare=False)

    def __post_init__(self) -> None:
        self.value = float(self.value)
        self.point = np.array(self.point, dtype=float)


@dataclass(order=True)
class OptimizationResult(ValueAndPoint):
    """Final value and point of a run, with how the run ended.

    Attributes:
        value: Objective value at ``point``.
        point: Final point.
        status: ``Status.CONVERGED`` for early stopping (small gradient or
            direction norm, or the no-improvement streak), otherwise
            ``Status.MAX_STEPS_REACHED``.
        iterations: Number of iterations executed.
        message: Human-readable termination reason.
    """

    status: Status = field(default=Status.MAX_STEPS_REACHED, compare=False)
    iterations: int = field(default=0, compare=False)
    message: str = field(default="", compare=False)

    @property
    def success(self) -> bool:
        return self.status is Status.CONVERGED


@dataclass
class NoImprovementTracker:
    """Counts consecutive iterations whose improvement is below threshold.

    An iteration is a no-improvement step when the absolute improvement is
    below ``min_absolute`` or the improvement relative to ``|previous|`` is
    below ``min_relative``. The relative test is skipped when ``previous`` is
    exactly zero.
    """

    min_absolute: float
    min_relative: float
    steps_to_terminate: int
    streak: int = 0

    @classmethod
    def from_settings(cls, settings: "DescentSettings") -> "NoImprovementTracker":
        return cls(
            min_absolute=settings.min_absolute_per_step_improvement,
            min_relative=settings.min_relative_per_step_improvement,
            steps_to_terminate=settings.no_improvement_steps_to_terminate,
        )

    def is_improvement(self, previous: float, candidate: float) -> bool:
        improvement = previous - candidate
        if improvement < self.min_absolute:
            return False
        # Scaled by |previous| so negative objectives are not read as stalled.
        if previous != 0.0 and improvement / abs(previous) < self.min_relative:
            return False
        return True

    def update(self, previous: float, candidate: float) -> bool:
        """Record one iteration and return True once the streak is long enough."""
        if self.is_improvement(previous, candidate):
            self.streak = 0
            return False
        self.streak += 1
        return self.streak >= self.steps_to_terminate


__all__ = [
    "Array",
    "NoImprovementTracker",
    "OptimizationResult",
    "PointLike",
    "Status",
    "ValueAndPoint",
]
