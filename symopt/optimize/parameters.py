"""Named numeric optimizer configuration."""

from __future__ import annotations

import numbers
from dataclasses import dataclass, fields
from typing import Dict, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T", int, float)


class OptimizerParameters:
    """String-keyed map of numeric options.

    Example
    -------
    >>> params = OptimizerParameters(max_steps=100)
    >>> params.get_value("max_steps", 5000)
    100
    >>> params.get_value("grad_eps", 1e-8)
    1e-08
    """

    def __init__(self, **values: float) -> None:
        self._values: Dict[str, float] = {}
        for name, value in values.items():
            self.set_value(name, value)

    def set_value(self, name: str, value: float) -> None:
        """Store ``value`` under ``name``; only real numbers are accepted."""
        if not isinstance(value, numbers.Real):
            raise TypeError(
                f"Parameter '{name}' must be numeric, got {type(value).__name__}."
            )
        self._values[name] = float(value)

    def get_value(self, name: str, default: T) -> T:
        """Return the stored value cast to ``type(default)``, or ``default``."""
        if name not in self._values:
            return default
        return type(default)(self._values[name])

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> Iterator[Tuple[str, float]]:
        return iter(self._values.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptimizerParameters):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"OptimizerParameters({inner})"


@dataclass(frozen=True)
class DescentSettings:
    """Options shared by every strategy.

    Args:
        max_steps: Maximum number of iterations.
        step_factor: Multiplier applied to the sampled gradient step sizes.
        min_absolute_per_step_improvement: Improvements below this count as
            no-improvement steps.
        min_relative_per_step_improvement: Relative improvements below this
            count as no-improvement steps.
        no_improvement_steps_to_terminate: Length of the no-improvement streak
            that ends the run.
    """

    max_steps: int = 5000
    step_factor: float = 1.0
    min_absolute_per_step_improvement: float = 1e-25
    min_relative_per_step_improvement: float = 1e-25
    no_improvement_steps_to_terminate: int = 2

    def __post_init__(self) -> None:
        if self.max_steps < 0:
            raise ValueError("max_steps must be non-negative.")
        if self.step_factor <= 0:
            raise ValueError("step_factor must be positive.")
        if self.no_improvement_steps_to_terminate < 1:
            raise ValueError("no_improvement_steps_to_terminate must be at least 1.")

    @classmethod
    def from_parameters(cls, parameters: Optional[OptimizerParameters]):
        """Resolve every field from ``parameters``, falling back to defaults."""
        if parameters is None:
            return cls()
        defaults = cls()
        return cls(
            **{
                f.name: parameters.get_value(f.name, getattr(defaults, f.name))
                for f in fields(cls)
            }
        )


@dataclass(frozen=True)
class LineSearchSettings(DescentSettings):
    """Options of the backtracking-based strategies.

    Args:
        min_steps: Iterations to run before gradient-norm stopping applies.
        bt_alpha: Armijo sufficient-decrease constant, in (0, 1).
        bt_beta: Step shrink factor, in (0, 1).
        bt_max_steps: Maximum number of trial steps per line search.
        grad_eps: Norm threshold for gradient (or direction) based stopping.
    """

    min_steps: int = 3
    bt_alpha: float = 0.5
    bt_beta: float = 0.8
    bt_max_steps: int = 100
    grad_eps: float = 1e-8

    def __post_init__(self) -> None:
        super().__post_init__()
        if not (0 < self.bt_alpha < 1):
            raise ValueError("bt_alpha must lie in (0, 1)")
        if not (0 < self.bt_beta < 1):
            raise ValueError("bt_beta must lie in (0, 1)")
        if self.bt_max_steps < 1:
            raise ValueError("bt_max_steps must be at least 1.")
        if self.grad_eps < 0:
            raise ValueError("grad_eps must be non-negative.")


__all__ = ["DescentSettings", "LineSearchSettings", "OptimizerParameters"]
