"""Factory for creating optimization strategies by name."""

from __future__ import annotations

from typing import Any, Dict, Type

from .base import Optimizer
from .conjugate_gradient import ConjugateGradientOptimizer
from .gradient import GradientDescentOptimizer, GradientDescentOptimizerBT

STRATEGIES: Dict[str, Type[Optimizer]] = {
    "gradient_descent": GradientDescentOptimizer,
    "gradient_descent_bt": GradientDescentOptimizerBT,
    "conjugate_gradient": ConjugateGradientOptimizer,
}


def create_optimizer(name: str, model: Any, *args: Any, **kwargs: Any) -> Optimizer:
    """
    Create an optimizer from a strategy name.

    Args:
        name: Strategy name, case-insensitive. Supported values:
            "gradient_descent", "gradient_descent_bt", "conjugate_gradient".
        model: Model class (owned by the optimizer) or model instance
            (borrowed).
        *args: Optional ``OptimizerParameters`` followed by arguments for the
            model constructor.
        **kwargs: ``parameters=`` and/or keyword arguments for the model
            constructor.

    Returns:
        An optimizer bound to the model.

    Raises:
        ValueError: If the strategy name is not supported.
    """
    strategy = STRATEGIES.get(name.lower())
    if strategy is None:
        raise ValueError(
            f"Unsupported optimizer name '{name}'. "
            f"Supported names: {sorted(STRATEGIES)}"
        )
    return strategy(model, *args, **kwargs)


__all__ = ["STRATEGIES", "create_optimizer"]
