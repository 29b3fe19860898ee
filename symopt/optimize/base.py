"""Optimizer base class: model binding, parameters and run setup."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, Protocol, Tuple, Type, TypeVar, Union

import numpy as np

from ..exceptions import NumericalFailureError
from ..expr import CompiledFunction, CompiledGradient, Expr, VariableVector, as_expr, is_normal
from .core import Array, OptimizationResult, PointLike, Status, ValueAndPoint
from .parameters import DescentSettings, OptimizerParameters


class Model(Protocol):
    """Anything that can build an objective over a variable vector."""

    def objective_function(self, x: VariableVector) -> Union[Expr, float]:
        ...


M = TypeVar("M", bound=Model)


class FunctionModel:
    """Adapts a plain callable ``fn(x) -> Expr`` to the model contract."""

    def __init__(self, fn: Callable[[VariableVector], Union[Expr, float]]) -> None:
        self.fn = fn

    def objective_function(self, x: VariableVector) -> Union[Expr, float]:
        return self.fn(x)


class Optimizer(ABC, Generic[M]):
    """Binds a model and optional parameters to an optimization strategy.

    The model is either owned or borrowed:

    * ``Strategy(ModelClass)`` constructs and owns a model;
    * ``Strategy(ModelClass, parameters)`` does the same with parameters;
    * ``Strategy(model)`` or ``Strategy(model, parameters)`` borrows an
      existing instance, which the caller keeps alive;
    * ``Strategy(ModelClass[, parameters], *args, **kwargs)`` forwards the
      remaining arguments to the model constructor.

    ``parameters=`` may also be passed as a keyword in every mode.
    """

    settings_class: Type[DescentSettings] = DescentSettings

    def __init__(
        self,
        model: Union[M, Type[M]],
        *args: Any,
        parameters: Optional[OptimizerParameters] = None,
        **kwargs: Any,
    ) -> None:
        if args and isinstance(args[0], OptimizerParameters):
            if parameters is not None:
                raise TypeError("parameters given both positionally and by keyword.")
            parameters, args = args[0], args[1:]
        if parameters is not None and not isinstance(parameters, OptimizerParameters):
            raise TypeError("parameters must be an OptimizerParameters instance.")

        if isinstance(model, type):
            self._model = model(*args, **kwargs)
            self._owns_model = True
        else:
            if args or kwargs:
                raise TypeError(
                    "Constructor arguments can only be forwarded to a model class."
                )
            self._model = model
            self._owns_model = False
        if not callable(getattr(self._model, "objective_function", None)):
            raise TypeError(
                f"{type(self._model).__name__} does not define objective_function(x)."
            )
        self._parameters = parameters

    @property
    def model(self) -> M:
        return self._model

    @property
    def owns_model(self) -> bool:
        return self._owns_model

    @property
    def parameters(self) -> Optional[OptimizerParameters]:
        return self._parameters

    @property
    def settings(self) -> DescentSettings:
        """Typed options resolved from :attr:`parameters` and defaults."""
        return self.settings_class.from_parameters(self._parameters)

    def _compile(
        self, starting_point: PointLike
    ) -> Tuple[Array, CompiledFunction, CompiledGradient]:
        point = np.array(starting_point, dtype=float)
        if point.ndim != 1 or point.size == 0:
            raise ValueError("Starting point must be a non-empty 1-D sequence.")
        x = VariableVector(point.size)
        objective = as_expr(x.pool, self._model.objective_function(x))
        return point, CompiledFunction(x, objective), CompiledGradient(x, objective)

    def _start(
        self, f: CompiledFunction, point: Array, logger: logging.Logger
    ) -> ValueAndPoint:
        name = type(self).__name__
        value = f(point)
        if not is_normal(value):
            raise NumericalFailureError(
                f"{name}: objective is not finite at the starting point ({value})."
            )
        logger.info("%s: Begin at %s", name, point)
        logger.info("%s: Original objective function = %s", name, value)
        return ValueAndPoint(value, point)

    def _finish(
        self,
        current: ValueAndPoint,
        status: Status,
        iterations: int,
        message: str,
        logger: logging.Logger,
    ) -> OptimizationResult:
        name = type(self).__name__
        logger.info("%s: %s", name, message)
        logger.info("%s: Result = %s", name, current.point)
        logger.info("%s: Objective function = %s", name, current.value)
        return OptimizationResult(
            current.value,
            current.point,
            status=status,
            iterations=iterations,
            message=message,
        )

    @abstractmethod
    def optimize(
        self, starting_point: PointLike, logger: Optional[logging.Logger] = None
    ) -> OptimizationResult:
        """Search for a local minimum starting at ``starting_point``.

        Args:
            starting_point: Initial point; its length fixes the dimension.
            logger: Progress sink. Defaults to the strategy module's logger.

        Raises:
            NumericalFailureError: If no finite candidate can be produced.
            UnsupportedOperatorError: If the objective cannot be differentiated.
        """


__all__ = ["FunctionModel", "Model", "Optimizer"]
