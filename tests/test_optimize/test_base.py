import pytest

from objective_models import SumOfSquares
from symopt.optimize import (
    ConjugateGradientOptimizer,
    FunctionModel,
    GradientDescentOptimizer,
    GradientDescentOptimizerBT,
    LineSearchSettings,
    Optimizer,
    OptimizerParameters,
)


def test_default_construction_owns_model():
    optimizer = GradientDescentOptimizer(SumOfSquares)
    assert optimizer.owns_model
    assert isinstance(optimizer.model, SumOfSquares)
    assert optimizer.parameters is None


def test_parameters_only_construction():
    params = OptimizerParameters(max_steps=10)
    optimizer = GradientDescentOptimizerBT(SumOfSquares, params)
    assert optimizer.owns_model
    assert optimizer.parameters is params
    assert optimizer.model.center is None
    assert optimizer.settings.max_steps == 10


def test_bind_by_reference_borrows_model():
    model = SumOfSquares(center=[1.0])
    optimizer = ConjugateGradientOptimizer(model)
    assert not optimizer.owns_model
    assert optimizer.model is model

    with_params = ConjugateGradientOptimizer(model, OptimizerParameters(max_steps=1))
    assert with_params.model is model
    assert with_params.settings.max_steps == 1


def test_borrowed_model_changes_are_visible():
    model = SumOfSquares(center=[1.0])
    optimizer = GradientDescentOptimizerBT(model)
    model.center = [-4.0]
    res = optimizer.optimize([0.0])
    assert res.point[0] == pytest.approx(-4.0, abs=1e-4)


def test_forwarding_construction():
    optimizer = GradientDescentOptimizer(SumOfSquares, [1.0, 2.0])
    assert optimizer.owns_model
    assert optimizer.model.center == [1.0, 2.0]
    assert optimizer.parameters is None


def test_forwarding_construction_with_parameters():
    params = OptimizerParameters(step_factor=0.5)
    positional = GradientDescentOptimizer(SumOfSquares, params, [3.0])
    assert positional.parameters is params
    assert positional.model.center == [3.0]

    keyword = GradientDescentOptimizer(SumOfSquares, center=[3.0], parameters=params)
    assert keyword.parameters is params
    assert keyword.model.center == [3.0]


def test_function_model_forwarding():
    optimizer = GradientDescentOptimizer(FunctionModel, lambda x: x[0] * x[0])
    assert optimizer.owns_model
    res = optimizer.optimize([1.0])
    assert res.value < 1e-20


def test_objective_built_once_per_optimize():
    optimizer = ConjugateGradientOptimizer(SumOfSquares)
    optimizer.optimize([1.0, 1.0])
    assert optimizer.model.builds == 1
    optimizer.optimize([2.0, 2.0])
    assert optimizer.model.builds == 2


def test_arguments_for_model_instance_rejected():
    with pytest.raises(TypeError, match="model class"):
        GradientDescentOptimizer(SumOfSquares(), [1.0])


def test_parameters_given_twice_rejected():
    params = OptimizerParameters()
    with pytest.raises(TypeError, match="both"):
        GradientDescentOptimizer(SumOfSquares, params, parameters=params)


def test_parameters_must_be_optimizer_parameters():
    with pytest.raises(TypeError):
        GradientDescentOptimizer(SumOfSquares, parameters={"max_steps": 3})


def test_model_without_objective_rejected():
    class NotAModel:
        pass

    with pytest.raises(TypeError, match="objective_function"):
        GradientDescentOptimizer(NotAModel)


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        Optimizer(SumOfSquares)


def test_strategy_settings_classes():
    assert GradientDescentOptimizerBT(SumOfSquares).settings == LineSearchSettings()
    assert not hasattr(GradientDescentOptimizer(SumOfSquares).settings, "grad_eps")
