import pytest

from symopt.optimize import DescentSettings, LineSearchSettings, OptimizerParameters


def test_get_value_returns_default_until_set():
    params = OptimizerParameters()
    assert params.get_value("foo", 7.0) == 7.0
    params.set_value("foo", 3.0)
    assert params.get_value("foo", 7.0) == 3.0


def test_get_value_casts_to_default_type():
    params = OptimizerParameters(max_steps=12.7, grad_eps=1)
    max_steps = params.get_value("max_steps", 5000)
    assert max_steps == 12
    assert isinstance(max_steps, int)
    grad_eps = params.get_value("grad_eps", 1e-8)
    assert grad_eps == 1.0
    assert isinstance(grad_eps, float)


def test_set_value_rejects_non_numeric():
    params = OptimizerParameters()
    with pytest.raises(TypeError, match="numeric"):
        params.set_value("max_steps", "100")
    with pytest.raises(TypeError):
        OptimizerParameters(step_factor=None)


def test_mapping_helpers():
    params = OptimizerParameters(a=1, b=2.5)
    assert "a" in params
    assert "c" not in params
    assert len(params) == 2
    assert dict(params.items()) == {"a": 1.0, "b": 2.5}
    assert sorted(params) == ["a", "b"]
    assert params == OptimizerParameters(b=2.5, a=1.0)
    assert "a=1.0" in repr(params)


def test_settings_defaults():
    settings = LineSearchSettings.from_parameters(None)
    assert settings.max_steps == 5000
    assert settings.step_factor == 1.0
    assert settings.min_absolute_per_step_improvement == 1e-25
    assert settings.min_relative_per_step_improvement == 1e-25
    assert settings.no_improvement_steps_to_terminate == 2
    assert settings.min_steps == 3
    assert settings.bt_alpha == 0.5
    assert settings.bt_beta == 0.8
    assert settings.bt_max_steps == 100
    assert settings.grad_eps == 1e-8


def test_settings_resolved_from_parameters():
    params = OptimizerParameters(max_steps=10, bt_beta=0.5, unrelated=1.0)
    settings = LineSearchSettings.from_parameters(params)
    assert settings.max_steps == 10
    assert settings.bt_beta == 0.5
    assert settings.bt_alpha == 0.5
    descent = DescentSettings.from_parameters(params)
    assert descent.max_steps == 10
    assert not hasattr(descent, "bt_beta")


@pytest.mark.parametrize(
    "overrides",
    [
        {"bt_alpha": 1.5},
        {"bt_alpha": 0.0},
        {"bt_beta": 1.0},
        {"bt_max_steps": 0},
        {"grad_eps": -1.0},
        {"max_steps": -1},
        {"step_factor": 0.0},
        {"no_improvement_steps_to_terminate": 0},
    ],
)
def test_settings_validation(overrides):
    with pytest.raises(ValueError):
        LineSearchSettings.from_parameters(OptimizerParameters(**overrides))
