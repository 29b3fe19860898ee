import numpy as np
import pytest

from symopt.exceptions import UnsupportedOperatorError
from symopt.expr import (
    CompiledFunction,
    CompiledGradient,
    VariableVector,
    acos,
    asin,
    atan,
    cos,
    differentiate,
    exp,
    gradient,
    log,
    log_sigmoid,
    ramp,
    sigmoid,
    sin,
    sqr,
    sqrt,
    tan,
    unit_step,
)
from symopt.optimize import approx_grad

UNARY = [sqr, sqrt, exp, log, sin, cos, tan, asin, acos, atan, sigmoid, log_sigmoid, ramp]

BINARY = {
    "add": lambda a, b: a + b,
    "sub": lambda a, b: a - b,
    "mul": lambda a, b: a * b,
    "div": lambda a, b: a / b,
    "pow": lambda a, b: a**b,
    "pow_const_exponent": lambda a, b: a**3.0 + b,
    "pow_const_base": lambda a, b: 2.0**a * b,
    "neg": lambda a, b: -a * b,
}


def _check_against_finite_differences(x, expr, points):
    f = CompiledFunction(x, expr)
    g = CompiledGradient(x, expr)
    for point in points:
        np.testing.assert_allclose(g(point), approx_grad(f, point), atol=1e-6)


@pytest.mark.parametrize("fn", UNARY, ids=lambda fn: fn.__name__)
def test_unary_derivatives_match_finite_differences(fn, rng):
    x = VariableVector(2)
    # Argument stays in (0.16, 0.64): inside every function's domain.
    expr = fn(0.5 * x[0] + 0.3 * x[1])
    _check_against_finite_differences(x, expr, rng.uniform(0.2, 0.8, size=(5, 2)))


@pytest.mark.parametrize("name", sorted(BINARY))
def test_binary_derivatives_match_finite_differences(name, rng):
    x = VariableVector(2)
    expr = BINARY[name](x[0], x[1])
    _check_against_finite_differences(x, expr, rng.uniform(0.5, 1.5, size=(5, 2)))


def test_composite_derivative_matches_finite_differences(rng):
    x = VariableVector(3)
    expr = exp(x[0] * x[1]) * sin(x[2]) + log(1.0 + sqr(x[0] - x[2])) / sqrt(2.0 + x[1])
    _check_against_finite_differences(x, expr, rng.uniform(-1.0, 1.0, size=(5, 3)))


def test_derivative_is_memoized():
    x = VariableVector(2)
    f = sin(x[0]) * x[1]
    first = differentiate(f, 0)
    size = len(x.pool)
    second = differentiate(f, 0)
    assert first == second
    assert len(x.pool) == size
    assert (f.handle, 0) in x.pool.derivatives


def test_derivative_of_independent_variable_is_zero():
    x = VariableVector(2)
    d = differentiate(sqr(x[0]), 1)
    assert d.is_constant()
    assert d.node.value == 0.0


def test_linear_derivative_simplifies_to_constant():
    x = VariableVector(1)
    d = differentiate(3.0 * x[0] + 1.0, 0)
    assert d.is_constant()
    assert d.node.value == 3.0


def test_ramp_derivative_is_unit_step():
    x = VariableVector(1)
    d = differentiate(ramp(x[0]), 0)
    assert str(d) == "unit_step(x[0])"


def test_unit_step_is_not_differentiable():
    x = VariableVector(1)
    with pytest.raises(UnsupportedOperatorError) as excinfo:
        differentiate(unit_step(x[0]) * x[0], 0)
    assert excinfo.value.operator == "unit_step"


def test_second_derivative_of_ramp_is_unsupported():
    x = VariableVector(1)
    with pytest.raises(UnsupportedOperatorError):
        differentiate(differentiate(ramp(x[0]), 0), 0)


def test_gradient_requires_matching_pool():
    x = VariableVector(1)
    y = VariableVector(1)
    with pytest.raises(ValueError):
        gradient(sqr(x[0]), y)


def test_negative_index_rejected():
    x = VariableVector(1)
    with pytest.raises(ValueError):
        differentiate(x[0], -1)


def test_deep_sum_differentiates_without_recursion():
    x = VariableVector(2)
    f = x[0]
    for i in range(3000):
        f = f + sqr(x[0] - float(i)) * 1e-3 + x[1]
    g = CompiledGradient(x, f)
    expected_d0 = 1.0 + sum(2e-3 * (1.0 - i) for i in range(3000))
    np.testing.assert_allclose(g([1.0, 0.0]), [expected_d0, 3000.0])
