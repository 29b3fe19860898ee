import math

import numpy as np
import pytest

from symopt.expr import CompiledFunction, CompiledGradient, VariableVector, is_normal, log, sqr, sqrt


def test_compiled_function_evaluates_expression():
    x = VariableVector(2)
    f = CompiledFunction(x, x[0] * x[0] + 3 * x[1])
    assert f([2.0, 1.0]) == 7.0
    assert isinstance(f(np.array([0.0, 0.0])), float)


def test_compiled_function_is_repeatable():
    x = VariableVector(3)
    f = CompiledFunction(x, sqr(x[0] - x[1]) + sqrt(1.0 + sqr(x[2])))
    point = [0.3, -1.2, 2.0]
    values = {f(point) for _ in range(10)}
    assert len(values) == 1


def test_constant_objective():
    x = VariableVector(2)
    f = CompiledFunction(x, 4.5)
    g = CompiledGradient(x, 4.5)
    assert f([1.0, 2.0]) == 4.5
    np.testing.assert_array_equal(g([1.0, 2.0]), [0.0, 0.0])


def test_compiled_gradient_returns_partials_in_order():
    x = VariableVector(3)
    g = CompiledGradient(x, x[0] * x[1] + 2.0 * x[2])
    np.testing.assert_allclose(g([2.0, 5.0, -1.0]), [5.0, 2.0, 2.0])
    assert len(g.partials) == 3


def test_domain_errors_yield_non_finite_values():
    x = VariableVector(1)
    f = CompiledFunction(x, log(x[0]))
    assert math.isnan(f([-1.0]))
    assert f([0.0]) == -math.inf
    inverse = CompiledFunction(x, 1.0 / x[0])
    assert inverse([0.0]) == math.inf


def test_point_dimension_mismatch_raises():
    x = VariableVector(2)
    f = CompiledFunction(x, x[0] + x[1])
    with pytest.raises(ValueError, match="dimension"):
        f([1.0, 2.0, 3.0])
    g = CompiledGradient(x, x[0] + x[1])
    with pytest.raises(ValueError):
        g([1.0])


def test_expression_referencing_out_of_range_variable():
    pool_owner = VariableVector(3)
    x = VariableVector(2, pool=pool_owner.pool)
    with pytest.raises(ValueError, match="x\\[2\\]"):
        CompiledFunction(x, pool_owner[2] + x[0])


def test_batch_evaluation_matches_pointwise(rng):
    x = VariableVector(2)
    expr = sqr(x[0]) * x[1] + 1.0
    f = CompiledFunction(x, expr)
    g = CompiledGradient(x, expr)
    points = rng.normal(size=(6, 2))
    np.testing.assert_allclose(f.evaluate_batch(points), [f(p) for p in points])
    np.testing.assert_allclose(g.evaluate_batch(points), np.stack([g(p) for p in points]))
    assert g.evaluate_batch(points).shape == (6, 2)


def test_batch_evaluation_broadcasts_constants():
    x = VariableVector(2)
    g = CompiledGradient(x, 2.0 * x[0])
    np.testing.assert_allclose(g.evaluate_batch(np.zeros((3, 2))), [[2.0, 0.0]] * 3)
    f = CompiledFunction(x, 1.5)
    np.testing.assert_allclose(f.evaluate_batch(np.zeros((4, 2))), [1.5] * 4)


def test_single_point_api_rejects_batches():
    x = VariableVector(2)
    f = CompiledFunction(x, x[0])
    with pytest.raises(ValueError):
        f(np.zeros((2, 2)))
    with pytest.raises(ValueError):
        f.evaluate_batch([1.0, 2.0])


def test_program_size_reflects_shared_subexpressions():
    x = VariableVector(1)
    shared = sqr(x[0] + 1.0)
    f = CompiledFunction(x, shared * shared + shared)
    # x, 1.0, x + 1, sqr(.), product, sum
    assert f.size == 6


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, True),
        (-3.5, True),
        (5e-324, True),
        (np.float64(1.0), True),
        (7, True),
        (math.nan, False),
        (math.inf, False),
        (-math.inf, False),
        (np.float64("nan"), False),
        (True, False),
        ("1.0", False),
        (None, False),
        (1 + 2j, False),
    ],
)
def test_is_normal(value, expected):
    assert is_normal(value) is expected
