"""Vector helpers shared by the optimization strategies.

Also provides a central-difference gradient used to cross-check symbolic
derivatives.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from ..logging import get_logger

Array = np.ndarray
Objective = Callable[[Array], float]

logger = get_logger(__name__)


def sum_vectors(a: Array, b: Array, scale_b: float, scale_a: float = 1.0) -> Array:
    """Return ``a * scale_a + b * scale_b`` as a new array."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Shape mismatch: {a.shape} vs {b.shape}")
    return a * scale_a + b * scale_b


def l2_norm(v: Array) -> float:
    """Euclidean norm ``sqrt(sum(v_i ** 2))``."""
    return float(np.sqrt(np.dot(v, v)))


def flip_sign(v: Array) -> Array:
    """Negate ``v`` in place and return it."""
    np.negative(v, out=v)
    return v


def polak_ribiere(g_new: Array, g_old: Array) -> float:
    """Polak-Ribiere coefficient ``g_new . (g_new - g_old) / (g_old . g_old)``.

    A zero ``g_old`` has no defined coefficient; a warning is logged and 0.0
    is returned, which restarts conjugate gradient along the steepest descent.
    """
    denominator = float(np.dot(g_old, g_old))
    if denominator == 0.0:
        logger.warning("Polak-Ribiere denominator is zero; restarting direction.")
        return 0.0
    return float(np.dot(g_new, g_new - g_old)) / denominator


def approx_grad(fun: Objective, x: Array, eps: float = 1e-6) -> Array:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei[i] = eps
        grad[i] = (fun(x + ei) - fun(x - ei)) / (2.0 * eps)
    return grad


__all__ = [
    "Array",
    "Objective",
    "approx_grad",
    "flip_sign",
    "l2_norm",
    "polak_ribiere",
    "sum_vectors",
]
