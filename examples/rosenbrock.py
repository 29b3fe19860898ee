"""
Example: Minimizing the Rosenbrock function with symopt

Builds the objective symbolically, prints its derivative expressions, then
runs every registered strategy from the classic (-1.2, 1) starting point.
"""

import numpy as np

from symopt import OptimizerParameters, VariableVector, create_optimizer, gradient
from symopt.expr import CompiledFunction, sqr
from symopt.optimize import STRATEGIES


class Rosenbrock:
    """f(x) = (1 - x0)^2 + 100 (x1 - x0^2)^2, minimum 0 at (1, 1)."""

    def objective_function(self, x):
        return sqr(1.0 - x[0]) + 100.0 * sqr(x[1] - sqr(x[0]))


def example_symbolic_gradient():
    """Print the objective, its partial derivatives and a batch evaluation."""
    print("=" * 60)
    print("Symbolic objective and gradient")
    print("=" * 60)
    x = VariableVector(2)
    f = Rosenbrock().objective_function(x)
    print(f"f      = {f}")
    for i, partial in enumerate(gradient(f, x)):
        print(f"df/dx{i} = {partial}")

    grid = np.array([[-1.2, 1.0], [0.0, 0.0], [1.0, 1.0]])
    values = CompiledFunction(x, f).evaluate_batch(grid)
    print(f"f on {grid.tolist()} = {values.tolist()}")
    print()


def example_strategies():
    """Run each strategy on the same problem."""
    print("=" * 60)
    print("Strategies from (-1.2, 1)")
    print("=" * 60)
    # step_factor only scales the three fixed trial steps of plain gradient descent.
    params = OptimizerParameters(max_steps=2000, step_factor=0.01)
    for name in sorted(STRATEGIES):
        result = create_optimizer(name, Rosenbrock, params).optimize([-1.2, 1.0])
        print(f"{name:>22}: f = {result.value:.3e} at {np.round(result.point, 4)}")
        print(f"{'':>22}  {result.iterations} iterations, {result.message}")
    print()


def main():
    example_symbolic_gradient()
    example_strategies()
    best = create_optimizer("gradient_descent_bt", Rosenbrock).optimize([-1.2, 1.0])
    print(f"Final objective value: {best.value:.6e}")


if __name__ == "__main__":
    main()
