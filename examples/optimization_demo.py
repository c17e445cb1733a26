"""
Example: finding extrema with extremum

Shows the two search paths (simplex without derivatives, conjugate gradient
with them), maximization, and capping a run with the ``iterations`` option.
"""

import math

from extremum import OptimizationError, maximize, minimize


def rosen(x, y):
    return (1 - x) ** 2 + 100 * (y - x**2) ** 2


def example_direct_search():
    """Example: minimizing a bowl without derivatives."""
    print("=" * 60)
    print("Example 1: Direct search")
    print("=" * 60)

    point, value = minimize(lambda x, y: x**2 + y**2, [3.0, 4.0])
    print(f"Minimum point: {point}")
    print(f"Minimum value: {value:.3e}")
    print()


def example_gradient_search():
    """Example: sine with its analytic derivative."""
    print("=" * 60)
    print("Example 2: Conjugate gradient with partial derivatives")
    print("=" * 60)

    low = minimize(math.sin, [0.0], partial_derivatives=lambda k: math.cos)
    high = maximize(math.sin, [0.0], partial_derivatives=lambda k: math.cos)
    print(f"Minimum of sin near 0: x = {low.point[0]:.6f}, value = {low.value:.6f}")
    print(f"Maximum of sin near 0: x = {high.point[0]:.6f}, value = {high.value:.6f}")
    print()


def example_iteration_cap():
    """Example: trading accuracy for a bounded number of iterations."""
    print("=" * 60)
    print("Example 3: Iteration cap on the Rosenbrock function")
    print("=" * 60)

    for iterations in (5, 50, 500):
        point, value = minimize(rosen, [-1.2, 1.0], {"iterations": iterations})
        print(f"iterations={iterations:>4}: point = ({point[0]:.4f}, {point[1]:.4f}), value = {value:.3e}")
    print()


def example_failure():
    """Example: an unbounded objective is reported, not papered over."""
    print("=" * 60)
    print("Example 4: Optimization failure")
    print("=" * 60)

    try:
        minimize(lambda x: x, [0.0], partial_derivatives=lambda k: (lambda x: 1.0))
    except OptimizationError as exc:
        print(f"Optimization failed: {exc}")
    print()


if __name__ == "__main__":
    example_direct_search()
    example_gradient_search()
    example_iteration_cap()
    example_failure()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
