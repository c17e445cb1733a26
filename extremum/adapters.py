"""Adapters turning plain Python callables into engine-facing functions.

User objectives take one positional argument per coordinate, ``f(x, y)``.
Engines work on ``numpy`` vectors, so the adapters unpack the vector into the
call and coerce the result to ``float``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .core import Array, Objective, PartialDerivatives


@dataclass(frozen=True)
class MultivariateFunction:
    """Scalar objective evaluated at a point vector."""

    fn: Objective

    def value(self, point: Array) -> float:
        return float(self.fn(*np.ravel(point)))


@dataclass(frozen=True)
class DifferentiableFunction(MultivariateFunction):
    """Objective together with its ``dimension`` partial derivatives."""

    dimension: int
    partial_derivatives: PartialDerivatives

    def partial(self, k: int) -> Objective:
        """Derivative with respect to the k-th argument."""
        provider = self.partial_derivatives
        if callable(provider):
            return provider(k)
        return provider[k]

    def gradient(self, point: Array) -> Array:
        """Evaluate every partial derivative at ``point``, in index order."""
        coords = np.ravel(point)
        return np.array(
            [
                float(self.partial(k)(*coords))
                for k in range(self.dimension)
            ],
            dtype=float,
        )


def as_multivariate_function(fn: Objective) -> MultivariateFunction:
    """Wrap ``fn`` for derivative-free engines."""
    return MultivariateFunction(fn)


def as_differentiable_function(
    fn: Objective, dimension: int, partial_derivatives: PartialDerivatives
) -> DifferentiableFunction:
    """Wrap ``fn`` and its partial derivatives for gradient-based engines.

    ``partial_derivatives`` maps an index k to the derivative of ``fn`` with
    respect to its k-th argument: a callable ``k -> df/dx_k``, a sequence
    indexed by k, or a mapping keyed by k. Entries are looked up on every
    gradient evaluation, so a provider returning a function of the wrong
    arity fails on first use rather than here.
    """
    if isinstance(dimension, bool) or int(dimension) != dimension or dimension <= 0:
        raise ValueError(f"dimension must be a positive integer, got {dimension!r}")
    return DifferentiableFunction(fn, int(dimension), partial_derivatives)


__all__ = [
    "DifferentiableFunction",
    "MultivariateFunction",
    "as_differentiable_function",
    "as_multivariate_function",
]
