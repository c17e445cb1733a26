"""Convergence checkers and their composition with an iteration cap.

A checker is any callable ``checker(iteration, previous, current) -> bool``
where ``previous`` and ``current`` are :class:`~extremum.core.PointValuePair`
instances from consecutive iterations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeVar

import numpy as np

from .core import ConvergenceChecker, OptimizeOptions, PointValuePair
from .logging import get_logger

logger = get_logger(__name__)

# 100 ulp of 1.0 and 100 times the smallest subnormal double.
DEFAULT_RELATIVE_THRESHOLD = 100 * float(np.finfo(float).eps)
DEFAULT_ABSOLUTE_THRESHOLD = 100 * 5e-324


def _close(previous: float, current: float, relative: float, absolute: float) -> bool:
    difference = abs(previous - current)
    size = max(abs(previous), abs(current))
    return difference <= size * relative or difference <= absolute


@dataclass(frozen=True)
class SimpleValueChecker:
    """Converged once the objective value stops changing between iterations."""

    relative_threshold: float = DEFAULT_RELATIVE_THRESHOLD
    absolute_threshold: float = DEFAULT_ABSOLUTE_THRESHOLD

    def __call__(
        self, iteration: int, previous: PointValuePair, current: PointValuePair
    ) -> bool:
        return _close(
            float(previous.value),
            float(current.value),
            self.relative_threshold,
            self.absolute_threshold,
        )


@dataclass(frozen=True)
class SimplePointChecker:
    """Converged once every coordinate stops changing between iterations."""

    relative_threshold: float = DEFAULT_RELATIVE_THRESHOLD
    absolute_threshold: float = DEFAULT_ABSOLUTE_THRESHOLD

    def __call__(
        self, iteration: int, previous: PointValuePair, current: PointValuePair
    ) -> bool:
        prev = np.ravel(previous.point)
        curr = np.ravel(current.point)
        return all(
            _close(float(p), float(c), self.relative_threshold, self.absolute_threshold)
            for p, c in zip(prev, curr)
        )


@dataclass(frozen=True)
class IterationLimitChecker:
    """Converged as soon as ``iterations`` iterations have run."""

    iterations: int

    def __call__(
        self, iteration: int, previous: PointValuePair, current: PointValuePair
    ) -> bool:
        return iteration >= self.iterations


def with_iteration_limit(
    native: Optional[ConvergenceChecker], iterations: int
) -> ConvergenceChecker:
    """Return a checker reporting convergence when ``native`` does or the cap is hit.

    ``native`` may be None for engines that apply their own criterion
    internally; the result then only enforces the cap.
    """
    cap = IterationLimitChecker(iterations)

    def converged(
        iteration: int, previous: PointValuePair, current: PointValuePair
    ) -> bool:
        if native is not None and native(iteration, previous, current):
            return True
        return cap(iteration, previous, current)

    return converged


_OptimizerT = TypeVar("_OptimizerT")


def customize_optimizer(optimizer: _OptimizerT, options: OptimizeOptions) -> _OptimizerT:
    """Install the iteration cap from ``options`` on ``optimizer`` in place."""
    if options.iterations is None:
        return optimizer
    logger.debug(
        "capping %s at %d iterations", type(optimizer).__name__, options.iterations
    )
    optimizer.convergence_checker = with_iteration_limit(
        optimizer.convergence_checker, options.iterations
    )
    return optimizer


__all__ = [
    "DEFAULT_ABSOLUTE_THRESHOLD",
    "DEFAULT_RELATIVE_THRESHOLD",
    "IterationLimitChecker",
    "SimplePointChecker",
    "SimpleValueChecker",
    "customize_optimizer",
    "with_iteration_limit",
]
