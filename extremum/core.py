"""Core types shared by the adapters, engines and the public entry points."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, NamedTuple, Optional, Sequence, Union

import numpy as np

Array = np.ndarray
Point = Sequence[float]
Objective = Callable[..., float]
PartialDerivatives = Union[
    Callable[[int], Objective], Sequence[Objective], Mapping[int, Objective]
]


class Goal(Enum):
    """Direction of optimization."""

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


@dataclass(frozen=True)
class PointValuePair:
    """Candidate point coupled with the objective value there, as engines report it."""

    point: Array
    value: float


ConvergenceChecker = Callable[[int, PointValuePair, PointValuePair], bool]


class Result(NamedTuple):
    """Located optimum and the objective value at that point."""

    point: tuple[float, ...]
    value: float


class OptimizationError(RuntimeError):
    """Raised when an engine stops without satisfying any convergence criterion."""

    def __init__(self, message: str, iterations: int = 0, evaluations: int = 0):
        super().__init__(message)
        self.iterations = iterations
        self.evaluations = evaluations


class InvalidOptionsError(ValueError):
    """Raised for option values that cannot configure an optimizer."""


@dataclass(frozen=True)
class OptimizeOptions:
    """
    Per-call configuration for :func:`extremum.minimize` and friends.

    Args:
        iterations: Upper bound on the number of optimizer iterations. ``None``
            leaves termination entirely to the engine's native criterion.
    """

    iterations: Optional[int] = None

    @classmethod
    def coerce(
        cls, options: Union["OptimizeOptions", Mapping[str, Any], None]
    ) -> "OptimizeOptions":
        """Build options from ``None``, an instance, or a mapping.

        Keys other than the recognized ones are ignored.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls(iterations=options.get("iterations"))
        raise TypeError(
            f"options must be a mapping or OptimizeOptions, got {type(options).__name__}"
        )

    def validate(self) -> "OptimizeOptions":
        """Return self, raising :class:`InvalidOptionsError` for bad values."""
        iterations = self.iterations
        if iterations is None:
            return self
        if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)):
            raise InvalidOptionsError(
                f"iterations must be a positive integer, got {iterations!r}"
            )
        if iterations <= 0:
            raise InvalidOptionsError(
                f"iterations must be a positive integer, got {iterations}"
            )
        return self


def as_point(starting_point: Point) -> Array:
    """Return ``starting_point`` as a float vector, rejecting empty or nested input."""
    x0 = np.array(starting_point, dtype=float)
    if x0.ndim != 1 or x0.size == 0:
        raise ValueError(
            f"starting point must be a non-empty 1D sequence, got shape {x0.shape}"
        )
    return x0


def to_result(pair: PointValuePair) -> Result:
    """Convert an engine point/value pair into the public :class:`Result`."""
    return Result(
        point=tuple(float(v) for v in np.ravel(pair.point)),
        value=float(pair.value),
    )


__all__ = [
    "Array",
    "ConvergenceChecker",
    "Goal",
    "InvalidOptionsError",
    "Objective",
    "OptimizationError",
    "OptimizeOptions",
    "PartialDerivatives",
    "Point",
    "PointValuePair",
    "Result",
    "as_point",
    "to_result",
]
