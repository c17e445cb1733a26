"""Public entry points: minimize and maximize.

The algorithm family is chosen by call shape. Passing
``partial_derivatives`` selects the conjugate gradient engine, omitting it
selects the Nelder-Mead simplex. The objective itself is never inspected.

Example
-------
>>> import math
>>> from extremum import minimize
>>> point, value = minimize(
...     math.sin, [0.0], partial_derivatives=lambda k: math.cos
... )
>>> round(point[0], 6), round(value, 6)
(-1.570796, -1.0)
"""

from __future__ import annotations

from typing import Optional

from .adapters import as_differentiable_function, as_multivariate_function
from .core import (
    Goal,
    Objective,
    PartialDerivatives,
    Point,
    Result,
    as_point,
    to_result,
)
from .factory import OptionsLike, make_differential_optimizer, make_direct_optimizer
from .logging import get_logger

logger = get_logger(__name__)


def directly_optimize(
    fn: Objective, starting_point: Point, goal: Goal, options: OptionsLike = None
) -> Result:
    """Optimize ``fn`` towards ``goal`` with the derivative-free engine."""
    x0 = as_point(starting_point)
    optimizer = make_direct_optimizer(options)
    logger.debug("direct %s in %d dimensions", goal.value, x0.size)
    pair = optimizer.optimize(as_multivariate_function(fn), goal, x0)
    return to_result(pair)


def differentially_optimize(
    fn: Objective,
    partial_derivatives: PartialDerivatives,
    starting_point: Point,
    goal: Goal,
    options: OptionsLike = None,
) -> Result:
    """Optimize ``fn`` towards ``goal`` with the conjugate gradient engine.

    ``partial_derivatives`` gives the derivative of ``fn`` with respect to its
    k-th argument for every k below ``len(starting_point)``, either as a
    callable ``k -> df/dx_k`` or as a sequence or mapping indexed by k.
    """
    x0 = as_point(starting_point)
    optimizer = make_differential_optimizer(options)
    logger.debug("differential %s in %d dimensions", goal.value, x0.size)
    function = as_differentiable_function(fn, x0.size, partial_derivatives)
    pair = optimizer.optimize(function, goal, x0)
    return to_result(pair)


def minimize(
    fn: Objective,
    starting_point: Point,
    options: OptionsLike = None,
    *,
    partial_derivatives: Optional[PartialDerivatives] = None,
) -> Result:
    """
    Locally minimize ``fn`` starting at ``starting_point``.

    Args:
        fn: Objective taking one positional argument per coordinate.
        starting_point: Initial point, a non-empty sequence of floats.
        options: ``OptimizeOptions`` or a mapping; ``iterations`` caps the
            number of optimizer iterations, other keys are ignored.
        partial_derivatives: Optional provider of ``df/dx_k``: a callable of
            ``k``, or a sequence or mapping indexed by ``k``. When given,
            a conjugate gradient engine is used instead of the simplex.

    Returns:
        ``Result(point, value)`` with ``len(point) == len(starting_point)``.

    Raises:
        InvalidOptionsError: For a non-positive or non-integer ``iterations``.
        OptimizationError: If the engine fails to converge.
    """
    if partial_derivatives is None:
        return directly_optimize(fn, starting_point, Goal.MINIMIZE, options)
    return differentially_optimize(
        fn, partial_derivatives, starting_point, Goal.MINIMIZE, options
    )


def maximize(
    fn: Objective,
    starting_point: Point,
    options: OptionsLike = None,
    *,
    partial_derivatives: Optional[PartialDerivatives] = None,
) -> Result:
    """Locally maximize ``fn``; arguments and errors as for :func:`minimize`."""
    if partial_derivatives is None:
        return directly_optimize(fn, starting_point, Goal.MAXIMIZE, options)
    return differentially_optimize(
        fn, partial_derivatives, starting_point, Goal.MAXIMIZE, options
    )


__all__ = ["differentially_optimize", "directly_optimize", "maximize", "minimize"]
