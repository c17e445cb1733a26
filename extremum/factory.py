"""Factory for the engines used by the public entry points."""

from __future__ import annotations

from typing import Any, Mapping, Union

from .convergence import customize_optimizer
from .core import OptimizeOptions
from .engine import (
    ConjugateGradientFormula,
    ConjugateGradientOptimizer,
    NelderMeadOptimizer,
)

OptionsLike = Union[OptimizeOptions, Mapping[str, Any], None]


def make_direct_optimizer(options: OptionsLike = None) -> NelderMeadOptimizer:
    """
    Create a fresh derivative-free optimizer configured by ``options``.

    Raises:
        InvalidOptionsError: If ``options.iterations`` is not a positive integer.
    """
    opts = OptimizeOptions.coerce(options).validate()
    return customize_optimizer(NelderMeadOptimizer(), opts)


def make_differential_optimizer(
    options: OptionsLike = None,
) -> ConjugateGradientOptimizer:
    """
    Create a fresh Fletcher-Reeves conjugate gradient optimizer.

    Raises:
        InvalidOptionsError: If ``options.iterations`` is not a positive integer.
    """
    opts = OptimizeOptions.coerce(options).validate()
    optimizer = ConjugateGradientOptimizer(
        formula=ConjugateGradientFormula.FLETCHER_REEVES
    )
    return customize_optimizer(optimizer, opts)


__all__ = ["OptionsLike", "make_differential_optimizer", "make_direct_optimizer"]
