"""extremum - local minimization and maximization behind one call.

``minimize``/``maximize`` pick a Nelder-Mead simplex search when only the
objective is given and a Fletcher-Reeves conjugate gradient search when its
partial derivatives are supplied as well. ``options={"iterations": k}`` caps
the run at ``k`` iterations on top of the engine's own stopping rule.

Example
-------
>>> from extremum import minimize
>>> point, value = minimize(lambda x, y: x**2 + y**2, [3.0, 4.0])
>>> [round(abs(c), 4) for c in point], round(value, 8)
([0.0, 0.0], 0.0)
"""

__version__ = "0.1.0"

from .adapters import (
    DifferentiableFunction,
    MultivariateFunction,
    as_differentiable_function,
    as_multivariate_function,
)
from .api import differentially_optimize, directly_optimize, maximize, minimize
from .convergence import (
    IterationLimitChecker,
    SimplePointChecker,
    SimpleValueChecker,
    customize_optimizer,
    with_iteration_limit,
)
from .core import (
    Goal,
    InvalidOptionsError,
    OptimizationError,
    OptimizeOptions,
    PointValuePair,
    Result,
    to_result,
)
from .engine import (
    ConjugateGradientFormula,
    ConjugateGradientOptimizer,
    NelderMeadOptimizer,
)
from .factory import make_differential_optimizer, make_direct_optimizer
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    "ConjugateGradientFormula",
    "ConjugateGradientOptimizer",
    "DifferentiableFunction",
    "Goal",
    "InvalidOptionsError",
    "IterationLimitChecker",
    "MultivariateFunction",
    "NelderMeadOptimizer",
    "OptimizationError",
    "OptimizeOptions",
    "PointValuePair",
    "Result",
    "SimplePointChecker",
    "SimpleValueChecker",
    "as_differentiable_function",
    "as_multivariate_function",
    "configure_logging",
    "customize_optimizer",
    "differentially_optimize",
    "directly_optimize",
    "get_logger",
    "make_differential_optimizer",
    "make_direct_optimizer",
    "maximize",
    "minimize",
    "set_log_level",
    "to_result",
]
