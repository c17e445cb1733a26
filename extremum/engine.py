"""Optimization engines exposing a common, checker-driven contract.

Each engine is constructed per call, holds a replaceable
``convergence_checker`` and is run once through
``optimize(function, goal, starting_point)``, which returns a
:class:`~extremum.core.PointValuePair` or raises
:class:`~extremum.core.OptimizationError`.

The numerical work is done by SciPy: the Nelder-Mead simplex of
``scipy.optimize.minimize`` and the strong Wolfe line search
``scipy.optimize.line_search`` that drives the conjugate gradient iteration.
"""

from __future__ import annotations

import warnings
from enum import Enum
from typing import Optional

import numpy as np
from scipy import optimize

from .adapters import DifferentiableFunction, MultivariateFunction
from .convergence import SimpleValueChecker
from .core import (
    Array,
    ConvergenceChecker,
    Goal,
    OptimizationError,
    Point,
    PointValuePair,
    as_point,
)
from .logging import get_logger

logger = get_logger(__name__)


class BaseOptimizer:
    """State and bookkeeping shared by all engines."""

    def __init__(
        self,
        convergence_checker: Optional[ConvergenceChecker] = None,
        max_iterations: int = 1000,
        max_evaluations: int = 10_000,
    ) -> None:
        if max_iterations <= 0:
            raise ValueError("max_iterations must be positive.")
        if max_evaluations <= 0:
            raise ValueError("max_evaluations must be positive.")
        self.convergence_checker = convergence_checker
        self.max_iterations = max_iterations
        self.max_evaluations = max_evaluations
        self.iterations = 0
        self.evaluations = 0
        self._sign = 1.0

    def _start(self, goal: Goal) -> None:
        self.iterations = 0
        self.evaluations = 0
        self._sign = -1.0 if goal is Goal.MAXIMIZE else 1.0

    def _objective(self, function: MultivariateFunction, x: Array) -> float:
        """Goal-adjusted objective: engines always minimize this one."""
        self.evaluations += 1
        return self._sign * function.value(x)

    def _converged(self, previous: PointValuePair, current: PointValuePair) -> bool:
        checker = self.convergence_checker
        return checker is not None and checker(self.iterations, previous, current)

    def _pair(self, x: Array, minimized_value: float) -> PointValuePair:
        return PointValuePair(np.array(x, dtype=float), self._sign * float(minimized_value))

    def _fail(self, message: str) -> OptimizationError:
        logger.warning(
            "%s failed after %d iterations (%d evaluations): %s",
            type(self).__name__,
            self.iterations,
            self.evaluations,
            message,
        )
        return OptimizationError(message, self.iterations, self.evaluations)

    def _finish(self, pair: PointValuePair) -> PointValuePair:
        if not np.isfinite(pair.value) or not np.all(np.isfinite(pair.point)):
            raise self._fail("Optimum is not finite.")
        logger.debug(
            "%s finished after %d iterations (%d evaluations), value %g",
            type(self).__name__,
            self.iterations,
            self.evaluations,
            pair.value,
        )
        return pair

    def optimize(
        self, function: MultivariateFunction, goal: Goal, starting_point: Point
    ) -> PointValuePair:
        raise NotImplementedError


class NelderMeadOptimizer(BaseOptimizer):
    """
    Derivative-free simplex search backed by ``scipy.optimize.minimize``.

    The native stopping rule is SciPy's simplex test on ``xatol`` and
    ``fatol``, which inspects the whole simplex and therefore stays inside
    SciPy; ``convergence_checker`` defaults to None. An installed checker is
    consulted after every iteration with the best vertex of the previous and
    current simplex and halts the search when it reports convergence.

    Args:
        xatol: Absolute spread of the simplex vertices accepted as converged.
        fatol: Absolute spread of the vertex values accepted as converged.
        max_iterations: Hard limit on simplex iterations.
        max_evaluations: Hard limit on objective evaluations.
        adaptive: Use dimension-dependent simplex parameters. None enables
            them above ``ADAPTIVE_DIMENSION`` coordinates, where the standard
            parameters stall.
    """

    ADAPTIVE_DIMENSION = 5

    def __init__(
        self,
        xatol: float = 1e-10,
        fatol: float = 1e-12,
        max_iterations: int = 5000,
        max_evaluations: int = 10_000,
        adaptive: Optional[bool] = None,
        convergence_checker: Optional[ConvergenceChecker] = None,
    ) -> None:
        super().__init__(convergence_checker, max_iterations, max_evaluations)
        self.xatol = xatol
        self.fatol = fatol
        self.adaptive = adaptive

    def optimize(
        self, function: MultivariateFunction, goal: Goal, starting_point: Point
    ) -> PointValuePair:
        x0 = as_point(starting_point)
        self._start(goal)
        adaptive = self.adaptive
        if adaptive is None:
            adaptive = x0.size > self.ADAPTIVE_DIMENSION
        # SciPy evaluates x0 first; that value seeds the first comparison.
        previous: Optional[PointValuePair] = None
        halted = False

        def objective(x: Array) -> float:
            nonlocal previous
            value = self._objective(function, x)
            if previous is None:
                previous = self._pair(x, value)
            return value

        def callback(intermediate_result: optimize.OptimizeResult) -> None:
            nonlocal previous, halted
            self.iterations += 1
            current = self._pair(intermediate_result.x, intermediate_result.fun)
            if self._converged(previous, current):
                halted = True
                raise StopIteration
            previous = current

        # SciPy counts iterations from 1 and stops once the count reaches maxiter.
        res = optimize.minimize(
            objective,
            x0,
            method="Nelder-Mead",
            callback=callback,
            options={
                "xatol": self.xatol,
                "fatol": self.fatol,
                "maxiter": self.max_iterations + 1,
                "maxfev": self.max_evaluations,
                "adaptive": adaptive,
            },
        )
        if not halted and not res.success:
            raise self._fail(str(res.message))
        return self._finish(self._pair(res.x, res.fun))


class ConjugateGradientFormula(Enum):
    """Update formula for the conjugate direction coefficient ``beta``."""

    FLETCHER_REEVES = "fletcher-reeves"
    POLAK_RIBIERE = "polak-ribiere"


class ConjugateGradientOptimizer(BaseOptimizer):
    """
    Nonlinear conjugate gradient with strong Wolfe line searches.

    Each iteration moves along the current direction with a step length from
    ``scipy.optimize.line_search`` and then updates the direction with
    ``beta`` from ``formula``. The direction falls back to steepest descent
    every ``n`` iterations, when ``beta`` is negative, or when it stops being
    a descent direction. The default checker compares consecutive objective
    values.

    Two engine-internal tests also end a run successfully: the gradient norm
    dropping below ``gradient_tolerance * max(1, |f|)``, and a failed line
    search along steepest descent whose trial values improve on the current
    value by no more than ``stall_tolerance * max(1, |f|)``. The second one
    is the point where the objective no longer resolves further progress.

    Args:
        formula: Update formula for ``beta``.
        gradient_tolerance: Relative gradient norm treated as a stationary point.
        stall_tolerance: Relative improvement below which a failed line search
            counts as converged.
        max_iterations: Hard limit on iterations.
        max_evaluations: Hard limit on objective plus gradient evaluations.
        line_search_c2: Curvature constant of the strong Wolfe conditions.
            Fletcher-Reeves needs it below 0.5 to keep directions descending.
        convergence_checker: Checker for consecutive iterates. None installs
            a :class:`~extremum.convergence.SimpleValueChecker`.
    """

    def __init__(
        self,
        formula: ConjugateGradientFormula = ConjugateGradientFormula.FLETCHER_REEVES,
        gradient_tolerance: float = 1e-10,
        stall_tolerance: float = 1e-12,
        max_iterations: int = 1000,
        max_evaluations: int = 10_000,
        line_search_c2: float = 0.1,
        convergence_checker: Optional[ConvergenceChecker] = None,
    ) -> None:
        if convergence_checker is None:
            convergence_checker = SimpleValueChecker()
        super().__init__(convergence_checker, max_iterations, max_evaluations)
        if gradient_tolerance < 0:
            raise ValueError("gradient_tolerance must be non-negative.")
        if stall_tolerance < 0:
            raise ValueError("stall_tolerance must be non-negative.")
        if not (0 < line_search_c2 < 1):
            raise ValueError("line_search_c2 must lie in (0, 1).")
        self.formula = ConjugateGradientFormula(formula)
        self.gradient_tolerance = gradient_tolerance
        self.stall_tolerance = stall_tolerance
        self.line_search_c2 = line_search_c2

    def _gradient(self, function: DifferentiableFunction, x: Array) -> Array:
        self.evaluations += 1
        return self._sign * function.gradient(x)

    def _beta(self, grad: Array, grad_new: Array) -> float:
        denominator = float(np.dot(grad, grad))
        if self.formula is ConjugateGradientFormula.FLETCHER_REEVES:
            return float(np.dot(grad_new, grad_new)) / denominator
        return float(np.dot(grad_new, grad_new - grad)) / denominator

    def _line_search(
        self,
        function: DifferentiableFunction,
        x: Array,
        direction: Array,
        grad: Array,
        fx: float,
        old_fx: Optional[float],
    ) -> tuple[Optional[float], Optional[float], float]:
        """Return ``(alpha, new_fx, best_trial)``; alpha is None on failure.

        SciPy hands back its last extrapolated step when it runs out of
        iterations, flagging that only with a ``LineSearchWarning``; such a
        step does not satisfy the Wolfe conditions and is reported as a
        failure here.
        """
        best_trial = fx

        def phi(y: Array) -> float:
            nonlocal best_trial
            value = self._objective(function, y)
            best_trial = min(best_trial, value)
            return value

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            alpha, _, _, new_fx, _, _ = optimize.line_search(
                phi,
                lambda y: self._gradient(function, y),
                x,
                direction,
                gfk=grad,
                old_fval=fx,
                old_old_fval=old_fx,
                c2=self.line_search_c2,
            )
        failed = False
        for record in caught:
            if record.category.__name__ == "LineSearchWarning":
                failed = True
            else:
                warnings.warn_explicit(
                    record.message, record.category, record.filename, record.lineno
                )
        if failed:
            alpha = None
        return alpha, new_fx, best_trial

    def _scale(self, fx: float) -> float:
        return max(1.0, abs(fx))

    def optimize(
        self, function: DifferentiableFunction, goal: Goal, starting_point: Point
    ) -> PointValuePair:
        x = as_point(starting_point)
        n = x.size
        self._start(goal)
        fx = self._objective(function, x)
        grad = self._gradient(function, x)
        old_fx = None
        direction = -grad
        previous = self._pair(x, fx)

        while True:
            grad_norm = float(np.linalg.norm(grad))
            if grad_norm <= self.gradient_tolerance * self._scale(fx):
                return self._finish(previous)
            if self.iterations >= self.max_iterations:
                raise self._fail("Maximum number of iterations exceeded.")
            if self.evaluations >= self.max_evaluations:
                raise self._fail("Maximum number of evaluations exceeded.")
            self.iterations += 1

            alpha, new_fx, best_trial = self._line_search(
                function, x, direction, grad, fx, old_fx
            )
            if alpha is None and np.any(direction != -grad):
                direction = -grad
                alpha, new_fx, best_trial = self._line_search(
                    function, x, direction, grad, fx, None
                )
            if alpha is None:
                if fx - best_trial <= self.stall_tolerance * self._scale(fx):
                    return self._finish(previous)
                raise self._fail("Line search failed to satisfy the Wolfe conditions.")

            x = x + alpha * direction
            if new_fx is None:
                new_fx = self._objective(function, x)
            grad_new = self._gradient(function, x)
            current = self._pair(x, new_fx)
            if self._converged(previous, current):
                return self._finish(current)

            beta = self._beta(grad, grad_new)
            if self.iterations % n == 0 or beta < 0:
                direction = -grad_new
            else:
                direction = -grad_new + beta * direction
                if float(np.dot(direction, grad_new)) >= 0:
                    direction = -grad_new
            old_fx, fx, grad = fx, new_fx, grad_new
            previous = current


__all__ = [
    "BaseOptimizer",
    "ConjugateGradientFormula",
    "ConjugateGradientOptimizer",
    "NelderMeadOptimizer",
]
