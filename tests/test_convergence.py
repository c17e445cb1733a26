import numpy as np
import pytest

from extremum.convergence import (
    IterationLimitChecker,
    SimplePointChecker,
    SimpleValueChecker,
    customize_optimizer,
    with_iteration_limit,
)
from extremum.core import OptimizeOptions, PointValuePair


def pair(point, value):
    return PointValuePair(np.asarray(point, dtype=float), value)


PREV = pair([1.0, 2.0], 5.0)
CURR = pair([1.5, 2.5], 4.0)


class RecordingChecker:
    def __init__(self, answer: bool):
        self.answer = answer
        self.calls = []

    def __call__(self, iteration, previous, current):
        self.calls.append((iteration, previous, current))
        return self.answer


class DummyOptimizer:
    def __init__(self, checker=None):
        self.convergence_checker = checker


def test_value_checker_thresholds():
    checker = SimpleValueChecker(relative_threshold=1e-3, absolute_threshold=1e-6)
    assert checker(1, pair([0.0], 1000.0), pair([0.0], 1000.5))
    assert not checker(1, pair([0.0], 1000.0), pair([0.0], 1002.0))
    assert checker(1, pair([0.0], 0.0), pair([0.0], 5e-7))
    assert not checker(1, PREV, CURR)


def test_value_checker_default_requires_stalled_value():
    checker = SimpleValueChecker()
    assert checker(3, pair([0.0], -1.0), pair([1.0], -1.0))
    assert not checker(3, pair([0.0], -1.0), pair([1.0], -1.0 + 1e-10))


def test_point_checker_checks_every_coordinate():
    checker = SimplePointChecker(relative_threshold=0.0, absolute_threshold=1e-3)
    assert checker(1, pair([1.0, 2.0], 0.0), pair([1.0005, 2.0], 9.0))
    assert not checker(1, pair([1.0, 2.0], 0.0), pair([1.0005, 2.01], 0.0))


def test_iteration_limit_checker():
    checker = IterationLimitChecker(3)
    assert not checker(2, PREV, CURR)
    assert checker(3, PREV, CURR)
    assert checker(4, PREV, CURR)


def test_composed_checker_is_logical_or():
    never = RecordingChecker(False)
    always = RecordingChecker(True)

    capped_never = with_iteration_limit(never, 5)
    assert not capped_never(4, PREV, CURR)
    assert capped_never(5, PREV, CURR)
    assert never.calls[0] == (4, PREV, CURR)

    capped_always = with_iteration_limit(always, 5)
    assert capped_always(1, PREV, CURR)


def test_composed_checker_without_native_only_caps():
    checker = with_iteration_limit(None, 2)
    assert not checker(1, PREV, CURR)
    assert checker(2, PREV, CURR)


def test_customize_without_iterations_leaves_checker():
    native = RecordingChecker(False)
    optimizer = DummyOptimizer(native)
    assert customize_optimizer(optimizer, OptimizeOptions()) is optimizer
    assert optimizer.convergence_checker is native


def test_customize_installs_cap_in_place():
    native = RecordingChecker(False)
    optimizer = DummyOptimizer(native)
    customize_optimizer(optimizer, OptimizeOptions(iterations=3))
    installed = optimizer.convergence_checker
    assert installed is not native
    assert not installed(2, PREV, CURR)
    assert installed(3, PREV, CURR)
    assert len(native.calls) == 2


@pytest.mark.parametrize("iterations", [1, 7])
def test_cap_only_shortens(iterations):
    native = RecordingChecker(True)
    checker = with_iteration_limit(native, iterations)
    assert all(checker(i, PREV, CURR) for i in range(1, iterations + 1))
