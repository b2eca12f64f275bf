# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import pytest
import numpy as np
from hybridswarm.common import errors
from hybridswarm.common import testing
from . import base
from . import corefuncs


def test_as_bounds() -> None:
    np.testing.assert_array_equal(base.as_bounds((-1, 2), dimension=2), [[-1, 2], [-1, 2]])
    np.testing.assert_array_equal(base.as_bounds([[0, 1], [-3, 3]]), [[0, 1], [-3, 3]])


@testing.parametrized(
    pair_without_dimension=((-1, 1), None, errors.ConfigurationError),
    wrong_shape=([[0, 1, 2]], None, errors.ConfigurationError),
    empty=(np.zeros((0, 2)), None, errors.ConfigurationError),
    inverted=([[1, 0]], None, errors.ConfigurationError),
    infinite=([[0, np.inf]], None, errors.ConfigurationError),
    dimension_mismatch=([[0, 1], [0, 1]], 3, errors.DimensionMismatchError),
)
def test_as_bounds_errors(bounds: tp.Any, dimension: tp.Optional[int], error: tp.Type[Exception]) -> None:
    with pytest.raises(error):
        base.as_bounds(bounds, dimension)


@testing.parametrized(
    inside=([0.0, 5.0], True),
    on_bounds=([-1.0, 10.0], True),
    below=([-1.5, 5.0], False),
    above=([0.0, 10.5], False),
    too_short=([0.0], False),
    too_long=([0.0, 0.0, 0.0], False),
)
def test_validate(x: tp.List[float], expected: bool) -> None:
    problem = base.BoundedProblem(corefuncs.sphere, [[-1, 1], [0, 10]])
    np.testing.assert_equal(problem.validate(x), expected)


def test_generate_is_feasible() -> None:
    problem = base.BoundedProblem(corefuncs.sphere, [[-1, 1], [0, 10], [3, 3]], random_state=np.random.RandomState(12))
    candidates = [problem.generate() for _ in range(1000)]
    for candidate in candidates:
        assert candidate.shape == (3,)
        assert problem.validate(candidate)
    assert len({tuple(c) for c in candidates}) == 1000


def test_generate_is_seedable() -> None:
    problem = corefuncs.get_problem("sphere", 4)
    outputs = []
    for _ in range(2):
        problem.random_state = np.random.RandomState(24)
        outputs.append(problem.generate())
    np.testing.assert_array_equal(outputs[0], outputs[1])


def test_generate_invalid_candidate() -> None:
    class BuggyProblem(base.BoundedProblem):
        def validate(self, x: tp.Any) -> bool:
            return False

    with pytest.raises(errors.InvalidCandidateError):
        BuggyProblem(corefuncs.sphere, (-1, 1), dimension=2).generate()


def test_evaluate() -> None:
    problem = base.BoundedProblem(corefuncs.sphere, (-10, 10), dimension=3)
    output = problem.evaluate([1, 2, 3])
    assert isinstance(output, float)
    np.testing.assert_equal(output, 14.0)
    np.testing.assert_equal(problem([1, 0, 0]), 1.0)
    assert problem.function is corefuncs.sphere


def test_bounds_are_copies() -> None:
    problem = base.BoundedProblem(corefuncs.sphere, (-10, 10), dimension=2)
    problem.bounds()[0, 0] = 100
    np.testing.assert_array_equal(problem.bounds(), [[-10, 10], [-10, 10]])
