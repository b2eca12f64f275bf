# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
from hybridswarm.common import errors
from . import selection


def _identity(x: float) -> float:
    return x


def test_tournament_size() -> None:
    pool = selection.tournament([3.0, 1.0, 2.0], _identity, 12, 2, np.random.RandomState(12))
    assert len(pool) == 12
    assert set(pool) <= {1.0, 2.0, 3.0}


def test_tournament_single_contestant_is_uniform() -> None:
    population = list(range(5))
    pool = selection.tournament(population, float, 500, 1, np.random.RandomState(12))
    assert set(pool) == set(population)


def test_tournament_large_k_selects_best() -> None:
    population = [5.0, 4.0, 0.5, 3.0]
    pool = selection.tournament(population, _identity, 20, 100, np.random.RandomState(12))
    np.testing.assert_array_equal(pool, [0.5] * 20)


def test_tournament_ties_first_encountered() -> None:
    population = ["a", "b", "c"]
    contestants = []

    def fitness(x: str) -> float:
        contestants.append(x)
        return 1.0

    pool = selection.tournament(population, fitness, 30, 3, np.random.RandomState(12))
    np.testing.assert_equal(len(contestants), 90)
    np.testing.assert_array_equal(pool, contestants[::3])


def test_tournament_errors() -> None:
    with pytest.raises(errors.ConfigurationError):
        selection.tournament([1.0], _identity, 3, 0, np.random.RandomState(12))
    with pytest.raises(errors.HybridSwarmValueError):
        selection.tournament([], _identity, 3, 2, np.random.RandomState(12))


def test_survivors() -> None:
    output = selection.survivors([4.0, 1.0, 3.0, 0.0, 2.0], _identity, 3)
    np.testing.assert_array_equal(output, [0.0, 1.0, 2.0])


def test_survivors_capacity() -> None:
    with pytest.raises(errors.CapacityError):
        selection.survivors([4.0, 1.0], _identity, 3)
