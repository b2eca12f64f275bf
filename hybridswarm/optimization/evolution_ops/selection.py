# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import hybridswarm.common.typing as tp
from hybridswarm.common import errors


X = tp.TypeVar("X")


def tournament(
    population: tp.Sequence[X],
    fitness: tp.Callable[[X], float],
    size: int,
    k: int,
    random_state: np.random.RandomState,
) -> tp.List[X]:
    """Builds a mating pool through k-tournament selection.

    Parameters
    ----------
    population: sequence
        individuals to select from
    fitness: callable
        loss of an individual (the lower the better)
    size: int
        number of tournaments, i.e. size of the mating pool
    k: int
        number of contestants of each tournament, drawn uniformly with replacement
    random_state: np.random.RandomState
        random state used for drawing the contestants

    Returns
    -------
    list
        the winners, which may contain the same individual several times.
        Ties are won by the first drawn contestant.
    """
    if k < 1:
        raise errors.ConfigurationError(f"Tournament size must be at least 1 (got {k})")
    if not population:
        raise errors.HybridSwarmValueError("Cannot select from an empty population")
    pool = []
    for _ in range(size):
        contestants = [population[i] for i in random_state.randint(len(population), size=k)]
        pool.append(min(contestants, key=fitness))
    return pool


def survivors(offspring: tp.Sequence[X], fitness: tp.Callable[[X], float], size: int) -> tp.List[X]:
    """Keeps the size fittest individuals of the offspring (stable with respect to ties)"""
    if len(offspring) < size:
        raise errors.CapacityError(
            f"Offspring pool of size {len(offspring)} cannot refill a population of size {size}"
        )
    return sorted(offspring, key=fitness)[:size]
