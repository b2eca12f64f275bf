# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import warnings
import numpy as np
import hybridswarm.common.typing as tp
from hybridswarm.common import errors
from hybridswarm.common import tools
from . import constants
from .mutations import Mutator
from .particles import Particle
from .swarm import Swarm
from .evolution_ops import selection


logger = logging.getLogger(__name__)


class EvolutionStep(tp.Protocol):
    """Step run on the swarm at the end of each iteration, after the global best was recorded"""

    # pylint: disable=pointless-statement,unused-argument

    def check_capacity(self, population_size: int) -> None:
        """Raises a ConfigurationError if the step cannot run on a population of this size"""
        ...

    def evolve(self, swarm: Swarm, random_state: np.random.RandomState) -> None:
        ...


class NoEvolution:
    """Plain particle swarm: the population is left untouched"""

    def check_capacity(self, population_size: int) -> None:
        pass

    def evolve(self, swarm: Swarm, random_state: np.random.RandomState) -> None:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class GeneticEvolution:
    """Genetic step evolving the particle swarm: tournament selection of a mating pool,
    blended crossover or mutation of the shuffled pairs of the pool, and survival of the
    fittest offspring. Fitness is the loss of the personal best of the particles.

    Parameters
    ----------
    crossover_rate: float
        probability for a pair to go through blended crossover
    mutation_rate: float
        probability for a pair which did not go through crossover to have both
        particles mutated (one variable redrawn within the bounds)
    tournament_size: int
        number of contestants of each tournament
    mating_pool_scale: int
        the mating pool is mating_pool_scale times as large as the population

    Note
    ----
    The offspring pool (mating pool rounded down to an even size) must be at least as large as
    the population, otherwise a CapacityError is raised before the run starts.
    """

    def __init__(
        self,
        crossover_rate: float = constants.CROSSOVER_RATE,
        mutation_rate: float = constants.MUTATION_RATE,
        tournament_size: int = constants.TOURNAMENT_SIZE,
        mating_pool_scale: int = constants.MATING_POOL_SCALE,
    ) -> None:
        self.crossover_rate = crossover_rate
        self.mutation_rate = mutation_rate
        self.tournament_size = tournament_size
        self.mating_pool_scale = mating_pool_scale

    @staticmethod
    def _check_rate(name: str, rate: float) -> float:
        rate = float(rate)
        if not rate >= 0:
            raise errors.ConfigurationError(f"{name} must be non-negative; it was {rate}.")
        if rate > 1:
            warnings.warn(f"{name}={rate} behaves as a rate of 1.", errors.InefficientSettingsWarning)
        return rate

    @staticmethod
    def _check_count(name: str, value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
            raise errors.ConfigurationError(f"{name} must be an integer greater than 0; it was {value}.")
        return int(value)

    @property
    def crossover_rate(self) -> float:
        return self._crossover_rate

    @crossover_rate.setter
    def crossover_rate(self, rate: float) -> None:
        self._crossover_rate = self._check_rate("crossover_rate", rate)

    @property
    def mutation_rate(self) -> float:
        return self._mutation_rate

    @mutation_rate.setter
    def mutation_rate(self, rate: float) -> None:
        self._mutation_rate = self._check_rate("mutation_rate", rate)

    @property
    def tournament_size(self) -> int:
        return self._tournament_size

    @tournament_size.setter
    def tournament_size(self, size: int) -> None:
        self._tournament_size = self._check_count("tournament_size", size)

    @property
    def mating_pool_scale(self) -> int:
        return self._mating_pool_scale

    @mating_pool_scale.setter
    def mating_pool_scale(self, scale: int) -> None:
        self._mating_pool_scale = self._check_count("mating_pool_scale", scale)

    def offspring_size(self, population_size: int) -> int:
        pool_size = population_size * self.mating_pool_scale
        return pool_size - pool_size % 2

    def check_capacity(self, population_size: int) -> None:
        num_offspring = self.offspring_size(population_size)
        if num_offspring < population_size:
            raise errors.CapacityError(
                f"mating_pool_scale={self.mating_pool_scale} yields {num_offspring} offspring, "
                f"which cannot refill a population of size {population_size}"
            )

    def evolve(self, swarm: Swarm, random_state: np.random.RandomState) -> None:
        size = len(swarm)
        self.check_capacity(size)
        mutator = Mutator(random_state)
        pool = selection.tournament(
            swarm.population, swarm.fitness, size * self.mating_pool_scale, self.tournament_size, random_state
        )
        random_state.shuffle(pool)
        offspring: tp.List[Particle] = []
        num_crossovers = num_mutations = 0
        for parent_a, parent_b in tools.pairs(pool):
            # crossover takes precedence, mutation is only drawn when it did not happen
            if random_state.uniform() < self.crossover_rate:
                positions = mutator.blend_crossover(parent_a.position, parent_b.position, swarm.bounds)
                children = [parent.spawn_child(pos) for parent, pos in zip((parent_a, parent_b), positions)]
                num_crossovers += 1
            elif random_state.uniform() < self.mutation_rate:
                children = [
                    parent.spawn_child(mutator.uniform_mutation(parent.position, swarm.bounds))
                    for parent in (parent_a, parent_b)
                ]
                num_mutations += 1
            else:
                children = [parent_a.spawn_child(), parent_b.spawn_child()]
            offspring.extend(children)
        swarm.population = selection.survivors(offspring, swarm.fitness, size)
        logger.debug(
            "Evolved %s pairs (%s crossovers, %s mutations)", len(pool) // 2, num_crossovers, num_mutations
        )

    def __repr__(self) -> str:
        settings = dict(
            crossover_rate=self.crossover_rate,
            mutation_rate=self.mutation_rate,
            tournament_size=self.tournament_size,
            mating_pool_scale=self.mating_pool_scale,
        )
        diff = tools.different_from_defaults(instance=self, instance_dict=settings, check_mismatches=True)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        return f"{self.__class__.__name__}({params})"
