# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import hybridswarm.common.typing as tp
from . import base
from . import constants
from .base import registry as registry
from .evolution import EvolutionStep
from .evolution import GeneticEvolution


class ConfPSO(base.ConfiguredOptimizer):
    """`Particle Swarm Optimization <https://en.wikipedia.org/wiki/Particle_swarm_optimization>`_
    is based on a set of particles with their inertia.

    Parameters
    ----------
    social_coeff: float
        attraction toward the global best of the swarm (ln(2) is added to it)
    cognitive_coeff: float
        attraction toward the personal best of each particle (ln(2) is added to it)

    Note
    ----
    - The inertia is fixed to 0.5 * ln(2).
    - The swarm holds 20 + round(sqrt(dimension)) particles.
    - Particles leaving the bounds keep moving but are not evaluated until they come back
      ("invisible wall").
    """

    # pylint: disable=unused-argument
    def __init__(
        self,
        social_coeff: float = constants.SOCIAL_COEFF,
        cognitive_coeff: float = constants.COGNITIVE_COEFF,
    ) -> None:
        self.social_coeff = base.check_coefficient("social_coeff", social_coeff)
        self.cognitive_coeff = base.check_coefficient("cognitive_coeff", cognitive_coeff)
        super().__init__(locals())


class ConfHybridPSO(ConfPSO):
    """Particle swarm optimization with a genetic step evolving the swarm at the end of each
    iteration (tournament selection, blended crossover, mutation, survival of the fittest).

    Parameters
    ----------
    social_coeff: float
        attraction toward the global best of the swarm (ln(2) is added to it)
    cognitive_coeff: float
        attraction toward the personal best of each particle (ln(2) is added to it)
    crossover_rate: float
        probability of blended crossover for each pair of the mating pool
    mutation_rate: float
        probability of mutation for each pair which did not go through crossover
    tournament_size: int
        number of contestants of each selection tournament
    mating_pool_scale: int
        ratio between the sizes of the mating pool and of the swarm
    """

    # pylint: disable=unused-argument,too-many-arguments
    def __init__(
        self,
        social_coeff: float = constants.SOCIAL_COEFF,
        cognitive_coeff: float = constants.COGNITIVE_COEFF,
        crossover_rate: float = constants.CROSSOVER_RATE,
        mutation_rate: float = constants.MUTATION_RATE,
        tournament_size: int = constants.TOURNAMENT_SIZE,
        mating_pool_scale: int = constants.MATING_POOL_SCALE,
    ) -> None:
        self.social_coeff = base.check_coefficient("social_coeff", social_coeff)
        self.cognitive_coeff = base.check_coefficient("cognitive_coeff", cognitive_coeff)
        base.ConfiguredOptimizer.__init__(self, locals())

    def _make_evolution(self) -> EvolutionStep:
        keys = ["crossover_rate", "mutation_rate", "tournament_size", "mating_pool_scale"]
        kwargs: tp.Dict[str, tp.Any] = {key: self._config[key] for key in keys}
        return GeneticEvolution(**kwargs)


BasePSO = ConfPSO().set_name("BasePSO", register=True)
HybridPSO = ConfHybridPSO().set_name("HybridPSO", register=True)
