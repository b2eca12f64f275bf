# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Default settings of the particle swarm and of its evolution step"""

import math


LOG2 = math.log(2.0)

# swarm
INERTIA = 0.5 * LOG2
SOCIAL_COEFF = 0.5
COGNITIVE_COEFF = 0.5
BUDGET = 1000  # iterations
BASE_POPULATION = 20

# evolution step
CROSSOVER_RATE = 0.25
MUTATION_RATE = 0.1
MATING_POOL_SCALE = 3
TOURNAMENT_SIZE = 6
BLEND_ALPHA = 0.5  # fraction of the parents' spread added on each side during crossover


def effective_coefficient(coeff: float) -> float:
    """Factor applied in the velocity update for a given social or cognitive coefficient"""
    return coeff + LOG2


def population_size(dimension: int) -> int:
    """Number of particles of a swarm for a problem of the given dimension"""
    return BASE_POPULATION + int(round(math.sqrt(dimension)))
