# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import hybridswarm.common.typing as tp
from hybridswarm.common import errors
from hybridswarm.functions.base import Problem
from . import constants
from .particles import Particle


def _generate(problem: Problem) -> np.ndarray:
    candidate = np.array(problem.generate(), dtype=float, copy=True)
    if candidate.shape != (problem.dimension,):
        raise errors.DimensionMismatchError(
            f"Problem generated a candidate of shape {candidate.shape} while its dimension is {problem.dimension}"
        )
    return candidate


def check_bounds(problem: Problem) -> np.ndarray:
    """Returns the bounds of the problem after checking they are consistent with its dimension"""
    bounds = np.asarray(problem.bounds(), dtype=float)
    if bounds.shape != (problem.dimension, 2):
        raise errors.DimensionMismatchError(
            f"Problem bounds are of shape {bounds.shape} while its dimension is {problem.dimension}"
        )
    return bounds


class Swarm:
    """Population of particles sharing a global best position.

    Parameters
    ----------
    problem: Problem
        the problem to minimize
    social_coeff: float
        social coefficient (the particles use social_coeff + ln(2))
    cognitive_coeff: float
        cognitive coefficient (the particles use cognitive_coeff + ln(2))
    random_state: np.random.RandomState
        random state used for velocity updates
    """

    def __init__(
        self,
        problem: Problem,
        *,
        social_coeff: float,
        cognitive_coeff: float,
        random_state: np.random.RandomState,
    ) -> None:
        self.problem = problem
        self.random_state = random_state
        self.dimension = int(problem.dimension)
        self.bounds = check_bounds(problem)
        self.social = constants.effective_coefficient(social_coeff)
        self.cognitive = constants.effective_coefficient(cognitive_coeff)
        self.population: tp.List[Particle] = [
            Particle.from_reference(
                _generate(problem), _generate(problem), cognitive=self.cognitive, social=self.social
            )
            for _ in range(constants.population_size(self.dimension))
        ]
        # may not be valid, it will be replaced by the first valid improvement
        self._global_best = _generate(problem)

    def __len__(self) -> int:
        return len(self.population)

    @property
    def global_best(self) -> np.ndarray:
        return self._global_best.copy()

    def set_global_best(self, global_best: tp.ArrayLike) -> None:
        global_best = np.asarray(global_best, dtype=float)
        if global_best.shape != self._global_best.shape:
            raise errors.DimensionMismatchError(
                f"Global best must be of shape {self._global_best.shape}, got {global_best.shape}"
            )
        self._global_best[:] = global_best

    def fitness(self, particle: Particle) -> float:
        """Loss of the personal best of a particle"""
        return self.problem.evaluate(particle.personal_best)

    def evaluate_population(self) -> None:
        """Updates personal bests and the global best from the current positions.
        Particles out of the feasible region are ignored ("invisible wall").
        """
        for particle in self.population:
            position = particle.position
            if not self.problem.validate(position):
                continue
            loss = self.problem.evaluate(position)
            if loss < self.problem.evaluate(particle.personal_best):
                particle.set_personal_best(position)
            if loss < self.problem.evaluate(self._global_best):
                self.set_global_best(position)

    def update_population(self) -> None:
        """Moves all particles with respect to the current global best"""
        global_best = self.global_best
        for particle in self.population:
            particle.update_velocity(global_best, self.random_state)
            particle.update_position()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={len(self)}, dimension={self.dimension})"
