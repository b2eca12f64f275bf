# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import hybridswarm.common.typing as tp
from hybridswarm.common import errors
from . import constants


P = tp.TypeVar("P", bound="Particle")


def _as_vector(x: tp.ArrayLike) -> np.ndarray:
    return np.array(x, dtype=float, copy=True).ravel()


class Particle:
    """Candidate solution of a swarm, moving with its own velocity and
    remembering the best position it has validated (personal best).

    Parameters
    ----------
    position: array-like
        current position of the particle
    personal_best: array-like
        best position the particle has found so far
    velocity: array-like
        velocity along each dimension
    cognitive: float
        factor of the attraction toward the personal best
    social: float
        factor of the attraction toward the global best of the swarm
    inertia: float
        factor applied to the previous velocity

    Note
    ----
    The particle owns copies of the provided vectors, and accessors return copies as well.
    """

    def __init__(
        self,
        position: tp.ArrayLike,
        personal_best: tp.ArrayLike,
        velocity: tp.ArrayLike,
        *,
        cognitive: float,
        social: float,
        inertia: float = constants.INERTIA,
    ) -> None:
        self._position = _as_vector(position)
        self._personal_best = _as_vector(personal_best)
        self._velocity = _as_vector(velocity)
        if not self._position.size == self._personal_best.size == self._velocity.size:
            raise errors.DimensionMismatchError(
                "Particle position, personal best and velocity must be of equal length, got "
                f"{self._position.size}, {self._personal_best.size} and {self._velocity.size}"
            )
        self.cognitive = float(cognitive)
        self.social = float(social)
        self.inertia = float(inertia)

    @classmethod
    def from_reference(
        cls: tp.Type[P], position: tp.ArrayLike, reference: tp.ArrayLike, *, cognitive: float, social: float
    ) -> P:
        """Creates a particle at the given position, with a personal best at the same position
        and a velocity pointing from the reference toward the position (a third of the distance).
        """
        position = _as_vector(position)
        reference = _as_vector(reference)
        if position.size != reference.size:
            raise errors.DimensionMismatchError(
                f"Position and reference must be of equal length, got {position.size} and {reference.size}"
            )
        return cls(position, position, (position - reference) / 3.0, cognitive=cognitive, social=social)

    @property
    def dimension(self) -> int:
        return self._position.size

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity.copy()

    @property
    def personal_best(self) -> np.ndarray:
        return self._personal_best.copy()

    def set_personal_best(self, personal_best: tp.ArrayLike) -> None:
        personal_best = _as_vector(personal_best)
        if personal_best.size != self.dimension:
            raise errors.DimensionMismatchError(
                f"Personal best must be of length {self.dimension}, got {personal_best.size}"
            )
        self._personal_best[:] = personal_best

    def update_position(self) -> None:
        """Moves the particle along its velocity, without any clipping"""
        self._position += self._velocity

    def update_velocity(self, global_best: tp.ArrayLike, random_state: np.random.RandomState) -> None:
        """Updates the velocity from the inertia, the attraction toward the personal best
        and the attraction toward the global best, with fresh uniform weights in [0, 1)
        for each dimension.
        """
        global_best = np.asarray(global_best, dtype=float)
        if global_best.shape != (self.dimension,):
            raise errors.DimensionMismatchError(
                f"Global best must be of length {self.dimension}, got shape {global_best.shape}"
            )
        r_cognitive = random_state.uniform(0.0, 1.0, size=self.dimension)
        r_social = random_state.uniform(0.0, 1.0, size=self.dimension)
        self._velocity = (
            self.inertia * self._velocity
            + self.cognitive * r_cognitive * (self._personal_best - self._position)
            + self.social * r_social * (global_best - self._position)
        )

    def spawn_child(self: P, new_position: tp.Optional[tp.ArrayLike] = None) -> P:
        """Creates an independent copy of the particle, with the same personal best,
        velocity and coefficients. If a new position is provided, it replaces the position.
        """
        position = self._position if new_position is None else _as_vector(new_position)
        if position.size != self.dimension:
            raise errors.DimensionMismatchError(f"New position must be of length {self.dimension}, got {position.size}")
        return self.__class__(
            position,
            self._personal_best,
            self._velocity,
            cognitive=self.cognitive,
            social=self.social,
            inertia=self.inertia,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(position={self._position}, personal_best={self._personal_best})"
