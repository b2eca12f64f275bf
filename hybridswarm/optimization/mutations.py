# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import hybridswarm.common.typing as tp
from hybridswarm.common import errors
from . import constants


class Mutator:
    """Class defining crossovers and mutations of positions, and holding a random state used for random generation."""

    def __init__(self, random_state: np.random.RandomState) -> None:
        self.random_state = random_state

    def blend_crossover(
        self,
        parent_a: tp.ArrayLike,
        parent_b: tp.ArrayLike,
        bounds: np.ndarray,
        cut: tp.Optional[int] = None,
        alpha: float = constants.BLEND_ALPHA,
    ) -> tp.Tuple[np.ndarray, np.ndarray]:
        """Blended crossover (BLX-alpha) after a cut point.

        Parameters
        ----------
        parent_a: array-like
            position of the first parent
        parent_b: array-like
            position of the second parent
        bounds: np.ndarray
            (dimension, 2) bounds of the problem, used as parent interval
            where both parents have the same value
        cut: int (optional)
            first blended dimension, drawn uniformly in [0, dimension) if not provided
        alpha: float
            fraction of the parents' spread added on each side of their interval

        Returns
        -------
        tuple
            two offspring positions: each keeps the values of its own parent before the cut,
            and draws values uniformly in [lo - alpha * diff, hi + alpha * diff] from the cut onward
            (no clipping to the bounds).
        """
        parent_a = np.asarray(parent_a, dtype=float)
        parent_b = np.asarray(parent_b, dtype=float)
        dimension = parent_a.size
        if parent_b.shape != parent_a.shape or bounds.shape != (dimension, 2):
            raise errors.DimensionMismatchError(
                f"Incompatible shapes for crossover: {parent_a.shape}, {parent_b.shape} and bounds {bounds.shape}"
            )
        if cut is None:
            cut = self.random_state.randint(dimension)
        low = np.minimum(parent_a, parent_b)[cut:]
        high = np.maximum(parent_a, parent_b)[cut:]
        same = high == low
        low = np.where(same, bounds[cut:, 0], low)
        high = np.where(same, bounds[cut:, 1], high)
        diff = high - low
        children = []
        for parent in (parent_a, parent_b):
            child = np.array(parent, copy=True)
            child[cut:] = self.random_state.uniform(low - alpha * diff, high + alpha * diff)
            children.append(child)
        return children[0], children[1]

    def uniform_mutation(self, position: tp.ArrayLike, bounds: np.ndarray) -> np.ndarray:
        """Redraws one randomly selected variable uniformly within its bounds"""
        out = np.array(position, dtype=float, copy=True)
        if bounds.shape != (out.size, 2):
            raise errors.DimensionMismatchError(
                f"Bounds of shape {bounds.shape} do not match a position of size {out.size}"
            )
        index = self.random_state.randint(out.size)
        out[index] = self.random_state.uniform(bounds[index, 0], bounds[index, 1])
        return out
