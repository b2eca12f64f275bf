# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import hybridswarm.common.typing as tp
from hybridswarm.common import errors


class Problem(tp.Protocol):
    """Black-box objective the optimizers work on.
    Any object providing these methods can be optimized, losses are minimized.
    """

    # pylint: disable=pointless-statement,unused-argument

    @property
    def dimension(self) -> int:
        ...

    def bounds(self) -> np.ndarray:
        """(dimension, 2) array of the minimum and maximum value of each variable"""
        ...

    def validate(self, x: tp.ArrayLike) -> bool:
        ...

    def evaluate(self, x: tp.ArrayLike) -> float:
        ...

    def generate(self) -> np.ndarray:
        ...


def as_bounds(bounds: tp.BoundsLike, dimension: tp.Optional[int] = None) -> np.ndarray:
    """Converts bounds to a (dimension, 2) float array.
    A single (min, max) pair is broadcast to all variables, which requires the dimension.
    """
    array = np.array(bounds, dtype=float)
    if array.shape == (2,):
        if dimension is None:
            raise errors.ConfigurationError("A dimension must be provided along a single (min, max) pair")
        array = np.tile(array, (int(dimension), 1))
    if array.ndim != 2 or array.shape[1] != 2 or not array.shape[0]:
        raise errors.ConfigurationError(f"Bounds must be of shape (dimension, 2), got {array.shape}")
    if dimension is not None and array.shape[0] != dimension:
        raise errors.DimensionMismatchError(
            f"Bounds are provided for {array.shape[0]} variables while dimension is {dimension}"
        )
    if not np.all(np.isfinite(array)):
        raise errors.ConfigurationError("Bounds must be finite")
    if np.any(array[:, 0] > array[:, 1]):
        raise errors.ConfigurationError(f"Lower bounds must not exceed upper bounds:\n{array}")
    return array


class BoundedProblem:
    """Problem defined by a loss function over a box.

    Parameters
    ----------
    function: callable
        loss function taking a 1d numpy array, to be minimized
    bounds: array-like
        either a (dimension, 2) array of (min, max) pairs, or a single
        (min, max) pair used for all variables (then dimension is required)
    dimension: int (optional)
        number of variables
    random_state: np.random.RandomState (optional)
        random state used for generating candidates (seedable)

    Note
    ----
    Candidates are valid if they have the correct length and all variables
    are within their bounds (inclusive).
    """

    def __init__(
        self,
        function: tp.Callable[[np.ndarray], float],
        bounds: tp.BoundsLike,
        dimension: tp.Optional[int] = None,
        random_state: tp.Optional[np.random.RandomState] = None,
    ) -> None:
        assert callable(function)
        self._function = function
        self._bounds = as_bounds(bounds, dimension)
        self._random_state = random_state

    @property
    def dimension(self) -> int:
        return int(self._bounds.shape[0])

    @property
    def function(self) -> tp.Callable[[np.ndarray], float]:
        return self._function

    @property
    def random_state(self) -> np.random.RandomState:
        """Random state candidates are generated from.
        It can be seeded/replaced.
        """
        if self._random_state is None:
            seed = np.random.randint(2 ** 32, dtype=np.uint32)
            self._random_state = np.random.RandomState(seed)
        return self._random_state

    @random_state.setter
    def random_state(self, random_state: np.random.RandomState) -> None:
        self._random_state = random_state

    def bounds(self) -> np.ndarray:
        return np.array(self._bounds, copy=True)

    def validate(self, x: tp.ArrayLike) -> bool:
        x = np.asarray(x, dtype=float)
        if x.shape != (self.dimension,):
            return False
        return bool(np.all(x >= self._bounds[:, 0]) and np.all(x <= self._bounds[:, 1]))

    def evaluate(self, x: tp.ArrayLike) -> float:
        return float(self._function(np.asarray(x, dtype=float)))

    def generate(self) -> np.ndarray:
        """Draws a candidate uniformly within the bounds"""
        low, high = self._bounds[:, 0], self._bounds[:, 1]
        candidate = low + self.random_state.uniform(0.0, 1.0, size=self.dimension) * (high - low)
        if not self.validate(candidate):
            raise errors.InvalidCandidateError(
                f"{self.__class__.__name__} generated an invalid candidate: {candidate}"
            )
        return candidate

    def __call__(self, x: tp.ArrayLike) -> float:
        return self.evaluate(x)

    def __repr__(self) -> str:
        name = getattr(self._function, "__name__", self._function.__class__.__name__)
        return f"{self.__class__.__name__}({name}, dimension={self.dimension})"
