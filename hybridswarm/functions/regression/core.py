# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from pathlib import Path
import numpy as np
import pandas as pd
import hybridswarm.common.typing as tp
from hybridswarm.common import errors
from ..base import BoundedProblem


NUM_INPUTS = 21  # features of the car price dataset
DATASETS = ("train", "validation", "test")


def read_csv(filepath: tp.PathLike, num_inputs: tp.Optional[int] = None) -> tp.Tuple[np.ndarray, np.ndarray]:
    """Reads a header-less csv file whose last column is the target.

    Returns
    -------
    tuple
        the (num_samples, num_inputs) inputs and the (num_samples,) targets
    """
    try:
        df = pd.read_csv(filepath, header=None)
    except pd.errors.ParserError as e:
        raise errors.HybridSwarmValueError(f"Could not parse {filepath}: {e}") from e
    except pd.errors.EmptyDataError as e:
        raise errors.HybridSwarmValueError(f"No data in {filepath}") from e
    if num_inputs is not None and df.shape[1] != num_inputs + 1:
        raise errors.HybridSwarmValueError(
            f"Expected {num_inputs + 1} columns in {filepath} but got {df.shape[1]}"
        )
    if df.isnull().values.any():
        raise errors.HybridSwarmValueError(f"A line of {filepath} does not contain the correct number of entries")
    data = df.to_numpy(dtype=float)
    return data[:, :-1], data[:, -1]


def get_dataset_filepath(name: str, folder: tp.PathLike = "data") -> Path:
    if name not in DATASETS:
        raise ValueError(f'Must use either the {", ".join(repr(d) for d in DATASETS)} dataset only (got "{name}")')
    return Path(folder) / f"{name}.csv"


class PriceRegression(BoundedProblem):
    """Fits the weights of a tiny feed-forward regression network (one hidden ReLU layer,
    one linear output) by minimizing the mean squared error on a labeled dataset.

    Parameters
    ----------
    inputs: array-like
        (num_samples, num_inputs) features
    targets: array-like
        (num_samples,) values to predict
    hidden: int
        number of hidden units
    bound: float
        every weight and bias is searched in [-bound, bound]
    random_state: np.random.RandomState (optional)
        random state used for generating candidates

    Note
    ----
    Parameters are laid out as: hidden weights (one row of num_inputs values per hidden unit),
    output weights (hidden), hidden biases (hidden), output bias (1).
    """

    def __init__(
        self,
        inputs: tp.ArrayLike,
        targets: tp.ArrayLike,
        hidden: int = 2,
        bound: float = 10.0,
        random_state: tp.Optional[np.random.RandomState] = None,
    ) -> None:
        self.inputs = np.array(inputs, dtype=float, ndmin=2)
        self.targets = np.array(targets, dtype=float).ravel()
        if not self.inputs.shape[0] or self.inputs.shape[0] != self.targets.size:
            raise errors.HybridSwarmValueError(
                f"Inputs and targets must have the same non-zero number of samples, "
                f"got {self.inputs.shape[0]} and {self.targets.size}"
            )
        if hidden < 1:
            raise errors.ConfigurationError(f"At least one hidden unit is required (got {hidden})")
        if not bound > 0:
            raise errors.ConfigurationError(f"bound must be strictly positive (got {bound})")
        self.hidden = int(hidden)
        self.num_inputs = self.inputs.shape[1]
        self.num_weights = self.num_inputs * self.hidden + self.hidden
        dimension = self.num_weights + self.hidden + 1
        super().__init__(self.mean_squared_error, (-bound, bound), dimension=dimension, random_state=random_state)

    @classmethod
    def from_csv(
        cls, filepath: tp.PathLike, num_inputs: tp.Optional[int] = NUM_INPUTS, **kwargs: tp.Any
    ) -> "PriceRegression":
        inputs, targets = read_csv(filepath, num_inputs=num_inputs)
        return cls(inputs, targets, **kwargs)

    @classmethod
    def from_dataset(cls, name: str, folder: tp.PathLike = "data", **kwargs: tp.Any) -> "PriceRegression":
        """Loads one of the "train", "validation" or "test" datasets of the folder"""
        return cls.from_csv(get_dataset_filepath(name, folder), **kwargs)

    def predict(self, params: tp.ArrayLike, inputs: tp.Optional[np.ndarray] = None) -> np.ndarray:
        params = np.asarray(params, dtype=float)
        if params.shape != (self.dimension,):
            raise errors.DimensionMismatchError(f"Expected {self.dimension} parameters but got {params.shape}")
        inputs = self.inputs if inputs is None else np.array(inputs, dtype=float, ndmin=2)
        num_hidden_weights = self.num_inputs * self.hidden
        hidden_weights = params[:num_hidden_weights].reshape(self.hidden, self.num_inputs)
        output_weights = params[num_hidden_weights : self.num_weights]
        hidden_biases = params[self.num_weights : self.num_weights + self.hidden]
        output_bias = params[-1]
        activations = np.maximum(0.0, inputs.dot(hidden_weights.T) + hidden_biases)  # relu
        return activations.dot(output_weights) + output_bias  # type: ignore

    def mean_squared_error(self, params: np.ndarray) -> float:
        errors_ = self.targets - self.predict(params)
        return float(np.mean(errors_ ** 2))
