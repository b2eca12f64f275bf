# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import os
import sys
import logging
import argparse
import numpy as np
import hybridswarm.common.typing as tp
from hybridswarm.common import errors
from hybridswarm.functions import corefuncs
from hybridswarm.functions.base import Problem
from hybridswarm.functions.regression import core as regression
from hybridswarm.optimization import optimizerlib


logger = logging.getLogger(__name__)


def get_problem(
    function: str, dimension: int, data: tp.PathLike, dataset: str, seed: tp.Optional[int] = None
) -> Problem:
    random_state = np.random.RandomState(seed)
    if function == "price":
        return regression.PriceRegression.from_dataset(dataset, folder=data, random_state=random_state)
    return corefuncs.get_problem(function, dimension, random_state=random_state)


def run(
    function: str = "price",
    optimizers: tp.Sequence[str] = ("BasePSO", "HybridPSO"),
    dimension: int = 2,
    budget: int = 1000,
    seed: tp.Optional[int] = None,
    data: tp.PathLike = "data",
    dataset: str = "train",
) -> tp.Dict[str, float]:
    """Runs each optimizer on the problem, prints its history and returns the final losses"""
    unknown = [name for name in optimizers if name not in optimizerlib.registry]
    if unknown:
        raise ValueError(f"Unknown optimizer(s) {unknown}, choose among {sorted(optimizerlib.registry)}")
    problem = get_problem(function, dimension, data, dataset, seed=seed)
    losses: tp.Dict[str, float] = {}
    for k, name in enumerate(optimizers):
        optimizer = optimizerlib.registry[name](problem, budget=budget, seed=None if seed is None else seed + k)
        print(f"Running {name}:")
        optimizer.solve()
        print(optimizer)
        assert optimizer.best_fitness is not None
        losses[name] = optimizer.best_fitness
        print(f"Best loss of {name}: {optimizer.best_fitness}\n")
    return losses


def get_args(argv: tp.Optional[tp.Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Minimize a problem with particle swarm optimizers.")
    parser.add_argument(
        "--function",
        type=str,
        default="price",
        choices=["price"] + sorted(corefuncs.registry),
        help="problem to minimize: the price regression network, or a registered test function",
    )
    parser.add_argument(
        "--optimizers",
        type=str,
        default="BasePSO,HybridPSO",
        help="Comma-separated list of registered optimizers to run",
    )
    parser.add_argument("--dimension", type=int, default=2, help="Dimension of test functions")
    parser.add_argument("--budget", type=int, default=1000, help="Number of iterations of each optimizer")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Use a seed for reproducibility",
    )
    parser.add_argument("--data", type=str, default="data", help="Folder of the price regression datasets")
    parser.add_argument(
        "--dataset", type=str, default="train", choices=list(regression.DATASETS), help="price regression dataset"
    )
    return parser.parse_args(argv)


def main(argv: tp.Optional[tp.Sequence[str]] = None) -> int:
    logging.basicConfig(level=os.environ.get("LOGLEVEL", "INFO"))
    args = get_args(argv)
    try:
        run(
            function=args.function,
            optimizers=[name.strip() for name in args.optimizers.split(",") if name.strip()],
            dimension=args.dimension,
            budget=args.budget,
            seed=args.seed,
            data=args.data,
            dataset=args.dataset,
        )
    except (errors.HybridSwarmError, ValueError, FileNotFoundError) as e:
        logger.error("Optimization failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
