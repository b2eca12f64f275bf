# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import hybridswarm.common.typing as tp
from hybridswarm.common.decorators import Registry
from .base import BoundedProblem


registry: Registry[tp.Callable[[np.ndarray], float]] = Registry()


@registry.register_with_info(bounds=(-10.0, 10.0))
def sphere(x: np.ndarray) -> float:
    """The most classical continuous optimization testbed.

    If you do not solve that one then you have a bug."""
    assert x.ndim == 1
    return float(x.dot(x))


@registry.register_with_info(bounds=(-10.0, 10.0))
def sphere1(x: np.ndarray) -> float:
    """Translated sphere function."""
    return sphere(x - 1.0)


@registry.register_with_info(bounds=(-5.0, 10.0))
def rosenbrock(x: np.ndarray) -> float:
    x_m_1 = x[:-1] - 1
    x_diff = x[:-1] ** 2 - x[1:]
    return float(100 * x_diff.dot(x_diff) + x_m_1.dot(x_m_1))


@registry.register_with_info(bounds=(-5.12, 5.12))
def rastrigin(x: np.ndarray) -> float:
    """Classical multimodal function."""
    cosi = float(np.sum(np.cos(2 * np.pi * x)))
    return float(10.0 * (len(x) - cosi) + sphere(x))


@registry.register_with_info(bounds=(-600.0, 600.0))
def griewank(x: np.ndarray) -> float:
    """Multimodal function, often used in Bayesian optimization."""
    part1 = np.sum(x ** 2)
    part2 = np.prod(np.cos(x / np.sqrt(1 + np.arange(len(x)))))
    return 1 + (float(part1) / 4000.0) - float(part2)


@registry.register_with_info(bounds=(-32.768, 32.768))
def ackley(x: np.ndarray) -> float:
    dim = x.size
    sum_cos = np.sum(np.cos(2 * np.pi * x))
    return float(-20.0 * np.exp(-0.2 * np.sqrt(sphere(x) / dim)) - np.exp(sum_cos / dim) + 20 + np.exp(1))


def get_problem(
    name: str, dimension: int, random_state: tp.Optional[np.random.RandomState] = None
) -> BoundedProblem:
    """Creates a problem from a registered function, using its default bounds"""
    if name not in registry:
        raise ValueError(f'Unknown function "{name}", choose among {sorted(registry)}')
    return BoundedProblem(
        registry[name], registry.get_info(name)["bounds"], dimension=dimension, random_state=random_state
    )
