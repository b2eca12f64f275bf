# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import pytest
import numpy as np
from hybridswarm.common import errors
from hybridswarm.common import testing
from hybridswarm.functions import corefuncs
from . import evolution
from . import optimizerlib
from .optimizerlib import registry


def test_registry() -> None:
    testing.assert_set_equal(registry, ["BasePSO", "HybridPSO"])
    assert isinstance(registry["BasePSO"], optimizerlib.ConfPSO)
    assert isinstance(registry["HybridPSO"], optimizerlib.ConfHybridPSO)


@testing.parametrized(**{name: (name,) for name in ["BasePSO", "HybridPSO"]})
def test_registered_optimizers(name: str) -> None:
    problem = corefuncs.get_problem("sphere1", 3, random_state=np.random.RandomState(12))
    optimizer = registry[name](problem, budget=40, seed=12)
    np.testing.assert_equal(optimizer.name, name)
    optimizer.solve()
    np.testing.assert_equal(optimizer.num_iterations, 40)
    testing.assert_non_increasing(optimizer.history)
    assert optimizer.history[-1] < optimizer.history[0] or optimizer.history[0] == 0


def test_hybrid_evolution_step() -> None:
    conf = optimizerlib.ConfHybridPSO(crossover_rate=0.5, tournament_size=2)
    optimizer = conf(corefuncs.get_problem("sphere", 2), budget=3)
    step = optimizer.evolution
    assert isinstance(step, evolution.GeneticEvolution)
    np.testing.assert_equal((step.crossover_rate, step.mutation_rate, step.tournament_size), (0.5, 0.1, 2))
    assert isinstance(optimizerlib.BasePSO(corefuncs.get_problem("sphere", 2)).evolution, evolution.NoEvolution)


def test_configured_names() -> None:
    np.testing.assert_equal(repr(optimizerlib.ConfPSO()), "ConfPSO()")
    np.testing.assert_equal(repr(optimizerlib.ConfPSO(social_coeff=1.0)), "ConfPSO(social_coeff=1.0)")
    np.testing.assert_equal(
        repr(optimizerlib.ConfHybridPSO(mating_pool_scale=2, mutation_rate=0.3)),
        "ConfHybridPSO(mating_pool_scale=2, mutation_rate=0.3)",
    )
    assert optimizerlib.ConfPSO(social_coeff=1.0) == optimizerlib.ConfPSO(social_coeff=1.0)
    assert optimizerlib.ConfPSO() != optimizerlib.ConfHybridPSO()
    np.testing.assert_equal(optimizerlib.ConfHybridPSO(tournament_size=3).config()["tournament_size"], 3)


@testing.parametrized(
    social=(optimizerlib.ConfPSO, dict(social_coeff=-1.0)),
    cognitive=(optimizerlib.ConfHybridPSO, dict(cognitive_coeff=-1.0)),
    crossover=(optimizerlib.ConfHybridPSO, dict(crossover_rate=-0.5)),
    scale=(optimizerlib.ConfHybridPSO, dict(mating_pool_scale=0)),
)
def test_configured_errors(cls: tp.Type[optimizerlib.ConfPSO], kwargs: tp.Dict[str, tp.Any]) -> None:
    with pytest.raises(errors.ConfigurationError):
        cls(**kwargs)


def test_budget_error() -> None:
    with pytest.raises(errors.ConfigurationError):
        optimizerlib.BasePSO(corefuncs.get_problem("sphere", 2), budget=0)


def test_seeded_runs_are_reproducible() -> None:
    histories = []
    for _ in range(2):
        problem = corefuncs.get_problem("rastrigin", 4, random_state=np.random.RandomState(3))
        optimizer = optimizerlib.HybridPSO(problem, budget=10, seed=3)
        optimizer.solve()
        histories.append(optimizer.history)
    np.testing.assert_array_equal(histories[0], histories[1])


@testing.parametrized(**{name: (name,) for name in ["BasePSO", "HybridPSO"]})
def test_seed_is_enough_for_reproducibility(name: str) -> None:
    histories = []
    for _ in range(2):
        problem = corefuncs.get_problem("sphere", 2)  # no random state provided
        optimizer = registry[name](problem, budget=5, seed=12)
        optimizer.solve()
        histories.append(optimizer.history)
    np.testing.assert_array_equal(histories[0], histories[1])
