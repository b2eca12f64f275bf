# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import numpy as np
import hybridswarm.common.typing as tp
from hybridswarm.common import errors
from hybridswarm.common import tools as hstools
from hybridswarm.common.decorators import Registry
from hybridswarm.functions.base import Problem
from . import constants
from .swarm import Swarm
from .evolution import EvolutionStep
from .evolution import NoEvolution


logger = logging.getLogger(__name__)
registry: Registry["ConfiguredOptimizer"] = Registry()
_OptimCallBack = tp.Callable[["Optimizer"], None]


def check_coefficient(name: str, value: float) -> float:
    value = float(value)
    if not value >= 0:  # also catches nan
        raise errors.ConfigurationError(f"{name} must be non-negative; it was {value}.")
    return value


def check_budget(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise errors.ConfigurationError(f"budget must be an integer greater than 0; it was {value!r}.")
    return int(value)


class Optimizer:  # pylint: disable=too-many-instance-attributes
    """Particle swarm optimizer, with an optional evolution step run on the swarm
    at the end of each iteration.

    Each iteration moves all particles (:code:`update_population`), updates the personal
    and global bests (:code:`evaluate_population`), records the loss of the global best and
    then runs the evolution step.

    Parameters
    ----------
    problem: Problem
        the problem to minimize
    budget: int
        number of iterations of a run
    social_coeff: float
        attraction toward the global best (non-negative)
    cognitive_coeff: float
        attraction toward the personal best (non-negative)
    evolution: EvolutionStep (optional)
        step run at the end of each iteration, defaults to no evolution (plain particle swarm)
    random_state: np.random.RandomState (optional)
        random state the swarm and the evolution step pull from

    Note
    ----
    Each call to :code:`solve` runs on a fresh swarm and starts a new history. The random state
    of the problem (if it has one) is reseeded from the random state of the optimizer, so that
    seeding the optimizer is enough for a reproducible run.
    """

    def __init__(
        self,
        problem: Problem,
        *,
        budget: int = constants.BUDGET,
        social_coeff: float = constants.SOCIAL_COEFF,
        cognitive_coeff: float = constants.COGNITIVE_COEFF,
        evolution: tp.Optional[EvolutionStep] = None,
        random_state: tp.Optional[np.random.RandomState] = None,
    ) -> None:
        self.problem = problem
        self.budget = budget
        self.social_coeff = social_coeff
        self.cognitive_coeff = cognitive_coeff
        self.evolution: EvolutionStep = NoEvolution() if evolution is None else evolution
        self._random_state = random_state
        self.name = self.__class__.__name__  # printed name in repr
        self._history: tp.List[float] = []
        self._best: tp.Optional[np.ndarray] = None
        self._callbacks: tp.Dict[str, tp.List[_OptimCallBack]] = {}

    @property
    def random_state(self) -> np.random.RandomState:
        """np.random.RandomState: random state the optimizer pulls from.
        It can be seeded or replaced for deterministic behavior.
        """
        if self._random_state is None:
            seed = np.random.randint(2 ** 32, dtype=np.uint32)
            self._random_state = np.random.RandomState(seed)
        return self._random_state

    @random_state.setter
    def random_state(self, random_state: np.random.RandomState) -> None:
        self._random_state = random_state

    @property
    def budget(self) -> int:
        """int: number of iterations of a run"""
        return self._budget

    @budget.setter
    def budget(self, value: int) -> None:
        self._budget = check_budget(value)

    @property
    def social_coeff(self) -> float:
        return self._social_coeff

    @social_coeff.setter
    def social_coeff(self, value: float) -> None:
        self._social_coeff = check_coefficient("social_coeff", value)

    @property
    def cognitive_coeff(self) -> float:
        return self._cognitive_coeff

    @cognitive_coeff.setter
    def cognitive_coeff(self, value: float) -> None:
        self._cognitive_coeff = check_coefficient("cognitive_coeff", value)

    @property
    def dimension(self) -> int:
        """int: Dimension of the optimization space."""
        return int(self.problem.dimension)

    @property
    def population_size(self) -> int:
        return constants.population_size(self.dimension)

    @property
    def history(self) -> tp.Tuple[float, ...]:
        """tuple: loss of the global best recorded at each iteration of the last run"""
        return tuple(self._history)

    @property
    def num_iterations(self) -> int:
        """int: Number of iterations recorded during the last run."""
        return len(self._history)

    @property
    def best(self) -> tp.Optional[np.ndarray]:
        """np.ndarray: global best of the last run (None if no run happened)"""
        return None if self._best is None else self._best.copy()

    @property
    def best_fitness(self) -> tp.Optional[float]:
        return self._history[-1] if self._history else None

    def register_callback(self, name: str, callback: _OptimCallBack) -> None:
        """Add a callback method called with the optimizer as argument, either after each
        recorded iteration (name "iteration") or at the end of a run (name "solve").
        This can be useful for custom logging.
        """
        assert name in ["iteration", "solve"], f'Only "iteration" and "solve" can have callbacks (not {name})'
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def _record(self, swarm: Swarm) -> None:
        global_best = swarm.global_best
        self._history.append(self.problem.evaluate(global_best))
        self._best = global_best

    def solve(self) -> np.ndarray:
        """Runs the optimizer on a fresh swarm for the full budget

        Returns
        -------
        np.ndarray
            the global best position found by the swarm
        """
        # fails before anything starts if the evolution cannot sustain the population
        self.evolution.check_capacity(self.population_size)
        self._history = []
        self._best = None
        if hasattr(self.problem, "random_state"):
            # initial candidates are drawn from the optimizer's random state as well
            seed = self.random_state.randint(2 ** 32, dtype=np.uint32)
            self.problem.random_state = np.random.RandomState(seed)  # type: ignore
        swarm = Swarm(
            self.problem,
            social_coeff=self.social_coeff,
            cognitive_coeff=self.cognitive_coeff,
            random_state=self.random_state,
        )
        logger.info(
            "Starting %s on %s (population: %s, budget: %s)", self.name, self.problem, len(swarm), self.budget
        )
        for _ in range(self.budget):
            swarm.update_population()
            swarm.evaluate_population()
            self._record(swarm)
            logger.debug("Iteration %s: best loss is %s", self.num_iterations, self._history[-1])
            for callback in self._callbacks.get("iteration", []):
                callback(self)
            self.evolution.evolve(swarm, self.random_state)
        logger.info("%s finished after %s iterations with loss %s", self.name, self.num_iterations, self.best_fitness)
        for callback in self._callbacks.get("solve", []):
            callback(self)
        assert self._best is not None
        return self._best.copy()

    def __str__(self) -> str:
        return "".join(f"=> {loss}\n" for loss in self._history)

    def __repr__(self) -> str:
        return f"Instance of {self.name}(problem={self.problem}, budget={self.budget}, evolution={self.evolution})"


class ConfiguredOptimizer:
    """Creates optimizer-like instances with configuration.

    Parameters
    ----------
    config: dict
        dictionnary of all the configurations (usually the locals() of the subclass __init__)

    Note
    ----
    This provides a default repr which can be bypassed through set_name
    """

    def __init__(self, config: tp.Dict[str, tp.Any]) -> None:
        config.pop("self", None)  # self comes from "locals()"
        config.pop("__class__", None)  # self comes from "locals()"
        self._config = config
        diff = hstools.different_from_defaults(instance=self, instance_dict=config, check_mismatches=True)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        self.name = f"{self.__class__.__name__}({params})"
        # try instantiating the evolution step for init checks
        self._make_evolution()

    def config(self) -> tp.Dict[str, tp.Any]:
        return dict(self._config)

    def _make_evolution(self) -> EvolutionStep:
        return NoEvolution()

    def __call__(self, problem: Problem, budget: int = constants.BUDGET, seed: tp.Optional[int] = None) -> Optimizer:
        """Creates an optimizer for the problem

        Parameters
        ----------
        problem: Problem
            the problem to minimize
        budget: int
            number of iterations
        seed: int (optional)
            seed of the random state of the optimizer
        """
        optimizer = Optimizer(
            problem,
            budget=budget,
            social_coeff=self._config["social_coeff"],
            cognitive_coeff=self._config["cognitive_coeff"],
            evolution=self._make_evolution(),
            random_state=None if seed is None else np.random.RandomState(seed),
        )
        optimizer.name = self.name
        return optimizer

    def __repr__(self) -> str:
        return self.name

    def set_name(self, name: str, register: bool = False) -> "ConfiguredOptimizer":
        """Set a new representation for the instance"""
        self.name = name
        if register:
            registry.register_name(name, self)
        return self

    def __eq__(self, other: tp.Any) -> tp.Any:
        if self.__class__ == other.__class__:
            if self._config == other._config:
                return True
        return False
