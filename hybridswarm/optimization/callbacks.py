# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import time
import logging
from . import base

global_logger = logging.getLogger(__name__)


class OptimizationPrinter:
    """Printer to register as "iteration" callback in an optimizer, for printing
    the best loss regularly.

    Parameters
    ----------
    print_interval_iterations: int
        max number of iterations before performing another print
    print_interval_seconds: float
        max number of seconds before performing another print
    """

    def __init__(self, print_interval_iterations: int = 1, print_interval_seconds: float = 60.0) -> None:
        assert print_interval_iterations > 0
        assert print_interval_seconds > 0
        self._print_interval_iterations = int(print_interval_iterations)
        self._print_interval_seconds = print_interval_seconds
        self._next_iteration = 1  # first iteration is always printed
        self._last_iteration = 0
        self._next_time = time.time() + print_interval_seconds

    def __call__(self, optimizer: base.Optimizer) -> None:
        if optimizer.num_iterations <= self._last_iteration:  # new run of the optimizer
            self._next_iteration = 1
        self._last_iteration = optimizer.num_iterations
        if time.time() >= self._next_time or optimizer.num_iterations >= self._next_iteration:
            self._next_time = time.time() + self._print_interval_seconds
            self._next_iteration = optimizer.num_iterations + self._print_interval_iterations
            print(f"After {optimizer.num_iterations} iterations, best loss is {optimizer.best_fitness}")


class OptimizationLogger:
    """Logger to register as "iteration" callback in an optimizer, for logging
    the best point regularly.

    Parameters
    ----------
    logger:
        given logger that callback will use to log
    log_level:
        log level that logger will write to
    log_interval_iterations: int
        max number of iterations before performing another log
    log_interval_seconds:
        max number of seconds before performing another log
    """

    def __init__(
        self,
        *,
        logger: logging.Logger = global_logger,
        log_level: int = logging.INFO,
        log_interval_iterations: int = 1,
        log_interval_seconds: float = 60.0,
    ) -> None:
        assert log_interval_iterations > 0
        assert log_interval_seconds > 0
        self._logger = logger
        self._log_level = log_level
        self._log_interval_iterations = int(log_interval_iterations)
        self._log_interval_seconds = log_interval_seconds
        self._next_iteration = 1
        self._last_iteration = 0
        self._next_time = time.time() + log_interval_seconds

    def __call__(self, optimizer: base.Optimizer) -> None:
        if optimizer.num_iterations <= self._last_iteration:  # new run of the optimizer
            self._next_iteration = 1
        self._last_iteration = optimizer.num_iterations
        if time.time() >= self._next_time or optimizer.num_iterations >= self._next_iteration:
            self._next_time = time.time() + self._log_interval_seconds
            self._next_iteration = optimizer.num_iterations + self._log_interval_iterations
            self._logger.log(
                self._log_level,
                "After %s iterations, best loss is %s at %s",
                optimizer.num_iterations,
                optimizer.best_fitness,
                optimizer.best,
            )
