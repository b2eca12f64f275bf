# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import typing as tp
import numpy as np
from hybridswarm.functions import corefuncs
from . import optimizerlib
from . import callbacks


def test_optimization_printer(capsys: tp.Any) -> None:
    optimizer = optimizerlib.BasePSO(corefuncs.get_problem("sphere", 2), budget=6)
    optimizer.register_callback("iteration", callbacks.OptimizationPrinter(print_interval_iterations=2))
    optimizer.solve()
    lines = capsys.readouterr().out.splitlines()
    np.testing.assert_equal([line.split(",")[0] for line in lines], [f"After {k} iterations" for k in (1, 3, 5)])


def test_optimization_logger(caplog: tp.Any) -> None:
    logger = logging.getLogger("hybridswarm.test_callbacks")
    optimizer = optimizerlib.HybridPSO(corefuncs.get_problem("sphere", 2), budget=5)
    optimizer.register_callback(
        "iteration", callbacks.OptimizationLogger(logger=logger, log_level=logging.WARNING, log_interval_iterations=5)
    )
    with caplog.at_level(logging.WARNING):
        optimizer.solve()
    messages = [record.getMessage() for record in caplog.records if record.name == logger.name]
    np.testing.assert_equal(len(messages), 1)
    assert messages[0].startswith("After 1 iterations, best loss is ")


def test_optimization_printer_several_runs(capsys: tp.Any) -> None:
    optimizer = optimizerlib.BasePSO(corefuncs.get_problem("sphere", 2), budget=6)
    optimizer.register_callback("iteration", callbacks.OptimizationPrinter(print_interval_iterations=2))
    for _ in range(2):
        optimizer.solve()
        lines = capsys.readouterr().out.splitlines()
        np.testing.assert_equal([line.split(",")[0] for line in lines], [f"After {k} iterations" for k in (1, 3, 5)])


def test_optimization_logger_several_runs(caplog: tp.Any) -> None:
    logger = logging.getLogger("hybridswarm.test_callbacks")
    optimizer = optimizerlib.BasePSO(corefuncs.get_problem("sphere", 2), budget=4)
    optimizer.register_callback(
        "iteration", callbacks.OptimizationLogger(logger=logger, log_level=logging.WARNING, log_interval_iterations=4)
    )
    with caplog.at_level(logging.WARNING):
        optimizer.solve()
        optimizer.solve()
    messages = [record.getMessage() for record in caplog.records if record.name == logger.name]
    np.testing.assert_equal(len(messages), 2)
    assert all(message.startswith("After 1 iterations") for message in messages)
