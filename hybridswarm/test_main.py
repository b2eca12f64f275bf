# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
from pathlib import Path
import numpy as np
from . import __main__ as main


def test_run(capsys: tp.Any) -> None:
    losses = main.run(function="sphere", dimension=2, budget=5, seed=12)
    np.testing.assert_equal(sorted(losses), ["BasePSO", "HybridPSO"])
    out = capsys.readouterr().out
    assert "Running BasePSO:" in out
    assert "Running HybridPSO:" in out
    np.testing.assert_equal(sum(line.startswith("=> ") for line in out.splitlines()), 10)


def test_main_price(tmp_path: Path, capsys: tp.Any) -> None:
    rng = np.random.RandomState(12)
    np.savetxt(tmp_path / "train.csv", rng.uniform(size=(4, 22)), delimiter=",")
    output = main.main(["--data", str(tmp_path), "--budget", "3", "--optimizers", "BasePSO", "--seed", "1"])
    np.testing.assert_equal(output, 0)
    assert "Best loss of BasePSO" in capsys.readouterr().out


def test_main_errors(tmp_path: Path, capsys: tp.Any) -> None:
    np.testing.assert_equal(main.main(["--data", str(tmp_path), "--budget", "3"]), 1)  # missing file
    np.testing.assert_equal(main.main(["--function", "sphere", "--budget", "0"]), 1)
    np.testing.assert_equal(main.main(["--function", "sphere", "--optimizers", "blublu"]), 1)
    assert "Error:" in capsys.readouterr().err
