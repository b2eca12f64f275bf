# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .base import Optimizer  # main class, for type checking
from .evolution import GeneticEvolution
from .evolution import NoEvolution
from .callbacks import OptimizationPrinter  # to be registered in an optimizer
from . import optimizerlib
from .optimizerlib import registry
