# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .base import Problem as Problem
from .base import BoundedProblem as BoundedProblem
from . import corefuncs as corefuncs
from .corefuncs import get_problem as get_problem
from .regression import PriceRegression as PriceRegression
