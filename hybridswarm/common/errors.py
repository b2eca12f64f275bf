# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


# base classes


class HybridSwarmError(Exception):
    """Base class for error raised by hybridswarm"""


class HybridSwarmWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class HybridSwarmRuntimeError(RuntimeError, HybridSwarmError):
    """Runtime error raised by hybridswarm"""


class HybridSwarmValueError(ValueError, HybridSwarmError):
    """Value error raised by hybridswarm"""


class ConfigurationError(HybridSwarmValueError):
    """Invalid optimizer setting (negative coefficient or rate, non-positive budget...).
    Raised by the setter, before any run is attempted.
    """


class CapacityError(ConfigurationError):
    """The offspring pool of an evolution step cannot refill the population"""


class DimensionMismatchError(HybridSwarmValueError):
    """Vectors do not have the dimension of the problem they are used with"""


class InvalidCandidateError(HybridSwarmRuntimeError):
    """A problem generated a candidate which does not satisfy its own constraints"""


# warnings


class HybridSwarmRuntimeWarning(RuntimeWarning, HybridSwarmWarning):
    """Runtime warning raised by hybridswarm"""


class InefficientSettingsWarning(HybridSwarmRuntimeWarning):
    """Optimization settings are not optimal for the optimizer"""
