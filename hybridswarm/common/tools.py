# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import inspect
import typing as tp


def different_from_defaults(
    *,
    instance: tp.Any,
    instance_dict: tp.Optional[tp.Dict[str, tp.Any]] = None,
    check_mismatches: bool = False,
) -> tp.Dict[str, tp.Any]:
    """Returns the init arguments of an instance which differ from their defaults

    Parameters
    ----------
    instance: object
        the object to inspect
    instance_dict: dict
        the values of the init arguments, if not provided it's instance.__dict__
    check_mismatches: bool
        checks that the provided values match the init arguments exactly

    Note
    ----
    This is convenient for short repr of configuration holders
    """
    defaults = {
        x: y.default
        for x, y in inspect.signature(instance.__class__.__init__).parameters.items()
        if x not in ["self", "__class__"]
    }
    if instance_dict is None:
        instance_dict = instance.__dict__
    if check_mismatches:
        diff = set(defaults.keys()).symmetric_difference(instance_dict.keys())
        if diff:
            raise RuntimeError(f"Mismatch between attributes and arguments of {instance}: {diff}")
    else:
        defaults = {x: y for x, y in defaults.items() if x in instance_dict}
    return {x: instance_dict[x] for x, y in defaults.items() if y != instance_dict[x] and not x.startswith("_")}


def pairs(sequence: tp.Sequence[tp.Any]) -> tp.Iterator[tp.Tuple[tp.Any, tp.Any]]:
    """Returns an iterator over consecutive non-overlapping pairs
    s -> (s0,s1), (s2,s3), (s4, s5), ...

    Note
    ----
    The last element is dropped if the length of the sequence is odd.
    """
    return zip(sequence[0::2], sequence[1::2])
