# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import functools


X = tp.TypeVar("X")


class Registry(tp.MutableMapping[str, X]):
    """Dict of named functions or optimizers, filled through decorators.
    Optional information (eg: default bounds of a test function) can be
    stored along each entry.
    """

    def __init__(self) -> None:
        super().__init__()
        self.data: tp.Dict[str, X] = {}
        self._information: tp.Dict[str, tp.Dict[str, tp.Any]] = {}

    def register(self, obj: X, info: tp.Optional[tp.Dict[str, tp.Any]] = None) -> X:
        """Decorator method registering a function/class under its own name"""
        name = getattr(obj, "__name__", obj.__class__.__name__)
        self.register_name(name, obj, info)
        return obj

    def register_name(self, name: str, obj: X, info: tp.Optional[tp.Dict[str, tp.Any]] = None) -> None:
        """Register an object with a provided name"""
        if name in self:
            raise RuntimeError(f'Encountered a name collision "{name}"')
        self[name] = obj
        if info is not None:
            self._information[name] = dict(info)

    def unregister(self, name: str) -> None:
        """Remove a previously-registered object (no-op if the name is unknown)"""
        if name in self:
            del self[name]
            self._information.pop(name, None)

    def register_with_info(self, **info: tp.Any) -> tp.Callable[[X], X]:
        """Decorator for registering an object together with information about it"""
        return functools.partial(self.register, info=info)

    def get_info(self, name: str) -> tp.Dict[str, tp.Any]:
        if name not in self:
            raise ValueError(f'"{name}" is not registered (choose among {sorted(self)}).')
        return self._information.setdefault(name, {})

    def __getitem__(self, key: str) -> X:
        return self.data[key]

    def __setitem__(self, key: str, value: X) -> None:
        self.data[key] = value

    def __delitem__(self, key: str) -> None:
        del self.data[key]

    def __iter__(self) -> tp.Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)
