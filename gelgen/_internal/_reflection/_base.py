# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.


from __future__ import annotations
from typing import NamedTuple, TypeVar
from typing_extensions import dataclass_transform

import dataclasses
import functools

from gelgen import errors


class QualName(NamedTuple):
    module: str
    name: str

    def as_schema_name(self) -> str:
        return f"{self.module}::{self.name}"


def parse_name(name: str) -> QualName:
    """Split a ``<module>::<name>`` schema name.

    Raises :exc:`~gelgen.errors.InvalidNameError` unless the name has
    exactly one module separator and both parts are non-empty.
    """
    parts = name.split("::")
    if len(parts) != 2 or not all(parts):
        raise errors.InvalidNameError(
            name, "expected a name of the form <module>::<name>"
        )
    return QualName(*parts)


_T = TypeVar("_T")


_dataclass = dataclasses.dataclass(eq=False, frozen=True, kw_only=True)


@dataclass_transform(
    frozen_default=True,
    kw_only_default=True,
)
def struct(t: type[_T]) -> type[_T]:
    return dataclasses.dataclass(frozen=True, kw_only=True)(t)


@dataclass_transform(
    eq_default=False,
    frozen_default=True,
    kw_only_default=True,
)
def sobject(t: type[_T]) -> type[_T]:
    return _dataclass(t)


@sobject
class SchemaObject:
    id: str
    name: str

    @functools.cached_property
    def qualname(self) -> QualName:
        return parse_name(self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        else:
            return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
