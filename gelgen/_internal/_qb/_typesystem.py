# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""Type descriptors attached to query builder expressions"""

from __future__ import annotations
from typing import Literal
from typing_extensions import TypeAliasType

import enum
from dataclasses import dataclass, field


class TypeKind(enum.Enum):
    scalar = "scalar"
    object = "object"
    array = "array"
    unnamedtuple = "unnamedtuple"
    namedtuple = "namedtuple"


@dataclass(kw_only=True, frozen=True)
class ScalarType:
    name: str
    kind: Literal[TypeKind.scalar] = field(
        default=TypeKind.scalar, init=False
    )


@dataclass(kw_only=True, frozen=True)
class ObjectType:
    name: str
    kind: Literal[TypeKind.object] = field(
        default=TypeKind.object, init=False
    )


@dataclass(kw_only=True, frozen=True)
class ArrayType:
    element: MaterialType
    name: str = ""
    kind: Literal[TypeKind.array] = field(default=TypeKind.array, init=False)

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", f"array<{self.element.name}>")


@dataclass(kw_only=True, frozen=True)
class UnnamedTupleType:
    items: tuple[MaterialType, ...]
    name: str = ""
    kind: Literal[TypeKind.unnamedtuple] = field(
        default=TypeKind.unnamedtuple, init=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        if not self.name:
            body = ", ".join(item.name for item in self.items)
            object.__setattr__(self, "name", f"tuple<{body}>")


@dataclass(kw_only=True, frozen=True)
class NamedTupleType:
    shape: dict[str, MaterialType]
    name: str = ""
    kind: Literal[TypeKind.namedtuple] = field(
        default=TypeKind.namedtuple, init=False
    )

    def __post_init__(self) -> None:
        if not self.name:
            body = ", ".join(f"{k}: {v.name}" for k, v in self.shape.items())
            object.__setattr__(self, "name", f"tuple<{body}>")

    def __hash__(self) -> int:
        return hash((self.name, tuple(self.shape)))


MaterialType = TypeAliasType(
    "MaterialType",
    ScalarType | ArrayType | UnnamedTupleType | NamedTupleType,
)

AnyType = TypeAliasType(
    "AnyType",
    ScalarType | ObjectType | ArrayType | UnnamedTupleType | NamedTupleType,
)


def is_object_type(t: AnyType | None) -> bool:
    return t is not None and t.kind is TypeKind.object
