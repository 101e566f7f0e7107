# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.


from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
    Literal,
    Protocol,
    TypeGuard,
)
from typing_extensions import TypeAliasType

import functools
import json
import logging
import pathlib

from gelgen import errors
from gelgen._internal import _dataclass_extras

from . import _query
from ._base import struct, sobject, SchemaObject
from ._enums import Cardinality, PointerKind, TypeKind

if TYPE_CHECKING:
    import os

    from collections.abc import Iterable, Mapping


logger = logging.getLogger(__name__)

PSEUDO_KIND = "unknown"


@struct
class TypeRef:
    id: str


@sobject
class Type(SchemaObject):
    kind: TypeKind


@sobject
class InheritingType(Type):
    is_abstract: bool = False
    bases: tuple[TypeRef, ...] = ()
    ancestors: tuple[TypeRef, ...] = ()


@sobject
class ScalarType(InheritingType):
    kind: Literal[TypeKind.Scalar] = TypeKind.Scalar
    enum_values: tuple[str, ...] = ()
    material_id: str | None = None

    @property
    def is_enum(self) -> bool:
        return bool(self.enum_values)


@struct
class Pointer:
    name: str
    kind: PointerKind
    cardinality: Cardinality
    required: bool
    target_id: str
    expr: str | None = None
    pointers: tuple[Pointer, ...] | None = None

    @property
    def is_computed(self) -> bool:
        return self.expr is not None

    @property
    def derived_cardinality(self) -> Cardinality:
        return Cardinality.derive(
            multi=self.cardinality.is_multi(),
            required=self.required,
        )


@sobject
class ObjectType(InheritingType):
    kind: Literal[TypeKind.Object] = TypeKind.Object
    union_of: tuple[TypeRef, ...] = ()
    intersection_of: tuple[TypeRef, ...] = ()
    pointers: tuple[Pointer, ...] = ()

    @property
    def is_compound(self) -> bool:
        return bool(self.union_of or self.intersection_of)


@sobject
class ArrayType(Type):
    kind: Literal[TypeKind.Array] = TypeKind.Array
    array_element_id: str


@struct
class TupleElement:
    name: str
    target_id: str


@sobject
class TupleType(Type):
    kind: Literal[TypeKind.Tuple] = TypeKind.Tuple
    tuple_elements: tuple[TupleElement, ...] = ()

    @functools.cached_property
    def is_named(self) -> bool:
        """A tuple is named unless its first element name starts with a digit.

        Positional tuples report their elements as "0", "1", ..., so mere
        presence of a name is not enough.
        """
        if not self.tuple_elements:
            return False
        first = self.tuple_elements[0].name
        if not first:
            return False
        return not ("0" <= first[0] <= "9")


AnyType = TypeAliasType(
    "AnyType",
    ScalarType | ObjectType | ArrayType | TupleType,
)

PrimitiveType = TypeAliasType(
    "PrimitiveType",
    ScalarType | ArrayType | TupleType,
)


_kind_to_class: dict[TypeKind, type[Type]] = {
    TypeKind.Array: ArrayType,
    TypeKind.Object: ObjectType,
    TypeKind.Scalar: ScalarType,
    TypeKind.Tuple: TupleType,
}


def is_object_type(t: Type) -> TypeGuard[ObjectType]:
    return isinstance(t, ObjectType)


def is_scalar_type(t: Type) -> TypeGuard[ScalarType]:
    return isinstance(t, ScalarType)


def is_array_type(t: Type) -> TypeGuard[ArrayType]:
    return isinstance(t, ArrayType)


def is_tuple_type(t: Type) -> TypeGuard[TupleType]:
    return isinstance(t, TupleType)


def is_primitive_type(t: Type) -> TypeGuard[PrimitiveType]:
    return not isinstance(t, ObjectType)


def is_inheriting_type(t: Type) -> TypeGuard[ScalarType | ObjectType]:
    return isinstance(t, InheritingType)


def is_link(p: Pointer) -> bool:
    return p.kind == PointerKind.Link


def is_property(p: Pointer) -> bool:
    return p.kind == PointerKind.Property


def _normalize_row(row: Mapping[str, Any]) -> dict[str, Any]:
    # The introspection query returns NULL for fields that do not apply
    # to a given kind of type; treat those as absent.
    return {k: v for k, v in row.items() if v is not None}


def parse_type(row: Mapping[str, Any]) -> AnyType:
    try:
        kind = TypeKind(row["kind"])
    except (KeyError, ValueError):
        raise errors.SchemaError(
            f"type {row.get('name')!r} has unsupported kind "
            f"{row.get('kind')!r}"
        ) from None

    cls = _kind_to_class[kind]
    try:
        t = _dataclass_extras.coerce_to_dataclass(cls, _normalize_row(row))
    except (KeyError, ValueError, TypeError) as e:
        raise errors.SchemaError(
            f"malformed introspection data for type {row.get('name')!r}: {e}"
        ) from e

    return t  # type: ignore [return-value]


def parse_types(rows: Iterable[Mapping[str, Any]]) -> list[AnyType]:
    """Turn raw introspection rows into the reflection model.

    The snapshot order of *rows* is preserved.  Pseudo types, which the
    introspection query reports with the "unknown" kind, are skipped.
    """
    result = []
    for row in rows:
        if row.get("kind") == PSEUDO_KIND:
            logger.debug("skipping pseudo type %s", row.get("name"))
            continue
        result.append(parse_type(row))
    return result


class ReadOnlyExecutor(Protocol):
    def query_json(self, query: str, **kwargs: Any) -> str: ...


def fetch_types(db: ReadOnlyExecutor) -> list[AnyType]:
    types = parse_types(json.loads(db.query_json(_query.TYPES)))
    logger.info("introspected %d types", len(types))
    return types


def load_types(path: str | os.PathLike[str]) -> list[AnyType]:
    """Load a snapshot previously saved as the JSON result of
    the introspection query."""
    with open(pathlib.Path(path), encoding="utf8") as f:
        rows = json.load(f)
    if not isinstance(rows, list):
        raise errors.SchemaError(
            f"{path}: expected a JSON array of introspected types"
        )
    return parse_types(rows)
