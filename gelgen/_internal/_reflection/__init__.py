# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

from ._enums import (
    Cardinality,
    PointerKind,
    TypeKind,
)

from ._base import (
    QualName,
    parse_name,
)

from ._graph import (
    SchemaGraph,
    topo_sort,
)

from ._types import (
    AnyType,
    ArrayType,
    InheritingType,
    ObjectType,
    Pointer,
    PrimitiveType,
    ReadOnlyExecutor,
    ScalarType,
    TupleElement,
    TupleType,
    Type,
    TypeRef,
    fetch_types,
    is_array_type,
    is_inheriting_type,
    is_link,
    is_object_type,
    is_primitive_type,
    is_property,
    is_scalar_type,
    is_tuple_type,
    load_types,
    parse_type,
    parse_types,
)

__all__ = (
    "AnyType",
    "ArrayType",
    "Cardinality",
    "InheritingType",
    "ObjectType",
    "Pointer",
    "PointerKind",
    "PrimitiveType",
    "QualName",
    "ReadOnlyExecutor",
    "ScalarType",
    "SchemaGraph",
    "TupleElement",
    "TupleType",
    "Type",
    "TypeKind",
    "TypeRef",
    "fetch_types",
    "is_array_type",
    "is_inheriting_type",
    "is_link",
    "is_object_type",
    "is_primitive_type",
    "is_property",
    "is_scalar_type",
    "is_tuple_type",
    "load_types",
    "parse_name",
    "parse_type",
    "parse_types",
    "topo_sort",
)
