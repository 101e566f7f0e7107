# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""Introspected schema model and dependency ordering."""

from gelgen._internal._reflection import (
    AnyType,
    ArrayType,
    Cardinality,
    ObjectType,
    Pointer,
    PointerKind,
    ReadOnlyExecutor,
    ScalarType,
    SchemaGraph,
    TupleElement,
    TupleType,
    TypeKind,
    TypeRef,
    fetch_types,
    load_types,
    parse_name,
    parse_types,
    topo_sort,
)


__all__ = (
    "AnyType",
    "ArrayType",
    "Cardinality",
    "ObjectType",
    "Pointer",
    "PointerKind",
    "ReadOnlyExecutor",
    "ScalarType",
    "SchemaGraph",
    "TupleElement",
    "TupleType",
    "TypeKind",
    "TypeRef",
    "fetch_types",
    "load_types",
    "parse_name",
    "parse_types",
    "topo_sort",
)
