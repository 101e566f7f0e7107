# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.


"""Query building constructs"""

from typing import Any

from gelgen._internal._qb import (
    ArrayType,
    Expr,
    Literal,
    NamedTupleType,
    ObjectType,
    PathLeaf,
    PathNode,
    PathParent,
    ScalarType,
    Set,
    UnnamedTupleType,
    edgeql,
    literal,
    literal_to_edgeql,
    path,
    set_of,
)


def to_edgeql(expr: Expr) -> str:
    """Render *expr* as EdgeQL text."""
    return edgeql(expr)


def cast(type_name: str, value: Any) -> str:
    """Render *value* as a literal of the scalar type *type_name*."""
    return literal_to_edgeql(ScalarType(name=type_name), value)


__all__ = (
    "ArrayType",
    "Expr",
    "Literal",
    "NamedTupleType",
    "ObjectType",
    "PathLeaf",
    "PathNode",
    "PathParent",
    "ScalarType",
    "Set",
    "UnnamedTupleType",
    "cast",
    "edgeql",
    "literal",
    "literal_to_edgeql",
    "path",
    "set_of",
    "to_edgeql",
)
