# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""EdgeQL query builder internals"""

from ._expressions import (
    Expr,
    ExprKind,
    Literal,
    PathLeaf,
    PathNode,
    PathParent,
    Set,
    literal,
    path,
    set_of,
)
from ._literals import (
    encode_value,
    format_duration,
    literal_to_edgeql,
)
from ._protocols import (
    SupportsEdgeQLExpr,
    edgeql,
)
from ._typesystem import (
    AnyType,
    ArrayType,
    MaterialType,
    NamedTupleType,
    ObjectType,
    ScalarType,
    TypeKind,
    UnnamedTupleType,
    is_object_type,
)


__all__ = (
    "AnyType",
    "ArrayType",
    "Expr",
    "ExprKind",
    "Literal",
    "MaterialType",
    "NamedTupleType",
    "ObjectType",
    "PathLeaf",
    "PathNode",
    "PathParent",
    "ScalarType",
    "Set",
    "SupportsEdgeQLExpr",
    "TypeKind",
    "UnnamedTupleType",
    "edgeql",
    "encode_value",
    "format_duration",
    "is_object_type",
    "literal",
    "literal_to_edgeql",
    "path",
    "set_of",
)
