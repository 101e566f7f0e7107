# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.

"""Protocols for the EdgeQL query builder"""

from __future__ import annotations

from typing import (
    Protocol,
    runtime_checkable,
)


@runtime_checkable
class SupportsEdgeQLExpr(Protocol):
    def __edgeql_expr__(self) -> str: ...


def edgeql(source: SupportsEdgeQLExpr) -> str:
    try:
        __edgeql_expr__ = source.__edgeql_expr__
    except AttributeError:
        raise TypeError(
            f"{type(source)} does not support __edgeql_expr__ protocol"
        ) from None

    if not callable(__edgeql_expr__):
        raise TypeError(f"{type(source)}.__edgeql_expr__ is not callable")

    value = __edgeql_expr__()
    if not isinstance(value, str):
        raise ValueError(
            f"{type(source)}.__edgeql_expr__() did not return a str"
        )
    return value
